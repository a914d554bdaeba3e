"""Auxiliary signal generation for the allocation engine.

Sources produce per-day sentiment and optimal action scores; the
SignalCombiner collects both for the engine.
"""

from .base import (
    CallableSignalSource,
    ConstantSignalSource,
    RandomSignalSource,
    SignalSource,
    StaticSignalSource,
)
from .combiner import SignalCombiner, SignalScores, as_signal_source

__all__ = [
    "SignalSource",
    "RandomSignalSource",
    "ConstantSignalSource",
    "StaticSignalSource",
    "CallableSignalSource",
    "SignalCombiner",
    "SignalScores",
    "as_signal_source",
]
