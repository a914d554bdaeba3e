"""Auxiliary signal sources.

The allocation engine weights each forecast day by a sentiment score and an
optimal action score. Producing those scores (sentiment models, reinforcement
learning policies) happens outside the engine; this module defines the
interface the engine consumes and a few simple sources.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

import numpy as np


class SignalSource(ABC):
    """Produces one score per forecast day."""

    @abstractmethod
    def generate(self, num_days: int) -> np.ndarray:
        """Return scores for ``num_days`` forecast days.

        Args:
            num_days: Forecast horizon

        Returns:
            Float array, nominally of length ``num_days`` with values in [0, 1]
        """
        pass

    def __call__(self, num_days: int) -> np.ndarray:
        return self.generate(num_days)


class RandomSignalSource(SignalSource):
    """Uniform [0, 1) scores.

    Placeholder standing in for real sentiment/RL scoring. A fresh generator
    is created on every call, so a fixed seed yields the same vector each time
    and concurrent calls share no state.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed

    def generate(self, num_days: int) -> np.ndarray:
        rng = np.random.default_rng(self.seed)
        return rng.random(num_days)


class ConstantSignalSource(SignalSource):
    """Same score every day. ``1.0`` leaves the forecast product unweighted."""

    def __init__(self, value: float = 1.0):
        self.value = float(value)

    def generate(self, num_days: int) -> np.ndarray:
        return np.full(num_days, self.value, dtype=np.float64)


class StaticSignalSource(SignalSource):
    """Pre-computed scores.

    The stored vector is returned as-is regardless of ``num_days``; a shorter
    vector leaves the trailing days without auxiliary weighting.
    """

    def __init__(self, values: Sequence[float]):
        self.values = np.array(values, dtype=np.float64)

    def generate(self, num_days: int) -> np.ndarray:
        return self.values.copy()


class CallableSignalSource(SignalSource):
    """Adapts any ``(num_days) -> sequence`` callable."""

    def __init__(self, func: Callable[[int], Sequence[float]]):
        self.func = func

    def generate(self, num_days: int) -> np.ndarray:
        return np.asarray(self.func(num_days), dtype=np.float64)
