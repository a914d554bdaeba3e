"""
Allocation pipeline for nalufx package.

Provides the AllocationEngine orchestrator, batch fan-out for independent
requests and optional post-processing of allocation vectors.

Architecture:
    Validation -> Features -> Forecasts -> Signals -> Regimes -> Allocation

    - Validation failures are fatal
    - Forecast, signal and regime failures fall back and are logged
"""

from .batch import AllocationRequest, BatchAllocator, BatchResult
from .engine import AllocationEngine, AllocationResult
from .postprocessing import clip_negative_weights

__all__ = [
    "AllocationEngine",
    "AllocationResult",
    "AllocationRequest",
    "BatchAllocator",
    "BatchResult",
    "clip_negative_weights",
]
