"""
Utility functions and exception classes for nalufx package.

Provides custom exceptions shared across the allocation pipeline and the
lock that serializes numerical library calls.
"""

from .concurrency import model_lock
from .exceptions import (
    AllocationError,
    ClusteringError,
    ConfigurationError,
    EmptyInputError,
    ForecastingError,
    InputMismatchError,
    InvalidDataError,
    NaluFxError,
    OutlierDataError,
    SignalError,
)

__all__ = [
    "NaluFxError",
    "ConfigurationError",
    "AllocationError",
    "InputMismatchError",
    "EmptyInputError",
    "InvalidDataError",
    "OutlierDataError",
    "ForecastingError",
    "ClusteringError",
    "SignalError",
    "model_lock",
]
