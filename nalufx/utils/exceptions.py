"""
Exception classes for nalufx package.

Two tiers are distinguished:

- Fatal allocation errors (``AllocationError`` and subclasses) are raised by
  input validation and always reach the caller.
- Recoverable stage errors (``ForecastingError``, ``ClusteringError``,
  ``SignalError``) are raised by collaborators and handled by the allocation
  engine, which substitutes a fallback and keeps going.
"""

from typing import Optional


class NaluFxError(Exception):
    """Base exception for all nalufx errors."""


class ConfigurationError(NaluFxError):
    """Raised when a configuration object holds invalid values."""


class AllocationError(NaluFxError):
    """Base class for fatal errors that abort an allocation computation."""

    default_message = "Allocation failed"

    def __init__(self, message: Optional[str] = None, series: Optional[str] = None):
        self.series = series
        text = message or self.default_message
        if series is not None:
            text = f"{text} (series: {series})"
        super().__init__(text)


class InputMismatchError(AllocationError):
    """Input series do not all have the same length."""

    default_message = "Input slices must have the same length"


class EmptyInputError(AllocationError):
    """At least one input series is empty."""

    default_message = "Input slices cannot be empty"


class InvalidDataError(AllocationError):
    """An input series contains NaN or infinite values."""

    default_message = "Input data contains missing or invalid values"


class OutlierDataError(AllocationError):
    """An input series contains values beyond the configured magnitude bound."""

    default_message = "Input data contains outliers"


class ForecastingError(NaluFxError):
    """Time series model could not be fitted or produced unusable output."""

    def __init__(self, message: str):
        super().__init__(f"Error during time series forecasting: {message}")
        self.diagnostic = message


class ClusteringError(NaluFxError):
    """Regime clustering failed."""

    def __init__(self, message: str):
        super().__init__(f"Error during clustering: {message}")
        self.diagnostic = message


class SignalError(NaluFxError):
    """An auxiliary signal source failed or produced unusable values."""

    def __init__(self, message: str, signal: Optional[str] = None):
        prefix = f"Error generating {signal} signal" if signal else "Error generating signal"
        super().__init__(f"{prefix}: {message}")
        self.signal = signal
        self.diagnostic = message
