"""
NaluFx - Day-by-day cash allocation

Computes a normalized allocation schedule over a forecast horizon by combining
historical return and cash-flow statistics, exponential smoothing forecasts,
k-means regime tagging and pluggable sentiment/action signals.

Features:
- Strict input validation with configurable outlier bounds
- Z-score normalized feature matrix for regime clustering
- Automatic ETS model selection with naive fallback extrapolation
- Injectable forecaster, clusterer and signal sources
- Parallel batch allocation across independent requests
"""

from ._version import __version__

# Package metadata
__title__ = "nalufx"
__author__ = "nalufx contributors"
__email__ = "contact@nalufx.com"
__description__ = "Day-by-day cash allocation from forecasts, regime clustering and auxiliary signals"
__license__ = "MIT"

from .config import (
    AllocationConfig,
    BatchConfig,
    ClusteringConfig,
    ForecastConfig,
    SignalConfig,
    ValidationConfig,
)
from .data import FeatureExtractor, InputValidator
from .models import ETSForecaster, KMeansRegimeClusterer, NaiveForecaster
from .pipeline import (
    AllocationEngine,
    AllocationRequest,
    AllocationResult,
    BatchAllocator,
    clip_negative_weights,
)
from .signal_generation import (
    ConstantSignalSource,
    RandomSignalSource,
    SignalCombiner,
    SignalSource,
    StaticSignalSource,
)
from .utils.exceptions import (
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

# Main API exports
__all__ = [
    # Engine
    "AllocationEngine",
    "AllocationResult",
    "AllocationRequest",
    "BatchAllocator",
    "clip_negative_weights",
    # Components
    "InputValidator",
    "FeatureExtractor",
    "ETSForecaster",
    "NaiveForecaster",
    "KMeansRegimeClusterer",
    "SignalCombiner",
    "SignalSource",
    "RandomSignalSource",
    "ConstantSignalSource",
    "StaticSignalSource",
    # Configuration
    "AllocationConfig",
    "ValidationConfig",
    "ForecastConfig",
    "ClusteringConfig",
    "SignalConfig",
    "BatchConfig",
    # Exceptions
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
    # Convenience functions
    "compute_allocation",
]


def compute_allocation(
    daily_returns,
    cash_flows,
    market_indices,
    fund_characteristics,
    num_days,
    config=None,
    **kwargs,
):
    """
    Convenience function to compute an allocation vector.

    Args:
        daily_returns: Historical daily returns
        cash_flows: Historical cash flows
        market_indices: Market index levels aligned with the returns
        fund_characteristics: Fund characteristic scores aligned with the returns
        num_days: Forecast horizon
        config: AllocationConfig (optional)
        **kwargs: Collaborators passed to AllocationEngine
            (forecaster, clusterer, signals)

    Returns:
        Read-only array of ``num_days`` weights summing to 1

    Example:
        >>> import nalufx
        >>> allocation = nalufx.compute_allocation(
        ...     [0.02, -0.01, 0.03, 0.01],
        ...     [100.0, 50.0, 75.0, 120.0],
        ...     [1000.0, 1010.0, 1005.0, 1015.0],
        ...     [0.8, 0.9, 0.85, 0.95],
        ...     num_days=5,
        ... )
        >>> print(f"{allocation.sum():.2f}")
        1.00
    """
    engine = AllocationEngine(config=config, **kwargs)
    return engine.compute_allocation(
        daily_returns, cash_flows, market_indices, fund_characteristics, num_days
    )
