"""
Model components for nalufx allocation pipeline.

Provides time series forecasters and the k-means regime clusterer.
"""

from .clustering import KMeansRegimeClusterer
from .forecasting import (
    BaseForecaster,
    ETSForecaster,
    ForecastResult,
    NaiveForecaster,
    fallback_extrapolation,
)

__all__ = [
    "BaseForecaster",
    "ETSForecaster",
    "NaiveForecaster",
    "ForecastResult",
    "fallback_extrapolation",
    "KMeansRegimeClusterer",
]
