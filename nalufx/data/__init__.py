"""
Data components for nalufx allocation pipeline.

Provides input validation, feature extraction and price preprocessing.
"""

from .features import FEATURE_COLUMNS, FeatureExtractor
from .processing import calculate_cash_flows, calculate_daily_returns
from .validation import SERIES_NAMES, InputValidator

__all__ = [
    "InputValidator",
    "SERIES_NAMES",
    "FeatureExtractor",
    "FEATURE_COLUMNS",
    "calculate_daily_returns",
    "calculate_cash_flows",
]
