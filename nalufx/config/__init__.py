"""
Configuration system for nalufx allocation components.

Provides configuration classes for all pipeline components with validation
and serialization support.
"""

from .base import BaseConfig
from .allocation import (
    AllocationConfig,
    BatchConfig,
    ClusteringConfig,
    ForecastConfig,
    SignalConfig,
    ValidationConfig,
)

__all__ = [
    # Base configuration
    "BaseConfig",
    # Component configurations
    "ValidationConfig",
    "ForecastConfig",
    "ClusteringConfig",
    "SignalConfig",
    # Master configurations
    "AllocationConfig",
    "BatchConfig",
]
