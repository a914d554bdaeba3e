"""
Configuration classes for the allocation pipeline.

Provides dataclass-based configuration for input validation thresholds,
forecasting model selection, regime clustering, auxiliary signal generation
and the master allocation configuration that composes them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .base import BaseConfig
from ..utils.exceptions import ConfigurationError


@dataclass
class ValidationConfig(BaseConfig):
    """Thresholds for input validation."""

    # Outlier bounds (absolute magnitude)
    max_abs_daily_return: float = 1.0  # +/-100% single-day move
    max_abs_cash_flow: float = 1_000_000.0

    def validate(self) -> None:
        """Validate threshold values."""
        super().validate()

        if not self.max_abs_daily_return > 0:
            raise ConfigurationError(
                f"max_abs_daily_return must be positive, got {self.max_abs_daily_return}"
            )
        if not self.max_abs_cash_flow > 0:
            raise ConfigurationError(
                f"max_abs_cash_flow must be positive, got {self.max_abs_cash_flow}"
            )


@dataclass
class ForecastConfig(BaseConfig):
    """Configuration for automatic exponential smoothing model selection."""

    allow_trend: bool = True
    allow_damped_trend: bool = True
    allow_multiplicative_error: bool = True  # only tried for strictly positive series
    selection_criterion: str = "aicc"  # 'aicc', 'aic', 'bic'
    constant_tolerance: float = 1e-12
    max_iterations: int = 1000

    def validate(self) -> None:
        """Validate forecasting parameters."""
        super().validate()

        valid_criteria = ["aicc", "aic", "bic"]
        if self.selection_criterion not in valid_criteria:
            raise ConfigurationError(
                f"selection_criterion must be one of {valid_criteria}, "
                f"got {self.selection_criterion}"
            )
        if self.constant_tolerance < 0:
            raise ConfigurationError(
                f"constant_tolerance must be non-negative, got {self.constant_tolerance}"
            )
        if self.max_iterations < 1:
            raise ConfigurationError(
                f"max_iterations must be positive, got {self.max_iterations}"
            )


@dataclass
class ClusteringConfig(BaseConfig):
    """Configuration for k-means regime clustering."""

    n_regimes: int = 2
    n_init: Union[int, str] = "auto"
    random_seed: Optional[int] = None  # None = randomized initialization

    def validate(self) -> None:
        """Validate clustering parameters."""
        super().validate()

        if self.n_regimes < 2:
            raise ConfigurationError(f"n_regimes must be at least 2, got {self.n_regimes}")
        if isinstance(self.n_init, str):
            if self.n_init != "auto":
                raise ConfigurationError(f"n_init must be 'auto' or positive int, got {self.n_init}")
        elif self.n_init < 1:
            raise ConfigurationError(f"n_init must be 'auto' or positive int, got {self.n_init}")


@dataclass
class SignalConfig(BaseConfig):
    """Configuration for the placeholder auxiliary signal sources."""

    random_seed: Optional[int] = None


@dataclass
class AllocationConfig(BaseConfig):
    """
    Master configuration for the allocation engine.

    Composes validation, forecasting, clustering and signal configurations
    into a single object.
    """

    validation: ValidationConfig = field(default_factory=ValidationConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    signals: SignalConfig = field(default_factory=SignalConfig)

    def validate(self) -> None:
        """Validate nested configurations."""
        super().validate()
        self.validation.validate()
        self.forecast.validate()
        self.clustering.validate()
        self.signals.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert entire configuration to a nested dictionary."""
        return {
            "validation": self.validation.to_dict(),
            "forecast": self.forecast.to_dict(),
            "clustering": self.clustering.to_dict(),
            "signals": self.signals.to_dict(),
        }

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "AllocationConfig":
        """Create configuration from a nested dictionary."""
        return cls(
            validation=ValidationConfig.from_dict(config_dict.get("validation", {})),
            forecast=ForecastConfig.from_dict(config_dict.get("forecast", {})),
            clustering=ClusteringConfig.from_dict(config_dict.get("clustering", {})),
            signals=SignalConfig.from_dict(config_dict.get("signals", {})),
        )

    @classmethod
    def deterministic(cls, seed: int = 42) -> "AllocationConfig":
        """
        Create a configuration with every random component seeded.

        Args:
            seed: Seed shared by clustering and signal generation

        Returns:
            AllocationConfig producing repeatable allocations
        """
        return cls(
            clustering=ClusteringConfig(random_seed=seed),
            signals=SignalConfig(random_seed=seed),
        )

    def get_summary(self) -> str:
        """Get human-readable summary of configuration."""
        lines = ["Allocation Configuration Summary", "=" * 40]

        lines.append("\nValidation:")
        lines.append(f"  Max |daily return|: {self.validation.max_abs_daily_return}")
        lines.append(f"  Max |cash flow|: {self.validation.max_abs_cash_flow:,.0f}")

        lines.append("\nForecasting (ETS):")
        lines.append(f"  Trend: {self.forecast.allow_trend} (damped: {self.forecast.allow_damped_trend})")
        lines.append(f"  Criterion: {self.forecast.selection_criterion}")

        lines.append("\nClustering:")
        lines.append(f"  Regimes: {self.clustering.n_regimes}")
        lines.append(f"  Seed: {self.clustering.random_seed}")

        lines.append("\nSignals:")
        lines.append(f"  Seed: {self.signals.random_seed}")

        return "\n".join(lines)


@dataclass
class BatchConfig(BaseConfig):
    """Configuration for fanning independent allocation requests across workers."""

    max_workers: int = 4
    timeout_per_request: Optional[float] = None  # seconds
    verbose: bool = False

    def validate(self) -> None:
        """Validate batch processing parameters."""
        super().validate()

        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be positive, got {self.max_workers}")
        if self.timeout_per_request is not None and self.timeout_per_request <= 0:
            raise ConfigurationError(
                f"timeout_per_request must be positive, got {self.timeout_per_request}"
            )
