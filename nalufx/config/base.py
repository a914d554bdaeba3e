"""
Base configuration class for nalufx components.

Provides validation on construction and dictionary serialization shared by all
component configurations.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Type, TypeVar

T = TypeVar("T", bound="BaseConfig")


@dataclass
class BaseConfig:
    """
    Base configuration with validation and serialization support.

    Subclasses extend ``validate`` and call ``super().validate()`` first.
    """

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """Validate configuration parameters. Raises ConfigurationError."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls: Type[T], config_dict: Dict[str, Any]) -> T:
        """
        Create configuration from dictionary.

        Unknown keys are ignored so that configurations written by newer
        versions can still be loaded.

        Args:
            config_dict: Dictionary with configuration parameters

        Returns:
            New configuration instance
        """
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in known})

    def copy(self: T, **overrides: Any) -> T:
        """Return a copy of this configuration with selected fields replaced."""
        values = self.to_dict()
        values.update(overrides)
        return type(self).from_dict(values)
