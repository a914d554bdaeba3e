"""Combination of the auxiliary per-day signals consumed by the allocation engine."""

import logging
import warnings
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence, Union

import numpy as np

from ..config.allocation import SignalConfig
from ..utils.exceptions import SignalError
from .base import CallableSignalSource, RandomSignalSource, SignalSource, StaticSignalSource

logger = logging.getLogger(__name__)

SignalInput = Union[SignalSource, Callable[[int], Sequence[float]], Sequence[float]]


@dataclass
class SignalScores:
    """Sentiment and optimal action scores for the forecast horizon."""

    sentiment_scores: np.ndarray
    optimal_actions: np.ndarray
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def degraded(self) -> bool:
        """True if any source failed and was replaced by an empty vector."""
        return bool(self.errors)


def as_signal_source(signal: SignalInput) -> SignalSource:
    """Wrap a callable or pre-computed sequence into a SignalSource.

    Args:
        signal: SignalSource, callable taking ``num_days``, or a sequence of scores

    Returns:
        SignalSource instance
    """
    if isinstance(signal, SignalSource):
        return signal
    if callable(signal):
        return CallableSignalSource(signal)
    return StaticSignalSource(signal)


class SignalCombiner:
    """Collects sentiment and optimal action scores from pluggable sources.

    When no source is given the placeholder RandomSignalSource is used,
    seeded from ``SignalConfig.random_seed``. A failing source degrades to an
    empty vector; the engine then omits auxiliary weighting for every day.
    """

    def __init__(
        self,
        sentiment: Optional[SignalInput] = None,
        actions: Optional[SignalInput] = None,
        config: Optional[SignalConfig] = None,
    ):
        """Initialize combiner.

        Args:
            sentiment: Sentiment score source
            actions: Optimal action score source
            config: SignalConfig used for the default random sources
        """
        self.config = config or SignalConfig()
        self.sentiment_source = self._resolve(sentiment, offset=0)
        self.action_source = self._resolve(actions, offset=1)

    def combine(self, num_days: int) -> SignalScores:
        """Generate both signal vectors for the forecast horizon.

        Args:
            num_days: Forecast horizon

        Returns:
            SignalScores with one vector per signal
        """
        errors: Dict[str, str] = {}
        sentiment = self._generate(self.sentiment_source, num_days, "sentiment", errors)
        actions = self._generate(self.action_source, num_days, "optimal_action", errors)
        return SignalScores(sentiment_scores=sentiment, optimal_actions=actions, errors=errors)

    def _resolve(self, signal: Optional[SignalInput], offset: int) -> SignalSource:
        if signal is not None:
            return as_signal_source(signal)
        seed = self.config.random_seed
        # Distinct streams for the two placeholder signals
        return RandomSignalSource(None if seed is None else seed + offset)

    def _generate(
        self, source: SignalSource, num_days: int, name: str, errors: Dict[str, str]
    ) -> np.ndarray:
        try:
            values = self._checked(source.generate(num_days), name)
        except Exception as e:
            error = e if isinstance(e, SignalError) else SignalError(str(e), name)
            logger.warning(f"{error}; continuing without {name} weighting")
            errors[name] = error.diagnostic
            return np.array([], dtype=np.float64)

        if (values < 0).any():
            warnings.warn(f"{name} signal contains negative scores; they are used unclamped")
        return values

    @staticmethod
    def _checked(values: Sequence[float], name: str) -> np.ndarray:
        array = np.asarray(values, dtype=np.float64)
        if array.ndim != 1:
            raise SignalError(f"expected a one-dimensional vector, got shape {array.shape}", name)
        if not np.isfinite(array).all():
            raise SignalError("scores contain NaN or infinite values", name)
        return array
