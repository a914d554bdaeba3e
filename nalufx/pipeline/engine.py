"""
Allocation engine for nalufx.

Orchestrates Validation -> Features -> Forecasts -> Signals -> Regimes ->
Allocation. Validation failures are fatal and propagate to the caller.
Forecasting, signal and clustering failures are recoverable: each is logged
and replaced by a fallback of the same shape so the allocation step always
runs on complete inputs.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..config.allocation import AllocationConfig
from ..data.features import FeatureExtractor
from ..data.validation import InputValidator
from ..models.clustering import KMeansRegimeClusterer
from ..models.forecasting import ETSForecaster, fallback_extrapolation
from ..signal_generation.combiner import SignalCombiner
from ..utils.concurrency import model_lock
from ..utils.exceptions import ForecastingError

logger = logging.getLogger(__name__)


@dataclass
class AllocationResult:
    """Allocation vector plus the intermediate artifacts that produced it."""

    allocation: np.ndarray
    predictions: np.ndarray
    forecasted_returns: np.ndarray
    forecasted_cash_flows: np.ndarray
    sentiment_scores: np.ndarray
    optimal_actions: np.ndarray
    regime_labels: np.ndarray
    features: pd.DataFrame
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    @property
    def degraded(self) -> bool:
        """True if any recoverable stage fell back."""
        return bool(
            any(self.diagnostics.get("forecast_fallback", {}).values())
            or self.diagnostics.get("clustering_fallback")
            or self.diagnostics.get("signal_errors")
        )

    def to_series(self) -> pd.Series:
        """Allocation as a Series indexed by forecast day (1-based)."""
        return pd.Series(
            self.allocation,
            index=pd.RangeIndex(1, len(self.allocation) + 1, name="day"),
            name="allocation",
        )


class AllocationEngine:
    """
    Computes a normalized day-by-day allocation vector.

    Each forecast day ``d`` gets

        forecast_return[d] * forecast_cash_flow[d]
            * sentiment[d] * action[d] * (regime[d] + 1)

    where the last three factors are applied only while ``d`` is within the
    length of all of the sentiment, action and regime vectors; beyond that
    the day keeps the bare forecast product. Predictions are divided by
    their sum. Negative weights are not clipped here (see
    ``postprocessing.clip_negative_weights``).

    Collaborators are injectable:
        forecaster: object with ``fit_and_forecast(series, horizon)`` or a callable
        clusterer: object with ``fit_predict(matrix)`` or a callable
        signals: SignalCombiner

    The engine keeps no per-call state, so one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        config: Optional[AllocationConfig] = None,
        forecaster: Optional[Any] = None,
        clusterer: Optional[Any] = None,
        signals: Optional[SignalCombiner] = None,
    ):
        """
        Initialize engine with configuration and collaborators.

        Args:
            config: AllocationConfig. Uses defaults if None.
            forecaster: Forecasting collaborator. ETSForecaster if None.
            clusterer: Clustering collaborator. KMeansRegimeClusterer if None.
            signals: Signal combiner. Random placeholder sources if None.
        """
        self.config = config or AllocationConfig()
        self.validator = InputValidator(self.config.validation)
        self.feature_extractor = FeatureExtractor()
        self.forecaster = forecaster or ETSForecaster(self.config.forecast)
        self.clusterer = clusterer or KMeansRegimeClusterer(self.config.clustering)
        self.signals = signals or SignalCombiner(config=self.config.signals)

    def compute_allocation(
        self,
        daily_returns: Sequence[float],
        cash_flows: Sequence[float],
        market_indices: Sequence[float],
        fund_characteristics: Sequence[float],
        num_days: int,
    ) -> np.ndarray:
        """
        Compute the allocation vector.

        Args:
            daily_returns: Historical daily returns
            cash_flows: Historical cash flows
            market_indices: Market index levels
            fund_characteristics: Fund characteristic scores
            num_days: Forecast horizon

        Returns:
            Read-only array of ``num_days`` weights summing to 1, or all
            zeros when the predictions sum to exactly 0

        Raises:
            InputMismatchError, EmptyInputError, InvalidDataError,
            OutlierDataError: On invalid inputs
        """
        return self.run(
            daily_returns, cash_flows, market_indices, fund_characteristics, num_days
        ).allocation

    def run(
        self,
        daily_returns: Sequence[float],
        cash_flows: Sequence[float],
        market_indices: Sequence[float],
        fund_characteristics: Sequence[float],
        num_days: int,
    ) -> AllocationResult:
        """
        Execute the full allocation pipeline and keep intermediate artifacts.

        Args:
            daily_returns: Historical daily returns
            cash_flows: Historical cash flows
            market_indices: Market index levels
            fund_characteristics: Fund characteristic scores
            num_days: Forecast horizon

        Returns:
            AllocationResult with allocation, intermediates and diagnostics

        Raises:
            AllocationError: On invalid inputs, checked before the horizon
            ValueError: If num_days is not a non-negative integer
        """
        started = datetime.now()
        logger.info(f"Starting allocation over {num_days} days")

        # Step 1: validation (fatal)
        logger.debug("Step 1: Validating inputs")
        self.validator.validate(daily_returns, cash_flows, market_indices, fund_characteristics)
        if isinstance(num_days, bool) or int(num_days) != num_days or num_days < 0:
            raise ValueError(f"num_days must be a non-negative integer, got {num_days}")
        num_days = int(num_days)
        returns = np.array(daily_returns, dtype=np.float64)
        flows = np.array(cash_flows, dtype=np.float64)

        diagnostics: Dict[str, Any] = {
            "n_observations": len(returns),
            "num_days": num_days,
            "forecast_method": {},
            "forecast_fallback": {},
            "forecast_errors": {},
        }

        # Step 2: features
        logger.debug("Step 2: Extracting features")
        features = self.feature_extractor.extract(
            daily_returns, cash_flows, market_indices, fund_characteristics
        )

        # Step 3: forecasts (recoverable per series)
        logger.debug("Step 3: Forecasting returns and cash flows")
        forecasted_returns = self._forecast_series("daily_returns", returns, num_days, diagnostics)
        forecasted_cash_flows = self._forecast_series("cash_flows", flows, num_days, diagnostics)

        # Step 4: auxiliary signals (recoverable)
        logger.debug("Step 4: Generating auxiliary signals")
        scores = self.signals.combine(num_days)
        diagnostics["signal_fallback"] = scores.degraded
        diagnostics["signal_errors"] = dict(scores.errors)

        # Step 5: regimes (recoverable)
        logger.debug("Step 5: Clustering regimes")
        regime_labels, clustering_error = self._recover(
            "clustering",
            lambda: np.asarray(self._call_clusterer(features), dtype=np.int64),
            lambda: np.zeros(len(returns), dtype=np.int64),
        )
        diagnostics["clustering_fallback"] = clustering_error is not None
        diagnostics["clustering_error"] = clustering_error

        # Step 6: per-day predictions
        logger.debug("Step 6: Combining predictions")
        predicted_returns = self._pad_with_fallback(forecasted_returns, returns.mean(), num_days)
        predicted_cash_flows = self._pad_with_fallback(forecasted_cash_flows, flows.mean(), num_days)
        predictions = predicted_returns * predicted_cash_flows

        weighted_days = min(
            num_days,
            len(scores.sentiment_scores),
            len(scores.optimal_actions),
            len(regime_labels),
        )
        predictions[:weighted_days] *= (
            scores.sentiment_scores[:weighted_days]
            * scores.optimal_actions[:weighted_days]
            * (regime_labels[:weighted_days] + 1.0)
        )
        diagnostics["weighted_days"] = weighted_days

        # Steps 7-8: normalization
        allocation = self._normalize(predictions)
        diagnostics["total_prediction"] = float(predictions.sum())

        duration = (datetime.now() - started).total_seconds()
        logger.info(f"Allocation completed in {duration:.2f}s")

        return AllocationResult(
            allocation=allocation,
            predictions=predictions,
            forecasted_returns=predicted_returns,
            forecasted_cash_flows=predicted_cash_flows,
            sentiment_scores=scores.sentiment_scores,
            optimal_actions=scores.optimal_actions,
            regime_labels=regime_labels,
            features=features,
            diagnostics=diagnostics,
        )

    def _forecast_series(
        self, name: str, series: np.ndarray, num_days: int, diagnostics: Dict[str, Any]
    ) -> np.ndarray:
        """Forecast one series, substituting the naive extrapolation on failure."""
        values, error = self._recover(
            f"{name} forecast",
            lambda: self._checked_forecast(series, num_days),
            lambda: fallback_extrapolation(series, num_days),
        )
        failed = error is not None
        diagnostics["forecast_method"][name] = (
            "fallback" if failed else getattr(self.forecaster, "name", type(self.forecaster).__name__)
        )
        diagnostics["forecast_fallback"][name] = failed
        if failed:
            diagnostics["forecast_errors"][name] = error
        return values

    def _checked_forecast(self, series: np.ndarray, num_days: int) -> np.ndarray:
        if num_days == 0:
            return np.array([], dtype=np.float64)
        if hasattr(self.forecaster, "fit_and_forecast"):
            raw = self.forecaster.fit_and_forecast(series, num_days)
        else:
            raw = self.forecaster(series, num_days)
        values = np.asarray(raw, dtype=np.float64).ravel()[:num_days]
        if not np.isfinite(values).all():
            raise ForecastingError("forecast contains non-finite values")
        return values

    def _call_clusterer(self, features: pd.DataFrame) -> np.ndarray:
        with model_lock:
            matrix = features.to_numpy(dtype=np.float64)
        if hasattr(self.clusterer, "fit_predict"):
            return self.clusterer.fit_predict(matrix)
        return self.clusterer(matrix)

    @staticmethod
    def _recover(
        stage: str, primary: Callable[[], np.ndarray], fallback: Callable[[], np.ndarray]
    ) -> Tuple[np.ndarray, Optional[str]]:
        """Run ``primary``; on any failure log it and return ``fallback()`` instead."""
        try:
            return primary(), None
        except Exception as e:
            logger.warning(f"{stage} failed, using fallback: {e}")
            return fallback(), str(e)

    @staticmethod
    def _pad_with_fallback(forecast: np.ndarray, mean: float, num_days: int) -> np.ndarray:
        """Use the forecast where available and ``mean * day`` for the remaining days."""
        days = np.arange(1, num_days + 1, dtype=np.float64)
        predicted = mean * days
        available = min(len(forecast), num_days)
        predicted[:available] = forecast[:available]
        return predicted

    @staticmethod
    def _normalize(predictions: np.ndarray) -> np.ndarray:
        total = predictions.sum()
        if total == 0.0:
            allocation = np.zeros(len(predictions), dtype=np.float64)
        else:
            allocation = predictions / total
        allocation.flags.writeable = False
        return allocation
