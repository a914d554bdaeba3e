"""
Univariate time series forecasting for the allocation pipeline.

Provides an automatic exponential smoothing forecaster that searches the ETS
family (additive/multiplicative error, none/additive/damped trend, no
seasonality) and keeps the specification with the best information
criterion, plus the naive mean-times-day-index extrapolation used whenever
model fitting fails.
"""

import logging
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np
from statsmodels.tsa.exponential_smoothing.ets import ETSModel

from ..config.allocation import ForecastConfig
from ..utils.concurrency import model_lock
from ..utils.exceptions import ForecastingError

logger = logging.getLogger(__name__)


@dataclass
class ForecastResult:
    """Point forecast for one input series."""

    values: np.ndarray
    method: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.values)


def fallback_extrapolation(series: Sequence[float], horizon: int) -> np.ndarray:
    """
    Degraded-mode forecast: ``mean(series) * day`` for day in ``1..horizon``.

    Args:
        series: Historical values (non-empty)
        horizon: Number of future days

    Returns:
        Array of length ``horizon``
    """
    values = np.asarray(series, dtype=np.float64)
    if len(values) == 0:
        raise ForecastingError("cannot extrapolate an empty series")
    return float(np.mean(values)) * np.arange(1, horizon + 1, dtype=np.float64)


class BaseForecaster(ABC):
    """Interface for forecasting collaborators."""

    name = "base"

    @abstractmethod
    def forecast(self, series: Sequence[float], horizon: int) -> ForecastResult:
        """
        Fit a model to ``series`` and project ``horizon`` points.

        Raises:
            ForecastingError: If the model cannot be fitted
        """

    def fit_and_forecast(self, series: Sequence[float], horizon: int) -> np.ndarray:
        """Return only the point forecast values."""
        return self.forecast(series, horizon).values


class NaiveForecaster(BaseForecaster):
    """Mean-of-history times day-index extrapolation. Never fits a model."""

    name = "naive"

    def forecast(self, series: Sequence[float], horizon: int) -> ForecastResult:
        return ForecastResult(values=fallback_extrapolation(series, horizon), method=self.name)


@dataclass
class ETSFit:
    """A fitted ETS candidate."""

    label: str
    criterion_name: str
    criterion: float
    results: Any


class ETSForecaster(BaseForecaster):
    """
    Automatic ETS forecaster backed by statsmodels.

    Equivalent to an automatic "ZZN" search: the error and trend components
    are selected by information criterion and seasonality is disabled.
    Instances hold configuration only, so one forecaster can serve
    concurrent requests.
    """

    name = "ets"

    def __init__(self, config: Optional[ForecastConfig] = None):
        """
        Initialize forecaster with configuration.

        Args:
            config: ForecastConfig instance. Uses defaults if None.
        """
        self.config = config or ForecastConfig()

    def forecast(self, series: Sequence[float], horizon: int) -> ForecastResult:
        """
        Fit the best ETS specification and produce a point forecast.

        Args:
            series: Historical values
            horizon: Number of future points

        Returns:
            ForecastResult with ``horizon`` values

        Raises:
            ForecastingError: If the series is degenerate or no candidate fits
        """
        if horizon < 0:
            raise ValueError(f"horizon must be non-negative, got {horizon}")

        y = self._prepare_series(series)
        best = self.select_model(y)

        if horizon == 0:
            values = np.array([], dtype=np.float64)
        else:
            try:
                with model_lock:
                    values = np.asarray(best.results.forecast(steps=horizon), dtype=np.float64)
            except Exception as e:
                raise ForecastingError(f"{best.label} forecast failed: {e}") from e

        if not np.isfinite(values).all():
            raise ForecastingError(f"{best.label} produced non-finite forecasts")

        return ForecastResult(
            values=values,
            method=self.name,
            details={"model": best.label, best.criterion_name: best.criterion},
        )

    def select_model(self, y: np.ndarray) -> ETSFit:
        """
        Fit every admissible candidate and return the best one.

        Args:
            y: Prepared float array

        Candidates are ranked by the configured selection criterion. When it
        is non-finite for every fitted candidate (AICc on very short series)
        they are ranked by AIC instead.

        Returns:
            Best ETSFit

        Raises:
            ForecastingError: If no candidate could be fitted
        """
        errors: List[str] = []
        fits: List[Tuple[str, Any]] = []

        for error, trend, damped in self._candidate_specs(y):
            label = self._label(error, trend, damped)
            if len(y) < self._n_params(trend, damped) + 2:
                errors.append(f"{label}: insufficient observations ({len(y)})")
                continue

            try:
                with model_lock, warnings.catch_warnings():
                    warnings.simplefilter("ignore")
                    model = ETSModel(
                        y,
                        error=error,
                        trend=trend,
                        damped_trend=damped,
                        seasonal=None,
                        initialization_method="estimated",
                    )
                    results = model.fit(disp=False, maxiter=self.config.max_iterations)
            except Exception as e:
                errors.append(f"{label}: {e}")
                continue

            fits.append((label, results))

        if not fits:
            raise ForecastingError("; ".join(errors) or "no ETS candidate available")

        best = self._rank(fits, self.config.selection_criterion)
        if best is None and self.config.selection_criterion != "aic":
            logger.debug(f"{self.config.selection_criterion} undefined for all candidates, ranking by aic")
            best = self._rank(fits, "aic")
        if best is None:
            errors.extend(f"{label}: non-finite information criterion" for label, _ in fits)
            raise ForecastingError("; ".join(errors))

        logger.debug(f"Selected {best.label} ({best.criterion_name}={best.criterion:.3f})")
        return best

    @staticmethod
    def _rank(fits: List[Tuple[str, Any]], criterion_name: str) -> Optional[ETSFit]:
        best: Optional[ETSFit] = None
        with model_lock:
            for label, results in fits:
                criterion = float(getattr(results, criterion_name))
                if np.isfinite(criterion) and (best is None or criterion < best.criterion):
                    best = ETSFit(
                        label=label, criterion_name=criterion_name, criterion=criterion, results=results
                    )
        return best

    def _prepare_series(self, series: Sequence[float]) -> np.ndarray:
        y = np.asarray(series, dtype=np.float64)
        if y.ndim != 1 or len(y) == 0:
            raise ForecastingError("series must be a non-empty one-dimensional sequence")
        if not np.isfinite(y).all():
            raise ForecastingError("series contains non-finite values")
        if np.ptp(y) <= self.config.constant_tolerance:
            raise ForecastingError("series is constant; ETS parameters are not identifiable")
        return y

    def _candidate_specs(self, y: np.ndarray) -> Iterator[Tuple[str, Optional[str], bool]]:
        errors = ["add"]
        # Multiplicative errors are only defined for strictly positive data
        if self.config.allow_multiplicative_error and (y > 0).all():
            errors.append("mul")

        trends: List[Tuple[Optional[str], bool]] = [(None, False)]
        if self.config.allow_trend:
            trends.append(("add", False))
            if self.config.allow_damped_trend:
                trends.append(("add", True))

        for error in errors:
            for trend, damped in trends:
                yield error, trend, damped

    @staticmethod
    def _n_params(trend: Optional[str], damped: bool) -> int:
        # alpha + initial level, beta + initial trend, phi
        n = 2
        if trend is not None:
            n += 2
        if damped:
            n += 1
        return n

    @staticmethod
    def _label(error: str, trend: Optional[str], damped: bool) -> str:
        e = "A" if error == "add" else "M"
        t = "N" if trend is None else ("Ad" if damped else "A")
        return f"ETS({e},{t},N)"
