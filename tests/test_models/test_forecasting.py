"""
Unit tests for forecasting models.

Tests automatic ETS selection, degenerate-series failures and the naive
fallback extrapolation.
"""

import numpy as np
import pytest

from nalufx.config.allocation import ForecastConfig
from nalufx.models.forecasting import (
    ETSForecaster,
    ForecastResult,
    NaiveForecaster,
    fallback_extrapolation,
)
from nalufx.utils.exceptions import ForecastingError


def _trending_series(n: int = 60, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return 100.0 + 0.5 * np.arange(n) + rng.normal(0.0, 0.3, n)


class TestETSForecaster:
    """Test suite for ETSForecaster class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.forecaster = ETSForecaster()
        self.series = _trending_series()

    def test_forecast_length_and_finiteness(self):
        """Test the forecast has the requested horizon and finite values."""
        result = self.forecaster.forecast(self.series, 10)

        assert isinstance(result, ForecastResult)
        assert len(result) == 10
        assert np.isfinite(result.values).all()
        assert result.method == "ets"
        assert result.details["model"].startswith("ETS(")

    def test_forecast_follows_level(self):
        """Test forecasts of an upward-trending series stay above its mean."""
        values = self.forecaster.fit_and_forecast(self.series, 5)

        assert (values > self.series.mean()).all()

    def test_fit_and_forecast_matches_forecast(self):
        """Test fit_and_forecast returns the point forecast values."""
        values = self.forecaster.fit_and_forecast(self.series, 7)
        result = self.forecaster.forecast(self.series, 7)

        np.testing.assert_allclose(values, result.values)

    def test_deterministic(self):
        """Test identical series give identical forecasts."""
        first = self.forecaster.fit_and_forecast(self.series, 5)
        second = self.forecaster.fit_and_forecast(self.series.copy(), 5)

        np.testing.assert_array_equal(first, second)

    def test_zero_horizon(self):
        """Test a zero horizon yields an empty forecast."""
        assert len(self.forecaster.forecast(self.series, 0)) == 0

    def test_negative_horizon(self):
        """Test a negative horizon is a programming error."""
        with pytest.raises(ValueError):
            self.forecaster.forecast(self.series, -1)

    def test_constant_series_fails(self):
        """Test a constant series raises ForecastingError."""
        with pytest.raises(ForecastingError) as exc_info:
            self.forecaster.forecast([5.0] * 20, 3)

        assert "constant" in str(exc_info.value)

    def test_empty_series_fails(self):
        """Test an empty series raises ForecastingError."""
        with pytest.raises(ForecastingError):
            self.forecaster.forecast([], 3)

    def test_non_finite_series_fails(self):
        """Test NaN in the series raises ForecastingError."""
        with pytest.raises(ForecastingError):
            self.forecaster.forecast([1.0, np.nan, 3.0, 4.0, 5.0], 3)

    def test_too_short_series_fails(self):
        """Test no candidate can be fitted on two observations."""
        with pytest.raises(ForecastingError) as exc_info:
            self.forecaster.forecast([1.0, 2.0], 3)

        assert "insufficient observations" in exc_info.value.diagnostic

    def test_short_series_ranked_by_aic(self):
        """Test AICc that is undefined on four points falls back to AIC ranking."""
        result = self.forecaster.forecast([0.02, -0.01, 0.03, 0.01], 5)

        assert len(result) == 5
        assert np.isfinite(result.values).all()
        assert result.details["model"] == "ETS(A,N,N)"
        assert "aic" in result.details

    def test_configured_criterion_reported(self):
        """Test the selection criterion used is reported with the model."""
        result = self.forecaster.forecast(self.series, 3)

        assert "aicc" in result.details

    def test_trend_disabled(self):
        """Test only level models are tried when trend is disabled."""
        forecaster = ETSForecaster(ForecastConfig(allow_trend=False))

        result = forecaster.forecast(self.series, 3)

        assert result.details["model"].endswith(",N,N)")

    def test_candidates_for_positive_series(self):
        """Test strictly positive data adds multiplicative-error candidates."""
        specs = list(self.forecaster._candidate_specs(np.array([1.0, 2.0, 3.0])))

        assert len(specs) == 6
        assert {error for error, _, _ in specs} == {"add", "mul"}

    def test_candidates_for_signed_series(self):
        """Test data with non-positive values only uses additive errors."""
        specs = list(self.forecaster._candidate_specs(np.array([-1.0, 2.0, 3.0])))

        assert len(specs) == 3
        assert all(error == "add" for error, _, _ in specs)

    def test_candidates_without_damping(self):
        """Test the damped trend candidate can be disabled."""
        forecaster = ETSForecaster(ForecastConfig(allow_damped_trend=False, allow_multiplicative_error=False))

        specs = list(forecaster._candidate_specs(np.array([1.0, 2.0])))

        assert specs == [("add", None, False), ("add", "add", False)]

    def test_model_labels(self):
        """Test ETS taxonomy labels."""
        assert ETSForecaster._label("add", None, False) == "ETS(A,N,N)"
        assert ETSForecaster._label("mul", "add", False) == "ETS(M,A,N)"
        assert ETSForecaster._label("add", "add", True) == "ETS(A,Ad,N)"


class TestNaiveForecaster:
    """Test suite for the fallback extrapolation."""

    def test_mean_times_day_index(self):
        """Test forecast is mean(history) * day for days 1..horizon."""
        np.testing.assert_allclose(fallback_extrapolation([1.0, 2.0, 3.0], 3), [2.0, 4.0, 6.0])

    def test_negative_mean(self):
        """Test negative means extrapolate downward."""
        np.testing.assert_allclose(fallback_extrapolation([-0.01, -0.03], 2), [-0.02, -0.04])

    def test_zero_horizon(self):
        """Test zero horizon gives an empty array."""
        assert len(fallback_extrapolation([1.0], 0)) == 0

    def test_empty_series(self):
        """Test an empty history cannot be extrapolated."""
        with pytest.raises(ForecastingError):
            fallback_extrapolation([], 3)

    def test_forecaster_interface(self):
        """Test NaiveForecaster exposes the forecaster interface."""
        forecaster = NaiveForecaster()

        result = forecaster.forecast([10.0, 20.0], 2)

        assert result.method == "naive"
        np.testing.assert_allclose(forecaster.fit_and_forecast([10.0, 20.0], 2), [15.0, 30.0])

    def test_constant_series_supported(self):
        """Test the naive forecaster handles series ETS rejects."""
        np.testing.assert_allclose(NaiveForecaster().fit_and_forecast([5.0] * 4, 2), [5.0, 10.0])
