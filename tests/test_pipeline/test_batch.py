"""
Unit tests for BatchAllocator.
"""

import time
import warnings

import numpy as np

from nalufx.config.allocation import AllocationConfig, BatchConfig
from nalufx.pipeline.batch import AllocationRequest, BatchAllocator, BatchResult
from nalufx.pipeline.engine import AllocationEngine
from nalufx.signal_generation import ConstantSignalSource, SignalCombiner
from tests.fixtures.sample_data import SIMPLE_INPUTS, MeanForecaster, ZeroClusterer, create_sample_inputs


class _SlowForecaster(MeanForecaster):
    def fit_and_forecast(self, series, horizon):
        time.sleep(1.0)
        return super().fit_and_forecast(series, horizon)


def _engine(forecaster=None) -> AllocationEngine:
    return AllocationEngine(
        forecaster=forecaster or MeanForecaster(),
        clusterer=ZeroClusterer(),
        signals=SignalCombiner(sentiment=ConstantSignalSource(), actions=ConstantSignalSource()),
    )


def _request(**overrides) -> AllocationRequest:
    values = dict(SIMPLE_INPUTS, num_days=3)
    values.update(overrides)
    return AllocationRequest(**values)


class TestBatchAllocator:
    """Test suite for BatchAllocator class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.allocator = BatchAllocator(_engine(), BatchConfig(max_workers=2))

    def test_all_successful(self):
        """Test every request gets an allocation."""
        result = self.allocator.process({"AAA": _request(), "BBB": _request(num_days=2)})

        assert isinstance(result, BatchResult)
        np.testing.assert_allclose(result.allocations["AAA"], [1 / 3] * 3)
        np.testing.assert_allclose(result.allocations["BBB"], [0.5, 0.5])
        assert result.failures == {}
        assert result.success_rate == 1.0

    def test_failure_does_not_abort_batch(self):
        """Test an invalid request is reported while others succeed."""
        requests = {
            "GOOD": _request(),
            "BAD": _request(cash_flows=[10.0, 20.0]),
        }

        result = self.allocator.process(requests)

        assert set(result.allocations) == {"GOOD"}
        assert "same length" in result.failures["BAD"]
        assert result.total_processed == 2
        assert result.success_rate == 0.5

    def test_empty_batch(self):
        """Test no requests give an empty result."""
        result = self.allocator.process({})

        assert result.total_processed == 0
        assert result.success_rate == 0.0

    def test_verbose_progress(self):
        """Test the progress bar path produces the same allocations."""
        allocator = BatchAllocator(_engine(), BatchConfig(max_workers=1, verbose=True))

        result = allocator.process({"AAA": _request()})

        np.testing.assert_allclose(result.allocations["AAA"], [1 / 3] * 3)

    def test_timeout(self):
        """Test a slow request is reported as timed out."""
        allocator = BatchAllocator(
            _engine(_SlowForecaster()), BatchConfig(max_workers=1, timeout_per_request=0.05)
        )

        result = allocator.process({"SLOW": _request()})

        assert result.allocations == {}
        assert "timed out" in result.failures["SLOW"]

    def test_timeout_counts_from_start_of_run(self):
        """Test every running request gets the same budget regardless of result order."""
        allocator = BatchAllocator(
            _engine(_SlowForecaster()), BatchConfig(max_workers=2, timeout_per_request=1.5)
        )

        # Each request runs ~2s; both start immediately on their own worker
        result = allocator.process({"FIRST": _request(), "SECOND": _request()})

        assert result.allocations == {}
        assert "timed out" in result.failures["FIRST"]
        assert "timed out" in result.failures["SECOND"]


class TestBatchAllocatorThreadSafety:
    """Parallel fits with the default models."""

    def test_warning_filters_unchanged(self):
        """Test concurrent model fitting leaves the global warning filters intact."""
        allocator = BatchAllocator(
            AllocationEngine(AllocationConfig.deterministic(0)), BatchConfig(max_workers=8)
        )
        requests = {
            f"T{i}": AllocationRequest(**create_sample_inputs(n_days=30, seed=i), num_days=5)
            for i in range(16)
        }
        allocator.process({"WARMUP": requests["T0"]})
        before = list(warnings.filters)

        result = allocator.process(requests)

        assert result.failures == {}
        assert len(result.allocations) == 16
        assert warnings.filters == before
