"""
Unit tests for price preprocessing helpers.
"""

import numpy as np
import pytest

from nalufx.data.processing import calculate_cash_flows, calculate_daily_returns


class TestCalculateDailyReturns:
    """Test daily return computation from closing prices."""

    def test_simple_returns(self):
        """Test returns are relative changes between consecutive closes."""
        returns = calculate_daily_returns([100.0, 110.0, 99.0])

        np.testing.assert_allclose(returns, [0.1, -0.1])

    @pytest.mark.parametrize("closes", [[], [100.0]])
    def test_too_few_prices(self, closes):
        """Test fewer than two closes give no returns."""
        assert len(calculate_daily_returns(closes)) == 0


class TestCalculateCashFlows:
    """Test cash flow computation from returns."""

    def test_scaled_by_investment(self):
        """Test each return is multiplied by the investment."""
        flows = calculate_cash_flows([0.1, -0.05, 0.0], 1000.0)

        np.testing.assert_allclose(flows, [100.0, -50.0, 0.0])

    def test_empty(self):
        """Test empty returns give empty cash flows."""
        assert len(calculate_cash_flows([], 1000.0)) == 0
