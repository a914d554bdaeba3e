"""
Preprocessing helpers that turn price history into allocation inputs.
"""

from typing import Sequence

import numpy as np


def calculate_daily_returns(closes: Sequence[float]) -> np.ndarray:
    """
    Calculate simple daily returns from closing prices.

    Args:
        closes: Closing prices in chronological order

    Returns:
        Array of length ``len(closes) - 1`` with ``closes[i+1] / closes[i] - 1``
    """
    closes = np.asarray(closes, dtype=np.float64)
    if len(closes) < 2:
        return np.array([], dtype=np.float64)
    return closes[1:] / closes[:-1] - 1.0


def calculate_cash_flows(daily_returns: Sequence[float], initial_investment: float) -> np.ndarray:
    """
    Calculate the daily cash flow produced by an initial investment.

    Args:
        daily_returns: Simple daily returns
        initial_investment: Invested amount

    Returns:
        Array with ``return * initial_investment`` per day
    """
    return np.asarray(daily_returns, dtype=np.float64) * initial_investment
