"""
Feature extraction for regime clustering.

Assembles the per-day feature matrix from the four aligned input series and
standardizes each column to zero mean and unit variance.
"""

from typing import Sequence

import numpy as np
import pandas as pd
from scipy import stats

from ..utils.concurrency import model_lock

FEATURE_COLUMNS = ["returns", "cash_flows", "market_indices", "fund_characteristics"]


class FeatureExtractor:
    """
    Builds the normalized N x 4 feature matrix consumed by the regime clusterer.

    Every call allocates a fresh matrix; caller-owned sequences are only read.
    """

    def extract(
        self,
        daily_returns: Sequence[float],
        cash_flows: Sequence[float],
        market_indices: Sequence[float],
        fund_characteristics: Sequence[float],
    ) -> pd.DataFrame:
        """
        Build and standardize the feature matrix.

        Inputs are expected to have passed InputValidator.

        Args:
            daily_returns: Historical daily returns
            cash_flows: Historical cash flows
            market_indices: Market index levels
            fund_characteristics: Fund characteristic scores

        Returns:
            DataFrame with one row per day and columns FEATURE_COLUMNS,
            each column z-score normalized
        """
        with model_lock:
            raw = self.build_matrix(daily_returns, cash_flows, market_indices, fund_characteristics)
            return self.normalize(raw)

    def build_matrix(
        self,
        daily_returns: Sequence[float],
        cash_flows: Sequence[float],
        market_indices: Sequence[float],
        fund_characteristics: Sequence[float],
    ) -> pd.DataFrame:
        """Stack the four series column-wise without normalization."""
        return pd.DataFrame(
            {
                "returns": np.array(daily_returns, dtype=np.float64),
                "cash_flows": np.array(cash_flows, dtype=np.float64),
                "market_indices": np.array(market_indices, dtype=np.float64),
                "fund_characteristics": np.array(fund_characteristics, dtype=np.float64),
            },
            columns=FEATURE_COLUMNS,
        )

    def normalize(self, features: pd.DataFrame) -> pd.DataFrame:
        """
        Column-wise standardization ``(x - mean) / std`` with population std.

        Constant columns have zero standard deviation; they are set to 0
        instead of the NaN a literal division would produce.

        Args:
            features: Raw feature matrix

        Returns:
            New DataFrame with normalized columns
        """
        values = features.to_numpy(dtype=np.float64)

        with model_lock, np.errstate(divide="ignore", invalid="ignore"):
            normalized = stats.zscore(values, axis=0, ddof=0)

        constant = np.ptp(values, axis=0) == 0
        normalized[:, constant] = 0.0

        return pd.DataFrame(normalized, columns=features.columns, index=features.index)
