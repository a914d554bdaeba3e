"""
Input validation for the allocation pipeline.

Provides InputValidator, a pure predicate over the four aligned input series.
Checks run in a fixed order and the first failure is raised:

1. equal length            -> InputMismatchError
2. non-empty               -> EmptyInputError
3. finite values only      -> InvalidDataError
4. magnitude within bounds -> OutlierDataError
"""

from typing import Dict, Optional, Sequence

import numpy as np

from ..config.allocation import ValidationConfig
from ..utils.exceptions import (
    AllocationError,
    EmptyInputError,
    InputMismatchError,
    InvalidDataError,
    OutlierDataError,
)

SERIES_NAMES = ("daily_returns", "cash_flows", "market_indices", "fund_characteristics")


class InputValidator:
    """
    Validates the raw inputs of an allocation computation.

    Validation has no side effects: inputs are read, never modified.
    """

    def __init__(self, config: Optional[ValidationConfig] = None):
        """
        Initialize InputValidator with configuration.

        Args:
            config: ValidationConfig instance. Uses defaults if None.
        """
        self.config = config or ValidationConfig()

    def validate(
        self,
        daily_returns: Sequence[float],
        cash_flows: Sequence[float],
        market_indices: Sequence[float],
        fund_characteristics: Sequence[float],
    ) -> None:
        """
        Validate the four input series.

        Args:
            daily_returns: Historical daily returns
            cash_flows: Historical cash flows
            market_indices: Market index levels aligned with the returns
            fund_characteristics: Fund characteristic scores aligned with the returns

        Raises:
            InputMismatchError: If the series differ in length
            EmptyInputError: If the series are empty
            InvalidDataError: If any value is NaN or infinite
            OutlierDataError: If a return or cash flow exceeds its bound
        """
        series = self._as_arrays(daily_returns, cash_flows, market_indices, fund_characteristics)

        self._check_lengths(series)
        self._check_empty(series)
        self._check_finite(series)
        self._check_outliers(
            series["daily_returns"], self.config.max_abs_daily_return, "daily_returns"
        )
        self._check_outliers(
            series["cash_flows"], self.config.max_abs_cash_flow, "cash_flows"
        )

    def is_valid(
        self,
        daily_returns: Sequence[float],
        cash_flows: Sequence[float],
        market_indices: Sequence[float],
        fund_characteristics: Sequence[float],
    ) -> bool:
        """Return True if the inputs pass validation."""
        try:
            self.validate(daily_returns, cash_flows, market_indices, fund_characteristics)
        except AllocationError:
            return False
        return True

    def _as_arrays(self, *inputs: Sequence[float]) -> Dict[str, np.ndarray]:
        """Convert inputs to float arrays keyed by series name."""
        arrays = {}
        for name, values in zip(SERIES_NAMES, inputs):
            array = np.asarray(values, dtype=np.float64)
            if array.ndim != 1:
                raise InputMismatchError(f"Input must be one-dimensional, got shape {array.shape}", name)
            arrays[name] = array
        return arrays

    def _check_lengths(self, series: Dict[str, np.ndarray]) -> None:
        lengths = {name: len(values) for name, values in series.items()}
        if len(set(lengths.values())) > 1:
            detail = ", ".join(f"{name}={length}" for name, length in lengths.items())
            raise InputMismatchError(f"Input slices must have the same length: {detail}")

    def _check_empty(self, series: Dict[str, np.ndarray]) -> None:
        for name, values in series.items():
            if len(values) == 0:
                raise EmptyInputError(series=name)

    def _check_finite(self, series: Dict[str, np.ndarray]) -> None:
        for name, values in series.items():
            if not np.isfinite(values).all():
                raise InvalidDataError(series=name)

    def _check_outliers(self, values: np.ndarray, threshold: float, name: str) -> None:
        if (np.abs(values) > threshold).any():
            raise OutlierDataError(
                f"Input data contains outliers beyond +/-{threshold:g}", name
            )
