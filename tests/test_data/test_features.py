"""
Unit tests for FeatureExtractor.
"""

import numpy as np
import pandas as pd
import pytest

from nalufx.data.features import FEATURE_COLUMNS, FeatureExtractor
from tests.fixtures.sample_data import SCENARIO_INPUTS, create_sample_inputs


class TestFeatureExtractor:
    """Test suite for FeatureExtractor class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.extractor = FeatureExtractor()

    def test_shape_and_column_order(self):
        """Test the matrix is N x 4 with the documented column order."""
        features = self.extractor.extract(**SCENARIO_INPUTS)

        assert isinstance(features, pd.DataFrame)
        assert features.shape == (4, 4)
        assert list(features.columns) == FEATURE_COLUMNS

    def test_columns_standardized(self):
        """Test each column has zero mean and unit population std."""
        features = self.extractor.extract(**create_sample_inputs(n_days=50))

        np.testing.assert_allclose(features.mean().to_numpy(), 0.0, atol=1e-10)
        np.testing.assert_allclose(features.std(ddof=0).to_numpy(), 1.0, rtol=1e-10)

    def test_known_values(self):
        """Test normalization against a hand computation."""
        features = self.extractor.extract([1.0, 3.0], [10.0, 30.0], [5.0, 7.0], [0.0, 2.0])

        expected = np.array([[-1.0] * 4, [1.0] * 4])
        np.testing.assert_allclose(features.to_numpy(), expected)

    def test_constant_column_becomes_zero(self):
        """Test a zero-variance column is set to 0 instead of NaN."""
        inputs = dict(SCENARIO_INPUTS)
        inputs["fund_characteristics"] = [0.9, 0.9, 0.9, 0.9]

        features = self.extractor.extract(**inputs)

        assert np.isfinite(features.to_numpy()).all()
        assert (features["fund_characteristics"] == 0.0).all()
        assert features["returns"].abs().sum() > 0

    def test_single_row(self):
        """Test a single day yields an all-zero row."""
        features = self.extractor.extract([0.01], [100.0], [1000.0], [0.5])

        assert features.shape == (1, 4)
        assert (features.to_numpy() == 0.0).all()

    def test_build_matrix_is_raw(self):
        """Test build_matrix keeps raw values."""
        raw = self.extractor.build_matrix(**SCENARIO_INPUTS)

        assert raw["cash_flows"].tolist() == SCENARIO_INPUTS["cash_flows"]

    def test_inputs_not_modified(self):
        """Test caller-owned arrays are not mutated."""
        inputs = create_sample_inputs(n_days=20)
        originals = {name: values.copy() for name, values in inputs.items()}

        self.extractor.extract(**inputs)

        for name, values in inputs.items():
            np.testing.assert_array_equal(values, originals[name])

    def test_fresh_matrix_per_call(self):
        """Test repeated calls return independent matrices."""
        first = self.extractor.extract(**SCENARIO_INPUTS)
        second = self.extractor.extract(**SCENARIO_INPUTS)

        first.iloc[0, 0] = 99.0

        assert second.iloc[0, 0] != pytest.approx(99.0)
