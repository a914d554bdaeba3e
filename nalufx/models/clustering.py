"""
Regime clustering over the normalized feature matrix.

Partitions days into regimes with k-means. Regime ids carry no meaning of
their own; the allocation engine only uses them as ``label + 1`` weights.
"""

import logging
import warnings
from typing import Optional, Union

import numpy as np
import pandas as pd
from sklearn.cluster import KMeans

from ..config.allocation import ClusteringConfig
from ..utils.concurrency import model_lock
from ..utils.exceptions import ClusteringError

logger = logging.getLogger(__name__)


class KMeansRegimeClusterer:
    """
    K-means regime tagging (Euclidean distance, k-means++ initialization).

    With ``random_seed=None`` every call uses a different random
    initialization.
    """

    def __init__(self, config: Optional[ClusteringConfig] = None):
        """
        Initialize clusterer with configuration.

        Args:
            config: ClusteringConfig instance. Uses defaults if None.
        """
        self.config = config or ClusteringConfig()

    def fit_predict(self, features: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
        """
        Assign a regime label to every row of the feature matrix.

        Args:
            features: Normalized N x d feature matrix

        Returns:
            Integer array of length N with labels in ``0..n_regimes-1``

        Raises:
            ClusteringError: If clustering fails for any reason
        """
        if isinstance(features, pd.DataFrame):
            with model_lock:
                features = features.to_numpy(dtype=np.float64)
        matrix = np.asarray(features, dtype=np.float64)

        if matrix.ndim != 2:
            raise ClusteringError(f"feature matrix must be 2-D, got shape {matrix.shape}")
        if len(matrix) < self.config.n_regimes:
            raise ClusteringError(
                f"n_samples={len(matrix)} should be >= n_clusters={self.config.n_regimes}"
            )
        if not np.isfinite(matrix).all():
            raise ClusteringError("feature matrix contains non-finite values")

        kmeans = KMeans(
            n_clusters=self.config.n_regimes,
            n_init=self.config.n_init,
            random_state=self.config.random_seed,
        )
        try:
            with model_lock, warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter("always")
                labels = kmeans.fit_predict(matrix)
        except Exception as e:
            raise ClusteringError(str(e)) from e

        for warning in caught:
            # e.g. fewer distinct points than clusters; labels are still usable
            logger.debug(f"KMeans: {warning.message}")

        return labels.astype(np.int64)

    def __call__(self, features: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
        return self.fit_predict(features)
