"""
Optional caller-side post-processing of allocation vectors.

The engine emits raw normalized weights that may be negative. Callers that
need a long-only schedule clip and renormalize here.
"""

from typing import Sequence

import numpy as np


def clip_negative_weights(allocation: Sequence[float]) -> np.ndarray:
    """
    Set negative weights to zero and renormalize the rest to sum to 1.

    Args:
        allocation: Allocation vector, possibly with negative weights

    Returns:
        New non-negative array of the same length; all zeros if no weight
        is positive
    """
    clipped = np.clip(np.asarray(allocation, dtype=np.float64), 0.0, None)
    total = clipped.sum()
    if total == 0.0:
        return np.zeros_like(clipped)
    return clipped / total
