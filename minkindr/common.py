"""Small linear-algebra helpers shared across the package."""

import numpy as np


def skew_matrix(v):
    """Return the 3x3 skew-symmetric matrix ``S`` with ``S @ w == cross(v, w)``."""
    vec = np.asarray(v, dtype=float).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {np.shape(v)}")
    x, y, z = vec
    return np.array(
        [
            [0.0, -z, y],
            [z, 0.0, -x],
            [-y, x, 0.0],
        ]
    )