"""Numerical primitives for rotations: validity checks and the SO(3) exp/log maps."""

import math

import numpy as np

# Default tolerance for rotation-matrix validity in double precision.
ROTATION_MATRIX_TOLERANCE = 1.0e-8

_EPSILON_4TH_ROOT = np.finfo(float).eps ** 0.25


def _is_tiny(x):
    return x < _EPSILON_4TH_ROOT


def is_valid_rotation_matrix(matrix, threshold=ROTATION_MATRIX_TOLERANCE):
    """Check that ``matrix`` has determinant 1 and is orthonormal within ``threshold``."""
    m = np.asarray(matrix, dtype=float)
    if m.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {m.shape}")
    if abs(np.linalg.det(m) - 1.0) > threshold:
        return False
    deviation = np.abs(m @ m.T - np.eye(3)).max()
    return bool(deviation <= threshold)


def arcsin_x_over_x(x):
    """Return ``asin(x) / x``, using a series expansion near zero."""
    if _is_tiny(abs(x)):
        return 1.0 + x * x / 6.0
    return math.asin(x) / x


def exp_coefficients(dx):
    """Map a rotation vector to unit quaternion coefficients ``(w, x, y, z)``."""
    vec = np.asarray(dx, dtype=float).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {np.shape(dx)}")
    theta = float(np.linalg.norm(vec))
    # na is sin(theta / 2) / theta
    if _is_tiny(theta):
        na = 0.5 + theta * theta / 48.0
    else:
        na = math.sin(theta * 0.5) / theta
    ct = math.cos(theta * 0.5)
    return (ct, float(vec[0] * na), float(vec[1] * na), float(vec[2] * na))


def log_vector(w, x, y, z):
    """Map a unit quaternion to its rotation vector; ``q`` and ``-q`` give the same result."""
    a = np.array([x, y, z], dtype=float)
    na = float(np.linalg.norm(a))
    eta = float(w)
    if abs(eta) < na:
        # eta is the more precise quantity here, and there is no singularity.
        if eta >= 0:
            scale = math.acos(eta) / na
        else:
            scale = -math.acos(-eta) / na
    else:
        # na is the more precise quantity; asin(na)/na has a removable singularity at 0.
        if eta > 0:
            scale = arcsin_x_over_x(na)
        else:
            scale = -arcsin_x_over_x(na)
    return a * (2.0 * scale)