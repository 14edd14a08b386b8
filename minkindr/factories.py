"""Convenience constructors for quaternions and transformations."""

import numpy as np

from minkindr.quaternion import RotationQuaternion
from minkindr.transformation import interpolate_componentwise


def _as_vector(v, size):
    vec = np.asarray(v, dtype=float).reshape(-1)
    if vec.shape != (size,):
        raise ValueError(f"expected a {size}-vector, got shape {np.shape(v)}")
    return vec


def create_quaternion_from_xyzw(xyzw):
    """Create a quaternion from the 4-vector ``[x, y, z, w]``."""
    x, y, z, w = _as_vector(xyzw, 4)
    return RotationQuaternion(w, x, y, z)


def create_quaternion_from_wxyz(wxyz):
    """Create a quaternion from the 4-vector ``[w, x, y, z]``."""
    w, x, y, z = _as_vector(wxyz, 4)
    return RotationQuaternion(w, x, y, z)


def create_quaternion_from_approximate_rotation_matrix(matrix):
    """Create a quaternion from an approximate 3x3 rotation matrix."""
    return RotationQuaternion.construct_and_renormalize(matrix)


def create_quaternion_from_rotation_vector_rads(rotation_vector):
    """Create a quaternion from a rotation vector ``[x, y, z]`` in radians."""
    return RotationQuaternion.from_rotation_vector(_as_vector(rotation_vector, 3))


def interpolate_linearly(t_a, t_b, lam):
    """Slerp the rotations and blend the positions of two transformations; ``lam`` in ``[0, 1]``."""
    return interpolate_componentwise(t_a, t_b, lam)