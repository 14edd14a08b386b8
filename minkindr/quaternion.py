"""Unit quaternions representing passive Hamiltonian rotations."""

import math

import numpy as np

from minkindr.so3 import (
    ROTATION_MATRIX_TOLERANCE,
    exp_coefficients,
    is_valid_rotation_matrix,
    log_vector,
)

# Allowed deviation of the squared norm from one.
NORMALIZATION_TOLERANCE = 1.0e-4
# Validity tolerance used before snapping an approximate matrix onto SO(3).
APPROXIMATE_MATRIX_TOLERANCE = 1.0e-4


def _as_vector(v, size):
    vec = np.asarray(v, dtype=float).reshape(-1)
    if vec.shape != (size,):
        raise ValueError(f"expected a {size}-vector, got shape {np.shape(v)}")
    return vec


def _as_matrix3(matrix):
    m = np.asarray(matrix, dtype=float)
    if m.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {m.shape}")
    return m


def _matrix_to_coefficients(m):
    """Convert a rotation matrix to quaternion coefficients ``[w, x, y, z]``."""
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0:
        t = math.sqrt(trace + 1.0)
        w = 0.5 * t
        t = 0.5 / t
        return np.array(
            [
                w,
                (m[2, 1] - m[1, 2]) * t,
                (m[0, 2] - m[2, 0]) * t,
                (m[1, 0] - m[0, 1]) * t,
            ]
        )
    i = 0
    if m[1, 1] > m[0, 0]:
        i = 1
    if m[2, 2] > m[i, i]:
        i = 2
    j = (i + 1) % 3
    k = (j + 1) % 3
    t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
    imaginary = np.zeros(3)
    imaginary[i] = 0.5 * t
    t = 0.5 / t
    w = (m[k, j] - m[j, k]) * t
    imaginary[j] = (m[j, i] + m[i, j]) * t
    imaginary[k] = (m[k, i] + m[i, k]) * t
    return np.concatenate(([w], imaginary))


def _check_unit(coeffs):
    squared = float(np.dot(coeffs, coeffs))
    if not abs(squared - 1.0) <= NORMALIZATION_TOLERANCE:
        raise ValueError(
            f"quaternion is not of unit length (squared norm {squared!r})"
        )


def _rotate(w, vec, v):
    t = 2.0 * np.cross(vec, v)
    return v + w * t + np.cross(vec, t)


class RotationQuaternion:
    """A unit quaternion taking vectors from frame B to frame A: ``A_v = q_A_B.rotate(B_v)``."""

    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, w=1.0, x=0.0, y=0.0, z=0.0):
        coeffs = np.array([w, x, y, z], dtype=float)
        _check_unit(coeffs)
        self._coeffs = coeffs

    # -- construction -------------------------------------------------------

    @classmethod
    def from_parts(cls, real, imaginary):
        """Build from the real part and the 3-vector of imaginary parts."""
        x, y, z = _as_vector(imaginary, 3)
        return cls(real, x, y, z)

    @classmethod
    def from_rotation_vector(cls, rotation_vector):
        """Build from an angle-scaled axis (radians)."""
        return cls.exp(rotation_vector)

    @classmethod
    def from_rotation_matrix(cls, matrix):
        """Build from a valid rotation matrix; raise ValueError if it is not one."""
        m = _as_matrix3(matrix)
        if not is_valid_rotation_matrix(m, ROTATION_MATRIX_TOLERANCE):
            raise ValueError(f"not a valid rotation matrix:\n{m}")
        return cls(*_matrix_to_coefficients(m))

    @classmethod
    def from_approximate_rotation_matrix(cls, matrix):
        """Project a nearly orthonormal matrix onto SO(3) and build from it."""
        m = _as_matrix3(matrix)
        if not is_valid_rotation_matrix(m, APPROXIMATE_MATRIX_TOLERANCE):
            raise ValueError(f"matrix is too far from a rotation:\n{m}")
        _, singular_values, vh = np.linalg.svd(m)
        v = vh.T
        correction = v @ np.diag(1.0 / singular_values) @ v.T
        return cls.from_rotation_matrix(m @ correction)

    @classmethod
    def construct_and_renormalize(cls, matrix):
        """Build from a near-orthonormal matrix, renormalizing the result."""
        coeffs = _matrix_to_coefficients(_as_matrix3(matrix))
        norm = float(np.linalg.norm(coeffs))
        if not norm > 0.0:
            raise ValueError("matrix yields a degenerate quaternion")
        return cls(*(coeffs / norm))

    @classmethod
    def exp(cls, dx):
        """Exponential map from a rotation vector to a quaternion."""
        return cls(*exp_coefficients(dx))

    @classmethod
    def random(cls, angle=None, rng=None):
        """A random rotation; with ``angle`` given, a random axis with that angle."""
        rng = np.random.default_rng() if rng is None else rng
        if angle is None:
            coeffs = rng.uniform(-1.0, 1.0, 4)
            coeffs /= np.linalg.norm(coeffs)
            return cls(*coeffs).unique()
        axis = rng.uniform(-1.0, 1.0, 3)
        axis /= np.linalg.norm(axis)
        half = 0.5 * angle
        return cls.from_parts(math.cos(half), math.sin(half) * axis)

    # -- components ---------------------------------------------------------

    @property
    def w(self):
        return float(self._coeffs[0])

    @property
    def x(self):
        return float(self._coeffs[1])

    @property
    def y(self):
        return float(self._coeffs[2])

    @property
    def z(self):
        return float(self._coeffs[3])

    @property
    def imaginary(self):
        """The imaginary part ``[x, y, z]``."""
        return self._coeffs[1:].copy()

    @property
    def vector(self):
        """All coefficients, real first: ``[w, x, y, z]``."""
        return self._coeffs.copy()

    def quaternion_wxyz(self):
        return self._coeffs.copy()

    def quaternion_xyzw(self):
        return np.roll(self._coeffs, -1)

    def set_values(self, w, x, y, z):
        """Replace the coefficients; they must form a unit quaternion."""
        coeffs = np.array([w, x, y, z], dtype=self._coeffs.dtype)
        _check_unit(coeffs.astype(float))
        self._coeffs = coeffs

    def set_parts(self, real, imaginary):
        """Replace the real and imaginary parts."""
        x, y, z = _as_vector(imaginary, 3)
        self.set_values(real, x, y, z)

    # -- algebra ------------------------------------------------------------

    def unique(self):
        """Return the representative of ``{q, -q}`` whose first non-zero coefficient is positive."""
        for value in self._coeffs:
            if value > 0:
                return self._copy()
            if value < 0:
                return self._negated()
        return self._negated()

    def inverse(self):
        return self.conjugated()

    def conjugated(self):
        w, x, y, z = self._coeffs
        return self._like(w, -x, -y, -z)

    def norm(self):
        return float(np.linalg.norm(self._coeffs))

    def squared_norm(self):
        return float(np.dot(self._coeffs, self._coeffs))

    def normalize(self):
        """Scale to unit length in place and return ``self``."""
        self._coeffs = self._coeffs / np.linalg.norm(self._coeffs)
        return self

    def disparity_angle(self, other):
        """The angle in radians, in ``[0, pi]``, of the rotation between ``self`` and ``other``."""
        other = self._coerce(other)
        if other is None:
            raise TypeError("disparity_angle expects a rotation")
        relative = other * self.inverse()
        n = float(np.linalg.norm(relative._coeffs[1:]))
        return 2.0 * math.atan2(n, abs(relative.w))

    def __mul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        w1, x1, y1, z1 = self._coeffs
        w2, x2, y2, z2 = other._coeffs
        result = np.array(
            [
                w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
                w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
                w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
                w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
            ]
        )
        if abs(float(np.dot(result, result)) - 1.0) > NORMALIZATION_TOLERANCE:
            result = result / np.linalg.norm(result)
        return self._like(*result)

    def __eq__(self, other):
        if not isinstance(other, RotationQuaternion):
            return NotImplemented
        return bool(np.array_equal(self._coeffs, other._coeffs))

    # -- acting on vectors --------------------------------------------------

    def rotate(self, v):
        vec = _as_vector(v, 3)
        return _rotate(self.w, self._coeffs[1:].astype(float), vec)

    def rotate_vectorized(self, v):
        """Rotate each column of a 3xN array (N > 0)."""
        points = np.asarray(v, dtype=float)
        if points.ndim != 2 or points.shape[0] != 3:
            raise ValueError(f"expected a 3xN array, got shape {points.shape}")
        if points.shape[1] == 0:
            raise ValueError("cannot rotate an empty set of vectors")
        return self.rotation_matrix() @ points

    def rotate4(self, v):
        """Rotate the first three components of a homogeneous 4-vector."""
        vec = _as_vector(v, 4)
        return np.concatenate((self.rotate(vec[:3]), vec[3:]))

    def inverse_rotate(self, v):
        vec = _as_vector(v, 3)
        return _rotate(self.w, -self._coeffs[1:].astype(float), vec)

    def inverse_rotate4(self, v):
        vec = _as_vector(v, 4)
        return np.concatenate((self.inverse_rotate(vec[:3]), vec[3:]))

    # -- conversions --------------------------------------------------------

    def rotation_matrix(self):
        w, x, y, z = (float(c) for c in self._coeffs)
        tx, ty, tz = 2.0 * x, 2.0 * y, 2.0 * z
        twx, twy, twz = tx * w, ty * w, tz * w
        txx, txy, txz = tx * x, ty * x, tz * x
        tyy, tyz, tzz = ty * y, tz * y, tz * z
        return np.array(
            [
                [1.0 - (tyy + tzz), txy - twz, txz + twy],
                [txy + twz, 1.0 - (txx + tzz), tyz - twx],
                [txz - twy, tyz + twx, 1.0 - (txx + tyy)],
            ],
            dtype=self._coeffs.dtype,
        )

    def log(self):
        """Logarithmic map: the rotation vector, identical for ``q`` and ``-q``."""
        return log_vector(*(float(c) for c in self._coeffs))

    def rotation_vector(self):
        """The rotation as angle times unit axis."""
        vec = self._coeffs[1:].astype(float)
        w = float(self._coeffs[0])
        n = float(np.linalg.norm(vec))
        if n == 0.0:
            return np.zeros(3)
        angle = 2.0 * math.atan2(n, abs(w))
        axis = -vec / n if w < 0 else vec / n
        return axis * angle

    def cast(self, dtype):
        """Return a copy whose coefficients are stored with ``dtype``."""
        matrix = self.rotation_matrix().astype(dtype)
        result = type(self).construct_and_renormalize(matrix.astype(float))
        result._coeffs = result._coeffs.astype(dtype)
        return result

    # -- helpers ------------------------------------------------------------

    @staticmethod
    def _coerce(other):
        if isinstance(other, RotationQuaternion):
            return other
        to_quaternion = getattr(other, "to_quaternion", None)
        if to_quaternion is None:
            return None
        return to_quaternion()

    def _like(self, w, x, y, z):
        result = type(self)(w, x, y, z)
        result._coeffs = result._coeffs.astype(self._coeffs.dtype)
        return result

    def _copy(self):
        return self._like(*self._coeffs)

    def _negated(self):
        return self._like(*(-self._coeffs))

    def __repr__(self):
        w, x, y, z = (float(c) for c in self._coeffs)
        return f"RotationQuaternion(w={w!r}, x={x!r}, y={y!r}, z={z!r})"

    def __str__(self):
        return str(self._coeffs)