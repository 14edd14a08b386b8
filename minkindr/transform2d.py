"""Rigid transformations in the plane: a rotation angle and a 2D translation."""

import math

import numpy as np

_EPSILON = np.finfo(float).eps


def _as_vector(v, size):
    vec = np.asarray(v, dtype=float).reshape(-1)
    if vec.shape != (size,):
        raise ValueError(f"expected a {size}-vector, got shape {np.shape(v)}")
    return vec


def _rotation(angle):
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([[c, -s], [s, c]])


class Transformation2D:
    """A transformation taking points from frame B to frame A: ``A_p = T_A_B.transform(B_p)``."""

    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, angle=0.0, position=None):
        self._dtype = np.dtype(float)
        self._angle = self._dtype.type(angle)
        self._position = (
            np.zeros(2) if position is None else _as_vector(position, 2).copy()
        )

    @classmethod
    def from_matrix(cls, matrix):
        """Build from a 3x3 homogeneous matrix; raise ValueError if it is not rigid."""
        m = np.asarray(matrix, dtype=float)
        if m.shape != (3, 3):
            raise ValueError(f"expected a 3x3 matrix, got shape {m.shape}")
        if m[2, 2] - 1.0 > _EPSILON:
            raise ValueError(f"bottom-right entry must be 1, got {m[2, 2]!r}")
        determinant = m[0, 0] * m[1, 1] - m[1, 0] * m[0, 1]
        if not abs(determinant - 1.0) <= _EPSILON:
            raise ValueError(
                f"rotation block must have determinant 1, got {determinant!r}"
            )
        return cls(math.atan2(m[1, 0], m[0, 0]), m[:2, 2])

    @property
    def angle(self):
        """The rotation angle in radians."""
        return self._angle

    @angle.setter
    def angle(self, value):
        self._angle = self._dtype.type(value)

    @property
    def position(self):
        """The translation ``A_t_A_B``."""
        return self._position.copy()

    @position.setter
    def position(self, value):
        self._position = _as_vector(value, 2).astype(self._dtype)

    def rotation_matrix(self):
        return _rotation(float(self._angle)).astype(self._dtype)

    def transformation_matrix(self):
        """The 3x3 homogeneous matrix."""
        matrix = np.eye(3, dtype=self._dtype)
        matrix[:2, :2] = self.rotation_matrix()
        matrix[:2, 2] = self._position
        return matrix

    def as_vector(self):
        """Angle then position: ``[angle, x, y]``."""
        return np.concatenate(([self._angle], self._position))

    def transform(self, point):
        return self.rotation_matrix() @ _as_vector(point, 2) + self._position

    def transform_vectorized(self, points):
        """Transform each column of a 2xN array."""
        pts = np.asarray(points, dtype=float)
        if pts.ndim != 2 or pts.shape[0] != 2:
            raise ValueError(f"expected a 2xN array, got shape {pts.shape}")
        return self.rotation_matrix() @ pts + self._position[:, np.newaxis]

    def inverse(self):
        angle = -float(self._angle)
        return Transformation2D(angle, -(_rotation(angle) @ self._position))

    def cast(self, dtype):
        """Return a copy whose angle and position are stored with ``dtype``."""
        result = Transformation2D()
        result._dtype = np.dtype(dtype)
        result._angle = result._dtype.type(self._angle)
        result._position = self._position.astype(dtype)
        return result

    def __mul__(self, other):
        if isinstance(other, Transformation2D):
            return Transformation2D(
                float(self._angle) + float(other._angle),
                self._position + _rotation(float(self._angle)) @ other._position,
            )
        if isinstance(other, (np.ndarray, list, tuple)):
            point = np.asarray(other, dtype=float).reshape(-1)
            if point.shape != (2,):
                raise ValueError(f"expected a 2-vector, got shape {np.shape(other)}")
            return self.transform(point)
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Transformation2D):
            return NotImplemented
        return bool(self._angle == other._angle) and bool(
            np.array_equal(self._position, other._position)
        )

    def __repr__(self):
        return (
            f"Transformation2D(angle={float(self._angle)!r}, "
            f"position={self._position.tolist()!r})"
        )

    def __str__(self):
        x, y = (float(c) for c in self._position)
        return f"[{float(self._angle):g}, [{x:g} {y:g}]]"