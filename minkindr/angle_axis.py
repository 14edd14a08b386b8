"""Rotations stored as an angle (radians) about a unit axis."""

import math

import numpy as np

from minkindr.common import skew_matrix
from minkindr.quaternion import RotationQuaternion

# Allowed deviation of the axis' squared norm from one.
AXIS_NORM_TOLERANCE = 1.0e-4

_EPSILON = np.finfo(float).eps


def _as_vector(v, size):
    vec = np.asarray(v, dtype=float).reshape(-1)
    if vec.shape != (size,):
        raise ValueError(f"expected a {size}-vector, got shape {np.shape(v)}")
    return vec


def _check_axis(axis):
    squared = float(np.dot(axis, axis))
    if not abs(squared - 1.0) <= AXIS_NORM_TOLERANCE:
        raise ValueError(f"rotation axis is not of unit length (squared norm {squared!r})")


class AngleAxis:
    """A rotation taking vectors from frame B to frame A: ``A_v = C_A_B.rotate(B_v)``."""

    __hash__ = None

    def __init__(self, angle=0.0, axis=(1.0, 0.0, 0.0)):
        vec = _as_vector(axis, 3)
        _check_axis(vec)
        self._angle = float(angle)
        self._axis = vec.copy()

    # -- construction -------------------------------------------------------

    @classmethod
    def from_rotation_vector(cls, rotation_vector):
        """Build from an angle-scaled axis; a vanishing vector gives the identity."""
        vec = _as_vector(rotation_vector, 3)
        angle = float(np.linalg.norm(vec))
        if angle < _EPSILON:
            return cls()
        return cls(angle, vec / angle)

    @classmethod
    def from_rotation_matrix(cls, matrix):
        """Build from a rotation matrix."""
        return cls.from_quaternion(RotationQuaternion.construct_and_renormalize(matrix))

    @classmethod
    def from_quaternion(cls, quaternion):
        """Build from a quaternion; the angle lies in ``[0, pi]``."""
        vec = np.asarray(quaternion.imaginary, dtype=float)
        w = float(quaternion.w)
        n = float(np.linalg.norm(vec))
        if n == 0.0:
            return cls()
        angle = 2.0 * math.atan2(n, abs(w))
        if w < 0:
            n = -n
        result = cls()
        result._angle = angle
        result._axis = vec / n
        return result

    # -- components ---------------------------------------------------------

    @property
    def angle(self):
        """The rotation angle in radians."""
        return self._angle

    @angle.setter
    def angle(self, value):
        self._angle = float(value)

    @property
    def axis(self):
        """The unit rotation axis."""
        return self._axis.copy()

    @axis.setter
    def axis(self, value):
        vec = _as_vector(value, 3)
        _check_axis(vec)
        self._axis = vec.copy()

    @property
    def vector(self):
        """Angle first, then the axis: ``[angle, ax, ay, az]``."""
        return np.concatenate(([self._angle], self._axis))

    # -- algebra ------------------------------------------------------------

    def unique(self):
        """Return the equivalent rotation with angle in ``[0, pi]`` and a canonical axis."""
        wrapped = math.fmod(self._angle + math.pi, 2.0 * math.pi) - math.pi
        axis = self._axis
        if wrapped > 0:
            return AngleAxis(wrapped, axis)
        if wrapped < 0:
            if wrapped != -math.pi:
                return AngleAxis(-wrapped, -axis)
            # At -pi both axis directions describe the same rotation.
            for component in axis:
                if component < 0:
                    return AngleAxis(-wrapped, -axis)
                if component > 0:
                    return AngleAxis(-wrapped, axis)
            return AngleAxis(-wrapped, axis)
        return AngleAxis()

    def inverse(self):
        return AngleAxis(-self._angle, self._axis)

    def normalize(self):
        """Rescale the axis to unit length in place and return ``self``."""
        self._axis = self._axis / np.linalg.norm(self._axis)
        return self

    def disparity_angle(self, other):
        """The angle in radians of the rotation between ``self`` and ``other``."""
        other_aa = self._coerce(other)
        if other_aa is None:
            raise TypeError("disparity_angle expects a rotation")
        return (other_aa * self.inverse()).unique().angle

    def __mul__(self, other):
        other_aa = self._coerce(other)
        if other_aa is None:
            return NotImplemented
        return AngleAxis.from_quaternion(self.to_quaternion() * other_aa.to_quaternion())

    # -- acting on vectors --------------------------------------------------

    def rotate(self, v):
        return self.rotation_matrix() @ _as_vector(v, 3)

    def rotate4(self, v):
        """Rotate the first three components of a homogeneous 4-vector."""
        vec = _as_vector(v, 4)
        return np.concatenate((self.rotate(vec[:3]), vec[3:]))

    def inverse_rotate(self, v):
        return self.inverse().rotate(v)

    def inverse_rotate4(self, v):
        vec = _as_vector(v, 4)
        return np.concatenate((self.inverse_rotate(vec[:3]), vec[3:]))

    # -- conversions --------------------------------------------------------

    def rotation_matrix(self):
        c = math.cos(self._angle)
        s = math.sin(self._angle)
        a = self._axis
        return c * np.eye(3) + s * skew_matrix(a) + (1.0 - c) * np.outer(a, a)

    def to_quaternion(self):
        half = 0.5 * self._angle
        return RotationQuaternion.from_parts(math.cos(half), math.sin(half) * self._axis)

    # -- helpers ------------------------------------------------------------

    @staticmethod
    def _coerce(other):
        if isinstance(other, AngleAxis):
            return other
        if isinstance(other, RotationQuaternion):
            return AngleAxis.from_quaternion(other)
        return None

    def __repr__(self):
        ax, ay, az = (float(c) for c in self._axis)
        return f"AngleAxis(angle={self._angle!r}, axis=({ax!r}, {ay!r}, {az!r}))"

    def __str__(self):
        return " ".join(repr(float(c)) for c in self.vector)