"""Rigid frame transformations built from a unit quaternion and a translation."""

import copy

import numpy as np

from minkindr.quaternion import RotationQuaternion

# Below this distance between quaternions slerp falls back to linear blending.
_SLERP_THRESHOLD = 1.0e-12


def _as_vector(v, size):
    vec = np.asarray(v, dtype=float).reshape(-1)
    if vec.shape != (size,):
        raise ValueError(f"expected a {size}-vector, got shape {np.shape(v)}")
    return vec


def _as_matrix4(matrix):
    m = np.asarray(matrix, dtype=float)
    if m.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {m.shape}")
    return m


class Transformation:
    """A transformation taking points from frame B to frame A: ``A_p = T_A_B.transform(B_p)``.

    It holds the rotation ``q_A_B`` and the position ``A_t_A_B``, the vector
    from the origin of A to the origin of B expressed in A.
    """

    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, rotation=None, position=None):
        # Both argument orders are accepted: (rotation, position) and (position, rotation).
        if isinstance(position, RotationQuaternion) and not isinstance(
            rotation, RotationQuaternion
        ):
            rotation, position = position, rotation
        if rotation is None:
            rotation = RotationQuaternion()
        if not isinstance(rotation, RotationQuaternion):
            raise TypeError(
                f"rotation must be a RotationQuaternion, got {type(rotation).__name__}"
            )
        self._rotation = copy.copy(rotation)
        self._position = (
            np.zeros(3) if position is None else _as_vector(position, 3).copy()
        )

    # -- construction -------------------------------------------------------

    @classmethod
    def from_matrix(cls, matrix):
        """Build from a 4x4 homogeneous matrix whose rotation block must be valid."""
        m = _as_matrix4(matrix)
        return cls(RotationQuaternion.from_rotation_matrix(m[:3, :3]), m[:3, 3])

    @classmethod
    def construct_and_renormalize_rotation(cls, matrix):
        """Build from a 4x4 matrix whose rotation block is only nearly orthonormal."""
        m = _as_matrix4(matrix)
        return cls(RotationQuaternion.construct_and_renormalize(m[:3, :3]), m[:3, 3])

    @classmethod
    def exp(cls, vec):
        """Exponential map of SO(3)xR(3): translation first, rotation vector last."""
        v = _as_vector(vec, 6)
        return cls(RotationQuaternion.exp(v[3:]), v[:3])

    @classmethod
    def random(cls, translation_norm=None, angle=None, rng=None):
        """A random transformation.

        With ``translation_norm`` the translation has that length; with
        ``angle`` the rotation turns by that many radians about a random axis.
        """
        rng = np.random.default_rng() if rng is None else rng
        rotation = RotationQuaternion.random(angle=angle, rng=rng)
        position = rng.uniform(-1.0, 1.0, 3)
        if translation_norm is not None:
            position = position / np.linalg.norm(position) * float(translation_norm)
        return cls(rotation, position)

    # -- components ---------------------------------------------------------

    @property
    def rotation(self):
        """The rotation ``q_A_B``."""
        return self._rotation

    @rotation.setter
    def rotation(self, value):
        if not isinstance(value, RotationQuaternion):
            raise TypeError(
                f"rotation must be a RotationQuaternion, got {type(value).__name__}"
            )
        self._rotation = copy.copy(value)

    @property
    def position(self):
        """The translation ``A_t_A_B``."""
        return self._position.copy()

    @position.setter
    def position(self, value):
        self._position = _as_vector(value, 3).astype(self._position.dtype)

    def transformation_matrix(self):
        """The 4x4 homogeneous matrix."""
        matrix = np.eye(4, dtype=self._position.dtype)
        matrix[:3, :3] = self._rotation.rotation_matrix()
        matrix[:3, 3] = self._position
        return matrix

    def rotation_matrix(self):
        return self._rotation.rotation_matrix()

    def as_vector(self):
        """Quaternion then position: ``[w, x, y, z, tx, ty, tz]``."""
        return np.concatenate((self._rotation.vector, self._position))

    # -- acting on points ---------------------------------------------------

    def transform(self, point):
        return self._rotation.rotate(point) + self._position

    def transform_vectorized(self, points):
        """Transform each column of a 3xN array (N > 0)."""
        return self._rotation.rotate_vectorized(points) + self._position[:, np.newaxis]

    def transform4(self, point):
        """Transform a homogeneous 4-vector."""
        vec = _as_vector(point, 4)
        head = self._rotation.rotate(vec[:3]) + vec[3] * self._position
        return np.concatenate((head, vec[3:]))

    def inverse_transform(self, point):
        return self._rotation.inverse_rotate(_as_vector(point, 3) - self._position)

    def inverse_transform4(self, point):
        """Transform a homogeneous 4-vector by the inverse."""
        vec = _as_vector(point, 4)
        head = self._rotation.inverse_rotate(vec[:3] - self._position * vec[3])
        return np.concatenate((head, vec[3:]))

    # -- algebra ------------------------------------------------------------

    def log(self):
        """Logarithmic map of SO(3)xR(3): translation first, rotation vector last."""
        return np.concatenate((self._position.astype(float), self._rotation.log()))

    def inverse(self):
        return Transformation(
            self._rotation.inverse(), -self._rotation.inverse_rotate(self._position)
        )

    def cast(self, dtype):
        """Return a copy whose components are stored with ``dtype``."""
        result = Transformation(self._rotation.cast(dtype), self._position)
        result._position = self._position.astype(dtype)
        return result

    def __mul__(self, other):
        if isinstance(other, Transformation):
            return Transformation(
                self._rotation * other._rotation,
                self._position + self._rotation.rotate(other._position),
            )
        if isinstance(other, (np.ndarray, list, tuple)):
            point = np.asarray(other, dtype=float)
            if point.shape != (3,):
                raise ValueError(f"expected a 3-vector, got shape {point.shape}")
            return self.transform(point)
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Transformation):
            return NotImplemented
        return self._rotation == other._rotation and bool(
            np.array_equal(self._position, other._position)
        )

    def __repr__(self):
        return f"Transformation(rotation={self._rotation!r}, position={self._position.tolist()!r})"

    def __str__(self):
        return str(self.transformation_matrix())


def _slerp(q_a, q_b, lam):
    a = q_a.vector
    b = q_b.vector
    d = float(np.dot(a, b))
    abs_d = abs(d)
    if abs_d >= 1.0 - _SLERP_THRESHOLD:
        scale0 = 1.0 - lam
        scale1 = lam
    else:
        theta = np.arccos(abs_d)
        sin_theta = np.sin(theta)
        scale0 = np.sin((1.0 - lam) * theta) / sin_theta
        scale1 = np.sin(lam * theta) / sin_theta
    if d < 0:
        scale1 = -scale1
    return RotationQuaternion(*(scale0 * a + scale1 * b))


def interpolate_componentwise(t_a, t_b, lam):
    """Slerp the rotations and linearly blend the positions; ``lam`` in ``[0, 1]``."""
    lam = float(lam)
    if not 0.0 <= lam <= 1.0:
        raise ValueError(f"interpolation parameter must lie in [0, 1], got {lam!r}")
    p_a = t_a.position
    p_int = p_a + lam * (t_b.position - p_a)
    q_int = _slerp(t_a.rotation, t_b.rotation, lam)
    return Transformation(q_int, p_int)