"""Similarity transforms: a rigid transformation combined with a uniform scale."""

import numpy as np

from minkindr.transformation import Transformation


def _as_vector(v, size):
    vec = np.asarray(v, dtype=float).reshape(-1)
    if vec.shape != (size,):
        raise ValueError(f"expected a {size}-vector, got shape {np.shape(v)}")
    return vec


def _check_scale(scale):
    if not scale > 0.0:
        raise ValueError(f"scale must be positive, got {scale!r}")


class SimilarityTransform:
    """Scale, then rotate, then translate.

    The transformation matrix is ``[[R*s, t], [0, 1]]``, which equals the rigid
    transformation ``[[R, t], [0, 1]]`` applied after the scaling ``s*I``.
    """

    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, transform=None, scale=1.0):
        if transform is None:
            transform = Transformation()
        if not isinstance(transform, Transformation):
            raise TypeError(
                f"transform must be a Transformation, got {type(transform).__name__}"
            )
        scale = float(scale)
        _check_scale(scale)
        self._transform = Transformation(transform.rotation, transform.position)
        self._scale = scale

    @classmethod
    def from_log(cls, log_vector):
        """Build from ``[tx, ty, tz, rx, ry, rz, scale]``; the scale must be positive."""
        vec = _as_vector(log_vector, 7)
        return cls(Transformation.exp(vec[:6]), float(vec[6]))

    @property
    def transform(self):
        """The rigid part ``T_A_B``."""
        return self._transform

    @property
    def scale(self):
        """The scale ``s_A_B``."""
        return self._scale

    @scale.setter
    def scale(self, value):
        self._scale = float(value)

    def inverse(self):
        rotation = self._transform.rotation
        position = self._transform.position
        return SimilarityTransform(
            Transformation(
                rotation.inverse(),
                -rotation.inverse_rotate(position / self._scale),
            ),
            1.0 / self._scale,
        )

    def log(self):
        """The rigid log map followed by the scale: ``[tx, ty, tz, rx, ry, rz, s]``."""
        return np.concatenate((self._transform.log(), [self._scale]))

    def transformation_matrix(self):
        """The 4x4 matrix ``[[R*s, t], [0, 1]]``."""
        matrix = self._transform.transformation_matrix()
        matrix[:3, :3] *= self._scale
        return matrix

    def __mul__(self, other):
        if isinstance(other, SimilarityTransform):
            # R = Rl*Rr;  t = Rl*sl*tr + tl;  s = sl*sr
            return SimilarityTransform(
                Transformation(
                    self._transform.rotation * other._transform.rotation,
                    self * other._transform.position,
                ),
                self._scale * other._scale,
            )
        if isinstance(other, Transformation):
            return self * SimilarityTransform(other, 1.0)
        if isinstance(other, (np.ndarray, list, tuple)):
            points = np.asarray(other, dtype=float)
            if points.shape == (3,):
                return self._transform.transform(self._scale * points)
            if points.ndim == 2 and points.shape[0] == 3:
                return self._transform.transform_vectorized(self._scale * points)
            raise ValueError(
                f"expected a 3-vector or a 3xN array, got shape {points.shape}"
            )
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Transformation):
            return SimilarityTransform(other, 1.0) * self
        return NotImplemented

    def __repr__(self):
        return f"SimilarityTransform(transform={self._transform!r}, scale={self._scale!r})"

    def __str__(self):
        return (
            f"Transform:\n{self._transform.transformation_matrix()}\n"
            f"Scale: {self._scale}"
        )