# minkindr

A small NumPy-based library for 3D rotations and rigid-body, similarity and
planar transformations.

## Modules

- `minkindr.quaternion` – `RotationQuaternion`, a passive Hamiltonian unit
  quaternion that takes vectors from frame B to frame A
  (`A_v = q_A_B.rotate(B_v)`).
  - Construct with `RotationQuaternion(w, x, y, z)` (defaults to identity),
    `from_parts`, `from_rotation_vector`, `exp`, `from_rotation_matrix`,
    `from_approximate_rotation_matrix` (projects a nearly orthonormal matrix
    onto SO(3) by SVD), `construct_and_renormalize`, and `random(angle=None, rng=None)`.
  - Components are properties: `w`, `x`, `y`, `z`, `imaginary`, `vector`.
    Use `quaternion_wxyz()` and `quaternion_xyzw()` for ordered arrays.
  - Operations: `*` (composition, renormalized when the result drifts from
    unit length), `inverse`, `conjugated`, `unique`, `normalize`, `norm`,
    `squared_norm`, `rotate`, `rotate4`, `rotate_vectorized`,
    `inverse_rotate`, `inverse_rotate4`, `rotation_matrix`, `log`,
    `rotation_vector`, `disparity_angle`, `set_values`, `set_parts`, `cast(dtype)`.
    `==` compares coefficients exactly.
- `minkindr.angle_axis` – `AngleAxis`, a rotation stored as an angle in
  radians about a unit axis. It has `from_rotation_vector`,
  `from_rotation_matrix`, `from_quaternion`, the properties `angle`, `axis`
  and `vector`, and `unique`, `inverse`, `normalize`, `rotate`, `rotate4`,
  `inverse_rotate`, `inverse_rotate4`, `rotation_matrix`, `to_quaternion`,
  `disparity_angle` and `*`. Angle-axis and quaternion values can be mixed in
  `*` and `disparity_angle`.
- `minkindr.transformation` – `Transformation`, a rotation `q_A_B` plus a
  position `A_t_A_B` (`A_p = T_A_B.transform(B_p)`). It has `from_matrix`,
  `construct_and_renormalize_rotation`, `exp`, `random(translation_norm=None,
  angle=None, rng=None)`, the properties `rotation` and `position`, and
  `transformation_matrix`, `rotation_matrix`, `as_vector` (`[w, x, y, z, tx, ty, tz]`),
  `transform`, `transform4`, `transform_vectorized`, `inverse_transform`,
  `inverse_transform4`, `log` (translation then rotation vector, the log map
  of SO(3)xR(3)), `inverse`, `cast(dtype)`, `*` (with another transformation
  or a 3-vector) and `==`. The module function
  `interpolate_componentwise(t_a, t_b, lam)` slerps the rotations and
  linearly blends the positions.
- `minkindr.sim3` – `SimilarityTransform`, a uniform scale followed by a
  rigid transformation, with matrix `[[R*s, t], [0, 1]]`. It has `from_log`,
  the properties `transform` and `scale`, and `inverse`, `log`,
  `transformation_matrix`, and `*` with another similarity transform, a
  `Transformation` (on either side), a 3-vector or a 3xN array.
- `minkindr.transform2d` – `Transformation2D`, a planar rotation angle and a
  2D translation, with `from_matrix`, the properties `angle` and `position`,
  and `rotation_matrix`, `transformation_matrix`, `as_vector`
  (`[angle, x, y]`), `transform`, `transform_vectorized`, `inverse`,
  `cast(dtype)`, `*` and `==`. `str()` gives `[angle, [x y]]`.
- `minkindr.factories` – `create_quaternion_from_xyzw`,
  `create_quaternion_from_wxyz`,
  `create_quaternion_from_approximate_rotation_matrix`,
  `create_quaternion_from_rotation_vector_rads` and `interpolate_linearly`.
- `minkindr.so3` – the exp/log maps and `is_valid_rotation_matrix`;
  `minkindr.common` – `skew_matrix`.

## Errors

Invalid values raise `ValueError`: a quaternion whose squared norm differs
from 1 by more than 1e-4, an angle-axis with a non-unit axis, a matrix that
is not a valid rotation, arrays of the wrong shape, an empty set of points
in `transform_vectorized`, a non-positive scale when a `SimilarityTransform`
is built, a planar matrix that is not rigid, or an interpolation factor
outside [0, 1]. Arguments of the wrong kind raise `TypeError`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import numpy as np

from minkindr.quaternion import RotationQuaternion
from minkindr.angle_axis import AngleAxis
from minkindr.transformation import Transformation, interpolate_componentwise
from minkindr.sim3 import SimilarityTransform
from minkindr.transform2d import Transformation2D
from minkindr.factories import create_quaternion_from_xyzw

q = RotationQuaternion(0.64491714, 0.26382416, 0.51605132, 0.49816637)
v = np.array([4.67833851, 8.52053031, 6.71796159])

q.rotate(v)                 # rotated vector
q.inverse_rotate(v)         # rotated by the inverse
q.rotation_matrix()         # 3x3 rotation matrix
q.log()                     # rotation vector (angle * axis)
RotationQuaternion.exp(q.log())

a = AngleAxis.from_quaternion(q)
q.disparity_angle(a)        # ~0.0

T = Transformation(q, np.array([1.0, 2.0, 3.0]))
T.transform(v)
(T * T.inverse()).transformation_matrix()  # ~identity
Transformation.exp(T.log())

T_half = interpolate_componentwise(T, Transformation.random(), 0.5)

S = SimilarityTransform(T, 2.0)
S.transformation_matrix()
S.inverse() * S

T2 = Transformation2D(0.77, np.array([1.2, -2.2]))
T2.transform(np.array([6.0, 1.5]))

create_quaternion_from_xyzw([0.0, 0.0, 0.0, 1.0])  # identity
```

## What it does not do

This is a library only: it has no command-line tool. Values are stored as
NumPy arrays of floats; `cast(dtype)` changes the stored precision, but there
is no separate single-precision type.