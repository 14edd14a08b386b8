import numpy as np
import pytest

from minkindr.factories import (
    create_quaternion_from_approximate_rotation_matrix,
    create_quaternion_from_rotation_vector_rads,
    create_quaternion_from_wxyz,
    create_quaternion_from_xyzw,
    interpolate_linearly,
)
from minkindr.quaternion import RotationQuaternion
from minkindr.transformation import Transformation

WXYZ = np.array([0.64491714, 0.26382416, 0.51605132, 0.49816637])
XYZW = np.array([0.26382416, 0.51605132, 0.49816637, 0.64491714])


def test_from_xyzw_round_trip():
    q = create_quaternion_from_xyzw(XYZW)
    np.testing.assert_allclose(q.quaternion_xyzw(), XYZW)
    np.testing.assert_allclose(q.quaternion_wxyz(), WXYZ)


def test_from_wxyz_round_trip():
    q = create_quaternion_from_wxyz(WXYZ)
    np.testing.assert_allclose(q.quaternion_wxyz(), WXYZ)
    assert q == create_quaternion_from_xyzw(XYZW)


def test_non_unit_rejected():
    with pytest.raises(ValueError):
        create_quaternion_from_wxyz([1.0, 1.0, 0.0, 0.0])


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        create_quaternion_from_xyzw([0.0, 0.0, 1.0])


def test_approximate_rotation_matrix():
    q = create_quaternion_from_wxyz(WXYZ)
    approximate = q.rotation_matrix() * 1.001
    recovered = create_quaternion_from_approximate_rotation_matrix(approximate)
    assert recovered.norm() == pytest.approx(1.0)
    assert recovered.disparity_angle(q) == pytest.approx(0.0, abs=1e-6)


def test_rotation_vector_round_trip():
    rotation_vector = np.array([0.3, -0.2, 0.5])
    q = create_quaternion_from_rotation_vector_rads(rotation_vector)
    np.testing.assert_allclose(q.rotation_vector(), rotation_vector, atol=1e-12)
    np.testing.assert_allclose(q.log(), rotation_vector, atol=1e-12)


def test_zero_rotation_vector_is_identity():
    q = create_quaternion_from_rotation_vector_rads([0.0, 0.0, 0.0])
    np.testing.assert_allclose(q.quaternion_wxyz(), [1.0, 0.0, 0.0, 0.0])


def test_interpolate_linearly_endpoints():
    t_a = Transformation(create_quaternion_from_wxyz(WXYZ), [1.0, 2.0, 3.0])
    t_b = Transformation(RotationQuaternion(), [4.0, 5.0, 6.0])
    start = interpolate_linearly(t_a, t_b, 0.0)
    end = interpolate_linearly(t_a, t_b, 1.0)
    np.testing.assert_allclose(
        start.transformation_matrix(), t_a.transformation_matrix(), atol=1e-9
    )
    np.testing.assert_allclose(
        end.transformation_matrix(), t_b.transformation_matrix(), atol=1e-9
    )
    middle = interpolate_linearly(t_a, t_b, 0.5)
    np.testing.assert_allclose(middle.position, [2.5, 3.5, 4.5], atol=1e-9)


@pytest.mark.parametrize("lam", [-1e-9, 1.0 + 1e-9])
def test_interpolate_linearly_out_of_range(lam):
    t_a = Transformation()
    t_b = Transformation(RotationQuaternion(), [1.0, 0.0, 0.0])
    with pytest.raises(ValueError):
        interpolate_linearly(t_a, t_b, lam)