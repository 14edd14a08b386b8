import math

import numpy as np
import pytest

from minkindr.quaternion import RotationQuaternion
from minkindr.sim3 import SimilarityTransform
from minkindr.transformation import Transformation

TRANSFORMATION_MATRIX = np.array(
    [
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, -1.0, 1.0],
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]
)


@pytest.fixture
def sim3():
    q = RotationQuaternion(0.64491714, 0.26382416, 0.51605132, 0.49816637)
    t = np.array([4.67833851, 8.52053031, 6.71796159])
    return SimilarityTransform(Transformation(q, t), math.pi)


def test_transform_points():
    points = np.array([[1.0], [1.0], [0.0]])
    sim = SimilarityTransform(Transformation.from_matrix(TRANSFORMATION_MATRIX), 2.0)
    expected = np.array([[2.0], [1.0], [2.0]])
    np.testing.assert_allclose(sim * points, expected, atol=1e-12)


def test_transform_single_vector_matches_matrix():
    sim = SimilarityTransform(Transformation.from_matrix(TRANSFORMATION_MATRIX), 2.0)
    result = sim * np.array([1.0, 1.0, 0.0])
    np.testing.assert_allclose(result, [2.0, 1.0, 2.0], atol=1e-12)


def test_inverse(sim3):
    rng = np.random.default_rng(7)
    points = rng.uniform(-1.0, 1.0, (3, 3))
    np.testing.assert_allclose(sim3 * (sim3.inverse() * points), points, atol=1e-6)
    np.testing.assert_allclose(sim3.inverse() * (sim3 * points), points, atol=1e-6)


def test_inverse_scale(sim3):
    assert sim3.inverse().scale == pytest.approx(1.0 / math.pi)


def test_compose_with_inverse_is_identity(sim3):
    identity = sim3 * sim3.inverse()
    np.testing.assert_allclose(identity.transformation_matrix(), np.eye(4), atol=1e-9)
    assert identity.scale == pytest.approx(1.0)


def test_composition_matches_matrix_product(sim3):
    other = SimilarityTransform(Transformation.from_matrix(TRANSFORMATION_MATRIX), 2.0)
    composed = sim3 * other
    np.testing.assert_allclose(
        composed.transformation_matrix(),
        sim3.transformation_matrix() @ other.transformation_matrix(),
        atol=1e-9,
    )


def test_transformation_matrix_scales_rotation_block(sim3):
    matrix = sim3.transformation_matrix()
    np.testing.assert_allclose(
        matrix[:3, :3], sim3.transform.rotation_matrix() * math.pi, atol=1e-12
    )
    np.testing.assert_allclose(matrix[:3, 3], sim3.transform.position, atol=1e-12)
    np.testing.assert_allclose(matrix[3], [0.0, 0.0, 0.0, 1.0])


def test_multiply_with_rigid_transformation_both_sides(sim3):
    rigid = Transformation.from_matrix(TRANSFORMATION_MATRIX)
    right = sim3 * rigid
    left = rigid * sim3
    assert isinstance(left, SimilarityTransform)
    assert right.scale == pytest.approx(math.pi)
    assert left.scale == pytest.approx(math.pi)
    np.testing.assert_allclose(
        left.transformation_matrix(),
        rigid.transformation_matrix() @ sim3.transformation_matrix(),
        atol=1e-9,
    )
    np.testing.assert_allclose(
        right.transformation_matrix(),
        sim3.transformation_matrix() @ rigid.transformation_matrix(),
        atol=1e-9,
    )


def test_log_round_trip(sim3):
    log = sim3.log()
    assert log.shape == (7,)
    assert log[6] == pytest.approx(math.pi)
    restored = SimilarityTransform.from_log(log)
    np.testing.assert_allclose(
        restored.transformation_matrix(), sim3.transformation_matrix(), atol=1e-9
    )


def test_default_is_identity():
    sim = SimilarityTransform()
    assert sim.scale == 1.0
    np.testing.assert_allclose(sim.transformation_matrix(), np.eye(4))


@pytest.mark.parametrize("scale", [0.0, -1.0])
def test_non_positive_scale_rejected(scale):
    with pytest.raises(ValueError):
        SimilarityTransform(Transformation(), scale)


def test_from_log_non_positive_scale_rejected():
    with pytest.raises(ValueError):
        SimilarityTransform.from_log([0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -2.0])


def test_bad_point_shape_rejected(sim3):
    with pytest.raises(ValueError):
        sim3 * np.zeros(4)
    assert sim3.scale == pytest.approx(math.pi)
    point = np.array([1.0, -2.0, 0.5])
    expected = (sim3.transformation_matrix() @ np.append(point, 1.0))[:3]
    np.testing.assert_allclose(sim3 * point, expected, atol=1e-9)


def test_str_layout():
    text = str(SimilarityTransform(Transformation(), 2.0))
    assert text.startswith("Transform:\n")
    assert text.endswith("Scale: 2.0")


def test_set_scale(sim3):
    sim3.scale = 3.0
    assert sim3.scale == 3.0
    np.testing.assert_allclose(
        sim3.transformation_matrix()[:3, :3],
        sim3.transform.rotation_matrix() * 3.0,
        atol=1e-12,
    )