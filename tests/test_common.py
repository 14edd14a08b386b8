import numpy as np
import pytest

from minkindr.common import skew_matrix


def test_skew_matrix_is_antisymmetric():
    s = skew_matrix([0.3, -1.2, 2.5])
    assert np.allclose(s, -s.T)
    assert np.allclose(np.diag(s), 0.0)


@pytest.mark.parametrize(
    "v, w",
    [
        ([1.0, 2.0, 3.0], [4.0, -5.0, 6.0]),
        ([0.0, 0.0, 1.0], [1.0, 0.0, 0.0]),
        ([-2.5, 0.1, 7.0], [0.3, 0.3, -0.9]),
    ],
)
def test_skew_matrix_matches_cross_product(v, w):
    assert np.allclose(skew_matrix(v) @ np.array(w), np.cross(v, w))


def test_skew_matrix_entries_follow_layout():
    s = skew_matrix([1.0, 2.0, 3.0])
    assert s[0, 1] == -3.0
    assert s[1, 0] == 3.0
    assert s[0, 2] == 2.0
    assert s[2, 0] == -2.0
    assert s[1, 2] == -1.0
    assert s[2, 1] == 1.0


def test_skew_matrix_of_vector_annihilates_itself():
    v = np.array([0.7, -0.2, 1.9])
    assert np.allclose(skew_matrix(v) @ v, 0.0)


def test_skew_matrix_rejects_wrong_length():
    with pytest.raises(ValueError):
        skew_matrix([1.0, 2.0])