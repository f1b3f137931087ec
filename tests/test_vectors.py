import numpy as np
import pytest

from vectors import distance, accumulate, scale


def test_distance():
    assert distance(np.array([0.0, 0.0]), np.array([3.0, 4.0])) == pytest.approx(5.0)
    assert distance([1, 2, 3], [1, 2, 3]) == 0.0


def test_distance_is_symmetric():
    a = np.array([1.5, -2.0, 7.0])
    b = np.array([0.0, 4.0, -1.0])
    assert distance(a, b) == pytest.approx(distance(b, a))


def test_distance_different_dimensions():
    with pytest.raises(ValueError):
        distance([1.0, 2.0], [1.0, 2.0, 3.0])


def test_accumulate_in_place():
    target = np.array([1.0, 2.0])
    accumulate(target, np.array([0.5, -3.0]))
    np.testing.assert_allclose(target, [1.5, -1.0])


def test_accumulate_row_view():
    matrix = np.zeros((2, 3))
    accumulate(matrix[1], [1.0, 2.0, 3.0])
    np.testing.assert_allclose(matrix, [[0, 0, 0], [1, 2, 3]])


def test_accumulate_different_dimensions():
    with pytest.raises(ValueError):
        accumulate(np.zeros(2), np.ones(3))


def test_scale_in_place():
    target = np.array([2.0, -4.0, 1.0])
    scale(target, 0.5)
    np.testing.assert_allclose(target, [1.0, -2.0, 0.5])
