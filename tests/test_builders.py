import numpy as np
import pytest

from wavebilliard.core.domain import MEDIUM_A, MEDIUM_B, OUTSIDE
from wavebilliard.utils import builders


def test_rectangle():
    assert np.all(builders.rectangle()(np.array([-100.0, 100.0]), np.zeros(2)) == MEDIUM_A)
    classify = builders.rectangle(-1.0, 1.0, -0.5, 0.5)
    assert classify(0.0, 0.0) == MEDIUM_A
    assert classify(0.0, 0.6) == OUTSIDE


def test_ellipse():
    classify = builders.ellipse(2.0, 1.0)
    assert classify(1.9, 0.0) == MEDIUM_A
    assert classify(0.0, 1.1) == OUTSIDE


def test_stadium():
    classify = builders.stadium(lam=1.0, radius=0.5)
    x = np.array([0.0, 1.0, 1.45, 1.45, 0.5])
    y = np.array([0.45, 0.45, 0.0, 0.3, 0.55])
    np.testing.assert_array_equal(classify(x, y), [MEDIUM_A, MEDIUM_A, MEDIUM_A, OUTSIDE, OUTSIDE])


def test_sinai():
    classify = builders.sinai(0.3)
    assert classify(0.0, 0.0) == OUTSIDE
    assert classify(0.5, 0.5) == MEDIUM_A


def test_annulus():
    classify = builders.annulus(1.0, 0.3, shift=0.2)
    assert classify(0.2, 0.0) == OUTSIDE
    assert classify(-0.5, 0.0) == MEDIUM_A
    assert classify(0.0, 1.2) == OUTSIDE
    with pytest.raises(ValueError):
        builders.annulus(0.3, 1.0)


def test_flat_interface():
    classify = builders.flat_interface(0.1)
    X, Y = np.meshgrid([-1.0, 1.0], [-0.5, 0.5], indexing='ij')
    np.testing.assert_array_equal(classify(X, Y), [[MEDIUM_B, MEDIUM_A], [MEDIUM_B, MEDIUM_A]])


def test_young_slits():
    classify = builders.young_slits(width=0.1, separation=0.4, x0=0.5)
    assert classify(0.5, 0.2) == MEDIUM_A
    assert classify(0.5, -0.2) == MEDIUM_A
    assert classify(0.5, 0.0) == OUTSIDE
    assert classify(0.0, 0.0) == MEDIUM_A
    with pytest.raises(ValueError):
        builders.young_slits(width=0.5, separation=0.4)


def test_polygon_square():
    classify = builders.polygon(4, np.sqrt(2.0), np.pi / 4)
    x = np.array([0.9, -0.9, 1.1, 0.0])
    y = np.array([0.9, -0.9, 0.0, -1.1])
    np.testing.assert_array_equal(classify(x, y), [MEDIUM_A, MEDIUM_A, OUTSIDE, OUTSIDE])


def test_polygon_needs_three_vertices():
    with pytest.raises(ValueError):
        builders.polygon(2, 1.0)
