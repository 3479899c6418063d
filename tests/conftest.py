"""Test configuration for wavebilliard."""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from wavebilliard.config import Medium, SimulationConfig
from wavebilliard.core.domain import DomainMask, GridGeometry, MEDIUM_A, OUTSIDE


@pytest.fixture
def make_config():
    """Factory of unit-spacing configurations with both media at the same Courant number."""
    def factory(nx=10, ny=10, courant=0.3, gamma=0.0, kappa=0.0, **kwargs):
        medium = Medium(courant, gamma, kappa)
        return SimulationConfig(
            nx=nx, ny=ny, xmin=0.0, xmax=nx - 1.0, ymin=0.0, ymax=ny - 1.0,
            medium_a=medium, medium_b=medium, **kwargs
        )

    return factory


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def geometry():
    return GridGeometry(20, 12, -1.0, 1.0, -0.5, 0.5)


@pytest.fixture
def half_classifier():
    """Left part of the rectangle inside, right part outside."""
    return lambda x, y: np.where(x + 0 * y < 0.3, MEDIUM_A, OUTSIDE)


@pytest.fixture
def half_mask(geometry, half_classifier):
    return DomainMask.from_classifier(geometry, half_classifier)
