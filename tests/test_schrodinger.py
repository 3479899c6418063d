import numpy as np
import pytest

from wavebilliard.config import BoundaryCondition, FieldFamily, SimulationConfig
from wavebilliard.core import statistics
from wavebilliard.core.domain import DomainMask, GridGeometry
from wavebilliard.core.field import FieldState
from wavebilliard.ics import coherent_state
from wavebilliard.solvers import SchrodingerStepper
from wavebilliard.utils.builders import ellipse, rectangle


def schrodinger_config(nx=5, ny=5, **kwargs):
    # unit spacing, intstep = intstep1 = 0.1
    return SimulationConfig(
        nx=nx, ny=ny, xmin=0.0, xmax=nx - 1.0, ymin=0.0, ymax=ny - 1.0,
        family=FieldFamily.SCHRODINGER, dt=0.1, hbar=1.0, **kwargs
    )


def build(config, classify=None):
    geometry = GridGeometry.from_config(config)
    if classify is None:
        mask = DomainMask.full(geometry)
    else:
        mask = DomainMask.from_classifier(geometry, classify)
    return geometry, mask, FieldState(geometry), SchrodingerStepper(mask, config)


def test_half_step_formula():
    config = schrodinger_config()
    _, _, state, stepper = build(config)
    assert stepper.intstep == pytest.approx(0.1)

    phi = np.zeros(state.shape)
    phi[2, 2] = 1.0
    state.load(phi, np.zeros(state.shape))
    stepper.half_step(state)

    expected_psi = np.zeros(state.shape)
    expected_psi[2, 2] = -0.4
    for i, j in [(1, 2), (3, 2), (2, 1), (2, 3)]:
        expected_psi[i, j] = 0.1

    np.testing.assert_allclose(state.phi, phi)
    np.testing.assert_allclose(state.psi, expected_psi, atol=1e-15)


def test_periodic_neighbours_wrap(rng):
    config = schrodinger_config(boundary=BoundaryCondition.PERIODIC)
    _, _, state, stepper = build(config)
    phi = rng.normal(size=state.shape)
    psi = rng.normal(size=state.shape)
    state.load(phi, psi)
    stepper.half_step(state)

    def lap(u):
        return (np.roll(u, 1, 0) + np.roll(u, -1, 0)
                + np.roll(u, 1, 1) + np.roll(u, -1, 1) - 4 * u)

    np.testing.assert_allclose(state.phi, phi - 0.1 * lap(psi), atol=1e-12)
    np.testing.assert_allclose(state.psi, psi + 0.1 * lap(phi), atol=1e-12)


def test_absorbing_border_precedence(rng):
    config = schrodinger_config(boundary=BoundaryCondition.ABSORBING)
    _, _, state, stepper = build(config)
    phi = rng.normal(size=state.shape)
    psi = rng.normal(size=state.shape)
    state.load(phi, psi)
    stepper.half_step(state)

    # bottom-left corner: the left border wins over the bottom one
    assert state.psi[0, 0] == pytest.approx(psi[0, 0] + 0.1 * (phi[0, 0] - phi[1, 0]))
    # bottom-right corner: the right border wins
    assert state.phi[-1, 0] == pytest.approx(phi[-1, 0] - 0.1 * (psi[-1, 0] - psi[-2, 0]))
    # top-left corner: the top border wins over the left one
    assert state.phi[0, -1] == pytest.approx(phi[0, -1] - 0.1 * (psi[0, -1] - psi[0, -2]))
    # top-right corner: the right border wins over the top one
    assert state.psi[-1, -1] == pytest.approx(psi[-1, -1] + 0.1 * (phi[-1, -1] - phi[-2, -1]))


@pytest.mark.parametrize("boundary", [
    BoundaryCondition.DIRICHLET, BoundaryCondition.PERIODIC, BoundaryCondition.ABSORBING
])
def test_outside_cells_are_never_written(boundary, rng):
    config = schrodinger_config(nx=16, ny=12, boundary=boundary)
    _, mask, state, stepper = build(config, rectangle(xmax=8.5, ymin=-1.0, ymax=20.0))
    outside = ~mask.inside

    phi0 = rng.normal(size=state.shape)
    psi0 = rng.normal(size=state.shape)
    state.load(phi0, psi0)
    stepper.advance(state, 3)

    np.testing.assert_array_equal(state.phi[outside], phi0[outside])
    np.testing.assert_array_equal(state.psi[outside], psi0[outside])


def test_periodic_rest_state():
    config = schrodinger_config(boundary=BoundaryCondition.PERIODIC)
    _, _, state, stepper = build(config)
    stepper.advance(state, 10)
    assert not state.phi.any()
    assert not state.psi.any()


def test_renormalized_packet_stays_bounded():
    config = SimulationConfig(nx=64, ny=48, family=FieldFamily.SCHRODINGER, dt=1.0e-6)
    geometry = GridGeometry.from_config(config)
    mask = DomainMask.from_classifier(geometry, ellipse(1.8, 1.0))
    state = FieldState(geometry)
    stepper = SchrodingerStepper(mask, config)
    state.inject(coherent_state(-0.5, 0.0, 2.0, 0.0, 0.2), geometry, mask.inside)
    assert stepper.intstep < 0.25

    for _ in range(5):
        v = statistics.variance(state, mask, FieldFamily.SCHRODINGER)
        statistics.renormalize(state, mask, v)
        assert statistics.variance(state, mask, FieldFamily.SCHRODINGER) == pytest.approx(1.0)
        stepper.advance(state, 10)

    assert np.all(np.isfinite(state.phi))
    assert np.all(np.isfinite(state.psi))
