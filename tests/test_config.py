import pytest

from wavebilliard.config import (
    BoundaryCondition, ConfigurationError, FieldFamily, SimulationConfig
)


def test_defaults_are_valid():
    config = SimulationConfig()
    assert config.boundary == BoundaryCondition.DIRICHLET
    assert config.family == FieldFamily.WAVE
    assert config.steps_per_frame == 25


def test_integer_ids_are_converted():
    config = SimulationConfig(boundary=2, family=1)
    assert config.boundary is BoundaryCondition.ABSORBING
    assert config.family is FieldFamily.SCHRODINGER


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


@pytest.mark.parametrize("kwargs", [
    dict(nx=2),
    dict(ny=1),
    dict(xmin=1.0, xmax=1.0),
    dict(ymin=2.0, ymax=-2.0),
    dict(boundary=7),
    dict(family=5),
    dict(dt=0.0),
    dict(hbar=-1.0),
    dict(vmax=0.0),
    dict(steps_per_frame=0),
    dict(family=FieldFamily.SCHRODINGER, boundary=BoundaryCondition.MIXED),
])
def test_invalid_configuration(kwargs):
    with pytest.raises(ConfigurationError):
        SimulationConfig(**kwargs)


def test_frozen():
    config = SimulationConfig()
    with pytest.raises(AttributeError):
        config.nx = 10


def test_derived_steps():
    config = SimulationConfig(nx=5, ny=5, xmin=0.0, xmax=2.0, ymin=0.0, ymax=4.0, dt=0.1, hbar=2.0)
    assert config.dx == pytest.approx(0.5)
    assert config.dy == pytest.approx(1.0)
    assert config.intstep == pytest.approx(0.1 / (0.25 * 2.0))
    assert config.intstep1 == pytest.approx(0.1 / (0.5 * 2.0))
