import numpy as np
import plotly.graph_objects as go

from wavebilliard import Simulation, SimulationConfig
from wavebilliard.components import Probe
from wavebilliard.config import FieldFamily
from wavebilliard.ics import coherent_state, drop
from wavebilliard.utils.builders import stadium
from wavebilliard.visualization import PhysicsAnimator


def animation_config(**kwargs):
    return SimulationConfig(nx=40, ny=24, steps_per_frame=2, **kwargs)


def test_animation_of_wave_frames(tmp_path):
    sim = Simulation(animation_config(), stadium(1.0, 0.8), drop(0.0, 0.0, width=0.02))
    sim.add_probe(Probe(pos=[0.3, 0.1], tag="mic"))
    animator = PhysicsAnimator(sim, n_frames=4)
    animator.run()

    assert len(animator.history) == 4
    assert animator.time_steps == [0, 1, 2, 3]
    assert np.all(np.isnan(animator.history[0][~sim.domain.inside]))

    filename = tmp_path / "billiard.html"
    fig = animator.create_animation(skip_frames=2, skip_spatial=2, filename=str(filename))

    assert isinstance(fig, go.Figure)
    assert len(fig.frames) == 2
    assert len(fig.data) == 2
    assert filename.exists()


def test_displayed_values_are_scaled():
    sim = Simulation(animation_config(), stadium(1.0, 0.8), drop(0.0, 0.0, width=0.02))
    animator = PhysicsAnimator(sim, n_frames=1)
    frame = sim.next_frame()
    values = animator.render(frame)
    inside = sim.domain.inside
    np.testing.assert_allclose(values[inside], frame.phi[inside] / frame.scale)


def test_schrodinger_shows_density():
    config = animation_config(family=FieldFamily.SCHRODINGER)
    sim = Simulation(config, stadium(1.0, 0.8), coherent_state(0.0, 0.0, 1.0, 0.0, 0.3))
    animator = PhysicsAnimator(sim, n_frames=1)
    frame = sim.next_frame()
    values = animator.render(frame)
    assert np.nanmin(values) >= 0.0


def test_no_data(capsys):
    sim = Simulation(animation_config(), stadium(1.0, 0.8), drop(0.0, 0.0))
    assert PhysicsAnimator(sim, n_frames=2).create_animation() is None
    assert "No data" in capsys.readouterr().out
