import numpy as np
import pytest

from wavebilliard.components import DropSource, Probe
from wavebilliard.core.domain import DomainMask
from wavebilliard.core.field import FieldState
from wavebilliard.utils.utils import find_first_arrival, travel_time


def test_probe_records_its_cell(geometry, half_mask):
    probe = Probe(pos=[geometry.x[2], geometry.y[7]], tag="mic")
    probe.register(half_mask)
    assert probe.grid_idx == (2, 7)

    state = FieldState(geometry)
    phi = np.zeros(geometry.shape)
    phi[2, 7] = 0.25
    state.load(phi, phi)

    probe.record(1, state)
    probe.record(2, state)
    times, signal = probe.get_time_series()
    np.testing.assert_array_equal(times, [1, 2])
    np.testing.assert_allclose(signal, [0.25, 0.25])

    probe.reset()
    assert probe.history == []
    assert probe.times == []


def test_unregistered_probe_raises(geometry):
    with pytest.raises(ValueError):
        Probe(pos=[0.0, 0.0]).record(0, FieldState(geometry))


def test_probe_outside_warns(half_mask, capsys):
    Probe(pos=[0.9, 0.0], tag="far").register(half_mask)
    assert "outside the domain" in capsys.readouterr().out


def test_probe_spectrum():
    probe = Probe(pos=[0.0, 0.0])
    probe.times = list(range(0, 256, 2))
    probe.history = list(np.sin(2 * np.pi * 0.05 * np.arange(0, 256, 2)))

    freqs, magnitude = probe.compute_spectrum()
    assert freqs[np.argmax(magnitude)] == pytest.approx(0.05, abs=1.0 / 256)


def test_spectrum_needs_two_samples():
    assert Probe(pos=[0.0, 0.0]).compute_spectrum() == (None, None)


def test_drop_source(geometry):
    mask = DomainMask.full(geometry)
    state = FieldState(geometry)
    source = DropSource(pos=[0.0, 0.0], period=3, factor=-1.0)
    source.register(mask)

    assert [f for f in range(9) if source.is_due(f)] == [2, 5, 8]

    source.fire(state, mask, mask.inside)
    assert source.count == 1
    assert state.phi.min() < 0
    assert not state.psi.any()


def test_drop_source_period():
    with pytest.raises(ValueError):
        DropSource(pos=[0.0, 0.0], period=0)


def test_first_arrival():
    signal = np.zeros(200)
    signal[40] = -0.5
    signal[120] = 1.0
    assert find_first_arrival(signal) == 40
    assert find_first_arrival(signal, threshold_ratio=0.6) == 120


def test_first_arrival_falls_back_to_maximum():
    signal = np.linspace(0.0, 1.0, 50)
    assert find_first_arrival(signal) == 49


def test_travel_time():
    assert travel_time(10.0, 0.5, 0.1) == pytest.approx(200.0)
