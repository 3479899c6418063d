from typing import Optional, Tuple, Union, List
import numpy as np

from wavebilliard.core.domain import DomainMask
from wavebilliard.core.field import FieldState


class Probe:
    """
    Point receiver recording the field over time.

    Parameters
    ----------
    pos : list of float
        Physical position ``[x, y]``.
    tag : str, default='probe'
        Label for plotting and debugging.

    Attributes
    ----------
    grid_idx : tuple of int or None
        Grid index assigned upon registration.
    history : list of float
        Recorded values of ``phi``.
    times : list of int
        Half-step counters of the recordings.
    """

    def __init__(self, pos: Union[Tuple[float, float], List[float]], tag: str = 'probe') -> None:
        self.pos = np.atleast_1d(np.array(pos, dtype=float))
        self.tag = tag
        self.grid_idx: Optional[Tuple[int, int]] = None
        self.history: List[float] = []
        self.times: List[int] = []

    def register(self, domain: DomainMask) -> None:
        """Calculates the grid index from the domain geometry."""
        self.grid_idx = domain.geometry.to_index(self.pos[0], self.pos[1])

        if not domain.inside[self.grid_idx]:
            print(f"⚠️ Warning: Probe '{self.tag}' at {self.pos} is outside the domain!")

    def reset(self) -> None:
        """Clear recorded data for a new simulation run."""
        self.history = []
        self.times = []

    def record(self, time: int, state: FieldState) -> None:
        if self.grid_idx is None:
            raise ValueError(f"Probe '{self.tag}' has not been registered with a domain.")

        self.history.append(float(state.phi[self.grid_idx]))
        self.times.append(time)

    def get_time_series(self) -> Tuple[np.ndarray, np.ndarray]:
        return np.array(self.times), np.array(self.history)

    def compute_spectrum(self) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
        """
        Compute the amplitude spectrum using a real FFT.

        Frequencies are in cycles per recording interval.
        """
        times, signal = self.get_time_series()
        n = len(signal)
        if n < 2:
            return None, None

        dt = np.mean(np.diff(times))
        fft_data = np.fft.rfft(signal)
        freqs = np.fft.rfftfreq(n, d=dt)

        return freqs, np.abs(fft_data)
