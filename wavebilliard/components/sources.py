from typing import List, Tuple, Union
import numpy as np

from wavebilliard.core.domain import DomainMask
from wavebilliard.core.field import FieldState
from wavebilliard.ics import circular_wave


class DropSource:
    """
    Source adding a circular wave at a fixed point every few frames.

    Parameters
    ----------
    pos : list of float
        Physical position ``[x, y]`` of the drops.
    period : int
        Number of frames between two drops. A drop falls at the end of
        frames ``period-1``, ``2*period-1``, ...
    factor : float, default=1.0
        Prefactor of the added wave; negative values invert it.
    """

    def __init__(
        self,
        pos: Union[Tuple[float, float], List[float]],
        period: int,
        factor: float = 1.0
    ) -> None:
        if period < 1:
            raise ValueError("period must be at least 1 frame.")
        self.pos = np.atleast_1d(np.array(pos, dtype=float))
        self.period = period
        self.factor = factor
        self.count = 0

    def register(self, domain: DomainMask) -> None:
        if not domain.contains(self.pos[0], self.pos[1]):
            print(f"⚠️ Warning: Source at {self.pos} is outside the domain!")

    def is_due(self, frame: int) -> bool:
        return frame % self.period == self.period - 1

    def fire(self, state: FieldState, domain: DomainMask, region: np.ndarray) -> None:
        """Add one drop to the field on ``region``."""
        state.add(circular_wave(self.pos[0], self.pos[1]), domain.geometry, region, self.factor)
        self.count += 1
