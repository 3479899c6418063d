from dataclasses import dataclass
from typing import Callable, Tuple
import numpy as np

from wavebilliard.config import SimulationConfig
from wavebilliard.core.domain import DomainMask, GridGeometry, MEDIUM_A, MEDIUM_B, OUTSIDE


Initializer = Callable[[np.ndarray, np.ndarray], Tuple[np.ndarray, np.ndarray]]


class DoubleBuffer:
    """
    Two ``(phi, psi)`` pairs used in ping-pong fashion.

    A stepper reads the front pair, writes the back pair, then calls
    :meth:`swap`. Between steps the front pair is the settled state.

    Parameters
    ----------
    shape : tuple of int
        Grid shape ``(nx, ny)``.
    """

    def __init__(self, shape: Tuple[int, int]) -> None:
        self.front = (np.zeros(shape), np.zeros(shape))
        self.back = (np.zeros(shape), np.zeros(shape))

    def swap(self) -> None:
        self.front, self.back = self.back, self.front

    def sync(self) -> None:
        """Copy the front pair into the back pair."""
        np.copyto(self.back[0], self.front[0])
        np.copyto(self.back[1], self.front[1])


class FieldState:
    """
    Field of one run: ``phi`` and ``psi`` on every lattice point.

    Wave family: ``phi`` is the displacement at time t, ``psi`` at time t-1.
    Schrödinger family: ``phi`` and ``psi`` are the real and imaginary parts
    of the wavefunction at the same time.

    Parameters
    ----------
    geometry : GridGeometry
        Lattice the field is defined on.
    """

    def __init__(self, geometry: GridGeometry) -> None:
        self.shape = geometry.shape
        self.buffer = DoubleBuffer(self.shape)

    @property
    def phi(self) -> np.ndarray:
        return self.buffer.front[0]

    @property
    def psi(self) -> np.ndarray:
        return self.buffer.front[1]

    def load(self, phi: np.ndarray, psi: np.ndarray) -> None:
        """Overwrite both components, keeping the buffers in sync."""
        phi = np.asarray(phi, dtype=float)
        psi = np.asarray(psi, dtype=float)
        if phi.shape != self.shape or psi.shape != self.shape:
            raise ValueError(f"Field arrays must have shape {self.shape}.")
        np.copyto(self.buffer.front[0], phi)
        np.copyto(self.buffer.front[1], psi)
        self.buffer.sync()

    def inject(
        self,
        initializer: Initializer,
        geometry: GridGeometry,
        region: np.ndarray
    ) -> None:
        """
        Initialize the field from ``initializer(X, Y) -> (phi, psi)``.

        Cells of ``region`` receive the initializer's values; every other
        cell is set to the rest value 0.
        """
        phi, psi = initializer(*geometry.grids)
        self.load(np.where(region, phi, 0.0), np.where(region, psi, 0.0))

    def add(
        self,
        initializer: Initializer,
        geometry: GridGeometry,
        region: np.ndarray,
        factor: float = 1.0
    ) -> None:
        """Add ``factor`` times the displacement of ``initializer`` on ``region``."""
        phi, _ = initializer(*geometry.grids)
        self.load(self.phi + factor * np.where(region, phi, 0.0), self.psi)

    def snapshot(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.phi.copy(), self.psi.copy()


@dataclass(frozen=True)
class CoefficientGrids:
    """
    Per-cell physical coefficients, read-only during stepping.

    Attributes
    ----------
    speed : np.ndarray
        Courant number ``tc`` of each cell.
    speed_squared : np.ndarray
        ``tc**2``, the factor in front of the discrete Laplacian.
    damping : np.ndarray
        Damping factor ``gamma`` of each cell.
    elasticity : np.ndarray
        Restoring term ``kappa`` of each cell.
    """
    speed: np.ndarray
    speed_squared: np.ndarray
    damping: np.ndarray
    elasticity: np.ndarray

    @classmethod
    def from_domain(cls, mask: DomainMask, config: SimulationConfig) -> 'CoefficientGrids':
        """
        Build the grids from the mask.

        Medium A and B cells take their medium's coefficients. Outside cells
        take the outside regime when ``config.two_speeds`` is set and zero
        otherwise, since they are never stencil centres then.
        """
        regimes = [(mask.medium(MEDIUM_A), config.medium_a),
                   (mask.medium(MEDIUM_B), config.medium_b)]
        if config.two_speeds:
            regimes.append((mask.medium(OUTSIDE), config.medium_outside))

        grids = {name: np.zeros(mask.shape) for name in ('courant', 'gamma', 'kappa')}
        for region, medium in regimes:
            for name, grid in grids.items():
                grid[region] = getattr(medium, name)

        for grid in grids.values():
            grid.setflags(write=False)
        speed_squared = grids['courant'] ** 2
        speed_squared.setflags(write=False)

        return cls(
            speed=grids['courant'],
            speed_squared=speed_squared,
            damping=grids['gamma'],
            elasticity=grids['kappa']
        )
