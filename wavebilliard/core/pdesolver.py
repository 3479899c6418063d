import numpy as np

from wavebilliard.config import SimulationConfig
from wavebilliard.core.domain import DomainMask
from wavebilliard.core.field import FieldState


class StencilStepper:
    """
    Base class for the explicit finite-difference steppers.

    Binds the domain and the run configuration, and drives the ping-pong
    update of a :class:`FieldState`: each half step reads the front buffer,
    writes the back buffer through :meth:`_kernel`, then swaps. The boundary
    variant is resolved once, at construction, by the child classes.

    Parameters
    ----------
    domain : DomainMask
        Classification of the grid cells.
    config : SimulationConfig
        Validated run configuration.

    Attributes
    ----------
    active : np.ndarray
        Boolean array of the cells used as stencil centres.
    time : int
        Number of half steps performed.
    """

    def __init__(self, domain: DomainMask, config: SimulationConfig) -> None:
        self.domain = domain
        self.config = config
        self.name = 'Stepper'
        self.active = domain.inside
        self.time = 0

    def half_step(self, state: FieldState) -> None:
        """Advance the field by one stencil application."""
        if state.shape != self.domain.shape:
            raise ValueError(
                f"Field shape {state.shape} does not match domain {self.domain.shape}."
            )
        self.time += 1
        (phi, psi), (phi_out, psi_out) = state.buffer.front, state.buffer.back
        self._kernel(phi, psi, phi_out, psi_out)
        state.buffer.swap()

    def step(self, state: FieldState) -> None:
        """Advance the field by one time step (two half steps)."""
        self.half_step(state)
        self.half_step(state)

    def advance(self, state: FieldState, n: int) -> None:
        for _ in range(n):
            self.step(state)

    def _kernel(
        self,
        phi: np.ndarray,
        psi: np.ndarray,
        phi_out: np.ndarray,
        psi_out: np.ndarray
    ) -> None:
        """Write the updated field into the output arrays. Implemented by child classes."""
        raise NotImplementedError("Child stepper must implement its own stencil kernel.")
