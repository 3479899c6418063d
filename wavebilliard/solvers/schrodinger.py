import numpy as np

from wavebilliard.config import SimulationConfig
from wavebilliard.core import StencilStepper
from wavebilliard.core.domain import DomainMask
from wavebilliard.solvers.stencils import schrodinger_half_step


class SchrodingerStepper(StencilStepper):
    """
    Explicit solver for the Schrödinger equation in a billiard.

    ``phi`` and ``psi`` are the real and imaginary parts of the wavefunction
    at the same time. A half step computes

        phi' = phi - intstep * Lap(psi)
        psi' = psi + intstep * Lap(phi)

    with ``intstep = DT / (DX² · HBAR)``, reading only the current buffer.
    A full step alternates the roles of the two buffers twice.

    Parameters
    ----------
    domain : DomainMask
        Classification of the grid cells. Outside cells are never updated.
    config : SimulationConfig
        Run configuration (Dirichlet, periodic or absorbing boundaries).

    Attributes
    ----------
    intstep : float
        Integration step of the bulk update.
    intstep1 : float
        Integration step of the absorbing border update, DT / (DX · HBAR).
    """

    def __init__(self, domain: DomainMask, config: SimulationConfig) -> None:
        super().__init__(domain, config)
        self.name = 'Schrodinger'

        self.boundary = config.boundary
        self.intstep = config.intstep
        self.intstep1 = config.intstep1

    def _kernel(self, phi, psi, phi_out, psi_out) -> None:
        schrodinger_half_step(
            np, phi, psi, phi_out, psi_out,
            active=self.active,
            boundary=self.boundary,
            intstep=self.intstep,
            intstep1=self.intstep1,
            floor=self.config.floor,
            vmax=self.config.vmax
        )
