from typing import Optional
import numpy as np

from wavebilliard.config import SimulationConfig
from wavebilliard.core import StencilStepper
from wavebilliard.core.domain import DomainMask
from wavebilliard.core.field import CoefficientGrids
from wavebilliard.solvers.stencils import EDGE_UPDATES, EdgeCoefficients, wave_half_step


class WaveStepper(StencilStepper):
    """
    Explicit solver for the damped wave equation in a billiard.

    Solves ∂²u/∂t² = c²∇²u − κu − γ∂u/∂t with a leapfrog scheme in lattice
    units: ``phi`` holds u at time t and ``psi`` at time t-1. Interior cells
    use the 5-point Laplacian; the four grid edges use the formula of the
    configured boundary variant (Dirichlet, periodic, absorbing or mixed).

    Parameters
    ----------
    domain : DomainMask
        Classification of the grid cells.
    config : SimulationConfig
        Run configuration. With ``two_speeds`` every cell is stepped, the
        outside taking the coefficients of ``config.medium_outside``.
    coefficients : CoefficientGrids, optional
        Per-cell coefficients. Built from the domain if omitted.

    Attributes
    ----------
    coefficients : CoefficientGrids
        Read-only Courant number, damping and elasticity grids.
    edges : EdgeCoefficients
        Coefficients of the absorbing edge formulas.
    """

    def __init__(
        self,
        domain: DomainMask,
        config: SimulationConfig,
        coefficients: Optional[CoefficientGrids] = None
    ) -> None:
        super().__init__(domain, config)
        self.name = 'Wave'

        if config.two_speeds:
            self.active = np.ones(domain.shape, dtype=bool)

        if coefficients is None:
            coefficients = CoefficientGrids.from_domain(domain, config)
        self.coefficients = coefficients
        self.edge_update = EDGE_UPDATES[config.boundary]
        self.edges = EdgeCoefficients(
            config.kappa_sides, config.gamma_sides,
            config.kappa_topbot, config.gamma_topbot
        )

    def drive(self) -> Optional[float]:
        """Value imposed on the left edge at the current time, if any."""
        if not self.config.oscillate_left:
            return None
        return self.config.amplitude * np.cos(self.time * self.config.omega)

    def _kernel(self, phi, psi, phi_out, psi_out) -> None:
        wave_half_step(
            np, phi, psi, phi_out, psi_out,
            active=self.active,
            inside=self.domain.inside,
            coefficients=self.coefficients,
            edge_update=self.edge_update,
            edges=self.edges,
            floor=self.config.floor,
            vmax=self.config.vmax,
            drive=self.drive()
        )
