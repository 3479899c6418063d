from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union


class ConfigurationError(ValueError):
    """Raised when a simulation is set up with invalid parameters."""


class BoundaryCondition(IntEnum):
    """Boundary-condition variants applied on the edges of the grid."""
    DIRICHLET = 0
    PERIODIC = 1
    ABSORBING = 2
    MIXED = 3       # periodic vertically, absorbing on the left and right edges


class FieldFamily(IntEnum):
    WAVE = 0
    SCHRODINGER = 1


@dataclass(frozen=True)
class Medium:
    """
    Physical coefficients of one propagation regime.

    Parameters
    ----------
    courant : float
        Courant number c*DT/DX of the regime.
    gamma : float
        Damping factor (physical damping is gamma/DT**2).
    kappa : float
        "Elasticity" restoring term enforcing oscillations.
    """
    courant: float = 0.01
    gamma: float = 0.0
    kappa: float = 0.0


@dataclass(frozen=True)
class SimulationConfig:
    """
    Run-wide settings, fixed at setup.

    Parameters
    ----------
    nx, ny : int
        Number of grid points along x and y.
    xmin, xmax, ymin, ymax : float
        Physical rectangle mapped onto the grid.
    family : FieldFamily or int
        Wave equation or Schrödinger equation.
    boundary : BoundaryCondition or int
        Boundary-condition variant on the grid edges.
    medium_a, medium_b : Medium
        Coefficients of the two media inside the billiard.
    medium_outside : Medium
        Coefficients of the outside regime, only used when ``two_speeds`` is set.
    kappa_sides, gamma_sides : float
        Coefficients of the absorbing update on the left and right edges.
    kappa_topbot, gamma_topbot : float
        Coefficients of the absorbing update on the top and bottom edges.
    two_speeds : bool
        Replace the hard billiard wall by a medium with a different speed.
    floor : bool
        Clamp the field into [-vmax, vmax] after each half step (debugging only).
    vmax : float
        Clamp bound used when ``floor`` is set.
    dt, hbar : float
        Time increment and Planck constant of the Schrödinger family.
    steps_per_frame : int
        Stencil steps performed between two frames.
    scale : bool
        Adjust the display scale to the variance of the field.
    renormalize : bool
        Divide the Schrödinger field by its standard deviation every frame.
    oscillate_left : bool
        Drive the left edge of the wave field with ``amplitude*cos(omega*t)``.
    omega, amplitude : float
        Frequency and amplitude of the left-edge excitation.
    """
    nx: int = 640
    ny: int = 360
    xmin: float = -2.0
    xmax: float = 2.0
    ymin: float = -1.125
    ymax: float = 1.125

    family: Union[FieldFamily, int] = FieldFamily.WAVE
    boundary: Union[BoundaryCondition, int] = BoundaryCondition.DIRICHLET

    medium_a: Medium = field(default_factory=lambda: Medium(0.01, 0.0, 0.0))
    medium_b: Medium = field(default_factory=lambda: Medium(0.01, 1.0e-7, 0.0))
    medium_outside: Medium = field(default_factory=lambda: Medium(0.03, 1.0e-7, 0.0))

    kappa_sides: float = 5.0e-4
    gamma_sides: float = 1.0e-4
    kappa_topbot: float = 0.0
    gamma_topbot: float = 1.0e-7

    two_speeds: bool = False
    floor: bool = False
    vmax: float = 10.0

    dt: float = 1.0e-8
    hbar: float = 1.0

    steps_per_frame: int = 25
    scale: bool = True
    renormalize: bool = True

    oscillate_left: bool = False
    omega: float = 0.005
    amplitude: float = 0.8

    def __post_init__(self) -> None:
        if self.nx < 3 or self.ny < 3:
            raise ConfigurationError(
                f"Grid must be at least 3x3, got {self.nx}x{self.ny}."
            )
        if not (self.xmax > self.xmin and self.ymax > self.ymin):
            raise ConfigurationError(
                f"Empty physical rectangle [{self.xmin}, {self.xmax}] x [{self.ymin}, {self.ymax}]."
            )

        try:
            boundary = BoundaryCondition(self.boundary)
        except ValueError:
            raise ConfigurationError(f"Unknown boundary condition id: {self.boundary!r}") from None
        try:
            family = FieldFamily(self.family)
        except ValueError:
            raise ConfigurationError(f"Unknown field family: {self.family!r}") from None

        # frozen dataclass: normalize plain ints into the enums
        object.__setattr__(self, 'boundary', boundary)
        object.__setattr__(self, 'family', family)

        if family == FieldFamily.SCHRODINGER and boundary == BoundaryCondition.MIXED:
            raise ConfigurationError(
                "The Schrödinger family supports Dirichlet, periodic and absorbing boundaries only."
            )
        if self.dt <= 0 or self.hbar <= 0:
            raise ConfigurationError("dt and hbar must be positive.")
        if self.vmax <= 0:
            raise ConfigurationError("vmax must be positive.")
        if self.steps_per_frame < 1:
            raise ConfigurationError("steps_per_frame must be at least 1.")

    @property
    def dx(self) -> float:
        return (self.xmax - self.xmin) / (self.nx - 1)

    @property
    def dy(self) -> float:
        return (self.ymax - self.ymin) / (self.ny - 1)

    @property
    def intstep(self) -> float:
        """Schrödinger integration step DT/(DX^2 * HBAR)."""
        return self.dt / (self.dx * self.dx * self.hbar)

    @property
    def intstep1(self) -> float:
        """Integration step of the absorbing Schrödinger border, DT/(DX * HBAR)."""
        return self.dt / (self.dx * self.hbar)
