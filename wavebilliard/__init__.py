from .config import (
    SimulationConfig, Medium, BoundaryCondition, FieldFamily, ConfigurationError
)
from .core import GridGeometry, DomainMask, FieldState, CoefficientGrids, OUTSIDE, MEDIUM_A, MEDIUM_B
from .solvers import WaveStepper, SchrodingerStepper
from .simulation import Simulation, Frame
