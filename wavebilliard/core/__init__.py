from .domain import GridGeometry, DomainMask, OUTSIDE, MEDIUM_A, MEDIUM_B
from .field import DoubleBuffer, FieldState, CoefficientGrids
from .pdesolver import StencilStepper
from . import statistics
