"""Aggregate quantities of the field over the billiard."""
import numpy as np

from wavebilliard.config import FieldFamily
from wavebilliard.core.domain import DomainMask
from wavebilliard.core.field import CoefficientGrids, FieldState


def variance(state: FieldState, mask: DomainMask, family: FieldFamily = FieldFamily.WAVE) -> float:
    """
    Mean squared amplitude over the cells inside the billiard.

    Uses ``phi²`` for the wave family and ``phi² + psi²`` (total probability
    density) for the Schrödinger family. The sum is divided by
    ``max(1, count)``, so a mask without inside cells gives 0.
    """
    inside = mask.inside
    total = np.sum(state.phi[inside] ** 2)
    if family == FieldFamily.SCHRODINGER:
        total += np.sum(state.psi[inside] ** 2)
    return float(total / max(1, mask.count))


def display_scale(field_variance: float) -> float:
    """Factor the renderer divides amplitudes by: sqrt(1 + variance)."""
    return float(np.sqrt(1.0 + field_variance))


def renormalize(state: FieldState, mask: DomainMask, field_variance: float) -> None:
    """
    Divide the field on every inside cell by ``sqrt(field_variance)``.

    Keeps the total probability of a Schrödinger field close to 1 despite
    the drift of the explicit scheme. This is a global rescaling, not a
    unitary correction. A non-positive variance leaves the field unchanged.
    """
    if field_variance <= 0:
        return
    stdv = np.sqrt(field_variance)
    inside = mask.inside
    state.load(np.where(inside, state.phi / stdv, state.phi),
               np.where(inside, state.psi / stdv, state.psi))


def energy_density(state: FieldState, coefficients: CoefficientGrids) -> np.ndarray:
    """
    Local energy of a wave field.

    ``(phi - psi)² + ½ c² (|∇x phi|² + |∇y phi|²)``, where each squared
    gradient sums the forward and backward differences and neighbours are
    clamped at the edges of the grid.
    """
    phi, psi = state.phi, state.psi
    p = np.pad(phi, 1, mode='edge')

    velocity = phi - psi
    gradientx2 = (p[2:, 1:-1] - phi) ** 2 + (phi - p[:-2, 1:-1]) ** 2
    gradienty2 = (p[1:-1, 2:] - phi) ** 2 + (phi - p[1:-1, :-2]) ** 2

    return velocity ** 2 + 0.5 * coefficients.speed_squared * (gradientx2 + gradienty2)


def total_energy(state: FieldState, mask: DomainMask, coefficients: CoefficientGrids) -> float:
    return float(np.sum(energy_density(state, coefficients)[mask.inside]))
