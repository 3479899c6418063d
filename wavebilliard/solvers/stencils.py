"""
Stencil kernels for the wave and Schrödinger families.

The kernels are pure functions of their inputs, written against an array
module ``xp`` so the same code runs eagerly on numpy arrays and under
``jax.jit`` on JAX arrays. With numpy the output arrays are written in
place; with JAX they are rebuilt with ``.at[].set``.

Every half step writes every cell of the output pair: active cells get the
stencil update, the others a copy of their input value.
"""
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple
import numpy as np

from wavebilliard.config import BoundaryCondition
from wavebilliard.core.field import CoefficientGrids


Index = Tuple
Update = Tuple[Index, object]

INTERIOR = (slice(1, -1), slice(1, -1))
LEFT = (0, slice(1, -1))
RIGHT = (-1, slice(1, -1))
TOP = (slice(None), -1)
BOTTOM = (slice(None), 0)


class EdgeCoefficients(NamedTuple):
    kappa_sides: float
    gamma_sides: float
    kappa_topbot: float
    gamma_topbot: float


def _assign(arr, index, value):
    """Write ``value`` at ``index``: in place for numpy, functional update for JAX."""
    if isinstance(arr, np.ndarray):
        arr[index] = value
        return arr
    return arr.at[index].set(value)


def _floor(xp, arr, inside, vmax: float):
    return xp.where(inside, xp.clip(arr, -vmax, vmax), arr)


def leapfrog(x, y, delta, tcc, kappa, gamma):
    """Damped leapfrog update of u'' = c^2 Lap(u) - kappa u - gamma u'."""
    return -y + 2 * x + tcc * delta - kappa * x - gamma * (x - y)


def one_sided(x, y, inward, tc, kappa, gamma):
    """
    First-order outgoing-wave update.

    Upwind discretization of u_t + c u_n = 0 towards the neighbour inside
    the grid. This only approximates an absorbing boundary: waves hitting
    the edge at an angle, or with short wavelengths, are partly reflected.
    """
    return x - tc * (x - inward) - kappa * x - gamma * (x - y)


def _clamped(xp, row):
    """Neighbours along a row with indices clamped into the grid."""
    plus = xp.concatenate([row[1:], row[-1:]])
    minus = xp.concatenate([row[:1], row[:-1]])
    return plus, minus


def _wrapped(xp, row):
    return xp.roll(row, -1), xp.roll(row, 1)


# ---------------------------------------------------------------------------
# Edge passes. Each returns the updates of phi in the order they are written:
# left and right columns (without corners), then top and bottom rows (with
# corners), so corners always get the top/bottom formula.
# ---------------------------------------------------------------------------

def dirichlet_edges(xp, phi, psi, c: CoefficientGrids, e: EdgeCoefficients) -> List[Update]:
    def lf(index, delta):
        return leapfrog(phi[index], psi[index], delta,
                        c.speed_squared[index], c.elasticity[index], c.damping[index])

    left = phi[1, 1:-1] + phi[0, 2:] + phi[0, :-2] - 3.0 * phi[LEFT]
    right = phi[-2, 1:-1] + phi[-1, 2:] + phi[-1, :-2] - 3.0 * phi[RIGHT]

    plus, minus = _clamped(xp, phi[TOP])
    top = plus + minus + phi[:, -2] - 3.0 * phi[TOP]
    plus, minus = _clamped(xp, phi[BOTTOM])
    bottom = plus + minus + phi[:, 1] - 3.0 * phi[BOTTOM]

    return [(LEFT, lf(LEFT, left)), (RIGHT, lf(RIGHT, right)),
            (TOP, lf(TOP, top)), (BOTTOM, lf(BOTTOM, bottom))]


def periodic_edges(xp, phi, psi, c: CoefficientGrids, e: EdgeCoefficients) -> List[Update]:
    def lf(index, delta):
        return leapfrog(phi[index], psi[index], delta,
                        c.speed_squared[index], c.elasticity[index], c.damping[index])

    left = phi[1, 1:-1] + phi[-1, 1:-1] + phi[0, 2:] + phi[0, :-2] - 4.0 * phi[LEFT]
    right = phi[-2, 1:-1] + phi[0, 1:-1] + phi[-1, 2:] + phi[-1, :-2] - 4.0 * phi[RIGHT]

    plus, minus = _wrapped(xp, phi[TOP])
    top = plus + minus + phi[:, -2] + phi[:, 0] - 4.0 * phi[TOP]
    plus, minus = _wrapped(xp, phi[BOTTOM])
    bottom = plus + minus + phi[:, 1] + phi[:, -1] - 4.0 * phi[BOTTOM]

    return [(LEFT, lf(LEFT, left)), (RIGHT, lf(RIGHT, right)),
            (TOP, lf(TOP, top)), (BOTTOM, lf(BOTTOM, bottom))]


def _absorbing_sides(phi, psi, c: CoefficientGrids, e: EdgeCoefficients) -> List[Update]:
    left = one_sided(phi[LEFT], psi[LEFT], phi[1, 1:-1],
                     c.speed[LEFT], e.kappa_sides, e.gamma_sides)
    right = one_sided(phi[RIGHT], psi[RIGHT], phi[-2, 1:-1],
                      c.speed[RIGHT], e.kappa_sides, e.gamma_sides)
    return [(LEFT, left), (RIGHT, right)]


def absorbing_edges(xp, phi, psi, c: CoefficientGrids, e: EdgeCoefficients) -> List[Update]:
    top = one_sided(phi[TOP], psi[TOP], phi[:, -2],
                    c.speed[TOP], e.kappa_topbot, e.gamma_topbot)
    bottom = one_sided(phi[BOTTOM], psi[BOTTOM], phi[:, 1],
                       c.speed[BOTTOM], e.kappa_topbot, e.gamma_topbot)
    return _absorbing_sides(phi, psi, c, e) + [(TOP, top), (BOTTOM, bottom)]


def mixed_edges(xp, phi, psi, c: CoefficientGrids, e: EdgeCoefficients) -> List[Update]:
    """
    Periodic in y, absorbing on the left and right edges.

    On the top and bottom rows the x neighbours are clamped and the y
    neighbours wrapped; the cell at i = 0 of each of these rows takes the
    absorbing formula of the sides, while the cell at i = nx-1 does not.
    """
    def lf(index, delta):
        return leapfrog(phi[index], psi[index], delta,
                        c.speed_squared[index], c.elasticity[index], c.damping[index])

    def corner(index, inward):
        return one_sided(phi[index], psi[index], inward,
                         c.speed[index], e.kappa_sides, e.gamma_sides)

    plus, minus = _clamped(xp, phi[TOP])
    top = plus + minus + phi[:, -2] + phi[:, 0] - 4.0 * phi[TOP]
    plus, minus = _clamped(xp, phi[BOTTOM])
    bottom = plus + minus + phi[:, 1] + phi[:, -1] - 4.0 * phi[BOTTOM]

    return _absorbing_sides(phi, psi, c, e) + [
        (TOP, lf(TOP, top)), ((0, -1), corner((0, -1), phi[1, -1])),
        (BOTTOM, lf(BOTTOM, bottom)), ((0, 0), corner((0, 0), phi[1, 0])),
    ]


EdgeUpdate = Callable[..., List[Update]]

EDGE_UPDATES: Dict[BoundaryCondition, EdgeUpdate] = {
    BoundaryCondition.DIRICHLET: dirichlet_edges,
    BoundaryCondition.PERIODIC: periodic_edges,
    BoundaryCondition.ABSORBING: absorbing_edges,
    BoundaryCondition.MIXED: mixed_edges,
}


def wave_half_step(
    xp,
    phi,
    psi,
    phi_out,
    psi_out,
    *,
    active,
    inside,
    coefficients: CoefficientGrids,
    edge_update: EdgeUpdate,
    edges: EdgeCoefficients,
    floor: bool = False,
    vmax: float = 10.0,
    drive: Optional[float] = None
):
    """
    One leapfrog update of the wave field.

    Parameters
    ----------
    xp : module
        Array module (numpy or jax.numpy).
    phi, psi : array
        Field at times t and t-1.
    phi_out, psi_out : array
        Output arrays (written in place for numpy).
    active : array of bool
        Cells used as stencil centres.
    inside : array of bool
        Cells inside the billiard, the ones affected by the floor clamp.
    coefficients : CoefficientGrids
        Per-cell Courant number, damping and elasticity.
    edge_update : callable
        Edge pass of the boundary-condition variant, see ``EDGE_UPDATES``.
    edges : EdgeCoefficients
        Coefficients of the absorbing edge formulas.
    floor : bool, default=False
        Clamp the result into [-vmax, vmax] on inside cells.
    drive : float, optional
        If given, value imposed on the whole left column.

    Returns
    -------
    tuple
        Field at times t+1 and t.
    """
    c = coefficients

    x = phi[INTERIOR]
    delta = phi[2:, 1:-1] + phi[:-2, 1:-1] + phi[1:-1, 2:] + phi[1:-1, :-2] - 4.0 * x
    updates = [(INTERIOR, leapfrog(x, psi[INTERIOR], delta,
                                   c.speed_squared[INTERIOR], c.elasticity[INTERIOR],
                                   c.damping[INTERIOR]))]
    updates += edge_update(xp, phi, psi, c, edges)

    for index, value in updates:
        phi_out = _assign(phi_out, index, xp.where(active[index], value, phi[index]))
        psi_out = _assign(psi_out, index, xp.where(active[index], phi[index], psi[index]))

    if drive is not None:
        phi_out = _assign(phi_out, (0, slice(None)), drive)
        psi_out = _assign(psi_out, (0, slice(None)), phi[0, :])

    if floor:
        phi_out = _floor(xp, phi_out, inside, vmax)
        psi_out = _floor(xp, psi_out, inside, vmax)

    return phi_out, psi_out


def schrodinger_half_step(
    xp,
    phi,
    psi,
    phi_out,
    psi_out,
    *,
    active,
    boundary: BoundaryCondition,
    intstep: float,
    intstep1: float,
    floor: bool = False,
    vmax: float = 10.0
):
    """
    One half step of the discretized Schrödinger equation.

    ``phi`` and ``psi`` are the real and imaginary parts of the wavefunction;
    each is advanced with the Laplacian of the other. Neighbours outside the
    grid are clamped (Dirichlet, absorbing) or wrapped (periodic). With the
    absorbing variant the border cells use a one-sided first-order update,
    right border first, then top, left and bottom.
    """
    mode = 'wrap' if boundary == BoundaryCondition.PERIODIC else 'edge'
    p = xp.pad(phi, 1, mode=mode)
    q = xp.pad(psi, 1, mode=mode)

    delta1 = p[2:, 1:-1] + p[:-2, 1:-1] + p[1:-1, 2:] + p[1:-1, :-2] - 4.0 * phi
    delta2 = q[2:, 1:-1] + q[:-2, 1:-1] + q[1:-1, 2:] + q[1:-1, :-2] - 4.0 * psi

    new_phi = phi - intstep * delta2
    new_psi = psi + intstep * delta1

    if boundary == BoundaryCondition.ABSORBING:
        # written lowest precedence first
        borders = [
            ((slice(None), 0), (slice(None), 1)),
            ((0, slice(None)), (1, slice(None))),
            ((slice(None), -1), (slice(None), -2)),
            ((-1, slice(None)), (-2, slice(None))),
        ]
        for index, inward in borders:
            x, y = phi[index], psi[index]
            new_phi = _assign(new_phi, index, x - intstep1 * (y - psi[inward]))
            new_psi = _assign(new_psi, index, y + intstep1 * (x - phi[inward]))

    phi_out = _assign(phi_out, Ellipsis, xp.where(active, new_phi, phi))
    psi_out = _assign(psi_out, Ellipsis, xp.where(active, new_psi, psi))

    if floor:
        phi_out = _floor(xp, phi_out, active, vmax)
        psi_out = _floor(xp, psi_out, active, vmax)

    return phi_out, psi_out
