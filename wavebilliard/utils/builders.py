"""
Classification predicates for common billiard shapes.

Every builder returns a ``classify(x, y)`` accepting scalars or numpy arrays
and returning OUTSIDE, MEDIUM_A or MEDIUM_B per point.
"""
from typing import Callable, Optional
import numpy as np

from wavebilliard.core.domain import MEDIUM_A, MEDIUM_B, OUTSIDE


def _classify(inside) -> np.ndarray:
    return np.where(inside, MEDIUM_A, OUTSIDE).astype(np.int8)


def rectangle(
    xmin: float = -np.inf,
    xmax: float = np.inf,
    ymin: float = -np.inf,
    ymax: float = np.inf
) -> Callable:
    """Axis-aligned rectangle. Without arguments every point is inside."""
    def classify(x, y):
        x, y = np.asarray(x), np.asarray(y)
        return _classify((x > xmin) & (x < xmax) & (y > ymin) & (y < ymax))

    return classify


def ellipse(a: float, b: float) -> Callable:
    """Ellipse centred at the origin with half-axes ``a`` and ``b``."""
    def classify(x, y):
        x, y = np.asarray(x), np.asarray(y)
        return _classify((x / a)**2 + (y / b)**2 < 1.0)

    return classify


def stadium(lam: float, radius: float) -> Callable:
    """
    Bunimovich stadium.

    Parameters
    ----------
    lam : float
        Half-length of the straight segments.
    radius : float
        Radius of the two half-discs capping them.
    """
    def classify(x, y):
        x, y = np.asarray(x), np.asarray(y)
        ax = np.abs(x)
        central = (ax < lam) & (np.abs(y) < radius)
        caps = (ax - lam)**2 + y**2 < radius**2
        return _classify(central | caps)

    return classify


def sinai(radius: float) -> Callable:
    """Sinai billiard: the plane minus a disc centred at the origin."""
    def classify(x, y):
        x, y = np.asarray(x), np.asarray(y)
        return _classify(x**2 + y**2 > radius**2)

    return classify


def annulus(outer: float, inner: float, shift: float = 0.0) -> Callable:
    """Disc of radius ``outer`` with a hole of radius ``inner`` centred at ``(shift, 0)``."""
    if inner >= outer:
        raise ValueError("Inner radius must be smaller than the outer radius.")

    def classify(x, y):
        x, y = np.asarray(x), np.asarray(y)
        return _classify((x**2 + y**2 < outer**2) & ((x - shift)**2 + y**2 > inner**2))

    return classify


def flat_interface(y0: float = 0.0) -> Callable:
    """Two media separated by the line y = y0: medium A above, medium B below."""
    def classify(x, y):
        y = np.asarray(y) + 0.0 * np.asarray(x)
        return np.where(y > y0, MEDIUM_A, MEDIUM_B).astype(np.int8)

    return classify


def young_slits(
    width: float,
    separation: float,
    x0: float = 0.0,
    thickness: Optional[float] = None
) -> Callable:
    """
    Wall at ``x = x0`` pierced by two slits (Young's interference experiment).

    Parameters
    ----------
    width : float
        Size of each aperture.
    separation : float
        Centre-to-centre distance between the slits.
    x0 : float, default=0.0
        Position of the wall.
    thickness : float, optional
        Wall thickness; defaults to the slit width.
    """
    if width >= separation:
        raise ValueError("Slits overlap: width must be smaller than the separation.")
    t = width if thickness is None else thickness

    def classify(x, y):
        x, y = np.asarray(x), np.asarray(y)
        wall = np.abs(x - x0) < t / 2.0
        slit1 = np.abs(y - separation / 2.0) < width / 2.0
        slit2 = np.abs(y + separation / 2.0) < width / 2.0
        return _classify(~wall | slit1 | slit2)

    print(f"✅ Double Slit built at x={x0} (Sep: {separation}, Width: {width})")
    return classify


def polygon(n: int, radius: float, angle: float = 0.0) -> Callable:
    """
    Regular polygon with ``n`` vertices centred at the origin.

    Parameters
    ----------
    n : int
        Number of vertices (at least 3).
    radius : float
        Distance from the centre to the vertices.
    angle : float, default=0.0
        Polar angle of the first vertex.
    """
    if n < 3:
        raise ValueError("A polygon needs at least 3 vertices.")

    # outward normal of side k sits halfway between vertices k and k+1
    normals = angle + (2 * np.arange(n) + 1) * np.pi / n
    apothem = radius * np.cos(np.pi / n)

    def classify(x, y):
        x, y = np.asarray(x), np.asarray(y)
        inside = np.ones(np.broadcast(x, y).shape, dtype=bool)
        for theta in normals:
            inside &= x * np.cos(theta) + y * np.sin(theta) < apothem
        return _classify(inside)

    return classify
