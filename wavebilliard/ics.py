from typing import Callable, Optional, Tuple
import numpy as np


FieldPair = Tuple[np.ndarray, np.ndarray]


def drop(
    x0: float,
    y0: float,
    amplitude: float = 0.2,
    width: float = 0.001,
    wavelength: float = 0.01
) -> Callable[[np.ndarray, np.ndarray], FieldPair]:
    """
    Generate a drop: a radially oscillating bump at rest.

    Parameters
    ----------
    x0, y0 : float
        Centre of the drop.
    amplitude : float, default=0.2
        Height at the centre.
    width : float, default=0.001
        Squared radius of the Gaussian envelope.
    wavelength : float, default=0.01
        Radial wavelength (divided by 2π) of the oscillation.

    Returns
    -------
    callable
        Function computing ``(phi, psi)`` with ``psi = 0``.
    """
    def field(x: np.ndarray, y: np.ndarray) -> FieldPair:
        dist2 = (x - x0)**2 + (y - y0)**2
        phi = amplitude * np.exp(-dist2 / width) * np.cos(-np.sqrt(dist2) / wavelength)
        return phi, np.zeros_like(phi)

    return field


def circular_wave(
    x0: float,
    y0: float,
    amplitude: float = 0.5,
    variance: float = 0.0005,
    wavelength: float = 0.1
) -> Callable[[np.ndarray, np.ndarray], FieldPair]:
    """Wider, longer-wavelength drop used for circular wavefronts."""
    return drop(x0, y0, amplitude=amplitude, width=variance, wavelength=wavelength)


def coherent_state(
    x0: float,
    y0: float,
    px: float,
    py: float,
    scale: float
) -> Callable[[np.ndarray, np.ndarray], FieldPair]:
    """
    Generate a Gaussian wave packet with position and momentum.

    Parameters
    ----------
    x0, y0 : float
        Centre of the packet.
    px, py : float
        Momentum, in units of 1/scale.
    scale : float
        Width of the packet.

    Returns
    -------
    callable
        Function computing the real and imaginary parts ``(phi, psi)``.
        The modulus is floored at 1e-15.
    """
    scale2 = scale * scale

    def field(x: np.ndarray, y: np.ndarray) -> FieldPair:
        dist2 = (x - x0)**2 + (y - y0)**2
        module = np.maximum(np.exp(-dist2 / scale2), 1.0e-15)
        phase = (px * (x - x0) + py * (y - y0)) / scale
        return module * np.cos(phase), module * np.sin(phase)

    return field


def plane_wave(
    x0: float,
    width: float,
    courant: float,
    dx: float,
    wavelength: Optional[float] = None,
    direction: int = 1
) -> Callable[[np.ndarray, np.ndarray], FieldPair]:
    """
    Generate a planar wave packet travelling along x.

    The envelope is a Gaussian of standard deviation ``width`` centred at
    ``x0``, optionally modulated by a carrier of the given wavelength. ``psi``
    is the same profile one time step earlier, i.e. shifted back by
    ``courant * dx`` against the direction of travel, so the leapfrog scheme
    starts the packet moving.

    Parameters
    ----------
    x0 : float
        Initial centre of the packet.
    width : float
        Standard deviation of the envelope.
    courant : float
        Courant number of the medium the packet starts in.
    dx : float
        Lattice spacing.
    wavelength : float, optional
        Carrier wavelength. A bare Gaussian pulse if omitted.
    direction : {1, -1}
        Travel towards increasing (1) or decreasing (-1) x.
    """
    def profile(s: np.ndarray) -> np.ndarray:
        envelope = np.exp(-s**2 / (2 * width**2))
        if wavelength is None:
            return envelope
        return envelope * np.cos(2 * np.pi * s / wavelength)

    shift = direction * courant * dx

    def field(x: np.ndarray, y: np.ndarray) -> FieldPair:
        s = (x - x0) + 0.0 * y
        return profile(s), profile(s + shift)

    return field
