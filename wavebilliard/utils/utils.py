import numpy as np
from scipy.signal import find_peaks


def find_first_arrival(signal: np.ndarray, threshold_ratio: float = 0.1) -> int:
    """
    Detect the first significant peak in a probe signal (direct wave arrival).

    Parameters
    ----------
    signal : np.ndarray
        Input time series.
    threshold_ratio : float, default=0.1
        Minimum peak height as fraction of the global maximum of ``|signal|``.

    Returns
    -------
    int
        Index of the first arrival. Falls back to the global maximum of
        ``|signal|`` if no peaks are found.
    """
    magnitude = np.abs(np.asarray(signal, dtype=float))
    min_height = np.max(magnitude) * threshold_ratio

    peaks, _ = find_peaks(magnitude, height=min_height, distance=5)

    if len(peaks) > 0:
        return int(peaks[0])
    else:
        return int(np.argmax(magnitude))


def travel_time(distance: float, courant: float, dx: float) -> float:
    """Number of half steps a wave of the given Courant number needs to cover ``distance``."""
    return distance / (courant * dx)
