from typing import Callable, Tuple, Union
import numpy as np
import matplotlib.pyplot as plt

from wavebilliard.config import SimulationConfig


OUTSIDE = 0
MEDIUM_A = 1
MEDIUM_B = 2

ArrayLike = Union[float, np.ndarray]
Classifier = Callable[[ArrayLike, ArrayLike], ArrayLike]


class GridGeometry:
    """
    Affine map between the physical rectangle and the integer lattice.

    Lattice point ``(i, j)`` sits at ``x = xmin + i*dx``, ``y = ymin + j*dy``,
    the first and last points of each axis lying on the edges of the rectangle.
    Both the stencil and the initial conditions go through this class, so the
    mask and the field are always registered on the same points.

    Parameters
    ----------
    nx, ny : int
        Number of grid points per axis.
    xmin, xmax, ymin, ymax : float
        Physical rectangle.

    Attributes
    ----------
    dx, dy : float
        Lattice spacing per axis.
    x, y : np.ndarray
        1D coordinate arrays.
    X, Y : np.ndarray
        2D meshgrids with ``indexing='ij'``, shape ``(nx, ny)``.
    """

    def __init__(
        self,
        nx: int,
        ny: int,
        xmin: float,
        xmax: float,
        ymin: float,
        ymax: float
    ) -> None:
        self.nx = int(nx)
        self.ny = int(ny)
        self.xmin, self.xmax = float(xmin), float(xmax)
        self.ymin, self.ymax = float(ymin), float(ymax)

        self.dx = (self.xmax - self.xmin) / (self.nx - 1)
        self.dy = (self.ymax - self.ymin) / (self.ny - 1)

        self.x = np.linspace(self.xmin, self.xmax, self.nx)
        self.y = np.linspace(self.ymin, self.ymax, self.ny)
        self.X, self.Y = np.meshgrid(self.x, self.y, indexing='ij')

    @classmethod
    def from_config(cls, config: SimulationConfig) -> 'GridGeometry':
        return cls(config.nx, config.ny, config.xmin, config.xmax, config.ymin, config.ymax)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.nx, self.ny)

    @property
    def grids(self) -> Tuple[np.ndarray, np.ndarray]:
        return (self.X, self.Y)

    def to_xy(self, i: ArrayLike, j: ArrayLike) -> Tuple[ArrayLike, ArrayLike]:
        """Physical coordinates of lattice point(s) ``(i, j)``."""
        return (self.xmin + np.asarray(i) * self.dx,
                self.ymin + np.asarray(j) * self.dy)

    def to_index(self, x: ArrayLike, y: ArrayLike) -> Tuple[ArrayLike, ArrayLike]:
        """
        Convert physical coordinates to grid indices.

        Parameters
        ----------
        x, y : float or np.ndarray
            Physical position(s).

        Returns
        -------
        tuple
            Nearest lattice indices, clamped to valid bounds. Scalars in,
            ints out; arrays in, integer arrays out.
        """
        i = np.clip(np.rint((np.asarray(x) - self.xmin) / self.dx), 0, self.nx - 1).astype(int)
        j = np.clip(np.rint((np.asarray(y) - self.ymin) / self.dy), 0, self.ny - 1).astype(int)
        if i.ndim == 0:
            return int(i), int(j)
        return i, j


class DomainMask:
    """
    Per-cell classification of the grid into outside / medium A / medium B.

    The array is computed once from a classification predicate and is
    read-only for the lifetime of a run.

    Parameters
    ----------
    geometry : GridGeometry
        Lattice the mask lives on.
    cells : np.ndarray
        Integer array of shape ``geometry.shape`` with values in
        ``{OUTSIDE, MEDIUM_A, MEDIUM_B}``.
    """

    def __init__(self, geometry: GridGeometry, cells: np.ndarray) -> None:
        cells = np.asarray(cells)
        if cells.shape != geometry.shape:
            raise ValueError(f"Mask shape {cells.shape} does not match grid {geometry.shape}.")
        if not np.isin(cells, (OUTSIDE, MEDIUM_A, MEDIUM_B)).all():
            raise ValueError("Mask values must be OUTSIDE (0), MEDIUM_A (1) or MEDIUM_B (2).")

        self.geometry = geometry
        self.cells = cells.astype(np.int8)
        self.cells.setflags(write=False)

        self.inside = self.cells != OUTSIDE
        self.inside.setflags(write=False)

    @classmethod
    def from_classifier(
        cls,
        geometry: GridGeometry,
        classify: Classifier,
        vectorized: bool = True
    ) -> 'DomainMask':
        """
        Materialize ``classify(x, y)`` over every lattice point.

        Parameters
        ----------
        geometry : GridGeometry
            Lattice to evaluate on.
        classify : callable
            Predicate returning OUTSIDE, MEDIUM_A or MEDIUM_B (booleans are
            read as OUTSIDE / MEDIUM_A).
        vectorized : bool, default=True
            If True, ``classify`` is called once on the full meshgrids;
            otherwise it is called point by point.
        """
        X, Y = geometry.grids
        if vectorized:
            cells = np.broadcast_to(np.asarray(classify(X, Y)), geometry.shape)
        else:
            cells = np.vectorize(classify, otypes=[np.int8])(X, Y)
        return cls(geometry, np.asarray(cells, dtype=np.int8))

    @classmethod
    def full(cls, geometry: GridGeometry, medium: int = MEDIUM_A) -> 'DomainMask':
        """Mask with every cell in the same medium."""
        return cls(geometry, np.full(geometry.shape, medium, dtype=np.int8))

    @property
    def shape(self) -> Tuple[int, int]:
        return self.cells.shape

    @property
    def count(self) -> int:
        """Number of cells inside the billiard (either medium)."""
        return int(np.count_nonzero(self.inside))

    def medium(self, kind: int) -> np.ndarray:
        """Boolean array selecting the cells of one classification."""
        return self.cells == kind

    def contains(self, x: float, y: float) -> bool:
        return bool(self.inside[self.geometry.to_index(x, y)])

    def preview(self) -> None:
        """
        Visualize the domain setup.

        Displays the classification of every cell with the billiard contour,
        for debugging and verification.
        """
        g = self.geometry
        plt.figure(figsize=(8, 6))

        visual_map = self.cells.astype(float)
        visual_map[~self.inside] = np.nan

        plt.imshow(visual_map.T, origin='lower', cmap='viridis',
                   extent=[g.xmin, g.xmax, g.ymin, g.ymax], vmin=MEDIUM_A, vmax=MEDIUM_B)
        plt.colorbar(label="Medium")
        plt.contour(g.X, g.Y, self.inside.astype(float), levels=[0.5], colors='black', linewidths=1)

        plt.title(f"Domain Preview: {self.count} of {g.nx * g.ny} cells inside")
        plt.xlabel("x")
        plt.ylabel("y")
        plt.grid(True, alpha=0.3)
        plt.show()
