from dataclasses import dataclass
from typing import Iterator, List, Optional, Type

import numpy as np

from wavebilliard.config import FieldFamily, SimulationConfig
from wavebilliard.core import statistics
from wavebilliard.core.domain import Classifier, DomainMask, GridGeometry
from wavebilliard.core.field import CoefficientGrids, FieldState, Initializer
from wavebilliard.core.pdesolver import StencilStepper
from wavebilliard.components.probes import Probe
from wavebilliard.components.sources import DropSource
from wavebilliard.solvers import SchrodingerStepper, WaveStepper


@dataclass
class Frame:
    """
    Settled field handed to the renderer once per frame.

    Attributes
    ----------
    phi, psi : np.ndarray
        Copies of the field components.
    mask : DomainMask
        Classification of the cells.
    scale : float
        Factor the renderer divides amplitudes by.
    time_index : int
        Frame number, starting at 0.
    """
    phi: np.ndarray
    psi: np.ndarray
    mask: DomainMask
    scale: float
    time_index: int


class Simulation:
    """
    Manages the lifecycle of one run: setup, then a loop of frames.

    Each frame computes the statistics of the settled field, optionally
    renormalizes it, hands a :class:`Frame` out, then advances the stepper
    by ``config.steps_per_frame`` logical steps.

    Parameters
    ----------
    config : SimulationConfig
        Validated run configuration.
    classify : callable
        ``classify(x, y)`` returning OUTSIDE, MEDIUM_A or MEDIUM_B.
    initializer : callable
        ``initializer(X, Y) -> (phi, psi)`` giving the initial field.
    vectorized : bool, default=True
        Whether ``classify`` accepts whole coordinate arrays.
    solver_class : type, optional
        Stepper class to use instead of the default of the field family,
        e.g. ``WaveJAX``.
    """

    def __init__(
        self,
        config: SimulationConfig,
        classify: Classifier,
        initializer: Initializer,
        vectorized: bool = True,
        solver_class: Optional[Type[StencilStepper]] = None
    ) -> None:
        self.config = config
        self.geometry = GridGeometry.from_config(config)
        self.domain = DomainMask.from_classifier(self.geometry, classify, vectorized)

        if solver_class is None:
            solver_class = SchrodingerStepper if config.family == FieldFamily.SCHRODINGER else WaveStepper
        self.stepper = solver_class(self.domain, config)
        self.coefficients = getattr(self.stepper, 'coefficients', None)
        if self.coefficients is None:
            self.coefficients = CoefficientGrids.from_domain(self.domain, config)

        self.state = FieldState(self.geometry)
        self.state.inject(initializer, self.geometry, self.stepper.active)

        self.sources: List[DropSource] = []
        self.probes: List[Probe] = []
        self.frame_index = 0

    def add_source(self, source: DropSource) -> None:
        source.register(self.domain)
        self.sources.append(source)

    def add_probe(self, probe: Probe) -> None:
        probe.register(self.domain)
        self.probes.append(probe)

    def variance(self) -> float:
        return statistics.variance(self.state, self.domain, self.config.family)

    def energy(self) -> float:
        """Total energy of a wave field over the billiard."""
        return statistics.total_energy(self.state, self.domain, self.coefficients)

    def next_frame(self) -> Frame:
        """
        Produce the current frame, then advance the field to the next one.

        Returns
        -------
        Frame
            The field as it was at the start of the call (after the optional
            renormalization).
        """
        v = self.variance()
        scale = statistics.display_scale(v) if self.config.scale else 1.0

        if self.config.family == FieldFamily.SCHRODINGER and self.config.renormalize:
            statistics.renormalize(self.state, self.domain, v)

        phi, psi = self.state.snapshot()
        frame = Frame(phi=phi, psi=psi, mask=self.domain, scale=scale, time_index=self.frame_index)

        for source in self.sources:
            if source.is_due(self.frame_index):
                source.fire(self.state, self.domain, self.stepper.active)

        for _ in range(self.config.steps_per_frame):
            self.stepper.step(self.state)
            for probe in self.probes:
                probe.record(self.stepper.time, self.state)

        self.frame_index += 1
        return frame

    def run(self, n_frames: int) -> Iterator[Frame]:
        """Yield ``n_frames`` consecutive frames."""
        steps = n_frames * self.config.steps_per_frame
        print(f"Simulating {n_frames} frames ({steps} steps) with {self.stepper.name}...")

        for _ in range(n_frames):
            yield self.next_frame()

        print("Simulation complete.")
