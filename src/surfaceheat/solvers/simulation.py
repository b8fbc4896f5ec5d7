from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import TYPE_CHECKING, Callable, Optional, Protocol

import numpy as np

from surfaceheat.analysis.dissipation import DissipationHistory
from surfaceheat.analysis.integrator import step
from surfaceheat.config import ConfigurationError, SimulationConfig
from surfaceheat.model.state import BeamSource, GridState, Position, round_half_away
from surfaceheat.pre.trajectories import MotionPattern, get_trajectory

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Frame:
    """
    Snapshot handed to the render sink after every tick.
    """
    tick: int
    time: float
    field: npt.NDArray[np.float64]
    source_position: Position
    source_radius: float
    pattern: MotionPattern
    distance: Optional[float] = None
    time_history: tuple[float, ...] = ()
    distance_history: tuple[float, ...] = ()


class RenderSink(Protocol):
    def __call__(self, frame: Frame) -> None: ...


@dataclass
class SimulationResult:
    """
    Summary of a finished run.
    """
    ticks: int
    time_steps: list[float] = field(default_factory=list)
    positions: list[Position] = field(default_factory=list)
    distances: list[float] = field(default_factory=list)
    temperatures: Optional[npt.NDArray[np.float64]] = None


class Simulation:
    """
    Drives the beam over the grid, one tick at a time.
    """

    def __init__(self, config: Optional[SimulationConfig] = None) -> None:
        """
        Initialize grid, source and (optionally) the dissipation history.

        Args:
            config: Construction parameters. Defaults to the sun beam preset.
        """
        self.config = config or SimulationConfig()

        self.grid = GridState.from_config(self.config)
        self.source = BeamSource.at_center(self.grid, radius=self.config.source_radius)

        self.history: Optional[DissipationHistory] = None
        if self.config.track_dissipation:
            self.history = DissipationHistory(
                threshold=self.config.heat_threshold,
                smoothing=self.config.smoothing,
            )

    def reset(self) -> None:
        """Return to the freshly constructed state."""
        self.grid.reset()
        self.source.move_to(*self.grid.center)
        if self.history is not None:
            self.history.clear()

    def number_of_ticks(self, duration: float) -> int:
        if not math.isfinite(duration) or duration < 0:
            raise ConfigurationError(f"Duration must be non-negative and finite, got {duration}.")
        return round_half_away(duration / self.grid.time_step)

    def run(
        self,
        duration: float,
        pattern: str | MotionPattern,
        sink: Optional[RenderSink] = None,
        pacer: Optional[Callable[[float], None]] = None,
        callback: Optional[Callable[[int], None]] = None,
    ) -> SimulationResult:
        """
        Run the simulation for `duration` seconds of simulated time.

        Args:
            duration: Simulated time in seconds.
            pattern: Beam motion pattern ("circle" or "x").
            sink: Receives a Frame after every tick.
            pacer: Called with the frame delay after every tick. Omit for headless runs.
            callback: Called with the progress percentage after every tick.

        Returns:
            The time steps, positions and distances of the run plus the final field.
        """
        trajectory = get_trajectory(pattern)
        pattern = MotionPattern(pattern)
        ticks = self.number_of_ticks(duration)
        dt = self.grid.time_step
        center = self.grid.center

        logger.info(f"Starting '{pattern.value}' run: {ticks} ticks of {dt} s.")
        result = SimulationResult(ticks=ticks)

        for tick in range(1, ticks + 1):
            current_time = tick * dt

            self.source.move_to(*trajectory.get_position(current_time, center))
            step(self.grid, self.source)

            distance = None
            if self.history is not None:
                distance = self.history.record(current_time, self.grid, self.source)
                result.distances.append(distance)

            result.time_steps.append(current_time)
            result.positions.append(self.source.position)

            if sink is not None:
                sink(self._frame(tick, current_time, pattern, distance))
            if pacer is not None:
                pacer(self.config.frame_delay)

            progress = int(tick / ticks * 100)
            if callback is not None:
                callback(progress)
            logger.debug(f"Progress: {progress} % - Time: {current_time:.2f} s - Step: {tick} - Beam: {self.source.position}")

        result.temperatures = self.grid.field.copy()
        logger.info(f"Finished after {ticks} ticks, peak temperature {self.grid.field.max():.2f} °C.")
        return result

    def _frame(self, tick: int, time: float, pattern: MotionPattern, distance: Optional[float]) -> Frame:
        history = self.history
        return Frame(
            tick=tick,
            time=time,
            field=self.grid.field.copy(),
            source_position=self.source.position,
            source_radius=self.source.radius,
            pattern=pattern,
            distance=distance,
            time_history=history.time_history if history is not None else (),
            distance_history=history.distance_history if history is not None else (),
        )
