from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import TYPE_CHECKING, Dict, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt

from surfaceheat.config import ConfigurationError

if TYPE_CHECKING:
    import numpy.typing as npt
    from matplotlib.axes import Axes


class MotionPattern(StrEnum):
    CIRCLE = "circle"
    CROSS = "x"


class BeamTrajectory(ABC):
    """
    Abstract base class for beam trajectories.
    """
    NAME: str = "Trajectory"
    PERIOD: float = 1.0  # seconds

    @abstractmethod
    def get_position(
        self,
        time: float | npt.NDArray[np.float64],
        center: Tuple[float, float],
    ) -> Tuple[float, float] | npt.NDArray[np.float64]:
        """
        Get the beam position at a given time.

        Args:
            time: Elapsed simulation time in seconds.
            center: Grid center (row, col).

        Returns:
            (row, col) for a scalar time, an (N, 2) array for an array of times.
        """
        pass

    def plot(self, center: Tuple[float, float] = (24.0, 24.0), ax: Optional[Axes] = None) -> Axes:
        """
        Plot one period of the trajectory.

        Shows a new figure when no axes are given.
        """
        times = np.linspace(0.0, self.PERIOD, 500, endpoint=False)
        path = self.get_position(times, center)

        show = ax is None
        if ax is None:
            plt.rcParams["figure.constrained_layout.use"] = True
            fig = plt.figure(figsize=(5, 5))
            ax = fig.add_subplot()

        # columns on the horizontal axis, rows downward like an image
        ax.plot(path[:, 1], path[:, 0], 'b--', lw=1)
        ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        ax.set_title(f"{self.NAME} Beam Path")
        ax.set_xlabel("Column")
        ax.set_ylabel("Row")
        ax.set_aspect("equal")

        if show:
            ax.invert_yaxis()
            plt.show()
        return ax


class CircularTrajectory(BeamTrajectory):
    """
    Continuous rotation around the grid center.
    """
    NAME = "Circle"
    PERIOD = 2 * np.pi

    def __init__(self, radius: float = 15.0) -> None:
        self.radius = radius

    def get_position(
        self,
        time: float | npt.NDArray[np.float64],
        center: Tuple[float, float],
    ) -> Tuple[float, float] | npt.NDArray[np.float64]:
        t_array = np.atleast_1d(np.asarray(time, dtype=np.float64))
        rows = center[0] + self.radius * np.cos(t_array)
        cols = center[1] + self.radius * np.sin(t_array)

        if np.isscalar(time):
            return float(rows[0]), float(cols[0])
        return np.column_stack((rows, cols))


class CrossTrajectory(BeamTrajectory):
    """
    Period-4 sweep along both diagonals, one unit of time per leg.

    Legs, as (row, col) corner offsets from the center:
        [0, 1)  (-, -) -> (+, +)
        [1, 2)  (+, +) -> (-, -)
        [2, 3)  (+, -) -> (-, +)
        [3, 4)  (-, +) -> (+, -)
    """
    NAME = "X"
    PERIOD = 4.0

    # Start corner of each leg; every leg ends at the opposite corner.
    LEG_STARTS = np.array([[-1.0, -1.0], [1.0, 1.0], [1.0, -1.0], [-1.0, 1.0]])

    def __init__(self, max_radius: float = 20.0) -> None:
        self.max_radius = max_radius

    def get_position(
        self,
        time: float | npt.NDArray[np.float64],
        center: Tuple[float, float],
    ) -> Tuple[float, float] | npt.NDArray[np.float64]:
        t_array = np.mod(np.atleast_1d(np.asarray(time, dtype=np.float64)), self.PERIOD)
        leg = np.minimum(np.floor(t_array).astype(np.int64), 3)
        progress = (t_array - leg)[:, np.newaxis]

        start = self.LEG_STARTS[leg]
        offsets = self.max_radius * start * (1.0 - 2.0 * progress)
        positions = np.asarray(center, dtype=np.float64) + offsets

        if np.isscalar(time):
            return float(positions[0, 0]), float(positions[0, 1])
        return positions


TRAJECTORIES: Dict[MotionPattern, BeamTrajectory] = {
    MotionPattern.CIRCLE: CircularTrajectory(),
    MotionPattern.CROSS: CrossTrajectory(),
}


def get_trajectory(pattern: str | MotionPattern) -> BeamTrajectory:
    """
    Look up the trajectory for a pattern name.

    Raises:
        ConfigurationError: If the name is not a known pattern.
    """
    try:
        return TRAJECTORIES[MotionPattern(pattern)]
    except ValueError:
        valid = ", ".join(f"'{p.value}'" for p in MotionPattern)
        raise ConfigurationError(f"Unknown motion pattern '{pattern}'. Expected one of: {valid}.") from None


def position_at(
    elapsed_time: float,
    pattern: str | MotionPattern,
    grid_center: Tuple[float, float],
) -> Tuple[float, float]:
    """Beam position (row, col) after `elapsed_time` seconds on `pattern`."""
    return get_trajectory(pattern).get_position(elapsed_time, grid_center)


if __name__ == "__main__":
    for trajectory in TRAJECTORIES.values():
        trajectory.plot()
