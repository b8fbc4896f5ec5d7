"""
Dissipation Metric
==================
Estimates how far heat has "significantly" spread from the beam.

The raw radius is the largest distance from the source to a cell whose
temperature rise exceeds a threshold. Successive samples are smoothed with
an exponential moving average whose memory (`prior_distance`) is passed in
explicitly, so `measure` itself stays pure.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Optional

from surfaceheat.analysis.kernels import max_distance_above

if TYPE_CHECKING:
    from surfaceheat.model.state import BeamSource, GridState

logger = logging.getLogger(__name__)

HEAT_THRESHOLD: float = 45.0  # °C above ambient
SMOOTHING: float = 0.7        # weight of the new sample
MIN_RADIUS: float = 1.0       # reported when nothing is heated


def raw_heat_radius(grid: GridState, source: BeamSource, threshold: float = HEAT_THRESHOLD) -> Optional[float]:
    """Unsmoothed heat radius, or None if no cell exceeds the threshold."""
    row, col = source.position
    distance = max_distance_above(grid.field - grid.ambient_temp, float(threshold), float(row), float(col))
    if distance < 0.0:
        return None
    return float(distance)


def measure(
    grid: GridState,
    source: BeamSource,
    prior_distance: Optional[float] = None,
    threshold: float = HEAT_THRESHOLD,
    smoothing: float = SMOOTHING,
) -> float:
    """
    Smoothed heat radius of the current field.

    Args:
        grid: Current grid state.
        source: Beam whose position distances are measured from.
        prior_distance: Output of the previous call, None on the first call.
        threshold: Temperature rise above ambient that counts as heated.
        smoothing: Weight of the new sample in the moving average.

    Returns:
        MIN_RADIUS when no cell is heated, otherwise the (smoothed) radius.
    """
    raw_max = raw_heat_radius(grid, source, threshold)
    if raw_max is None:
        return MIN_RADIUS
    if prior_distance is None:
        return raw_max
    return smoothing * raw_max + (1.0 - smoothing) * prior_distance


@dataclass
class DissipationHistory:
    """
    Time series of smoothed heat radii, one sample per tick.

    Both sequences are append-only and always of equal length.
    """
    threshold: float = HEAT_THRESHOLD
    smoothing: float = SMOOTHING
    _times: list[float] = field(default_factory=list, repr=False)
    _distances: list[float] = field(default_factory=list, repr=False)

    def __len__(self) -> int:
        return len(self._times)

    @property
    def time_history(self) -> tuple[float, ...]:
        return tuple(self._times)

    @property
    def distance_history(self) -> tuple[float, ...]:
        return tuple(self._distances)

    @property
    def last_distance(self) -> Optional[float]:
        return self._distances[-1] if self._distances else None

    def record(self, time: float, grid: GridState, source: BeamSource) -> float:
        """Measure the grid, append (time, distance) and return the distance."""
        distance = measure(
            grid,
            source,
            prior_distance=self.last_distance,
            threshold=self.threshold,
            smoothing=self.smoothing,
        )
        self._times.append(time)
        self._distances.append(distance)
        logger.debug(f"Heat radius at t={time:.2f} s: {distance:.3f} cells")
        return distance

    def clear(self) -> None:
        self._times.clear()
        self._distances.clear()
