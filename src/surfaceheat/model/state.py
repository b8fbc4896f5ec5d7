"""
Simulation State (Data Model)
=============================
This module defines the data structures mutated by the simulation loop.

Why is this file needed?
------------------------
1. State Management: the temperature field and the scalar parameters it is
   integrated with travel together as one value (GridState).
2. Decoupling: the integrator and the metric are free functions that read
   and write these objects, so a single tick can be tested on its own.

Classes:
    GridState: Temperature field plus ambient/source temperatures and rates.
    BeamSource: Position and radius of the heat source.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import TYPE_CHECKING, Tuple, Union

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

    from surfaceheat.config import SimulationConfig

logger = logging.getLogger(__name__)

Position = Tuple[Union[int, float], Union[int, float]]


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def grid_center(shape: Tuple[int, int]) -> Tuple[float, float]:
    """
    Center (row, col) of a grid, in zero-based cell coordinates.

    Cell (rows / 2, cols / 2) counted from one, so (24, 24) on a 50x50 grid.
    """
    rows, cols = shape
    return rows / 2 - 1, cols / 2 - 1


@dataclass
class GridState:
    """
    Rectangular temperature field and the scalars the step rule uses.

    The shape of `field` is fixed at construction.
    """
    field: npt.NDArray[np.float64]
    ambient_temp: float = 25.0
    source_temp: float = 100.0
    diffusion_rate: float = 0.1
    cooling_rate: float = 0.02
    time_step: float = 0.1

    @classmethod
    def new(
        cls,
        rows: int = 50,
        cols: int = 50,
        ambient_temp: float = 25.0,
        source_temp: float = 100.0,
        diffusion_rate: float = 0.1,
        cooling_rate: float = 0.02,
        time_step: float = 0.1,
    ) -> GridState:
        """
        Create a grid at ambient temperature everywhere.

        Args:
            rows: Number of grid rows.
            cols: Number of grid columns.
            ambient_temp: Equilibrium temperature of the environment.
            source_temp: Forcing temperature of the beam.
            diffusion_rate: Strength of neighbor-to-neighbor diffusion.
            cooling_rate: Strength of relaxation toward ambient.
            time_step: Duration of one tick in seconds.
        """
        return cls(
            field=np.full((rows, cols), ambient_temp, dtype=np.float64),
            ambient_temp=ambient_temp,
            source_temp=source_temp,
            diffusion_rate=diffusion_rate,
            cooling_rate=cooling_rate,
            time_step=time_step,
        )

    @classmethod
    def from_config(cls, config: SimulationConfig) -> GridState:
        return cls.new(
            rows=config.rows,
            cols=config.cols,
            ambient_temp=config.ambient_temp,
            source_temp=config.source_temp,
            diffusion_rate=config.diffusion_rate,
            cooling_rate=config.cooling_rate,
            time_step=config.time_step,
        )

    @property
    def shape(self) -> Tuple[int, int]:
        return self.field.shape

    @property
    def center(self) -> Tuple[float, float]:
        """Center (row, col) the trajectories revolve around."""
        return grid_center(self.field.shape)

    def reset(self) -> None:
        """Put every cell back to ambient temperature."""
        self.field[:] = self.ambient_temp
        logger.debug("Grid reset to ambient temperature.")


@dataclass
class BeamSource:
    """
    The heat injection point (radius 0) or disk (radius > 0).

    Point sources snap to the nearest cell, disks keep real coordinates.
    """
    position: Position = (24, 24)
    radius: float = 0.0

    @property
    def is_point(self) -> bool:
        return self.radius == 0

    def move_to(self, row: float, col: float) -> None:
        if self.is_point:
            self.position = (round_half_away(row), round_half_away(col))
        else:
            self.position = (float(row), float(col))

    @classmethod
    def at_center(cls, grid: GridState, radius: float = 0.0) -> BeamSource:
        source = cls(radius=radius)
        source.move_to(*grid.center)
        return source
