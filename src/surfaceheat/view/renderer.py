"""
Matplotlib Render Sink
======================
Draws simulation frames: the temperature field with the beam marker on the
left; the heat radius over time (when tracked) or the beam path on the right.

The simulation itself never imports this module; it only needs an object
that can be called with a Frame.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt

from surfaceheat.model.state import grid_center
from surfaceheat.pre.trajectories import get_trajectory

if TYPE_CHECKING:
    from matplotlib.image import AxesImage
    from matplotlib.lines import Line2D

    from surfaceheat.solvers.simulation import Frame

logger = logging.getLogger(__name__)

_THETA = np.linspace(0.0, 2.0 * np.pi, 100)


class MatplotlibRenderer:
    """
    Render sink backed by a single two-panel matplotlib figure.
    """

    def __init__(self, figsize: Tuple[float, float] = (12, 5), cmap: str = "hot") -> None:
        plt.rcParams["figure.constrained_layout.use"] = True
        self.figure = plt.figure(figsize=figsize)
        self.ax_field, self.ax_side = self.figure.subplots(1, 2)
        self.cmap = cmap

        self._image: Optional[AxesImage] = None
        self._marker: Optional[Line2D] = None
        self._radius_circle: Optional[Line2D] = None
        self._side_line: Optional[Line2D] = None
        self._side_marker: Optional[Line2D] = None

    def __call__(self, frame: Frame) -> None:
        if self._image is None:
            self._setup(frame)

        self._image.set_data(frame.field)
        self._image.set_clim(frame.field.min(), frame.field.max())

        row, col = frame.source_position
        self._marker.set_data([col], [row])

        if frame.distance is not None:
            self._radius_circle.set_data(
                col + frame.distance * np.cos(_THETA),
                row + frame.distance * np.sin(_THETA),
            )
            self._side_line.set_data(frame.time_history, frame.distance_history)
            self.ax_side.relim()
            self.ax_side.autoscale_view()
        else:
            self._side_marker.set_data([col], [row])

        self.figure.canvas.draw_idle()

    def _setup(self, frame: Frame) -> None:
        logger.debug("Creating render figure.")
        rows, cols = frame.field.shape

        self._image = self.ax_field.imshow(frame.field, cmap=self.cmap, origin="upper")
        self.figure.colorbar(self._image, ax=self.ax_field, label="Temperature (°C)")
        (self._marker,) = self.ax_field.plot([], [], 'wo', markersize=5 if frame.source_radius == 0 else 10, lw=2)
        (self._radius_circle,) = self.ax_field.plot([], [], 'w--', lw=1)
        self.ax_field.set_xlim(-0.5, cols - 0.5)
        self.ax_field.set_ylim(rows - 0.5, -0.5)
        self.ax_field.set_title("Surface Temperature Distribution (°C)")
        self.ax_field.set_xlabel("X Position")
        self.ax_field.set_ylabel("Y Position")

        if frame.distance is not None:
            (self._side_line,) = self.ax_side.plot([], [], 'b-', lw=1.5)
            self.ax_side.set_title("Heat Dissipation Distance Over Time")
            self.ax_side.set_xlabel("Time (seconds)")
            self.ax_side.set_ylabel("Maximum Heat Distance (cells)")
            self.ax_side.grid(visible=True)
        else:
            get_trajectory(frame.pattern).plot(center=grid_center(frame.field.shape), ax=self.ax_side)
            (self._side_marker,) = self.ax_side.plot([], [], 'ro', markersize=10, lw=2)
            self.ax_side.set_xlim(0, cols)
            self.ax_side.set_ylim(rows, 0)

    def close(self) -> None:
        plt.close(self.figure)


def matplotlib_pause(delay: float) -> None:
    """Pacer that lets the GUI event loop run for `delay` seconds."""
    plt.pause(delay)
