import numpy as np
import pytest

from surfaceheat.config import SimulationConfig
from surfaceheat.solvers.simulation import Simulation
from surfaceheat.view.renderer import MatplotlibRenderer


@pytest.fixture
def renderer():
    r = MatplotlibRenderer()
    yield r
    r.close()


def test_renders_field_marker_and_history(renderer):
    simulation = Simulation(SimulationConfig.focal_point(grid_size=(20, 20)))
    frames = []

    def sink(frame):
        frames.append(frame)
        renderer(frame)

    simulation.run(0.5, "circle", sink=sink)
    last = frames[-1]

    np.testing.assert_array_equal(renderer._image.get_array(), last.field)
    row, col = last.source_position
    assert list(renderer._marker.get_xdata()) == [col]
    assert list(renderer._marker.get_ydata()) == [row]
    assert list(renderer._side_line.get_xdata()) == list(last.time_history)
    assert len(renderer._radius_circle.get_xdata()) == 100


def test_renders_trail_for_untracked_beam(renderer):
    simulation = Simulation(SimulationConfig.sun_beam(grid_size=(20, 20)))
    simulation.run(0.3, "x", sink=renderer)

    row, col = simulation.source.position
    assert renderer._side_line is None
    assert list(renderer._side_marker.get_xdata()) == [col]
    assert list(renderer._side_marker.get_ydata()) == [row]
    # trajectory path plus the marker
    assert len(renderer.ax_side.lines) == 2
