import numpy as np
import pytest

from surfaceheat.analysis.integrator import footprint_mask, step
from surfaceheat.model.state import BeamSource, GridState


def test_source_cell_heats_and_far_cells_stay_ambient(small_grid):
    source = BeamSource(position=(2, 2))
    step(small_grid, source)

    assert small_grid.field[2, 2] == pytest.approx(25.0 + 75.0 * 0.1)
    assert small_grid.field[0, 0] == 25.0
    assert small_grid.field[4, 4] == 25.0


def test_step_returns_same_grid_with_same_shape(small_grid):
    result = step(small_grid, BeamSource(position=(2, 2)))

    assert result is small_grid
    assert small_grid.shape == (5, 5)


def test_boundary_cells_get_no_diffusion(small_grid):
    small_grid.field[1:4, 1:4] = 1000.0
    source = BeamSource(position=(0, 2))
    step(small_grid, source)

    # injection only, cooling is zero at ambient
    assert small_grid.field[0, 2] == pytest.approx(25.0 + (100.0 - 25.0) * 0.1)
    # neither injection nor diffusion reaches the other edge cells
    assert small_grid.field[0, 1] == 25.0
    assert small_grid.field[2, 0] == 25.0
    assert small_grid.field[4, 3] == 25.0


def test_interior_diffusion_uses_five_point_laplacian():
    grid = GridState.new(rows=5, cols=5, ambient_temp=25.0, cooling_rate=0.0)
    grid.field[2, 2] = 125.0
    outside = BeamSource(position=(-10, -10))
    step(grid, outside)

    assert grid.field[2, 2] == pytest.approx(125.0 + 0.1 * (-400.0) * 0.1)
    for neighbor in [(1, 2), (3, 2), (2, 1), (2, 3)]:
        assert grid.field[neighbor] == pytest.approx(25.0 + 0.1 * 100.0 * 0.1)
    assert grid.field[1, 1] == 25.0


def test_terms_combine_from_pre_step_values(small_grid):
    small_grid.field[2, 2] = 50.0
    step(small_grid, BeamSource(position=(2, 2)))

    injection = (100.0 - 50.0) * 0.1
    diffusion = 0.1 * (4 * 25.0 - 4 * 50.0) * 0.1
    cooling = (25.0 - 50.0) * 0.02 * 0.1
    assert small_grid.field[2, 2] == pytest.approx(50.0 + injection + diffusion + cooling)


def test_cooling_relaxes_toward_ambient_everywhere():
    grid = GridState.new(rows=4, cols=4, ambient_temp=25.0, diffusion_rate=0.0, cooling_rate=0.5)
    grid.field[:] = 45.0
    step(grid, BeamSource(position=(100, 100)))

    np.testing.assert_allclose(grid.field, 45.0 - 20.0 * 0.5 * 0.1)


def test_point_source_outside_grid_injects_nothing(small_grid):
    assert not footprint_mask(small_grid.shape, BeamSource(position=(5, 0))).any()
    step(small_grid, BeamSource(position=(5, 0)))

    assert np.all(small_grid.field == 25.0)


@pytest.mark.parametrize("radius, expected_cells", [(1.0, 5), (1.5, 9), (2.0, 13)])
def test_disk_footprint(radius, expected_cells):
    mask = footprint_mask((9, 9), BeamSource(position=(4.0, 4.0), radius=radius))

    assert mask.sum() == expected_cells
    assert mask[4, 4]


def test_disk_footprint_is_clipped_at_edges():
    mask = footprint_mask((9, 9), BeamSource(position=(0.0, 0.0), radius=1.0))

    assert mask.sum() == 3


def test_disk_source_heats_whole_footprint():
    grid = GridState.new(rows=11, cols=11)
    source = BeamSource(position=(5.0, 5.0), radius=2.0)
    step(grid, source)

    mask = footprint_mask(grid.shape, source)
    assert np.all(grid.field[mask] > 25.0)
    assert np.all(grid.field[~mask] == 25.0)
    assert grid.field[0, 0] == 25.0
