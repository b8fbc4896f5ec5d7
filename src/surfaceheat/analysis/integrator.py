"""
Step Integrator
===============
Advances a GridState by one explicit time step.

The update is evaluated entirely from the pre-step field, in this order:

1. Source injection on the beam footprint (relaxation toward source_temp).
2. Diffusion on interior cells (5-point Laplacian). The outermost ring of
   rows and columns never diffuses.
3. Cooling of every cell toward ambient_temp.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from surfaceheat.analysis.kernels import add_interior_diffusion

if TYPE_CHECKING:
    import numpy.typing as npt

    from surfaceheat.model.state import BeamSource, GridState


def footprint_mask(shape: tuple[int, int], source: BeamSource) -> npt.NDArray[np.bool_]:
    """
    Boolean mask of the cells heated by the source.

    A point source covers its own cell, or nothing when it lies outside the
    grid. A disk covers every cell within `radius` of its center.
    """
    mask = np.zeros(shape, dtype=np.bool_)
    row, col = source.position

    if source.is_point:
        r, c = int(row), int(col)
        if 0 <= r < shape[0] and 0 <= c < shape[1]:
            mask[r, c] = True
        return mask

    rr, cc = np.ogrid[:shape[0], :shape[1]]
    mask[:] = (rr - row) ** 2 + (cc - col) ** 2 <= source.radius ** 2
    return mask


def step(grid: GridState, source: BeamSource) -> GridState:
    """
    Apply one tick to `grid` in place.

    Args:
        grid: Grid to advance; its field is replaced by the next-step field.
        source: Current beam position and radius.

    Returns:
        The same grid, for chaining.
    """
    old = grid.field
    new = old.copy()
    dt = grid.time_step

    # 1. Source injection
    mask = footprint_mask(old.shape, source)
    new[mask] += (grid.source_temp - old[mask]) * dt

    # 2. Diffusion (interior only)
    add_interior_diffusion(old, new, grid.diffusion_rate, dt)

    # 3. Cooling to ambient
    new += (grid.ambient_temp - old) * grid.cooling_rate * dt

    grid.field = new
    return grid
