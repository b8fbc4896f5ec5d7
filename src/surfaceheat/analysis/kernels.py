# kernels.py
from __future__ import annotations

import numpy as np
import numpy.typing as npt
import numba as nb


# ---- JIT'd stencil and reduction kernels ----

@nb.njit(cache=True, fastmath=True)
def add_interior_diffusion(
    old: npt.NDArray[np.float64],
    new: npt.NDArray[np.float64],
    diffusion_rate: float,
    time_step: float,
) -> None:
    """
    Add the 5-point Laplacian of `old` to the interior cells of `new`.

    Neighbors are always read from `old`; the outermost ring of `new`
    is left untouched.
    """
    rows, cols = old.shape
    scale = diffusion_rate * time_step
    for i in range(1, rows - 1):
        for j in range(1, cols - 1):
            laplacian = (
                old[i - 1, j] + old[i + 1, j] + old[i, j - 1] + old[i, j + 1]
                - 4.0 * old[i, j]
            )
            new[i, j] += scale * laplacian


@nb.njit(cache=True, fastmath=True)
def max_distance_above(
    excess: npt.NDArray[np.float64],
    threshold: float,
    row: float,
    col: float,
) -> float:
    """
    Largest Euclidean distance from (row, col) to a cell with excess > threshold.

    Returns -1.0 when no cell exceeds the threshold.
    """
    rows, cols = excess.shape
    best = -1.0
    for i in range(rows):
        for j in range(cols):
            if excess[i, j] > threshold:
                d2 = (i - row) * (i - row) + (j - col) * (j - col)
                if d2 > best:
                    best = d2
    if best < 0.0:
        return -1.0
    return np.sqrt(best)
