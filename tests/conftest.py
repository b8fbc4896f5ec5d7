import logging

import matplotlib

matplotlib.use("Agg")

import pytest

from surfaceheat.model.state import BeamSource, GridState


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("surfaceheat")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def small_grid():
    return GridState.new(rows=5, cols=5, ambient_temp=25.0, source_temp=100.0,
                         diffusion_rate=0.1, cooling_rate=0.02, time_step=0.1)


@pytest.fixture
def grid():
    return GridState.new(rows=21, cols=21, ambient_temp=25.0, source_temp=500.0)


@pytest.fixture
def centered_point(grid):
    return BeamSource(position=(10, 10), radius=0.0)
