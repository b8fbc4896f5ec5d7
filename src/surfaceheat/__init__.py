"""
surfaceheat
===========
Finite-difference simulation of a surface heated by a moving beam.

A rectangular grid of temperatures is advanced tick by tick under three
terms: injection at the beam footprint, diffusion between neighbors and
relaxation toward ambient temperature.
"""
from surfaceheat.analysis.dissipation import DissipationHistory, measure
from surfaceheat.analysis.integrator import footprint_mask, step
from surfaceheat.config import ConfigurationError, SimulationConfig
from surfaceheat.model.state import BeamSource, GridState
from surfaceheat.pre.trajectories import MotionPattern, position_at
from surfaceheat.solvers.simulation import Frame, Simulation, SimulationResult

__all__ = [
    "BeamSource",
    "ConfigurationError",
    "DissipationHistory",
    "Frame",
    "GridState",
    "MotionPattern",
    "Simulation",
    "SimulationConfig",
    "SimulationResult",
    "footprint_mask",
    "measure",
    "position_at",
    "step",
]
