"""
Inputs computed before each step: the beam trajectories.
"""
