"""
Simulation Loop
===============
Advances the grid tick by tick and hands each frame to an optional render sink.
"""
