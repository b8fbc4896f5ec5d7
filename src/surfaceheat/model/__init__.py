"""
The MODEL layer contains plain data structures.
It has NO knowledge of the integrator, the trajectories or the renderer.
"""
