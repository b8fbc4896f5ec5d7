"""
Numerical core: the step integrator, its JIT kernels and the heat radius metric.
"""
