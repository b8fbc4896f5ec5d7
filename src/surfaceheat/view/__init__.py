"""
Render sinks. Nothing in the numerical core depends on this package.
"""
