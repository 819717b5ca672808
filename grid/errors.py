"""
errors.py — Configuration Errors
=================================
Structural problems with grid parameters fail fast and loudly.
An unreachable target is NOT an error: it is an empty path.
"""


class InvalidConfiguration(ValueError):
    """Bad dimensions, endpoints, density or speed preset."""
