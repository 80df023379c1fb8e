"""
Runboard: running activity dashboard core.

This package validates uploaded CSV run logs and computes overall
and per-runner statistics for presentation.
"""

from importlib.metadata import version

__version__ = version("runboard")

__all__ = ["__version__"]
