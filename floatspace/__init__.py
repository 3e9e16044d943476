"""Floatspace: pointer-seeded halo grids and drifting clouds."""

__version__ = "0.1.0"
