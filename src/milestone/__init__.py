"""MileStone: a personal catalogue of portfolio projects."""

__version__ = "0.1.0"
