"""Interactive 2D geometric drawing surface."""

__version__ = "0.1.0"
