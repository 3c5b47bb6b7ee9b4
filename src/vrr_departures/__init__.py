"""Live departure board for the VRR transit network."""

__version__ = "0.1.0"
