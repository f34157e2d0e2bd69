"""A 6502 processor model with its instruction set, and a separating-axis collision test for convex polygons."""

__version__ = "0.1.0"