"""Geometry kernels for core roughing: vectors, ball-ray slicing, surfaces, tool shapes and link moves."""

__version__ = "0.1.0"

__all__ = ["geometry", "normray", "slicer", "surface", "toolshape", "params", "links"]