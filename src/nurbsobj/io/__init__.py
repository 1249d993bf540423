"""I/O utilities for nurbsobj."""

from .obj import read_curve_obj, read_surface_obj, write_curve_obj, write_surface_obj

__all__ = ['read_curve_obj', 'read_surface_obj', 'write_curve_obj', 'write_surface_obj']
