"""Geometry module for the two kinds of surface in a scene.

Components:
    sphere: Ray/sphere intersection returning the closest forward distance
    checkerboard: The analytic floor plane and its tile colouring

All routines are Taichi functions (@ti.func) so they inline into the
rendering kernels.
"""

from .checkerboard import (
    PLANE_NORMAL,
    PLANE_Y,
    checkerboard_color,
    intersect_checkerboard,
)
from .sphere import ray_sphere_intersect

__all__ = [
    "ray_sphere_intersect",
    "intersect_checkerboard",
    "checkerboard_color",
    "PLANE_NORMAL",
    "PLANE_Y",
]
