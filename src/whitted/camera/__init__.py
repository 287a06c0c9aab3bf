"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera at the origin looking down -z

One primary ray is generated per pixel, through the pixel center. Rows
are flipped so that image row 0 is the top of the picture.
"""

from .pinhole import CAMERA_ORIGIN, PinholeCamera, primary_ray, primary_ray_direction

__all__ = [
    "PinholeCamera",
    "primary_ray",
    "primary_ray_direction",
    "CAMERA_ORIGIN",
]
