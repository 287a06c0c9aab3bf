"""Pinhole camera for primary ray generation.

The camera sits at the origin looking down -z. Pixel (i, j), with row 0
at the top of the image, maps to the view-space direction

    ((i + 0.5) - W/2, -(j + 0.5) + H/2, -H / (2 tan(fov/2)))

which is normalized before use. The image plane depth only depends on the
camera configuration, so it is computed once on the host.

Example:
    >>> camera = PinholeCamera(width=1024, height=768)
    >>> round(camera.image_plane_depth, 3)
    -665.108
"""

import math
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.whitted.core.ray import Ray, vec3

# Primary rays start here
CAMERA_ORIGIN = vec3(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for the fixed pinhole camera.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in radians, measured across the image height.
    """

    width: int = 1024
    height: int = 768
    fov: float = math.pi / 3.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 < self.fov < math.pi:
            raise ValueError(f"fov must be in (0, pi) radians, got {self.fov}")

    @property
    def image_plane_depth(self) -> float:
        """The z component shared by every primary ray direction."""
        return -self.height / (2.0 * math.tan(self.fov / 2.0))


@ti.func
def primary_ray_direction(
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    plane_depth: ti.f32,
) -> vec3:
    """Unit view direction through the center of pixel (i, j).

    Args:
        pixel_i: Column (0 = left).
        pixel_j: Row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        plane_depth: PinholeCamera.image_plane_depth.

    Returns:
        The normalized ray direction.
    """
    x = (ti.cast(pixel_i, ti.f32) + 0.5) - ti.cast(width, ti.f32) / 2.0
    y = -(ti.cast(pixel_j, ti.f32) + 0.5) + ti.cast(height, ti.f32) / 2.0
    return tm.normalize(vec3(x, y, plane_depth))


@ti.func
def primary_ray(
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    plane_depth: ti.f32,
) -> Ray:
    """The camera ray through pixel (i, j)."""
    direction = primary_ray_direction(pixel_i, pixel_j, width, height, plane_depth)
    return Ray(origin=CAMERA_ORIGIN, direction=direction)
