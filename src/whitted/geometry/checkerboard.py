"""Analytic checkerboard plane.

The floor is not stored in the scene: it is the plane y = -4, visible only
inside |x| < 10 and -30 < z < -10. Its colour alternates between white and
black tiles of two units a side.
"""

import taichi as ti
import taichi.math as tm

vec3 = tm.vec3

PLANE_Y = -4.0
PLANE_HALF_WIDTH = 10.0
PLANE_Z_NEAR = -10.0
PLANE_Z_FAR = -30.0

# Rays with |direction.y| at or below this are treated as parallel
PARALLEL_CUTOFF = 1e-3

PLANE_NORMAL = vec3(0.0, 1.0, 0.0)
WHITE_TILE = vec3(1.0, 1.0, 1.0)
BLACK_TILE = vec3(0.0, 0.0, 0.0)


@ti.func
def intersect_checkerboard(ray_origin: vec3, ray_direction: vec3):
    """Intersect a ray with the visible part of the checkerboard plane.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        A tuple (hit, t, point). hit is 1 only for a forward intersection
        inside the visible window.
    """
    hit = 0
    t = 0.0
    point = vec3(0.0, 0.0, 0.0)
    if ti.abs(ray_direction.y) > PARALLEL_CUTOFF:
        t = -(ray_origin.y - PLANE_Y) / ray_direction.y
        point = ray_origin + t * ray_direction
        if (
            t > 0.0
            and ti.abs(point.x) < PLANE_HALF_WIDTH
            and point.z < PLANE_Z_NEAR
            and point.z > PLANE_Z_FAR
        ):
            hit = 1
    return hit, t, point


@ti.func
def checkerboard_color(point: vec3) -> vec3:
    """Tile colour at a point on the plane.

    The sum of the truncated scaled coordinates picks the tile; odd sums
    are white, even sums black.
    """
    tile = ti.cast(0.5 * point.x + 1000.0, ti.i32) + ti.cast(0.5 * point.z, ti.i32)
    color = BLACK_TILE
    if tile & 1:
        color = WHITE_TILE
    return color
