"""Ray data structure and shading transforms.

This module provides the Ray dataclass together with the direction
transforms used at every surface hit: mirror reflection, Snell
refraction and the epsilon offsets that keep secondary rays from
re-intersecting the surface they start on.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> incident = ti.math.vec3(1.0, -1.0, 0.0)
    >>> normal = ti.math.vec3(0.0, 1.0, 0.0)
    >>> # reflect(incident, normal) == vec3(1, 1, 0) inside a kernel
"""

import taichi as ti
import taichi.math as tm

# Type aliases for Taichi's 3- and 4-component vectors
vec3 = tm.vec3
vec4 = tm.vec4

# Offset applied to reflection and refraction ray origins
SECONDARY_EPSILON = 1e-3

# Shadow probe offsets: away from the light vs. toward it
SHADOW_EPSILON_BACK = 1e-1
SHADOW_EPSILON_FRONT = 1e-2


@ti.dataclass
class Ray:
    """A ray with an origin point and a unit direction.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3, unit length).
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point ray.origin + t * ray.direction."""
    return ray.origin + t * ray.direction


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident direction about a surface normal.

    Computes I - 2 (I . N) N. The normal should be unit length.

    Args:
        incident: The incoming direction (pointing toward the surface).
        normal: The unit surface normal.

    Returns:
        The mirrored direction.
    """
    return incident - 2.0 * tm.dot(incident, normal) * normal


@ti.func
def refract(incident: vec3, normal: vec3, refractive_index: ti.f32) -> vec3:
    """Refract an incident direction through a surface using Snell's law.

    The outside medium is vacuum (index 1). When the incident direction
    and the normal point the same way the ray is leaving the medium, so
    the two indices swap roles and the normal is flipped.

    Args:
        incident: The incoming unit direction.
        normal: The unit outward surface normal.
        refractive_index: Index of the medium behind the surface.

    Returns:
        The transmitted direction (not normalized), or the zero vector on
        total internal reflection.
    """
    cos_i = -tm.clamp(tm.dot(incident, normal), -1.0, 1.0)
    eta_i = 1.0
    eta_t = refractive_index
    n = normal
    if cos_i < 0.0:
        # Ray is inside the object
        cos_i = -cos_i
        eta_i = refractive_index
        eta_t = 1.0
        n = -normal
    eta = eta_i / eta_t
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)
    result = vec3(0.0, 0.0, 0.0)
    if k >= 0.0:
        result = incident * eta + n * (eta * cos_i - ti.sqrt(k))
    return result


@ti.func
def is_zero(v: vec3) -> ti.i32:
    """Check whether every component of v is exactly zero."""
    return v.x == 0.0 and v.y == 0.0 and v.z == 0.0


@ti.func
def offset_origin(point: vec3, normal: vec3, direction: vec3) -> vec3:
    """Offset a secondary ray origin to avoid self-intersection.

    The point is pushed by SECONDARY_EPSILON along the normal, inward when
    the direction enters the surface and outward otherwise.

    Args:
        point: The surface hit point.
        normal: The unit outward surface normal.
        direction: The secondary ray direction.

    Returns:
        The offset origin.
    """
    offset = SECONDARY_EPSILON * normal
    if tm.dot(direction, normal) < 0.0:
        offset = -offset
    return point + offset


@ti.func
def offset_shadow_origin(point: vec3, normal: vec3, light_dir: vec3) -> vec3:
    """Offset a shadow probe origin with asymmetric epsilons.

    Points on the side facing away from the light move 1e-1 inward,
    lit points move 1e-2 outward.
    """
    result = point + SHADOW_EPSILON_FRONT * normal
    if tm.dot(light_dir, normal) < 0.0:
        result = point - SHADOW_EPSILON_BACK * normal
    return result
