"""Ray/sphere intersection.

The test projects the vector from the ray origin to the sphere center
onto the ray direction, compares the squared distance between the center
and the ray line with the squared radius, and recovers the two chord
distances with Pythagoras. The closest forward distance wins; a ray that
starts inside the sphere gets the far distance instead.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.geometry.sphere import ray_sphere_intersect
    >>> # hit, t = ray_sphere_intersect(origin, direction, center, radius)
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def ray_sphere_intersect(
    ray_origin: vec3,
    ray_direction: vec3,
    center: vec3,
    radius: ti.f32,
):
    """Test a ray against a sphere.

    A tangent ray (perpendicular distance equal to the radius) is a valid
    grazing hit.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        center: The sphere center.
        radius: The sphere radius (positive).

    Returns:
        A tuple (hit, t) where hit is 1 if the ray meets the sphere in front
        of its origin and t is the distance to that intersection.
    """
    to_center = center - ray_origin
    t_closest = tm.dot(to_center, ray_direction)
    d2 = tm.dot(to_center, to_center) - t_closest * t_closest
    r2 = radius * radius

    hit = 0
    t = 0.0
    if d2 <= r2:
        half_chord = ti.sqrt(r2 - d2)
        t = t_closest - half_chord
        if t < 0.0:
            # Origin inside the sphere
            t = t_closest + half_chord
        if t >= 0.0:
            hit = 1

    return hit, t
