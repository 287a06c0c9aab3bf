"""Recursive Whitted light transport.

The colour seen along a ray is

    diffuse_color * diffuse * albedo[0]
    + white * specular * albedo[1]
    + cast_ray(reflected) * albedo[2]
    + cast_ray(refracted) * albedo[3]

where diffuse and specular are the Phong intensities summed over every
light not blocked by a shadow probe. Rays that miss, or that are deeper
than MAX_DEPTH, return the background colour.

Taichi functions are inlined at compile time and cannot call themselves,
so the recursion tree is walked depth-first with a small local stack.
Each stack frame carries the product of albedo weights on its path from
the primary ray, which makes the accumulated colour equal to the
recursive formula above. Branches with zero weight are not traced.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.intersection import SceneData
    >>> from src.whitted.scene.reference import create_reference_scene
    >>> scene, _ = create_reference_scene()
    >>> integrator = WhittedIntegrator(SceneData(scene))
    >>> color = integrator.trace((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
"""

import taichi as ti
import taichi.math as tm

from src.whitted.core.ray import (
    is_zero,
    offset_origin,
    offset_shadow_origin,
    reflect,
    refract,
    vec3,
)
from src.whitted.scene.intersection import SceneData, SceneHitRecord, miss_record

# =============================================================================
# Rendering Constants
# =============================================================================

# Deepest recursion level that is still shaded; deeper rays see the background
MAX_DEPTH = 4

# Sky colour, also returned when the recursion limit is reached
BACKGROUND_COLOR = vec3(0.2, 0.7, 0.8)

SPECULAR_COLOR = vec3(1.0, 1.0, 1.0)

# A frame is (origin xyz, direction xyz, depth, weight)
FRAME_SIZE = 8

# Pending rays: one sibling per level plus the two children just pushed
STACK_SIZE = MAX_DEPTH + 2


# =============================================================================
# Ray Stack
# =============================================================================


@ti.func
def _make_frame(origin: vec3, direction: vec3, depth: ti.i32, weight: ti.f32):
    return ti.Vector(
        [
            origin.x,
            origin.y,
            origin.z,
            direction.x,
            direction.y,
            direction.z,
            ti.cast(depth, ti.f32),
            weight,
        ]
    )


@ti.func
def _push(stack, top: ti.i32, frame):
    """Return a copy of stack with frame written at row top.

    Rows are selected with a static loop so every matrix index is a
    compile-time constant.
    """
    result = stack
    for k in ti.static(range(STACK_SIZE)):
        if k == top:
            for c in ti.static(range(FRAME_SIZE)):
                result[k, c] = frame[c]
    return result


@ti.func
def _peek(stack, top: ti.i32):
    """Return row top of the stack."""
    frame = ti.Vector.zero(ti.f32, FRAME_SIZE)
    for k in ti.static(range(STACK_SIZE)):
        if k == top:
            for c in ti.static(range(FRAME_SIZE)):
                frame[c] = stack[k, c]
    return frame


# =============================================================================
# Integrator
# =============================================================================


@ti.data_oriented
class WhittedIntegrator:
    """Phong shading with shadows, reflection and refraction.

    Attributes:
        scene: The device-side scene queried by every ray.
    """

    def __init__(self, scene: SceneData) -> None:
        self.scene = scene
        self._color = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._intensity = ti.Vector.field(2, dtype=ti.f32, shape=())

    @ti.func
    def direct_lighting(
        self,
        point: vec3,
        normal: vec3,
        view_dir: vec3,
        specular_exponent: ti.f32,
    ):
        """Sum diffuse and specular intensities over the unoccluded lights.

        A light is skipped when the shadow probe toward it hits a surface
        closer than the light itself.

        Args:
            point: The surface point being shaded.
            normal: The unit outward normal at the point.
            view_dir: Direction of the ray that reached the point.
            specular_exponent: Phong shininess of the surface.

        Returns:
            A tuple (diffuse_intensity, specular_intensity).
        """
        diffuse = 0.0
        specular = 0.0
        for i in range(self.scene.num_lights):
            to_light = self.scene.light_positions[i] - point
            light_dir = tm.normalize(to_light)
            light_distance = tm.length(to_light)
            intensity = self.scene.light_intensities[i]

            shadow_origin = offset_shadow_origin(point, normal, light_dir)
            shadow = self.scene.intersect(shadow_origin, light_dir)
            occluded = shadow.hit == 1 and tm.length(shadow.point - shadow_origin) < light_distance

            if not occluded:
                diffuse += intensity * ti.max(0.0, tm.dot(light_dir, normal))
                highlight = ti.max(0.0, -tm.dot(reflect(-light_dir, normal), view_dir))
                specular += (highlight**specular_exponent) * intensity

        return diffuse, specular

    @ti.func
    def shade_local(self, rec: SceneHitRecord, view_dir: vec3) -> vec3:
        """Diffuse plus specular colour at a hit, before secondary rays."""
        diffuse, specular = self.direct_lighting(
            rec.point, rec.normal, view_dir, rec.material.specular_exponent
        )
        albedo = rec.material.albedo
        return (
            rec.material.diffuse_color * diffuse * albedo[0]
            + SPECULAR_COLOR * specular * albedo[1]
        )

    @ti.func
    def cast_ray(self, ray_origin: vec3, ray_direction: vec3) -> vec3:
        """Colour seen along a primary ray.

        Args:
            ray_origin: The starting point of the ray.
            ray_direction: The unit direction of the ray.

        Returns:
            The unclamped RGB colour.
        """
        color = vec3(0.0, 0.0, 0.0)
        stack = ti.Matrix.zero(ti.f32, STACK_SIZE, FRAME_SIZE)
        stack = _push(stack, 0, _make_frame(ray_origin, ray_direction, 0, 1.0))
        top = 1

        while top > 0:
            top -= 1
            frame = _peek(stack, top)
            origin = vec3(frame[0], frame[1], frame[2])
            direction = vec3(frame[3], frame[4], frame[5])
            depth = ti.cast(frame[6], ti.i32)
            weight = frame[7]

            rec = miss_record()
            if depth <= MAX_DEPTH:
                rec = self.scene.intersect(origin, direction)

            if rec.hit == 0:
                color += weight * BACKGROUND_COLOR
            else:
                color += weight * self.shade_local(rec, direction)

                albedo = rec.material.albedo
                reflect_weight = weight * albedo[2]
                if reflect_weight != 0.0:
                    reflect_dir = reflect(direction, rec.normal)
                    reflect_origin = offset_origin(rec.point, rec.normal, reflect_dir)
                    stack = _push(
                        stack, top, _make_frame(reflect_origin, reflect_dir, depth + 1, reflect_weight)
                    )
                    top += 1

                refract_weight = weight * albedo[3]
                if refract_weight != 0.0:
                    refract_dir = refract(direction, rec.normal, rec.material.refractive_index)
                    if is_zero(refract_dir):
                        # Total internal reflection: nothing is transmitted and
                        # the branch sees the background
                        color += refract_weight * BACKGROUND_COLOR
                    else:
                        refract_dir = tm.normalize(refract_dir)
                        refract_origin = offset_origin(rec.point, rec.normal, refract_dir)
                        stack = _push(
                            stack,
                            top,
                            _make_frame(refract_origin, refract_dir, depth + 1, refract_weight),
                        )
                        top += 1

        return color

    # =========================================================================
    # Host-side access (testing and debugging)
    # =========================================================================

    @ti.kernel
    def _trace_kernel(self, ray_origin: vec3, ray_direction: vec3):
        self._color[None] = self.cast_ray(ray_origin, ray_direction)

    @ti.kernel
    def _direct_kernel(
        self, point: vec3, normal: vec3, view_dir: vec3, specular_exponent: ti.f32
    ):
        diffuse, specular = self.direct_lighting(point, normal, view_dir, specular_exponent)
        self._intensity[None] = ti.Vector([diffuse, specular])

    def trace(
        self,
        origin: tuple[float, float, float],
        direction: tuple[float, float, float],
    ) -> tuple[float, float, float]:
        """Trace a single ray from Python.

        Args:
            origin: Ray origin.
            direction: Unit ray direction.

        Returns:
            Tuple of (R, G, B) colour values, unclamped.
        """
        self._trace_kernel(vec3(*origin), vec3(*direction))
        color = self._color[None]
        return (float(color[0]), float(color[1]), float(color[2]))

    def direct_intensity(
        self,
        point: tuple[float, float, float],
        normal: tuple[float, float, float],
        view_dir: tuple[float, float, float],
        specular_exponent: float = 0.0,
    ) -> tuple[float, float]:
        """Evaluate direct_lighting from Python.

        Returns:
            Tuple of (diffuse_intensity, specular_intensity).
        """
        self._direct_kernel(vec3(*point), vec3(*normal), vec3(*view_dir), specular_exponent)
        intensity = self._intensity[None]
        return (float(intensity[0]), float(intensity[1]))
