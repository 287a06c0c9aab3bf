"""Device-side scene storage and nearest-hit query.

SceneData uploads an immutable Scene into Taichi fields owned by the
instance (no module-level scene state) and exposes intersect() as a
Taichi function for use inside rendering kernels.

The query scans every sphere linearly, keeping the smallest forward
distance; on an exact tie the earlier sphere keeps the hit. The
checkerboard plane is then tested against the best sphere distance.
When the plane wins, it reuses the material resolved so far (the default
material, or the material of a sphere hit further along the ray) with
only the diffuse colour replaced by the tile colour.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.intersection import SceneData
    >>> from src.whitted.scene.reference import create_reference_scene
    >>> scene, _ = create_reference_scene()
    >>> data = SceneData(scene)
    >>> info = data.nearest_hit((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
"""

from dataclasses import dataclass

import numpy as np
import taichi as ti
import taichi.math as tm

from src.whitted.geometry.checkerboard import (
    PLANE_NORMAL,
    checkerboard_color,
    intersect_checkerboard,
)
from src.whitted.core.ray import Ray, ray_at
from src.whitted.geometry.sphere import ray_sphere_intersect
from src.whitted.scene.description import Material, Scene

# Type aliases for vectors using Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4

# Hits at or beyond this distance count as escaping the scene
MAX_DISTANCE = 1000.0

# Distance reported before anything is hit
FLOAT_MAX = 3.4028234663852886e38


@ti.dataclass
class MaterialRecord:
    """Device copy of a Material.

    Attributes:
        refractive_index: Index of refraction.
        albedo: Diffuse, specular, reflective and refractive weights.
        diffuse_color: Base RGB colour.
        specular_exponent: Phong shininess.
    """

    refractive_index: ti.f32
    albedo: vec4
    diffuse_color: vec3
    specular_exponent: ti.f32


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene query.

    Attributes:
        hit: 1 if the ray hit a surface closer than MAX_DISTANCE, else 0.
        t: Distance to the hit along the ray.
        point: The hit point. Only valid if hit == 1.
        normal: Unit outward surface normal. Only valid if hit == 1.
        material: The resolved material (a copy). Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    material: MaterialRecord


@ti.func
def default_material() -> MaterialRecord:
    """The device form of Material()."""
    return MaterialRecord(
        refractive_index=1.0,
        albedo=vec4(1.0, 0.0, 0.0, 0.0),
        diffuse_color=vec3(0.0, 0.0, 0.0),
        specular_exponent=0.0,
    )


@ti.func
def miss_record() -> SceneHitRecord:
    """A SceneHitRecord for a ray that escapes the scene."""
    return SceneHitRecord(
        hit=0,
        t=FLOAT_MAX,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        material=default_material(),
    )


@dataclass(frozen=True)
class HitInfo:
    """Host-side copy of a successful scene query.

    Attributes:
        distance: Distance from the ray origin to the hit.
        point: The hit point.
        normal: Unit outward surface normal.
        material: The resolved material.
    """

    distance: float
    point: tuple[float, float, float]
    normal: tuple[float, float, float]
    material: Material


def _to_tuple(v) -> tuple[float, ...]:
    return tuple(float(c) for c in v)


@ti.data_oriented
class SceneData:
    """A Scene uploaded to Taichi fields.

    Fields are sized to the scene; an empty sphere or light list still
    allocates one unused slot because Taichi fields cannot be empty.

    Attributes:
        scene: The immutable scene this instance was built from.
        num_spheres: Number of spheres (compile-time constant for kernels).
        num_lights: Number of lights (compile-time constant for kernels).
    """

    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        self.num_spheres = len(scene.spheres)
        self.num_lights = len(scene.lights)
        materials = scene.materials()

        self.sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=max(self.num_spheres, 1))
        self.sphere_radii = ti.field(dtype=ti.f32, shape=max(self.num_spheres, 1))
        self.sphere_material_ids = ti.field(dtype=ti.i32, shape=max(self.num_spheres, 1))
        self.materials = MaterialRecord.field(shape=max(len(materials), 1))
        self.light_positions = ti.Vector.field(3, dtype=ti.f32, shape=max(self.num_lights, 1))
        self.light_intensities = ti.field(dtype=ti.f32, shape=max(self.num_lights, 1))

        # Scratch record for host-side queries
        self._probe = SceneHitRecord.field(shape=())

        self._upload(materials)

    def _upload(self, materials: list[Material]) -> None:
        """Copy the scene into the Taichi fields."""
        if self.num_spheres > 0:
            self.sphere_centers.from_numpy(
                np.array([s.center for s in self.scene.spheres], dtype=np.float32)
            )
            self.sphere_radii.from_numpy(
                np.array([s.radius for s in self.scene.spheres], dtype=np.float32)
            )
            self.sphere_material_ids.from_numpy(
                np.array(self.scene.material_indices(), dtype=np.int32)
            )

        for i, mat in enumerate(materials):
            self.materials.refractive_index[i] = mat.refractive_index
            self.materials.albedo[i] = mat.albedo
            self.materials.diffuse_color[i] = mat.diffuse_color
            self.materials.specular_exponent[i] = mat.specular_exponent

        if self.num_lights > 0:
            self.light_positions.from_numpy(
                np.array([light.position for light in self.scene.lights], dtype=np.float32)
            )
            self.light_intensities.from_numpy(
                np.array([light.intensity for light in self.scene.lights], dtype=np.float32)
            )

    @ti.func
    def intersect(self, ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
        """Find the nearest surface along a ray.

        Args:
            ray_origin: The starting point of the ray.
            ray_direction: The unit direction of the ray.

        Returns:
            A SceneHitRecord; hit is 0 when the ray escapes the scene.
        """
        ray = Ray(origin=ray_origin, direction=ray_direction)
        spheres_dist = FLOAT_MAX
        point = vec3(0.0, 0.0, 0.0)
        normal = vec3(0.0, 0.0, 0.0)
        material = default_material()

        for i in range(self.num_spheres):
            center = self.sphere_centers[i]
            hit, t = ray_sphere_intersect(ray_origin, ray_direction, center, self.sphere_radii[i])
            # Strict comparison: the earlier sphere wins a tie
            if hit == 1 and t < spheres_dist:
                spheres_dist = t
                point = ray_at(ray, t)
                normal = tm.normalize(point - center)
                material = self.materials[self.sphere_material_ids[i]]

        nearest = spheres_dist
        plane_hit, plane_t, plane_point = intersect_checkerboard(ray_origin, ray_direction)
        if plane_hit == 1 and plane_t < spheres_dist:
            nearest = plane_t
            point = plane_point
            normal = PLANE_NORMAL
            material.diffuse_color = checkerboard_color(plane_point)

        did_hit = 0
        if nearest < MAX_DISTANCE:
            did_hit = 1

        return SceneHitRecord(
            hit=did_hit,
            t=nearest,
            point=point,
            normal=normal,
            material=material,
        )

    @ti.kernel
    def _query(self, ray_origin: vec3, ray_direction: vec3):
        self._probe[None] = self.intersect(ray_origin, ray_direction)

    def nearest_hit(
        self,
        origin: tuple[float, float, float],
        direction: tuple[float, float, float],
    ) -> HitInfo | None:
        """Run a single scene query from Python.

        Args:
            origin: Ray origin.
            direction: Ray direction (should be unit length).

        Returns:
            A HitInfo for the nearest surface, or None if the ray escapes.
        """
        self._query(vec3(*origin), vec3(*direction))
        if self._probe.hit[None] == 0:
            return None

        material = Material(
            refractive_index=float(self._probe.material.refractive_index[None]),
            albedo=_to_tuple(self._probe.material.albedo[None]),
            diffuse_color=_to_tuple(self._probe.material.diffuse_color[None]),
            specular_exponent=float(self._probe.material.specular_exponent[None]),
        )
        return HitInfo(
            distance=float(self._probe.t[None]),
            point=_to_tuple(self._probe.point[None]),
            normal=_to_tuple(self._probe.normal[None]),
            material=material,
        )
