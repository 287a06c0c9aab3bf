"""Immutable scene description.

A scene is plain data: materials, spheres and point lights held in frozen
dataclasses. It is authored on the Python side (by hand, from the
reference scene factory or from a JSON file) and uploaded to the device
once per render by SceneData. Nothing here is mutated while rendering.

Example:
    >>> ivory = Material(1.0, (0.6, 0.3, 0.1, 0.0), (0.4, 0.8, 0.5), 50.0)
    >>> scene = Scene(
    ...     spheres=(Sphere((-3.0, 0.0, -16.0), 2.0, ivory),),
    ...     lights=(Light((-20.0, 20.0, 20.0), 1.5),),
    ... )
    >>> len(scene.materials())
    1
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


def _as_floats(name: str, values: Any, size: int) -> tuple[float, ...]:
    """Coerce a sequence to a tuple of floats of the given length."""
    result = tuple(float(v) for v in values)
    if len(result) != size:
        raise ValueError(f"{name} must have {size} components, got {len(result)}")
    return result


@dataclass(frozen=True)
class Material:
    """Surface response of a sphere.

    The defaults describe the material a surface gets when nothing else is
    specified; the checkerboard plane starts from it.

    Attributes:
        refractive_index: Index of refraction (1.0 means no bending).
        albedo: Weights of the diffuse, specular, reflected and refracted
            contributions. They are independent scale factors and need not
            sum to one.
        diffuse_color: Base RGB colour in [0, 1] before lighting.
        specular_exponent: Phong shininess; larger values give tighter highlights.
    """

    refractive_index: float = 1.0
    albedo: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)
    diffuse_color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    specular_exponent: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "refractive_index", float(self.refractive_index))
        object.__setattr__(self, "albedo", _as_floats("albedo", self.albedo, 4))
        object.__setattr__(
            self, "diffuse_color", _as_floats("diffuse_color", self.diffuse_color, 3)
        )
        object.__setattr__(self, "specular_exponent", float(self.specular_exponent))
        if self.refractive_index <= 0.0:
            raise ValueError(f"refractive_index must be positive, got {self.refractive_index}")
        if self.specular_exponent < 0.0:
            raise ValueError(
                f"specular_exponent must be non-negative, got {self.specular_exponent}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "refractive_index": self.refractive_index,
            "albedo": list(self.albedo),
            "diffuse_color": list(self.diffuse_color),
            "specular_exponent": self.specular_exponent,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Material:
        defaults = cls()
        return cls(
            refractive_index=data.get("refractive_index", defaults.refractive_index),
            albedo=data.get("albedo", defaults.albedo),
            diffuse_color=data.get("diffuse_color", defaults.diffuse_color),
            specular_exponent=data.get("specular_exponent", defaults.specular_exponent),
        )


@dataclass(frozen=True)
class Light:
    """A point light.

    Attributes:
        position: Light position in world space.
        intensity: Scalar intensity (positive).
    """

    position: tuple[float, float, float]
    intensity: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _as_floats("position", self.position, 3))
        object.__setattr__(self, "intensity", float(self.intensity))
        if self.intensity <= 0.0:
            raise ValueError(f"Light intensity must be positive, got {self.intensity}")


@dataclass(frozen=True)
class Sphere:
    """A sphere with its material.

    Attributes:
        center: Center point in world space.
        radius: Radius (positive).
        material: Surface material, usually shared with other spheres.
    """

    center: tuple[float, float, float]
    radius: float
    material: Material = field(default_factory=Material)

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _as_floats("center", self.center, 3))
        object.__setattr__(self, "radius", float(self.radius))
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")


@dataclass(frozen=True)
class Scene:
    """An ordered collection of spheres and lights.

    Sphere order matters: when two spheres are hit at exactly the same
    distance the one listed first is reported.

    Attributes:
        spheres: Spheres in iteration order.
        lights: Point lights.
    """

    spheres: tuple[Sphere, ...] = ()
    lights: tuple[Light, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "spheres", tuple(self.spheres))
        object.__setattr__(self, "lights", tuple(self.lights))

    def materials(self) -> list[Material]:
        """Distinct materials in order of first use."""
        unique: list[Material] = []
        for sphere in self.spheres:
            if sphere.material not in unique:
                unique.append(sphere.material)
        return unique

    def material_indices(self) -> list[int]:
        """Index into materials() for every sphere."""
        table = self.materials()
        return [table.index(sphere.material) for sphere in self.spheres]

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization).

        Materials are written once to a named table and referenced by name.
        """
        table = {f"material_{i}": mat.to_dict() for i, mat in enumerate(self.materials())}
        spheres = []
        for sphere, index in zip(self.spheres, self.material_indices()):
            spheres.append(
                {
                    "center": list(sphere.center),
                    "radius": sphere.radius,
                    "material": f"material_{index}",
                }
            )
        return {
            "materials": table,
            "spheres": spheres,
            "lights": [
                {"position": list(light.position), "intensity": light.intensity}
                for light in self.lights
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Scene:
        """Build a scene from a dictionary.

        Args:
            data: Dictionary with 'materials', 'spheres' and 'lights' keys.

        Raises:
            ValueError: If a sphere references an unknown material or any
                value is invalid.
        """
        materials = {
            name: Material.from_dict(params)
            for name, params in data.get("materials", {}).items()
        }
        spheres = []
        for sphere_config in data.get("spheres", []):
            name = sphere_config.get("material")
            if name is None:
                material = Material()
            elif name in materials:
                material = materials[name]
            else:
                raise ValueError(f"Unknown material: {name}")
            spheres.append(
                Sphere(
                    center=sphere_config.get("center", (0.0, 0.0, 0.0)),
                    radius=sphere_config.get("radius", 1.0),
                    material=material,
                )
            )
        lights = [
            Light(position=light_config["position"], intensity=light_config["intensity"])
            for light_config in data.get("lights", [])
        ]
        return cls(spheres=tuple(spheres), lights=tuple(lights))


def load_scene(path: str | Path) -> Scene:
    """Read a scene from a JSON file."""
    with open(path, encoding="utf-8") as f:
        return Scene.from_dict(json.load(f))


def save_scene(scene: Scene, path: str | Path) -> None:
    """Write a scene to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(scene.to_dict(), f, indent=2)
