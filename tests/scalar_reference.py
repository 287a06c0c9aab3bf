"""Scalar double-precision tracer used as a regression oracle.

A direct recursive transcription of the light transport, in plain Python
floats, with no Taichi involved. It is slow and only meant for small
images in tests.
"""

from __future__ import annotations

import math

from src.whitted.scene.description import Material, Scene

Vec = tuple[float, float, float]

BACKGROUND: Vec = (0.2, 0.7, 0.8)
MAX_DEPTH = 4


def _add(a: Vec, b: Vec) -> Vec:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a: Vec, b: Vec) -> Vec:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _mul(a: Vec, s: float) -> Vec:
    return (a[0] * s, a[1] * s, a[2] * s)


def _dot(a: Vec, b: Vec) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _norm(a: Vec) -> float:
    return math.sqrt(_dot(a, a))


def _normalize(a: Vec) -> Vec:
    return _mul(a, 1.0 / _norm(a))


def reflect(i: Vec, n: Vec) -> Vec:
    return _sub(i, _mul(n, 2.0 * _dot(i, n)))


def refract(i: Vec, n: Vec, index: float) -> Vec:
    cos_i = -max(-1.0, min(1.0, _dot(i, n)))
    eta_i, eta_t = 1.0, index
    if cos_i < 0:
        cos_i = -cos_i
        eta_i, eta_t = eta_t, eta_i
        n = _mul(n, -1.0)
    eta = eta_i / eta_t
    k = 1 - eta * eta * (1 - cos_i * cos_i)
    if k < 0:
        return (0.0, 0.0, 0.0)
    return _add(_mul(i, eta), _mul(n, eta * cos_i - math.sqrt(k)))


def sphere_intersect(orig: Vec, direction: Vec, center: Vec, radius: float):
    to_center = _sub(center, orig)
    t_closest = _dot(to_center, direction)
    d2 = _dot(to_center, to_center) - t_closest * t_closest
    if d2 > radius * radius:
        return None
    half = math.sqrt(radius * radius - d2)
    t = t_closest - half
    if t < 0:
        t = t_closest + half
    if t < 0:
        return None
    return t


def scene_intersect(orig: Vec, direction: Vec, scene: Scene):
    best = float("inf")
    hit = normal = None
    material = Material()
    for sphere in scene.spheres:
        t = sphere_intersect(orig, direction, sphere.center, sphere.radius)
        if t is not None and t < best:
            best = t
            hit = _add(orig, _mul(direction, t))
            normal = _normalize(_sub(hit, sphere.center))
            material = sphere.material
    plane = float("inf")
    if abs(direction[1]) > 1e-3:
        d = -(orig[1] + 4) / direction[1]
        pt = _add(orig, _mul(direction, d))
        if d > 0 and abs(pt[0]) < 10 and -30 < pt[2] < -10 and d < best:
            plane = d
            hit = pt
            normal = (0.0, 1.0, 0.0)
            tile = int(0.5 * pt[0] + 1000) + int(0.5 * pt[2])
            color = (1.0, 1.0, 1.0) if tile & 1 else (0.0, 0.0, 0.0)
            material = Material(
                material.refractive_index, material.albedo, color, material.specular_exponent
            )
    if min(best, plane) < 1000:
        return hit, normal, material
    return None


def cast_ray(orig: Vec, direction: Vec, scene: Scene, depth: int = 0) -> Vec:
    found = scene_intersect(orig, direction, scene) if depth <= MAX_DEPTH else None
    if found is None:
        return BACKGROUND
    point, n, material = found

    reflect_dir = reflect(direction, n)
    reflect_orig = (
        _sub(point, _mul(n, 1e-3)) if _dot(reflect_dir, n) < 0 else _add(point, _mul(n, 1e-3))
    )
    reflect_color = cast_ray(reflect_orig, reflect_dir, scene, depth + 1)

    refract_dir = refract(direction, n, material.refractive_index)
    if refract_dir == (0.0, 0.0, 0.0):
        refract_color = BACKGROUND
    else:
        refract_dir = _normalize(refract_dir)
        refract_orig = (
            _sub(point, _mul(n, 1e-3))
            if _dot(refract_dir, n) < 0
            else _add(point, _mul(n, 1e-3))
        )
        refract_color = cast_ray(refract_orig, refract_dir, scene, depth + 1)

    diffuse = specular = 0.0
    for light in scene.lights:
        to_light = _sub(light.position, point)
        light_dir = _normalize(to_light)
        light_distance = _norm(to_light)
        if _dot(light_dir, n) < 0:
            shadow_orig = _sub(point, _mul(n, 1e-1))
        else:
            shadow_orig = _add(point, _mul(n, 1e-2))
        shadow = scene_intersect(shadow_orig, light_dir, scene)
        if shadow is not None and _norm(_sub(shadow[0], shadow_orig)) < light_distance:
            continue
        diffuse += light.intensity * max(0.0, _dot(light_dir, n))
        highlight = max(0.0, -_dot(reflect(_mul(light_dir, -1.0), n), direction))
        specular += highlight**material.specular_exponent * light.intensity

    albedo = material.albedo
    color = _mul(material.diffuse_color, diffuse * albedo[0])
    color = _add(color, _mul((1.0, 1.0, 1.0), specular * albedo[1]))
    color = _add(color, _mul(reflect_color, albedo[2]))
    return _add(color, _mul(refract_color, albedo[3]))


def render(scene: Scene, width: int, height: int, fov: float) -> list[list[Vec]]:
    """Render rows top to bottom."""
    depth = -height / (2.0 * math.tan(fov / 2.0))
    rows = []
    for j in range(height):
        row = []
        for i in range(width):
            direction = _normalize(((i + 0.5) - width / 2.0, -(j + 0.5) + height / 2.0, depth))
            row.append(cast_ray((0.0, 0.0, 0.0), direction, scene))
        rows.append(row)
    return rows
