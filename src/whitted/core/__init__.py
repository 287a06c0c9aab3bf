"""Core rendering module.

Components:
    ray: Ray data structure, reflection, refraction and origin offsets
    integrator: Recursive Whitted light transport (Phong + shadows +
        reflection + refraction)
    renderer: Frame driver evaluating one primary ray per pixel

The transport is deterministic: no sampling, no accumulation across
frames. Every pixel is independent and is traced in parallel by Taichi.
"""

from .ray import (
    SECONDARY_EPSILON,
    SHADOW_EPSILON_BACK,
    SHADOW_EPSILON_FRONT,
    Ray,
    is_zero,
    offset_origin,
    offset_shadow_origin,
    ray_at,
    reflect,
    refract,
    vec3,
    vec4,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from src.whitted.core.integrator or src.whitted.core.renderer.

__all__ = [
    "Ray",
    "ray_at",
    "vec3",
    "vec4",
    "reflect",
    "refract",
    "is_zero",
    "offset_origin",
    "offset_shadow_origin",
    "SECONDARY_EPSILON",
    "SHADOW_EPSILON_BACK",
    "SHADOW_EPSILON_FRONT",
]
