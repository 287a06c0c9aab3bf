"""Reference scene: four spheres over a checkerboard, lit by three lights.

The scene is the regression fixture for the renderer: an ivory sphere, a
glass sphere, a red rubber sphere and a large mirror sphere, viewed from
the origin at 1024x768 with a 60 degree field of view.

Example:
    >>> scene, camera = create_reference_scene()
    >>> len(scene.spheres), len(scene.lights)
    (4, 3)
"""

import math

from src.whitted.camera.pinhole import PinholeCamera
from src.whitted.scene.description import Light, Material, Scene, Sphere

# =============================================================================
# Materials
# =============================================================================

IVORY = Material(
    refractive_index=1.0,
    albedo=(0.6, 0.3, 0.1, 0.0),
    diffuse_color=(0.4, 0.8, 0.5),
    specular_exponent=50.0,
)
GLASS = Material(
    refractive_index=1.5,
    albedo=(0.0, 0.5, 0.1, 0.8),
    diffuse_color=(0.6, 0.7, 0.8),
    specular_exponent=1255.0,
)
RED_RUBBER = Material(
    refractive_index=1.0,
    albedo=(0.9, 0.1, 0.0, 0.0),
    diffuse_color=(0.3, 0.1, 0.1),
    specular_exponent=10.0,
)
MIRROR = Material(
    refractive_index=1.0,
    albedo=(0.0, 10.0, 0.8, 0.0),
    diffuse_color=(1.0, 1.0, 1.0),
    specular_exponent=1425.0,
)

# =============================================================================
# Reference camera
# =============================================================================

REFERENCE_WIDTH = 1024
REFERENCE_HEIGHT = 768
REFERENCE_FOV = math.pi / 3.0


def create_reference_scene(
    width: int = REFERENCE_WIDTH,
    height: int = REFERENCE_HEIGHT,
    fov: float = REFERENCE_FOV,
) -> tuple[Scene, PinholeCamera]:
    """Create the reference scene and its camera.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in radians.

    Returns:
        A tuple of (Scene, PinholeCamera).
    """
    spheres = (
        Sphere(center=(-3.0, 0.0, -16.0), radius=2.0, material=IVORY),
        Sphere(center=(-1.0, -1.5, -12.0), radius=2.0, material=GLASS),
        Sphere(center=(1.5, -0.5, -18.0), radius=3.0, material=RED_RUBBER),
        Sphere(center=(2.8, 7.0, -28.0), radius=7.0, material=MIRROR),
    )
    lights = (
        Light(position=(-20.0, 20.0, 20.0), intensity=1.4),
        Light(position=(30.0, 50.0, -25.0), intensity=1.8),
        Light(position=(30.0, 20.0, 30.0), intensity=1.7),
    )
    scene = Scene(spheres=spheres, lights=lights)
    camera = PinholeCamera(width=width, height=height, fov=fov)
    return scene, camera
