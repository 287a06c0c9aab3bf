"""Whitted-style recursive ray tracer built on Taichi.

This package renders a static scene of spheres above an analytic
checkerboard plane with Phong shading, hard shadows, mirror reflection
and Snell refraction. Every pixel is traced independently inside a
Taichi kernel, so the frame is evaluated in parallel on CPU or GPU.

Subpackages:
    core: Shading transforms, recursive light transport and the frame driver
    geometry: Ray/sphere intersection and the checkerboard plane
    scene: Immutable scene description, device-side scene query, reference scene
    camera: Pinhole camera and primary ray generation
    preview: Frame-buffer post-processing, image export and Matplotlib preview
"""

__version__ = "0.1.0"
