"""Frame driver: one primary ray per pixel into a frame buffer.

The Renderer takes an immutable RenderConfig (scene plus camera), uploads
the scene once, and evaluates every pixel in a single Taichi kernel.
Pixels share nothing but the read-only scene, and each writes its own
frame-buffer slot, so the kernel's outermost loop runs them in parallel.

The frame buffer is row-major with row 0 at the top and holds unclamped
colours; clamping happens when the image is read out for display or
export.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.renderer import RenderConfig, Renderer
    >>> from src.whitted.scene.reference import create_reference_scene
    >>> scene, camera = create_reference_scene(width=256, height=192)
    >>> renderer = Renderer(RenderConfig(scene=scene, camera=camera))
    >>> renderer.render()
    >>> renderer.save_image("out.ppm")
"""

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.whitted.camera.pinhole import PinholeCamera, primary_ray
from src.whitted.core.integrator import WhittedIntegrator
from src.whitted.preview.display import rescale_max_channel
from src.whitted.preview.export import image_to_uint8, save_image_from_array
from src.whitted.scene.description import Scene
from src.whitted.scene.intersection import SceneData


@dataclass(frozen=True)
class RenderConfig:
    """Everything a render depends on.

    Attributes:
        scene: The scene to render.
        camera: Image size and field of view.
    """

    scene: Scene
    camera: PinholeCamera = field(default_factory=PinholeCamera)


@ti.data_oriented
class Renderer:
    """Renders a RenderConfig into a frame buffer.

    Attributes:
        config: The configuration this renderer was built from.
        scene_data: The scene uploaded to Taichi fields.
        integrator: The light transport used for every pixel.
    """

    def __init__(self, config: RenderConfig) -> None:
        self.config = config
        self.scene_data = SceneData(config.scene)
        self.integrator = WhittedIntegrator(self.scene_data)

        self._width = config.camera.width
        self._height = config.camera.height
        self._plane_depth = config.camera.image_plane_depth

        self._framebuffer = ti.Vector.field(3, dtype=ti.f32, shape=(self._height, self._width))
        self._pixel = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._rendered = False

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def is_rendered(self) -> bool:
        """Whether the frame buffer holds a finished frame."""
        return self._rendered

    @ti.func
    def _shade_pixel(self, pixel_i: ti.i32, pixel_j: ti.i32):
        ray = primary_ray(pixel_i, pixel_j, self._width, self._height, self._plane_depth)
        return self.integrator.cast_ray(ray.origin, ray.direction)

    @ti.kernel
    def _render_kernel(self):
        for j, i in self._framebuffer:
            self._framebuffer[j, i] = self._shade_pixel(i, j)

    @ti.kernel
    def _render_pixel_kernel(self, pixel_i: ti.i32, pixel_j: ti.i32):
        self._pixel[None] = self._shade_pixel(pixel_i, pixel_j)

    def render(self) -> None:
        """Trace every pixel of the frame."""
        self._render_kernel()
        self._rendered = True

    def render_pixel(self, pixel_i: int, pixel_j: int) -> tuple[float, float, float]:
        """Trace a single pixel without touching the frame buffer.

        Args:
            pixel_i: Column (0 = left).
            pixel_j: Row (0 = top).

        Returns:
            Tuple of (R, G, B) colour values, unclamped.

        Raises:
            ValueError: If the pixel lies outside the image.
        """
        if not (0 <= pixel_i < self._width and 0 <= pixel_j < self._height):
            raise ValueError(
                f"Pixel ({pixel_i}, {pixel_j}) outside {self._width}x{self._height} image"
            )
        self._render_pixel_kernel(pixel_i, pixel_j)
        color = self._pixel[None]
        return (float(color[0]), float(color[1]), float(color[2]))

    def _check_rendered(self) -> None:
        if not self._rendered:
            raise RuntimeError("Nothing rendered yet. Call render() first.")

    def get_framebuffer_numpy(self) -> npt.NDArray[np.float32]:
        """Get the raw frame buffer.

        Returns:
            NumPy array of shape (height, width, 3), row 0 at the top, with
            unclamped linear colours.

        Raises:
            RuntimeError: If render() has not been called.
        """
        self._check_rendered()
        return self._framebuffer.to_numpy().astype(np.float32)

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the frame with every pixel rescaled into [0, 1].

        Raises:
            RuntimeError: If render() has not been called.
        """
        return rescale_max_channel(self.get_framebuffer_numpy())

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the frame as an 8-bit array of shape (height, width, 3).

        Raises:
            RuntimeError: If render() has not been called.
        """
        return image_to_uint8(self.get_framebuffer_numpy())

    def save_image(self, filepath: str | Path) -> None:
        """Save the frame; the suffix selects the format (.ppm, .png, ...).

        Raises:
            RuntimeError: If render() has not been called.
        """
        save_image_from_array(self.get_framebuffer_numpy(), filepath)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"spheres={self.scene_data.num_spheres}, lights={self.scene_data.num_lights}, "
            f"rendered={self.is_rendered})"
        )
