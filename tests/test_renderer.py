"""Tests for the frame driver.

Tests cover:
- Frame buffer shape, orientation and finiteness
- Single-pixel evaluation
- Errors for unrendered frames and bad pixels
- Image export
"""

import numpy as np
import pytest
from PIL import Image

BACKGROUND = (0.2, 0.7, 0.8)


@pytest.fixture
def small_renderer():
    from src.whitted.core.renderer import RenderConfig, Renderer
    from src.whitted.scene.reference import create_reference_scene

    scene, camera = create_reference_scene(width=32, height=24)
    return Renderer(RenderConfig(scene=scene, camera=camera))


class TestRenderer:
    """Tests for Renderer."""

    def test_framebuffer_shape_and_values(self, small_renderer):
        """Test the frame buffer is (H, W, 3) and finite."""
        small_renderer.render()
        image = small_renderer.get_framebuffer_numpy()
        assert image.shape == (24, 32, 3)
        assert image.dtype == np.float32
        assert np.all(np.isfinite(image))
        assert np.all(image >= 0.0)

    def test_top_left_corner_is_background(self, small_renderer):
        """Test the sky in the top-left corner shows the background."""
        small_renderer.render()
        image = small_renderer.get_framebuffer_numpy()
        assert tuple(image[0, 0]) == pytest.approx(BACKGROUND, abs=1e-6)

    def test_render_pixel_matches_framebuffer(self, small_renderer):
        """Test render_pixel reproduces the kernel's value."""
        small_renderer.render()
        image = small_renderer.get_framebuffer_numpy()
        for i, j in [(0, 0), (16, 12), (10, 20), (31, 23)]:
            assert small_renderer.render_pixel(i, j) == pytest.approx(
                tuple(image[j, i]), rel=1e-5, abs=1e-5
            )

    def test_image_is_in_unit_range(self, small_renderer):
        """Test get_image_numpy brings every channel into [0, 1]."""
        small_renderer.render()
        image = small_renderer.get_image_numpy()
        assert image.max() <= 1.0 + 1e-6
        assert small_renderer.get_image_uint8().dtype == np.uint8

    def test_render_pixel_on_fresh_renderer(self, small_renderer):
        """Test a single pixel can be traced before any full frame."""
        color = small_renderer.render_pixel(0, 0)
        assert color == pytest.approx(BACKGROUND, abs=1e-6)
        assert not small_renderer.is_rendered

    def test_get_before_render_raises(self, small_renderer):
        """Test reading the frame before rendering raises RuntimeError."""
        assert not small_renderer.is_rendered
        with pytest.raises(RuntimeError):
            small_renderer.get_framebuffer_numpy()

    @pytest.mark.parametrize("pixel", [(-1, 0), (32, 0), (0, 24)])
    def test_render_pixel_out_of_bounds(self, small_renderer, pixel):
        """Test pixels outside the image raise ValueError."""
        with pytest.raises(ValueError):
            small_renderer.render_pixel(*pixel)

    @pytest.mark.parametrize("suffix", [".ppm", ".png"])
    def test_save_image(self, small_renderer, tmp_path, suffix):
        """Test the saved file has the right size and matches uint8 output."""
        small_renderer.render()
        path = tmp_path / f"frame{suffix}"
        small_renderer.save_image(path)

        with Image.open(path) as img:
            assert img.size == (32, 24)
            assert img.mode == "RGB"
            saved = np.asarray(img)
        np.testing.assert_array_equal(saved, small_renderer.get_image_uint8())

    def test_ppm_header(self, small_renderer, tmp_path):
        """Test .ppm output is a binary P6 file."""
        small_renderer.render()
        path = tmp_path / "frame.ppm"
        small_renderer.save_image(path)
        assert path.read_bytes().startswith(b"P6")

    def test_repr(self, small_renderer):
        """Test the repr reports size and scene counts."""
        text = repr(small_renderer)
        assert "width=32" in text
        assert "spheres=4" in text
        assert "lights=3" in text
        assert "rendered=False" in text
