"""Image export utilities for rendered frames.

Frames are quantized to 8 bits per channel by truncating 255 * c, after
the display pipeline has brought every channel into [0, 1]. Pillow picks
the file format from the suffix; ".ppm" writes a binary P6 file.

Example:
    >>> from src.whitted.preview.export import save_image_from_array
    >>> save_image_from_array(renderer.get_framebuffer_numpy(), "out.ppm")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.whitted.preview.display import ToneMapMethod, process_image_for_display


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "max_channel",
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to uint8.

    Args:
        image: Linear image array of shape (H, W, 3).
        tone_map: Tone mapping method.

    Returns:
        8-bit image array of shape (H, W, 3).
    """
    processed = process_image_for_display(image, tone_map=tone_map)
    return (processed * 255).astype(np.uint8)


def save_image_from_array(
    image: npt.NDArray[np.float32],
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "max_channel",
) -> None:
    """Save a linear float image to a file.

    Args:
        image: Linear image array of shape (H, W, 3), row 0 at the top.
        filepath: Output path; the suffix selects the format (.ppm, .png, ...).
        tone_map: Tone mapping method.
    """
    image_uint8 = image_to_uint8(image, tone_map=tone_map)
    pil_image = PILImage.fromarray(image_uint8, mode="RGB")
    pil_image.save(str(filepath))


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Compute root mean squared error between two images.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
