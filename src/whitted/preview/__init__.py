"""Preview module for post-processing, export and display.

Components:
    display: Max-channel rescaling and Matplotlib preview
    export: 8-bit quantization, image files via Pillow, RMSE

Example:
    >>> from src.whitted.preview import save_image_from_array
    >>> save_image_from_array(renderer.get_framebuffer_numpy(), "out.ppm")
"""

from src.whitted.preview.display import (
    ToneMapMethod,
    process_image_for_display,
    rescale_max_channel,
    show_preview,
)
from src.whitted.preview.export import (
    compute_rmse,
    image_to_uint8,
    save_image_from_array,
)

__all__ = [
    "show_preview",
    "rescale_max_channel",
    "process_image_for_display",
    "ToneMapMethod",
    "save_image_from_array",
    "image_to_uint8",
    "compute_rmse",
]
