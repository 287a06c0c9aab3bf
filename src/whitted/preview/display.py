"""Frame-buffer post-processing and Matplotlib preview.

Traced colours are unclamped: highlights and mirror reflections push
channels above 1. The default display pipeline rescales every pixel
whose brightest channel exceeds 1 by that channel, which keeps the hue
and brings the pixel back into [0, 1].

Example:
    >>> from src.whitted.preview.display import show_preview
    >>> renderer.render()
    >>> show_preview(renderer)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from src.whitted.core.renderer import Renderer


# Type alias for tone mapping options
ToneMapMethod = Literal["none", "max_channel"]


def rescale_max_channel(
    image: npt.NDArray[np.float32],
) -> npt.NDArray[np.float32]:
    """Divide each pixel by its largest channel when that exceeds 1.

    Pixels already inside [0, 1] are left untouched.

    Args:
        image: Linear image array of shape (H, W, 3).

    Returns:
        The rescaled image.
    """
    peak = np.max(image, axis=-1, keepdims=True)
    scale = np.where(peak > 1.0, peak, 1.0)
    return (image / scale).astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.float32],
    tone_map: ToneMapMethod = "max_channel",
) -> npt.NDArray[np.float32]:
    """Bring a linear image into [0, 1] for display or export.

    Args:
        image: Linear image array of shape (H, W, 3).
        tone_map: "max_channel" (default) or "none" (clamp only).

    Returns:
        Processed image in [0, 1] range.

    Raises:
        ValueError: If tone_map is not a known method.
    """
    result = image.copy()

    if tone_map == "max_channel":
        result = rescale_max_channel(result)
    elif tone_map != "none":
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = np.clip(result, 0.0, 1.0)

    return result.astype(np.float32)


def show_preview(
    renderer: Renderer,
    *,
    tone_map: ToneMapMethod = "max_channel",
    title: str | None = None,
    figsize: tuple[float, float] = (10, 7.5),
    block: bool = True,
) -> None:
    """Display the last render as a Matplotlib figure.

    Args:
        renderer: A Renderer that has already rendered a frame.
        tone_map: Tone mapping method.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(
        renderer.get_framebuffer_numpy(),
        tone_map=tone_map,
    )

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")
    if title is None:
        title = f"Render Preview - {renderer.width}x{renderer.height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
