"""Image export for rendered framebuffers.

The framebuffer already holds gamma-corrected RGBA8 pixels, so export is a
straight hand-off to Pillow. The container format follows the file suffix
(PNG by default).

Example:
    >>> from aotracer.core.scheduler import render_scene
    >>> from aotracer.preview.export import save_png
    >>> framebuffer = render_scene(scene, config)
    >>> save_png(framebuffer, "image.png")
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image as PILImage

from aotracer.core.framebuffer import Framebuffer


def framebuffer_to_image(framebuffer: Framebuffer) -> PILImage.Image:
    """Wrap the framebuffer bytes in a Pillow RGBA image (copied)."""
    return PILImage.frombuffer(
        "RGBA",
        (framebuffer.width, framebuffer.height),
        framebuffer.tobytes(),
        "raw",
        "RGBA",
        0,
        1,
    )


def save_png(framebuffer: Framebuffer, filepath: str | Path) -> Path:
    """Save the framebuffer as an 8-bit RGBA PNG.

    Args:
        framebuffer: The completed framebuffer.
        filepath: Output file path (should end in .png).

    Returns:
        The path written.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(filepath)
    framebuffer_to_image(framebuffer).save(path, format="PNG")
    return path
