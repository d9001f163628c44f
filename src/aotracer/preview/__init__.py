"""Preview module for output and visualization.

Components:
    display: Matplotlib-based preview display
    export: PNG export via Pillow

Example:
    >>> from aotracer.preview import save_png, show_preview
    >>> save_png(framebuffer, "output.png")
    >>> show_preview(framebuffer)
"""

from aotracer.preview.display import show_preview
from aotracer.preview.export import framebuffer_to_image, save_png

__all__ = [
    "show_preview",
    "save_png",
    "framebuffer_to_image",
]
