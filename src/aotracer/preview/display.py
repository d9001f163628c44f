"""Matplotlib-based preview of a rendered framebuffer.

Example:
    >>> from aotracer.preview.display import show_preview
    >>> show_preview(framebuffer, title="Default scene")
"""

from __future__ import annotations

from aotracer.core.framebuffer import Framebuffer


def show_preview(
    framebuffer: Framebuffer,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display the framebuffer in a Matplotlib window.

    Args:
        framebuffer: The completed framebuffer.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(framebuffer.to_array())
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {framebuffer.width}x{framebuffer.height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
