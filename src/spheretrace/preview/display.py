"""Matplotlib-based preview display for rendered images.

Example:
    >>> from src.spheretrace.preview.display import show_preview
    >>> renderer.render()
    >>> show_preview(renderer.target, title="spheres")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from src.spheretrace.core.target import RenderTarget


def format_title(title: str, cast_count: int | None = None) -> str:
    """Build the preview window title, optionally with the cast count."""
    if cast_count is None:
        return title
    return f"{title} ({cast_count:,} casts)"


def show_preview(
    target: RenderTarget,
    *,
    title: str = "spheretrace",
    cast_count: int | None = None,
    block: bool = True,
) -> Any:
    """Display the render target in a Matplotlib window.

    Args:
        target: The render target to show.
        title: Window title.
        cast_count: Total casts of the pass, appended to the title if given.
        block: Whether to block until the window is closed.

    Returns:
        The Matplotlib figure.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(target.width / 100 + 1, target.height / 100 + 1))
    ax.imshow(target.to_rgba(), interpolation="nearest")
    ax.set_title(format_title(title, cast_count))
    ax.axis("off")
    fig.tight_layout()
    plt.show(block=block)
    return fig
