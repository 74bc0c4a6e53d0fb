"""Preview module for viewing and saving rendered images.

Components:
    display: Matplotlib preview window
    export: PNG export via Pillow

Usage:
    >>> from src.spheretrace.preview import save_png, show_preview
    >>> renderer.render()
    >>> save_png(renderer.target, "spheres.png")
    >>> show_preview(renderer.target, cast_count=renderer.cast_count)
"""

from .display import format_title, show_preview
from .export import image_to_uint8, save_png, save_png_from_array

__all__ = [
    "show_preview",
    "format_title",
    "save_png",
    "save_png_from_array",
    "image_to_uint8",
]
