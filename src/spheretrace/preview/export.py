"""Image export utilities for rendered images.

Supported formats:
    - PNG (8-bit RGBA via Pillow)

Traced colors are already in the 8-bit range, so export only clamps and
packs; there is no tone mapping or gamma step.

Example:
    >>> from src.spheretrace.preview.export import save_png
    >>> renderer.render()
    >>> save_png(renderer.target, "spheres.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.spheretrace.core.color import COLOR_MAX

if TYPE_CHECKING:
    from src.spheretrace.core.target import RenderTarget


def save_png(target: RenderTarget, filepath: str | Path) -> Path:
    """Save the render target as an RGBA PNG file.

    Args:
        target: The render target to save.
        filepath: Output file path (should end in .png).

    Returns:
        The path written.
    """
    path = Path(filepath)
    pil_image = PILImage.fromarray(target.to_rgba())
    pil_image.save(path)
    return path


def image_to_uint8(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Convert raw float colors to uint8 without going through Taichi.

    NaN becomes 0 and values are clamped to [0, 255] before rounding.

    Args:
        image: Float color array of shape (H, W, 3).

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    cleaned = np.nan_to_num(image.astype(np.float32), nan=0.0, posinf=COLOR_MAX, neginf=0.0)
    return np.rint(np.clip(cleaned, 0.0, COLOR_MAX)).astype(np.uint8)


def save_png_from_array(image: npt.NDArray[np.float32], filepath: str | Path) -> Path:
    """Save a float color array of shape (H, W, 3) as an RGB PNG file."""
    path = Path(filepath)
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(path)
    return path
