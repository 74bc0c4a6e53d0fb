"""Render target: the pixel sink the tracer writes into.

Traced colors are raw, unclamped floats. The target keeps them in a NumPy
staging buffer while rows are being traced, and on demand uploads them to a
Taichi field where a kernel clamps each channel to [0, 255] and packs the
result into RGBA bytes.

Alpha comes from Color.a when it is set and nonzero; otherwise the pixel is
opaque. Shading arithmetic produces colors without alpha, so traced pixels
are opaque unless an environment returns colors that carry one.

Row 0 is the top of the image, matching the (height, width, channels)
layout used by NumPy, Pillow and Matplotlib.

Note: this module defines a Taichi kernel, so it must not use
``from __future__ import annotations``; Taichi reads kernel argument
annotations at runtime.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> target = RenderTarget(64, 48)
    >>> target.write_row(0, colors_for_row_0)
    >>> rgba = target.to_rgba()  # (48, 64, 4) uint8
"""

import math

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.spheretrace.core.color import COLOR_MAX, Color

# Maximum supported image dimensions
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

OPAQUE_ALPHA = 255.0


@ti.kernel
def _pack_rgba(colors: ti.template(), packed: ti.template(), height: ti.i32, width: ti.i32):
    """Clamp float colors to [0, 255] and pack them as RGBA bytes.

    NaN color channels (from degenerate geometry) are written as 0.
    """
    for j, i in ti.ndrange(height, width):
        color = colors[j, i]
        for c in ti.static(range(4)):
            value = color[c]
            if tm.isnan(value):
                value = 0.0
            value = tm.clamp(value, 0.0, COLOR_MAX)
            packed[j, i, c] = ti.cast(ti.round(value), ti.u8)


def _alpha(color: Color) -> float:
    """Alpha written for a color: its own when set, opaque otherwise."""
    if color.a is None or color.a == 0.0 or math.isnan(color.a):
        return OPAQUE_ALPHA
    return color.a


def _rgba(color: Color) -> tuple[float, float, float, float]:
    return (color.r, color.g, color.b, _alpha(color))


class RenderTarget:
    """A width x height buffer of traced colors.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate the staging buffer and Taichi fields.

        Taichi must already be initialized.

        Raises:
            ValueError: If a dimension is not positive or exceeds the
                maximum supported size.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions ({width}x{height}) must be positive")
        if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({width}x{height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )

        self._width = width
        self._height = height
        # RGB plus alpha
        self._staging = np.zeros((height, width, 4), dtype=np.float32)
        self._colors = ti.Vector.field(4, dtype=ti.f32, shape=(height, width))
        self._packed = ti.field(dtype=ti.u8, shape=(height, width, 4))
        self._rows_written = 0
        self.clear()

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def rows_written(self) -> int:
        """Number of rows written since the last clear."""
        return self._rows_written

    def clear(self) -> None:
        """Reset every pixel to opaque black."""
        self._staging[..., :3] = 0.0
        self._staging[..., 3] = OPAQUE_ALPHA
        self._rows_written = 0

    def write_pixel(self, i: int, j: int, color: Color) -> None:
        """Store the color of pixel (i, j); i is the column, j the row."""
        self._staging[j, i] = _rgba(color)

    def write_row(self, j: int, colors: list[Color]) -> None:
        """Store a full row of colors.

        Raises:
            ValueError: If the row length does not match the image width.
        """
        if len(colors) != self._width:
            raise ValueError(f"Row has {len(colors)} colors, expected {self._width}")
        self._staging[j] = [_rgba(color) for color in colors]
        self._rows_written += 1

    def get_colors_numpy(self) -> npt.NDArray[np.float32]:
        """Get a copy of the raw, unclamped float colors as (H, W, 3)."""
        return self._staging[..., :3].copy()

    def to_rgba(self) -> npt.NDArray[np.uint8]:
        """Clamp and pack the image into 8-bit RGBA.

        Returns:
            Array of shape (height, width, 4) with dtype uint8.
        """
        self._colors.from_numpy(self._staging)
        _pack_rgba(self._colors, self._packed, self._height, self._width)
        return self._packed.to_numpy()
