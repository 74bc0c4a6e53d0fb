"""Color values produced by the tracer.

Channels are floats with a nominal [0, COLOR_MAX] range. Shading arithmetic
never clamps; values outside the range (and NaN from degenerate geometry)
flow through untouched until the render target packs them into bytes.
"""

from __future__ import annotations

from dataclasses import dataclass

COLOR_MAX = 255.0


@dataclass(frozen=True)
class Color:
    """An RGB color with an optional alpha channel.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
        a: Alpha channel, or None when the color carries no alpha. Only
            the render target reads it; shading arithmetic returns colors
            without alpha.
    """

    r: float
    g: float
    b: float
    a: float | None = None

    @classmethod
    def grey(cls, value: float) -> Color:
        return cls(value, value, value)

    def plus(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def times(self, scalar: float) -> Color:
        return Color(self.r * scalar, self.g * scalar, self.b * scalar)

    def divided(self, divisor: float) -> Color:
        return Color(self.r / divisor, self.g / divisor, self.b / divisor)

    def modulated(self, intrinsic: Color) -> Color:
        """Tint this color by a surface color.

        Each channel is scaled by intrinsic_channel / COLOR_MAX, so a white
        surface passes light through unchanged and black absorbs it.

        Args:
            intrinsic: The surface's intrinsic color.

        Returns:
            The tinted color.
        """
        return Color(
            self.r * (intrinsic.r / COLOR_MAX),
            self.g * (intrinsic.g / COLOR_MAX),
            self.b * (intrinsic.b / COLOR_MAX),
        )

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    __add__ = plus


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(COLOR_MAX, COLOR_MAX, COLOR_MAX)
RED = Color(COLOR_MAX, 0.0, 0.0)
GREEN = Color(0.0, COLOR_MAX, 0.0)
