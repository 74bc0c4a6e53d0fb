"""Environment lookup backed by a light-probe image.

The tracer only needs one thing from an environment: given the direction of
a ray that left the scene, return the light arriving from that direction.
Lookups depend on direction only, never on position.

Lightmap maps a direction onto a probe image with a fixed, empirical
projection. Only the x and y components are used, around the image center
and scaled by a quarter of the image extent:

    x = width / 2  + dir.x * (width - 1) / 4
    y = height / 2 + dir.y * (height - 1) / 4

This is not a spherical or equirectangular mapping, but it gives plausible
results for double-width probes on the horizontal plane and is kept as is.
"""

from __future__ import annotations

import math
from typing import Protocol

from src.spheretrace.core.color import Color
from src.spheretrace.core.ray import Vector3
from src.spheretrace.environment.pfm import PFMImage


class EnvironmentLookup(Protocol):
    """Anything that can answer "what light arrives from this direction"."""

    def get(self, direction: Vector3) -> Color:
        """Return the incoming light for a (unit) direction."""
        ...


def _round_half_up(value: float) -> int:
    if not math.isfinite(value):
        raise IndexError(f"Environment coordinate {value} is not finite")
    return math.floor(value + 0.5)


class Lightmap:
    """EnvironmentLookup over a decoded probe image.

    Attributes:
        image: The probe image sampled by get().
    """

    def __init__(self, image: PFMImage) -> None:
        self.image = image

    def project(self, direction: Vector3) -> tuple[int, int]:
        """Map a direction to the nearest probe pixel (column, row).

        No bounds clamping is applied; the result may lie outside the image.

        Raises:
            IndexError: If the direction has non-finite components.
        """
        width, height = self.image.width, self.image.height
        x = width / 2 + direction.x * ((width - 1) / 4)
        y = height / 2 + direction.y * ((height - 1) / 4)
        return _round_half_up(x), _round_half_up(y)

    def get(self, direction: Vector3) -> Color:
        """Sample the probe in the given direction.

        Args:
            direction: The ray direction. Expected, not required, to be
                unit length.

        Returns:
            The probe color.

        Raises:
            IndexError: If the projected pixel falls outside the probe.
        """
        x, y = self.project(direction)
        return self.image.get(x, y)
