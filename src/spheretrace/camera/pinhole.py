"""Pinhole camera model for primary ray construction.

This module builds one ray per pixel for the tracer. The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view specification
- Arbitrary aspect ratios

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Rays go through pixel centers. There is no jitter, since the renderer casts
exactly one ray per pixel.

Example:
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 0.0),
    ...     lookat=(0.0, 0.0, 1.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=4.0 / 3.0,
    ... )
    >>> basis = setup_camera(camera)
    >>> ray = basis.get_ray(0.5, 0.5)  # Ray through image center
"""

import math
from dataclasses import dataclass

import numpy as np

from src.spheretrace.core.ray import Ray, Vector3, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees (typically 40-90).
        aspect_ratio: Width divided by height of the output image.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float


@dataclass(frozen=True)
class CameraBasis:
    """Precomputed camera frame and viewport.

    Attributes:
        origin: Camera position.
        u: Right direction.
        v: Up direction.
        w: Backward direction (opposite view direction).
        horizontal: Full viewport width vector.
        vertical: Full viewport height vector.
        lower_left: Lower-left corner of the viewport at unit distance.
    """

    origin: Vector3
    u: Vector3
    v: Vector3
    w: Vector3
    horizontal: Vector3
    vertical: Vector3
    lower_left: Vector3

    def get_ray(self, s: float, t: float) -> Ray:
        """Generate a ray through normalized image coordinates (s, t).

        Args:
            s: Horizontal coordinate in [0, 1] (left to right).
            t: Vertical coordinate in [0, 1] (bottom to top).

        Returns:
            A Ray from the camera origin with a unit direction.
        """
        point_on_viewport = self.lower_left.plus(self.horizontal.times(s)).plus(
            self.vertical.times(t)
        )
        direction = point_on_viewport.minus(self.origin).normalized()
        return Ray(origin=self.origin, direction=direction)


# =============================================================================
# Camera Setup
# =============================================================================


def _to_vector(array: np.ndarray) -> Vector3:
    return vec3(float(array[0]), float(array[1]), float(array[2]))


def setup_camera(camera: PinholeCamera) -> CameraBasis:
    """Compute the camera basis and viewport geometry.

    The viewport is a virtual image plane at unit distance from the camera.
    Ray directions are computed by interpolating across this viewport.

    Args:
        camera: Camera configuration with position, orientation, and FOV.

    Returns:
        The basis used to generate rays.

    Raises:
        ValueError: If lookfrom equals lookat or vup is parallel to the view
            direction.
    """
    theta = math.radians(camera.vfov)
    h = math.tan(theta / 2.0)

    viewport_height = 2.0 * h
    viewport_width = camera.aspect_ratio * viewport_height

    lookfrom = np.array(camera.lookfrom, dtype=np.float64)
    lookat = np.array(camera.lookat, dtype=np.float64)
    vup = np.array(camera.vup, dtype=np.float64)

    # w points from lookat toward lookfrom (backward)
    w = lookfrom - lookat
    w_norm = np.linalg.norm(w)
    if w_norm == 0.0:
        raise ValueError("Camera lookfrom and lookat must differ")
    w = w / w_norm

    # u points right (perpendicular to w and vup)
    u = np.cross(vup, w)
    u_norm = np.linalg.norm(u)
    if u_norm == 0.0:
        raise ValueError("Camera vup must not be parallel to the view direction")
    u = u / u_norm

    v = np.cross(w, u)

    horizontal = viewport_width * u
    vertical = viewport_height * v
    lower_left = lookfrom - w - horizontal / 2.0 - vertical / 2.0

    return CameraBasis(
        origin=_to_vector(lookfrom),
        u=_to_vector(u),
        v=_to_vector(v),
        w=_to_vector(w),
        horizontal=_to_vector(horizontal),
        vertical=_to_vector(vertical),
        lower_left=_to_vector(lower_left),
    )


# =============================================================================
# Pixel Rays
# =============================================================================


def get_pixel_ray(basis: CameraBasis, i: int, j: int, width: int, height: int) -> Ray:
    """Generate the ray through the center of pixel (i, j).

    Args:
        basis: The camera basis from setup_camera().
        i: Pixel column (0 = left).
        j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The primary ray for the pixel.
    """
    s = (i + 0.5) / width
    t = 1.0 - (j + 0.5) / height
    return basis.get_ray(s, t)


def get_camera_info(basis: CameraBasis) -> dict[str, tuple[float, float, float]]:
    """Get camera vectors as plain tuples for debugging."""
    return {
        "origin": basis.origin.to_tuple(),
        "u": basis.u.to_tuple(),
        "v": basis.v.to_tuple(),
        "w": basis.w.to_tuple(),
        "horizontal": basis.horizontal.to_tuple(),
        "vertical": basis.vertical.to_tuple(),
        "lower_left": basis.lower_left.to_tuple(),
    }
