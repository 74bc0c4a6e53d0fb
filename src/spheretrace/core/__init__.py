"""Core rendering module.

Components:
    ray: Immutable Vector3 algebra and the Ray value type
    color: Color values and the BLACK/WHITE constants
    integrator: The recursive cast() algorithm and per-pass TraceContext
    target: Taichi-backed render target that clamps and packs pixels
    progressive: Row-by-row driver rendering a scene into a target

Shading never clamps colors; values are only clamped when the render
target packs them into 8-bit RGBA.
"""

from .color import BLACK, COLOR_MAX, GREEN, RED, WHITE, Color
from .ray import Ray, Vector3, distance, make_ray, ray_at, vec3

# Note: integrator, target and progressive are NOT imported here to avoid
# circular imports with the scene package.
# Import directly from src.spheretrace.core.integrator when needed:
#   from src.spheretrace.core.integrator import cast

__all__ = [
    "Vector3",
    "Ray",
    "vec3",
    "ray_at",
    "make_ray",
    "distance",
    "Color",
    "COLOR_MAX",
    "BLACK",
    "WHITE",
    "RED",
    "GREEN",
]
