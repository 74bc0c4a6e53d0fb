"""Recursive ray casting integrator.

This module turns geometric hits into color. cast() resolves the nearest
collision of a ray, then either stops or fans out into perturbed bounce
rays and averages what they bring back:

    - depth exhausted (iteration >= MAX_BOUNCES): environment color
    - nothing hit: environment color (BLACK without an environment)
    - light hit: full WHITE emission
    - sphere hit: average of bounce rays, tinted by the sphere's color

The number of bounce rays falls off quadratically with depth:

    bounce_count = floor(MAX_BOUNCED_RAYS * (iteration / MAX_BOUNCES - 1)^2)

which is 5 at the camera ray, 2 at the first bounce and 0 at the second,
so a single pixel costs at most 1 + 5 + 5 * 2 casts at the defaults.

A depth visualization mode short-circuits shading and returns a grey level
that fades with distance to the nearest hit.

Example:
    >>> from src.spheretrace.core.ray import make_ray
    >>> from src.spheretrace.scene.manager import SceneManager
    >>> manager = SceneManager()
    >>> manager.add_light((0, 0, 50), 10)
    0
    >>> cast(manager.build(), make_ray((0, 0, 0), (0, 0, 1)))
    Color(r=255.0, g=255.0, b=255.0, a=None)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from src.spheretrace.core.color import BLACK, COLOR_MAX, WHITE, Color
from src.spheretrace.core.ray import Ray, Vector3
from src.spheretrace.scene.intersection import SceneHit, collide_ray
from src.spheretrace.scene.manager import LightObject, Scene, SphereObject

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum recursion depth; casts at this depth return the environment color
MAX_BOUNCES = 3

# Bounce rays spawned by a camera-ray hit; decays with depth
MAX_BOUNCED_RAYS = 5

# Distance at which the depth visualization fades to black
DEPTH_FALLOFF = 300.0


# =============================================================================
# Render Pass State
# =============================================================================


@dataclass
class TracerSettings:
    """Configuration for a render pass.

    Attributes:
        depth_mode: Render distance-to-nearest-hit as grey instead of shading.
        depth_falloff: Distance at which the depth visualization reaches black.
        seed: Seed for the bounce-ray random generator. None draws fresh
            entropy, so two passes over the same scene differ.
    """

    depth_mode: bool = False
    depth_falloff: float = DEPTH_FALLOFF
    seed: int | None = None


@dataclass
class TraceContext:
    """Mutable state for a single render pass.

    Each pass gets its own context, so the cast counter never leaks between
    passes.

    Attributes:
        rng: Random generator for bounce-ray perturbation.
        depth_mode: See TracerSettings.
        depth_falloff: See TracerSettings.
        cast_count: Number of cast() invocations so far. Diagnostic only.
    """

    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    depth_mode: bool = False
    depth_falloff: float = DEPTH_FALLOFF
    cast_count: int = 0

    @classmethod
    def from_settings(cls, settings: TracerSettings) -> TraceContext:
        """Create a fresh context for one render pass."""
        return cls(
            rng=np.random.default_rng(settings.seed),
            depth_mode=settings.depth_mode,
            depth_falloff=settings.depth_falloff,
        )


# =============================================================================
# Shading
# =============================================================================


def environment_color(scene: Scene, ray: Ray) -> Color:
    """Color of a ray that leaves the scene.

    Raises:
        IndexError: If the environment lookup falls outside its image.
    """
    if scene.environment is None:
        return BLACK
    return scene.environment.get(ray.direction.normalized())


def bounce_count(iteration: int) -> int:
    """Number of bounce rays to spawn from a hit at the given depth."""
    progress = iteration / MAX_BOUNCES
    return math.floor(MAX_BOUNCED_RAYS * (progress - 1.0) ** 2)


def depth_shade(hit: SceneHit, falloff: float = DEPTH_FALLOFF) -> Color:
    """Grey level that fades linearly from white at the origin to black."""
    level = (1.0 - hit.distance / falloff) * COLOR_MAX
    return Color.grey(min(COLOR_MAX, max(0.0, level)))


def _shade_sphere(
    scene: Scene,
    ray: Ray,
    hit: SceneHit,
    sphere: SphereObject,
    iteration: int,
    context: TraceContext,
) -> Color:
    """Average the bounce rays leaving a diffuse sphere hit."""
    material = sphere.material
    mirror = ray.direction.reflect(hit.collision.normal)

    count = bounce_count(iteration)
    total = BLACK
    for _ in range(count):
        # Perturbed but not renormalized
        jitter = Vector3.random_unit(context.rng).times(material.spread)
        bounced = Ray(origin=hit.collision.point, direction=mirror.plus(jitter))
        child = cast(scene, bounced, iteration + 1, context)
        total = total.plus(child.modulated(material.color))

    if count == 0:
        return total
    return total.divided(count)


def cast(
    scene: Scene,
    ray: Ray,
    iteration: int = 0,
    context: TraceContext | None = None,
) -> Color:
    """Trace a ray through the scene and return its color.

    Args:
        scene: The scene to trace. Never modified.
        ray: The ray to trace. Camera rays should have a unit direction.
        iteration: Recursion depth; 0 for camera rays.
        context: Per-pass state (random generator, counter, depth mode).
            A fresh context is created when omitted.

    Returns:
        The unclamped color carried back along the ray.

    Raises:
        IndexError: If an environment lookup falls outside its image. The
            error is not recovered here and aborts the render pass.
    """
    if context is None:
        context = TraceContext()
    context.cast_count += 1

    if iteration >= MAX_BOUNCES:
        return environment_color(scene, ray)

    hits = collide_ray(scene, ray)
    if not hits:
        return environment_color(scene, ray)

    nearest = hits[0]
    if context.depth_mode:
        return depth_shade(nearest, context.depth_falloff)

    obj = nearest.obj
    if isinstance(obj, LightObject):
        return WHITE
    if isinstance(obj, SphereObject):
        return _shade_sphere(scene, ray, nearest, obj, iteration, context)
    raise TypeError(f"Unknown scene object type: {type(obj).__name__}")
