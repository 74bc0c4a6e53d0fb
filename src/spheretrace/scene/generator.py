"""Procedural sphere-field scene.

Lays out a ring of randomly sized, randomly colored diffuse spheres in
front of a camera at the origin looking down +z, with a single light
hanging above the ring. This is the default scene of the example renderer.

Example:
    >>> from src.spheretrace.scene.generator import (
    ...     SphereFieldParams, create_sphere_field_scene
    ... )
    >>> scene, camera = create_sphere_field_scene(SphereFieldParams(seed=7))
    >>> len(scene.objects)
    9
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from src.spheretrace.camera.pinhole import PinholeCamera
from src.spheretrace.core.color import COLOR_MAX
from src.spheretrace.environment.lightmap import EnvironmentLookup
from src.spheretrace.scene.manager import Scene, SceneManager


@dataclass
class SphereFieldParams:
    """Parameters for the procedural sphere field.

    Attributes:
        num_spheres: Number of diffuse spheres on the ring.
        ring_center: Distance of the ring center from the camera along +z.
        ring_radius: Radius of the ring the spheres sit on.
        min_radius: Smallest sphere radius.
        max_radius: Largest sphere radius.
        min_spread: Smallest material spread.
        max_spread: Largest material spread.
        light_height: Height of the light above the ring center.
        light_radius: Radius of the light.
        light_intensity: Intensity recorded on the light.
        seed: Seed for the layout; None picks a new layout every call.
    """

    num_spheres: int = 8
    ring_center: float = 150.0
    ring_radius: float = 60.0
    min_radius: float = 10.0
    max_radius: float = 25.0
    min_spread: float = 0.05
    max_spread: float = 0.6
    light_height: float = 70.0
    light_radius: float = 15.0
    light_intensity: float = 1.0
    seed: int | None = 0


def populate_sphere_field(manager: SceneManager, params: SphereFieldParams) -> None:
    """Add the sphere ring and its light to an existing SceneManager."""
    if params.num_spheres < 0:
        raise ValueError(f"num_spheres = {params.num_spheres} is negative.")
    if not 0.0 < params.min_radius <= params.max_radius:
        raise ValueError(
            f"Sphere radius range ({params.min_radius}, {params.max_radius}) is invalid."
        )

    rng = np.random.default_rng(params.seed)

    for k in range(params.num_spheres):
        angle = 2.0 * math.pi * k / max(params.num_spheres, 1)
        center = (
            params.ring_radius * math.cos(angle),
            params.ring_radius * math.sin(angle) * 0.5,
            params.ring_center + params.ring_radius * math.sin(angle),
        )
        radius = float(rng.uniform(params.min_radius, params.max_radius))
        color = tuple(float(c) for c in rng.uniform(0.2, 1.0, size=3) * COLOR_MAX)
        spread = float(rng.uniform(params.min_spread, params.max_spread))
        manager.add_sphere(center, radius, color=color, spread=spread)

    manager.add_light(
        (0.0, params.light_height, params.ring_center),
        params.light_radius,
        intensity=params.light_intensity,
    )


def create_sphere_field_scene(
    params: SphereFieldParams | None = None,
    environment: EnvironmentLookup | None = None,
    aspect_ratio: float = 1.0,
) -> tuple[Scene, PinholeCamera]:
    """Create the sphere-field scene and a camera framing it.

    Args:
        params: Layout parameters; defaults are used when None.
        environment: Optional environment lookup for escaping rays.
        aspect_ratio: Aspect ratio of the returned camera.

    Returns:
        Tuple of (scene, camera).
    """
    if params is None:
        params = SphereFieldParams()

    manager = SceneManager()
    populate_sphere_field(manager, params)
    manager.set_environment(environment)

    camera = PinholeCamera(
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, params.ring_center),
        vup=(0.0, 1.0, 0.0),
        vfov=60.0,
        aspect_ratio=aspect_ratio,
    )
    return manager.build(), camera
