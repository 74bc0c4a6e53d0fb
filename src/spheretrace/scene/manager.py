"""Scene data model and builder.

A scene is an ordered, read-only collection of scene objects plus an
optional environment lookup for rays that escape it. Scene objects are a
closed sum type: a SphereObject is a diffuse surface with a material, a
LightObject is an emitter. Both are spheres geometrically and are tested
for intersection the same way; only shading tells them apart.

The SceneManager provides a validated, incremental way to assemble a Scene
and to serialize its contents to and from plain dictionaries.

Example:
    >>> from src.spheretrace.scene.manager import SceneManager
    >>> manager = SceneManager()
    >>> manager.add_sphere(center=(0, 0, 100), radius=50, color=(200, 40, 40), spread=0.3)
    0
    >>> manager.add_light(center=(0, 80, 100), radius=10)
    1
    >>> scene = manager.build()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from src.spheretrace.core.color import COLOR_MAX, Color
from src.spheretrace.core.ray import Vector3, vec3

if TYPE_CHECKING:
    from src.spheretrace.environment.lightmap import EnvironmentLookup


class ObjectKind(str, Enum):
    """Tag of each scene object variant, as used in serialized configs."""

    SPHERE = "sphere"
    LIGHT = "light"


@dataclass(frozen=True)
class Material:
    """Surface parameters of a diffuse sphere.

    Attributes:
        spread: Width of the bounce cone in [0, 1]. Zero is a perfect mirror.
        color: Intrinsic color; scales the light carried by bounce rays.
    """

    spread: float
    color: Color


@dataclass(frozen=True)
class SphereObject:
    """A diffuse sphere.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere (positive).
        material: The surface material.
    """

    center: Vector3
    radius: float
    material: Material

    kind = ObjectKind.SPHERE


@dataclass(frozen=True)
class LightObject:
    """A spherical light.

    Attributes:
        center: The center of the light.
        radius: The radius used for intersection (positive).
        intensity: Emission strength. Carried in the model but not consulted
            by shading; a direct hit on a light is always full white.
    """

    center: Vector3
    radius: float
    intensity: float = 1.0

    kind = ObjectKind.LIGHT


SceneObject = Union[SphereObject, LightObject]


@dataclass(frozen=True)
class Scene:
    """A read-only scene for one render pass.

    Attributes:
        objects: The scene objects. Order only affects tie-breaking between
            collisions at equal distance.
        environment: Lookup for rays that escape the scene, or None for a
            black background.
    """

    objects: tuple[SceneObject, ...] = ()
    environment: EnvironmentLookup | None = None


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        objects: List of object configurations in scene order. Each entry
            has a "type" key of "sphere" or "light".
    """

    objects: list[dict[str, Any]] = field(default_factory=list)


def _validate_radius(radius: float) -> None:
    if not radius > 0.0:
        raise ValueError(f"Radius = {radius} must be positive.")


def _validate_spread(spread: float) -> None:
    if not 0.0 <= spread <= 1.0:
        raise ValueError(f"Spread = {spread} is outside the valid range [0, 1].")


def _validate_color(color: tuple[float, float, float]) -> None:
    if len(color) != 3:
        raise ValueError(f"Color must have 3 components, got {len(color)}.")
    for i, component in enumerate(color):
        if not component >= 0.0:
            raise ValueError(f"Color component {i} = {component} is negative.")


class SceneManager:
    """Incremental, validated builder for Scene instances.

    Attributes:
        objects: The scene objects added so far, in insertion order.
        environment: The environment lookup attached to the scene, if any.

    Example:
        >>> manager = SceneManager()
        >>> manager.add_sphere((0, 0, 60), 20, color=(255, 255, 255), spread=0.1)
        0
        >>> len(manager.build().objects)
        1
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.objects: list[SceneObject] = []
        self.environment: EnvironmentLookup | None = None

    def clear(self) -> None:
        """Remove all objects and detach the environment."""
        self.objects.clear()
        self.environment = None

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        color: tuple[float, float, float] = (COLOR_MAX, COLOR_MAX, COLOR_MAX),
        spread: float = 0.5,
    ) -> int:
        """Add a diffuse sphere.

        Args:
            center: The center of the sphere.
            radius: The radius of the sphere.
            color: Intrinsic RGB color, nominally in [0, 255].
            spread: Bounce cone width in [0, 1].

        Returns:
            The index of the added object.

        Raises:
            ValueError: If the radius, color or spread is invalid.
        """
        _validate_radius(radius)
        _validate_color(color)
        _validate_spread(spread)

        material = Material(spread=float(spread), color=Color(*(float(c) for c in color)))
        self.objects.append(SphereObject(vec3(*center), float(radius), material))
        return len(self.objects) - 1

    def add_light(
        self,
        center: tuple[float, float, float],
        radius: float,
        intensity: float = 1.0,
    ) -> int:
        """Add a spherical light.

        Args:
            center: The center of the light.
            radius: The radius of the light.
            intensity: Emission strength.

        Returns:
            The index of the added object.

        Raises:
            ValueError: If the radius is invalid.
        """
        _validate_radius(radius)
        self.objects.append(LightObject(vec3(*center), float(radius), float(intensity)))
        return len(self.objects) - 1

    def set_environment(self, environment: EnvironmentLookup | None) -> None:
        """Attach (or with None, detach) the environment lookup."""
        self.environment = environment

    def get_object_count(self) -> int:
        return len(self.objects)

    def get_light_count(self) -> int:
        return sum(1 for obj in self.objects if isinstance(obj, LightObject))

    def build(self) -> Scene:
        """Freeze the current contents into a Scene."""
        return Scene(objects=tuple(self.objects), environment=self.environment)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene objects as a SceneConfig.

        The environment is not serialized; it is reattached by the caller.
        """
        config = SceneConfig()
        for obj in self.objects:
            entry: dict[str, Any] = {
                "type": obj.kind.value,
                "center": obj.center.to_tuple(),
                "radius": obj.radius,
            }
            if isinstance(obj, SphereObject):
                entry["color"] = obj.material.color.to_tuple()
                entry["spread"] = obj.material.spread
            else:
                entry["intensity"] = obj.intensity
            config.objects.append(entry)
        return config

    @classmethod
    def from_config(cls, config: SceneConfig) -> SceneManager:
        """Build a SceneManager from a SceneConfig.

        Raises:
            ValueError: If an entry has an unknown type or invalid values.
        """
        manager = cls()
        for entry in config.objects:
            kind = entry.get("type")
            if kind == ObjectKind.SPHERE.value:
                manager.add_sphere(
                    center=tuple(entry["center"]),
                    radius=entry["radius"],
                    color=tuple(entry.get("color", (COLOR_MAX, COLOR_MAX, COLOR_MAX))),
                    spread=entry.get("spread", 0.5),
                )
            elif kind == ObjectKind.LIGHT.value:
                manager.add_light(
                    center=tuple(entry["center"]),
                    radius=entry["radius"],
                    intensity=entry.get("intensity", 1.0),
                )
            else:
                raise ValueError(f"Unknown object type: {kind}")
        return manager
