"""Scene descriptions: materials, spheres and camera as plain data.

This module provides a high-level scene API that keeps the scene as
serializable data until render time. Spheres reference materials by index
into the description's material list, so several spheres can share one
material entry.

The SceneDescription maintains:
- Material configurations (Lambertian, Metal, Dielectric)
- Sphere configurations (center, radius, material_id)
- The camera configuration
- Dictionary / JSON conversion for scene files

Scene file format (JSON):
    {
        "materials": [
            {"type": "lambertian", "albedo": [0.8, 0.3, 0.3]},
            {"type": "metal", "albedo": [0.8, 0.8, 0.8], "fuzz": 0.1},
            {"type": "dielectric", "refractive_index": 1.5}
        ],
        "spheres": [
            {"center": [0, 0, -1], "radius": 0.5, "material_id": 0}
        ],
        "camera": {"look_from": [3, 3, 2], "look_at": [0, 0, -1], "vfov": 20}
    }

Example:
    >>> from bandtrace.scene.manager import SceneDescription
    >>> scene = SceneDescription()
    >>> red = scene.add_lambertian_material(albedo=(0.8, 0.3, 0.3))
    >>> scene.add_sphere(center=(0.0, 0.0, -1.0), radius=0.5, material_id=red)
    0
    >>> world = scene.build_world()
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from bandtrace.camera.thin_lens import CameraConfig
from bandtrace.core.vec3 import Vec3
from bandtrace.errors import SceneError
from bandtrace.geometry.sphere import Sphere
from bandtrace.materials.dielectric import IOR_GLASS, Dielectric
from bandtrace.materials.lambertian import Lambertian
from bandtrace.materials.material import Material
from bandtrace.materials.metal import Metal
from bandtrace.scene.intersection import HittableList


class MaterialType(str, Enum):
    """Enumeration of supported material types, by their scene file name."""

    LAMBERTIAN = "lambertian"
    METAL = "metal"
    DIELECTRIC = "dielectric"


def _vec3(config: dict[str, Any], key: str, default: tuple[float, float, float]) -> Vec3:
    try:
        return Vec3.from_iterable(config.get(key, default))
    except (TypeError, ValueError) as e:
        raise SceneError(f"Invalid '{key}' value {config.get(key)!r}: {e}") from e


def material_from_dict(config: dict[str, Any]) -> Material:
    """Create a material from its scene file configuration.

    Args:
        config: Dictionary with a ``type`` key and the type's parameters.

    Returns:
        The material instance.

    Raises:
        SceneError: If the type is unknown or a parameter is invalid.
    """
    if not isinstance(config, dict):
        raise SceneError(f"Material entry must be a mapping, got {config!r}")
    mat_type = str(config.get("type", "")).lower()
    try:
        if mat_type == MaterialType.LAMBERTIAN:
            return Lambertian(albedo=_vec3(config, "albedo", (0.5, 0.5, 0.5)))
        if mat_type == MaterialType.METAL:
            return Metal(
                albedo=_vec3(config, "albedo", (0.8, 0.8, 0.8)),
                fuzz=float(config.get("fuzz", 0.0)),
            )
        if mat_type == MaterialType.DIELECTRIC:
            return Dielectric(refractive_index=float(config.get("refractive_index", IOR_GLASS)))
    except SceneError:
        raise
    except (TypeError, ValueError) as e:
        raise SceneError(f"Invalid {mat_type} material {config!r}: {e}") from e
    raise SceneError(f"Unknown material type: {mat_type!r}")


def material_to_dict(material: Material) -> dict[str, Any]:
    """Export a material to its scene file configuration.

    Raises:
        TypeError: If the material is not one of the built-in types.
    """
    if isinstance(material, Lambertian):
        return {"type": MaterialType.LAMBERTIAN.value, "albedo": list(material.albedo)}
    if isinstance(material, Metal):
        return {
            "type": MaterialType.METAL.value,
            "albedo": list(material.albedo),
            "fuzz": material.fuzz,
        }
    if isinstance(material, Dielectric):
        return {
            "type": MaterialType.DIELECTRIC.value,
            "refractive_index": material.refractive_index,
        }
    raise TypeError(f"Cannot serialize material of type {type(material).__name__}")


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere.
        material_id: Index of the sphere's material in the description.
    """

    center: tuple[float, float, float]
    radius: float
    material_id: int


@dataclass
class SceneDescription:
    """A complete scene as data: materials, spheres and camera.

    Attributes:
        materials: Materials in registration order; the index is the
            material_id spheres refer to.
        spheres: Spheres in insertion order.
        camera: Camera configuration.
    """

    materials: list[Material] = field(default_factory=list)
    spheres: list[SphereInfo] = field(default_factory=list)
    camera: CameraConfig = field(default_factory=CameraConfig)

    # =========================================================================
    # Material Management
    # =========================================================================

    def add_material(self, material: Material) -> int:
        """Register a material and return its material_id."""
        self.materials.append(material)
        return len(self.materials) - 1

    def add_lambertian_material(self, albedo: tuple[float, float, float]) -> int:
        """Add a Lambertian (diffuse) material.

        Args:
            albedo: The diffuse reflectance color as (R, G, B).

        Returns:
            The material_id for this material.
        """
        return self.add_material(Lambertian(albedo=Vec3.from_iterable(albedo)))

    def add_metal_material(
        self,
        albedo: tuple[float, float, float],
        fuzz: float = 0.0,
    ) -> int:
        """Add a metal material. Fuzz is clamped into [0, 1].

        Returns:
            The material_id for this material.
        """
        return self.add_material(Metal(albedo=Vec3.from_iterable(albedo), fuzz=fuzz))

    def add_dielectric_material(self, refractive_index: float = IOR_GLASS) -> int:
        """Add a dielectric (glass/water) material.

        Args:
            refractive_index: Index of refraction. Default is 1.5 (glass).

        Returns:
            The material_id for this material.

        Raises:
            ValueError: If refractive_index is not positive.
        """
        return self.add_material(Dielectric(refractive_index=refractive_index))

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material_id: int,
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere. Must be positive.
            material_id: The material_id returned by an add_*_material call.

        Returns:
            The index of the added sphere.

        Raises:
            SceneError: If material_id does not name a registered material
                or radius is not positive.
        """
        if not isinstance(material_id, int) or not 0 <= material_id < len(self.materials):
            raise SceneError(f"Invalid material_id: {material_id!r}")
        if not radius > 0.0:
            raise SceneError(f"Sphere radius must be positive, got {radius}")
        self.spheres.append(
            SphereInfo(
                center=tuple(Vec3.from_iterable(center)),
                radius=float(radius),
                material_id=material_id,
            )
        )
        return len(self.spheres) - 1

    def build_world(self) -> HittableList:
        """Instantiate the scene as an intersectable world.

        Returns:
            A HittableList holding one Sphere per sphere entry, in order.
        """
        world = HittableList()
        for info in self.spheres:
            world.add(
                Sphere(
                    center=Vec3.from_iterable(info.center),
                    radius=info.radius,
                    material=self.materials[info.material_id],
                )
            )
        return world

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        return {
            "materials": [material_to_dict(m) for m in self.materials],
            "spheres": [
                {
                    "center": list(info.center),
                    "radius": info.radius,
                    "material_id": info.material_id,
                }
                for info in self.spheres
            ],
            "camera": self.camera.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneDescription:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with 'materials', 'spheres' and optional
                'camera' keys.

        Returns:
            The scene description.

        Raises:
            SceneError: If the dictionary contains invalid data.
        """
        if not isinstance(data, dict):
            raise SceneError(f"Scene must be a mapping, got {type(data).__name__}")

        materials = data.get("materials", [])
        if not isinstance(materials, list):
            raise SceneError(f"Scene 'materials' must be a list, got {materials!r}")
        spheres = data.get("spheres", [])
        if not isinstance(spheres, list):
            raise SceneError(f"Scene 'spheres' must be a list, got {spheres!r}")

        scene = cls()
        for mat_config in materials:
            scene.add_material(material_from_dict(mat_config))

        for sphere_config in spheres:
            if not isinstance(sphere_config, dict):
                raise SceneError(f"Sphere entry must be a mapping, got {sphere_config!r}")
            center = _vec3(sphere_config, "center", (0.0, 0.0, 0.0))
            try:
                radius = float(sphere_config.get("radius", 1.0))
            except (TypeError, ValueError) as e:
                raise SceneError(f"Invalid sphere radius: {e}") from e
            scene.add_sphere(
                center.to_tuple(), radius, sphere_config.get("material_id", 0)
            )

        if "camera" in data:
            try:
                scene.camera = CameraConfig.from_dict(data["camera"])
            except (AttributeError, TypeError, ValueError) as e:
                raise SceneError(f"Invalid camera configuration: {e}") from e
        return scene


def load_scene(path: str | Path) -> SceneDescription:
    """Read a JSON scene file.

    Args:
        path: Path to the scene file.

    Returns:
        The scene description.

    Raises:
        SceneError: If the file cannot be read or parsed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SceneError(f"Cannot read scene file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SceneError(f"Scene file {path} is not valid JSON: {e}") from e
    return SceneDescription.from_dict(data)


def sample_scene() -> SceneDescription:
    """The built-in demo scene: three spheres on a large ground sphere.

    A diffuse red sphere in the middle, a glass sphere on the right and a
    slightly fuzzy metal sphere on the left, viewed by the default camera.
    """
    scene = SceneDescription()
    scene.add_sphere((0.0, 0.0, -1.0), 0.5, scene.add_lambertian_material((0.8, 0.3, 0.3)))
    scene.add_sphere((1.0, 0.0, -1.0), 0.5, scene.add_dielectric_material(1.5))
    scene.add_sphere((-1.0, 0.0, -1.0), 0.5, scene.add_metal_material((0.8, 0.8, 0.8), 0.1))
    scene.add_sphere(
        (0.0, -100.5, -1.0), 100.0, scene.add_lambertian_material((0.8, 0.8, 0.0))
    )
    return scene
