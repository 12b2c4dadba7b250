"""Material library for building and serializing a scene's material set.

This module provides a high-level API over the texture and material
registries. It assigns unified material IDs, remembers the parameters each
material was created with, and exports or loads the whole set as a
configuration object or a plain dictionary (for JSON).

The MaterialLibrary maintains:
- The texture list (solid and checker) in texture ID order
- The material list in unified material ID order
- Convenience methods that create a solid texture and a material in one call

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathshade.scene.library import MaterialLibrary
    >>> library = MaterialLibrary()
    >>> red = library.add_lambertian(albedo=(0.65, 0.05, 0.05))
    >>> light = library.add_diffuse_light(emission=(15.0, 15.0, 15.0))
    >>> glass = library.add_dielectric(ior=1.5)
    >>> # Pass red/light/glass as material_id in hit records
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from pathshade.materials.dielectric import (
    FresnelModel,
    add_dielectric_material,
    clear_dielectric_materials,
)
from pathshade.materials.diffuse_light import (
    add_diffuse_light_material,
    clear_diffuse_light_materials,
)
from pathshade.materials.isotropic import (
    add_isotropic_material,
    clear_isotropic_materials,
)
from pathshade.materials.lambertian import (
    add_lambertian_material,
    clear_lambertian_materials,
)
from pathshade.materials.material import (
    MAX_MATERIALS,
    MaterialType,
    clear_material_registry,
    get_material_count,
    register_material,
)
from pathshade.materials.metal import (
    add_metal_material,
    clear_metal_materials,
    metal_roughnesses,
)
from pathshade.textures.texture import (
    MAX_TEXTURES,
    TextureType,
    add_checker_texture,
    add_solid_texture,
    clear_textures,
    get_texture_count,
)

logger = logging.getLogger(__name__)


@dataclass
class TextureInfo:
    """Information about a registered texture.

    Attributes:
        texture_id: The texture ID.
        texture_type: The type of texture (solid or checker).
        params: The texture parameters as provided during creation.
    """

    texture_id: int
    texture_type: TextureType
    params: dict[str, Any]


@dataclass
class MaterialInfo:
    """Information about a registered material.

    Attributes:
        material_id: The unified material ID.
        material_type: The material variant.
        type_index: The index within the variant's registry.
        params: The material parameters as stored in the registry.
    """

    material_id: int
    material_type: MaterialType
    type_index: int
    params: dict[str, Any]


@dataclass
class LibraryConfig:
    """Configuration for material library serialization.

    Attributes:
        textures: List of texture configurations, in texture ID order.
        materials: List of material configurations, in material ID order.
    """

    textures: list[dict[str, Any]] = field(default_factory=list)
    materials: list[dict[str, Any]] = field(default_factory=list)


def _as_color(values: Any) -> tuple[float, float, float]:
    if len(values) != 3:
        raise ValueError(f"Color must have 3 components, got {len(values)}")
    return (float(values[0]), float(values[1]), float(values[2]))


class MaterialLibrary:
    """Builder for the textures and materials of one scene.

    Creating a library clears every texture and material registry, so at
    most one library should be live at a time.

    Attributes:
        textures: List of TextureInfo for all registered textures.
        materials: List of MaterialInfo for all registered materials.

    Example:
        >>> library = MaterialLibrary()
        >>> checker = library.add_checker_texture((0.2, 0.3, 0.1), (0.9, 0.9, 0.9))
        >>> ground = library.add_lambertian(albedo_texture=checker)
        >>> mirror = library.add_metal(albedo=(0.8, 0.8, 0.8), roughness=0.0)
        >>> config = library.to_config()
    """

    def __init__(self) -> None:
        """Initialize an empty library."""
        self.textures: list[TextureInfo] = []
        self.materials: list[MaterialInfo] = []
        self._clear_all()

    def _clear_all(self) -> None:
        """Clear all library data including Taichi fields."""
        clear_textures()
        clear_lambertian_materials()
        clear_metal_materials()
        clear_dielectric_materials()
        clear_diffuse_light_materials()
        clear_isotropic_materials()
        clear_material_registry()
        self.textures.clear()
        self.materials.clear()

    def clear(self) -> None:
        """Clear every texture and material.

        Resets all Taichi registries and internal tracking structures.
        """
        self._clear_all()
        logger.info("Cleared material library")

    # =========================================================================
    # Texture Management
    # =========================================================================

    def add_solid_texture(self, color: tuple[float, float, float]) -> int:
        """Add a constant-color texture.

        Args:
            color: The color as (R, G, B). Components must be non-negative.

        Returns:
            The texture ID.
        """
        texture_id = add_solid_texture(color)
        self.textures.append(
            TextureInfo(
                texture_id=texture_id,
                texture_type=TextureType.SOLID,
                params={"color": list(color)},
            )
        )
        return texture_id

    def add_checker_texture(
        self,
        even_color: tuple[float, float, float],
        odd_color: tuple[float, float, float],
        scale: float = 10.0,
    ) -> int:
        """Add a 3D checker texture.

        Args:
            even_color: Color of the even cells.
            odd_color: Color of the odd cells.
            scale: Spatial frequency of the pattern.

        Returns:
            The texture ID.
        """
        texture_id = add_checker_texture(even_color, odd_color, scale)
        self.textures.append(
            TextureInfo(
                texture_id=texture_id,
                texture_type=TextureType.CHECKER,
                params={
                    "even_color": list(even_color),
                    "odd_color": list(odd_color),
                    "scale": scale,
                },
            )
        )
        return texture_id

    def get_texture_count(self) -> int:
        """Get the number of textures in the library."""
        return get_texture_count()

    def _resolve_texture(
        self,
        color: tuple[float, float, float] | None,
        texture_id: int | None,
        color_name: str,
    ) -> int:
        """Return texture_id, or a new solid texture of color."""
        if (color is None) == (texture_id is None):
            raise ValueError(f"Exactly one of {color_name} or a texture ID must be given")
        if texture_id is None:
            return self.add_solid_texture(color)
        return texture_id

    # =========================================================================
    # Material Management
    # =========================================================================

    def _register(
        self,
        material_type: MaterialType,
        type_index: int,
        params: dict[str, Any],
    ) -> int:
        material_id = register_material(material_type, type_index)
        self.materials.append(
            MaterialInfo(
                material_id=material_id,
                material_type=material_type,
                type_index=type_index,
                params=params,
            )
        )
        return material_id

    def add_lambertian(
        self,
        albedo: tuple[float, float, float] | None = None,
        albedo_texture: int | None = None,
    ) -> int:
        """Add a Lambertian (diffuse) material.

        Args:
            albedo: The diffuse reflectance as (R, G, B); a solid texture is
                created for it.
            albedo_texture: ID of an existing texture to use instead.

        Returns:
            The unified material ID for this material.

        Raises:
            RuntimeError: If the maximum number of materials is exceeded.
            ValueError: If both or neither of albedo and albedo_texture are
                given, or the texture is unknown.
        """
        texture_id = self._resolve_texture(albedo, albedo_texture, "albedo")
        type_index = add_lambertian_material(texture_id)
        return self._register(
            MaterialType.LAMBERTIAN, type_index, {"albedo_texture": texture_id}
        )

    def add_metal(
        self,
        albedo: tuple[float, float, float],
        roughness: float = 0.0,
    ) -> int:
        """Add a metal (specular reflective) material.

        Args:
            albedo: The reflective color as (R, G, B), each in [0, 1].
            roughness: The surface roughness. Clamped to [0, 1].

        Returns:
            The unified material ID for this material.
        """
        type_index = add_metal_material(albedo, roughness)
        # Record the roughness the registry stored, after clamping
        stored_roughness = float(metal_roughnesses[type_index])
        return self._register(
            MaterialType.METAL,
            type_index,
            {"albedo": list(albedo), "roughness": stored_roughness},
        )

    def add_dielectric(
        self,
        ior: float = 1.5,
        fresnel_model: FresnelModel = FresnelModel.SCHLICK,
    ) -> int:
        """Add a dielectric (glass/water) material.

        Args:
            ior: Index of refraction. Default is 1.5 (typical glass).
                Common values: Air=1.0, Water=1.33, Glass=1.5, Diamond=2.4
            fresnel_model: The Fresnel evaluator.

        Returns:
            The unified material ID for this material.
        """
        fresnel_model = FresnelModel(fresnel_model)
        type_index = add_dielectric_material(ior, fresnel_model)
        return self._register(
            MaterialType.DIELECTRIC,
            type_index,
            {"ior": ior, "fresnel_model": fresnel_model.name.lower()},
        )

    def add_diffuse_light(
        self,
        emission: tuple[float, float, float] | None = None,
        emit_texture: int | None = None,
        two_sided: bool = False,
    ) -> int:
        """Add a diffuse area light.

        Args:
            emission: The emitted radiance as (R, G, B); may exceed 1.
            emit_texture: ID of an existing texture to use instead.
            two_sided: Emit from both faces.

        Returns:
            The unified material ID for this material.
        """
        texture_id = self._resolve_texture(emission, emit_texture, "emission")
        type_index = add_diffuse_light_material(texture_id, two_sided)
        return self._register(
            MaterialType.DIFFUSE_LIGHT,
            type_index,
            {"emit_texture": texture_id, "two_sided": bool(two_sided)},
        )

    def add_isotropic(
        self,
        albedo: tuple[float, float, float] | None = None,
        albedo_texture: int | None = None,
    ) -> int:
        """Add an isotropic medium material.

        Args:
            albedo: The scattering albedo as (R, G, B).
            albedo_texture: ID of an existing texture to use instead.

        Returns:
            The unified material ID for this material.
        """
        texture_id = self._resolve_texture(albedo, albedo_texture, "albedo")
        type_index = add_isotropic_material(texture_id)
        return self._register(
            MaterialType.ISOTROPIC, type_index, {"albedo_texture": texture_id}
        )

    def get_material_count(self) -> int:
        """Get the total number of materials in the library."""
        return get_material_count()

    def get_material_info(self, material_id: int) -> MaterialInfo | None:
        """Get information about a material by ID.

        Returns:
            MaterialInfo for the material, or None if not found.
        """
        if 0 <= material_id < len(self.materials):
            return self.materials[material_id]
        return None

    def get_material_type_python(self, material_id: int) -> MaterialType | None:
        """Get the material type for a given material ID (Python side).

        For kernel-side lookup, use the get_material_type() Taichi function.
        """
        info = self.get_material_info(material_id)
        if info is None:
            return None
        return info.material_type

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> LibraryConfig:
        """Export the library to a configuration object.

        Materials reference textures by ID, so the texture list must be
        loaded before the material list.
        """
        config = LibraryConfig()
        for tex in self.textures:
            config.textures.append({"type": tex.texture_type.name.lower(), **tex.params})
        for mat in self.materials:
            config.materials.append({"type": mat.material_type.name.lower(), **mat.params})
        return config

    def from_config(self, config: LibraryConfig) -> None:
        """Load a library from a configuration object.

        Clears the current library and loads the configuration. Material
        IDs are assigned in list order, so they match the exported ones.

        Args:
            config: The library configuration to load.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()

        for tex_config in config.textures:
            tex_type = tex_config.get("type", "").lower()
            if tex_type == "solid":
                self.add_solid_texture(_as_color(tex_config.get("color", [0.5, 0.5, 0.5])))
            elif tex_type == "checker":
                self.add_checker_texture(
                    _as_color(tex_config.get("even_color", [0.2, 0.3, 0.1])),
                    _as_color(tex_config.get("odd_color", [0.9, 0.9, 0.9])),
                    tex_config.get("scale", 10.0),
                )
            else:
                raise ValueError(f"Unknown texture type: {tex_type}")

        for mat_config in config.materials:
            mat_type = mat_config.get("type", "").lower()
            if mat_type == "lambertian":
                self.add_lambertian(
                    albedo=self._optional_color(mat_config, "albedo"),
                    albedo_texture=mat_config.get("albedo_texture"),
                )
            elif mat_type == "metal":
                self.add_metal(
                    _as_color(mat_config.get("albedo", [0.8, 0.8, 0.8])),
                    mat_config.get("roughness", 0.0),
                )
            elif mat_type == "dielectric":
                model_name = mat_config.get("fresnel_model", "schlick").upper()
                if model_name not in FresnelModel.__members__:
                    raise ValueError(f"Unknown Fresnel model: {model_name.lower()}")
                self.add_dielectric(mat_config.get("ior", 1.5), FresnelModel[model_name])
            elif mat_type == "diffuse_light":
                self.add_diffuse_light(
                    emission=self._optional_color(mat_config, "emission"),
                    emit_texture=mat_config.get("emit_texture"),
                    two_sided=mat_config.get("two_sided", False),
                )
            elif mat_type == "isotropic":
                self.add_isotropic(
                    albedo=self._optional_color(mat_config, "albedo"),
                    albedo_texture=mat_config.get("albedo_texture"),
                )
            else:
                raise ValueError(f"Unknown material type: {mat_type}")

        logger.info(
            f"Loaded material library: {len(self.textures)} textures, "
            f"{len(self.materials)} materials"
        )

    @staticmethod
    def _optional_color(mat_config: dict[str, Any], key: str) -> tuple[float, float, float] | None:
        values = mat_config.get(key)
        if values is None:
            return None
        return _as_color(values)

    def to_dict(self) -> dict[str, Any]:
        """Export the library to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "textures": config.textures,
            "materials": config.materials,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a library from a dictionary.

        Args:
            data: Dictionary with 'textures' and 'materials' keys.
        """
        config = LibraryConfig(
            textures=data.get("textures", []),
            materials=data.get("materials", []),
        )
        self.from_config(config)

    # =========================================================================
    # Capacity Information
    # =========================================================================

    @staticmethod
    def get_max_textures() -> int:
        """Get the maximum number of textures supported."""
        return MAX_TEXTURES

    @staticmethod
    def get_max_materials() -> int:
        """Get the maximum number of materials supported."""
        return MAX_MATERIALS
