"""Materials module for BRDF/BSDF models.

This module implements physically-based material models for light scattering:

Components:
    lambertian: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional roughness
    dielectric: Glass-like materials with refraction (Fresnel equations)
    diffuse_light: Emissive area lights (non-scattering)
    isotropic: Uniform phase function for participating media
    record: The ScatterRecord every scatter operation returns
    material: Material type tags, unified material IDs and dispatch
    estimator: Per-bounce importance-sampling weight

Each material provides, through the dispatch functions in material.py:
    - scatter(): Sample an outgoing ray, or absorb
    - scattering_density(): Density of the material's own sampling strategy
    - emitted(): Emitted radiance

All device-side computations are Taichi functions. Randomness comes only from
the random stream handle passed to scatter().
"""

from .dielectric import (
    FresnelModel,
    add_dielectric_material,
    clear_dielectric_materials,
    fresnel_reflectance,
    get_dielectric_fresnel_model,
    get_dielectric_ior,
    get_dielectric_material_count,
    scatter_dielectric,
    scatter_dielectric_by_id,
    will_reflect,
)
from .diffuse_light import (
    add_diffuse_light_material,
    clear_diffuse_light_materials,
    emitted_diffuse_light,
    emitted_diffuse_light_by_id,
    get_diffuse_light_material_count,
    scatter_diffuse_light,
)
from .estimator import scatter_weight
from .isotropic import (
    add_isotropic_material,
    clear_isotropic_materials,
    get_isotropic_material_count,
    scatter_isotropic,
    scatter_isotropic_by_id,
    scattering_density_isotropic,
)
from .lambertian import (
    add_lambertian_material,
    clear_lambertian_materials,
    get_lambertian_albedo_texture,
    get_lambertian_material_count,
    scatter_lambertian,
    scatter_lambertian_by_id,
    scattering_density_lambertian,
)
from .material import (
    MAX_MATERIALS,
    MaterialType,
    clear_material_registry,
    emitted,
    get_material_count,
    get_material_type,
    get_material_type_index,
    register_material,
    scatter,
    scattering_density,
)
from .metal import (
    add_metal_material,
    clamp_roughness,
    clear_metal_materials,
    get_metal_albedo,
    get_metal_material_count,
    get_metal_roughness,
    scatter_metal,
    scatter_metal_by_id,
)
from .record import (
    ScatterRecord,
    make_diffuse_scatter,
    make_no_scatter,
    make_specular_scatter,
)

__all__ = [
    # Contract
    "MaterialType",
    "MAX_MATERIALS",
    "ScatterRecord",
    "make_no_scatter",
    "make_specular_scatter",
    "make_diffuse_scatter",
    "scatter",
    "scattering_density",
    "emitted",
    "scatter_weight",
    "register_material",
    "clear_material_registry",
    "get_material_count",
    "get_material_type",
    "get_material_type_index",
    # Lambertian
    "scatter_lambertian",
    "scatter_lambertian_by_id",
    "scattering_density_lambertian",
    "add_lambertian_material",
    "clear_lambertian_materials",
    "get_lambertian_material_count",
    "get_lambertian_albedo_texture",
    # Metal
    "scatter_metal",
    "scatter_metal_by_id",
    "add_metal_material",
    "clamp_roughness",
    "clear_metal_materials",
    "get_metal_material_count",
    "get_metal_albedo",
    "get_metal_roughness",
    # Dielectric
    "FresnelModel",
    "scatter_dielectric",
    "scatter_dielectric_by_id",
    "add_dielectric_material",
    "clear_dielectric_materials",
    "get_dielectric_material_count",
    "get_dielectric_ior",
    "get_dielectric_fresnel_model",
    "fresnel_reflectance",
    "will_reflect",
    # Diffuse light
    "scatter_diffuse_light",
    "emitted_diffuse_light",
    "emitted_diffuse_light_by_id",
    "add_diffuse_light_material",
    "clear_diffuse_light_materials",
    "get_diffuse_light_material_count",
    # Isotropic
    "scatter_isotropic",
    "scatter_isotropic_by_id",
    "scattering_density_isotropic",
    "add_isotropic_material",
    "clear_isotropic_materials",
    "get_isotropic_material_count",
]
