"""Isotropic phase function for participating media.

Inside a volume there is no meaningful surface normal: an isotropic medium
scatters into every direction on the sphere with equal probability. The
scattered ray starts at the scattering point, its attenuation is the albedo
texture at the hit, and the attached strategy is uniform sphere sampling:

    pdf(direction) = 1 / (4 pi)

Used by volumetric geometry only, never by surfaces.
"""

import logging

import taichi as ti

from pathshade.core.hit_record import HitRecord
from pathshade.core.ray import Ray
from pathshade.materials.record import ScatterRecord, make_diffuse_scatter
from pathshade.pdf.pdf import make_sphere_pdf, pdf_generate
from pathshade.pdf.sphere import sphere_pdf_value
from pathshade.textures.texture import is_valid_texture, texture_value

logger = logging.getLogger(__name__)


@ti.func
def scattering_density_isotropic(ray_out: Ray) -> ti.f32:
    """Density with which scatter_isotropic produces ray_out: 1 / (4 pi)."""
    return sphere_pdf_value(ray_out.direction)


@ti.func
def scatter_isotropic(
    albedo_texture: ti.i32,
    ray_in: Ray,
    rec: HitRecord,
    stream: ti.i32,
) -> ScatterRecord:
    """Scatter uniformly over the sphere.

    Args:
        albedo_texture: ID of the albedo texture.
        ray_in: The incoming ray.
        rec: The hit record (only point, u and v are used).
        stream: The random stream handle.

    Returns:
        A non-specular ScatterRecord carrying the uniform sphere strategy.
    """
    pdf = make_sphere_pdf()
    direction = pdf_generate(pdf, stream)
    attenuation = texture_value(albedo_texture, rec.u, rec.v, rec.point)
    return make_diffuse_scatter(rec.point, direction, ray_in.time, attenuation, pdf)


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of isotropic materials in the scene
MAX_ISOTROPIC_MATERIALS = 64

isotropic_albedo_textures = ti.field(dtype=ti.i32, shape=MAX_ISOTROPIC_MATERIALS)
num_isotropic_materials = ti.field(dtype=ti.i32, shape=())


def clear_isotropic_materials() -> None:
    """Clear all isotropic materials."""
    num_isotropic_materials[None] = 0


def add_isotropic_material(albedo_texture: int) -> int:
    """Add an isotropic medium material to the material registry.

    Args:
        albedo_texture: ID of a registered texture holding the albedo.

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If the texture ID is not registered.
    """
    if not is_valid_texture(albedo_texture):
        raise ValueError(f"Unknown albedo texture: {albedo_texture}")

    idx = num_isotropic_materials[None]
    if idx >= MAX_ISOTROPIC_MATERIALS:
        raise RuntimeError(
            f"Maximum number of isotropic materials ({MAX_ISOTROPIC_MATERIALS}) exceeded"
        )

    isotropic_albedo_textures[idx] = albedo_texture
    num_isotropic_materials[None] = idx + 1
    logger.debug(f"Added isotropic material {idx}: albedo_texture={albedo_texture}")
    return idx


def get_isotropic_material_count() -> int:
    """Get the number of isotropic materials in the registry."""
    return int(num_isotropic_materials[None])


@ti.func
def scatter_isotropic_by_id(
    material_idx: ti.i32,
    ray_in: Ray,
    rec: HitRecord,
    stream: ti.i32,
) -> ScatterRecord:
    albedo_texture = isotropic_albedo_textures[material_idx]
    return scatter_isotropic(albedo_texture, ray_in, rec, stream)
