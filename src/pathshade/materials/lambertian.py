"""Lambertian (ideal diffuse) material implementation.

This module implements the Lambertian BRDF, which models ideal diffuse reflection
where incident light is scattered uniformly in all directions weighted by the
cosine of the angle from the surface normal.

The Lambertian BRDF is:
    f_r(wi, wo) = albedo / pi

The probability density function for cosine-weighted hemisphere sampling is:
    pdf(wi) = cos(theta) / pi

where theta is the angle between the sampled direction and the surface normal.
The albedo is looked up from a texture at the hit's (u, v, point).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathshade.textures.texture import add_solid_texture
    >>> from pathshade.materials.lambertian import add_lambertian_material
    >>> idx = add_lambertian_material(add_solid_texture((0.5, 0.5, 0.5)))
    >>> # Use within a Taichi kernel:
    >>> # srec = scatter_lambertian_by_id(idx, ray_in, rec, stream)
"""

import logging

import taichi as ti

from pathshade.core.hit_record import HitRecord
from pathshade.core.ray import Ray
from pathshade.materials.record import ScatterRecord, make_diffuse_scatter
from pathshade.pdf.cosine import cosine_pdf_value
from pathshade.pdf.pdf import make_cosine_pdf, pdf_generate
from pathshade.textures.texture import is_valid_texture, texture_value

logger = logging.getLogger(__name__)


@ti.func
def scattering_density_lambertian(rec: HitRecord, ray_out: Ray) -> ti.f32:
    """Density with which scatter_lambertian produces ray_out.

    Args:
        rec: The hit record (provides the shading normal).
        ray_out: The outgoing ray to evaluate.

    Returns:
        cos(theta) / pi between the normal and the unit outgoing direction,
        or 0 if the direction is below the surface.
    """
    return cosine_pdf_value(rec.normal, ray_out.direction)


@ti.func
def scatter_lambertian(
    albedo_texture: ti.i32,
    ray_in: Ray,
    rec: HitRecord,
    stream: ti.i32,
) -> ScatterRecord:
    """Sample a scattered ray for a Lambertian material.

    Uses cosine-weighted hemisphere sampling, which is optimal for the
    Lambertian BRDF. The attached PDF lets the integrator weight the sample:

        weight = (BRDF * cos_theta) / pdf
               = (albedo / pi) * cos_theta / (cos_theta / pi)
               = albedo

    Args:
        albedo_texture: ID of the albedo texture.
        ray_in: The incoming ray.
        rec: The hit record.
        stream: The random stream handle.

    Returns:
        A non-specular ScatterRecord with attenuation = albedo.
    """
    pdf = make_cosine_pdf(rec.normal)
    direction = pdf_generate(pdf, stream)
    attenuation = texture_value(albedo_texture, rec.u, rec.v, rec.point)
    return make_diffuse_scatter(rec.point, direction, ray_in.time, attenuation, pdf)


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of Lambertian materials in the scene
MAX_LAMBERTIAN_MATERIALS = 256

# Storage for Lambertian material properties
lambertian_albedo_textures = ti.field(dtype=ti.i32, shape=MAX_LAMBERTIAN_MATERIALS)
num_lambertian_materials = ti.field(dtype=ti.i32, shape=())


def clear_lambertian_materials() -> None:
    """Clear all Lambertian materials.

    Resets the material count to zero. Existing data in the field will be
    overwritten when new materials are added.
    """
    num_lambertian_materials[None] = 0


def add_lambertian_material(albedo_texture: int) -> int:
    """Add a Lambertian material to the material registry.

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

    idx = num_lambertian_materials[None]
    if idx >= MAX_LAMBERTIAN_MATERIALS:
        raise RuntimeError(
            f"Maximum number of Lambertian materials ({MAX_LAMBERTIAN_MATERIALS}) exceeded"
        )

    lambertian_albedo_textures[idx] = albedo_texture
    num_lambertian_materials[None] = idx + 1
    logger.debug(f"Added Lambertian material {idx}: albedo_texture={albedo_texture}")
    return idx


def get_lambertian_material_count() -> int:
    """Get the number of Lambertian materials in the registry."""
    return int(num_lambertian_materials[None])


@ti.func
def get_lambertian_albedo_texture(material_idx: ti.i32) -> ti.i32:
    """Get the albedo texture ID for a Lambertian material by index."""
    return lambertian_albedo_textures[material_idx]


@ti.func
def scatter_lambertian_by_id(
    material_idx: ti.i32,
    ray_in: Ray,
    rec: HitRecord,
    stream: ti.i32,
) -> ScatterRecord:
    """Sample a scattered ray for a Lambertian material by index.

    Convenience function that looks up the albedo texture from the material
    registry and calls scatter_lambertian.
    """
    albedo_texture = get_lambertian_albedo_texture(material_idx)
    return scatter_lambertian(albedo_texture, ray_in, rec, stream)
