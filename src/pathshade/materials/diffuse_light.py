"""Diffuse area light (emissive) material implementation.

A diffuse light never scatters: hitting it terminates the path. It emits the
value of its emission texture at the hit, toward the side its outward normal
faces. Two-sided lights emit on both faces.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathshade.textures.texture import add_solid_texture
    >>> from pathshade.materials.diffuse_light import add_diffuse_light_material
    >>> idx = add_diffuse_light_material(add_solid_texture((15.0, 15.0, 15.0)))
    >>> # Use within a Taichi kernel:
    >>> # radiance = emitted_diffuse_light_by_id(idx, rec, rec.u, rec.v, rec.point)
"""

import logging

import taichi as ti
import taichi.math as tm

from pathshade.core.hit_record import HitRecord
from pathshade.core.ray import Ray
from pathshade.materials.record import ScatterRecord, make_no_scatter
from pathshade.textures.texture import is_valid_texture, texture_value

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter_diffuse_light(ray_in: Ray) -> ScatterRecord:
    """Lights absorb every ray; the path ends at the emitter."""
    return make_no_scatter(ray_in)


@ti.func
def emitted_diffuse_light(
    emit_texture: ti.i32,
    two_sided: ti.i32,
    rec: HitRecord,
    u: ti.f32,
    v: ti.f32,
    point: vec3,
) -> vec3:
    """Radiance emitted toward the incoming ray's origin.

    Args:
        emit_texture: ID of the emission texture.
        two_sided: 1 if the light emits from both faces.
        rec: The hit record (provides front_face).
        u: First surface coordinate for the texture lookup.
        v: Second surface coordinate for the texture lookup.
        point: Hit point for the texture lookup.

    Returns:
        The texture value on emitting faces, zero otherwise.
    """
    result = vec3(0.0, 0.0, 0.0)
    if rec.front_face == 1 or two_sided == 1:
        result = texture_value(emit_texture, u, v, point)
    return result


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of diffuse light materials in the scene
MAX_DIFFUSE_LIGHT_MATERIALS = 64

# Storage for diffuse light material properties
diffuse_light_emit_textures = ti.field(dtype=ti.i32, shape=MAX_DIFFUSE_LIGHT_MATERIALS)
diffuse_light_two_sided = ti.field(dtype=ti.i32, shape=MAX_DIFFUSE_LIGHT_MATERIALS)
num_diffuse_light_materials = ti.field(dtype=ti.i32, shape=())


def clear_diffuse_light_materials() -> None:
    """Clear all diffuse light materials."""
    num_diffuse_light_materials[None] = 0


def add_diffuse_light_material(emit_texture: int, two_sided: bool = False) -> int:
    """Add a diffuse light material to the material registry.

    Args:
        emit_texture: ID of a registered texture holding the emitted
            radiance. Values may exceed 1.
        two_sided: Emit from both faces. Default is front faces only.

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If the texture ID is not registered.
    """
    if not is_valid_texture(emit_texture):
        raise ValueError(f"Unknown emission texture: {emit_texture}")

    idx = num_diffuse_light_materials[None]
    if idx >= MAX_DIFFUSE_LIGHT_MATERIALS:
        raise RuntimeError(
            f"Maximum number of diffuse light materials ({MAX_DIFFUSE_LIGHT_MATERIALS}) exceeded"
        )

    diffuse_light_emit_textures[idx] = emit_texture
    diffuse_light_two_sided[idx] = 1 if two_sided else 0
    num_diffuse_light_materials[None] = idx + 1
    logger.debug(
        f"Added diffuse light material {idx}: emit_texture={emit_texture}, two_sided={two_sided}"
    )
    return idx


def get_diffuse_light_material_count() -> int:
    """Get the number of diffuse light materials in the registry."""
    return int(num_diffuse_light_materials[None])


@ti.func
def get_diffuse_light_emit_texture(material_idx: ti.i32) -> ti.i32:
    return diffuse_light_emit_textures[material_idx]


@ti.func
def emitted_diffuse_light_by_id(
    material_idx: ti.i32,
    rec: HitRecord,
    u: ti.f32,
    v: ti.f32,
    point: vec3,
) -> vec3:
    """Emitted radiance for a diffuse light material by index."""
    emit_texture = get_diffuse_light_emit_texture(material_idx)
    two_sided = diffuse_light_two_sided[material_idx]
    return emitted_diffuse_light(emit_texture, two_sided, rec, u, v, point)
