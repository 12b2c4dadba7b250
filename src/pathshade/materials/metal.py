"""Metal (specular reflective) material implementation.

This module implements the metal BSDF, which models specular reflection with
optional roughness (fuzziness). Perfect metals (roughness=0) produce mirror-like
reflections, while rougher metals scatter reflected rays within a cone.

The reflection formula is:
    R = I - 2(I . N)N

where I is the unit incident direction and N is the surface normal.

For rough metals, the reflected direction is perturbed by a random point in
the unit sphere scaled by the roughness parameter. Perturbed directions that
end up at or below the surface are absorbed.

Every metal bounce is a specular event: no sampling strategy is attached and
the integrator weights it by the attenuation alone.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathshade.materials.metal import add_metal_material
    >>> idx = add_metal_material((0.8, 0.6, 0.2), roughness=0.3)
    >>> # Use within a Taichi kernel:
    >>> # srec = scatter_metal_by_id(idx, ray_in, rec, stream)
"""

import logging

import taichi as ti
import taichi.math as tm

from pathshade.core.hit_record import HitRecord
from pathshade.core.ray import Ray, near_zero, reflect, safe_normalize
from pathshade.core.sampler import random_in_unit_sphere
from pathshade.materials.record import ScatterRecord, make_no_scatter, make_specular_scatter

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter_metal(
    albedo: vec3,
    roughness: ti.f32,
    ray_in: Ray,
    rec: HitRecord,
    stream: ti.i32,
) -> ScatterRecord:
    """Compute the scattered ray for a metal material.

    Reflects the unit incident direction about the shading normal, then
    perturbs it by roughness * random_in_unit_sphere(). With roughness 0 no
    randomness is consumed and the result is the exact mirror direction.

    Args:
        albedo: The reflective color (RGB).
        roughness: The surface roughness in [0, 1].
        ray_in: The incoming ray.
        rec: The hit record.
        stream: The random stream handle.

    Returns:
        A specular ScatterRecord with attenuation = albedo, or an absorbed
        record if the perturbed direction points into the surface.
    """
    unit_in = safe_normalize(ray_in.direction)
    reflected = reflect(unit_in, rec.normal)

    fuzz_offset = vec3(0.0, 0.0, 0.0)
    if roughness > 0.0:
        fuzz_offset = roughness * random_in_unit_sphere(stream)
    scattered_direction = reflected + fuzz_offset

    # Degenerate perturbation: fall back to the normal
    if near_zero(scattered_direction):
        scattered_direction = rec.normal
    scattered_direction = safe_normalize(scattered_direction)

    srec = make_no_scatter(ray_in)
    if tm.dot(scattered_direction, rec.normal) > 0.0:
        srec = make_specular_scatter(rec.point, scattered_direction, ray_in.time, albedo)
    return srec


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of metal materials in the scene
MAX_METAL_MATERIALS = 256

# Storage for metal material properties
metal_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_METAL_MATERIALS)
metal_roughnesses = ti.field(dtype=ti.f32, shape=MAX_METAL_MATERIALS)
num_metal_materials = ti.field(dtype=ti.i32, shape=())


def clear_metal_materials() -> None:
    """Clear all metal materials.

    Resets the material count to zero. Existing data in the field will be
    overwritten when new materials are added.
    """
    num_metal_materials[None] = 0


def clamp_roughness(roughness: float) -> float:
    """Clamp a roughness value to [0, 1], logging when it changes."""
    clamped = min(max(roughness, 0.0), 1.0)
    if clamped != roughness:
        logger.warning(f"Roughness = {roughness} is outside [0, 1]; clamped to {clamped}")
    return clamped


def add_metal_material(
    albedo: tuple[float, float, float],
    roughness: float = 0.0,
) -> int:
    """Add a metal material to the material registry.

    Args:
        albedo: The reflective color as (R, G, B) tuple.
            Each component should be in [0, 1].
        roughness: The surface roughness. Default is 0 (perfect mirror).
            Values are clamped to [0, 1].

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If any albedo component is outside [0, 1].
    """
    # Validate albedo components
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )

    roughness = clamp_roughness(roughness)

    idx = num_metal_materials[None]
    if idx >= MAX_METAL_MATERIALS:
        raise RuntimeError(
            f"Maximum number of metal materials ({MAX_METAL_MATERIALS}) exceeded"
        )

    metal_albedos[idx] = vec3(albedo[0], albedo[1], albedo[2])
    metal_roughnesses[idx] = roughness
    num_metal_materials[None] = idx + 1
    logger.debug(f"Added metal material {idx}: albedo={tuple(albedo)}, roughness={roughness}")
    return idx


def get_metal_material_count() -> int:
    """Get the number of metal materials in the registry."""
    return int(num_metal_materials[None])


@ti.func
def get_metal_albedo(material_idx: ti.i32) -> vec3:
    """Get the albedo for a metal material by index."""
    return metal_albedos[material_idx]


@ti.func
def get_metal_roughness(material_idx: ti.i32) -> ti.f32:
    """Get the roughness for a metal material by index."""
    return metal_roughnesses[material_idx]


@ti.func
def scatter_metal_by_id(
    material_idx: ti.i32,
    ray_in: Ray,
    rec: HitRecord,
    stream: ti.i32,
) -> ScatterRecord:
    """Compute the scattered ray for a metal material by index.

    Convenience function that looks up the albedo and roughness from the
    material registry and calls scatter_metal.
    """
    albedo = get_metal_albedo(material_idx)
    roughness = get_metal_roughness(material_idx)
    return scatter_metal(albedo, roughness, ray_in, rec, stream)
