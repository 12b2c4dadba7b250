"""Dielectric (glass/water) material implementation.

This module implements the dielectric BSDF, which models transparent materials
like glass and water with refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance (or, per material, the
      full unpolarized Fresnel equations)
    - Total internal reflection when sin(theta_t) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles. This
Russian-roulette choice lets a single ray represent the full reflect/refract
split without branching. Dielectrics are non-absorbing: the attenuation is
always white, and the outgoing ray keeps the incoming ray's time.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathshade.materials.dielectric import add_dielectric_material
    >>> idx = add_dielectric_material(ior=1.5)
    >>> # Use within a Taichi kernel:
    >>> # srec = scatter_dielectric_by_id(idx, ray_in, rec, stream)
"""

import logging
from enum import IntEnum

import taichi as ti
import taichi.math as tm

from pathshade.core.hit_record import HitRecord
from pathshade.core.ray import (
    Ray,
    fresnel_dielectric,
    reflect,
    refract,
    safe_normalize,
    schlick_fresnel,
)
from pathshade.core.sampler import random_float
from pathshade.materials.record import ScatterRecord, make_specular_scatter

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3


class FresnelModel(IntEnum):
    """Fresnel reflectance evaluators."""

    SCHLICK = 0
    EXACT = 1


@ti.func
def refraction_ratio(ior: ti.f32, front_face: ti.i32) -> ti.f32:
    """Ratio n_incident / n_transmitted for a hit.

    If hitting from outside (front_face=1): 1/ior (air to glass).
    If hitting from inside (front_face=0): ior (glass to air).
    """
    ratio = 1.0 / ior
    if front_face == 0:
        ratio = ior
    return ratio


@ti.func
def _incidence(unit_in: vec3, normal: vec3):
    """Cosine (clamped to 1) and sine of the incidence angle."""
    cos_theta = tm.min(-tm.dot(unit_in, normal), 1.0)
    sin_theta = ti.sqrt(tm.max(1.0 - cos_theta * cos_theta, 0.0))
    return cos_theta, sin_theta


@ti.func
def fresnel_term(cos_theta: ti.f32, ratio: ti.f32, fresnel_model: ti.i32) -> ti.f32:
    """Evaluate the Fresnel reflectance with the selected model."""
    reflectance = 0.0
    if fresnel_model == int(FresnelModel.EXACT):
        reflectance = fresnel_dielectric(cos_theta, ratio)
    else:
        reflectance = schlick_fresnel(cos_theta, ratio)
    return reflectance


@ti.func
def scatter_dielectric(
    ior: ti.f32,
    fresnel_model: ti.i32,
    ray_in: Ray,
    rec: HitRecord,
    stream: ti.i32,
) -> ScatterRecord:
    """Compute the scattered ray for a dielectric material.

    Total internal reflection is deterministic. Otherwise one uniform draw
    is compared against the Fresnel reflectance: reflect below it, refract
    above it.

    Args:
        ior: Index of refraction of the material.
        fresnel_model: The Fresnel evaluator (see FresnelModel).
        ray_in: The incoming ray.
        rec: The hit record (normal facing the ray, front_face set).
        stream: The random stream handle.

    Returns:
        A specular ScatterRecord with white attenuation.
    """
    # Dielectrics don't absorb light - attenuation is white
    attenuation = vec3(1.0, 1.0, 1.0)

    unit_in = safe_normalize(ray_in.direction)
    ratio = refraction_ratio(ior, rec.front_face)
    cos_theta, sin_theta = _incidence(unit_in, rec.normal)

    # sin(theta_t) = ratio * sin(theta_i) > 1 has no refracted solution
    cannot_refract = ratio * sin_theta > 1.0

    reflectance = fresnel_term(cos_theta, ratio, fresnel_model)
    draw = random_float(stream)

    scattered_direction = vec3(0.0, 0.0, 0.0)
    if cannot_refract or draw < reflectance:
        scattered_direction = reflect(unit_in, rec.normal)
    else:
        scattered_direction = refract(unit_in, rec.normal, ratio)

    # Guard against rounding in the reflect/refract formulas
    scattered_direction = safe_normalize(scattered_direction)
    if tm.dot(scattered_direction, scattered_direction) == 0.0:
        scattered_direction = reflect(unit_in, rec.normal)

    return make_specular_scatter(rec.point, scattered_direction, ray_in.time, attenuation)


@ti.func
def will_reflect(ior: ti.f32, incident_direction: vec3, normal: vec3, front_face: ti.i32) -> ti.i32:
    """Determine if total internal reflection will occur.

    Args:
        ior: Index of refraction of the material.
        incident_direction: The incoming ray direction.
        normal: The surface normal (facing the incoming ray).
        front_face: 1 if the ray hits the outside of the surface.

    Returns:
        1 if total internal reflection will occur, 0 otherwise.
    """
    ratio = refraction_ratio(ior, front_face)
    _, sin_theta = _incidence(safe_normalize(incident_direction), normal)
    result = 0
    if ratio * sin_theta > 1.0:
        result = 1
    return result


@ti.func
def fresnel_reflectance(
    ior: ti.f32,
    fresnel_model: ti.i32,
    incident_direction: vec3,
    normal: vec3,
    front_face: ti.i32,
) -> ti.f32:
    """Compute the reflection probability scatter_dielectric would use.

    Args:
        ior: Index of refraction of the material.
        fresnel_model: The Fresnel evaluator (see FresnelModel).
        incident_direction: The incoming ray direction.
        normal: The surface normal (facing the incoming ray).
        front_face: 1 if the ray hits the outside of the surface.

    Returns:
        The Fresnel reflectance coefficient in [0, 1].
    """
    ratio = refraction_ratio(ior, front_face)
    cos_theta, _ = _incidence(safe_normalize(incident_direction), normal)
    return fresnel_term(cos_theta, ratio, fresnel_model)


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of dielectric materials in the scene
MAX_DIELECTRIC_MATERIALS = 256

# Storage for dielectric material properties
dielectric_iors = ti.field(dtype=ti.f32, shape=MAX_DIELECTRIC_MATERIALS)
dielectric_fresnel_models = ti.field(dtype=ti.i32, shape=MAX_DIELECTRIC_MATERIALS)
num_dielectric_materials = ti.field(dtype=ti.i32, shape=())


def clear_dielectric_materials() -> None:
    """Clear all dielectric materials.

    Resets the material count to zero. Existing data in the field will be
    overwritten when new materials are added.
    """
    num_dielectric_materials[None] = 0


def add_dielectric_material(
    ior: float = 1.5,
    fresnel_model: FresnelModel = FresnelModel.SCHLICK,
) -> int:
    """Add a dielectric material to the material registry.

    Args:
        ior: Index of refraction. Default is 1.5 (typical glass).
            Must be positive; values below 1 model a less dense pocket
            inside a denser medium (e.g. an air bubble in water).
        fresnel_model: The Fresnel evaluator. Default is Schlick's
            approximation.

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If IOR is not positive.
    """
    if ior <= 0.0:
        raise ValueError(f"Index of refraction = {ior} must be positive.")
    fresnel_model = FresnelModel(fresnel_model)

    idx = num_dielectric_materials[None]
    if idx >= MAX_DIELECTRIC_MATERIALS:
        raise RuntimeError(
            f"Maximum number of dielectric materials ({MAX_DIELECTRIC_MATERIALS}) exceeded"
        )

    dielectric_iors[idx] = ior
    dielectric_fresnel_models[idx] = int(fresnel_model)
    num_dielectric_materials[None] = idx + 1
    logger.debug(
        f"Added dielectric material {idx}: ior={ior}, fresnel_model={fresnel_model.name}"
    )
    return idx


def get_dielectric_material_count() -> int:
    """Get the number of dielectric materials in the registry."""
    return int(num_dielectric_materials[None])


@ti.func
def get_dielectric_ior(material_idx: ti.i32) -> ti.f32:
    """Get the IOR for a dielectric material by index."""
    return dielectric_iors[material_idx]


@ti.func
def get_dielectric_fresnel_model(material_idx: ti.i32) -> ti.i32:
    """Get the Fresnel model for a dielectric material by index."""
    return dielectric_fresnel_models[material_idx]


@ti.func
def scatter_dielectric_by_id(
    material_idx: ti.i32,
    ray_in: Ray,
    rec: HitRecord,
    stream: ti.i32,
) -> ScatterRecord:
    """Compute the scattered ray for a dielectric material by index.

    Convenience function that looks up the IOR and Fresnel model from the
    material registry and calls scatter_dielectric.
    """
    ior = get_dielectric_ior(material_idx)
    fresnel_model = get_dielectric_fresnel_model(material_idx)
    return scatter_dielectric(ior, fresnel_model, ray_in, rec, stream)
