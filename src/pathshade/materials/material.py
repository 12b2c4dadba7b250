"""Material contract and dispatch over the material variants.

Every material is addressed by a unified material ID. The registry maps each
ID to its MaterialType tag and to the type-local index of its parameters in
the variant's own fields (e.g. if material_id 5 is the 2nd metal material,
material_type_indices[5] = 1). Kernels dispatch on the tag:

    scatter(material_id, ray_in, rec, stream) -> ScatterRecord
    scattering_density(material_id, ray_in, rec, ray_out) -> f32
    emitted(material_id, ray_in, rec, u, v, point) -> vec3

None of these fail. An invalid material ID behaves as a black absorber, and
"no scattering" is a ScatterRecord with scattered == 0.

The registry is written from Python scope during scene setup and only read by
kernels, so any number of parallel contexts can share it.
"""

import logging
from enum import IntEnum

import taichi as ti
import taichi.math as tm

from pathshade.core.hit_record import HitRecord
from pathshade.core.ray import Ray
from pathshade.materials.dielectric import scatter_dielectric_by_id
from pathshade.materials.diffuse_light import (
    emitted_diffuse_light_by_id,
    scatter_diffuse_light,
)
from pathshade.materials.isotropic import (
    scatter_isotropic_by_id,
    scattering_density_isotropic,
)
from pathshade.materials.lambertian import (
    scatter_lambertian_by_id,
    scattering_density_lambertian,
)
from pathshade.materials.metal import scatter_metal_by_id
from pathshade.materials.record import ScatterRecord, make_no_scatter

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3


class MaterialType(IntEnum):
    """Enumeration of supported material types.

    Used for material dispatch to determine which scattering function to
    call.
    """

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2
    DIFFUSE_LIGHT = 3
    ISOTROPIC = 4


# Maximum number of materials across all types
MAX_MATERIALS = 1024

# material_types[i] stores the MaterialType for material_id i
material_types = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
# material_type_indices[i] stores the type-local index for material_id i
material_type_indices = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_material_registry() -> None:
    """Clear the unified material ID mapping."""
    num_materials[None] = 0


def register_material(material_type: MaterialType, type_index: int) -> int:
    """Assign a unified material ID to a type-local material.

    Args:
        material_type: The material's variant.
        type_index: Its index in the variant's registry.

    Returns:
        The unified material ID.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    material_type = MaterialType(material_type)
    material_id = num_materials[None]
    if material_id >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_types[material_id] = int(material_type)
    material_type_indices[material_id] = type_index
    num_materials[None] = material_id + 1
    logger.debug(f"Registered material {material_id}: {material_type.name} #{type_index}")
    return material_id


def get_material_count() -> int:
    """Get the total number of registered materials."""
    return int(num_materials[None])


@ti.func
def get_material_type(material_id: ti.i32) -> ti.i32:
    """Get the material type for a given material ID.

    Returns:
        The material type as an integer (see MaterialType enum).
        Returns -1 for invalid material IDs.
    """
    result = -1
    if 0 <= material_id < num_materials[None]:
        result = material_types[material_id]
    return result


@ti.func
def get_material_type_index(material_id: ti.i32) -> ti.i32:
    """Get the type-local index for a given material ID.

    Returns:
        The index into the type-specific material arrays.
        Returns -1 for invalid material IDs.
    """
    result = -1
    if 0 <= material_id < num_materials[None]:
        result = material_type_indices[material_id]
    return result


# =============================================================================
# Material Dispatch
# =============================================================================


@ti.func
def scatter(material_id: ti.i32, ray_in: Ray, rec: HitRecord, stream: ti.i32) -> ScatterRecord:
    """Dispatch to the appropriate material scattering function.

    Args:
        material_id: The unified material ID.
        ray_in: The incoming ray.
        rec: The hit record.
        stream: The random stream handle of the calling context.

    Returns:
        The ScatterRecord of the material. Absorbed (scattered == 0) for
        diffuse lights, for metal rays leaving below the surface and for
        invalid material IDs.
    """
    mat_type = get_material_type(material_id)
    type_index = get_material_type_index(material_id)

    srec = make_no_scatter(ray_in)

    if mat_type == int(MaterialType.LAMBERTIAN):
        srec = scatter_lambertian_by_id(type_index, ray_in, rec, stream)
    elif mat_type == int(MaterialType.METAL):
        srec = scatter_metal_by_id(type_index, ray_in, rec, stream)
    elif mat_type == int(MaterialType.DIELECTRIC):
        srec = scatter_dielectric_by_id(type_index, ray_in, rec, stream)
    elif mat_type == int(MaterialType.DIFFUSE_LIGHT):
        srec = scatter_diffuse_light(ray_in)
    elif mat_type == int(MaterialType.ISOTROPIC):
        srec = scatter_isotropic_by_id(type_index, ray_in, rec, stream)

    return srec


@ti.func
def scattering_density(material_id: ti.i32, ray_in: Ray, rec: HitRecord, ray_out: Ray) -> ti.f32:
    """Density with which the material's own strategy produces ray_out.

    Used by the integrator to weight directions drawn from other strategies
    (e.g. light sampling) against the material's BRDF.

    Returns:
        The solid-angle density, never negative. 0 for specular materials,
        emitters and invalid material IDs.
    """
    mat_type = get_material_type(material_id)
    density = 0.0

    if mat_type == int(MaterialType.LAMBERTIAN):
        density = scattering_density_lambertian(rec, ray_out)
    elif mat_type == int(MaterialType.ISOTROPIC):
        density = scattering_density_isotropic(ray_out)

    return density


@ti.func
def emitted(
    material_id: ti.i32,
    ray_in: Ray,
    rec: HitRecord,
    u: ti.f32,
    v: ti.f32,
    point: vec3,
) -> vec3:
    """Radiance emitted by the surface toward the incoming ray's origin.

    Returns:
        The emitted radiance (RGB); zero for non-emissive materials.
    """
    mat_type = get_material_type(material_id)
    type_index = get_material_type_index(material_id)
    emission = vec3(0.0, 0.0, 0.0)

    if mat_type == int(MaterialType.DIFFUSE_LIGHT):
        emission = emitted_diffuse_light_by_id(type_index, rec, u, v, point)

    return emission
