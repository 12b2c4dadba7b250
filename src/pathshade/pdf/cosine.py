"""Cosine-weighted hemisphere sampling.

The density matches the Lambertian BRDF times the cosine term, so diffuse
surfaces sampled with it get a constant weight:

    pdf(direction) = cos(theta) / pi    for cos(theta) > 0
                   = 0                  otherwise

where theta is the angle between the unit direction and the frame's normal.
"""

import taichi as ti
import taichi.math as tm

from pathshade.core.ray import local_to_world, near_zero, safe_normalize
from pathshade.core.sampler import random_cosine_direction

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def cosine_pdf_value(normal: vec3, direction: vec3) -> ti.f32:
    """Density of a direction under cosine-weighted hemisphere sampling.

    Args:
        normal: The hemisphere axis (unit length).
        direction: The direction to evaluate (need not be unit length).

    Returns:
        cos(theta) / pi, or 0 if the direction is below the hemisphere or
        zero-length.
    """
    cos_theta = tm.dot(normal, safe_normalize(direction))
    pdf = 0.0
    if cos_theta > 0.0:
        pdf = cos_theta / tm.pi
    return pdf


@ti.func
def cosine_pdf_generate(tangent: vec3, bitangent: vec3, normal: vec3, stream: ti.i32) -> vec3:
    """Draw a cosine-weighted direction around normal.

    Args:
        tangent: Local frame x-axis.
        bitangent: Local frame y-axis.
        normal: Local frame z-axis (the hemisphere axis).
        stream: The random stream handle.

    Returns:
        A unit direction in world space on the normal's side.
    """
    local_dir = random_cosine_direction(stream)
    world_dir = local_to_world(local_dir, tangent, bitangent, normal)

    # Handle degenerate case where the sampled direction is near zero
    # (can happen due to floating point issues)
    if near_zero(world_dir):
        world_dir = normal
    return world_dir
