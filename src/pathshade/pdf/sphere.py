"""Uniform sampling over the unit sphere.

Used for scattering inside participating media, where there is no surface
normal to favour. Every direction has density 1 / (4 pi).
"""

import taichi as ti
import taichi.math as tm

from pathshade.core.ray import ZERO_LENGTH_SQUARED, length_squared
from pathshade.core.sampler import random_unit_vector

# Type alias for 3D vectors
vec3 = tm.vec3

UNIFORM_SPHERE_DENSITY = 1.0 / (4.0 * tm.pi)


@ti.func
def sphere_pdf_value(direction: vec3) -> ti.f32:
    """Density of a direction under uniform sphere sampling.

    Returns 0 for a zero-length direction.
    """
    pdf = 0.0
    if length_squared(direction) > ZERO_LENGTH_SQUARED:
        pdf = UNIFORM_SPHERE_DENSITY
    return pdf


@ti.func
def sphere_pdf_generate(stream: ti.i32) -> vec3:
    """Draw a uniformly distributed unit direction."""
    return random_unit_vector(stream)
