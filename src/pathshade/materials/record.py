"""Scatter record returned by every material's scatter operation.

A ScatterRecord describes one outgoing-ray sampling event:

    scattered: 0 means the material absorbed the ray (path terminates);
        every other field is then meaningless.
    ray_out: the outgoing ray, starting at the hit point and carrying the
        incoming ray's time.
    is_specular: 1 for Dirac-delta events (mirror reflection, refraction).
        These have no density; their pdf is PdfType.NONE and the integrator
        must not evaluate densities for them.
    attenuation: per-channel fraction of radiance that survives.
    pdf: for non-specular events, the strategy ray_out was drawn from, for
        the integrator's importance-sampling weights.
"""

import taichi as ti
import taichi.math as tm

from pathshade.core.ray import Ray
from pathshade.pdf.pdf import Pdf, make_null_pdf

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.dataclass
class ScatterRecord:
    """One outgoing-ray sampling event.

    Attributes:
        scattered: 1 if the material scattered the ray, 0 if absorbed.
        ray_out: The outgoing ray.
        is_specular: 1 for delta (specular) events, 0 otherwise.
        attenuation: The color attenuation for this bounce.
        pdf: The sampling strategy for non-specular events.
    """

    scattered: ti.i32
    ray_out: Ray
    is_specular: ti.i32
    attenuation: vec3
    pdf: Pdf


@ti.func
def make_no_scatter(ray_in: Ray) -> ScatterRecord:
    """Create the record for an absorbed ray."""
    return ScatterRecord(
        scattered=0,
        ray_out=Ray(origin=ray_in.origin, direction=ray_in.direction, time=ray_in.time),
        is_specular=0,
        attenuation=vec3(0.0, 0.0, 0.0),
        pdf=make_null_pdf(),
    )


@ti.func
def make_specular_scatter(
    point: vec3,
    direction: vec3,
    time: ti.f32,
    attenuation: vec3,
) -> ScatterRecord:
    """Create the record for a specular (delta) event."""
    return ScatterRecord(
        scattered=1,
        ray_out=Ray(origin=point, direction=direction, time=time),
        is_specular=1,
        attenuation=attenuation,
        pdf=make_null_pdf(),
    )


@ti.func
def make_diffuse_scatter(
    point: vec3,
    direction: vec3,
    time: ti.f32,
    attenuation: vec3,
    pdf: Pdf,
) -> ScatterRecord:
    """Create the record for a non-specular event sampled from pdf."""
    return ScatterRecord(
        scattered=1,
        ray_out=Ray(origin=point, direction=direction, time=time),
        is_specular=0,
        attenuation=attenuation,
        pdf=pdf,
    )
