"""Sampling strategies over outgoing directions.

A Pdf is a small value struct: a strategy tag plus the local frame the
strategy samples in. It offers two operations, dispatched on the tag:

    pdf_generate(pdf, stream) -> direction
    pdf_value(pdf, direction) -> density (solid-angle measure)

Strategies:
    NONE: attached to specular and absorbed scatter records. Its density is
        0 everywhere; the integrator must not sample it.
    COSINE: cosine-weighted hemisphere around the frame's w axis (see
        cosine.py).
    SPHERE: uniform directions over the whole sphere (see sphere.py).

A Pdf is built fresh for each scatter event and passed by value, so it never
outlives the bounce that created it. Light-sampling strategies live outside
this core; they join the same contract by adding a tag here.
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from pathshade.core.ray import build_onb_from_normal
from pathshade.pdf.cosine import cosine_pdf_generate, cosine_pdf_value
from pathshade.pdf.sphere import sphere_pdf_generate, sphere_pdf_value

# Type alias for 3D vectors
vec3 = tm.vec3


class PdfType(IntEnum):
    """Enumeration of sampling strategies."""

    NONE = 0
    COSINE = 1
    SPHERE = 2


@ti.dataclass
class Pdf:
    """A sampling strategy and the local frame it samples in.

    Attributes:
        kind: The strategy (see PdfType).
        u: Local frame x-axis in world space.
        v: Local frame y-axis in world space.
        w: Local frame z-axis in world space (the shading normal).
    """

    kind: ti.i32
    u: vec3
    v: vec3
    w: vec3


@ti.func
def make_null_pdf() -> Pdf:
    """Create the strategy attached to specular and absorbed events."""
    return Pdf(
        kind=int(PdfType.NONE),
        u=vec3(1.0, 0.0, 0.0),
        v=vec3(0.0, 1.0, 0.0),
        w=vec3(0.0, 0.0, 1.0),
    )


@ti.func
def make_cosine_pdf(normal: vec3) -> Pdf:
    """Create a cosine-weighted hemisphere strategy around a shading normal.

    Args:
        normal: The shading normal (should be normalized). Becomes the w
            axis of the strategy's local frame.
    """
    tangent, bitangent, n = build_onb_from_normal(normal)
    return Pdf(kind=int(PdfType.COSINE), u=tangent, v=bitangent, w=n)


@ti.func
def make_sphere_pdf() -> Pdf:
    """Create a uniform-sphere strategy."""
    return Pdf(
        kind=int(PdfType.SPHERE),
        u=vec3(1.0, 0.0, 0.0),
        v=vec3(0.0, 1.0, 0.0),
        w=vec3(0.0, 0.0, 1.0),
    )


@ti.func
def pdf_value(pdf: Pdf, direction: vec3) -> ti.f32:
    """Evaluate the density of a strategy at a direction.

    Args:
        pdf: The strategy.
        direction: The direction to evaluate (need not be unit length).

    Returns:
        The solid-angle density, never negative. 0 for NONE and for
        degenerate directions.
    """
    result = 0.0
    if pdf.kind == int(PdfType.COSINE):
        result = cosine_pdf_value(pdf.w, direction)
    elif pdf.kind == int(PdfType.SPHERE):
        result = sphere_pdf_value(direction)
    return result


@ti.func
def pdf_generate(pdf: Pdf, stream: ti.i32) -> vec3:
    """Draw a direction from a strategy.

    Args:
        pdf: The strategy.
        stream: The random stream handle.

    Returns:
        A unit direction. NONE returns the frame's w axis without consuming
        randomness.
    """
    result = pdf.w
    if pdf.kind == int(PdfType.COSINE):
        result = cosine_pdf_generate(pdf.u, pdf.v, pdf.w, stream)
    elif pdf.kind == int(PdfType.SPHERE):
        result = sphere_pdf_generate(stream)
    return result
