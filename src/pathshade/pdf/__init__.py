"""Probability density strategies over outgoing directions.

Each strategy supports two operations:
    - pdf_generate(): draw a direction
    - pdf_value(): evaluate the solid-angle density at a direction

Components:
    pdf: The Pdf value struct, the PdfType tag and the dispatch functions
    cosine: Cosine-weighted hemisphere sampling (diffuse surfaces)
    sphere: Uniform sphere sampling (participating media)
"""

from .cosine import cosine_pdf_generate, cosine_pdf_value
from .pdf import (
    Pdf,
    PdfType,
    make_cosine_pdf,
    make_null_pdf,
    make_sphere_pdf,
    pdf_generate,
    pdf_value,
)
from .sphere import UNIFORM_SPHERE_DENSITY, sphere_pdf_generate, sphere_pdf_value

__all__ = [
    "Pdf",
    "PdfType",
    "make_null_pdf",
    "make_cosine_pdf",
    "make_sphere_pdf",
    "pdf_value",
    "pdf_generate",
    "cosine_pdf_value",
    "cosine_pdf_generate",
    "sphere_pdf_value",
    "sphere_pdf_generate",
    "UNIFORM_SPHERE_DENSITY",
]
