"""Per-bounce importance-sampling weight for integrators.

After a material scatters, the integrator multiplies the path throughput by
a weight:

    specular event:      attenuation
    non-specular event:  attenuation * scattering_density(ray_out) / pdf(ray_out)

where pdf is the strategy the outgoing direction was drawn from. When the
direction comes from the material's own strategy the ratio is 1 and the
weight reduces to the attenuation. The ratio only matters once an integrator
substitutes another strategy (e.g. light sampling) for srec.pdf.
"""

import taichi as ti
import taichi.math as tm

from pathshade.core.hit_record import HitRecord
from pathshade.core.ray import Ray
from pathshade.materials.material import scattering_density
from pathshade.materials.record import ScatterRecord
from pathshade.pdf.pdf import pdf_value

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter_weight(material_id: ti.i32, ray_in: Ray, rec: HitRecord, srec: ScatterRecord) -> vec3:
    """Throughput multiplier for one scatter event.

    Args:
        material_id: The unified material ID that produced srec.
        ray_in: The incoming ray.
        rec: The hit record.
        srec: The scatter record to weight.

    Returns:
        The weight (RGB). Zero for absorbed rays and for directions the
        sampling strategy could not have produced.
    """
    weight = vec3(0.0, 0.0, 0.0)
    if srec.scattered == 1:
        if srec.is_specular == 1:
            weight = srec.attenuation
        else:
            sampling_pdf = pdf_value(srec.pdf, srec.ray_out.direction)
            if sampling_pdf > 0.0:
                density = scattering_density(material_id, ray_in, rec, srec.ray_out)
                weight = srec.attenuation * (density / sampling_pdf)
    return weight
