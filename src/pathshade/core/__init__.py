"""Core building blocks for the shading core.

Components:
    ray: Ray data structure, vector utilities, reflection/refraction,
        Fresnel terms and orthonormal bases
    sampler: Per-context random streams and sampling primitives
    hit_record: Surface hit record consumed by the materials

All device-side operations are Taichi functions usable inside kernels.
"""

from .hit_record import (
    HitRecord,
    make_hit_record,
    set_face_normal,
)
from .ray import (
    Ray,
    build_onb_from_normal,
    cross,
    dot,
    fresnel_dielectric,
    length,
    length_squared,
    local_to_world,
    make_ray,
    near_zero,
    normalize,
    ray_at,
    reflect,
    refract,
    safe_normalize,
    schlick_fresnel,
    vec3,
)
from .sampler import (
    MAX_RANDOM_STREAMS,
    get_random_stream_count,
    random_cosine_direction,
    random_float,
    random_in_unit_sphere,
    random_unit_vector,
    rng_states,
    seed_random_streams,
)

__all__ = [
    # Ray
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_squared",
    "normalize",
    "safe_normalize",
    "dot",
    "cross",
    "near_zero",
    "reflect",
    "refract",
    "schlick_fresnel",
    "fresnel_dielectric",
    "build_onb_from_normal",
    "local_to_world",
    # Sampler
    "MAX_RANDOM_STREAMS",
    "rng_states",
    "seed_random_streams",
    "get_random_stream_count",
    "random_float",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_cosine_direction",
    # Hit record
    "HitRecord",
    "make_hit_record",
    "set_face_normal",
]
