"""Per-context random streams for Monte Carlo sampling.

Every sampling operation in the shading core takes an explicit ``stream``
handle: an index into ``rng_states``, which holds one xorshift32 generator
state per stream. A kernel gives each parallel context (a loop iteration, a
pixel, a tile) its own stream, so no two contexts ever advance the same
state and each stream's sequence is reproducible under a fixed seed.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathshade.core.sampler import seed_random_streams, random_float
    >>> seed_random_streams(42)
    >>> # Inside a kernel, one stream per loop iteration:
    >>> # for i in range(n):
    >>> #     x = random_float(i)
"""

import logging

import numpy as np
import taichi as ti
import taichi.math as tm

from pathshade.core.ray import length_squared

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

# Number of independent random streams available to kernels
MAX_RANDOM_STREAMS = 1 << 16

# Rejection sampling gives up after this many attempts
MAX_REJECTION_ATTEMPTS = 100

# Generator state, one xorshift32 word per stream. Zero is a fixed point of
# xorshift, so seeding never writes it and _next_state replaces it.
rng_states = ti.field(dtype=ti.u32, shape=MAX_RANDOM_STREAMS)

# Stream handles wrap modulo the stream count, which must be a power of two
STREAM_MASK = MAX_RANDOM_STREAMS - 1


def seed_random_streams(seed: int) -> None:
    """Seed every random stream from a single integer seed.

    Stream states are drawn from a NumPy Generator, so the same seed always
    reproduces the same per-stream sequences.

    Args:
        seed: The master seed.
    """
    generator = np.random.default_rng(seed)
    states = generator.integers(1, 2**32, size=MAX_RANDOM_STREAMS, dtype=np.uint32)
    rng_states.from_numpy(states)
    logger.debug(f"Seeded {MAX_RANDOM_STREAMS} random streams with seed={seed}")


SEED_ON_IMPORT = 0

seed_random_streams(SEED_ON_IMPORT)


def get_random_stream_count() -> int:
    """Get the number of random streams available to kernels."""
    return MAX_RANDOM_STREAMS


@ti.func
def _stream_fallback_state(slot: ti.i32) -> ti.u32:
    """Derive a nonzero starting state for an unseeded stream slot."""
    # murmur3 finalizer over the slot index
    h = ti.cast(slot, ti.u32) * ti.u32(0x9E3779B9)
    h ^= ti.bit_shr(h, 16)
    h *= ti.u32(0x85EBCA6B)
    h ^= ti.bit_shr(h, 13)
    h *= ti.u32(0xC2B2AE35)
    h ^= ti.bit_shr(h, 16)
    return h | ti.u32(1)


@ti.func
def _next_state(stream: ti.i32) -> ti.u32:
    """Advance the xorshift32 generator of a stream and return its new state.

    Handles outside [0, MAX_RANDOM_STREAMS) wrap onto an existing slot, so a
    kernel may use one handle per pixel of an arbitrarily large image.
    """
    slot = stream & STREAM_MASK
    x = rng_states[slot]
    if x == 0:
        x = _stream_fallback_state(slot)
    x ^= x << 13
    x ^= ti.bit_shr(x, 17)
    x ^= x << 5
    rng_states[slot] = x
    return x


@ti.func
def random_float(stream: ti.i32) -> ti.f32:
    """Draw a uniform random float in [0, 1) from a stream.

    Uses the top 24 bits of the generator state, which convert to f32
    exactly.

    Args:
        stream: The random stream handle.

    Returns:
        A float in [0, 1).
    """
    bits = ti.bit_shr(_next_state(stream), 8)
    return ti.cast(bits, ti.f32) * (1.0 / 16777216.0)


@ti.func
def random_in_unit_sphere(stream: ti.i32) -> vec3:
    """Generate a random point inside the unit sphere.

    Uses rejection sampling to generate uniformly distributed points within
    the unit sphere. Points too close to the center to give a direction are
    rejected as well.

    Args:
        stream: The random stream handle.

    Returns:
        A random point with length < 1.
    """
    p = vec3(0.0, 0.0, 1e-4)
    found = False
    # Rejection sampling loop
    for _ in range(MAX_REJECTION_ATTEMPTS):
        if not found:
            x = random_float(stream) * 2.0 - 1.0
            y = random_float(stream) * 2.0 - 1.0
            z = random_float(stream) * 2.0 - 1.0
            candidate = vec3(x, y, z)
            len_sq = length_squared(candidate)
            if 1e-12 < len_sq < 1.0:
                p = candidate
                found = True
    return p


@ti.func
def random_unit_vector(stream: ti.i32) -> vec3:
    """Generate a random unit vector uniformly distributed on the sphere."""
    return tm.normalize(random_in_unit_sphere(stream))


@ti.func
def random_cosine_direction(stream: ti.i32) -> vec3:
    """Generate a random direction with cosine-weighted distribution.

    The distribution has PDF = cos(theta) / pi in the local frame (z-up).

    Args:
        stream: The random stream handle.

    Returns:
        A random unit direction with z >= 0.
    """
    r1 = random_float(stream)
    r2 = random_float(stream)
    phi = 2.0 * tm.pi * r1
    sqrt_r2 = ti.sqrt(r2)
    x = ti.cos(phi) * sqrt_r2
    y = ti.sin(phi) * sqrt_r2
    z = ti.sqrt(1.0 - r2)
    return vec3(x, y, z)
