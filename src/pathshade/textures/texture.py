"""Texture registry and lookup.

Materials refer to textures by ID. A texture maps surface coordinates and a
hit point to a color:

    texture_value(texture_id, u, v, point) -> color

Supported textures:
    SOLID: a constant color.
    CHECKER: a 3D checker pattern alternating between two colors, selected by
        the sign of sin(scale*x) * sin(scale*y) * sin(scale*z).

Textures are registered from Python scope during scene setup and are read
only inside kernels, so any number of materials can share one.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathshade.textures.texture import add_solid_texture, texture_value
    >>> white = add_solid_texture((1.0, 1.0, 1.0))
    >>> # Inside a kernel:
    >>> # color = texture_value(white, u, v, point)
"""

import logging
from enum import IntEnum

import taichi as ti
import taichi.math as tm

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3


class TextureType(IntEnum):
    """Enumeration of supported texture types."""

    SOLID = 0
    CHECKER = 1


# =============================================================================
# Texture Field Storage
# =============================================================================

# Maximum number of textures in the scene
MAX_TEXTURES = 512

texture_types = ti.field(dtype=ti.i32, shape=MAX_TEXTURES)
# Solid color, or the checker color where the sine product is non-negative
texture_even_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_TEXTURES)
# Checker color where the sine product is negative
texture_odd_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_TEXTURES)
texture_scales = ti.field(dtype=ti.f32, shape=MAX_TEXTURES)
num_textures = ti.field(dtype=ti.i32, shape=())


def _validate_color(name: str, color: tuple[float, float, float]) -> None:
    if len(color) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(color)}")
    for i, component in enumerate(color):
        if component < 0.0:
            raise ValueError(f"{name} component {i} = {component} is negative.")


def _next_texture_index() -> int:
    idx = num_textures[None]
    if idx >= MAX_TEXTURES:
        raise RuntimeError(f"Maximum number of textures ({MAX_TEXTURES}) exceeded")
    return idx


def clear_textures() -> None:
    """Clear all textures.

    Resets the texture count to zero. Existing data in the fields will be
    overwritten when new textures are added.
    """
    num_textures[None] = 0


def add_solid_texture(color: tuple[float, float, float]) -> int:
    """Add a constant-color texture.

    Args:
        color: The color as (R, G, B). Components must be non-negative and
            may exceed 1 (e.g. for emission).

    Returns:
        The texture ID.

    Raises:
        RuntimeError: If the maximum number of textures is exceeded.
        ValueError: If any component is negative.
    """
    _validate_color("Texture color", color)
    idx = _next_texture_index()

    texture_types[idx] = int(TextureType.SOLID)
    texture_even_colors[idx] = vec3(color[0], color[1], color[2])
    texture_odd_colors[idx] = vec3(color[0], color[1], color[2])
    texture_scales[idx] = 1.0
    num_textures[None] = idx + 1
    logger.debug(f"Added solid texture {idx}: color={tuple(color)}")
    return idx


def add_checker_texture(
    even_color: tuple[float, float, float],
    odd_color: tuple[float, float, float],
    scale: float = 10.0,
) -> int:
    """Add a 3D checker texture.

    Args:
        even_color: Color where sin(scale*x)*sin(scale*y)*sin(scale*z) >= 0.
        odd_color: Color where the sine product is negative.
        scale: Spatial frequency of the pattern. Must be positive.

    Returns:
        The texture ID.

    Raises:
        RuntimeError: If the maximum number of textures is exceeded.
        ValueError: If any color component is negative or scale <= 0.
    """
    _validate_color("Even color", even_color)
    _validate_color("Odd color", odd_color)
    if scale <= 0.0:
        raise ValueError(f"Checker scale = {scale} must be positive.")
    idx = _next_texture_index()

    texture_types[idx] = int(TextureType.CHECKER)
    texture_even_colors[idx] = vec3(even_color[0], even_color[1], even_color[2])
    texture_odd_colors[idx] = vec3(odd_color[0], odd_color[1], odd_color[2])
    texture_scales[idx] = scale
    num_textures[None] = idx + 1
    logger.debug(
        f"Added checker texture {idx}: even={tuple(even_color)}, "
        f"odd={tuple(odd_color)}, scale={scale}"
    )
    return idx


def get_texture_count() -> int:
    """Get the number of textures in the registry."""
    return int(num_textures[None])


def is_valid_texture(texture_id: int) -> bool:
    """Check whether a texture ID refers to a registered texture."""
    return 0 <= texture_id < num_textures[None]


@ti.func
def checker_value(even: vec3, odd: vec3, scale: ti.f32, point: vec3) -> vec3:
    """Evaluate the 3D checker pattern at a point."""
    sines = ti.sin(scale * point.x) * ti.sin(scale * point.y) * ti.sin(scale * point.z)
    result = even
    if sines < 0.0:
        result = odd
    return result


@ti.func
def texture_value(texture_id: ti.i32, u: ti.f32, v: ti.f32, point: vec3) -> vec3:
    """Look up the color of a texture.

    Args:
        texture_id: The texture ID.
        u: First surface coordinate.
        v: Second surface coordinate.
        point: The hit point in world space.

    Returns:
        The texture color. Invalid texture IDs return black.
    """
    result = vec3(0.0, 0.0, 0.0)
    if 0 <= texture_id < num_textures[None]:
        tex_type = texture_types[texture_id]
        if tex_type == int(TextureType.SOLID):
            result = texture_even_colors[texture_id]
        elif tex_type == int(TextureType.CHECKER):
            result = checker_value(
                texture_even_colors[texture_id],
                texture_odd_colors[texture_id],
                texture_scales[texture_id],
                point,
            )
    return result
