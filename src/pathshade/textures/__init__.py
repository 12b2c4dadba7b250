"""Textures module: color lookup by surface coordinates and hit point."""

from .texture import (
    MAX_TEXTURES,
    TextureType,
    add_checker_texture,
    add_solid_texture,
    checker_value,
    clear_textures,
    get_texture_count,
    is_valid_texture,
    texture_value,
)

__all__ = [
    "MAX_TEXTURES",
    "TextureType",
    "add_solid_texture",
    "add_checker_texture",
    "checker_value",
    "clear_textures",
    "get_texture_count",
    "is_valid_texture",
    "texture_value",
]
