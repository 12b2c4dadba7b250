"""Scene module for scene-level material management.

Components:
    library: MaterialLibrary coordinating textures and materials, with
        serialization to LibraryConfig or a plain dictionary
"""

from .library import (
    LibraryConfig,
    MaterialInfo,
    MaterialLibrary,
    TextureInfo,
)

__all__ = [
    "MaterialLibrary",
    "MaterialInfo",
    "TextureInfo",
    "LibraryConfig",
]
