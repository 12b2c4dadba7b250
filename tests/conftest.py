"""Pytest configuration for pathshade tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti

# Seed used for the random streams before every test
TEST_SEED = 1234


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield
    # Note: We don't call ti.reset() here as it can cause issues
    # with subsequent tests if any cleanup happens after


@pytest.fixture(autouse=True)
def clear_all_material_data():
    """Clear textures and materials and reseed the random streams.

    This ensures tests are isolated from each other and that every test
    sees the same random sequences.
    """
    # Import here so that the Taichi fields are created after ti.init()
    from pathshade.core.sampler import seed_random_streams
    from pathshade.materials.dielectric import clear_dielectric_materials
    from pathshade.materials.diffuse_light import clear_diffuse_light_materials
    from pathshade.materials.isotropic import clear_isotropic_materials
    from pathshade.materials.lambertian import clear_lambertian_materials
    from pathshade.materials.material import clear_material_registry
    from pathshade.materials.metal import clear_metal_materials
    from pathshade.textures.texture import clear_textures

    def _clear_all():
        clear_textures()
        clear_lambertian_materials()
        clear_metal_materials()
        clear_dielectric_materials()
        clear_diffuse_light_materials()
        clear_isotropic_materials()
        clear_material_registry()

    _clear_all()
    seed_random_streams(TEST_SEED)

    yield

    _clear_all()
