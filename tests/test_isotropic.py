"""Unit tests for the isotropic medium material module.

Tests cover:
- Scattered directions cover the whole sphere
- Scattering density is 1 / (4 pi)
- Attenuation, ray origin and ray time
"""

import math

import numpy as np
import pytest
import taichi as ti


class TestScatterIsotropic:
    """Tests for scatter_isotropic."""

    def test_scatter_uniform_sphere(self):
        """Test directions are unit and spread over both hemispheres."""
        from pathshade.core.hit_record import make_hit_record
        from pathshade.core.ray import make_ray, vec3
        from pathshade.materials.isotropic import scatter_isotropic
        from pathshade.pdf.pdf import PdfType
        from pathshade.textures.texture import add_solid_texture

        albedo = add_solid_texture((0.7, 0.7, 0.7))
        num_samples = 10000
        directions = ti.Vector.field(3, dtype=ti.f32, shape=num_samples)
        attenuations = ti.Vector.field(3, dtype=ti.f32, shape=num_samples)
        ints = ti.field(dtype=ti.i32, shape=(num_samples, 3))
        times = ti.field(dtype=ti.f32, shape=num_samples)

        @ti.kernel
        def test_kernel():
            for i in range(num_samples):
                ray = make_ray(vec3(0.0, 0.0, -5.0), vec3(0.0, 0.0, 1.0), 0.5)
                rec = make_hit_record(
                    ray, 5.0, vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0), 0.0, 0.0, 0
                )
                srec = scatter_isotropic(albedo, ray, rec, i)
                directions[i] = srec.ray_out.direction
                attenuations[i] = srec.attenuation
                ints[i, 0] = srec.scattered
                ints[i, 1] = srec.is_specular
                ints[i, 2] = srec.pdf.kind
                times[i] = srec.ray_out.time

        test_kernel()
        d = directions.to_numpy()
        assert np.abs(np.linalg.norm(d, axis=1) - 1.0).max() < 1e-5
        # Forward and backward scattering are equally likely
        assert abs((d[:, 2] > 0.0).mean() - 0.5) < 0.03
        assert np.abs(attenuations.to_numpy() - 0.7).max() < 1e-6
        flags = ints.to_numpy()
        assert (flags[:, 0] == 1).all()
        assert (flags[:, 1] == 0).all()
        assert (flags[:, 2] == int(PdfType.SPHERE)).all()
        assert np.abs(times.to_numpy() - 0.5).max() < 1e-6

    def test_density_is_uniform(self):
        """Test the scattering density is 1/(4 pi) for any direction."""
        from pathshade.core.ray import make_ray, vec3
        from pathshade.materials.isotropic import scattering_density_isotropic

        result = ti.field(dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            result[0] = scattering_density_isotropic(
                make_ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0), 0.0)
            )
            result[1] = scattering_density_isotropic(
                make_ray(vec3(0.0, 0.0, 0.0), vec3(1.0, 2.0, 3.0), 0.0)
            )

        test_kernel()
        expected = 1.0 / (4.0 * math.pi)
        assert abs(result[0] - expected) < 1e-7
        assert abs(result[1] - expected) < 1e-7


class TestIsotropicRegistry:
    """Tests for the isotropic material registry."""

    def test_add_and_count(self):
        """Test registration count."""
        from pathshade.materials.isotropic import (
            add_isotropic_material,
            get_isotropic_material_count,
        )
        from pathshade.textures.texture import add_solid_texture

        assert add_isotropic_material(add_solid_texture((0.9, 0.9, 0.9))) == 0
        assert get_isotropic_material_count() == 1

    def test_unknown_texture_rejected(self):
        """Test an unregistered texture raises ValueError."""
        from pathshade.materials.isotropic import add_isotropic_material

        with pytest.raises(ValueError):
            add_isotropic_material(-1)
