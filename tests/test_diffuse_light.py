"""Unit tests for the diffuse light material module.

Tests cover:
- Lights never scatter
- Front-face emission and dark back faces
- Two-sided emission
- Textured emission
- Material registry operations
"""

import pytest
import taichi as ti


class TestDiffuseLightScatter:
    """Tests for scatter_diffuse_light."""

    def test_never_scatters(self):
        """Test lights absorb every incoming ray."""
        from pathshade.core.ray import make_ray, vec3
        from pathshade.materials.diffuse_light import scatter_diffuse_light

        result = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 1.0, 0.0), vec3(0.0, -1.0, 0.0), 0.0)
            result[None] = scatter_diffuse_light(ray).scattered

        test_kernel()
        assert result[None] == 0


class TestDiffuseLightEmission:
    """Tests for emitted radiance."""

    def test_front_face_emits_back_face_dark(self):
        """Test a one-sided light emits toward its outward normal only."""
        from pathshade.core.hit_record import make_hit_record
        from pathshade.core.ray import make_ray, vec3
        from pathshade.materials.diffuse_light import (
            add_diffuse_light_material,
            emitted_diffuse_light_by_id,
        )
        from pathshade.textures.texture import add_solid_texture

        light = add_diffuse_light_material(add_solid_texture((4.0, 4.0, 4.0)))
        result = ti.Vector.field(3, dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            outward = vec3(0.0, -1.0, 0.0)
            below = make_ray(vec3(0.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0), 0.0)
            above = make_ray(vec3(0.0, 1.0, 0.0), vec3(0.0, -1.0, 0.0), 0.0)
            front = make_hit_record(below, 1.0, vec3(0.0, 0.0, 0.0), outward, 0.5, 0.5, 0)
            back = make_hit_record(above, 1.0, vec3(0.0, 0.0, 0.0), outward, 0.5, 0.5, 0)
            result[0] = emitted_diffuse_light_by_id(light, front, front.u, front.v, front.point)
            result[1] = emitted_diffuse_light_by_id(light, back, back.u, back.v, back.point)

        test_kernel()
        for c in range(3):
            assert abs(result[0][c] - 4.0) < 1e-6
            assert result[1][c] == 0.0

    def test_two_sided_emits_both_faces(self):
        """Test a two-sided light emits from the back face too."""
        from pathshade.core.hit_record import make_hit_record
        from pathshade.core.ray import make_ray, vec3
        from pathshade.materials.diffuse_light import (
            add_diffuse_light_material,
            emitted_diffuse_light_by_id,
        )
        from pathshade.textures.texture import add_solid_texture

        light = add_diffuse_light_material(add_solid_texture((2.0, 1.0, 0.5)), two_sided=True)
        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            above = make_ray(vec3(0.0, 1.0, 0.0), vec3(0.0, -1.0, 0.0), 0.0)
            back = make_hit_record(
                above, 1.0, vec3(0.0, 0.0, 0.0), vec3(0.0, -1.0, 0.0), 0.0, 0.0, 0
            )
            result[None] = emitted_diffuse_light_by_id(light, back, back.u, back.v, back.point)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 2.0) < 1e-6
        assert abs(r[1] - 1.0) < 1e-6
        assert abs(r[2] - 0.5) < 1e-6

    def test_checker_emission(self):
        """Test emission follows a checker texture at the given point."""
        from pathshade.core.hit_record import make_hit_record
        from pathshade.core.ray import make_ray, vec3
        from pathshade.materials.diffuse_light import emitted_diffuse_light
        from pathshade.textures.texture import add_checker_texture

        checker = add_checker_texture((5.0, 5.0, 5.0), (1.0, 1.0, 1.0), scale=1.0)
        result = ti.Vector.field(3, dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 3.0, 1.0), vec3(0.0, -1.0, 0.0), 0.0)
            rec = make_hit_record(ray, 2.0, vec3(1.0, 1.0, 1.0), vec3(0.0, 1.0, 0.0), 0.0, 0.0, 0)
            result[0] = emitted_diffuse_light(checker, 0, rec, 0.0, 0.0, vec3(1.0, 1.0, 1.0))
            result[1] = emitted_diffuse_light(checker, 0, rec, 0.0, 0.0, vec3(1.0, -1.0, 1.0))

        test_kernel()
        assert abs(result[0][0] - 5.0) < 1e-6
        assert abs(result[1][0] - 1.0) < 1e-6


class TestDiffuseLightRegistry:
    """Tests for the diffuse light registry."""

    def test_count_and_clear(self):
        """Test registration count and clear."""
        from pathshade.materials.diffuse_light import (
            add_diffuse_light_material,
            clear_diffuse_light_materials,
            get_diffuse_light_material_count,
        )
        from pathshade.textures.texture import add_solid_texture

        tex = add_solid_texture((10.0, 10.0, 10.0))
        assert add_diffuse_light_material(tex) == 0
        assert add_diffuse_light_material(tex, two_sided=True) == 1
        assert get_diffuse_light_material_count() == 2
        clear_diffuse_light_materials()
        assert get_diffuse_light_material_count() == 0

    def test_unknown_texture_rejected(self):
        """Test an unregistered emission texture raises ValueError."""
        from pathshade.materials.diffuse_light import add_diffuse_light_material

        with pytest.raises(ValueError):
            add_diffuse_light_material(0)
