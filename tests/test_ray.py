"""Unit tests for the ray module.

Tests cover:
- Ray dataclass, ray time and ray_at function
- Vector utility functions (dot, cross, normalize, safe_normalize, near_zero)
- Reflection, refraction and Fresnel helpers
- Orthonormal basis construction
"""

import math

import taichi as ti


class TestRayBasics:
    """Tests for Ray dataclass and basic operations."""

    def test_ray_at_origin(self):
        """Test ray_at returns origin when t=0."""
        from pathshade.core.ray import Ray, ray_at, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 0.0, -1.0), time=0.0)
            result[None] = ray_at(ray, 0.0)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-6
        assert abs(r[1] - 2.0) < 1e-6
        assert abs(r[2] - 3.0) < 1e-6

    def test_ray_at_positive_t(self):
        """Test ray_at computes correct point along ray."""
        from pathshade.core.ray import make_ray, ray_at, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(1.0, 0.0, 0.0), 0.0)
            result[None] = ray_at(ray, 5.0)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 5.0) < 1e-6
        assert abs(r[1]) < 1e-6
        assert abs(r[2]) < 1e-6

    def test_make_ray_keeps_time(self):
        """Test make_ray stores the time value."""
        from pathshade.core.ray import make_ray, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), 0.75)
            result[None] = ray.time

        test_kernel()
        assert abs(result[None] - 0.75) < 1e-6


class TestVectorUtilities:
    """Tests for vector helper functions."""

    def test_length_and_length_squared(self):
        """Test length of a 3-4-0 vector."""
        from pathshade.core.ray import length, length_squared, vec3

        result = ti.field(dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            v = vec3(3.0, 4.0, 0.0)
            result[0] = length(v)
            result[1] = length_squared(v)

        test_kernel()
        assert abs(result[0] - 5.0) < 1e-6
        assert abs(result[1] - 25.0) < 1e-5

    def test_dot_and_cross(self):
        """Test dot and cross products of the x and y axes."""
        from pathshade.core.ray import cross, dot, vec3

        dot_result = ti.field(dtype=ti.f32, shape=())
        cross_result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            x = vec3(1.0, 0.0, 0.0)
            y = vec3(0.0, 1.0, 0.0)
            dot_result[None] = dot(x, y)
            cross_result[None] = cross(x, y)

        test_kernel()
        assert abs(dot_result[None]) < 1e-6
        c = cross_result[None]
        assert abs(c[0]) < 1e-6
        assert abs(c[1]) < 1e-6
        assert abs(c[2] - 1.0) < 1e-6

    def test_safe_normalize_unit_length(self):
        """Test safe_normalize scales a regular vector to unit length."""
        from pathshade.core.ray import safe_normalize, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = safe_normalize(vec3(0.0, 3.0, 4.0))

        test_kernel()
        r = result[None]
        assert abs(r[0]) < 1e-6
        assert abs(r[1] - 0.6) < 1e-6
        assert abs(r[2] - 0.8) < 1e-6

    def test_safe_normalize_zero_vector(self):
        """Test safe_normalize maps the zero vector to zero, not NaN."""
        from pathshade.core.ray import safe_normalize, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = safe_normalize(vec3(0.0, 0.0, 0.0))

        test_kernel()
        r = result[None]
        for i in range(3):
            assert not math.isnan(r[i])
            assert r[i] == 0.0

    def test_near_zero(self):
        """Test near_zero threshold."""
        from pathshade.core.ray import near_zero, vec3

        result = ti.field(dtype=ti.i32, shape=3)

        @ti.kernel
        def test_kernel():
            result[0] = near_zero(vec3(0.0, 0.0, 0.0))
            result[1] = near_zero(vec3(1e-9, -1e-9, 1e-9))
            result[2] = near_zero(vec3(1e-9, 1e-3, 0.0))

        test_kernel()
        assert result[0] == 1
        assert result[1] == 1
        assert result[2] == 0


class TestReflectRefract:
    """Tests for reflection, refraction and Fresnel reflectance."""

    def test_reflect(self):
        """Test reflection of a 45 degree ray off a horizontal surface."""
        from pathshade.core.ray import reflect, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            incident = vec3(1.0, -1.0, 0.0)
            normal = vec3(0.0, 1.0, 0.0)
            result[None] = reflect(incident, normal)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-6
        assert abs(r[1] - 1.0) < 1e-6
        assert abs(r[2]) < 1e-6

    def test_refract_snells_law(self):
        """Test refracted direction satisfies n1 sin(i) = n2 sin(t)."""
        from pathshade.core.ray import refract, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())
        angle = math.radians(30.0)

        @ti.kernel
        def test_kernel():
            incident = vec3(ti.sin(angle), -ti.cos(angle), 0.0)
            normal = vec3(0.0, 1.0, 0.0)
            result[None] = refract(incident, normal, 1.0 / 1.5)

        test_kernel()
        r = result[None]
        length = math.sqrt(r[0] ** 2 + r[1] ** 2 + r[2] ** 2)
        assert abs(length - 1.0) < 1e-5
        sin_t = r[0] / length
        assert abs(1.0 * math.sin(angle) - 1.5 * sin_t) < 1e-5
        assert r[1] < 0.0

    def test_refract_tir_returns_zero(self):
        """Test refract returns zero under total internal reflection."""
        from pathshade.core.ray import refract, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())
        angle = math.radians(60.0)

        @ti.kernel
        def test_kernel():
            incident = vec3(ti.sin(angle), -ti.cos(angle), 0.0)
            normal = vec3(0.0, 1.0, 0.0)
            result[None] = refract(incident, normal, 1.5)

        test_kernel()
        r = result[None]
        assert r[0] == 0.0 and r[1] == 0.0 and r[2] == 0.0

    def test_schlick_fresnel(self):
        """Test Schlick reflectance at normal and grazing incidence."""
        from pathshade.core.ray import schlick_fresnel

        result = ti.field(dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            result[0] = schlick_fresnel(1.0, 1.0 / 1.5)
            result[1] = schlick_fresnel(0.0, 1.0 / 1.5)

        test_kernel()
        assert abs(result[0] - 0.04) < 1e-5
        assert abs(result[1] - 1.0) < 1e-5

    def test_fresnel_dielectric_normal_incidence(self):
        """Test exact Fresnel reflectance matches ((n1-n2)/(n1+n2))^2 head-on."""
        from pathshade.core.ray import fresnel_dielectric

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = fresnel_dielectric(1.0, 1.0 / 1.5)

        test_kernel()
        assert abs(result[None] - 0.04) < 1e-5

    def test_fresnel_dielectric_tir(self):
        """Test exact Fresnel reflectance is 1 past the critical angle."""
        from pathshade.core.ray import fresnel_dielectric

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = fresnel_dielectric(ti.cos(math.radians(60.0)), 1.5)

        test_kernel()
        assert result[None] == 1.0


class TestOrthonormalBasis:
    """Tests for build_onb_from_normal and local_to_world."""

    def test_onb_orthonormal(self):
        """Test the basis vectors are unit length and mutually orthogonal."""
        from pathshade.core.ray import build_onb_from_normal, vec3

        dots = ti.field(dtype=ti.f32, shape=(2, 6))

        @ti.kernel
        def test_kernel():
            normals = ti.Matrix([[0.0, 0.0, 1.0], [1.0, 0.0, 0.0]])
            for k in ti.static(range(2)):
                n = vec3(normals[k, 0], normals[k, 1], normals[k, 2])
                t, b, w = build_onb_from_normal(n)
                dots[k, 0] = t.dot(b)
                dots[k, 1] = t.dot(w)
                dots[k, 2] = b.dot(w)
                dots[k, 3] = t.norm()
                dots[k, 4] = b.norm()
                dots[k, 5] = w.norm()

        test_kernel()
        for k in range(2):
            assert abs(dots[k, 0]) < 1e-6
            assert abs(dots[k, 1]) < 1e-6
            assert abs(dots[k, 2]) < 1e-6
            assert abs(dots[k, 3] - 1.0) < 1e-6
            assert abs(dots[k, 4] - 1.0) < 1e-6
            assert abs(dots[k, 5] - 1.0) < 1e-6

    def test_local_to_world_z_maps_to_normal(self):
        """Test the local z-axis maps onto the normal."""
        from pathshade.core.ray import build_onb_from_normal, local_to_world, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            n = vec3(0.0, 1.0, 0.0)
            t, b, w = build_onb_from_normal(n)
            result[None] = local_to_world(vec3(0.0, 0.0, 1.0), t, b, w)

        test_kernel()
        r = result[None]
        assert abs(r[0]) < 1e-6
        assert abs(r[1] - 1.0) < 1e-6
        assert abs(r[2]) < 1e-6
