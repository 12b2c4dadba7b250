"""Surface hit record consumed by the materials.

The intersection subsystem that produces hit records is not part of this
package; it only has to fill in a HitRecord. ``make_hit_record`` applies the
shading-normal convention the materials rely on: the stored normal always
faces against the incoming ray, and ``front_face`` remembers whether the
geometric (outward) normal had to be flipped.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathshade.core.hit_record import make_hit_record
    >>> # Inside a kernel:
    >>> # rec = make_hit_record(ray, t, point, outward_normal, u, v, material_id)
"""

import taichi as ti
import taichi.math as tm

from pathshade.core.ray import Ray

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        hit: Whether the ray intersected a surface (1 if hit, 0 if miss).
        t: The parameter value along the ray where intersection occurred.
        point: The 3D point where the ray intersected the surface.
        normal: The shading normal (unit length), oriented against the
            incoming ray.
        front_face: 1 if the ray hit the outside of the surface (the
            outward normal was kept), 0 if it hit from inside.
        u: First parametric surface coordinate.
        v: Second parametric surface coordinate.
        material_id: The unified material ID of the surface.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    front_face: ti.i32
    u: ti.f32
    v: ti.f32
    material_id: ti.i32


@ti.func
def set_face_normal(ray_direction: vec3, outward_normal: vec3):
    """Orient an outward normal against a ray.

    Args:
        ray_direction: Direction of the incoming ray.
        outward_normal: Unit geometric normal pointing out of the surface.

    Returns:
        A tuple of (normal, front_face) where normal faces against the ray
        and front_face is 1 if outward_normal already did.
    """
    front_face = 1
    normal = outward_normal
    if tm.dot(ray_direction, outward_normal) >= 0.0:
        front_face = 0
        normal = -outward_normal
    return normal, front_face


@ti.func
def make_hit_record(
    ray: Ray,
    t: ti.f32,
    point: vec3,
    outward_normal: vec3,
    u: ti.f32,
    v: ti.f32,
    material_id: ti.i32,
) -> HitRecord:
    """Build a hit record with the shading normal facing the incoming ray.

    Args:
        ray: The incoming ray.
        t: Ray parameter of the intersection.
        point: Intersection point.
        outward_normal: Unit geometric normal pointing out of the surface.
        u: First parametric surface coordinate.
        v: Second parametric surface coordinate.
        material_id: Unified material ID of the surface.

    Returns:
        A HitRecord with hit == 1.
    """
    normal, front_face = set_face_normal(ray.direction, outward_normal)
    return HitRecord(
        hit=1,
        t=t,
        point=point,
        normal=normal,
        front_face=front_face,
        u=u,
        v=v,
        material_id=material_id,
    )
