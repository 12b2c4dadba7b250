"""Material and shading core of a Taichi-based Monte Carlo path tracer.

This package provides the surface-interaction layer of a path tracer: given
a ray and the point where it hit a surface, it decides how light scatters,
how much is absorbed and how much the surface emits. Supported materials:
- Lambertian diffuse, with solid or checker albedo textures
- Metal with optional roughness
- Dielectric (glass) with Schlick or exact Fresnel reflectance
- Diffuse area lights
- Isotropic participating media

Subpackages:
    core: Rays, vector helpers, hit records and per-context random streams
    textures: Solid and checker textures addressed by ID
    pdf: Direction-sampling strategies (cosine-weighted and uniform sphere)
    materials: Material variants, dispatch and the per-bounce weight
    scene: Python-side material library and its configuration format

Subpackages create Taichi fields on import, so import them after ti.init().
"""

__version__ = "0.1.0"
