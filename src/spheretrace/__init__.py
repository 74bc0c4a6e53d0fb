"""Recursive sphere ray tracer.

This package renders scenes of spheres and spherical lights by casting one
ray per pixel and recursively averaging perturbed mirror bounces, with an
optional light-probe environment for rays that escape the scene:
- Immutable vector and ray algebra
- Plane-projection sphere intersection
- Distance-sorted scene collision resolution
- Depth-limited recursive shading with a quadratic fan-out falloff

Subpackages:
    core: Vectors, rays, colors, the cast() integrator, render target and driver
    geometry: Sphere intersection
    scene: Scene data model, builder, collision resolution and generator
    environment: PFM probe decoding and direction lookup
    camera: Pinhole camera ray construction
    preview: PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
