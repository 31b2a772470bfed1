"""Multi-threaded Monte Carlo ray tracer for sphere scenes.

This package renders scenes of spheres with physically-motivated materials
into 8-bit RGB images, splitting the image into bands of rows rendered in
parallel by worker threads. It supports:
- Recursive path tracing with a depth limit and a sky gradient background
- Lambertian, metal and dielectric materials
- A thin-lens camera with depth of field
- Reproducible renders from a fixed seed

Subpackages:
    core: Vectors, rays, the radiance integrator and the threaded renderer
    geometry: The hittable interface and the sphere primitive
    materials: Scattering models (Lambertian, metal, dielectric)
    scene: Scene containers, scene files and the sample scene
    camera: The thin-lens camera and its configuration
    preview: Image file output
"""

__version__ = "0.1.0"
