"""
Primitive catalogue: every surface exposes intersect(ray) and bounding_box()
and returns Intersections without a material.
"""
from geometry.box import Box, Gnomon
from geometry.bvh import BVHNode, build_bvh
from geometry.cone import Cone
from geometry.cylinder import Cylinder
from geometry.disk import Disk
from geometry.hittable import Intersection, Primitive, nearest
from geometry.implicit import (CrossCap, CrossCap2, ImplicitSurface, RomanSurface,
                               SteinerSurface, SteinerSurface2, Torus)
from geometry.mesh import Mesh, MeshLoadError, Triangle, load_mesh
from geometry.sphere import Sphere

__all__ = [
    "Box", "BVHNode", "Cone", "CrossCap", "CrossCap2", "Cylinder", "Disk",
    "Gnomon", "ImplicitSurface", "Intersection", "Mesh", "MeshLoadError",
    "Primitive", "RomanSurface", "Sphere", "SteinerSurface", "SteinerSurface2",
    "Torus", "Triangle", "build_bvh", "load_mesh", "nearest",
]
