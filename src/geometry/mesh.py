# geometry/mesh.py
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from core.aabb import AABB
from core.config import EPSILON, INFINITY
from core.ray import Ray
from core.vector import Vector3
from geometry.bvh import build_bvh
from geometry.hittable import Intersection, Primitive

logger = logging.getLogger(__name__)

# Determinant threshold below which a ray counts as parallel to a triangle.
PARALLEL_EPSILON = 1e-12


class MeshLoadError(Exception):
    """Raised when a mesh file cannot be read or is malformed."""

    def __init__(self, message: str, path: Union[str, Path, None] = None,
                 line_num: Optional[int] = None):
        self.path = path
        self.line_num = line_num
        location = ""
        if path is not None:
            location = f"{path}:{line_num}: " if line_num is not None else f"{path}: "
        super().__init__(f"{location}{message}")


class Triangle(Primitive):
    """Represents a single flat triangle in 3D space."""
    def __init__(self, v0: Vector3, v1: Vector3, v2: Vector3):
        # Vertices
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.edge1 = v1 - v0
        self.edge2 = v2 - v0
        # Face normal; zero for a degenerate (zero-area) triangle.
        self.normal = self.edge1.cross(self.edge2).normalize()

    @classmethod
    def unit(cls) -> "Triangle":
        return cls(Vector3(-1, 0, -1), Vector3(0, 0, 1), Vector3(1, 0, -1))

    @property
    def is_degenerate(self) -> bool:
        return self.normal.length() == 0

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        # Möller–Trumbore intersection algorithm
        if self.is_degenerate:
            return None
        h = ray.direction.cross(self.edge2)
        a = self.edge1.dot(h)

        # If ray is parallel to triangle
        if abs(a) < PARALLEL_EPSILON:
            return None

        f = 1.0 / a
        s = ray.origin - self.v0
        u = f * s.dot(h)

        # Ray misses the triangle
        if u < 0.0 or u > 1.0:
            return None

        q = s.cross(self.edge1)
        v = f * ray.direction.dot(q)

        # Ray misses the triangle
        if v < 0.0 or u + v > 1.0:
            return None

        t = f * self.edge2.dot(q)

        # Intersection is behind ray origin or on it
        if t <= EPSILON:
            return None

        return Intersection(
            point=ray.at(t),
            normal=self.normal,
            distance=t,
            incidence=(-ray.direction).normalize(),
            front_face=ray.direction.dot(self.normal) < 0,
        )

    def bounding_box(self) -> AABB:
        """Compute the bounding box for the triangle."""
        return AABB.from_points([self.v0, self.v1, self.v2])


class Mesh(Primitive):
    """
    Represents a 3D mesh composed of triangles.

    With accelerate=True the nearest hit is answered by a BVH over the
    triangles, which reports the same distances as the linear scan in
    intersect_brute_force().
    """
    def __init__(self, triangles: Sequence[Triangle], accelerate: bool = True):
        if not triangles:
            raise ValueError("a mesh needs at least one triangle")
        self.triangles = tuple(triangles)
        self._box = AABB.from_points(
            [v for tri in self.triangles for v in (tri.v0, tri.v1, tri.v2)])
        self.bvh = build_bvh(self.triangles) if accelerate else None

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        if self.bvh is not None:
            return self.bvh.hit(ray)
        return self.intersect_brute_force(ray)

    def intersect_brute_force(self, ray: Ray) -> Optional[Intersection]:
        closest_hit = None
        closest_t = INFINITY
        for triangle in self.triangles:
            rec = triangle.intersect(ray)
            if rec is not None and rec.distance < closest_t:
                closest_t = rec.distance
                closest_hit = rec
        return closest_hit

    def bounding_box(self) -> AABB:
        return self._box


def _parse_floats(fields: List[str], path, line_num: int) -> Vector3:
    if len(fields) < 3:
        raise MeshLoadError(f"vertex needs three coordinates, got {len(fields)}", path, line_num)
    try:
        return Vector3(float(fields[0]), float(fields[1]), float(fields[2]))
    except ValueError as e:
        raise MeshLoadError(f"malformed vertex coordinate: {e}", path, line_num) from e


def _parse_index(field: str, vertex_count: int, path, line_num: int) -> int:
    # Only the vertex index of a "v/vt/vn" group is used.
    try:
        index = int(field.split('/')[0])
    except ValueError as e:
        raise MeshLoadError(f"malformed face index {field!r}", path, line_num) from e
    if index < 1 or index > vertex_count:
        raise MeshLoadError(
            f"face index {index} out of range (1..{vertex_count})", path, line_num)
    return index - 1  # Indices are 1-based


def load_mesh(filename: Union[str, Path], accelerate: bool = True) -> Mesh:
    """
    Load a mesh from a line-oriented vertex/face text file.

    "v x y z" appends a vertex, "f i j k" appends a triangle built from
    1-based indices into the vertices read so far. Faces with more than three
    indices are fan-triangulated. Other lines are ignored. Any malformed line
    or dangling index aborts the load with MeshLoadError.
    """
    vertices: List[Vector3] = []
    triangles: List[Triangle] = []

    logger.debug("Opening mesh file: %s", filename)
    try:
        with open(filename, 'r') as f:
            for line_num, line in enumerate(f, 1):
                values = line.split()
                if not values:
                    continue

                if values[0] == 'v':  # Vertex
                    vertices.append(_parse_floats(values[1:], filename, line_num))
                elif values[0] == 'f':  # Face
                    if len(values) < 4:
                        raise MeshLoadError(
                            f"face needs three indices, got {len(values) - 1}", filename, line_num)
                    indices = [_parse_index(v, len(vertices), filename, line_num)
                               for v in values[1:]]
                    # Triangulate the face (assuming it's convex)
                    for i in range(1, len(indices) - 1):
                        triangles.append(Triangle(vertices[indices[0]],
                                                  vertices[indices[i]],
                                                  vertices[indices[i + 1]]))
    except (OSError, UnicodeDecodeError) as e:
        raise MeshLoadError(f"cannot read mesh file: {e}", filename) from e

    if not triangles:
        raise MeshLoadError("mesh file defines no faces", filename)

    logger.info("Loaded %s: %d vertices, %d triangles", filename, len(vertices), len(triangles))
    return Mesh(triangles, accelerate=accelerate)
