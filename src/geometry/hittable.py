# geometry/hittable.py
from typing import Optional

from core.aabb import AABB
from core.config import EPSILON
from core.ray import Ray
from core.vector import Vector3

# Normals shorter than this before normalization are treated as singular.
MIN_NORMAL_LENGTH = 1e-12


class Intersection:
    """
    Records details of a ray-surface intersection.
    """
    __slots__ = ("point", "normal", "distance", "incidence", "material", "front_face")

    def __init__(self, point: Vector3, normal: Vector3, distance: float,
                 incidence: Vector3, material=None, front_face: bool = True):
        self.point = point            # Intersection point
        self.normal = normal          # Unit geometric normal (outward / gradient direction)
        self.distance = distance      # Ray parameter t at the intersection
        self.incidence = incidence    # Unit vector pointing back toward the ray origin
        self.material = material
        self.front_face = front_face  # Whether the normal faces the incoming ray

    def shading_normal(self) -> Vector3:
        """
        The geometric normal flipped, if needed, to face the viewer.
        """
        return self.normal if self.front_face else -self.normal

    def __repr__(self) -> str:
        return (f"Intersection(point={self.point!r}, normal={self.normal!r}, "
                f"distance={self.distance})")


def make_intersection(ray: Ray, t: float, outward_normal: Vector3) -> Optional[Intersection]:
    """
    Builds an Intersection at parameter t, or None if t is too close to the
    origin or the normal is degenerate.
    """
    if not t > EPSILON:
        return None
    length = outward_normal.length()
    if not length > MIN_NORMAL_LENGTH or not outward_normal.is_finite():
        return None
    normal = outward_normal / length
    incidence = (-ray.direction).normalize()
    point = ray.at(t)
    return Intersection(point, normal, t, incidence,
                        front_face=ray.direction.dot(normal) < 0)


def nearest(*candidates: Optional[Intersection]) -> Optional[Intersection]:
    """
    Composite resolution: the candidate with the smallest distance, ignoring
    misses. The first one encountered wins ties.
    """
    best = None
    for candidate in candidates:
        if candidate is None:
            continue
        if best is None or candidate.distance < best.distance:
            best = candidate
    return best


class Primitive:
    """
    Abstract class for surfaces that can be hit by a ray.

    Primitives are immutable once built and carry no material; the Node that
    places one in a scene supplies it.
    """
    def intersect(self, ray: Ray) -> Optional[Intersection]:
        raise NotImplementedError("intersect() must be implemented by subclasses.")

    def bounding_box(self) -> AABB:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")
