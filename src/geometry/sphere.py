# geometry/sphere.py
from typing import Optional

from core.aabb import AABB
from core.config import EPSILON
from core.ray import Ray
from core.roots import smallest_positive_root, solve_quadratic
from core.vector import Vector3
from geometry.hittable import Intersection, Primitive, make_intersection


class Sphere(Primitive):
    """
    Represents a sphere defined by its center and radius.
    """
    def __init__(self, center: Vector3, radius: float):
        if radius <= 0:
            raise ValueError(f"sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = float(radius)

    @classmethod
    def unit(cls) -> "Sphere":
        return cls(Vector3(0, 0, 0), 1.0)

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        # |o + t d - c|^2 = r^2
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        b = 2.0 * oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius

        t = smallest_positive_root(solve_quadratic(a, b, c), EPSILON)
        if t is None:
            return None
        return make_intersection(ray, t, ray.at(t) - self.center)

    def bounding_box(self) -> AABB:
        # The bounding box of a sphere is center ± radius
        offset = Vector3(self.radius, self.radius, self.radius)
        return AABB(self.center - offset, self.center + offset)
