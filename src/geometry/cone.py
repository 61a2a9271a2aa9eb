# geometry/cone.py
from typing import Optional

from core.aabb import AABB
from core.config import EPSILON
from core.ray import Ray
from core.roots import solve_quadratic
from core.vector import Vector3
from geometry.disk import Disk
from geometry.hittable import Intersection, Primitive, make_intersection, nearest


class Cone(Primitive):
    """
    A right circular cone around the y axis: base disk of the given radius at
    y = 0 and apex at y = height.
    """
    def __init__(self, radius: float = 1.0, height: float = 2.0):
        if radius <= 0 or height <= 0:
            raise ValueError(f"cone radius and height must be positive, got {radius}, {height}")
        self.radius = float(radius)
        self.height = float(height)
        # Squared opening slope: x^2 + z^2 = k2 (h - y)^2
        self.k2 = (self.radius / self.height) ** 2
        self.base = Disk(Vector3(0, 0, 0), radius, Vector3(0, -1, 0))

    @classmethod
    def unit(cls) -> "Cone":
        return cls(1.0, 2.0)

    def normal_at(self, point: Vector3) -> Vector3:
        # Gradient of x^2 + z^2 - k2 (h - y)^2, zero at the apex.
        return Vector3(2.0 * point.x,
                       2.0 * self.k2 * (self.height - point.y),
                       2.0 * point.z)

    def _intersect_side(self, ray: Ray) -> Optional[Intersection]:
        o, d = ray.origin, ray.direction
        k2, h = self.k2, self.height
        a = d.x * d.x + d.z * d.z - k2 * d.y * d.y
        b = 2.0 * (o.x * d.x + o.z * d.z + k2 * (h - o.y) * d.y)
        c = o.x * o.x + o.z * o.z - k2 * (h - o.y) * (h - o.y)

        for t in solve_quadratic(a, b, c):
            if t <= EPSILON:
                continue
            p = ray.at(t)
            # Rejects the mirrored nappe above the apex.
            if 0.0 <= p.y <= h:
                return make_intersection(ray, t, self.normal_at(p))
        return None

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        return nearest(self._intersect_side(ray), self.base.intersect(ray))

    def bounding_box(self) -> AABB:
        r = self.radius
        return AABB(Vector3(-r, 0.0, -r), Vector3(r, self.height, r))
