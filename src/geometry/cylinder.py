# geometry/cylinder.py
from typing import Optional

from core.aabb import AABB
from core.config import EPSILON
from core.ray import Ray
from core.roots import solve_quadratic
from core.vector import Vector3
from geometry.disk import Disk
from geometry.hittable import Intersection, Primitive, make_intersection, nearest


class Cylinder(Primitive):
    """
    A cylinder around the y axis spanning base <= y <= top, closed by a disk
    at each end.
    """
    def __init__(self, radius: float = 1.0, base: float = 0.0, top: float = 1.0):
        if radius <= 0:
            raise ValueError(f"cylinder radius must be positive, got {radius}")
        if top <= base:
            raise ValueError(f"cylinder top ({top}) must lie above its base ({base})")
        self.radius = float(radius)
        self.base = float(base)
        self.top = float(top)
        self.base_cap = Disk(Vector3(0, base, 0), radius, Vector3(0, -1, 0))
        self.top_cap = Disk(Vector3(0, top, 0), radius, Vector3(0, 1, 0))

    def _intersect_side(self, ray: Ray) -> Optional[Intersection]:
        o, d = ray.origin, ray.direction
        a = d.x * d.x + d.z * d.z
        b = 2.0 * (o.x * d.x + o.z * d.z)
        c = o.x * o.x + o.z * o.z - self.radius * self.radius

        for t in solve_quadratic(a, b, c):
            if t <= EPSILON:
                continue
            p = ray.at(t)
            if self.base <= p.y <= self.top:
                return make_intersection(ray, t, Vector3(p.x, 0.0, p.z))
        return None

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        return nearest(
            self._intersect_side(ray),
            self.base_cap.intersect(ray),
            self.top_cap.intersect(ray),
        )

    def bounding_box(self) -> AABB:
        r = self.radius
        return AABB(Vector3(-r, self.base, -r), Vector3(r, self.top, r))
