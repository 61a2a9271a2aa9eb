# geometry/disk.py
import math
from typing import Optional

from core.aabb import AABB
from core.config import EPSILON
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import Intersection, Primitive, make_intersection

# Below this |d . n| the ray is treated as parallel to the disk plane.
PARALLEL_EPSILON = 1e-12


class Disk(Primitive):
    """
    A flat circle with a center, a radius and a facing normal.
    """
    def __init__(self, center: Vector3, radius: float, normal: Vector3):
        if radius <= 0:
            raise ValueError(f"disk radius must be positive, got {radius}")
        normal = normal.normalize()
        if normal.length() == 0:
            raise ValueError("disk normal must be non-zero")
        self.center = center
        self.radius = float(radius)
        self.normal = normal
        self.constant = center.dot(normal)

    @classmethod
    def unit(cls) -> "Disk":
        return cls(Vector3(0, 0, 0), 1.0, Vector3(0, 1, 0))

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        denominator = ray.direction.dot(self.normal)
        if abs(denominator) < PARALLEL_EPSILON:
            return None
        t = (self.constant - ray.origin.dot(self.normal)) / denominator
        if t <= EPSILON:
            return None
        offset = ray.at(t) - self.center
        if offset.length_squared() > self.radius * self.radius:
            return None
        return make_intersection(ray, t, self.normal)

    def bounding_box(self) -> AABB:
        # A circle of radius r spans r * sqrt(1 - n_i^2) along each axis.
        n = self.normal
        extent = Vector3(
            self.radius * math.sqrt(max(0.0, 1.0 - n.x * n.x)),
            self.radius * math.sqrt(max(0.0, 1.0 - n.y * n.y)),
            self.radius * math.sqrt(max(0.0, 1.0 - n.z * n.z))
        )
        return AABB(self.center - extent, self.center + extent)
