# geometry/box.py
import math
from typing import Optional

from core.aabb import AABB, slab_interval
from core.config import EPSILON
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import Intersection, Primitive, make_intersection, nearest

_AXES = (Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 1))


class Box(Primitive):
    """
    Axis-aligned box between two corners.
    """
    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum.min(maximum)
        self.maximum = minimum.max(maximum)

    @classmethod
    def cube(cls, width: float, height: float, depth: float) -> "Box":
        """Box of the given size centred on the origin."""
        half = Vector3(width / 2.0, height / 2.0, depth / 2.0)
        return cls(-half, half)

    @classmethod
    def unit(cls) -> "Box":
        return cls.cube(2.0, 2.0, 2.0)

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        interval = slab_interval(ray, self.minimum, self.maximum)
        if interval is None:
            return None
        tmin, tmax, near_axis, far_axis = interval
        if tmax < tmin:
            return None

        # The face is the slab that produced the parameter; slab_interval has
        # already broken ties by axis order.
        if tmin > EPSILON:
            t, axis, sign = tmin, near_axis, -1.0
        elif tmax > EPSILON:
            # Origin inside the box: the hit is on the exit face.
            t, axis, sign = tmax, far_axis, 1.0
        else:
            return None
        if not math.isfinite(t):
            return None

        direction = ray.direction[axis]
        normal = _AXES[axis] * (sign if direction > 0 else -sign)
        return make_intersection(ray, t, normal)

    def bounding_box(self) -> AABB:
        return AABB(self.minimum, self.maximum)


class Gnomon(Primitive):
    """
    Axis indicator: three thin boxes running from the origin along +x, +y
    and +z.
    """
    def __init__(self, length: float = 1.0, thickness: float = 0.05):
        if length <= 0 or thickness <= 0:
            raise ValueError("gnomon length and thickness must be positive")
        w = thickness / 2.0
        self.length = float(length)
        self.thickness = float(thickness)
        self.boxes = (
            Box(Vector3(0, -w, -w), Vector3(length, w, w)),
            Box(Vector3(-w, 0, -w), Vector3(w, length, w)),
            Box(Vector3(-w, -w, 0), Vector3(w, w, length)),
        )

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        return nearest(*(box.intersect(ray) for box in self.boxes))

    def bounding_box(self) -> AABB:
        box = self.boxes[0].bounding_box()
        for other in self.boxes[1:]:
            box = AABB.surrounding_box(box, other.bounding_box())
        return box
