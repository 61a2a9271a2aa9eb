# src/core/aabb.py
import math
from typing import List, Optional, Tuple

import numpy as np

from core.config import EPSILON
from core.vector import Vector3

SlabInterval = Tuple[float, float, int, int]


def slab_interval(ray, minimum: Vector3, maximum: Vector3) -> Optional[SlabInterval]:
    """
    Slab method: intersects the ray with the three pairs of axis planes.

    Returns (tmin, tmax, near_axis, far_axis) where tmin is the largest entry
    parameter, tmax the smallest exit parameter, and the axes name the slab
    that produced each of them. Ties go to the lower axis index (X > Y > Z).
    Returns None when a ray parallel to a slab lies outside it. The interval
    may still be empty (tmax < tmin); callers decide what counts as a hit.
    """
    tmin = -math.inf
    tmax = math.inf
    near_axis = 0
    far_axis = 0
    for axis in range(3):
        origin = ray.origin[axis]
        direction = ray.direction[axis]
        lo = minimum[axis]
        hi = maximum[axis]
        if direction == 0.0:
            # Parallel to this slab: unbounded inside it, a miss outside it.
            if origin < lo or origin > hi:
                return None
            continue
        t0 = (lo - origin) / direction
        t1 = (hi - origin) / direction
        if t0 > t1:
            t0, t1 = t1, t0
        if t0 > tmin:
            tmin = t0
            near_axis = axis
        if t1 < tmax:
            tmax = t1
            far_axis = axis
    return tmin, tmax, near_axis, far_axis


class AABB:
    """
    Axis-aligned bounding box. Inverted corners are normalized component-wise
    and, unless pad is False, the box is grown by EPSILON on every side so
    rays grazing a face are not culled.
    """
    __slots__ = ("minimum", "maximum")

    def __init__(self, minimum: Vector3, maximum: Vector3, pad: bool = True):
        low = minimum.min(maximum)
        high = minimum.max(maximum)
        if pad:
            margin = Vector3(EPSILON, EPSILON, EPSILON)
            low = low - margin
            high = high + margin
        self.minimum = low
        self.maximum = high

    @classmethod
    def from_points(cls, points: List[Vector3], pad: bool = True) -> "AABB":
        if not points:
            raise ValueError("cannot bound an empty point set")
        low = points[0]
        high = points[0]
        for p in points[1:]:
            low = low.min(p)
            high = high.max(p)
        return cls(low, high, pad=pad)

    def intersect(self, ray) -> bool:
        """
        Standard slab test: the ray hits the box iff the entry/exit interval is
        non-empty and the exit lies ahead of the origin.
        """
        interval = slab_interval(ray, self.minimum, self.maximum)
        if interval is None:
            return False
        tmin, tmax, _, _ = interval
        return tmax >= tmin and tmax >= 0.0

    def hit(self, ray, t_min: float, t_max: float) -> bool:
        # Range-limited slab test used while traversing a hierarchy.
        interval = slab_interval(ray, self.minimum, self.maximum)
        if interval is None:
            return False
        tmin, tmax, _, _ = interval
        tmin = max(tmin, t_min)
        tmax = min(tmax, t_max)
        return tmax >= tmin

    def contains(self, point: Vector3) -> bool:
        return (self.minimum.x <= point.x <= self.maximum.x and
                self.minimum.y <= point.y <= self.maximum.y and
                self.minimum.z <= point.z <= self.maximum.z)

    def size(self) -> Vector3:
        return self.maximum - self.minimum

    def centroid(self) -> Vector3:
        return (self.minimum + self.maximum) * 0.5

    def surface_area(self) -> float:
        d = self.size()
        return 2 * (d.x * d.y + d.x * d.z + d.y * d.z)

    def volume(self) -> float:
        d = self.size()
        return d.x * d.y * d.z

    def corners(self) -> List[Vector3]:
        lo, hi = self.minimum, self.maximum
        return [Vector3(x, y, z)
                for x in (lo.x, hi.x)
                for y in (lo.y, hi.y)
                for z in (lo.z, hi.z)]

    def grow(self, point: Vector3) -> "AABB":
        return AABB(self.minimum.min(point), self.maximum.max(point), pad=False)

    def transform(self, matrix: np.ndarray) -> "AABB":
        """
        Box enclosing the eight corners mapped by a 4x4 affine matrix.
        """
        corners = np.array([[c.x, c.y, c.z, 1.0] for c in self.corners()])
        mapped = (matrix @ corners.T).T[:, :3]
        return AABB(Vector3.from_array(mapped.min(axis=0)),
                    Vector3.from_array(mapped.max(axis=0)), pad=False)

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        return AABB(box0.minimum.min(box1.minimum),
                    box0.maximum.max(box1.maximum), pad=False)

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"
