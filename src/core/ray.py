# core/ray.py
import numpy as np

from core.vector import Vector3


class Ray:
    """
    Represents a ray in 3D space with an origin and direction.

    The direction is not required to be unit length. The parameter t used by
    at() and reported as Intersection.distance is a scalar along the given
    direction, so it is a metric distance only for unit directions.
    """
    __slots__ = ("origin", "direction")

    def __init__(self, origin: Vector3, direction: Vector3):
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: np.ndarray) -> "Ray":
        """
        Returns this ray mapped by a 4x4 affine matrix. The direction is
        transformed as a vector and left unnormalized so t is preserved.
        """
        origin = matrix @ np.array([self.origin.x, self.origin.y, self.origin.z, 1.0])
        direction = matrix @ np.array([self.direction.x, self.direction.y, self.direction.z, 0.0])
        return Ray(Vector3.from_array(origin), Vector3.from_array(direction))

    def __repr__(self) -> str:
        return f"Ray({self.origin!r}, {self.direction!r})"
