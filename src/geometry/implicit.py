# geometry/implicit.py
"""
Quartic surfaces given implicitly by F(x, y, z) = 0.

The ray o + t d is substituted into F with numpy polynomial arithmetic,
which yields the exact coefficients of a polynomial of degree <= 4 in t. Its
real roots are scanned in ascending order and the first one whose point lies
inside the surface's extent is the hit. The normal is the normalized analytic
gradient of F; where the gradient vanishes (a singular point of the surface)
the ray reports no intersection.

Several of these zero sets are unbounded or contain stray lines outside the
visible surface, so the extent box clips the surface as well as bounding it.
"""
from typing import Optional

import numpy as np
from numpy.polynomial import Polynomial

from core.aabb import AABB
from core.config import EPSILON
from core.ray import Ray
from core.roots import solve_quartic
from core.vector import Vector3
from geometry.hittable import Intersection, Primitive, make_intersection


class ImplicitSurface(Primitive):
    """
    Base class for the quartic surfaces. Subclasses provide field(), which
    must accept floats or numpy Polynomials, and gradient().
    """
    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.extent = AABB(minimum, maximum)

    def field(self, x, y, z):
        raise NotImplementedError("field() must be implemented by subclasses.")

    def gradient(self, p: Vector3) -> Vector3:
        raise NotImplementedError("gradient() must be implemented by subclasses.")

    def coefficients(self, ray: Ray) -> np.ndarray:
        """
        Coefficients of F(o + t d) in ascending powers of t, padded to five.
        """
        o, d = ray.origin, ray.direction
        poly = self.field(Polynomial([o.x, d.x]),
                          Polynomial([o.y, d.y]),
                          Polynomial([o.z, d.z]))
        coef = np.zeros(5)
        values = np.atleast_1d(poly.coef)[:5]
        coef[:len(values)] = values
        return coef

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        e, d, c, b, a = self.coefficients(ray)
        for t in solve_quartic(a, b, c, d, e):
            if t <= EPSILON:
                continue
            point = ray.at(t)
            if not self.extent.contains(point):
                continue
            return make_intersection(ray, t, self.gradient(point))
        return None

    def bounding_box(self) -> AABB:
        return self.extent


class Torus(ImplicitSurface):
    """
    Torus around the y axis:
    (x^2 + y^2 + z^2 + R^2 - r^2)^2 - 4 R^2 (x^2 + z^2) = 0
    """
    def __init__(self, major_radius: float = 1.0, minor_radius: float = 0.25):
        if major_radius <= 0 or minor_radius <= 0:
            raise ValueError(
                f"torus radii must be positive, got {major_radius}, {minor_radius}")
        self.major_radius = float(major_radius)
        self.minor_radius = float(minor_radius)
        reach = self.major_radius + self.minor_radius
        r = self.minor_radius
        super().__init__(Vector3(-reach, -r, -reach), Vector3(reach, r, reach))

    def field(self, x, y, z):
        R2 = self.major_radius ** 2
        r2 = self.minor_radius ** 2
        s = x * x + y * y + z * z + (R2 - r2)
        return s * s - 4.0 * R2 * (x * x + z * z)

    def gradient(self, p: Vector3) -> Vector3:
        R2 = self.major_radius ** 2
        s = p.x * p.x + p.y * p.y + p.z * p.z + R2 - self.minor_radius ** 2
        return Vector3(4.0 * p.x * s - 8.0 * R2 * p.x,
                       4.0 * p.y * s,
                       4.0 * p.z * s - 8.0 * R2 * p.z)


class RomanSurface(ImplicitSurface):
    """
    Steiner's Roman surface: x^2 y^2 + y^2 z^2 + z^2 x^2 - r x y z = 0.

    The visible surface lies within |x|, |y|, |z| <= r / 2; the coordinate
    axes belong to the zero set and are singular there.
    """
    def __init__(self, radius: float = 1.0):
        if radius <= 0:
            raise ValueError(f"roman surface radius must be positive, got {radius}")
        self.radius = float(radius)
        h = self.radius / 2.0
        super().__init__(Vector3(-h, -h, -h), Vector3(h, h, h))

    def field(self, x, y, z):
        return x * x * y * y + y * y * z * z + z * z * x * x - self.radius * x * y * z

    def gradient(self, p: Vector3) -> Vector3:
        x, y, z, r = p.x, p.y, p.z, self.radius
        return Vector3(2.0 * x * (y * y + z * z) - r * y * z,
                       2.0 * y * (x * x + z * z) - r * x * z,
                       2.0 * z * (x * x + y * y) - r * x * y)


class SteinerSurface(ImplicitSurface):
    """x^2 y^2 + x^2 z^2 + y^2 z^2 + y z^2 = 0, clipped to [-1, 1]^3."""
    def __init__(self):
        super().__init__(Vector3(-1, -1, -1), Vector3(1, 1, 1))

    def field(self, x, y, z):
        return x * x * y * y + x * x * z * z + y * y * z * z + y * z * z

    def gradient(self, p: Vector3) -> Vector3:
        x, y, z = p.x, p.y, p.z
        return Vector3(2.0 * x * (y * y + z * z),
                       2.0 * y * (x * x + z * z) + z * z,
                       2.0 * z * (x * x + y * y) + 2.0 * y * z)


class SteinerSurface2(ImplicitSurface):
    """x y z^2 + x y z + x z + y z = 0, clipped to [-1, 1]^3."""
    def __init__(self):
        super().__init__(Vector3(-1, -1, -1), Vector3(1, 1, 1))

    def field(self, x, y, z):
        return x * y * z * z + x * y * z + x * z + y * z

    def gradient(self, p: Vector3) -> Vector3:
        x, y, z = p.x, p.y, p.z
        return Vector3(y * z * z + y * z + z,
                       x * z * z + x * z + z,
                       2.0 * x * y * z + x * y + x + y)


class CrossCap(ImplicitSurface):
    """
    Cross-cap, the image of the unit sphere under (u, v, w) -> (vw, 2uv, u^2 - v^2):
    4 x^2 (x^2 + y^2 + z^2 + z) + y^2 (y^2 + z^2 - 1) = 0
    """
    def __init__(self):
        super().__init__(Vector3(-0.5, -1, -1), Vector3(0.5, 1, 1))

    @staticmethod
    def _field(x, y, z):
        return 4.0 * x * x * (x * x + y * y + z * z + z) + y * y * (y * y + z * z - 1.0)

    @staticmethod
    def _gradient(x: float, y: float, z: float) -> Vector3:
        return Vector3(8.0 * x * (x * x + y * y + z * z + z) + 8.0 * x * x * x,
                       8.0 * x * x * y + 2.0 * y * (y * y + z * z - 1.0) + 2.0 * y * y * y,
                       4.0 * x * x * (2.0 * z + 1.0) + 2.0 * y * y * z)

    def field(self, x, y, z):
        return self._field(x, y, z)

    def gradient(self, p: Vector3) -> Vector3:
        return self._gradient(p.x, p.y, p.z)


class CrossCap2(ImplicitSurface):
    """
    The cross-cap with its axes cycled, F(z, x, y) = 0:
    4 z^2 (x^2 + y^2 + z^2 + y) + x^2 (x^2 + y^2 - 1) = 0
    """
    def __init__(self):
        super().__init__(Vector3(-1, -1, -0.5), Vector3(1, 1, 0.5))

    def field(self, x, y, z):
        return CrossCap._field(z, x, y)

    def gradient(self, p: Vector3) -> Vector3:
        g = CrossCap._gradient(p.z, p.x, p.y)
        # Chain rule for the cycled arguments.
        return Vector3(g.y, g.z, g.x)
