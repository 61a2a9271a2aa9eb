# scene/node.py
import logging
import math
from typing import Optional

import numpy as np

from core.aabb import AABB
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import Intersection, Primitive
from materials.material import Material

logger = logging.getLogger(__name__)

# Model matrices with a smaller absolute determinant are treated as singular.
SINGULAR_DETERMINANT = 1e-12


class SingularTransformError(ValueError):
    """Raised when a node's transform has no inverse, e.g. a zero scale."""


def translation_matrix(t: Vector3) -> np.ndarray:
    m = np.identity(4)
    m[:3, 3] = [t.x, t.y, t.z]
    return m


def scale_matrix(s: Vector3) -> np.ndarray:
    return np.diag([s.x, s.y, s.z, 1.0])


def rotation_matrix(roll: float, pitch: float, yaw: float) -> np.ndarray:
    """
    Rotation about x by roll, then y by pitch, then z by yaw (radians):
    Rz(yaw) . Ry(pitch) . Rx(roll).
    """
    cr, sr = math.cos(roll), math.sin(roll)
    cp, sp = math.cos(pitch), math.sin(pitch)
    cy, sy = math.cos(yaw), math.sin(yaw)
    rx = np.array([[1, 0, 0, 0],
                   [0, cr, -sr, 0],
                   [0, sr, cr, 0],
                   [0, 0, 0, 1]], dtype=np.float64)
    ry = np.array([[cp, 0, sp, 0],
                   [0, 1, 0, 0],
                   [-sp, 0, cp, 0],
                   [0, 0, 0, 1]], dtype=np.float64)
    rz = np.array([[cy, -sy, 0, 0],
                   [sy, cy, 0, 0],
                   [0, 0, 1, 0],
                   [0, 0, 0, 1]], dtype=np.float64)
    return rz @ ry @ rx


def _apply(matrix: np.ndarray, p: Vector3) -> Vector3:
    return Vector3.from_array(matrix @ np.array([p.x, p.y, p.z, 1.0]))


class Node:
    """
    Places a primitive in the scene with a material and an affine transform.

    The model matrix is T . R . S, recomposed from the translation, rotation
    (roll, pitch, yaw in radians) and scale fields after every mutation, and
    inverse_model is always its exact inverse. Primitives are shared handles;
    several nodes may instance the same mesh.
    """
    def __init__(self, primitive: Primitive, material: Material,
                 translation: Vector3 = Vector3(0, 0, 0),
                 rotation: Vector3 = Vector3(0, 0, 0),
                 scale: Vector3 = Vector3(1, 1, 1),
                 active: bool = True):
        self.primitive = primitive
        self.material = material
        self.active = active
        self.local_box = primitive.bounding_box()
        self._compose(translation, rotation, scale)

    def child(self, primitive: Primitive) -> "Node":
        """A new node sharing this node's material and transform."""
        return Node(primitive, self.material, self.translation, self.rotation,
                    self.scale, self.active)

    def _compose(self, translation: Vector3, rotation: Vector3, scale: Vector3):
        model = (translation_matrix(translation)
                 @ rotation_matrix(rotation.x, rotation.y, rotation.z)
                 @ scale_matrix(scale))
        det = np.linalg.det(model)
        if not np.isfinite(det) or abs(det) < SINGULAR_DETERMINANT:
            logger.warning("Rejected singular transform: translation=%r rotation=%r scale=%r",
                           translation, rotation, scale)
            raise SingularTransformError(f"transform with scale {scale!r} is not invertible")
        # Nothing is assigned until the new matrices are known to be valid.
        self.translation = translation
        self.rotation = rotation
        self.scale = scale
        self.model = model
        self.inverse_model = np.linalg.inv(model)
        self._world_box = self.local_box.transform(model)

    def set_translation(self, translation: Vector3):
        self._compose(translation, self.rotation, self.scale)

    def set_rotation(self, rotation: Vector3):
        self._compose(self.translation, rotation, self.scale)

    def set_scale(self, scale: Vector3):
        self._compose(self.translation, self.rotation, scale)

    def translate(self, offset: Vector3):
        self._compose(self.translation + offset, self.rotation, self.scale)

    def rotate(self, roll: float, pitch: float, yaw: float):
        self._compose(self.translation, self.rotation + Vector3(roll, pitch, yaw), self.scale)

    def scale_by(self, factors: Vector3):
        self._compose(self.translation, self.rotation, self.scale * factors)

    def set_active(self, active: bool):
        self.active = active

    def transform_point(self, p: Vector3) -> Vector3:
        """Local to world."""
        return _apply(self.model, p)

    def inverse_transform_point(self, p: Vector3) -> Vector3:
        """World to local."""
        return _apply(self.inverse_model, p)

    def transform_normal(self, n: Vector3) -> Vector3:
        # Normals map by the inverse transpose to stay perpendicular under
        # non-uniform scale.
        return Vector3.from_array(self.inverse_model[:3, :3].T @ n.to_array()).normalize()

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        """
        Intersects a world-space ray with the primitive in its local space.
        The ray parameter is preserved, so distance is comparable across
        nodes hit by the same ray.
        """
        if not self.active:
            return None
        local = self.primitive.intersect(ray.transform(self.inverse_model))
        if local is None:
            return None
        normal = self.transform_normal(local.normal)
        if normal.length() == 0:
            return None
        return Intersection(
            point=self.transform_point(local.point),
            normal=normal,
            distance=local.distance,
            incidence=(-ray.direction).normalize(),
            material=self.material,
            front_face=ray.direction.dot(normal) < 0,
        )

    def bounding_box(self) -> AABB:
        """World-space box of the transformed local box."""
        return self._world_box

    def __repr__(self) -> str:
        return (f"Node({type(self.primitive).__name__}, translation={self.translation!r}, "
                f"rotation={self.rotation!r}, scale={self.scale!r})")
