# camera/camera.py
import math

from core.vector import Vector3


class Camera:
    """
    Viewpoint stored with a scene: eye position, look-at target, up hint,
    vertical field of view in degrees and aspect ratio. Turning pixels into
    rays is left to the caller; the camera only derives its basis vectors.
    """
    def __init__(self, eye: Vector3, target: Vector3, up: Vector3,
                 fov: float, aspect: float):
        if not 0 < fov < 180:
            raise ValueError(f"fov must be in (0, 180) degrees, got {fov}")
        if aspect <= 0:
            raise ValueError(f"aspect ratio must be positive, got {aspect}")
        self.eye = eye
        self.target = target
        self.up_hint = up
        self.fov = float(fov)
        self.aspect = float(aspect)
        self.update_camera()

    def update_camera(self):
        """Updates the camera's basis vectors and viewport."""
        self.forward = (self.target - self.eye).normalize()
        if self.forward.length() == 0:
            raise ValueError("camera eye and target coincide")

        # Compute right and up vectors
        self.right = self.forward.cross(self.up_hint).normalize()
        if self.right.length() == 0:
            raise ValueError("camera up vector is parallel to the view direction")
        self.up = self.right.cross(self.forward).normalize()

        # Viewport dimensions at unit distance
        self.viewport_height = 2.0 * math.tan(math.radians(self.fov) / 2)
        self.viewport_width = self.aspect * self.viewport_height

    def look_at(self, target: Vector3):
        self.target = target
        self.update_camera()

    def __repr__(self) -> str:
        return f"Camera(eye={self.eye!r}, target={self.target!r}, fov={self.fov})"
