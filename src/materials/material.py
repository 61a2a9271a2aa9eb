# materials/material.py
from dataclasses import dataclass

from core.vector import Vector3


@dataclass(frozen=True)
class Material:
    """
    Phong reflectance coefficients.

    diffuse, specular and reflective are per-channel coefficients in [0, 1].
    reflective is carried for scene descriptions but not traced; there are no
    secondary rays.
    """
    diffuse: Vector3
    specular: Vector3
    reflective: Vector3 = Vector3(0.0, 0.0, 0.0)
    shininess: float = 0.5

    def __post_init__(self):
        if self.shininess < 0:
            raise ValueError(f"shininess must be non-negative, got {self.shininess}")
