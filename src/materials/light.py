# materials/light.py
from dataclasses import dataclass
from typing import Tuple

from core.vector import Vector3


@dataclass(frozen=True)
class Light:
    """
    Point light with quadratic distance falloff.

    falloff holds the (constant, linear, quadratic) coefficients. A light with
    zero falloff contributes its full colour at any distance.
    """
    color: Vector3
    position: Vector3
    falloff: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self):
        if len(self.falloff) != 3:
            raise ValueError(f"falloff needs three coefficients, got {len(self.falloff)}")
        if any(f < 0 for f in self.falloff):
            raise ValueError(f"falloff coefficients must be non-negative, got {self.falloff}")
        object.__setattr__(self, "falloff", tuple(float(f) for f in self.falloff))

    @classmethod
    def white(cls, position: Vector3) -> "Light":
        return cls(Vector3(1.0, 1.0, 1.0), position, (1.0, 0.0, 0.0))

    def attenuation(self, distance: float) -> float:
        f0, f1, f2 = self.falloff
        return 1.0 / (1.0 + f0 + f1 * distance + f2 * distance * distance)
