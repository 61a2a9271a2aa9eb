# core/utils.py
from core.vector import Vector3


def halfway(v: Vector3, w: Vector3) -> Vector3:
    """
    Returns the unit vector halfway between two directions.
    """
    return (v.normalize() + w.normalize()).normalize()


def clamp(x: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, x))
