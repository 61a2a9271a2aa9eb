# materials/presets.py
from core.vector import Vector3
from materials.material import Material

_NO_REFLECTION = Vector3(0.0, 0.0, 0.0)


class MaterialPresets:
    """Predefined Phong materials."""

    @staticmethod
    def red() -> Material:
        return Material(Vector3(0.8, 0.0, 0.3), Vector3(0.8, 0.3, 0.0), _NO_REFLECTION, 0.5)

    @staticmethod
    def blue() -> Material:
        return Material(Vector3(0.0, 0.3, 0.6), Vector3(0.3, 0.0, 0.6), _NO_REFLECTION, 0.5)

    @staticmethod
    def green() -> Material:
        return Material(Vector3(0.0, 1.0, 0.0), Vector3(0.0, 1.0, 0.0), _NO_REFLECTION, 0.5)

    @staticmethod
    def magenta() -> Material:
        return Material(Vector3(1.0, 0.0, 1.0), Vector3(1.0, 0.0, 1.0), _NO_REFLECTION, 0.5)

    @staticmethod
    def turquoise() -> Material:
        return Material(Vector3(0.25, 0.3, 0.7), Vector3(0.25, 0.3, 0.7), _NO_REFLECTION, 0.5)
