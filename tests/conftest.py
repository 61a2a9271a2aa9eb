"""Shared fixtures for the raytracer core tests."""

import pytest

from core.vector import Vector3
from geometry.sphere import Sphere
from materials.light import Light
from materials.material import Material
from scene.node import Node
from scene.scene import Scene


@pytest.fixture
def white_material():
    """Purely diffuse white material."""
    return Material(Vector3(1, 1, 1), Vector3(0, 0, 0), Vector3(0, 0, 0), 1.0)


@pytest.fixture
def sphere_grid_scene(white_material):
    """A 4x4 grid of unit spheres at staggered depths, lit by one white light."""
    scene = Scene()
    for i in range(4):
        for j in range(4):
            node = Node(Sphere.unit(), white_material)
            node.set_translation(Vector3(3.0 * i - 4.5, 3.0 * j - 4.5, float(i + j)))
            scene.add_node(f"sphere_{i}_{j}", node)
    scene.add_light("key", Light(Vector3(1, 1, 1), Vector3(0, 0, -20), (0.0, 0.0, 0.0)))
    return scene
