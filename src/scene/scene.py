# scene/scene.py
import logging
from typing import Dict, List, Optional

from camera.camera import Camera
from geometry.bvh import BVHNode, build_bvh
from materials.light import Light
from materials.material import Material
from scene.node import Node

logger = logging.getLogger(__name__)


class Scene:
    """
    Named collections of nodes, materials, lights and cameras.

    Names are unique per collection; adding an existing name replaces the
    entry. The scene is read-only while rays are traced, so one instance can
    be shared by every worker of a render pass. build_bvh() is optional and
    must be called again after the scene changes.
    """
    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.materials: Dict[str, Material] = {}
        self.lights: Dict[str, Light] = {}
        self.cameras: Dict[str, Camera] = {}
        self.bvh: Optional[BVHNode] = None

    def _insert(self, collection: Dict, kind: str, name: str, item):
        if name in collection:
            logger.warning("Replacing %s %r", kind, name)
        collection[name] = item

    def add_node(self, name: str, node: Node) -> Node:
        self._insert(self.nodes, "node", name, node)
        self.clear_bvh()
        return node

    def add_material(self, name: str, material: Material) -> Material:
        self._insert(self.materials, "material", name, material)
        return material

    def add_light(self, name: str, light: Light) -> Light:
        self._insert(self.lights, "light", name, light)
        return light

    def add_camera(self, name: str, camera: Camera) -> Camera:
        self._insert(self.cameras, "camera", name, camera)
        return camera

    def active_nodes(self) -> List[Node]:
        return [node for node in self.nodes.values() if node.active]

    def build_bvh(self) -> Optional[BVHNode]:
        """
        Builds a hierarchy over the currently active nodes. Node transforms
        and active flags must not change while it is in use.
        """
        nodes = self.active_nodes()
        if not nodes:
            self.bvh = None
            logger.info("No active nodes; scene BVH not built")
            return None
        self.bvh = build_bvh(nodes)
        logger.info("Built scene BVH over %d nodes (%d tree nodes, depth %d)",
                    len(nodes), self.bvh.node_count(), self.bvh.depth())
        return self.bvh

    def clear_bvh(self):
        self.bvh = None

    def __repr__(self) -> str:
        return (f"Scene(nodes={len(self.nodes)}, materials={len(self.materials)}, "
                f"lights={len(self.lights)}, cameras={len(self.cameras)})")
