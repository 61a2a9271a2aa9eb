# renderer/raytracer.py
"""
Nearest-hit traversal and Blinn-Phong shading over a Scene.

trace() and shade() are pure functions of their arguments and never mutate
the scene, so render() may evaluate rays on a thread pool against one shared
scene.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple

from core.config import BACKGROUND_COLOUR, INFINITY, MAX_COLOUR, RenderSettings
from core.ray import Ray
from core.utils import clamp, halfway
from core.vector import Vector3
from geometry.hittable import Intersection
from scene.scene import Scene

logger = logging.getLogger(__name__)

Colour = Tuple[int, int, int]


def trace(ray: Ray, scene: Scene) -> Optional[Intersection]:
    """
    Nearest intersection of the ray with the scene's active nodes, or None.
    Uses the scene BVH when one has been built.
    """
    if scene.bvh is not None:
        return scene.bvh.hit(ray)

    closest_hit = None
    closest_t = INFINITY
    for node in scene.nodes.values():
        if not node.active:
            continue
        rec = node.intersect(ray)
        if rec is not None and rec.distance < closest_t:
            closest_t = rec.distance
            closest_hit = rec
    return closest_hit


def to_colour(c: Vector3) -> Colour:
    """Maps [0, 1] radiance to bytes, clamping each channel."""
    return (int(MAX_COLOUR * clamp(c.x)),
            int(MAX_COLOUR * clamp(c.y)),
            int(MAX_COLOUR * clamp(c.z)))


def shade(intersection: Optional[Intersection], scene: Scene,
          background: Colour = BACKGROUND_COLOUR) -> Colour:
    """
    Blinn-Phong colour of an intersection lit by every light in the scene.
    A miss (None) shades to the background colour.
    """
    if intersection is None:
        return background
    material = intersection.material
    if material is None:
        raise ValueError("cannot shade an intersection without a material")

    normal = intersection.shading_normal()
    colour = Vector3(0.0, 0.0, 0.0)
    for light in scene.lights.values():
        to_light = light.position - intersection.point
        distance = to_light.length()
        if distance == 0:
            # No direction to the light.
            continue
        to_light = to_light / distance

        n_dot_l = normal.dot(to_light)
        diffuse = material.diffuse * max(0.0, n_dot_l)
        if n_dot_l > 0:
            h = halfway(intersection.incidence, to_light)
            specular = material.specular * (max(0.0, normal.dot(h)) ** material.shininess)
            diffuse = diffuse + specular

        colour = colour + light.color * diffuse * light.attenuation(distance)

    return to_colour(colour)


def shade_ray(ray: Ray, scene: Scene, background: Colour = BACKGROUND_COLOUR) -> Colour:
    return shade(trace(ray, scene), scene, background)


def _render_chunk(rays: Sequence[Ray], scene: Scene, background: Colour) -> List[Colour]:
    return [shade_ray(ray, scene, background) for ray in rays]


def render(scene: Scene, rays: Iterable[Ray],
           settings: RenderSettings = RenderSettings()) -> List[Colour]:
    """
    Render pass over a frozen scene: one colour per ray, in input order.

    With settings.workers set, chunks of settings.chunk_size rays are shaded
    on a thread pool.
    """
    rays = list(rays)
    if settings.chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {settings.chunk_size}")
    logger.info("Rendering %d rays over %d nodes and %d lights (workers=%s)",
                len(rays), len(scene.nodes), len(scene.lights), settings.workers)

    if not settings.workers or settings.workers <= 1:
        return _render_chunk(rays, scene, settings.background)

    chunks = [rays[start:start + settings.chunk_size]
              for start in range(0, len(rays), settings.chunk_size)]
    colours: List[Colour] = []
    with ThreadPoolExecutor(max_workers=settings.workers) as executor:
        # map() yields results in submission order.
        for chunk_colours in executor.map(
                lambda chunk: _render_chunk(chunk, scene, settings.background), chunks):
            colours.extend(chunk_colours)
    logger.debug("Render pass finished")
    return colours
