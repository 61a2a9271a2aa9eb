# core/config.py
"""
Global constants and render settings shared by the geometry, scene and
renderer packages.

Exports:
    EPSILON (float): Minimum accepted hit parameter and bounding box padding.
    INFINITY (float): Upper bound used when no hit has been found yet.
    BACKGROUND_COLOUR (tuple): RGB bytes returned for rays that hit nothing.
    MAX_COLOUR (float): Scale from [0, 1] radiance to byte range.
    BVH_BIN_COUNT (int): Number of SAH bins tried per axis when splitting.
    BVH_LEAF_SIZE (int): Largest object count stored in a single BVH leaf.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

EPSILON = 1e-6
INFINITY = 1e20

# Degree reduction threshold for the polynomial solvers, relative to the
# largest coefficient magnitude.
COEFFICIENT_EPSILON = 1e-12

BACKGROUND_COLOUR: Tuple[int, int, int] = (0x22, 0x22, 0x11)
MAX_COLOUR = 255.999

BVH_BIN_COUNT = 16
BVH_LEAF_SIZE = 4


@dataclass(frozen=True)
class RenderSettings:
    """Options for a render pass over a frozen scene."""
    background: Tuple[int, int, int] = BACKGROUND_COLOUR
    # None renders on the calling thread.
    workers: Optional[int] = None
    # Rays handed to each worker task.
    chunk_size: int = 256
