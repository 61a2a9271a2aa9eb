# src/geometry/bvh.py
from typing import List, Optional, Sequence

from core.aabb import AABB
from core.config import BVH_BIN_COUNT, BVH_LEAF_SIZE, INFINITY
from geometry.hittable import Intersection


class BVHEntry:
    """An object stored in the hierarchy together with its cached bounds."""
    __slots__ = ("object", "box", "centroid")

    def __init__(self, obj):
        self.object = obj
        self.box = obj.bounding_box()
        self.centroid = self.box.centroid()


def _union(entries: Sequence[BVHEntry]) -> AABB:
    box = entries[0].box
    for entry in entries[1:]:
        box = AABB.surrounding_box(box, entry.box)
    return box


class BVHNode:
    """
    Bounding volume hierarchy over objects exposing intersect(ray) and
    bounding_box(). Built once with a binned SAH split and read-only
    afterwards, so one tree can be queried from many threads.

    Nearest-hit queries return the same intersection distance as a linear
    scan over the objects; the tree only skips work.
    """
    def __init__(self, entries: List[BVHEntry], start: int, end: int,
                 max_bin_count: int = BVH_BIN_COUNT, leaf_size: int = BVH_LEAF_SIZE):
        object_span = end - start
        self.box = _union(entries[start:end])
        self.left = None
        self.right = None
        self.objects = []

        if object_span <= leaf_size:
            self._make_leaf(entries, start, end)
            return

        # Bounds of the centroids decide the split axis and the bin layout.
        centroid_min = entries[start].centroid
        centroid_max = entries[start].centroid
        for i in range(start + 1, end):
            centroid_min = centroid_min.min(entries[i].centroid)
            centroid_max = centroid_max.max(entries[i].centroid)

        best_cost = float('inf')
        best_axis = -1
        best_count = 0

        for axis in range(3):
            min_val = centroid_min[axis]
            max_val = centroid_max[axis]
            # Skip if the extent is too small
            if max_val - min_val < 1e-12:
                continue

            bin_count = min(max_bin_count, object_span)
            bin_width = (max_val - min_val) / bin_count
            counts = [0] * bin_count
            boxes: List[Optional[AABB]] = [None] * bin_count
            for i in range(start, end):
                bin_idx = min(bin_count - 1, int((entries[i].centroid[axis] - min_val) / bin_width))
                counts[bin_idx] += 1
                box = entries[i].box
                boxes[bin_idx] = box if boxes[bin_idx] is None else AABB.surrounding_box(boxes[bin_idx], box)

            # Right-to-left sweep of accumulated areas and counts.
            right_areas = [0.0] * bin_count
            right_counts = [0] * bin_count
            right_box = None
            right_count = 0
            for i in range(bin_count - 1, 0, -1):
                if boxes[i] is not None:
                    right_box = boxes[i] if right_box is None else AABB.surrounding_box(right_box, boxes[i])
                right_count += counts[i]
                right_counts[i] = right_count
                right_areas[i] = right_box.surface_area() if right_box is not None else 0.0

            # Left-to-right sweep evaluating the SAH cost of each bin boundary.
            left_box = None
            left_count = 0
            for i in range(1, bin_count):
                if boxes[i - 1] is not None:
                    left_box = boxes[i - 1] if left_box is None else AABB.surrounding_box(left_box, boxes[i - 1])
                left_count += counts[i - 1]
                if left_count == 0 or right_counts[i] == 0:
                    continue
                cost = left_count * left_box.surface_area() + right_counts[i] * right_areas[i]
                if cost < best_cost:
                    best_cost = cost
                    best_axis = axis
                    best_count = left_count

        if best_axis < 0:
            # Every centroid coincides; nothing separates the objects.
            self._make_leaf(entries, start, end)
            return

        # Bins are monotone in the centroid, so sorting puts exactly
        # best_count entries on the left.
        entries[start:end] = sorted(entries[start:end], key=lambda e: e.centroid[best_axis])
        split = start + best_count

        self.left = BVHNode(entries, start, split, max_bin_count, leaf_size)
        self.right = BVHNode(entries, split, end, max_bin_count, leaf_size)

    def _make_leaf(self, entries: List[BVHEntry], start: int, end: int):
        self.objects = [entry.object for entry in entries[start:end]]

    @property
    def is_leaf(self) -> bool:
        return self.left is None

    def hit(self, ray, t_max: float = INFINITY) -> Optional[Intersection]:
        """
        Nearest intersection closer than t_max, or None.
        """
        if not self.box.hit(ray, 0.0, t_max):
            return None

        if self.is_leaf:
            closest = None
            for obj in self.objects:
                rec = obj.intersect(ray)
                if rec is not None and rec.distance < t_max:
                    t_max = rec.distance
                    closest = rec
            return closest

        hit_left = self.left.hit(ray, t_max)
        # Only hits strictly closer than the left one come back from the right.
        if hit_left is not None:
            t_max = hit_left.distance
        hit_right = self.right.hit(ray, t_max)
        return hit_right if hit_right is not None else hit_left

    def node_count(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + self.left.node_count() + self.right.node_count()

    def depth(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + max(self.left.depth(), self.right.depth())


def build_bvh(objects: Sequence, max_bin_count: int = BVH_BIN_COUNT,
              leaf_size: int = BVH_LEAF_SIZE) -> BVHNode:
    """
    Builds a hierarchy over the given objects. The input sequence is not
    reordered.
    """
    if len(objects) == 0:
        raise ValueError("cannot build a BVH over zero objects")
    entries = [BVHEntry(obj) for obj in objects]
    return BVHNode(entries, 0, len(entries), max_bin_count, leaf_size)
