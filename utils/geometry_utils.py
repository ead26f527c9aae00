"""
Geometry utility functions for bounding box calculations.
"""

from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from models.element import BoundingBox


def bounds_from_points(points) -> Optional[BoundingBox]:
    """
    Axis-aligned bounds of a set of 3D points.

    Args:
        points: Flat [x0, y0, z0, x1, ...] sequence or (N, 3) array

    Returns:
        BoundingBox, or None if there are no points
    """
    vertices = np.asarray(points, dtype=np.float64)
    if vertices.size == 0:
        return None
    if vertices.ndim == 1:
        if vertices.size % 3 != 0:
            raise ValueError(f"Invalid vertex count: {vertices.size}")
        vertices = vertices.reshape(-1, 3)
    lo = vertices.min(axis=0)
    hi = vertices.max(axis=0)
    return BoundingBox(tuple(float(v) for v in lo), tuple(float(v) for v in hi))


def transform_bounds(min_point: Sequence[float], max_point: Sequence[float],
                     matrix: np.ndarray) -> BoundingBox:
    """
    Transform a box by a 4x4 matrix and return the bounds of its eight corners.

    Args:
        min_point: Local minimum (x, y, z)
        max_point: Local maximum (x, y, z)
        matrix: 4x4 homogeneous transform

    Returns:
        World-space BoundingBox
    """
    lo = np.asarray(min_point, dtype=np.float64)
    hi = np.asarray(max_point, dtype=np.float64)
    corners = np.array([
        [x, y, z, 1.0]
        for x in (lo[0], hi[0])
        for y in (lo[1], hi[1])
        for z in (lo[2], hi[2])
    ])
    world = corners @ np.asarray(matrix, dtype=np.float64).T
    return bounds_from_points(world[:, :3])


def merge_bounds(boxes: Iterable[Optional[BoundingBox]]) -> Optional[BoundingBox]:
    """Union of several boxes, ignoring None entries."""
    boxes = [b for b in boxes if b is not None]
    if not boxes:
        return None
    lo: Tuple[float, ...] = tuple(min(b.min_point[i] for b in boxes) for i in range(3))
    hi: Tuple[float, ...] = tuple(max(b.max_point[i] for b in boxes) for i in range(3))
    return BoundingBox(lo, hi)
