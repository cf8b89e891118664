# geometry.py
# 2D geometry helpers for label placement: point/segment distance,
# crossing-number containment and their vectorised lattice counterparts.

from __future__ import annotations
from typing import Iterable, Sequence
import math

import numpy as np

from models import Point, Region, Ring


def distance_point_to_segment(pt: Point, a: Point, b: Point) -> float:
    """Euclidean distance from point to segment AB."""
    (x, y) = pt
    (x1, y1) = a
    (x2, y2) = b
    dx = x2 - x1; dy = y2 - y1
    len_sq = dx*dx + dy*dy
    if len_sq == 0.0:
        return math.hypot(x - x1, y - y1)
    t = ((x - x1)*dx + (y - y1)*dy) / len_sq
    if t <= 0.0:
        return math.hypot(x - x1, y - y1)
    if t >= 1.0:
        return math.hypot(x - x2, y - y2)
    # perpendicular distance; exactly zero for points collinear with the edge
    return abs((x - x1)*dy - (y - y1)*dx) / math.sqrt(len_sq)


def distance_point_to_perimeter(pt: Point, ring: Ring) -> float:
    """Minimum distance from point to any edge of the closed ring."""
    n = len(ring)
    if n == 0:
        raise ValueError("Cannot measure distance to an empty ring.")
    if n == 1:
        return math.hypot(pt[0]-ring[0][0], pt[1]-ring[0][1])
    mind = float("inf")
    for i in range(n):
        a = ring[i]; b = ring[(i+1) % n]
        d = distance_point_to_segment(pt, a, b)
        if d < mind:
            mind = d
    return mind


def distance_point_to_rings(pt: Point, rings: Iterable[Ring]) -> float:
    """Distance to the nearest edge among all rings (outer boundary and holes)."""
    return min(distance_point_to_perimeter(pt, ring) for ring in rings)


def is_inside(pt: Point, ring: Ring) -> bool:
    """Crossing-number test; the horizontal ray is cast at the point's own y."""
    (x, y) = pt
    inside = False
    n = len(ring)
    j = n - 1
    for i in range(n):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if ((yi <= y < yj) or (yj <= y < yi)) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def bounding_box(ring: Ring) -> Region:
    """Tight axis-aligned box around the ring's vertices."""
    if not ring:
        raise ValueError("Cannot compute the bounding box of an empty ring.")
    xs = [p[0] for p in ring]
    ys = [p[1] for p in ring]
    return Region(min(xs), min(ys), max(xs), max(ys))


# ---------- Vectorised lattice helpers ------------------------------------------

# Edges processed per slice; bounds the (samples x edges) temporaries.
EDGE_CHUNK = 1024


def _ring_arrays(ring: Ring):
    arr = np.asarray(ring, dtype=float).reshape(-1, 2)
    return arr[:, 0], arr[:, 1]


def _chunks(n: int):
    for start in range(0, n, EDGE_CHUNK):
        yield slice(start, min(start + EDGE_CHUNK, n))


def inside_mask(xs: np.ndarray, ys: np.ndarray, ring: Ring) -> np.ndarray:
    """Vectorised :func:`is_inside` over sample arrays ``xs``/``ys``."""
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    if len(ring) == 0:
        return np.zeros(xs.shape, dtype=bool)
    ix_all, iy_all = _ring_arrays(ring)
    # edge (j, i) with j the previous vertex, wrapping last -> first
    jx_all = np.roll(ix_all, 1); jy_all = np.roll(iy_all, 1)
    px = xs.reshape(-1, 1); py = ys.reshape(-1, 1)
    crossings = np.zeros(px.shape[0], dtype=np.int64)
    for part in _chunks(len(ix_all)):
        ix = ix_all[part]; iy = iy_all[part]
        jx = jx_all[part]; jy = jy_all[part]
        straddles = ((iy <= py) & (py < jy)) | ((jy <= py) & (py < iy))
        with np.errstate(divide="ignore", invalid="ignore"):
            x_cross = (jx - ix) * (py - iy) / (jy - iy) + ix
        crossings += (straddles & (px < x_cross)).sum(axis=1)
    return (crossings % 2 == 1).reshape(xs.shape)


def _segment_distances(px, py, ax, ay, bx, by) -> np.ndarray:
    """Same branches as :func:`distance_point_to_segment`, per sample and edge."""
    dx = bx - ax; dy = by - ay
    len_sq = dx*dx + dy*dy
    with np.errstate(divide="ignore", invalid="ignore"):
        t = ((px - ax)*dx + (py - ay)*dy) / len_sq
        perp = np.abs((px - ax)*dy - (py - ay)*dx) / np.sqrt(len_sq)
    t = np.where(len_sq == 0.0, 0.0, t)
    end_x = np.where(t <= 0.0, ax, bx)
    end_y = np.where(t <= 0.0, ay, by)
    interior = (t > 0.0) & (t < 1.0)
    return np.where(interior, perp, np.hypot(px - end_x, py - end_y))


def perimeter_distances(xs: np.ndarray, ys: np.ndarray, rings: Sequence[Ring]) -> np.ndarray:
    """Distance from each sample to the nearest edge of the union of ``rings``."""
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    px = xs.reshape(-1, 1); py = ys.reshape(-1, 1)
    best = np.full(px.shape[0], np.inf)
    for ring in rings:
        if len(ring) == 0:
            continue
        ax_all, ay_all = _ring_arrays(ring)
        bx_all = np.roll(ax_all, -1); by_all = np.roll(ay_all, -1)
        for part in _chunks(len(ax_all)):
            d = _segment_distances(
                px, py, ax_all[part], ay_all[part], bx_all[part], by_all[part]
            )
            best = np.minimum(best, d.min(axis=1))
    return best.reshape(xs.shape)


__all__ = [
    "bounding_box",
    "distance_point_to_perimeter",
    "distance_point_to_rings",
    "distance_point_to_segment",
    "inside_mask",
    "is_inside",
    "perimeter_distances",
]
