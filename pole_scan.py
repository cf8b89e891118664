"""Fixed-resolution lattice search for the best label candidate in a region."""
from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from geometry import inside_mask, perimeter_distances
from models import GRID_RESOLUTION, Point, Region, Ring, ScanResult


def lattice(region: Region) -> Tuple[np.ndarray, np.ndarray]:
    """Return flattened sample coordinates, y-major (each row sweeps x).

    The region is split into ``GRID_RESOLUTION`` steps per axis; samples sit
    on the lower/left edge of each step, so ``x_max``/``y_max`` themselves are
    never sampled.
    """

    steps = np.arange(GRID_RESOLUTION, dtype=float)
    xs = region.x_min + steps * (region.width / GRID_RESOLUTION)
    ys = region.y_min + steps * (region.height / GRID_RESOLUTION)
    grid_x, grid_y = np.meshgrid(xs, ys)
    return grid_x.ravel(), grid_y.ravel()


def candidate_mask(
    xs: np.ndarray, ys: np.ndarray, outer: Ring, holes: Sequence[Ring] = ()
) -> np.ndarray:
    """Samples inside the outer ring and outside every hole."""

    mask = inside_mask(xs, ys, outer)
    for hole in holes:
        if not mask.any():
            break
        mask &= ~inside_mask(xs, ys, hole)
    return mask


def pole_scan(region: Region, outer: Ring, holes: Sequence[Ring] = ()) -> ScanResult:
    """Return the lattice sample farthest from every boundary edge.

    Candidates are scored against the union of the outer and hole edges.
    Samples are visited row by row and only a strictly greater score replaces
    the current best, so the first of several equal maxima wins. A score of
    zero never qualifies.
    """

    xs, ys = lattice(region)
    mask = candidate_mask(xs, ys, outer, holes)
    if not mask.any():
        return ScanResult.not_found()

    rings = [outer, *holes]
    scores = np.full(xs.shape, -np.inf)
    scores[mask] = perimeter_distances(xs[mask], ys[mask], rings)

    best = int(np.argmax(scores))  # first occurrence of the maximum
    if not scores[best] > 0.0:
        return ScanResult.not_found()
    return ScanResult(point=Point(float(xs[best]), float(ys[best])), distance=float(scores[best]))


__all__ = ["candidate_mask", "lattice", "pole_scan"]
