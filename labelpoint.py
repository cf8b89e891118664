#!/usr/bin/env python3
"""Label anchor placement via an iterative pole-of-inaccessibility search.

The outer ring's bounding box is scanned once on a fixed lattice to seed a
candidate; while the search region is larger than the requested precision
the region is narrowed around the latest best point and scanned again.
"""
from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional

from models import GRID_RESOLUTION, LabelConfig, LabelResult, Point, Region
from geometry import bounding_box
from pole_scan import pole_scan
from io_rings_csv import load_rings_csv
from validation import apply_meta_to_config, validate_config, validate_rings

logger = logging.getLogger(__name__)


def find_label(
    points: Iterable,
    holes: Optional[Iterable[Iterable]] = None,
    config: Optional[LabelConfig] = None,
) -> LabelResult:
    """Run the seed scan and the refinement loop, reporting how it stopped."""

    outer, rings = validate_rings(points, holes)
    cfg = validate_config(config if config is not None else LabelConfig())

    # holes never widen the initial search box
    region = bounding_box(outer)
    best = pole_scan(region, outer, rings)
    if not best.found:
        logger.info("No lattice sample inside the polygon for region %s", region)
        return LabelResult(None, 0.0, 0, region, "not_found")

    if cfg.precision <= 0:
        return LabelResult(best.point, best.distance, 0, region, "seed_only")

    area = region.area
    iterations = 0
    found_in = region
    stop_reason = "converged"
    while area > cfg.precision:
        if iterations >= cfg.max_iterations:
            logger.warning(
                "Stopped refining after %d iterations (area %.6g > precision %.6g)",
                iterations, area, cfg.precision,
            )
            stop_reason = "max_iterations"
            break
        scan = pole_scan(region, outer, rings)
        iterations += 1
        if not scan.found:
            logger.info("Refinement found no candidate in %s; keeping %s", region, best.point)
            region = found_in
            stop_reason = "no_candidate"
            break
        best = scan
        found_in = region
        dx = region.width / GRID_RESOLUTION
        dy = region.height / GRID_RESOLUTION
        region = Region.around(best.point, dx, dy)
        area = dx * dy
        logger.debug(
            "iteration %d: best=(%.6g, %.6g) distance=%.6g area=%.6g",
            iterations, best.point.x, best.point.y, best.distance, area,
        )

    return LabelResult(best.point, best.distance, iterations, region, stop_reason)


def find(
    points: Iterable,
    holes: Optional[Iterable[Iterable]] = None,
    precision: Optional[float] = 1.0,
    max_iterations: Optional[int] = None,
) -> Optional[Point]:
    """Return the label anchor for ``points``/``holes``, or None if none qualifies.

    ``precision`` is the region area (squared coordinate units) below which
    refinement stops; zero or negative means seed scan only.
    """

    cfg = LabelConfig()
    if precision is not None:
        cfg.precision = float(precision)
    if max_iterations is not None:
        cfg.max_iterations = int(max_iterations)
    return find_label(points, holes, cfg).point


def main(csv_path: str) -> int:
    meta, outer, holes = load_rings_csv(csv_path)
    cfg = apply_meta_to_config(meta, LabelConfig())
    result = find_label(outer, holes, cfg)
    if not result.found:
        print("No label point found.")
        return 1
    print(
        f"x={result.point.x:.6f}, y={result.point.y:.6f}, distance={result.distance:.6f}, "
        f"iterations={result.iterations}, stop={result.stop_reason}"
    )
    return 0


__all__ = ["find", "find_label"]


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: labelpoint.py path/to/shape.csv")
        sys.exit(1)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(main(sys.argv[1]))
