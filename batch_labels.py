#!/usr/bin/env python3
"""Place labels for every polygon in a long-form vertex table.

Input columns: polygon_id, ring, x, y. Ring 0 is the outer boundary and
rings >= 1 are holes; vertices keep their row order within a ring.
"""
import logging
import sys
from typing import List, Optional

import pandas as pd

from labelpoint import find_label
from models import LabelConfig
from validation import InvalidInput

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("polygon_id", "ring", "x", "y")
RESULT_COLUMNS = ["polygon_id", "x", "y", "distance", "iterations", "stop_reason"]


def _rings_of(group: pd.DataFrame):
    outer = []
    holes = []
    for ring_id, ring_df in group.groupby("ring", sort=True):
        pts = list(zip(ring_df["x"].astype(float), ring_df["y"].astype(float)))
        if int(ring_id) == 0:
            outer = pts
        else:
            holes.append(pts)
    return outer, holes


def label_table(df: pd.DataFrame, config: Optional[LabelConfig] = None) -> pd.DataFrame:
    """Return one label row per polygon_id, in first-appearance order.

    Polygons that fail validation are reported with ``stop_reason`` set to
    ``"invalid"`` and empty coordinates instead of aborting the batch.
    """

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required column(s): {', '.join(missing)}")

    rows: List[dict] = []
    for polygon_id, group in df.groupby("polygon_id", sort=False):
        outer, holes = _rings_of(group)
        try:
            result = find_label(outer, holes, config)
        except InvalidInput as exc:
            logger.warning("Skipping polygon %s: %s", polygon_id, exc)
            rows.append({"polygon_id": polygon_id, "stop_reason": "invalid"})
            continue
        point = result.point
        rows.append(
            {
                "polygon_id": polygon_id,
                "x": point.x if point is not None else None,
                "y": point.y if point is not None else None,
                "distance": result.distance,
                "iterations": result.iterations,
                "stop_reason": result.stop_reason,
            }
        )
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def main(csv_path, out_path=None):
    df = pd.read_csv(csv_path)
    labels = label_table(df)
    if out_path:
        labels.to_csv(out_path, index=False)
        print(f"Wrote {len(labels)} label(s) to {out_path}")
    else:
        print(labels.to_string(index=False))


if __name__ == "__main__":
    if len(sys.argv) not in (2, 3):
        print("Usage: batch_labels.py path/to/vertices.csv [path/to/labels.csv]")
        sys.exit(1)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    main(*sys.argv[1:])
