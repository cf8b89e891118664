"""CSV import/export helpers for sectioned polygon files.

One file stores meta settings, the outer ring and any number of holes.
Rows carry a ``section`` column: ``meta`` rows hold ``key``/``value``,
``outer`` rows hold ``x``/``y``, and ``hole`` rows additionally name the
``ring`` they belong to. An optional ``order`` column sorts vertices within
a ring; otherwise file order is kept.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from models import Point

MetaMapping = Dict[str, str]

FIELDS = ["section", "key", "value", "ring", "order", "x", "y"]


class CsvFormatError(ValueError):
    """Raised when the CSV contents are invalid."""


def _read_csv_rows(path: str) -> List[dict]:
    with open(path, newline="", encoding="utf-8") as handle:
        return list(csv.DictReader(handle))


def _get(row: dict, primary: str, *aliases: str) -> str:
    for key in (primary, *aliases):
        if key in row:
            value = (row.get(key) or "").strip()
            if value:
                return value
    return ""


def _parse_float(
    row: dict,
    field: str,
    *,
    context: str,
    row_number: int,
    aliases: Iterable[str] = (),
) -> float:
    raw = _get(row, field, *aliases)
    if raw == "":
        raise CsvFormatError(f"Missing value for '{field}' in {context} row {row_number}.")
    try:
        return float(raw)
    except ValueError as exc:
        raise CsvFormatError(
            f"Invalid float for '{field}' in {context} row {row_number}: {raw!r}"
        ) from exc


def _parse_optional_int(
    row: dict,
    field: str,
    *,
    context: str,
    row_number: int,
) -> Optional[int]:
    raw = _get(row, field)
    if raw == "":
        return None
    try:
        return int(float(raw))
    except ValueError as exc:
        raise CsvFormatError(
            f"Invalid integer for '{field}' in {context} row {row_number}: {raw!r}"
        ) from exc


def _parse_vertex(row: dict, *, context: str, row_number: int) -> Point:
    return Point(
        _parse_float(row, "x", context=context, row_number=row_number, aliases=("lon", "X")),
        _parse_float(row, "y", context=context, row_number=row_number, aliases=("lat", "Y")),
    )


def _ordered(entries: List[Tuple[Optional[int], int, Point]]) -> List[Point]:
    # explicit order first, then file position for rows without one
    entries.sort(key=lambda e: (e[0] is None, e[0] if e[0] is not None else 0, e[1]))
    return [point for _, _, point in entries]


def load_rings_csv(path: str) -> Tuple[MetaMapping, List[Point], List[List[Point]]]:
    """Load a sectioned polygon CSV, returning ``(meta, outer, holes)``."""

    rows = _read_csv_rows(path)
    if not rows:
        return {}, [], []

    has_section = any(_get(r, "section") for r in rows)
    if not has_section:
        raise CsvFormatError("Missing 'section' column; only the sectioned CSV is supported.")

    meta: MetaMapping = {}
    outer: List[Tuple[Optional[int], int, Point]] = []
    holes: Dict[str, List[Tuple[Optional[int], int, Point]]] = {}

    for index, row in enumerate(rows, start=2):
        section = _get(row, "section").lower()
        if not section:
            continue
        if section == "meta":
            key = _get(row, "key")
            if key:
                meta[key] = _get(row, "value")
            continue

        if section == "outer":
            order = _parse_optional_int(row, "order", context="outer", row_number=index)
            outer.append((order, index, _parse_vertex(row, context="outer", row_number=index)))
            continue

        if section in ("hole", "holes"):
            ring = _get(row, "ring", "hole")
            if not ring:
                raise CsvFormatError(f"Missing ring id in hole row {index}.")
            order = _parse_optional_int(row, "order", context="hole", row_number=index)
            holes.setdefault(ring, []).append(
                (order, index, _parse_vertex(row, context="hole", row_number=index))
            )
            continue

        raise CsvFormatError(f"Unknown section '{section}' in row {index}.")

    return meta, _ordered(outer), [_ordered(entries) for entries in holes.values()]


def write_rings_csv(
    path: str,
    meta: MetaMapping,
    outer: Sequence[Point],
    holes: Sequence[Sequence[Point]] = (),
) -> None:
    """Write the sectioned polygon layout."""

    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)

    with open(path_obj, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=FIELDS)
        writer.writeheader()

        for key, value in meta.items():
            writer.writerow({"section": "meta", "key": key, "value": value})

        for order, (x, y) in enumerate(outer, start=1):
            writer.writerow({"section": "outer", "order": order, "x": x, "y": y})

        for ring_index, hole in enumerate(holes, start=1):
            for order, (x, y) in enumerate(hole, start=1):
                writer.writerow(
                    {"section": "hole", "ring": ring_index, "order": order, "x": x, "y": y}
                )


__all__ = [
    "CsvFormatError",
    "FIELDS",
    "load_rings_csv",
    "write_rings_csv",
]
