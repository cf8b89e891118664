"""Validation helpers for polygon rings and label configuration."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from models import LabelConfig, Point, as_point

MIN_RING_VERTICES = 3


class InvalidInput(ValueError):
    """Raised when a polygon or configuration cannot be used for placement."""


def _meta_number(lowered: Dict[str, str], key: str) -> float:
    raw = lowered[key]
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"Invalid number for meta key '{key}': {raw!r}") from exc


def apply_meta_to_config(meta: Dict[str, str], cfg: LabelConfig) -> LabelConfig:
    """Apply metadata overrides from the CSV to a :class:`LabelConfig`."""

    lowered = {k.lower(): v for k, v in meta.items()}

    if "precision" in lowered:
        cfg.precision = _meta_number(lowered, "precision")

    if "max_iterations" in lowered:
        cfg.max_iterations = int(_meta_number(lowered, "max_iterations"))

    return cfg


def _append_error(errors: List[str], message: str) -> None:
    if message:
        errors.append(message)


def _coerce_ring(values: Iterable, name: str, errors: List[str]) -> List[Point]:
    ring: List[Point] = []
    for index, value in enumerate(values):
        try:
            ring.append(as_point(value))
        except (TypeError, ValueError) as exc:
            _append_error(errors, f"{name} vertex {index} is not an (x, y) pair: {value!r} ({exc}).")
    return ring


def validate_config(cfg: LabelConfig) -> LabelConfig:
    if cfg.max_iterations <= 0:
        raise InvalidInput(f"max_iterations must be positive, got {cfg.max_iterations}.")
    return cfg


def validate_rings(
    points: Iterable,
    holes: Optional[Iterable[Iterable]] = None,
) -> Tuple[List[Point], List[List[Point]]]:
    """Coerce the outer ring and holes to :class:`Point` lists.

    Raises
    ------
    InvalidInput
        If any ring has fewer than three vertices or holds a value that is
        not an (x, y) pair. The message aggregates every detected issue.
    """

    errors: List[str] = []

    outer = _coerce_ring(points, "Outer ring", errors)
    if len(outer) < MIN_RING_VERTICES:
        _append_error(
            errors,
            f"Outer ring needs at least {MIN_RING_VERTICES} vertices, got {len(outer)}.",
        )

    rings: List[List[Point]] = []
    for index, hole in enumerate(holes or []):
        ring = _coerce_ring(hole, f"Hole {index}", errors)
        if len(ring) < MIN_RING_VERTICES:
            _append_error(
                errors,
                f"Hole {index} needs at least {MIN_RING_VERTICES} vertices, got {len(ring)}.",
            )
        rings.append(ring)

    if errors:
        raise InvalidInput("\n".join(errors))

    return outer, rings


__all__ = [
    "InvalidInput",
    "MIN_RING_VERTICES",
    "apply_meta_to_config",
    "validate_config",
    "validate_rings",
]
