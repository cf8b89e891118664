"""Core data models for label point placement."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Literal, NamedTuple, Optional, Sequence

# Lattice subdivisions per axis. The scanner samples GRID_RESOLUTION x
# GRID_RESOLUTION points and the refinement shrink factor uses the same value.
GRID_RESOLUTION = 24


class Point(NamedTuple):
    """Immutable 2D coordinate pair."""

    x: float
    y: float


Ring = Sequence[Point]


def as_point(value) -> Point:
    """Coerce a ``Point``, an ``(x, y)`` pair or an object with ``.x``/``.y``."""

    if isinstance(value, Point):
        return value
    if isinstance(value, (str, bytes)):
        raise TypeError(f"Expected an (x, y) pair, got {type(value).__name__} {value!r}.")
    if hasattr(value, "x") and hasattr(value, "y"):
        return Point(float(value.x), float(value.y))
    x, y = value
    return Point(float(x), float(y))


def as_ring(values: Iterable) -> List[Point]:
    return [as_point(v) for v in values]


@dataclass(frozen=True)
class Region:
    """Axis-aligned scanning bounds."""

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def area(self) -> float:
        return self.width * self.height

    @classmethod
    def around(cls, center: Point, dx: float, dy: float) -> "Region":
        """Return the box spanning ``dx``/``dy`` on each side of ``center``."""

        return cls(center.x - dx, center.y - dy, center.x + dx, center.y + dy)


@dataclass(frozen=True)
class ScanResult:
    """Outcome of one lattice scan; ``point`` is None when nothing qualified."""

    point: Optional[Point]
    distance: float = 0.0

    @property
    def found(self) -> bool:
        return self.point is not None

    @classmethod
    def not_found(cls) -> "ScanResult":
        return cls(point=None, distance=0.0)


@dataclass
class LabelConfig:
    """Tunables for the refinement loop."""

    precision: float = 1.0  # target region area, in squared coordinate units
    max_iterations: int = 1000  # refinement scans after the seed


StopReason = Literal["seed_only", "converged", "no_candidate", "max_iterations", "not_found"]


@dataclass(frozen=True)
class LabelResult:
    """Detailed outcome of :func:`labelpoint.find_label`.

    ``region`` is the window the next refinement step would scan. When a
    refinement scan comes up empty it is the last region that produced
    ``point`` instead.
    """

    point: Optional[Point]
    distance: float
    iterations: int
    region: Region
    stop_reason: StopReason

    @property
    def found(self) -> bool:
        return self.point is not None


__all__ = [
    "GRID_RESOLUTION",
    "LabelConfig",
    "LabelResult",
    "Point",
    "Region",
    "Ring",
    "ScanResult",
    "StopReason",
    "as_point",
    "as_ring",
]
