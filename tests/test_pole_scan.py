import numpy as np
import pytest

from geometry import is_inside
from models import GRID_RESOLUTION, Point, Region, ScanResult
from pole_scan import candidate_mask, lattice, pole_scan

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]
CENTER_HOLE = [(4, 4), (6, 4), (6, 6), (4, 6)]


def test_lattice_is_fixed_resolution_and_excludes_max_edge():
    xs, ys = lattice(Region(0, 0, 24, 48))
    assert xs.shape == (GRID_RESOLUTION * GRID_RESOLUTION,)
    assert xs.min() == 0 and ys.min() == 0
    assert xs.max() == pytest.approx(23.0)
    assert ys.max() == pytest.approx(46.0)
    # y-major ordering: the first row sweeps x at y_min
    assert np.all(ys[:GRID_RESOLUTION] == 0)
    assert xs[1] == pytest.approx(1.0)


def test_lattice_resolution_does_not_depend_on_region_size():
    small = lattice(Region(0, 0, 1e-6, 1e-6))[0]
    large = lattice(Region(-1e6, -1e6, 1e6, 1e6))[0]
    assert small.shape == large.shape


def test_candidate_mask_excludes_holes():
    xs = np.array([5.0, 2.0, 12.0])
    ys = np.array([5.0, 2.0, 5.0])
    assert candidate_mask(xs, ys, SQUARE, [CENTER_HOLE]).tolist() == [False, True, False]


def test_square_scan_finds_center():
    result = pole_scan(Region(0, 0, 10, 10), SQUARE)
    assert result.found
    assert result.point.x == pytest.approx(5.0)
    assert result.point.y == pytest.approx(5.0)
    assert result.distance == pytest.approx(5.0)


def test_scan_avoids_hole():
    result = pole_scan(Region(0, 0, 10, 10), SQUARE, [CENTER_HOLE])
    assert result.found
    assert is_inside(result.point, SQUARE)
    assert not is_inside(result.point, CENTER_HOLE)
    assert 0 < result.distance < 5.0


def test_scan_is_deterministic():
    region = Region(0, 0, 10, 10)
    first = pole_scan(region, SQUARE, [CENTER_HOLE])
    second = pole_scan(region, SQUARE, [CENTER_HOLE])
    assert first == second


def test_first_maximum_wins_ties():
    # the hole makes the four corner pockets symmetric; the row-major sweep
    # reaches the lower pockets first
    result = pole_scan(Region(0, 0, 10, 10), SQUARE, [CENTER_HOLE])
    assert result.point.y < 5.0


def test_region_outside_polygon_is_not_found():
    result = pole_scan(Region(20, 20, 30, 30), SQUARE)
    assert not result.found
    assert result.point is None
    assert result == ScanResult.not_found()


def test_boundary_only_samples_do_not_qualify():
    # the region collapses onto the polygon's left edge
    result = pole_scan(Region(0, 0, 0, 10), SQUARE)
    assert not result.found


def test_hole_covering_everything_is_not_found():
    cover = [(-1, -1), (11, -1), (11, 11), (-1, 11)]
    assert not pole_scan(Region(0, 0, 10, 10), SQUARE, [cover]).found


def test_accepts_point_rings():
    ring = [Point(*p) for p in SQUARE]
    assert pole_scan(Region(0, 0, 10, 10), ring) == pole_scan(Region(0, 0, 10, 10), SQUARE)
