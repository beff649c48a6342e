import math

import pytest

from roughcam.geometry import P3, Interval
from roughcam.normray import NormRay


def _dist_to_segment(p: P3, a: P3, b: P3) -> float:
    v = b - a
    t = max(0.0, min(1.0, (p - a).dot(v) / v.length_sq()))
    return (p - (a + v * t)).length()


def _dist_to_plane(p: P3, a: P3, normal: P3) -> float:
    return abs((p - a).dot(normal)) / normal.length()


def test_point_slice_symmetric_about_point():
    ray = NormRay(2.0, Interval(0.0, 10.0))
    a = P3(0.5, -0.5, 5.0)
    res = ray.slice_point(a)
    assert res.lo < res.hi
    assert (res.lo + res.hi) / 2 == pytest.approx(a.z)
    assert (P3(0, 0, res.lo) - a).length() == pytest.approx(2.0)
    assert not res.lo_internal and not res.hi_internal


def test_point_slice_trimmed_to_ray():
    ray = NormRay(2.0, Interval(0.0, 4.0))
    res = ray.slice_point(P3(0.0, 0.0, 5.0))
    assert res.hi == 4.0
    assert (P3(0, 0, res.lo) - P3(0, 0, 5.0)).length() == pytest.approx(2.0)


def test_point_slice_misses():
    ray = NormRay(1.0, Interval(0.0, 10.0))
    assert ray.slice_point(P3(3.0, 0.0, 5.0)) is None
    assert ray.slice_point(P3(0.0, 0.0, 20.0)) is None


def test_edge_requires_ordered_endpoints():
    ray = NormRay(1.0, Interval(0.0, 10.0))
    with pytest.raises(ValueError):
        ray.slice_edge(P3(0, 0, 3), P3(0, 0, 1))


def test_vertical_edge_covers_its_span_internally():
    ray = NormRay(1.0, Interval(-10.0, 10.0))
    a, b = P3(0.5, 0.0, 1.0), P3(0.5, 0.0, 3.0)
    res = ray.slice_edge(a, b)
    assert (res.lo, res.hi) == (a.z, b.z)
    assert res.lo_internal and res.hi_internal


def test_horizontal_edge_touches_ball_at_ends():
    ray = NormRay(1.0, Interval(-10.0, 10.0))
    a, b = P3(-5.0, 0.5, 2.0), P3(5.0, 0.5, 2.0)
    res = ray.slice_edge(a, b)
    assert (res.lo + res.hi) / 2 == pytest.approx(a.z)
    assert _dist_to_segment(P3(0, 0, res.lo), a, b) == pytest.approx(1.0)
    assert _dist_to_segment(P3(0, 0, res.hi), a, b) == pytest.approx(1.0)


def test_slanted_edge_ends_lie_on_cylinder():
    ray = NormRay(1.0, Interval(-10.0, 10.0))
    a, b = P3(-1.0, 0.3, 0.0), P3(1.0, 0.3, 2.0)
    res = ray.slice_edge(a, b)
    assert res.lo < res.hi
    assert not res.lo_internal and not res.hi_internal
    assert _dist_to_segment(P3(0, 0, res.lo), a, b) == pytest.approx(1.0, abs=1e-9)
    assert _dist_to_segment(P3(0, 0, res.hi), a, b) == pytest.approx(1.0, abs=1e-9)
    mid = (res.lo + res.hi) / 2
    assert _dist_to_segment(P3(0, 0, mid), a, b) < 1.0


def test_edge_far_away_misses():
    ray = NormRay(1.0, Interval(-10.0, 10.0))
    assert ray.slice_edge(P3(5.0, 5.0, 0.0), P3(6.0, 5.0, 1.0)) is None


def test_degenerate_edge_gives_nothing():
    ray = NormRay(1.0, Interval(-10.0, 10.0))
    p = P3(0.1, 0.1, 1.0)
    assert ray.slice_edge(p, p) is None


def test_horizontal_triangle_offsets_by_radius():
    ray = NormRay(1.0, Interval(-10.0, 10.0))
    a, b1, b2 = P3(-3, -3, 2), P3(3, -3, 2), P3(0, 4, 2)
    xprod = (b1 - a).cross(b2 - a)
    res = ray.slice_triangle(a, b1, b2, xprod)
    assert res.lo == pytest.approx(a.z - 1.0)
    assert res.hi == pytest.approx(a.z + 1.0)
    assert not res.lo_internal and not res.hi_internal


def test_tilted_triangle_ends_at_radius_from_plane():
    ray = NormRay(1.0, Interval(-10.0, 10.0))
    a, b1, b2 = P3(-3, -3, 0.5), P3(3, -3, 3.5), P3(0, 4, 2)
    xprod = (b1 - a).cross(b2 - a)
    res = ray.slice_triangle(a, b1, b2, xprod)
    assert res.lo < res.hi
    assert _dist_to_plane(P3(0, 0, res.lo), a, xprod) == pytest.approx(1.0)
    assert _dist_to_plane(P3(0, 0, res.hi), a, xprod) == pytest.approx(1.0)


def test_triangle_result_trimmed():
    ray = NormRay(1.0, Interval(0.0, 2.5))
    a, b1, b2 = P3(-3, -3, 2), P3(3, -3, 2), P3(0, 4, 2)
    res = ray.slice_triangle(a, b1, b2, (b1 - a).cross(b2 - a))
    assert res.hi == 2.5
    assert res.lo == pytest.approx(a.z - 1.0)


def test_triangle_downward_normal_rejected():
    ray = NormRay(1.0, Interval(-10.0, 10.0))
    a, b1, b2 = P3(-3, -3, 2), P3(3, -3, 2), P3(0, 4, 2)
    with pytest.raises(ValueError):
        ray.slice_triangle(a, b2, b1, (b2 - a).cross(b1 - a))


def test_triangle_far_away_misses():
    ray = NormRay(1.0, Interval(-10.0, 10.0))
    a, b1, b2 = P3(10, 10, 2), P3(13, 10, 2), P3(11, 14, 2)
    assert ray.slice_triangle(a, b1, b2, (b1 - a).cross(b2 - a)) is None


def test_vertical_triangle_gives_nothing():
    ray = NormRay(1.0, Interval(-10.0, 10.0))
    a, b1, b2 = P3(-1, 0.2, 0), P3(1, 0.2, 0), P3(0, 0.2, 3)
    xprod = (b1 - a).cross(b2 - a)
    if xprod.z < 0:
        xprod = -xprod
    assert math.isclose(xprod.z, 0.0, abs_tol=0.0)
    assert ray.slice_triangle(a, b1, b2, xprod) is None