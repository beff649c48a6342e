"""Slicing a straight line through a triangulated surface to find inside spans."""

from __future__ import annotations

from roughcam.geometry import P2, P3, Interval

__all__ = ["LineSlicer"]


class LineSlicer:
    """Collects the crossings of the line through p0 and p1 with triangles.

    Crossings are recorded as distances along the line's unit direction, and
    pairs of consecutive crossings are the spans inside a closed surface.
    """

    def __init__(self, p0: P3, p1: P3) -> None:
        length = (p1 - p0).length()
        if length == 0.0:
            raise ValueError("slice line needs two distinct points")
        self.p0 = p0
        self.p1 = p1
        self.direction = (p1 - p0) / length
        d = self.direction

        self.p0p = p0 - d * d.dot(p0)

        perp1 = P3(0.0, 0.0, 1.0).cross(d)
        if perp1.length_sq() < 0.001:
            seed = P3(1.0, 0.0, 0.0) if abs(d.x) < abs(d.y) else P3(0.0, 1.0, 0.0)
            perp1 = seed.cross(d)
        self.perp1 = perp1
        self.perp2 = perp1.cross(d)
        self.axis = P2(self.perp1.dot(p0), self.perp2.dot(p1))
        self.intersections: list[float] = []

    def _project(self, p: P3) -> P2:
        return P2(self.perp1.dot(p), self.perp2.dot(p))

    def slice_triangle(self, a: P3, b1: P3, b2: P3) -> None:
        """Record where the line passes strictly through the triangle's interior."""
        ta = self._project(a)
        tv1 = self._project(b1) - ta
        tv2 = self._project(b2) - ta
        m = self.axis - ta

        det = tv1.u * tv2.v - tv1.v * tv2.u
        if det == 0.0:
            return
        l1 = (tv2.v * m.u - tv2.u * m.v) / det
        if l1 <= 0.0:
            return
        l2 = (-tv1.v * m.u + tv1.u * m.v) / det
        if l2 <= 0.0 or l1 + l2 >= 1.0:
            return

        p = a * (1.0 - l1 - l2) + b1 * l1 + b2 * l2
        self.intersections.append(self.direction.dot(p))

    def convert(self, xrg: Interval, yrg: Interval, zrg: Interval) -> list[Interval]:
        """Pair the sorted crossings into spans, clipped to the segment and the box."""
        d = self.direction
        rg: Interval | None = Interval(d.dot(self.p0), d.dot(self.p1))
        for component, box in ((d.x, xrg), (d.y, yrg), (d.z, zrg)):
            if component != 0.0:
                rg = rg.intersection(box.scaled(1.0 / component))
                if rg is None:
                    return []

        self.intersections.sort()
        spans = []
        for lo, hi in zip(self.intersections[0::2], self.intersections[1::2]):
            span = Interval(lo, hi).intersection(rg)
            if span is not None:
                spans.append(span)
        return spans