"""Intersection of a vertical ray with a ball swept over points, edges and triangles.

The ray runs along the z axis between ``zrg.lo`` and ``zrg.hi``; the geometry
is assumed already transformed so that the ray lies on the axis.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from roughcam.geometry import P3, UNIT_INTERVAL, Interval

__all__ = ["BallSliceResult", "NormRay"]


@dataclass(frozen=True)
class BallSliceResult:
    """The part of the ray covered by the swept ball.

    ``lo_internal`` and ``hi_internal`` say the end lies on a flat end of a
    cylinder, which must be covered by a ball from some other element.
    """

    lo: float
    lo_internal: bool
    hi: float
    hi_internal: bool


def _pos_sqrt(value: float) -> float:
    return math.sqrt(value) if value > 0.0 else 0.0


@dataclass(frozen=True)
class _PrismEdge:
    start: P3
    end: P3
    zp: float
    np: float
    pn_start: float
    pn_end: float


class NormRay:
    """A vertical ray on the z axis slicing geometry with a ball of given radius."""

    def __init__(self, radball: float, zrg: Interval) -> None:
        self.zrg = zrg
        self.radball = radball
        self.radballsq = radball * radball

    def _trim(self, lo: float, lo_internal: bool, hi: float, hi_internal: bool) -> BallSliceResult | None:
        if lo < self.zrg.lo:
            lo, lo_internal = self.zrg.lo, False
        if hi > self.zrg.hi:
            hi, hi_internal = self.zrg.hi, False
        if lo > hi:
            return None
        return BallSliceResult(lo, lo_internal, hi, hi_internal)

    def slice_point(self, a: P3) -> BallSliceResult | None:
        """Range of the ray within the ball around a single point."""
        if self.zrg.distance(a.z) >= self.radball:
            return None
        ausq = self.radballsq - a.flat().length_sq()
        if ausq < 0.0:
            return None
        au = math.sqrt(ausq)
        return self._trim(a.z - au, False, a.z + au, False)

    def slice_edge(self, a: P3, b: P3) -> BallSliceResult | None:
        """Range of the ray within the cylinder of the ball around segment a-b.

        The segment must be given with ``a.z <= b.z``.
        """
        if a.z > b.z:
            raise ValueError("edge endpoints must be ordered by increasing z")
        r, rsq = self.radball, self.radballsq
        if b.z + r < self.zrg.lo or a.z - r > self.zrg.hi:
            return None

        v = b - a
        af, vf = a.flat(), v.flat()
        vfsq = vf.length_sq()
        vzsq = v.z * v.z
        vsq = vfsq + vzsq
        if vsq == 0.0:
            return None

        af_dot_vf = af.dot(vf)
        a_dot_v = af_dot_vf + a.z * v.z
        a_dot_pv = af.dot(vf.aperp())
        if a_dot_pv * a_dot_pv / vsq >= rsq:
            return None

        # horizontal edge
        if abs(v.z) < 1e-8:
            if vfsq == 0.0:
                return None
            lam = -af_dot_vf / vfsq
            if not UNIT_INTERVAL.contains(lam):
                return None
            la = af + vf * lam
            ausq = rsq - la.length_sq()
            if ausq < 0.0:
                return None
            au = math.sqrt(ausq)
            return self._trim(a.z - au, False, a.z + au, False)

        # vertical edge: the ray only passes through the flat end faces
        if vfsq < 1e-20:
            if af.length_sq() >= rsq:
                return None
            return self._trim(a.z, True, b.z, True)

        qa = vsq * vfsq
        qb2 = af_dot_vf * vsq
        qc = -vzsq * rsq + vzsq * a.length_sq() - 2 * a.z * v.z * a_dot_v + a_dot_v * a_dot_v
        lamsq = qb2 * qb2 - qa * qc
        if lamsq < 0.0:
            return None
        lamr = math.sqrt(lamsq) / qa
        lammid = -af_dot_vf / vfsq

        llam = Interval(lammid - lamr, lammid + lamr).intersection(UNIT_INTERVAL)
        if llam is None:
            return None

        lo_internal = llam.lo == 0.0
        if not lo_internal:
            la = af + vf * llam.lo
            lo = a.z + v.z * llam.lo - _pos_sqrt(rsq - la.length_sq())
        else:
            lo = a_dot_v / v.z

        hi_internal = llam.hi == 1.0
        if not hi_internal:
            la = af + vf * llam.hi
            hi = a.z + v.z * llam.hi + _pos_sqrt(rsq - la.length_sq())
        else:
            hi = (a_dot_v + vsq) / v.z

        return self._trim(lo, lo_internal, hi, hi_internal)

    def slice_triangle(self, a: P3, b1: P3, b2: P3, xprod: P3) -> BallSliceResult | None:
        """Range of the ray within the slab of the ball offset from triangle faces.

        ``xprod`` is the cross product of the triangle's sides, with a
        non-negative z component. Vertical and degenerate triangles give
        nothing; their edges carry the contact.
        """
        if xprod.z < 0.0:
            raise ValueError("triangle normal must point upwards")
        xlen = xprod.length()
        if xlen == 0.0 or xprod.z == 0.0:
            return None
        r = self.radball

        norm = xprod / xlen
        rnorm = norm * r
        zlo = min(a.z, b1.z, b2.z)
        zhi = max(a.z, b1.z, b2.z)
        if zhi + r < self.zrg.lo or zlo - r > self.zrg.hi:
            return None

        pnorm = norm.flat().aperp()
        rnf = rnorm.flat()
        pn = {id(p): pnorm.dot(p.flat()) for p in (a, b1, b2)}

        def edge(start: P3, end: P3) -> _PrismEdge:
            perp = (end.flat() - start.flat()).cperp()
            return _PrismEdge(
                start, end, perp.dot(start.flat()), perp.dot(rnf),
                pnorm.dot(start.flat()), pnorm.dot(end.flat()),
            )

        del pn
        edges = (edge(b1, b2), edge(b2, a), edge(a, b1))
        pn_opposite = (edges[1].pn_end, edges[2].pn_end, edges[0].pn_end)

        # pick out which edge is in the middle of the pentagon outline
        top = edges[0].np > 0.0
        if (edges[2].np > 0.0) == top:
            swa = 1
        elif top == (edges[1].np > 0.0):
            swa = 2
        else:
            swa = 0
            top = edges[1].np > 0.0
        tsign = 1 if top else -1

        def face_cross(i: int) -> float:
            e = edges[i]
            rnfac = -e.zp / e.np
            fac = -e.pn_start / (e.pn_end - e.pn_start)
            return e.start.z + rnorm.z * rnfac + (e.end.z - e.start.z) * fac

        internal_near = False
        for i, e in enumerate(edges):
            if e.zp + e.np * tsign < 0.0:
                if swa != i:
                    return None
                if e.zp - e.np * tsign < 0.0:
                    return None
                if (e.pn_start < 0.0 and e.pn_end < 0.0) or (e.pn_start > 0.0 and e.pn_end > 0.0):
                    return None
                internal_near = True

        a_dot_n = a.dot(norm)
        if not internal_near:
            res_near = (a_dot_n + r * tsign) / norm.z
        else:
            res_near = face_cross(swa)

        tsigno = -tsign
        internal_far = any(
            swa != i and e.zp + e.np * tsigno < 0.0 for i, e in enumerate(edges)
        )
        if internal_far:
            swas = (swa + 1) % 3 if pn_opposite[swa] * tsigno < 0.0 else (swa + 2) % 3
            res_far = face_cross(swas)
        else:
            res_far = (a_dot_n + r * tsigno) / norm.z

        if top:
            return self._trim(res_far, internal_far, res_near, internal_near)
        return self._trim(res_near, internal_near, res_far, internal_far)