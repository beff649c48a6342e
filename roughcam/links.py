"""Linking motions between cuts: retracts, lead-off curls and smooth arc links."""

from __future__ import annotations

import math
from collections.abc import Sequence

from roughcam.geometry import P2, P3, along
from roughcam.params import MachineParams

__all__ = ["build_retract", "build_curl", "build_link", "build_link_z"]

_TWO_PI = 2.0 * math.pi
_UNIT_TOL = 1e-6
_ZERO = P2(0.0, 0.0)


def _check_unit(vec: P2, name: str) -> None:
    if abs(vec.length() - 1.0) > _UNIT_TOL:
        raise ValueError(f"{name} must be a unit vector, got length {vec.length()}")


def _on_circle(centre: P2, angle: float, radius: float) -> P2:
    return centre - P2(math.cos(angle), math.sin(angle)) * radius


def _wrapped_arg(vec: P2) -> float:
    angle = vec.arg()
    if angle > _TWO_PI:
        angle -= _TWO_PI
    return angle


def _lift(p: P2, z: float) -> P3:
    return P3(p.u, p.v, z)


def build_retract(pts: P3, pte: P3, params: MachineParams) -> list[P3]:
    """Move up from pts to the retract height, across, and down to pte."""
    height = params.retractzheight
    if not (height > pts.z and height > pte.z):
        raise ValueError("retract height must lie above both ends of the retract")
    return [pts, pts.with_z(height), pte.with_z(height), pte]


def build_curl(pts: P2, dirs: P2, params: MachineParams, curl_in: bool) -> list[P2]:
    """A short arc of the lead-off radius, turning left, ending (or starting) at pts.

    With ``curl_in`` the arc finishes at pts arriving along dirs; otherwise
    it starts at pts leaving along dirs.
    """
    _check_unit(dirs, "direction")
    rad = params.leadoffrad
    step = params.leadoffsamplestep / rad

    centre = pts + dirs.aperp() * rad
    span = params.leadofflen / rad
    if curl_in:
        end = (centre - pts).arg()
        angle = end - span
    else:
        angle = (centre - pts).arg()
        end = angle + span

    path = [_on_circle(centre, angle, rad)]
    angle += step
    while angle <= end:
        path.append(_on_circle(centre, angle, rad))
        angle += step
    path.append(_on_circle(centre, end, rad))
    return path


def build_link(pts: P2, dirs: P2, pte: P2, dire: P2, params: MachineParams) -> list[P2]:
    """Link pts to pte by an arc, a tangent line and a second arc.

    Both arcs have the lead-off radius and turn left of the given
    directions. A zero ``dire`` drops the second arc and runs the tangent
    line straight into pte.
    """
    _check_unit(dirs, "start direction")
    if dire != _ZERO:
        _check_unit(dire, "end direction")
    rad = params.leadoffrad
    step = params.leadoffsamplestep / rad

    cts = pts + dirs.aperp() * rad
    cte = pte + dire.aperp() * rad

    tdir = cte - cts
    tdirlen = tdir.length()
    if tdirlen == 0.0:
        raise ValueError("link arcs share a centre; no tangent line between them")
    tdirp = tdir.aperp() * rad / tdirlen

    tps = cts - tdirp
    tpe = pte if dire == _ZERO else cte - tdirp

    path: list[P2] = []

    angle = _wrapped_arg(cts - pts)
    target = _wrapped_arg(cts - tps)
    if angle > target:
        target += _TWO_PI
    while angle <= target:
        path.append(_on_circle(cts, angle, rad))
        angle += step
    if path[-1] != tps:
        path.append(tps)

    if dire != _ZERO:
        angle = _wrapped_arg(cte - tpe)
        target = _wrapped_arg(cte - pte)
        if angle > target:
            target += _TWO_PI
        while angle <= target:
            path.append(_on_circle(cte, angle, rad))
            angle += step
    if path[-1] != pte:
        path.append(pte)
    return path


def _segment(link2d: Sequence[P2], i: int, j: int) -> float:
    return (link2d[i] - link2d[j]).length()


def build_link_z(link2d: Sequence[P2], z: float, params: MachineParams) -> list[P3]:
    """Lift a planar link into space, ramping up by leadoffdz at each end.

    The link starts and ends at height z and runs at z + leadoffdz between
    the two ramps.
    """
    n = len(link2d)
    if n < 2:
        raise ValueError("a link needs at least two points")
    total = sum(_segment(link2d, i, i - 1) for i in range(1, n))
    if total == 0.0:
        raise ValueError("a link must have non-zero length")

    dzmax = params.leadoffdz
    leadofflen = params.leadofflen
    if total < 2.0 * params.leadofflen:
        leadofflen = 0.5 * total

    start = [_lift(link2d[0], z)]
    ixstart = 1
    length = 0.0
    while ixstart < n:
        length += _segment(link2d, ixstart, ixstart - 1)
        if length > leadofflen:
            break
        start.append(_lift(link2d[ixstart], z + length * dzmax / leadofflen))
        ixstart += 1
    if ixstart < n:
        length += _segment(link2d, ixstart, ixstart - 1)
        dz = length * dzmax / leadofflen
        pt = along(dzmax / dz, link2d[ixstart - 1], link2d[ixstart])
        start.append(_lift(pt, z + dzmax))

    end = [_lift(link2d[-1], z)]
    ixend = n - 2
    length = 0.0
    while ixend > ixstart:
        length += _segment(link2d, ixend, ixend + 1)
        if length > leadofflen:
            break
        end.append(_lift(link2d[ixend], z + length * dzmax / leadofflen))
        ixend -= 1
    if ixend >= ixstart:
        length += _segment(link2d, ixend, ixend + 1)
        dz = length * dzmax / leadofflen
        pt = along(dzmax / dz, link2d[ixend + 1], link2d[ixend])
        end.append(_lift(pt, z + dzmax))

    middle = [_lift(link2d[i], z + dzmax) for i in range(ixstart, ixend + 1)]
    return start + middle + end[::-1]