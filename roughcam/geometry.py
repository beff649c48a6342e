"""Small 2D/3D vector and interval types used by the machining algorithms."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TypeVar

__all__ = ["P2", "P3", "Interval", "UNIT_INTERVAL", "along"]


@dataclass(frozen=True, slots=True)
class P2:
    """A point or vector in the plane."""

    u: float
    v: float

    def __add__(self, other: P2) -> P2:
        return P2(self.u + other.u, self.v + other.v)

    def __sub__(self, other: P2) -> P2:
        return P2(self.u - other.u, self.v - other.v)

    def __mul__(self, factor: float) -> P2:
        return P2(self.u * factor, self.v * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> P2:
        return P2(self.u / divisor, self.v / divisor)

    def __neg__(self) -> P2:
        return P2(-self.u, -self.v)

    def length(self) -> float:
        return math.hypot(self.u, self.v)

    def length_sq(self) -> float:
        return self.u * self.u + self.v * self.v

    def arg(self) -> float:
        """Angle of the vector in radians, in the range [0, 2*pi)."""
        angle = math.atan2(self.v, self.u)
        if angle < 0.0:
            angle += 2.0 * math.pi
        return angle

    def darg(self) -> float:
        """Diamond angle: a cheap monotone substitute for the angle, in [0, 4).

        The positive u axis maps to 0, positive v to 1, negative u to 2
        and negative v to 3.
        """
        u, v = self.u, self.v
        if u == 0.0 and v == 0.0:
            raise ValueError("diamond angle of a zero vector is undefined")
        if v >= 0.0:
            if u >= 0.0:
                return v / (u + v)
            return 1.0 + (-u) / (v - u)
        if u <= 0.0:
            return 2.0 + (-v) / (-u - v)
        return 3.0 + u / (u - v)

    def aperp(self) -> P2:
        """The vector turned a quarter turn anticlockwise."""
        return P2(-self.v, self.u)

    def cperp(self) -> P2:
        """The vector turned a quarter turn clockwise."""
        return P2(self.v, -self.u)

    def dot(self, other: P2) -> float:
        return self.u * other.u + self.v * other.v


@dataclass(frozen=True, slots=True)
class P3:
    """A point or vector in space."""

    x: float
    y: float
    z: float

    def __add__(self, other: P3) -> P3:
        return P3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: P3) -> P3:
        return P3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> P3:
        return P3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> P3:
        return P3(self.x / divisor, self.y / divisor, self.z / divisor)

    def __neg__(self) -> P3:
        return P3(-self.x, -self.y, -self.z)

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def dot(self, other: P3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: P3) -> P3:
        return P3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def flat(self) -> P2:
        """Projection onto the xy plane."""
        return P2(self.x, self.y)

    def with_z(self, z: float) -> P3:
        return P3(self.x, self.y, z)


@dataclass(frozen=True, slots=True)
class Interval:
    """A closed interval [lo, hi] of the real line."""

    lo: float
    hi: float

    def __post_init__(self) -> None:
        if self.lo > self.hi:
            raise ValueError(f"interval ends out of order: {self.lo} > {self.hi}")

    def contains(self, value: float) -> bool:
        return self.lo <= value <= self.hi

    def intersection(self, other: Interval) -> Interval | None:
        """The common part of two intervals, or None if they are disjoint."""
        lo = max(self.lo, other.lo)
        hi = min(self.hi, other.hi)
        if lo > hi:
            return None
        return Interval(lo, hi)

    def inflate(self, amount: float) -> Interval:
        return Interval(self.lo - amount, self.hi + amount)

    def distance(self, value: float) -> float:
        """Distance from value to the nearest point of the interval."""
        if value < self.lo:
            return self.lo - value
        if value > self.hi:
            return value - self.hi
        return 0.0

    def length(self) -> float:
        return self.hi - self.lo

    def scaled(self, factor: float) -> Interval:
        """Both ends multiplied by factor, reordered if the factor is negative."""
        a, b = self.lo * factor, self.hi * factor
        return Interval(min(a, b), max(a, b))

    def absorb(self, value: float) -> Interval:
        """The smallest interval holding this one and value."""
        return Interval(min(self.lo, value), max(self.hi, value))


UNIT_INTERVAL = Interval(0.0, 1.0)

_T = TypeVar("_T", float, P2, P3)


def along(lam: float, a: _T, b: _T) -> _T:
    """The point a fraction lam of the way from a to b."""
    return a + (b - a) * lam