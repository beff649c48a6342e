"""Shape of a cutting tool with a flat bottom and a rounded corner."""

from __future__ import annotations

import math

from roughcam.geometry import P3

__all__ = ["ToolShape"]


class ToolShape:
    """A tool of flat radius plus a corner radius, sampled in horizontal slices."""

    def __init__(self, flatrad: float, cornerrad: float, shaftlength: float, sliceheight: float) -> None:
        if sliceheight <= 0.0:
            raise ValueError("slice height must be positive")
        self.flatrad = flatrad
        self.cornerrad = cornerrad
        self.shaftlength = shaftlength
        self.sliceheight = sliceheight
        self.ntoolslices = int((cornerrad + sliceheight) / sliceheight)
        self.nang = 31

    def rad_at_height(self, z: float) -> float:
        """Radius of the tool at height z above its tip."""
        if z == 0.0:
            return self.flatrad
        if z < 0.0:
            raise ValueError("height must not be below the tool tip")
        zbc = self.cornerrad - z
        if zbc <= 0.0:
            return self.flatrad + self.cornerrad
        crsq = self.cornerrad * self.cornerrad - zbc * zbc
        return self.flatrad + (math.sqrt(crsq) if crsq > 0.0 else 0.0)

    def slices(self) -> list[list[P3]]:
        """Closed circular outlines of the tool, one per slice, from the tip up."""
        result = []
        for i in range(self.ntoolslices):
            z = self.sliceheight * i
            rad = self.rad_at_height(z)
            ring = [
                P3(math.cos(t) * rad, math.sin(t) * rad, z)
                for t in (j * 2.0 * math.pi / self.nang for j in range(self.nang))
            ]
            ring.append(ring[0])
            result.append(ring)
        return result