"""Triangulated surfaces: collecting triangles, reading STL files and linking edges."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import Path

from roughcam.geometry import P3, Interval
from roughcam.slicer import LineSlicer

__all__ = ["Triangle", "Edge", "Surface"]

_BINARY_HEADER = 80
_FACET_RECORD = struct.Struct("<12fh")


def _f32(value: float) -> float:
    """Round a value to single precision, as stored in STL files."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


@dataclass(eq=False)
class Triangle:
    """An oriented triangle with its upward unit normal and its three edges."""

    normal: P3
    a: P3
    b1: P3
    b2: P3
    ab1: Edge | None = field(default=None, repr=False)
    ab2: Edge | None = field(default=None, repr=False)
    b12: Edge | None = field(default=None, repr=False)

    @property
    def third_point(self) -> P3:
        """The vertex that does not lie on the b12 edge."""
        return self.a

    def set_edge(self, edge: Edge) -> None:
        ends = {edge.p0, edge.p1}
        if ends == {self.a, self.b1}:
            slot = "ab1"
        elif ends == {self.a, self.b2}:
            slot = "ab2"
        elif ends == {self.b1, self.b2}:
            slot = "b12"
        else:
            raise ValueError("edge does not belong to this triangle")
        if getattr(self, slot) is not None:
            raise ValueError(f"triangle edge {slot} is already set")
        setattr(self, slot, edge)


@dataclass(eq=False)
class Edge:
    """An edge between two vertices, with the triangles on its right and left."""

    p0: P3
    p1: P3
    right: Triangle | None = field(default=None, repr=False)
    left: Triangle | None = field(default=None, repr=False)


def _point_key(p: P3) -> tuple[float, float, float]:
    return (p.x, p.y, p.z)


class Surface:
    """A set of triangles, optionally culled to a fixed bounding box.

    Without a box the ranges grow to hold every triangle pushed in.
    """

    def __init__(
        self,
        xrg: Interval | None = None,
        yrg: Interval | None = None,
        zrg: Interval | None = None,
    ) -> None:
        given = [r is not None for r in (xrg, yrg, zrg)]
        if any(given) and not all(given):
            raise ValueError("either all three ranges or none must be given")
        self.fixed_range = all(given)
        self.xrg = xrg
        self.yrg = yrg
        self.zrg = zrg
        self.raw_points: list[P3] = []
        self.vertices: list[P3] = []
        self.triangles: list[Triangle] = []
        self.edges: list[Edge] = []

    def push_triangle(self, p0: P3, p1: P3, p2: P3) -> None:
        """Add a triangle, skipping it if it lies wholly outside a fixed box."""
        pts = (p0, p1, p2)
        if self.fixed_range:
            for coord, rg in (("x", self.xrg), ("y", self.yrg), ("z", self.zrg)):
                values = [getattr(p, coord) for p in pts]
                if all(v < rg.lo for v in values) or all(v > rg.hi for v in values):
                    return
        else:
            for p in pts:
                if self.xrg is None:
                    self.xrg = Interval(p.x, p.x)
                    self.yrg = Interval(p.y, p.y)
                    self.zrg = Interval(p.z, p.z)
                else:
                    self.xrg = self.xrg.absorb(p.x)
                    self.yrg = self.yrg.absorb(p.y)
                    self.zrg = self.zrg.absorb(p.z)
        self.raw_points.extend(pts)

    def read_stl(self, path: str | Path) -> None:
        """Push every triangle of a binary or ASCII STL file."""
        data = Path(path).read_bytes()
        if len(data) < 5:
            return
        if data[:5] != b"solid":
            self._read_binary(data)
        else:
            self._read_ascii(data.decode("latin-1"))

    def _read_binary(self, data: bytes) -> None:
        if len(data) < _BINARY_HEADER + 4:
            raise ValueError("binary STL file is too short for its header")
        (count,) = struct.unpack_from("<I", data, _BINARY_HEADER)
        offset = _BINARY_HEADER + 4
        for _ in range(count):
            if offset + _FACET_RECORD.size > len(data):
                raise ValueError("binary STL file is truncated")
            values = _FACET_RECORD.unpack_from(data, offset)
            offset += _FACET_RECORD.size
            coords = values[3:12]
            self.push_triangle(
                P3(*coords[0:3]), P3(*coords[3:6]), P3(*coords[6:9])
            )

    def _read_ascii(self, text: str) -> None:
        lines = text.splitlines()[1:]
        corners: list[P3] = []
        for line in lines:
            words = line.split()
            if not words:
                continue
            keyword = words[0]
            if keyword == "vertex":
                try:
                    x, y, z = (_f32(float(w)) for w in words[1:4])
                except ValueError as exc:
                    raise ValueError(f"bad vertex line in STL file: {line!r}") from exc
                if len(corners) < 3:
                    corners.append(P3(x, y, z))
                else:
                    corners[2] = P3(x, y, z)
            elif keyword == "facet":
                corners = []
            elif keyword == "endfacet":
                if len(corners) == 3:
                    self.push_triangle(*corners)

    def build_components(self) -> None:
        """Merge duplicate vertices and link triangles through shared edges."""
        raw = self.raw_points
        order = sorted(range(len(raw)), key=lambda i: _point_key(raw[i]))
        vertices: list[P3] = []
        index_of = [0] * len(raw)
        for i in order:
            if not vertices or vertices[-1] != raw[i]:
                vertices.append(raw[i])
            index_of[i] = len(vertices) - 1
        self.raw_points = []

        oriented: list[tuple[int, int, int]] = []
        triangles: list[Triangle] = []
        for t in range(len(raw) // 3):
            ia, ib1, ib2 = index_of[3 * t: 3 * t + 3]
            if len({ia, ib1, ib2}) < 3:
                continue
            a, b1, b2 = ia, ib1, ib2
            if not a < b1:
                a, b1 = b1, a
            if not b1 < b2:
                a, b2 = b2, a
            v1 = vertices[b1] - vertices[a]
            v2 = vertices[b2] - vertices[a]
            ncross = -v1.cross(v2)
            fac = 1.0
            if ncross.z < 0.0:
                b1, b2 = b2, b1
                fac = -1.0
            nclen = ncross.length()
            if nclen != 0.0:
                fac /= nclen
            oriented.append((a, b1, b2))
            triangles.append(Triangle(ncross * fac, vertices[a], vertices[b1], vertices[b2]))

        half_edges: list[tuple[int, int, int, int]] = []
        for it, (a, b1, b2) in enumerate(oriented):
            for s, e in ((a, b1), (b1, b2), (b2, a)):
                if s < e:
                    half_edges.append((s, e, it, -1))
                else:
                    half_edges.append((e, s, -1, it))
        half_edges.sort(key=lambda h: (h[0], h[1], h[2]))

        def tri(index: int) -> Triangle | None:
            return triangles[index] if index != -1 else None

        edges: list[Edge] = []
        i = 0
        while i < len(half_edges):
            p0, p1, it_r, it_l = half_edges[i]
            if i + 1 < len(half_edges):
                q0, q1, jt_r, jt_l = half_edges[i + 1]
                if p0 == q0 and p1 == q1 and (it_l == -1) != (jt_l == -1):
                    if it_l == -1:
                        right, left = it_r, jt_l
                    else:
                        right, left = jt_r, it_l
                    edges.append(Edge(vertices[p0], vertices[p1], tri(right), tri(left)))
                    i += 2
                    continue
            edges.append(Edge(vertices[p0], vertices[p1], tri(it_r), tri(it_l)))
            i += 1

        for edge in edges:
            for side in (edge.left, edge.right):
                if side is not None:
                    side.set_edge(edge)

        self.vertices = vertices
        self.triangles = triangles
        self.edges = edges

    def slice_ray(self, slicer: LineSlicer) -> None:
        """Feed every built triangle to the line slicer."""
        for t in self.triangles:
            slicer.slice_triangle(t.b12.p0, t.b12.p1, t.third_point)