import struct

import pytest

from roughcam.geometry import P3, Interval
from roughcam.slicer import LineSlicer
from roughcam.surface import Surface

TETRA = [
    (P3(0.0, 0.0, 0.0), P3(4.0, 0.0, 0.0), P3(0.0, 4.0, 0.0)),
    (P3(0.0, 0.0, 0.0), P3(4.0, 0.0, 0.0), P3(0.0, 0.0, 4.0)),
    (P3(0.0, 0.0, 0.0), P3(0.0, 4.0, 0.0), P3(0.0, 0.0, 4.0)),
    (P3(4.0, 0.0, 0.0), P3(0.0, 4.0, 0.0), P3(0.0, 0.0, 4.0)),
]


def built_tetra():
    s = Surface()
    for tri in TETRA:
        s.push_triangle(*tri)
    s.build_components()
    return s


def test_ranges_absorb_points():
    s = Surface()
    s.push_triangle(P3(1.0, 2.0, 3.0), P3(-1.0, 5.0, 0.5), P3(2.0, -2.0, 7.0))
    assert s.xrg == Interval(-1.0, 2.0)
    assert s.yrg == Interval(-2.0, 5.0)
    assert s.zrg == Interval(0.5, 7.0)
    assert len(s.raw_points) == 3


def test_fixed_range_culls_outside_triangle():
    box = Interval(0.0, 1.0)
    s = Surface(box, box, box)
    s.push_triangle(P3(2.0, 0.5, 0.5), P3(3.0, 0.5, 0.5), P3(2.5, 0.7, 0.5))
    assert s.raw_points == []
    s.push_triangle(P3(0.5, 0.5, 0.5), P3(3.0, 0.5, 0.5), P3(2.5, 0.7, 0.5))
    assert len(s.raw_points) == 3
    assert s.xrg == box


def test_partial_ranges_rejected():
    with pytest.raises(ValueError):
        Surface(Interval(0.0, 1.0), None, None)


def test_vertices_sorted():
    s = built_tetra()
    keys = [(p.x, p.y, p.z) for p in s.vertices]
    assert keys == sorted(keys)
    assert len(set(keys)) == len(keys)


def test_open_edge_has_one_side():
    s = Surface()
    s.push_triangle(*TETRA[0])
    s.build_components()
    assert len(s.edges) == 3
    for e in s.edges:
        assert (e.left is None) != (e.right is None)


def test_degenerate_triangle_dropped():
    s = Surface()
    p = P3(1.0, 1.0, 1.0)
    s.push_triangle(p, p, P3(2.0, 1.0, 1.0))
    s.build_components()
    assert s.triangles == []
    assert s.edges == []


def test_slice_ray_through_tetrahedron():
    s = built_tetra()
    slicer = LineSlicer(P3(1.0, 1.0, -5.0), P3(1.0, 1.0, 10.0))
    s.slice_ray(slicer)
    big = Interval(-100.0, 100.0)
    spans = slicer.convert(big, big, big)
    assert len(spans) == 1
    assert spans[0].lo == pytest.approx(0.0)
    assert spans[0].hi == pytest.approx(2.0)


def _write_binary(path, triangles):
    out = bytearray(b"\0" * 80)
    out += struct.pack("<I", len(triangles))
    for tri in triangles:
        coords = [c for p in tri for c in (p.x, p.y, p.z)]
        out += struct.pack("<12fh", 0.0, 0.0, 1.0, *coords, 0)
    path.write_bytes(bytes(out))


def test_read_binary_stl(tmp_path):
    path = tmp_path / "part.stl"
    _write_binary(path, TETRA)
    s = Surface()
    s.read_stl(path)
    assert s.raw_points == [p for tri in TETRA for p in tri]


def test_read_truncated_binary_stl(tmp_path):
    path = tmp_path / "bad.stl"
    path.write_bytes(b"\0" * 80 + struct.pack("<I", 3) + b"\0" * 20)
    with pytest.raises(ValueError):
        Surface().read_stl(path)


def test_read_ascii_stl(tmp_path):
    lines = ["solid part"]
    for tri in TETRA:
        lines.append("  facet normal 0 0 1")
        lines.append("    outer loop")
        for p in tri:
            lines.append(f"      vertex {p.x} {p.y} {p.z}")
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append("endsolid part")
    path = tmp_path / "part.stl"
    path.write_text("\n".join(lines) + "\n")
    s = Surface()
    s.read_stl(path)
    assert s.raw_points == [p for tri in TETRA for p in tri]
    s.build_components()
    assert len(s.triangles) == len(TETRA)


def test_read_tiny_file_adds_nothing(tmp_path):
    path = tmp_path / "tiny.stl"
    path.write_bytes(b"abc")
    s = Surface()
    s.read_stl(path)
    assert s.raw_points == []