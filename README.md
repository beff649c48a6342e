# roughcam

Geometry building blocks for core roughing toolpaths cut from triangulated
surfaces. The package is pure Python and needs nothing beyond the standard
library.

## Modules

- `roughcam.geometry`: the frozen value types `P2` (`u`, `v`), `P3` (`x`, `y`, `z`)
  and `Interval` (`lo`, `hi`, closed), the constant `UNIT_INTERVAL`, and
  `along(lam, a, b)` for linear interpolation between floats or points.
  `P2.darg()` gives the "diamond angle" in `[0, 4)`. It raises `ValueError`
  for a zero vector. `Interval` raises `ValueError` when its ends are out of
  order, and `Interval.intersection` returns `None` when the two intervals
  do not overlap.
- `roughcam.normray`: `NormRay(radball, zrg)` is a vertical ray on the z axis
  that covers the range `zrg`. It has three methods, `slice_point(a)`,
  `slice_edge(a, b)` and `slice_triangle(a, b1, b2, xprod)`. Each returns a
  `BallSliceResult`, or `None` when a ball of radius `radball` swept over the
  element does not reach the ray.
  - A `BallSliceResult` holds `lo` and `hi`, trimmed to `zrg`, with the flags
    `lo_internal` and `hi_internal`.
  - `slice_edge` requires `a.z <= b.z`.
  - `slice_triangle` requires a cross product `xprod` whose z component is not
    negative. It returns `None` for triangles that are vertical or degenerate.
- `roughcam.slicer`: `LineSlicer(p0, p1)` records where the line through `p0`
  and `p1` crosses triangles, which you pass in with `slice_triangle`.
  `convert(xrg, yrg, zrg)` pairs the sorted crossings into inside spans and
  clips them to the segment and the box. It returns them as a list of
  `Interval`.
- `roughcam.surface`: `Surface` collects triangles.
  - When you give it three ranges, it skips any triangle that lies wholly
    outside that box. When you give it none, its ranges grow to hold every
    triangle.
  - `read_stl(path)` reads binary and ASCII STL files.
  - `build_components()` merges duplicate vertices, orients each `Triangle`
    with an upward unit normal, and links the triangles through shared
    `Edge` objects.
  - `slice_ray(slicer)` feeds the built triangles to a `LineSlicer`. Call
    `build_components()` first.
- `roughcam.toolshape`: `ToolShape(flatrad, cornerrad, shaftlength, sliceheight)`
  describes a flat or rounded cutter.
  - `rad_at_height(z)` gives the radius at height `z` above the tip.
  - `slices()` returns a closed ring of 31 points for each horizontal slice,
    from the tip up.
- `roughcam.params`: `MachineParams` is a frozen dataclass of cutting,
  linking and steering settings, each with its default value. It raises
  `ValueError` for step sizes or radii that cannot be used. Use
  `dataclasses.replace` to derive a variant.
- `roughcam.links`: moves between cuts.
  - `build_retract` goes up to the retract height, across, and down.
  - `build_curl` makes a short lead-off arc.
  - `build_link` makes an arc, a tangent line and a second arc.
  - `build_link_z` lifts a planar link into space, with ramps of `leadoffdz`
    at both ends.

## Example

```python
from roughcam.geometry import Interval, P2, P3
from roughcam.normray import NormRay
from roughcam.surface import Surface
from roughcam.toolshape import ToolShape
from roughcam.params import MachineParams
from roughcam.links import build_link, build_link_z

ray = NormRay(2.0, Interval(-10.0, 10.0))
hit = ray.slice_point(P3(1.0, 0.0, 0.0))
if hit is not None:
    print(hit.lo, hit.hi)

surface = Surface(Interval(-50, 50), Interval(-50, 50), Interval(-10, 10))
surface.read_stl("part.stl")
surface.build_components()

tool = ToolShape(0.0, 3.0, 20.0, 0.5)
print(tool.rad_at_height(1.0))

params = MachineParams()
path = build_link(P2(0, 0), P2(1, 0), P2(10, 0), P2(-1, 0), params)
moves = build_link_z(path, 0.0, params)
```

## What it does not do

These are the parts a roughing toolpath needs. The package does not contain
the rest:

- It has no loop that steers the tool through material layer by layer.
- It has no area weave of material boundaries.
- It has no command-line program.
- It has no display of tools or paths.

## Tests

```
pip install -e ".[test]"
pytest
```