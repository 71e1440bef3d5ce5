"""DXF R12 (AC1009) ASCII serializer.

One POLYLINE/VERTEX.../SEQEND group per contour; closed contours carry
flag 70=1, open runs 70=0. Coordinates are written unchanged (mm).
"""
from typing import Iterable, Mapping

from shared.types import PathSequence
from export.pathparse import SCALE
from export.outline import (
    OutlineSet, CORRIDORS, BOUNDARY, CENTER_HOLE, ENTRY_HOLE, WEDGE, WEDGE_HOLE,
)

# AutoCAD color index per layer
LAYER_COLORS = {
    "0": 7,             # white
    "CORRIDORS": 1,     # red
    "BOUNDARY": 3,      # green
    "WEDGE_CUT": 1,     # red
    "WEDGE_HOLE": 2,    # yellow
}
DEFAULT_COLOR = 7
INSUNITS_MM = 4

# Shape class -> DXF layer
SHAPE_LAYERS = {
    CORRIDORS: "CORRIDORS",
    BOUNDARY: "BOUNDARY",
    CENTER_HOLE: "BOUNDARY",
    ENTRY_HOLE: "BOUNDARY",
    WEDGE: "WEDGE_CUT",
    WEDGE_HOLE: "WEDGE_HOLE",
}


class _Writer:
    """Accumulates group-code / value line pairs."""

    def __init__(self):
        self.lines: list[str] = []

    def add(self, code: int, value) -> None:
        self.lines.append(f"{code:>3}")
        self.lines.append(str(value))

    def text(self) -> str:
        return "\n".join(self.lines) + "\n"


def _extents(layers: Mapping[str, list[PathSequence]], diameter: float,
             scale: int) -> tuple[float, float, float, float]:
    """Bounding box of the disk and every written vertex, mm."""
    h = diameter / 2
    x0, y0, x1, y1 = -h, -h, h, h
    for seqs in layers.values():
        for seq in seqs:
            if len(seq.points) < 2:
                continue
            for x, y in seq.points:
                x0 = min(x0, x / scale); x1 = max(x1, x / scale)
                y0 = min(y0, y / scale); y1 = max(y1, y / scale)
    return x0, y0, x1, y1


def _header(w: _Writer, extents: tuple[float, float, float, float]) -> None:
    x0, y0, x1, y1 = extents
    w.add(0, "SECTION"); w.add(2, "HEADER")
    w.add(9, "$ACADVER"); w.add(1, "AC1009")
    w.add(9, "$INSUNITS"); w.add(70, INSUNITS_MM)
    w.add(9, "$EXTMIN"); w.add(10, f"{x0:g}"); w.add(20, f"{y0:g}")
    w.add(9, "$EXTMAX"); w.add(10, f"{x1:g}"); w.add(20, f"{y1:g}")
    w.add(0, "ENDSEC")


def _tables(w: _Writer, layers: list[str]) -> None:
    w.add(0, "SECTION"); w.add(2, "TABLES")

    w.add(0, "TABLE"); w.add(2, "LTYPE"); w.add(70, 1)
    w.add(0, "LTYPE"); w.add(2, "CONTINUOUS"); w.add(70, 0)
    w.add(3, "Solid line"); w.add(72, 65); w.add(73, 0); w.add(40, "0.0")
    w.add(0, "ENDTAB")

    names = ["0"] + [n for n in layers if n != "0"]
    w.add(0, "TABLE"); w.add(2, "LAYER"); w.add(70, len(names))
    for name in names:
        w.add(0, "LAYER"); w.add(2, name); w.add(70, 0)
        w.add(62, LAYER_COLORS.get(name, DEFAULT_COLOR))
        w.add(6, "CONTINUOUS")
    w.add(0, "ENDTAB")

    w.add(0, "ENDSEC")


def _polyline(w: _Writer, seq: PathSequence, layer: str, scale: int) -> None:
    w.add(0, "POLYLINE"); w.add(8, layer)
    w.add(66, 1)
    w.add(70, 1 if seq.closed else 0)
    for x, y in seq.points:
        w.add(0, "VERTEX"); w.add(8, layer)
        w.add(10, f"{x / scale:.6f}")
        w.add(20, f"{y / scale:.6f}")
        w.add(30, 0)
    w.add(0, "SEQEND"); w.add(8, layer)


def render_dxf(layers: Mapping[str, Iterable[PathSequence]], diameter: float,
               scale: int = SCALE) -> str:
    """DXF document for fixed-point sequences grouped by layer name.

    Runs with fewer than two points are not written. Header extents cover
    the disk and anything drawn past it.
    """
    layers = {name: list(seqs) for name, seqs in layers.items()}
    layer_names = list(layers)
    w = _Writer()
    _header(w, _extents(layers, diameter, scale))
    _tables(w, layer_names)
    w.add(0, "SECTION"); w.add(2, "ENTITIES")
    for name in layer_names:
        for seq in layers[name]:
            if len(seq.points) >= 2:
                _polyline(w, seq, name, scale)
    w.add(0, "ENDSEC")
    w.add(0, "EOF")
    return w.text()


def outline_layers(outline: OutlineSet) -> dict[str, list[PathSequence]]:
    """Group an outline's closed contours onto their DXF layers."""
    layers: dict[str, list[PathSequence]] = {"CORRIDORS": [], "BOUNDARY": []}
    for shape, layer in SHAPE_LAYERS.items():
        contours = outline.contours(shape)
        if contours:
            layers.setdefault(layer, []).extend(PathSequence(c, True) for c in contours)
    return layers


def render_outline_dxf(outline: OutlineSet, diameter: float, scale: int = SCALE) -> str:
    """CORRIDORS/BOUNDARY layers, plus WEDGE_CUT/WEDGE_HOLE when present."""
    return render_dxf(outline_layers(outline), diameter, scale)
