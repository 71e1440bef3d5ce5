"""Export pipeline: path parsing, corridor outlines, entry wedge, SVG and DXF output."""

from .pathparse import SCALE, ParseError, parse_path, to_fixed, from_fixed
from .outline import (
    GeometryWarning, OutlineSet, SHAPE_CLASSES,
    offset_sequences, union_polygons, outline_corridors, contour_area, disk_shapes, build_outline,
)
from .wedge import Wedge, entry_wedge
from .svg_out import render_outline_svg, render_preview_svg
from .dxf import render_dxf, render_outline_dxf
from .pipeline import (
    FORMATS, ExportStage, ExportProgress, ExportResult, ExportCancelled, ExportPipeline,
    default_filename, export_to_file, write_atomic, write_preview, raw_path_layers,
)
