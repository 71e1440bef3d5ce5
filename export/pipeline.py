"""Staged export: parse -> offset -> union -> wedge -> serialize.

Each stage reports coarse progress. ``ExportPipeline.stages()`` is a
generator a host can resume one stage at a time; ``cancel()`` is honoured
at every stage boundary. Files are written only after serialization has
finished, through a temporary file and an atomic rename.
"""
import logging
import os
import tempfile
from enum import Enum
from typing import Callable, Iterator, NamedTuple, Optional

from shared.types import MazeModel, MazeConfig, PathSequence
from export.pathparse import DEFAULT_SEGMENTS_PER_ARC, parse_path, to_fixed
from export.outline import (
    OutlineSet, GeometryWarning, CORRIDORS, WEDGE, WEDGE_HOLE,
    offset_sequences, union_polygons, disk_shapes, join_type_for,
)
from export.wedge import Wedge, entry_wedge
from export.svg_out import render_outline_svg, render_preview_svg
from export.dxf import render_outline_dxf

logger = logging.getLogger(__name__)

FORMATS = ("outline", "dxf")


class ExportStage(Enum):
    PARSE = "parse"
    OFFSET = "offset"
    UNION = "union"
    WEDGE = "wedge"
    SERIALIZE = "serialize"
    COMPLETE = "complete"


# Percent complete once each stage has finished
_STAGE_PERCENT = {
    ExportStage.PARSE: 20,
    ExportStage.OFFSET: 50,
    ExportStage.UNION: 70,
    ExportStage.WEDGE: 80,
    ExportStage.SERIALIZE: 95,
    ExportStage.COMPLETE: 100,
}


class ExportProgress(NamedTuple):
    stage: ExportStage
    percent: int
    message: str


class ExportResult(NamedTuple):
    text: str
    outline: OutlineSet
    wedge: Optional[Wedge]
    warnings: list[GeometryWarning]

    @property
    def complete(self) -> bool:
        """False when some sub-paths were dropped."""
        return not self.warnings


class ExportCancelled(Exception):
    """Raised at a stage boundary after cancel(); nothing has been written."""


def default_filename(config: MazeConfig, fmt: str) -> str:
    base = f"orbital_maze_{config.diameter:g}mm_seed{config.seed}"
    return {
        "svg": f"{base}.svg",
        "outline": f"{base}_outlined.svg",
        "dxf": f"{base}_cut.dxf",
    }[fmt]


class ExportPipeline:
    """One export of one model. Owns all intermediate buffers."""

    def __init__(self, model: MazeModel, fmt: str = "dxf",
                 segments_per_arc: int = DEFAULT_SEGMENTS_PER_ARC,
                 progress_callback: Optional[Callable[[ExportProgress], None]] = None):
        if fmt not in FORMATS:
            raise ValueError(f"unknown export format {fmt!r}; expected one of {FORMATS}")
        self.model = model
        self.fmt = fmt
        self.segments_per_arc = segments_per_arc
        self.progress_callback = progress_callback
        self.is_cancelled = False
        self.result: Optional[ExportResult] = None

    def cancel(self) -> None:
        self.is_cancelled = True

    def _check_cancellation(self) -> None:
        if self.is_cancelled:
            raise ExportCancelled("export cancelled")

    def _progress(self, stage: ExportStage, message: str) -> ExportProgress:
        p = ExportProgress(stage, _STAGE_PERCENT[stage], message)
        if self.progress_callback:
            self.progress_callback(p)
        return p

    def stages(self) -> Iterator[ExportProgress]:
        """Run the export one stage per resumption."""
        cfg = self.model.config
        self.result = None

        self._check_cancellation()
        sequences = parse_path(self.model.corridor_path, self.segments_per_arc)
        yield self._progress(ExportStage.PARSE, f"{len(sequences)} sub-paths")

        self._check_cancellation()
        polys, warnings = offset_sequences(
            sequences, cfg.corridor_width / 2, join_type_for(cfg.corner_rounding))
        yield self._progress(ExportStage.OFFSET, f"{len(polys)} corridor polygons")

        self._check_cancellation()
        shapes = {CORRIDORS: union_polygons(polys)}
        shapes.update(disk_shapes(cfg.diameter / 2, cfg.hole_radius, self.model.start_point))
        yield self._progress(ExportStage.UNION, f"{len(shapes[CORRIDORS])} corridor contours")

        self._check_cancellation()
        wedge = None
        if cfg.show_entry_wedge:
            wedge = entry_wedge(self.model.start_point, cfg.diameter / 2,
                                cfg.corridor_width, cfg.hole_radius)
            shapes[WEDGE] = [[to_fixed(p) for p in wedge.outline]]
            shapes[WEDGE_HOLE] = [[to_fixed(p) for p in wedge.screw_hole]]
        outline = OutlineSet(shapes, warnings)
        yield self._progress(ExportStage.WEDGE, "wedge added" if wedge else "no wedge")

        self._check_cancellation()
        if self.fmt == "dxf":
            text = render_outline_dxf(outline, cfg.diameter)
        else:
            text = render_outline_svg(outline, cfg.diameter)
        yield self._progress(ExportStage.SERIALIZE, f"{len(text)} bytes")

        self._check_cancellation()
        self.result = ExportResult(text, outline, wedge, warnings)
        if warnings:
            logger.warning("export incomplete: %d sub-paths dropped", len(warnings))
        yield self._progress(ExportStage.COMPLETE, "done")

    def run(self) -> ExportResult:
        """Run every stage to completion."""
        for _ in self.stages():
            pass
        return self.result


def write_atomic(path: str, text: str) -> None:
    """Write via a temporary file in the target directory, then rename."""
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=os.path.splitext(path)[1])
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise


def export_to_file(model: MazeModel, path: str, fmt: str = "dxf",
                   progress_callback: Optional[Callable[[ExportProgress], None]] = None,
                   pipeline: Optional[ExportPipeline] = None) -> ExportResult:
    """Run an export and write it to *path*. Nothing is written on failure or cancel."""
    pipeline = pipeline or ExportPipeline(model, fmt, progress_callback=progress_callback)
    result = pipeline.run()
    write_atomic(path, result.text)
    return result


def write_preview(model: MazeModel, path: str, **kwargs) -> None:
    """Stroke preview SVG (see render_preview_svg for options)."""
    wedge = None
    cfg = model.config
    if cfg.show_entry_wedge:
        wedge = entry_wedge(model.start_point, cfg.diameter / 2, cfg.corridor_width,
                            cfg.hole_radius)
    write_atomic(path, render_preview_svg(model, wedge=wedge, **kwargs))


def raw_path_layers(path_d: str, layer: str = "CORRIDORS",
                    segments_per_arc: int = DEFAULT_SEGMENTS_PER_ARC) -> dict[str, list[PathSequence]]:
    """Parsed centerlines of any path description, grouped on one DXF layer."""
    return {layer: parse_path(path_d, segments_per_arc)}
