"""Rendering collaborators for the slicing core.

The core never draws. Whatever displays a scene receives a :class:`RenderSink`
and calls :func:`draw_scene`, which walks the boundary, the in-progress cut
and the fading finished cuts. :class:`MatplotlibSink` is the sink used for
snapshots and demos.
"""
from __future__ import annotations

import os as _os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol, Sequence

import matplotlib as _mpl
# Ensure a non-interactive backend in headless environments before importing pyplot
if not _os.environ.get('MPLBACKEND'):
    _mpl.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Polygon as _MplPolygon

from .boundary import Boundary
from .constants import DEFAULT_FADE_TICKS
from .cut import CutRecord
from .geometry import as_point
from .logging_utils import get_logger
from .segment import Segment

logger = get_logger('polyslice.viz')

YELLOW = '#ffff00'
RED = '#ff0000'
BLUE = '#0000ff'
SHAPE_FILL = '#ff6b6b'
SHAPE_EDGE = '#ffffff'
BACKGROUND = '#1a1a2e'

__all__ = [
    'RenderSink', 'MatplotlibSink', 'FadingCut', 'CutFader', 'draw_scene', 'plot_scene',
]


class RenderSink(Protocol):
    def draw_segment(self, seg: Segment, color: str, width: float, alpha: float = 1.0) -> None: ...

    def draw_marker(self, point, color: str, radius: float, alpha: float = 1.0) -> None: ...

    def draw_polygon(self, points: Sequence, facecolor: str, edgecolor: str, alpha: float = 1.0) -> None: ...


@dataclass
class FadingCut:
    """A finished cut kept on screen until its countdown runs out."""
    record: CutRecord
    show_ticks: int = DEFAULT_FADE_TICKS
    age: int = 0

    @property
    def alpha(self) -> float:
        return max(0.0, 1.0 - self.age / float(self.show_ticks))

    @property
    def expired(self) -> bool:
        return self.age >= self.show_ticks

    def tick(self) -> None:
        self.age += 1


@dataclass
class CutFader:
    """Owns finished cuts for display and drops them once they have faded."""
    show_ticks: int = DEFAULT_FADE_TICKS
    items: List[FadingCut] = field(default_factory=list)

    def add(self, record: CutRecord) -> FadingCut:
        item = FadingCut(record, self.show_ticks)
        self.items.append(item)
        return item

    def tick(self) -> int:
        """Age every cut by one frame; returns how many expired and were dropped."""
        for item in self.items:
            item.tick()
        before = len(self.items)
        self.items = [it for it in self.items if not it.expired]
        return before - len(self.items)

    def clear(self) -> None:
        self.items.clear()

    def __len__(self) -> int:
        return len(self.items)


def draw_scene(sink: RenderSink, boundary: Boundary, polyline: Iterable[Segment] = (),
               fading: Iterable[FadingCut] = (), cursor=None, marker_radius: float = 15.0,
               cut_width: float = 12.0, entry=None) -> None:
    """Draw one frame: outline, live cut and its entry marker, fading cuts with their end markers, cursor."""
    sink.draw_polygon(boundary.vertices, SHAPE_FILL, SHAPE_EDGE)
    for seg in polyline:
        sink.draw_segment(seg, YELLOW, cut_width)
    if entry is not None:
        sink.draw_marker(as_point(entry), BLUE, marker_radius)
    for item in fading:
        a = item.alpha
        for seg in item.record.segments:
            sink.draw_segment(seg, SHAPE_EDGE, 2.0, a)
        sink.draw_marker(item.record.entry_point, BLUE, marker_radius, a)
        sink.draw_marker(item.record.exit_point, BLUE, marker_radius, a)
    if cursor is not None:
        sink.draw_marker(as_point(cursor), RED, marker_radius)


class MatplotlibSink:
    """RenderSink drawing onto a matplotlib Axes in screen coordinates (y down)."""

    def __init__(self, ax, line_scale: float = 0.25):
        self.ax = ax
        self.line_scale = line_scale

    def draw_segment(self, seg: Segment, color: str, width: float, alpha: float = 1.0) -> None:
        self.ax.plot([seg.start.x, seg.end.x], [seg.start.y, seg.end.y], color=color,
                     linewidth=max(0.5, width * self.line_scale), alpha=alpha, solid_capstyle='round')

    def draw_marker(self, point, color: str, radius: float, alpha: float = 1.0) -> None:
        p = as_point(point)
        self.ax.add_patch(Circle((p.x, p.y), radius, facecolor=color, edgecolor='black',
                                 linewidth=1.0, alpha=alpha))

    def draw_polygon(self, points: Sequence, facecolor: str, edgecolor: str, alpha: float = 1.0) -> None:
        self.ax.add_patch(_MplPolygon([tuple(p) for p in points], closed=True, facecolor=facecolor,
                                      edgecolor=edgecolor, linewidth=1.5, alpha=alpha))


def plot_scene(boundary: Boundary, outname: str = 'slice.png', polyline: Iterable[Segment] = (),
               fading: Iterable[FadingCut] = (), cursor=None, pieces: Optional[Sequence[Boundary]] = None,
               title: Optional[str] = None, entry=None) -> None:
    """Save a snapshot of a scene to ``outname``.

    Args:
        boundary: polygon being sliced
        outname: output image path
        polyline: in-progress cut segments
        fading: finished cuts still on screen
        cursor: current cursor position, drawn as a red marker
        pieces: optional split result, outlined on top of the scene
        title: optional figure title
        entry: start of the cut in progress, drawn as a blue marker
    """
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.set_facecolor(BACKGROUND)
    sink = MatplotlibSink(ax)
    draw_scene(sink, boundary, polyline, fading, cursor,
               marker_radius=0.015 * max(boundary.size, 1.0), entry=entry)
    if pieces:
        palette = ['#2a9df4', '#3ccf4e', '#c17f24', '#9b3fc7']
        for k, piece in enumerate(pieces):
            xs = [v.x for v in piece.vertices] + [piece.vertices[0].x]
            ys = [v.y for v in piece.vertices] + [piece.vertices[0].y]
            ax.plot(xs, ys, color=palette[k % len(palette)], linewidth=1.4, linestyle='--')
    minx, miny, maxx, maxy = boundary.bbox
    pad = 0.1 * max(maxx - minx, maxy - miny, 1.0)
    ax.set_xlim(minx - pad, maxx + pad)
    ax.set_ylim(maxy + pad, miny - pad)
    ax.set_aspect('equal')
    if title:
        ax.set_title(title)
    fig.savefig(outname, dpi=120)
    plt.close(fig)
    logger.debug("wrote scene snapshot to %s", outname)
