"""Finalized slice results handed from the tracker to its consumers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .geometry import Point
from .segment import Segment

__all__ = ['CutRecord']


@dataclass(frozen=True)
class CutRecord:
    """Immutable snapshot of one completed cut.

    Attributes
    ----------
    segments : tuple of Segment
        The cut polyline in path order; consecutive segments share endpoints.
    entry_edge, exit_edge : Segment or None
        Boundary edges the cut entered and left through. ``entry_edge`` is
        None when the cut began inside the polygon (tracking started mid-shape
        or the polyline was restarted at a self-crossing).
    entry_point, exit_point : Point
        First and last polyline points.
    """
    segments: Tuple[Segment, ...]
    entry_edge: Optional[Segment]
    exit_edge: Optional[Segment]
    entry_point: Point
    exit_point: Point

    @classmethod
    def from_polyline(cls, segments, entry_edge, exit_edge) -> 'CutRecord':
        segs = tuple(segments)
        if not segs:
            raise ValueError("a cut record needs at least one segment")
        return cls(segs, entry_edge, exit_edge, segs[0].start, segs[-1].end)

    @property
    def points(self) -> Tuple[Point, ...]:
        return (self.segments[0].start,) + tuple(s.end for s in self.segments)

    @property
    def length(self) -> float:
        return float(sum(s.length for s in self.segments))

    @property
    def is_anchored(self) -> bool:
        """Both ends sit on known boundary edges, so the cut can be spliced."""
        return self.entry_edge is not None and self.exit_edge is not None

    def __len__(self) -> int:
        return len(self.segments)
