"""Host-side loop around the slicing core.

:class:`SliceSession` plays the part of the game loop: it owns the current
polygon, the tracker and the fading finished cuts, remembers the previous
cursor sample and feeds ``(previous, current)`` to the tracker once per
tick. Input wiring and frame cadence stay with the caller.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .boundary import Boundary
from .config import SliceConfig
from .cut import CutRecord
from .errors import CutSplitError
from .generation import canvas_boundary
from .geometry import Point, as_point
from .logging_utils import get_logger
from .splitting import split_boundary
from .tracker import SlicePathTracker
from .visualization import CutFader, plot_scene

logger = get_logger('polyslice.session')

__all__ = ['SliceSession', 'replay_path']


def replay_path(tracker: SlicePathTracker, samples: Iterable) -> Iterator[CutRecord]:
    """Feed consecutive cursor samples to ``tracker`` and yield every finished cut."""
    found: List[CutRecord] = []
    tracker.add_listener(found.append)
    try:
        prev = None
        for s in samples:
            cur = as_point(s)
            if prev is not None:
                tracker.update(prev, cur)
                while found:
                    yield found.pop(0)
            prev = cur
    finally:
        tracker.remove_listener(found.append)


class SliceSession:
    """One polygon at a time, sliced by a cursor sampled once per tick."""

    def __init__(self, width: float = 800.0, height: float = 600.0, config: Optional[SliceConfig] = None,
                 rng=None, boundary: Optional[Boundary] = None, split_cuts: bool = True):
        self.config = config or SliceConfig()
        self.width = float(width)
        self.height = float(height)
        self.split_cuts = split_cuts
        self._rng = np.random.default_rng(rng)
        self.boundary = boundary if boundary is not None else self._generate()
        self.tracker = SlicePathTracker(self.boundary, self.config.tracker)
        self.tracker.add_listener(self._on_cut)
        self.fader = CutFader(self.config.fade.show_ticks)
        self.cuts: List[CutRecord] = []
        self.pieces: Optional[Tuple[Boundary, Boundary]] = None
        self.slices_completed = 0
        self._cursor: Optional[Point] = None
        self._prev: Optional[Point] = None

    def _generate(self) -> Boundary:
        return canvas_boundary(self.width, self.height, self._rng, self.config.shape)

    # -------- input --------
    @property
    def cursor(self) -> Optional[Point]:
        return self._cursor

    def move_cursor(self, pos) -> None:
        self._cursor = as_point(pos)

    def tick(self) -> Optional[CutRecord]:
        """Advance one frame: age fading cuts, then feed the cursor step to the tracker."""
        self.fader.tick()
        if self._cursor is None:
            return None
        prev, self._prev = self._prev, self._cursor
        if prev is None:
            return None
        return self.tracker.update(prev, self._cursor)

    def feed(self, samples: Iterable) -> List[CutRecord]:
        """Run one tick per cursor sample; returns the cuts finished along the way."""
        before = len(self.cuts)
        for s in samples:
            self.move_cursor(s)
            self.tick()
        return self.cuts[before:]

    # -------- round control --------
    def regenerate(self, boundary: Optional[Boundary] = None) -> Boundary:
        """Replace the polygon; the cut in progress and all fading cuts are dropped."""
        self.boundary = boundary if boundary is not None else self._generate()
        self.tracker.set_boundary(self.boundary)
        self.fader.clear()
        self.cuts = []
        self.pieces = None
        self._prev = None
        logger.info("new polygon: %r", self.boundary)
        return self.boundary

    def reset(self) -> None:
        self.tracker.reset()
        self.fader.clear()
        self.cuts = []
        self.pieces = None
        self.slices_completed = 0
        self._prev = None

    def snapshot(self, outname: str, title: Optional[str] = None) -> None:
        plot_scene(self.boundary, outname, self.tracker.in_progress_polyline(), self.fader.items,
                   self._cursor, pieces=self.pieces, title=title,
                   entry=self.tracker.entry_point)

    # -------- cut handling --------
    def _on_cut(self, record: CutRecord) -> None:
        self.cuts.append(record)
        self.fader.add(record)
        self.slices_completed += 1
        if not (self.split_cuts and record.is_anchored):
            return
        try:
            self.pieces = split_boundary(self.boundary, record)
        except CutSplitError as exc:
            logger.warning("could not split polygon along cut: %s", exc)
            self.pieces = None
