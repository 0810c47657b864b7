"""Slice-path state machine.

The host samples two consecutive cursor positions once per frame and calls
:meth:`SlicePathTracker.update`. The tracker asks its :class:`Boundary` for
containment and crossings, grows the in-progress cut polyline while the
cursor is inside, and emits a :class:`CutRecord` each time the path leaves
the polygon again.

Transitions per tick (``inside`` is seeded from ``contains(prev)``):

- more than one crossing: walk them in distance order, each one flips
  ``inside``; entering opens a cut, leaving closes it;
- zero or one crossing: compare ``contains(prev)`` with ``contains(cur)``
  and resolve the single crossing with ``nearest_crossing``.

A step that containment says crossed the boundary but whose crossing
cannot be computed is logged and abandons the cut.
"""
from __future__ import annotations

import enum
from typing import Callable, List, Optional, Tuple

from .boundary import Boundary
from .config import TrackerConfig
from .constants import EPS
from .cut import CutRecord
from .errors import UnresolvedCrossingError
from .geometry import Point, as_point, distance
from .logging_utils import get_logger
from .segment import Segment
from .stats import TrackerStats

logger = get_logger('polyslice.tracker')

CutListener = Callable[[CutRecord], None]

__all__ = ['SlicePathTracker', 'TrackerState', 'CutListener']


class TrackerState(enum.Enum):
    IDLE = 'idle'
    ACTIVE = 'active'


class SlicePathTracker:
    """Turns a stream of cursor samples into cut events for one boundary."""

    def __init__(self, boundary: Boundary, config: Optional[TrackerConfig] = None):
        self.config = config or TrackerConfig()
        self.stats = TrackerStats()
        self._boundary = boundary
        self._listeners: List[CutListener] = []
        self._polyline: List[Segment] = []
        self._active = False
        self._entry_edge: Optional[Segment] = None
        self._entry_point: Optional[Point] = None
        self._last_point: Optional[Point] = None
        self._spawn_ticks = 0

    # -------- public state --------
    @property
    def boundary(self) -> Boundary:
        return self._boundary

    @property
    def state(self) -> TrackerState:
        return TrackerState.ACTIVE if self._active else TrackerState.IDLE

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def entry_edge(self) -> Optional[Segment]:
        return self._entry_edge

    @property
    def entry_point(self) -> Optional[Point]:
        """Where the cut in progress started, or None when idle."""
        return self._entry_point

    @property
    def last_point(self) -> Optional[Point]:
        return self._last_point

    def in_progress_polyline(self) -> Tuple[Segment, ...]:
        """Segments recorded so far for the current cut (empty when idle)."""
        return tuple(self._polyline)

    def add_listener(self, callback: CutListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: CutListener) -> None:
        self._listeners.remove(callback)

    def set_boundary(self, boundary: Boundary) -> None:
        """Switch to a freshly generated polygon; any cut in progress is dropped."""
        self._boundary = boundary
        self.reset()

    def reset(self) -> None:
        if self._active:
            self.stats.cuts_abandoned += 1
            logger.debug("reset: abandoning cut with %d segments", len(self._polyline))
        self._clear()

    # -------- tick --------
    def update(self, prev_pos, cur_pos) -> Optional[CutRecord]:
        """Advance one tick with the cursor moving from prev_pos to cur_pos.

        Returns the last cut finalized during this tick, if any. Every cut
        finalized during the tick is also passed to the registered listeners.
        """
        prev = as_point(prev_pos)
        cur = as_point(cur_pos)
        self.stats.ticks += 1
        if distance(prev, cur) <= EPS:
            self.stats.degenerate_ticks += 1
            return None
        try:
            return self._step(prev, cur)
        except UnresolvedCrossingError as exc:
            self.stats.unresolved_crossings += 1
            logger.warning("dropping cut: %s", exc)
            self.reset()
            return None

    def _step(self, prev: Point, cur: Point) -> Optional[CutRecord]:
        boundary = self._boundary
        crossings = boundary.crossings(Segment(prev, cur))
        prev_in = boundary.contains(prev)
        cur_in = boundary.contains(cur)
        emitted: Optional[CutRecord] = None

        if len(crossings) > 1:
            self.stats.multi_crossing_ticks += 1
            crossings.sort(key=lambda c: c.distance)
            inside = prev_in
            for cp in crossings:
                if not inside:
                    self._open(cp.point, cp.edge)
                elif self._active:
                    emitted = self._close(cp.point, cp.edge)
                else:
                    self._clear()
                inside = not inside
            if inside != cur_in:
                logger.debug("crossing parity disagrees with containment at %s (walked inside=%s)", cur, inside)
            if inside and cur_in and not self._active:
                self._open(cur, None)
            if not cur_in:
                if self._active:
                    self.reset()
                return emitted
        elif not prev_in and cur_in:
            hit = boundary.nearest_crossing(prev, cur)
            if hit is None:
                raise UnresolvedCrossingError(prev, cur, 'outside->inside')
            self._open(hit[0], hit[1])
        elif prev_in and not cur_in:
            if self._active:
                hit = boundary.nearest_crossing(prev, cur)
                if hit is None:
                    raise UnresolvedCrossingError(prev, cur, 'inside->outside')
                emitted = self._close(hit[0], hit[1])
            else:
                self._clear()
            return emitted
        elif prev_in and cur_in:
            if not self._active:
                self._open(cur, None)
        else:
            return None

        if self._active:
            self._densify(cur)
        return emitted

    # -------- transitions --------
    def _open(self, point: Point, edge: Optional[Segment]) -> None:
        self._polyline = []
        self._active = True
        self._entry_edge = edge
        self._entry_point = point
        self._last_point = point
        self._spawn_ticks = 0
        self.stats.cuts_opened += 1
        logger.debug("cut opened at (%.3f, %.3f) edge=%s", point.x, point.y, edge)

    def _close(self, point: Point, edge: Segment) -> Optional[CutRecord]:
        if self._last_point is not None and distance(self._last_point, point) > EPS:
            self._append(Segment(self._last_point, point))
        # entering and leaving at one spot, or along one edge with no vertex in between, cuts nothing
        if not self._polyline or (len(self._polyline) == 1 and edge is self._entry_edge):
            logger.debug("cut closed without leaving the outline at (%.3f, %.3f)", point.x, point.y)
            self.stats.cuts_abandoned += 1
            self._clear()
            return None
        record = CutRecord.from_polyline(self._polyline, self._entry_edge, edge)
        self._clear()
        self.stats.cuts_emitted += 1
        logger.info("cut finalized: %d segments, length=%.3f, anchored=%s",
                    len(record), record.length, record.is_anchored)
        for cb in list(self._listeners):
            cb(record)
        return record

    def _clear(self) -> None:
        self._polyline = []
        self._active = False
        self._entry_edge = None
        self._entry_point = None
        self._last_point = None
        self._spawn_ticks = 0

    # -------- polyline growth --------
    def _densify(self, candidate: Point) -> None:
        self._spawn_ticks += 1
        if self._spawn_ticks < self.config.spawn_ticks:
            return
        min_dist = self._boundary.min_point_distance(self.config.min_point_fraction)
        if distance(self._last_point, candidate) <= max(min_dist, EPS):
            return
        self._append(Segment(self._last_point, candidate))
        self._spawn_ticks -= self.config.spawn_ticks

    def _append(self, seg: Segment) -> None:
        self._polyline.append(seg)
        self._last_point = seg.end
        self.stats.segments_recorded += 1
        if self.config.detect_self_intersections:
            self._resolve_self_intersection()

    def _resolve_self_intersection(self) -> None:
        """Restart the polyline at the newest segment's first self-crossing.

        The newest segment is tested against every earlier segment except its
        immediate predecessor. The crossing closest to the newest segment's
        start closes off a loop; everything before it is dropped and the cut
        continues from the crossing point.
        """
        if len(self._polyline) < 3:
            return
        newest = self._polyline[-1]
        best: Optional[Point] = None
        best_d = 0.0
        for seg in self._polyline[:-2]:
            p = newest.intersect(seg)
            if p is None or not newest.contains_point(p) or not seg.contains_point(p):
                continue
            d = distance(newest.start, p)
            if best is None or d < best_d:
                best, best_d = p, d
        if best is None:
            return
        self.stats.self_intersections += 1
        logger.debug("self-crossing at (%.3f, %.3f): restarting polyline (%d segments dropped)",
                     best.x, best.y, len(self._polyline) - 1)
        self._entry_edge = None
        self._entry_point = best
        self._polyline = [Segment(best, newest.end)] if distance(best, newest.end) > EPS else []
        self._last_point = newest.end if self._polyline else best
