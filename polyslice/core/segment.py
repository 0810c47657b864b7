"""Oriented line segment primitive.

A :class:`Segment` keeps the two endpoints it was built from and the line
through them in general form ``A*x + B*y = C``. The general form has no
singularity for vertical lines, so intersection math is exact everywhere
instead of depending on a slope value.

Bounded tests (:meth:`Segment.contains_point`) use a span pulled inward by
``SEGMENT_INSET`` of the segment's own length at both ends. Two boundary
edges meeting at a vertex therefore never both report a crossing at that
vertex.
"""
from __future__ import annotations

import math
from typing import Optional, Tuple

from .constants import EPS, EPS_PARALLEL, SEGMENT_INSET
from .geometry import Point, as_point, lerp

__all__ = ['Segment']


class Segment:
    __slots__ = ('_start', '_end', '_a', '_b', '_c', '_length')

    def __init__(self, start, end):
        s = as_point(start)
        e = as_point(end)
        dx = e.x - s.x
        dy = e.y - s.y
        self._start = s
        self._end = e
        self._length = math.hypot(dx, dy)
        self._a = dy
        self._b = -dx
        self._c = dy * s.x - dx * s.y

    # --- derived geometry ---
    @property
    def start(self) -> Point:
        return self._start

    @property
    def end(self) -> Point:
        return self._end

    @property
    def length(self) -> float:
        return self._length

    @property
    def dx(self) -> float:
        return self._end.x - self._start.x

    @property
    def dy(self) -> float:
        return self._end.y - self._start.y

    @property
    def slope(self) -> float:
        """dy/dx, or +/-inf for a vertical segment."""
        if abs(self.dx) < EPS:
            return math.copysign(math.inf, self.dy) if self.dy else math.inf
        return self.dy / self.dx

    @property
    def is_degenerate(self) -> bool:
        return self._length <= EPS

    # --- queries ---
    def parameter(self, p) -> float:
        """Position of the projection of p along the segment (0 at start, 1 at end)."""
        if self._length <= EPS:
            return 0.0
        p = as_point(p)
        return ((p.x - self._start.x) * self.dx + (p.y - self._start.y) * self.dy) / (self._length * self._length)

    def line_distance(self, p) -> float:
        """Perpendicular distance from p to the infinite line."""
        p = as_point(p)
        if self._length <= EPS:
            return math.hypot(p.x - self._start.x, p.y - self._start.y)
        return abs(self._a * p.x + self._b * p.y - self._c) / self._length

    def project(self, p) -> Tuple[Point, float]:
        """Return (q, t): the closest point q on the segment and its clamped parameter."""
        t = min(1.0, max(0.0, self.parameter(p)))
        return lerp(self._start, self._end, t), t

    def intersect(self, other: 'Segment') -> Optional[Point]:
        """Intersection of the two infinite lines, or None when they are parallel.

        Parallel means the sine of the angle between the segments is below
        EPS_PARALLEL; a degenerate segment has no direction and never
        intersects. The result is symmetric in the two operands.
        """
        if self.is_degenerate or other.is_degenerate:
            return None
        det = self._a * other._b - other._a * self._b
        if abs(det) <= EPS_PARALLEL * self._length * other._length:
            return None
        x = (self._c * other._b - other._c * self._b) / det
        y = (self._a * other._c - other._a * self._c) / det
        return Point(x, y)

    def contains_point(self, p, inset: float = SEGMENT_INSET, tol: float = EPS) -> bool:
        """True when p lies on the segment's inset span.

        The projection parameter must fall in [inset, 1 - inset] and the
        perpendicular distance to the line must not exceed tol.
        """
        p = as_point(p)
        if self.is_degenerate:
            return math.hypot(p.x - self._start.x, p.y - self._start.y) <= tol
        t = self.parameter(p)
        if t < inset or t > 1.0 - inset:
            return False
        return self.line_distance(p) <= tol

    def ray_parity_test(self, q) -> bool:
        """Does a horizontal ray cast rightward from q cross this segment?

        Horizontal segments never register. The crossing must lie within the
        segment's vertical span, which is half-open (the upper endpoint is
        excluded) so a ray through a vertex shared by two edges counts once.
        """
        q = as_point(q)
        dy = self.dy
        if abs(dy) < EPS:
            return False
        if (self._start.y > q.y) == (self._end.y > q.y):
            return False
        x = self._start.x + (q.y - self._start.y) * self.dx / dy
        return x >= q.x

    def __repr__(self) -> str:
        s, e = self._start, self._end
        return f"Segment(({s.x:.4g}, {s.y:.4g}) -> ({e.x:.4g}, {e.y:.4g}))"
