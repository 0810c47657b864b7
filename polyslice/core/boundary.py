"""Closed polygon outline with containment and crossing queries.

A :class:`Boundary` is built once per polygon from its ordered vertices and
owns the cyclic sequence of edge :class:`Segment` objects. Edge identity is
stable for the boundary's lifetime, so cut records can refer back to the
exact edge a cut entered or left through.
"""
from __future__ import annotations

import math
from typing import Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from .constants import EPS
from .errors import InvalidBoundaryError
from .geometry import (
    Point, as_point, dedupe_points, distance, point_in_polygon,
    polygon_bbox, polygon_centroid, polygon_signed_area,
)
from .segment import Segment

__all__ = ['Boundary', 'CrossingPoint']


class CrossingPoint(NamedTuple):
    point: Point
    distance: float
    edge: Segment


class Boundary:
    """Ordered cyclic sequence of segments enclosing a simple region.

    ``edges[i].end`` equals ``edges[i + 1].start`` and the last edge closes
    back onto the first vertex. Simplicity of the outline is assumed, not
    checked.
    """

    def __init__(self, points: Iterable):
        try:
            verts = dedupe_points(list(points))
        except (TypeError, ValueError, IndexError) as exc:
            raise InvalidBoundaryError(f"invalid boundary vertices: {exc}") from exc
        if len(verts) < 3:
            raise InvalidBoundaryError(f"a boundary needs at least 3 distinct vertices, got {len(verts)}")
        n = len(verts)
        self._vertices: Tuple[Point, ...] = tuple(verts)
        self._edges: Tuple[Segment, ...] = tuple(Segment(verts[i], verts[(i + 1) % n]) for i in range(n))
        self._array = np.asarray(verts, dtype=np.float64)

    # --- structure ---
    @property
    def vertices(self) -> Tuple[Point, ...]:
        return self._vertices

    @property
    def edges(self) -> Tuple[Segment, ...]:
        return self._edges

    def __len__(self) -> int:
        return len(self._edges)

    def edge_index(self, edge: Segment) -> int:
        """Position of ``edge`` in this boundary (identity match), or -1."""
        for i, e in enumerate(self._edges):
            if e is edge:
                return i
        return -1

    # --- measures ---
    @property
    def bbox(self) -> Tuple[float, float, float, float]:
        return polygon_bbox(self._array)

    @property
    def area(self) -> float:
        return abs(polygon_signed_area(self._array))

    @property
    def signed_area(self) -> float:
        return polygon_signed_area(self._array)

    @property
    def centroid(self) -> Point:
        return polygon_centroid(self._array)

    @property
    def size(self) -> float:
        """Diagonal of the bounding box."""
        minx, miny, maxx, maxy = self.bbox
        return math.hypot(maxx - minx, maxy - miny)

    def min_point_distance(self, fraction: float) -> float:
        """Minimum spacing between recorded cut vertices for this polygon."""
        return self.size * fraction

    # --- queries ---
    def contains(self, p) -> bool:
        """Even-odd ray parity over every edge."""
        p = as_point(p)
        hits = 0
        for edge in self._edges:
            if edge.ray_parity_test(p):
                hits += 1
        return hits % 2 == 1

    def contains_many(self, points) -> np.ndarray:
        """Vectorized :meth:`contains` for an (M,2) array of points."""
        return point_in_polygon(points, self._array)

    def crossings(self, query: Segment) -> List[CrossingPoint]:
        """Every crossing of ``query`` with an edge, bounded to lie on both.

        The result is in edge order; callers that need path order sort by
        ``distance`` (measured from ``query.start``).
        """
        found: List[CrossingPoint] = []
        for edge in self._edges:
            p = edge.intersect(query)
            if p is None:
                continue
            if not query.contains_point(p) or not edge.contains_point(p):
                continue
            found.append(CrossingPoint(p, distance(query.start, p), edge))
        return found

    def nearest_crossing(self, p1, p2) -> Optional[Tuple[Point, Segment]]:
        """Crossing of the step p1 -> p2 closest to p1, with the edge it lies on.

        Used when containment already says exactly one transition happened,
        so the query side is only required to lie within [p1, p2] up to EPS
        rather than on the inset span.
        """
        query = Segment(p1, p2)
        if query.is_degenerate:
            return None
        slack = EPS / query.length
        best: Optional[Tuple[Point, Segment]] = None
        best_d = math.inf
        for edge in self._edges:
            p = edge.intersect(query)
            if p is None or not edge.contains_point(p):
                continue
            t = query.parameter(p)
            if t < -slack or t > 1.0 + slack:
                continue
            d = distance(query.start, p)
            if d < best_d:
                best, best_d = (p, edge), d
        return best

    def __repr__(self) -> str:
        return f"Boundary({len(self._edges)} edges, area={self.area:.4g})"
