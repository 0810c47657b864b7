"""Point type and small planar helpers shared by the slicing core.

Points are plain ``(x, y)`` named tuples in screen-space units. Anything with
two coordinates (tuple, list, numpy row) is accepted at API boundaries and
coerced with :func:`as_point`. Polygon helpers take (N,2) array-likes and use
numpy the same way the rest of the package does.
"""
from __future__ import annotations

import math
from typing import NamedTuple, Sequence, Tuple

import numpy as np

from .constants import EPS

__all__ = [
    'Point', 'as_point', 'distance', 'lerp',
    'polygon_signed_area', 'polygon_centroid', 'polygon_bbox',
    'points_close', 'dedupe_points', 'point_in_polygon',
]


class Point(NamedTuple):
    x: float
    y: float


def as_point(p) -> Point:
    """Coerce a 2-sequence to a :class:`Point`, rejecting non-finite input."""
    if isinstance(p, Point):
        return p
    x, y = float(p[0]), float(p[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f"point coordinates must be finite, got ({x}, {y})")
    return Point(x, y)


def distance(a, b) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def lerp(a, b, t: float) -> Point:
    return Point(a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def points_close(a, b, tol: float = EPS) -> bool:
    return distance(a, b) <= tol


def dedupe_points(points: Sequence, tol: float = EPS) -> list:
    """Drop consecutive near-duplicates, including a closing copy of the first point."""
    out: list = []
    for p in points:
        p = as_point(p)
        if out and points_close(out[-1], p, tol):
            continue
        out.append(p)
    while len(out) > 1 and points_close(out[0], out[-1], tol):
        out.pop()
    return out


def polygon_signed_area(poly) -> float:
    """Shoelace area; positive for counter-clockwise loops (y up)."""
    pts = np.asarray(poly, dtype=np.float64)
    if pts.shape[0] < 3:
        return 0.0
    x = pts[:, 0]; y = pts[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


def polygon_centroid(poly) -> Point:
    """Area centroid of a simple polygon; falls back to the vertex mean when degenerate."""
    pts = np.asarray(poly, dtype=np.float64)
    area = polygon_signed_area(pts)
    if abs(area) <= EPS:
        mean = pts.mean(axis=0)
        return Point(float(mean[0]), float(mean[1]))
    x = pts[:, 0]; y = pts[:, 1]
    xn = np.roll(x, -1); yn = np.roll(y, -1)
    cross = x * yn - xn * y
    cx = float(np.sum((x + xn) * cross)) / (6.0 * area)
    cy = float(np.sum((y + yn) * cross)) / (6.0 * area)
    return Point(cx, cy)


def polygon_bbox(poly) -> Tuple[float, float, float, float]:
    """Return (minx, miny, maxx, maxy)."""
    pts = np.asarray(poly, dtype=np.float64)
    mn = pts.min(axis=0); mx = pts.max(axis=0)
    return float(mn[0]), float(mn[1]), float(mx[0]), float(mx[1])


def point_in_polygon(points, poly) -> np.ndarray:
    """Vectorized even-odd test of many points against one polygon.

    points: (M,2) array-like
    poly:   (N,2) array-like, implicitly closed
    Returns a boolean array of shape (M,). Horizontal edges never count and a
    ray through a shared vertex is counted once (half-open rule in y).
    """
    pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
    ring = np.asarray(poly, dtype=np.float64)
    a = ring
    b = np.roll(ring, -1, axis=0)
    px = pts[:, 0][:, None]
    py = pts[:, 1][:, None]
    ax = a[:, 0][None, :]; ay = a[:, 1][None, :]
    bx = b[:, 0][None, :]; by = b[:, 1][None, :]
    dy = by - ay
    straddle = (ay > py) != (by > py)
    straddle &= np.abs(dy) >= EPS
    with np.errstate(divide='ignore', invalid='ignore'):
        xint = ax + (py - ay) * (bx - ax) / np.where(straddle, dy, 1.0)
    hits = straddle & (xint >= px)
    return (np.count_nonzero(hits, axis=1) % 2) == 1
