"""Splice a finished cut into its boundary to get the two resulting pieces.

This is a best-effort boundary walk, not a polygon boolean: starting at the
cut's exit point it follows the outline forward to the entry point and
closes the loop along the cut, then does the same from the entry point for
the other piece. The cut polyline is assumed to stay inside the polygon,
which is what the tracker produces for ordinary strokes.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

from .boundary import Boundary
from .constants import EPS
from .cut import CutRecord
from .errors import CutSplitError
from .geometry import Point, dedupe_points
from .logging_utils import get_logger
from .segment import Segment

logger = get_logger('polyslice.split')

__all__ = ['split_boundary', 'walk_boundary']


def walk_boundary(boundary: Boundary, from_edge: int, from_t: float, to_edge: int, to_t: float) -> List[Point]:
    """Vertices met walking forward from a point on one edge to a point on another.

    A point is given as (edge index, parameter along that edge). When both
    points sit on the same edge and the target lies ahead, no vertex is
    passed; otherwise the walk goes around the loop and may visit all of them.
    """
    n = len(boundary)
    verts = boundary.vertices
    if from_edge == to_edge and to_t >= from_t:
        return []
    out: List[Point] = []
    k = from_edge
    while True:
        k = (k + 1) % n
        out.append(verts[k])
        if k == to_edge:
            break
    return out


def _edge_position(boundary: Boundary, edge: Segment, which: str) -> int:
    idx = boundary.edge_index(edge)
    if idx < 0:
        raise CutSplitError(f"{which} edge {edge!r} is not part of this boundary")
    return idx


def split_boundary(boundary: Boundary, cut: CutRecord) -> Tuple[Boundary, Boundary]:
    """Split ``boundary`` along ``cut`` into (piece ahead of the exit, piece ahead of the entry).

    The first piece runs entry -> cut -> exit and then along the outline
    back to the entry; the second runs the cut backwards and along the rest
    of the outline. Both keep the original winding direction.

    Raises
    ------
    CutSplitError
        If the cut is not anchored on two edges of this boundary or a piece
        collapses below three vertices.
    """
    if not cut.is_anchored:
        raise CutSplitError("cannot split along a cut without both entry and exit edges")
    i = _edge_position(boundary, cut.entry_edge, 'entry')
    j = _edge_position(boundary, cut.exit_edge, 'exit')
    entry, exit_ = cut.entry_point, cut.exit_point
    t_entry = boundary.edges[i].parameter(entry)
    t_exit = boundary.edges[j].parameter(exit_)
    path: Sequence[Point] = cut.points

    ahead_of_exit = list(path) + walk_boundary(boundary, j, t_exit, i, t_entry)
    ahead_of_entry = list(reversed(path)) + walk_boundary(boundary, i, t_entry, j, t_exit)
    pieces = []
    for loop in (ahead_of_exit, ahead_of_entry):
        verts = dedupe_points(loop, EPS)
        if len(verts) < 3:
            raise CutSplitError(f"split produced a degenerate piece with {len(verts)} vertices")
        pieces.append(Boundary(verts))
    logger.debug("split %r along %d-segment cut into areas %.4g / %.4g",
                 boundary, len(cut), pieces[0].area, pieces[1].area)
    return pieces[0], pieces[1]
