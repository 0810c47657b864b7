"""Exception types raised by the slicing core."""
from __future__ import annotations


class SliceError(Exception):
    """Base class for polyslice errors."""


class InvalidBoundaryError(SliceError, ValueError):
    """A boundary could not be built from the supplied vertices."""


class UnresolvedCrossingError(SliceError):
    """Containment says the path crossed the boundary but no crossing point was found.

    Raised inside a tracker tick and handled at the tick boundary; callers of
    ``SlicePathTracker.update`` never see it.
    """

    def __init__(self, prev, cur, transition: str):
        super().__init__(f"no boundary crossing found for {transition} step {tuple(prev)} -> {tuple(cur)}")
        self.prev = prev
        self.cur = cur
        self.transition = transition


class CutSplitError(SliceError, ValueError):
    """A cut record cannot be spliced into its boundary."""


__all__ = ['SliceError', 'InvalidBoundaryError', 'UnresolvedCrossingError', 'CutSplitError']
