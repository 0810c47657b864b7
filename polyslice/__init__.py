"""Public package API for the polyslice toolkit.

This facade provides a flat import surface on top of the implementation
package ``polyslice.core``. The rendering module (and with it matplotlib)
is only imported on first use so that ``import polyslice`` stays light for
hosts that draw with something else.

Example
-------
    from polyslice import Boundary, SlicePathTracker

    tracker = SlicePathTracker(Boundary([(0, 0), (10, 0), (10, 10), (0, 10)]))
    record = tracker.update((-5, 5), (15, 5))

The deeper modules (``polyslice.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import version as _pkg_version
    __version__ = _pkg_version("polyslice")  # populated when installed
except Exception:  # pragma: no cover - editable / unknown state
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# Eager light-weight submodules
_const = _imp('polyslice.core.constants')
_geom = _imp('polyslice.core.geometry')
_seg = _imp('polyslice.core.segment')
_bnd = _imp('polyslice.core.boundary')
_cut = _imp('polyslice.core.cut')
_trk = _imp('polyslice.core.tracker')
_err = _imp('polyslice.core.errors')
_cfg = _imp('polyslice.core.config')
_gen = _imp('polyslice.core.generation')
_split = _imp('polyslice.core.splitting')
_stats = _imp('polyslice.core.stats')
_log = _imp('polyslice.core.logging_utils')


def _lazy_module(mod_name):
    class _ModuleProxy:
        __slots__ = ('_m',)

        def _load(self):
            try:
                return self._m
            except AttributeError:
                self._m = _imp(mod_name)
                return self._m

        def __getattr__(self, item):
            if item == '_m':  # unset slot, still loading
                raise AttributeError(item)
            return getattr(self._load(), item)

        def __dir__(self):
            return dir(self._load())
    return _ModuleProxy()


# Lazily loaded modules that pull in matplotlib
visualization = _lazy_module('polyslice.core.visualization')
session = _lazy_module('polyslice.core.session')

# Core types and operations
Point = _geom.Point
Segment = _seg.Segment
Boundary = _bnd.Boundary
CrossingPoint = _bnd.CrossingPoint
CutRecord = _cut.CutRecord
SlicePathTracker = _trk.SlicePathTracker
TrackerState = _trk.TrackerState
split_boundary = _split.split_boundary
random_boundary = _gen.random_boundary
canvas_boundary = _gen.canvas_boundary

# Errors
SliceError = _err.SliceError
InvalidBoundaryError = _err.InvalidBoundaryError
UnresolvedCrossingError = _err.UnresolvedCrossingError
CutSplitError = _err.CutSplitError

# Configuration, stats and logging
TrackerConfig = _cfg.TrackerConfig
ShapeConfig = _cfg.ShapeConfig
FadeConfig = _cfg.FadeConfig
SliceConfig = _cfg.SliceConfig
TrackerStats = _stats.TrackerStats
get_logger = _log.get_logger
configure_logging = _log.configure_logging
EPS = _const.EPS

# Namespace submodules for exploratory users
constants = _const
geometry = _geom
generation = _gen
splitting = _split

__all__ = [
    '__version__',
    # core
    'Point', 'Segment', 'Boundary', 'CrossingPoint', 'CutRecord',
    'SlicePathTracker', 'TrackerState', 'split_boundary',
    'random_boundary', 'canvas_boundary',
    # errors
    'SliceError', 'InvalidBoundaryError', 'UnresolvedCrossingError', 'CutSplitError',
    # config / stats / logging
    'TrackerConfig', 'ShapeConfig', 'FadeConfig', 'SliceConfig', 'TrackerStats',
    'get_logger', 'configure_logging', 'EPS',
    # submodules / namespaces
    'constants', 'geometry', 'generation', 'splitting', 'visualization', 'session',
]
