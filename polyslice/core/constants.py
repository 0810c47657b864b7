"""Central numerical tolerances and small geometry constants.

This module centralizes the tiny numeric thresholds used by the slicing core
so they can be tuned consistently and referenced without scattering literals.
Coordinates are screen-space units (pixels), which is what EPS is sized for.
"""
from __future__ import annotations

# Geometry tolerances
EPS: float = 1e-4                 # generic zero test for coordinates and distances
EPS_PARALLEL: float = 1e-4        # |sin(angle)| below which two lines count as parallel

# Fraction of a segment's own length by which both endpoints are pulled inward
# for bounded tests, so adjacent boundary edges never both claim a shared vertex.
SEGMENT_INSET: float = EPS * 5

# Tracker defaults
DEFAULT_SPAWN_TICKS: int = 2          # ticks between polyline vertices
DEFAULT_MIN_POINT_FRACTION: float = 0.02  # of the polygon's bbox diagonal
DEFAULT_FADE_TICKS: int = 10          # frames a finished cut stays visible

__all__ = [
    'EPS',
    'EPS_PARALLEL',
    'SEGMENT_INSET',
    'DEFAULT_SPAWN_TICKS',
    'DEFAULT_MIN_POINT_FRACTION',
    'DEFAULT_FADE_TICKS',
]
