"""Random polygon generation for new rounds.

Vertices are spread evenly around a circle, each one nudged by a random
radius and angle offset. With the default jitter the result is a gently
irregular polygon of 3 to 7 sides that stays star-shaped around the center.
"""
from __future__ import annotations

import math
from typing import Optional, Tuple, Union

import numpy as np

from .boundary import Boundary
from .config import ShapeConfig
from .geometry import Point

__all__ = [
    'random_polygon_points', 'random_boundary', 'canvas_layout', 'canvas_boundary', 'regular_polygon_points',
]

RngLike = Union[None, int, np.random.Generator]


def _rng(rng: RngLike) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def regular_polygon_points(center, radius: float, sides: int, phase: float = 0.0) -> np.ndarray:
    """(sides, 2) array of vertices of a regular polygon, counter-clockwise."""
    ang = phase + np.arange(sides) * (2.0 * math.pi / sides)
    return np.column_stack([center[0] + radius * np.cos(ang), center[1] + radius * np.sin(ang)])


def random_polygon_points(center, base_radius: float, rng: RngLike = None,
                          config: Optional[ShapeConfig] = None, sides: Optional[int] = None) -> np.ndarray:
    cfg = config or ShapeConfig()
    gen = _rng(rng)
    if sides is None:
        sides = int(gen.integers(cfg.min_sides, cfg.max_sides + 1))
    if sides < 3:
        raise ValueError(f"a polygon needs at least 3 sides, got {sides}")
    base = np.arange(sides) * (2.0 * math.pi / sides)
    radius = base_radius + (gen.random(sides) - 0.5) * cfg.radius_jitter
    angle = base + (gen.random(sides) - 0.5) * cfg.angle_jitter
    return np.column_stack([center[0] + radius * np.cos(angle), center[1] + radius * np.sin(angle)])


def random_boundary(center, base_radius: float, rng: RngLike = None,
                    config: Optional[ShapeConfig] = None, sides: Optional[int] = None) -> Boundary:
    return Boundary(random_polygon_points(center, base_radius, rng, config, sides).tolist())


def canvas_layout(width: float, height: float, config: Optional[ShapeConfig] = None) -> Tuple[Point, float]:
    """Center and base radius that fit a polygon on a canvas with a margin around it."""
    cfg = config or ShapeConfig()
    margin = height * cfg.margin_fraction
    return Point(width / 2.0, height / 2.0), (height - 2.0 * margin) / 2.0


def canvas_boundary(width: float, height: float, rng: RngLike = None,
                    config: Optional[ShapeConfig] = None) -> Boundary:
    center, radius = canvas_layout(width, height, config)
    return random_boundary(center, radius, rng, config)
