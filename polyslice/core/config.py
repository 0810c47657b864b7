"""Configuration objects for the slice tracker, shape generation and cut display."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from .constants import DEFAULT_FADE_TICKS, DEFAULT_MIN_POINT_FRACTION, DEFAULT_SPAWN_TICKS


@dataclass
class TrackerConfig:
    spawn_ticks: int = DEFAULT_SPAWN_TICKS
    # Minimum spacing between recorded vertices as a fraction of the polygon's bbox diagonal
    min_point_fraction: float = DEFAULT_MIN_POINT_FRACTION
    detect_self_intersections: bool = True

    def __post_init__(self):
        if self.spawn_ticks < 1:
            raise ValueError(f"spawn_ticks must be >= 1, got {self.spawn_ticks}")
        if self.min_point_fraction < 0.0:
            raise ValueError(f"min_point_fraction must be >= 0, got {self.min_point_fraction}")


@dataclass
class ShapeConfig:
    """Random polygon generation parameters.

    - min_sides / max_sides: inclusive vertex count range.
    - margin_fraction: empty border kept around the polygon, as a fraction of the canvas height.
    - radius_jitter: total spread of the per-vertex radius (screen units).
    - angle_jitter: total spread of the per-vertex angle (radians).
    """
    min_sides: int = 3
    max_sides: int = 7
    margin_fraction: float = 0.1
    radius_jitter: float = 30.0
    angle_jitter: float = 0.4

    def __post_init__(self):
        if self.min_sides < 3 or self.max_sides < self.min_sides:
            raise ValueError(f"invalid side range [{self.min_sides}, {self.max_sides}]")


@dataclass
class FadeConfig:
    show_ticks: int = DEFAULT_FADE_TICKS

    def __post_init__(self):
        if self.show_ticks < 1:
            raise ValueError(f"show_ticks must be >= 1, got {self.show_ticks}")


@dataclass
class SliceConfig:
    """Unified configuration.

    Attributes
    ----------
    tracker : TrackerConfig
        Polyline densification and self-intersection handling.
    shape : ShapeConfig
        Random polygon generation.
    fade : FadeConfig
        Lifetime of finished cuts on screen.
    extras : dict
        Free-form dictionary for host-specific settings.
    """
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    shape: ShapeConfig = field(default_factory=ShapeConfig)
    fade: FadeConfig = field(default_factory=FadeConfig)
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_overrides(cls, **sections: Dict[str, Any]) -> 'SliceConfig':
        """Build a config from per-section override dicts, e.g. ``tracker={'spawn_ticks': 1}``."""
        cfg = cls()
        for name, overrides in sections.items():
            if name == 'extras':
                cfg.extras.update(overrides)
                continue
            section = getattr(cfg, name, None)
            if section is None:
                raise ValueError(f"unknown config section '{name}'")
            for k, v in overrides.items():
                if not hasattr(section, k):
                    raise ValueError(f"unknown {name} option '{k}'")
                setattr(section, k, v)
            validate = getattr(section, '__post_init__', None)
            if validate is not None:
                validate()
        return cfg


__all__ = ['TrackerConfig', 'ShapeConfig', 'FadeConfig', 'SliceConfig']
