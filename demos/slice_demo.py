#!/usr/bin/env python3
"""
Slice demo: generate a random polygon, sweep a synthetic cursor stroke across
it and save snapshots of the scene before and after the cut completes.

    python -m demos.slice_demo --seed 3 --out slice_demo.png
"""
from __future__ import annotations

import argparse

import numpy as np

from polyslice.core.config import SliceConfig
from polyslice.core.logging_utils import configure_logging, get_logger
from polyslice.core.session import SliceSession
from polyslice.core.stats import format_stats_table

logger = get_logger('polyslice.demo')


def wavy_stroke(session: SliceSession, samples: int = 60, amplitude: float = 40.0, angle: float = 0.3):
    """Cursor samples crossing the session polygon through its centroid with a sinusoidal wobble."""
    cx, cy = session.boundary.centroid
    half = 0.75 * session.boundary.size
    d = np.array([np.cos(angle), np.sin(angle)])
    n = np.array([-d[1], d[0]])
    s = np.linspace(-half, half, samples)
    wobble = amplitude * np.sin(np.linspace(0.0, 2.0 * np.pi, samples))
    pts = np.array([cx, cy]) + s[:, None] * d + wobble[:, None] * n
    return [tuple(p) for p in pts]


def run_slice_demo(seed=None, samples: int = 60, amplitude: float = 40.0, angle: float = 0.3,
                   spawn_ticks: int = 2, out_mid: str = 'slice_demo_mid.png', out: str = 'slice_demo.png'):
    cfg = SliceConfig.from_overrides(tracker={'spawn_ticks': spawn_ticks})
    session = SliceSession(800, 600, config=cfg, rng=seed)
    logger.info("polygon: %r", session.boundary)
    stroke = wavy_stroke(session, samples, amplitude, angle)

    half = len(stroke) // 2
    session.feed(stroke[:half])
    session.snapshot(out_mid, title='cut in progress')
    cuts = session.feed(stroke[half:])
    session.snapshot(out, title=f'{len(cuts)} cut(s)')

    for k, rec in enumerate(cuts):
        logger.info("cut %d: %d segments, length %.1f, entry (%.1f, %.1f) exit (%.1f, %.1f)",
                    k, len(rec), rec.length, rec.entry_point.x, rec.entry_point.y,
                    rec.exit_point.x, rec.exit_point.y)
    if session.pieces is not None:
        a, b = session.pieces
        logger.info("pieces: areas %.1f + %.1f (polygon %.1f)", a.area, b.area, session.boundary.area)
    print(format_stats_table(session.tracker.stats.to_dict()))
    return session


def main():
    ap = argparse.ArgumentParser(description='Slice a random polygon with a synthetic cursor stroke')
    ap.add_argument('--seed', type=int, default=None, help='RNG seed for the polygon')
    ap.add_argument('--samples', type=int, default=60, help='Number of cursor samples (ticks)')
    ap.add_argument('--amplitude', type=float, default=40.0, help='Sideways wobble of the stroke')
    ap.add_argument('--angle', type=float, default=0.3, help='Stroke direction in radians')
    ap.add_argument('--spawn-ticks', type=int, default=2, help='Ticks between recorded cut points')
    ap.add_argument('--out-mid', type=str, default='slice_demo_mid.png')
    ap.add_argument('--out', type=str, default='slice_demo.png')
    ap.add_argument('--log-level', type=str, default='INFO')
    args = ap.parse_args()

    configure_logging(args.log_level)
    run_slice_demo(seed=args.seed, samples=args.samples, amplitude=args.amplitude, angle=args.angle,
                   spawn_ticks=args.spawn_ticks, out_mid=args.out_mid, out=args.out)


if __name__ == '__main__':
    main()
