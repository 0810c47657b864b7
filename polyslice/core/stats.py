"""Tracker counters and presentation utilities."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict


@dataclass
class TrackerStats:
    ticks: int = 0
    degenerate_ticks: int = 0
    multi_crossing_ticks: int = 0
    cuts_opened: int = 0
    cuts_emitted: int = 0
    cuts_abandoned: int = 0
    self_intersections: int = 0
    unresolved_crossings: int = 0
    segments_recorded: int = 0

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, 0)

    def to_dict(self) -> Dict[str, Any]:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d['completion_rate'] = (self.cuts_emitted / self.cuts_opened) if self.cuts_opened else 0.0
        return d


def format_stats_table(stats_dict) -> str:
    """Return a human readable two-column table of tracker counters."""
    if not stats_dict:
        return "<no stats>"
    rows = []
    for key, val in stats_dict.items():
        rows.append([key, f"{val:.3f}" if isinstance(val, float) else str(val)])
    kw = max(len(r[0]) for r in rows)
    vw = max(len(r[1]) for r in rows)
    lines = ["counter".ljust(kw) + " " + "value".rjust(vw), "-" * (kw + vw + 1)]
    lines += [r[0].ljust(kw) + " " + r[1].rjust(vw) for r in rows]
    return "\n".join(lines)


__all__ = ['TrackerStats', 'format_stats_table']
