"""Tests for the SlicePathTracker state machine."""
import logging

import pytest

from polyslice.core.boundary import Boundary
from polyslice.core.config import TrackerConfig
from polyslice.core.tracker import SlicePathTracker, TrackerState

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]
U_SHAPE = [(0, 0), (30, 0), (30, 20), (20, 20), (20, 10), (10, 10), (10, 20), (0, 20)]


def run(tracker, samples):
    """Feed consecutive samples, returning every emitted record."""
    out = []
    for prev, cur in zip(samples, samples[1:]):
        rec = tracker.update(prev, cur)
        if rec is not None:
            out.append(rec)
    return out


def dense_tracker(points=SQUARE):
    # One vertex per tick with no spacing gate, so every sample lands in the polyline
    return SlicePathTracker(Boundary(points), TrackerConfig(spawn_ticks=1, min_point_fraction=0.0))


def segments_cross(a, b):
    p = a.intersect(b)
    return p is not None and a.contains_point(p) and b.contains_point(p)


class TestSingleSlice:

    def test_clean_slice_over_two_ticks(self):
        b = Boundary(SQUARE)
        tracker = SlicePathTracker(b)
        assert tracker.update((-5, 5), (5, 5)) is None
        assert tracker.state is TrackerState.ACTIVE
        assert tracker.entry_edge is b.edges[3]
        rec = tracker.update((5, 5), (15, 5))
        assert rec is not None
        assert rec.points[0] == pytest.approx((0.0, 5.0), abs=1e-4)
        assert rec.points[-1] == pytest.approx((10.0, 5.0), abs=1e-4)
        assert rec.entry_edge is b.edges[3]
        assert rec.exit_edge is b.edges[1]
        assert rec.is_anchored
        assert tracker.state is TrackerState.IDLE
        assert tracker.in_progress_polyline() == ()

    def test_multi_crossing_in_one_tick(self):
        b = Boundary(SQUARE)
        tracker = SlicePathTracker(b)
        emitted = []
        tracker.add_listener(emitted.append)
        rec = tracker.update((-5, 5), (15, 5))
        assert rec is not None
        assert emitted == [rec]
        assert rec.entry_point == pytest.approx((0.0, 5.0))
        assert rec.exit_point == pytest.approx((10.0, 5.0))
        assert rec.entry_edge is b.edges[3]
        assert rec.exit_edge is b.edges[1]
        assert tracker.state is TrackerState.IDLE
        assert tracker.stats.multi_crossing_ticks == 1

    def test_reverse_direction(self):
        b = Boundary(SQUARE)
        rec = SlicePathTracker(b).update((15, 5), (-5, 5))
        assert rec.entry_edge is b.edges[1]
        assert rec.exit_edge is b.edges[3]
        assert rec.entry_point == pytest.approx((10.0, 5.0))

    def test_concave_sweep_emits_every_cut(self):
        tracker = SlicePathTracker(Boundary(U_SHAPE))
        emitted = []
        tracker.add_listener(emitted.append)
        rec = tracker.update((-5, 15), (35, 15))
        assert len(emitted) == 2
        assert rec is emitted[-1]
        assert emitted[0].entry_point.x == pytest.approx(0.0)
        assert emitted[0].exit_point.x == pytest.approx(10.0)
        assert emitted[1].entry_point.x == pytest.approx(20.0)
        assert emitted[1].exit_point.x == pytest.approx(30.0)

    def test_multi_crossing_ending_inside_keeps_cut_open(self):
        tracker = SlicePathTracker(Boundary(U_SHAPE))
        rec = tracker.update((-5, 15), (25, 15))
        assert rec is not None
        assert rec.exit_point.x == pytest.approx(10.0)
        assert tracker.is_active
        assert tracker.last_point == pytest.approx((20.0, 15.0))


class TestNoOps:

    def test_path_outside_never_emits(self):
        tracker = SlicePathTracker(Boundary(SQUARE))
        assert tracker.update((-5, -5), (-1, -1)) is None
        assert tracker.in_progress_polyline() == ()
        assert tracker.state is TrackerState.IDLE

    def test_outside_path_with_many_ticks(self):
        tracker = dense_tracker()
        recs = run(tracker, [(-5, -5), (-1, -1), (-3, 12), (12, 12), (12, -2)])
        assert recs == []
        assert tracker.in_progress_polyline() == ()
        assert tracker.stats.cuts_opened == 0

    def test_degenerate_step(self):
        tracker = SlicePathTracker(Boundary(SQUARE))
        assert tracker.update((3, 3), (3, 3)) is None
        assert tracker.state is TrackerState.IDLE
        assert tracker.stats.degenerate_ticks == 1

    def test_in_and_out_through_one_edge_without_vertex(self):
        b = Boundary(SQUARE)
        tracker = SlicePathTracker(b)
        emitted = []
        tracker.add_listener(emitted.append)
        assert tracker.update((5, -2), (3, 1)) is None
        assert tracker.entry_edge is b.edges[0]
        assert tracker.in_progress_polyline() == ()
        assert tracker.update((3, 1), (1, -1)) is None
        assert emitted == []
        assert tracker.state is TrackerState.IDLE
        assert tracker.stats.cuts_abandoned == 1
        assert tracker.stats.cuts_emitted == 0

    def test_notch_through_one_edge_with_vertex_is_kept(self):
        tracker = dense_tracker()
        recs = run(tracker, [(5, -2), (3, 1), (1, -1)])
        assert len(recs) == 1
        assert len(recs[0]) == 2
        assert recs[0].entry_edge is recs[0].exit_edge is tracker.boundary.edges[0]

    def test_leaving_while_idle_does_not_emit(self):
        tracker = SlicePathTracker(Boundary(SQUARE))
        tracker.reset()
        assert tracker.update((5, 5), (15, 5)) is None
        assert tracker.state is TrackerState.IDLE


class TestImplicitOpen:

    def test_inside_to_inside_while_idle_opens_at_current(self):
        tracker = SlicePathTracker(Boundary(SQUARE))
        assert tracker.update((4, 4), (6, 4)) is None
        assert tracker.state is TrackerState.ACTIVE
        assert tracker.entry_edge is None
        assert tracker.last_point == pytest.approx((6.0, 4.0))
        assert tracker.entry_point == tracker.last_point

    def test_cut_started_inside_is_not_anchored(self):
        tracker = dense_tracker()
        recs = run(tracker, [(4, 4), (6, 4), (8, 4), (12, 4)])
        assert len(recs) == 1
        assert recs[0].entry_edge is None
        assert not recs[0].is_anchored
        assert recs[0].points[0] == pytest.approx((6.0, 4.0))
        assert recs[0].points[-1] == pytest.approx((10.0, 4.0))


class TestReset:

    def test_reset_is_idempotent(self):
        tracker = dense_tracker()
        run(tracker, [(-1, 5), (3, 5), (5, 6)])
        assert tracker.in_progress_polyline()
        tracker.reset()
        first = (tracker.state, tracker.in_progress_polyline(), tracker.entry_edge, tracker.last_point)
        tracker.reset()
        second = (tracker.state, tracker.in_progress_polyline(), tracker.entry_edge, tracker.last_point)
        assert first == second == (TrackerState.IDLE, (), None, None)
        assert tracker.stats.cuts_abandoned == 1

    def test_reset_on_fresh_tracker(self):
        tracker = SlicePathTracker(Boundary(SQUARE))
        tracker.reset()
        tracker.reset()
        assert tracker.state is TrackerState.IDLE
        assert tracker.in_progress_polyline() == ()

    def test_set_boundary_drops_cut(self):
        tracker = dense_tracker()
        run(tracker, [(-1, 5), (3, 5)])
        assert tracker.is_active
        other = Boundary([(100, 100), (200, 100), (150, 200)])
        tracker.set_boundary(other)
        assert tracker.boundary is other
        assert not tracker.is_active
        assert tracker.in_progress_polyline() == ()


class TestDensification:

    def test_vertex_every_spawn_ticks(self):
        tracker = SlicePathTracker(Boundary(SQUARE), TrackerConfig(spawn_ticks=2, min_point_fraction=0.0))
        run(tracker, [(-1, 5), (1, 5), (2, 5), (3, 5), (4, 5)])
        poly = tracker.in_progress_polyline()
        assert len(poly) == 2
        assert poly[0].start == pytest.approx((0.0, 5.0))
        assert poly[0].end == pytest.approx((2.0, 5.0))
        assert poly[1].end == pytest.approx((4.0, 5.0))

    def test_min_distance_gate(self):
        b = Boundary(SQUARE)
        tracker = SlicePathTracker(b, TrackerConfig(spawn_ticks=1, min_point_fraction=0.5))
        run(tracker, [(-1, 5), (1, 5), (3, 5)])
        assert tracker.in_progress_polyline() == ()
        tracker.update((3, 5), (8, 5))
        poly = tracker.in_progress_polyline()
        assert len(poly) == 1
        assert poly[0].end == pytest.approx((8.0, 5.0))

    def test_no_zero_length_segments(self):
        tracker = dense_tracker()
        samples = [(-1, 5), (2, 5), (2, 5), (2.00001, 5), (6, 5), (6, 5), (12, 5)]
        recs = run(tracker, samples)
        assert len(recs) == 1
        assert all(seg.length > 1e-4 for seg in recs[0].segments)

    def test_polyline_is_connected(self):
        tracker = dense_tracker()
        recs = run(tracker, [(-1, 2), (2, 3), (4, 6), (7, 5), (9, 8), (11, 9)])
        assert len(recs) == 1
        segs = recs[0].segments
        for a, b in zip(segs, segs[1:]):
            assert a.end == b.start


class TestSelfIntersection:

    LOOP = [(-1, 5), (2, 5), (6, 5), (6, 8), (4, 8), (4, 2), (8, 2), (12, 2)]

    def test_loop_restarts_polyline_at_crossing(self):
        tracker = dense_tracker()
        b = tracker.boundary
        recs = run(tracker, self.LOOP)
        assert len(recs) == 1
        rec = recs[0]
        assert rec.points[0] == pytest.approx((4.0, 5.0))
        assert rec.points[-1] == pytest.approx((10.0, 2.0))
        assert rec.entry_edge is None
        assert rec.exit_edge is b.edges[1]
        assert tracker.stats.self_intersections == 1

    def test_emitted_polyline_has_no_self_crossings(self):
        tracker = dense_tracker()
        rec = run(tracker, self.LOOP)[0]
        segs = rec.segments
        for i in range(len(segs)):
            for j in range(i + 2, len(segs)):
                assert not segments_cross(segs[i], segs[j])

    def test_loop_back_across_first_segment(self):
        tracker = dense_tracker()
        recs = run(tracker, [(-1, 5), (3, 5), (3, 8), (6, 8), (6, 2), (1, 2), (2, 9), (2, 12)])
        assert len(recs) == 1
        segs = recs[0].segments
        assert recs[0].points[0] == pytest.approx((1.0 + 3.0 / 7.0, 5.0))
        assert recs[0].points[-1] == pytest.approx((2.0, 10.0))
        for i in range(len(segs)):
            for j in range(i + 2, len(segs)):
                assert not segments_cross(segs[i], segs[j])
        assert tracker.stats.self_intersections == 1

    def test_detection_can_be_disabled(self):
        tracker = SlicePathTracker(Boundary(SQUARE),
                                   TrackerConfig(spawn_ticks=1, min_point_fraction=0.0,
                                                 detect_self_intersections=False))
        rec = run(tracker, self.LOOP)[0]
        assert rec.points[0] == pytest.approx((0.0, 5.0))
        assert tracker.stats.self_intersections == 0


class TestUnresolvedCrossing:

    def test_entry_through_vertex_resets_and_logs(self, caplog):
        tracker = SlicePathTracker(Boundary(SQUARE))
        with caplog.at_level(logging.WARNING, logger='polyslice'):
            assert tracker.update((-5, -5), (5, 5)) is None
        assert tracker.state is TrackerState.IDLE
        assert tracker.in_progress_polyline() == ()
        assert tracker.stats.unresolved_crossings == 1
        assert any('dropping cut' in r.getMessage() for r in caplog.records)

    def test_exit_through_vertex_drops_cut(self):
        tracker = dense_tracker()
        emitted = []
        tracker.add_listener(emitted.append)
        run(tracker, [(-1, 5), (3, 5), (5, 5)])
        assert tracker.is_active
        assert tracker.update((5, 5), (15, 15)) is None
        assert emitted == []
        assert tracker.state is TrackerState.IDLE
        assert tracker.stats.unresolved_crossings == 1
        assert tracker.stats.cuts_abandoned == 1


class TestListenersAndStats:

    def test_listener_receives_each_cut(self):
        tracker = SlicePathTracker(Boundary(SQUARE))
        seen = []
        tracker.add_listener(seen.append)
        tracker.update((-5, 5), (15, 5))
        tracker.update((5, -5), (5, 15))
        assert len(seen) == 2
        tracker.remove_listener(seen.append)
        tracker.update((-5, 3), (15, 3))
        assert len(seen) == 2

    def test_stats_counts(self):
        tracker = SlicePathTracker(Boundary(SQUARE))
        tracker.update((-5, 5), (15, 5))
        tracker.update((1, 1), (1, 1))
        d = tracker.stats.to_dict()
        assert d['ticks'] == 2
        assert d['cuts_opened'] == 1
        assert d['cuts_emitted'] == 1
        assert d['degenerate_ticks'] == 1
        assert d['completion_rate'] == pytest.approx(1.0)
