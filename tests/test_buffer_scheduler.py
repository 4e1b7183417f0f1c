"""
Buffer Scheduler Test Suite.

Covers multipliers, clamping, gap handling, priority escalation,
per-day risk metrics and the derived advice.

Run with: python -m pytest tests/test_buffer_scheduler.py -v
"""

import unittest
from datetime import timedelta

from pydantic import ValidationError

from app.models import BufferConfig, BufferRecommendation
from app.services.buffer_scheduler import (
    DEFAULT_BUFFER_CONFIG,
    calculate_buffer_multiplier,
    calculate_recommended_buffer,
    compute_dynamic_buffers,
    get_buffer_recommendations,
    get_risk_metrics,
    summarize_buffers,
)
from app.utils.mock_data import generate_mock_week
from tests.helpers import MONDAY, at, make_event

ESCALATING_CONFIG = BufferConfig(critical_priority_threshold=5, elevated_priority_threshold=4)


class TestDefaultConfig(unittest.TestCase):
    """Documented defaults."""

    def test_defaults(self):
        self.assertEqual(DEFAULT_BUFFER_CONFIG.base_buffer_minutes, 15)
        self.assertEqual(DEFAULT_BUFFER_CONFIG.exam_multiplier, 3.0)
        self.assertEqual(DEFAULT_BUFFER_CONFIG.project_multiplier, 2.0)
        self.assertEqual(DEFAULT_BUFFER_CONFIG.work_multiplier, 1.5)
        self.assertEqual(DEFAULT_BUFFER_CONFIG.max_buffer_minutes, 120)
        self.assertEqual(DEFAULT_BUFFER_CONFIG.min_buffer_minutes, 5)
        self.assertIsNone(DEFAULT_BUFFER_CONFIG.critical_priority_threshold)
        self.assertIsNone(DEFAULT_BUFFER_CONFIG.elevated_priority_threshold)

    def test_min_above_max_rejected(self):
        with self.assertRaises(ValidationError):
            BufferConfig(min_buffer_minutes=30, max_buffer_minutes=20)

    def test_non_positive_base_rejected(self):
        with self.assertRaises(ValidationError):
            BufferConfig(base_buffer_minutes=0)


class TestMultipliers(unittest.TestCase):
    """Type and priority driven buffer sizes."""

    def test_type_multipliers(self):
        expected = {"exam": 3.0, "project": 2.0, "work": 1.5, "class": 1.0, "personal": 1.0}
        for event_type, multiplier in expected.items():
            event = make_event("e", at(0, 9), 60, event_type=event_type, priority=5)
            self.assertEqual(calculate_buffer_multiplier(event), multiplier, event_type)

    def test_escalation_is_opt_in(self):
        event = make_event("e", at(0, 9), 60, event_type="exam", priority=5)
        self.assertEqual(calculate_recommended_buffer(event), 45)
        self.assertAlmostEqual(calculate_recommended_buffer(event, ESCALATING_CONFIG), 58.5)

    def test_elevated_priority(self):
        event = make_event("e", at(0, 9), 60, event_type="project", priority=4)
        self.assertAlmostEqual(calculate_buffer_multiplier(event, ESCALATING_CONFIG), 2.2)

    def test_below_thresholds_unchanged(self):
        event = make_event("e", at(0, 9), 60, event_type="work", priority=3)
        self.assertEqual(calculate_buffer_multiplier(event, ESCALATING_CONFIG), 1.5)

    def test_clamped_to_max(self):
        config = BufferConfig(base_buffer_minutes=60)
        event = make_event("e", at(0, 9), 60, event_type="exam")
        self.assertEqual(calculate_recommended_buffer(event, config), 120)

    def test_clamped_to_min(self):
        config = BufferConfig(base_buffer_minutes=2)
        event = make_event("e", at(0, 9), 60, event_type="personal")
        self.assertEqual(calculate_recommended_buffer(event, config), 5)


class TestComputeDynamicBuffers(unittest.TestCase):
    """Gap detection between consecutive events."""

    def test_exam_followed_closely(self):
        events = [
            make_event("exam", at(0, 9), 120, event_type="exam", priority=5),
            make_event("lecture", at(0, 11, 5), 60),
        ]
        buffers = compute_dynamic_buffers(events, DEFAULT_BUFFER_CONFIG)

        self.assertEqual(
            buffers,
            [BufferRecommendation(after_event_id="exam", duration_minutes=40, reason="Buffer after exam (priority 5)")],
        )

    def test_escalated_exam(self):
        events = [
            make_event("exam", at(0, 9), 120, event_type="exam", priority=5),
            make_event("lecture", at(0, 11, 5), 60),
        ]
        buffers = compute_dynamic_buffers(events, ESCALATING_CONFIG)
        # 58.5 - 5 rounds half up
        self.assertEqual(buffers[0].duration_minutes, 54)

    def test_personal_events_an_hour_apart(self):
        events = [
            make_event("gym", at(0, 9), 60, event_type="personal"),
            make_event("lunch", at(0, 11), 60, event_type="personal"),
        ]
        self.assertEqual(compute_dynamic_buffers(events), [])

    def test_order_independent(self):
        events = [
            make_event("a", at(0, 8), 60, event_type="work", priority=2),
            make_event("b", at(0, 9, 10), 60, event_type="project", priority=4),
            make_event("c", at(0, 10, 15), 90, event_type="exam", priority=5),
            make_event("d", at(0, 12), 30),
            make_event("e", at(0, 12), 90, event_type="exam", priority=5),
        ]
        shuffled = [events[4], events[2], events[0], events[3], events[1]]
        self.assertEqual(compute_dynamic_buffers(shuffled), compute_dynamic_buffers(events))

    def test_same_start_ties_are_stable(self):
        exam = make_event("exam", at(0, 9), 60, event_type="exam", priority=5)
        gym = make_event("gym", at(0, 9), 30, event_type="personal")
        lecture = make_event("lecture", at(0, 11), 60)

        expected = [BufferRecommendation(after_event_id="gym", duration_minutes=15, reason="Buffer after personal (priority 3)")]
        self.assertEqual(compute_dynamic_buffers([exam, gym, lecture]), expected)
        self.assertEqual(compute_dynamic_buffers([gym, exam, lecture]), expected)

    def test_overlap_counts_as_zero_gap(self):
        events = [
            make_event("shift", at(0, 9), 60, event_type="work"),
            make_event("call", at(0, 9, 30), 60, event_type="personal"),
        ]
        buffers = compute_dynamic_buffers(events)
        # 22.5 minutes rounds half up
        self.assertEqual(buffers[0].duration_minutes, 23)

    def test_no_buffer_after_last_event(self):
        events = [make_event("only", at(0, 9), 60, event_type="exam", priority=5)]
        self.assertEqual(compute_dynamic_buffers(events), [])
        self.assertEqual(compute_dynamic_buffers([]), [])

    def test_sub_half_minute_shortfall_dropped(self):
        config = BufferConfig(base_buffer_minutes=10)
        first = make_event("a", at(0, 9), 60)
        second = make_event("b", first.end_time + timedelta(minutes=9, seconds=48), 30)
        self.assertEqual(compute_dynamic_buffers([first, second], config), [])

    def test_half_minute_shortfall_rounds_up(self):
        config = BufferConfig(base_buffer_minutes=10)
        first = make_event("a", at(0, 9), 60)
        second = make_event("b", first.end_time + timedelta(minutes=9, seconds=30), 30)
        buffers = compute_dynamic_buffers([first, second], config)
        self.assertEqual(buffers[0].duration_minutes, 1)

    def test_mock_week(self):
        buffers = compute_dynamic_buffers(generate_mock_week(MONDAY))
        self.assertEqual([(b.after_event_id, b.duration_minutes) for b in buffers], [("evt-5", 30)])


class TestRiskMetrics(unittest.TestCase):
    """Per-day event and buffer counts."""

    def test_counts_per_day(self):
        events = [
            make_event("m1", at(0, 9), 60, event_type="exam"),
            make_event("m2", at(0, 10), 60),
            make_event("t1", at(1, 9), 60),
        ]
        buffers = compute_dynamic_buffers(events)
        metrics = get_risk_metrics(events, buffers)

        self.assertEqual(set(metrics), {"2026-10-12", "2026-10-13"})
        self.assertEqual(metrics["2026-10-12"].event_count, 2)
        self.assertEqual(metrics["2026-10-12"].buffered_events, 1)
        self.assertEqual(metrics["2026-10-13"].event_count, 1)
        self.assertEqual(metrics["2026-10-13"].buffered_events, 0)

    def test_unknown_buffer_event_ignored(self):
        events = [make_event("m1", at(0, 9), 60)]
        buffers = [BufferRecommendation(after_event_id="ghost", duration_minutes=10, reason="x")]
        metrics = get_risk_metrics(events, buffers)
        self.assertEqual(metrics["2026-10-12"].buffered_events, 0)


class TestBufferRecommendations(unittest.TestCase):
    """Advice derived from events and buffers."""

    def test_quiet_schedule(self):
        events = generate_mock_week(MONDAY)
        self.assertEqual(get_buffer_recommendations(events, compute_dynamic_buffers(events)), [])

    def test_packed_day(self):
        # seven back-to-back classes on Monday
        events = [make_event(f"c{i}", at(0, 8 + i), 55) for i in range(7)]
        buffers = compute_dynamic_buffers(events)
        recommendations = get_buffer_recommendations(events, buffers)

        self.assertEqual(len(buffers), 6)
        self.assertIn("Consider reducing events on days with 7 activities", recommendations)
        self.assertIn(
            "Your schedule has many back-to-back events - add more space between tasks",
            recommendations,
        )

    def test_critical_priority_clustering(self):
        events = [make_event(f"x{i}", at(i, 9), 60, event_type="exam", priority=5) for i in range(4)]
        recommendations = get_buffer_recommendations(events, [])
        self.assertEqual(
            recommendations,
            ["You have many critical-priority items - consider spreading them out"],
        )

    def test_three_critical_items_is_fine(self):
        events = [make_event(f"x{i}", at(i, 9), 60, priority=5) for i in range(3)]
        self.assertEqual(get_buffer_recommendations(events, []), [])


class TestSummary(unittest.TestCase):

    def test_total_and_daily_average(self):
        buffers = [
            BufferRecommendation(after_event_id="a", duration_minutes=30, reason="r"),
            BufferRecommendation(after_event_id="b", duration_minutes=40, reason="r"),
        ]
        self.assertEqual(summarize_buffers(buffers), (70, 10))
        self.assertEqual(summarize_buffers([]), (0, 0))


if __name__ == "__main__":
    unittest.main()
