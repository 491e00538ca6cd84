import unittest

from game import (
    Displacement,
    MergeEvent,
    MoveAnimator,
    merge_pulse_scale,
    spawn_grow_scale,
)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


SLIDE = (Displacement(source=(0, 3), dest=(0, 0), value=2),)
MERGE = MergeEvent(cell=(0, 0), value=4)
SPAWN = MergeEvent(cell=(2, 2), value=2, is_newly_spawned=True)


class TestMoveAnimator(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock(1000.0)
        self.anim = MoveAnimator(clock=self.clock)

    def test_given_idle_animator_when_sampling_then_empty_frame_and_complete(self):
        frame = self.anim.sample()
        self.assertEqual(frame.tile_positions, ())
        self.assertEqual(frame.tile_scales, ())
        self.assertTrue(self.anim.is_complete())
        self.assertFalse(self.anim.active)

    def test_given_timeline_when_sampling_midway_then_position_interpolated(self):
        self.anim.begin(SLIDE, (), 100)
        frame = self.anim.sample(1050)
        self.assertAlmostEqual(frame.progress, 0.5)
        pos = frame.tile_positions[0]
        self.assertEqual(pos.row, 0)
        self.assertAlmostEqual(pos.col, 1.5)
        self.assertEqual(pos.value, 2)

    def test_given_out_of_range_timestamps_when_sampling_then_clamped(self):
        self.anim.begin(SLIDE, (), 100)
        early = self.anim.sample(900)
        late = self.anim.sample(5000)
        self.assertEqual(early.progress, 0.0)
        self.assertAlmostEqual(early.tile_positions[0].col, 3.0)
        self.assertEqual(late.progress, 1.0)
        self.assertAlmostEqual(late.tile_positions[0].col, 0.0)

    def test_given_same_timestamp_when_sampling_twice_then_identical_frames(self):
        self.anim.begin(SLIDE, (MERGE, SPAWN), 100)
        self.assertEqual(self.anim.sample(1070), self.anim.sample(1070))

    def test_given_injected_clock_when_sampling_without_timestamp_then_clock_used(self):
        self.anim.begin(SLIDE, (), 100)
        self.clock.now = 1025
        self.assertAlmostEqual(self.anim.sample().progress, 0.25)
        self.assertFalse(self.anim.is_complete())
        self.clock.now = 1100
        self.assertTrue(self.anim.is_complete())

    def test_given_timeline_when_checking_completion_then_true_only_at_end(self):
        self.anim.begin(SLIDE, (), 80)
        self.assertFalse(self.anim.is_complete(1079))
        self.assertTrue(self.anim.is_complete(1080))
        self.anim.clear()
        self.assertFalse(self.anim.active)

    def test_given_timeline_in_flight_when_beginning_again_then_rejected(self):
        self.anim.begin(SLIDE, (), 100)
        with self.assertRaises(RuntimeError):
            self.anim.begin(SLIDE, (), 100, now_ms=1050)
        # once finished a new timeline may start
        self.anim.begin(SLIDE, (), 100, now_ms=1100)
        self.assertEqual(self.anim.timeline.start_ms, 1100)

    def test_given_bad_arguments_when_constructing_or_beginning_then_value_error(self):
        with self.assertRaises(ValueError):
            MoveAnimator(easing='bounce')
        with self.assertRaises(ValueError):
            self.anim.begin(SLIDE, (), 0)

    def test_given_merge_and_spawn_events_when_sampling_then_pulse_and_grow_scales(self):
        self.anim.begin((), (MERGE, SPAWN), 100)
        start = {s.is_newly_spawned: s.scale for s in self.anim.sample(1000).tile_scales}
        self.assertAlmostEqual(start[False], 1.0)
        self.assertAlmostEqual(start[True], 0.3)
        end = {s.is_newly_spawned: s.scale for s in self.anim.sample(1100).tile_scales}
        self.assertAlmostEqual(end[False], 1.0)
        self.assertAlmostEqual(end[True], 1.0)

    def test_given_ease_out_policy_when_sampling_midway_then_ahead_of_linear(self):
        anim = MoveAnimator(clock=self.clock, easing='ease_out')
        anim.begin(SLIDE, (), 100)
        col = anim.sample(1050).tile_positions[0].col
        self.assertAlmostEqual(col, 3 - 3 * 0.875)

    def test_given_ease_in_out_policy_when_sampling_then_slow_ends_and_half_at_midpoint(self):
        anim = MoveAnimator(clock=self.clock, easing='ease_in_out')
        anim.begin(SLIDE, (), 100)
        # 4p^3 before the midpoint, mirrored after it
        self.assertAlmostEqual(anim.sample(1025).tile_positions[0].col, 3 - 3 * 0.0625)
        self.assertAlmostEqual(anim.sample(1050).tile_positions[0].col, 1.5)
        self.assertAlmostEqual(anim.sample(1075).tile_positions[0].col, 3 - 3 * 0.9375)
        self.assertAlmostEqual(anim.sample(1100).tile_positions[0].col, 0.0)


class TestScaleCurves(unittest.TestCase):
    def test_given_progress_when_computing_merge_pulse_then_bump_peaks_mid_tail(self):
        self.assertEqual(merge_pulse_scale(0.0), 1.0)
        self.assertEqual(merge_pulse_scale(0.3), 1.0)
        self.assertAlmostEqual(merge_pulse_scale(0.65), 1.1)
        self.assertAlmostEqual(merge_pulse_scale(1.0), 1.0)
        self.assertGreater(merge_pulse_scale(0.5), 1.0)

    def test_given_progress_when_computing_spawn_grow_then_linear_from_small(self):
        self.assertAlmostEqual(spawn_grow_scale(0.0), 0.3)
        self.assertAlmostEqual(spawn_grow_scale(0.5), 0.65)
        self.assertAlmostEqual(spawn_grow_scale(1.0), 1.0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
