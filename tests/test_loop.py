import random
import unittest

from game import Board, GameConfig, GameLoop, InputFrame, Session, Status

CHECKERBOARD = [
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
]


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class TestGameLoop(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock(1000.0)
        self.pressed = InputFrame()
        self.ready = True
        self.loop = GameLoop(
            config=GameConfig(animation_ms=80, input_cooldown_ms=100),
            rng=random.Random(4),
            clock=self.clock,
            input_source=lambda: self.pressed,
            is_ready=lambda: self.ready,
        )
        self.loop.session = Session(board=Board.from_rows([[2, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4]))

    def test_given_assets_loading_when_ticking_then_noop(self):
        self.ready = False
        self.pressed = InputFrame(left=True)
        before = self.loop.session
        self.assertFalse(self.loop.tick(1000))
        self.assertIs(self.loop.session, before)

    def test_given_left_pressed_when_ticking_then_move_applied_and_animation_started(self):
        self.pressed = InputFrame(left=True)
        self.assertTrue(self.loop.tick(1000))
        self.assertEqual(self.loop.session.score, 4)
        self.assertEqual(self.loop.session.board.at(0, 0), 4)
        self.assertTrue(self.loop.move_in_progress)
        frame = self.loop.frame(1040)
        self.assertAlmostEqual(frame.progress, 0.5)
        self.assertTrue(any(s.is_newly_spawned for s in frame.tile_scales))

    def test_given_animation_in_flight_when_ticking_then_input_ignored_until_complete_and_cooled(self):
        self.pressed = InputFrame(left=True)
        self.loop.tick(1000)
        self.loop.session = Session(
            board=Board.from_rows([[0, 0, 0, 2], [0] * 4, [0] * 4, [0] * 4]),
            score=self.loop.session.score,
        )
        self.assertFalse(self.loop.tick(1050))  # animation running
        self.assertTrue(self.loop.move_in_progress)
        self.assertFalse(self.loop.tick(1090))  # animation done, still inside cooldown
        self.assertFalse(self.loop.move_in_progress)
        self.assertTrue(self.loop.tick(1101))
        self.assertEqual(self.loop.session.board.at(0, 0), 2)

    def test_given_no_input_when_ticking_then_nothing_happens(self):
        before = self.loop.session
        self.assertFalse(self.loop.tick(1000))
        self.assertIs(self.loop.session, before)
        self.assertFalse(self.loop.move_in_progress)

    def test_given_move_that_changes_nothing_when_ticking_then_no_animation(self):
        self.pressed = InputFrame(up=True)
        before = self.loop.session
        self.assertFalse(self.loop.tick(1000))
        self.assertIs(self.loop.session, before)
        self.assertFalse(self.loop.move_in_progress)
        self.assertFalse(self.loop.last_result.changed)

    def test_given_several_directions_when_ticking_then_left_takes_priority(self):
        self.loop.session = Session(board=Board.from_rows([[0, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4]))
        self.pressed = InputFrame(down=True, left=True)
        self.loop.tick(1000)
        self.assertEqual(self.loop.last_result.displacements[0].dest, (0, 0))

    def test_given_lost_session_when_confirm_pressed_then_new_game_keeps_best(self):
        self.loop.session = Session(board=Board.from_rows(CHECKERBOARD), score=300, best_score=500, lost=True)
        self.pressed = InputFrame(left=True)
        self.assertFalse(self.loop.tick(1000))
        self.assertEqual(self.loop.session.status, Status.LOST)
        self.pressed = InputFrame(confirm=True)
        self.assertTrue(self.loop.tick(1200))
        self.assertEqual(self.loop.session.status, Status.PLAYING)
        self.assertEqual(self.loop.session.score, 0)
        self.assertEqual(self.loop.session.best_score, 500)
        self.assertEqual(len([v for v in self.loop.session.board.grid if v]), 2)

    def test_given_playing_session_when_confirm_pressed_then_ignored(self):
        self.pressed = InputFrame(confirm=True)
        before = self.loop.session
        self.assertFalse(self.loop.tick(1000))
        self.assertIs(self.loop.session, before)


if __name__ == '__main__':
    unittest.main(verbosity=2)
