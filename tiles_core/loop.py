from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Optional

from .animator import Clock, Frame, MoveAnimator, monotonic_ms
from .board import Direction
from .config import GameConfig, trace
from .deal import new_game
from .moves import MoveResult, apply_move
from .state import Session, Status


@dataclass(frozen=True)
class InputFrame:
    """Pressed signals for one frame, as reported by the input device layer."""
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    confirm: bool = False

    def direction(self) -> Optional[Direction]:
        if self.left:
            return Direction.LEFT
        if self.right:
            return Direction.RIGHT
        if self.up:
            return Direction.UP
        if self.down:
            return Direction.DOWN
        return None


NO_INPUT = InputFrame()


class GameLoop:
    """
    The per-frame driver. All session mutation goes through tick() and restart(),
    and a new move is only accepted once the previous animation has completed.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
        input_source: Optional[Callable[[], InputFrame]] = None,
        is_ready: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.config = config or GameConfig.from_env()
        self.rng = rng or random.Random(self.config.seed)
        self.clock: Clock = clock or monotonic_ms
        self.input_source = input_source or (lambda: NO_INPUT)
        self.is_ready = is_ready or (lambda: True)
        self.animator = MoveAnimator(clock=self.clock, easing=self.config.easing)
        self.session: Session = new_game(rng=self.rng)
        self.last_result: Optional[MoveResult] = None
        self._last_input_ms: Optional[float] = None

    @property
    def move_in_progress(self) -> bool:
        return self.animator.active

    def restart(self) -> Session:
        self.animator.clear()
        self.last_result = None
        self.session = new_game(best_score=self.session.best_score, rng=self.rng)
        return self.session

    def _cooled_down(self, now: float) -> bool:
        if self._last_input_ms is None:
            return True
        return now - self._last_input_ms > self.config.input_cooldown_ms

    def tick(self, now_ms: Optional[float] = None) -> bool:
        """Advances one frame. Returns True when the session changed during this tick."""
        if not self.is_ready():
            return False
        now = self.clock() if now_ms is None else float(now_ms)

        if self.animator.active:
            if not self.animator.is_complete(now):
                return False
            self.animator.clear()

        if not self._cooled_down(now):
            return False
        pressed = self.input_source()

        if self.session.status is Status.LOST:
            if pressed.confirm:
                self._last_input_ms = now
                self.restart()
                trace('loop', 'restart after game over')
                return True
            return False

        direction = pressed.direction()
        if direction is None:
            return False
        self._last_input_ms = now
        self.session, result = apply_move(self.session, direction, self.rng)
        self.last_result = result
        if not result.changed:
            return False
        self.animator.begin(result.displacements, result.merge_events, self.config.animation_ms, now_ms=now)
        return True

    def frame(self, now_ms: Optional[float] = None) -> Frame:
        return self.animator.sample(now_ms)
