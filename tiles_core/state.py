from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .board import Board


class Status(str, Enum):
    PLAYING = 'playing'
    WON = 'won'
    LOST = 'lost'


@dataclass(frozen=True)
class Session:
    """One game in progress: the board, the running score and the sticky status flags."""
    board: Board
    score: int = 0
    best_score: int = 0
    won: bool = False
    lost: bool = False

    @property
    def status(self) -> Status:
        if self.lost:
            return Status.LOST
        if self.won:
            return Status.WON
        return Status.PLAYING

    def accepts_moves(self) -> bool:
        return not self.lost

    def with_board(self, board: Board, gained: int = 0) -> 'Session':
        score = self.score + gained
        return replace(self, board=board, score=score, best_score=max(self.best_score, score))
