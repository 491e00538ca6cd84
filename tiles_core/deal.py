from __future__ import annotations

import random
from typing import Optional, Tuple

from .board import Board, Coord
from .config import GameConfig, trace
from .state import Session

FOUR_PROBABILITY = 0.1

_process_rng: Optional[random.Random] = None


def default_rng() -> random.Random:
    """Process-wide random source, seeded from TILES_SEED when it is set."""
    global _process_rng
    if _process_rng is None:
        _process_rng = random.Random(GameConfig.from_env().seed)
    return _process_rng


def spawn_random_tile(board: Board, rng: Optional[random.Random] = None) -> Tuple[Board, Optional[Coord]]:
    """Places a 2 (90%) or a 4 (10%) on a uniformly chosen empty cell. Full boards are returned untouched."""
    rng = rng or default_rng()
    empty = board.empty_cells()
    if not empty:
        return board, None
    cell = empty[rng.randrange(len(empty))]
    value = 4 if rng.random() < FOUR_PROBABILITY else 2
    return board.with_cell(cell, value), cell


def new_game(best_score: int = 0, rng: Optional[random.Random] = None) -> Session:
    """Fresh session with two spawned tiles; the best score carries over."""
    rng = rng or default_rng()
    board = Board.empty()
    board, _ = spawn_random_tile(board, rng)
    board, _ = spawn_random_tile(board, rng)
    trace('engine', f"new game best={best_score}")
    return Session(board=board, score=0, best_score=max(0, int(best_score)))
