from __future__ import annotations

import argparse
import os
import random
import sys
import time
from collections import Counter
from typing import List

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from game import Board, Direction, apply_move, legal_directions, new_game, spawn_random_tile  # type: ignore


def spawn_frequency(trials: int, rng: random.Random) -> float:
    """Fraction of spawns on an empty board that produced a 4."""
    board = Board.empty()
    fours = 0
    for _ in range(trials):
        spawned, cell = spawn_random_tile(board, rng)
        if cell is not None and spawned.at(*cell) == 4:
            fours += 1
    return fours / trials if trials else 0.0


def play_random(rng: random.Random, corner_bias: bool) -> tuple:
    session = new_game(rng=rng)
    moves = 0
    while not session.lost:
        options = legal_directions(session.board)
        if not options:
            break
        if corner_bias:
            # Prefer down/left, the usual corner strategy
            preferred = [d for d in (Direction.DOWN, Direction.LEFT) if d in options]
            choice = rng.choice(preferred) if preferred else rng.choice(options)
        else:
            choice = rng.choice(options)
        session, _ = apply_move(session, choice, rng)
        moves += 1
    return session.score, session.board.max_tile(), moves, session.won


def main() -> None:
    parser = argparse.ArgumentParser(description="Play random 2048 games and report score and spawn statistics")
    parser.add_argument('--games', type=int, default=100, help='Number of games to play')
    parser.add_argument('--spawns', type=int, default=10000, help='Spawn trials for the 4-frequency check')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed')
    parser.add_argument('--corner', action='store_true', help='Bias moves toward the bottom-left corner')
    args = parser.parse_args()

    rng = random.Random(args.seed)
    start_time = time.time()
    scores: List[int] = []
    tiles: Counter = Counter()
    total_moves = 0
    wins = 0
    for _ in range(args.games):
        score, max_tile, moves, won = play_random(rng, args.corner)
        scores.append(score)
        tiles[max_tile] += 1
        total_moves += moves
        wins += int(won)

    if scores:
        print(f"games={len(scores)} min={min(scores)} avg={sum(scores) / len(scores):.1f} max={max(scores)} wins={wins}")
        print(f"avg_moves={total_moves / len(scores):.1f}")
        for tile in sorted(tiles):
            print(f"  max tile {tile}: {tiles[tile]}")
    freq = spawn_frequency(args.spawns, rng)
    print(f"spawn_4_frequency={freq:.4f} over {args.spawns} trials")
    print(f"elapsed_sec={time.time() - start_time:.1f}")


if __name__ == '__main__':
    main()
