from __future__ import annotations

import argparse
import random
from typing import Optional

from .board import Direction
from .deal import new_game
from .moves import MoveResult, apply_move, legal_directions
from .state import Session, Status

KEYS = {'a': Direction.LEFT, 'd': Direction.RIGHT, 'w': Direction.UP, 's': Direction.DOWN}


def _print_session(session: Session) -> None:
    print(session.board.pretty())
    print(f"Score: {session.score}  Best: {session.best_score}  [{session.status.value}]")


def _print_moves(result: MoveResult) -> None:
    for d in result.displacements:
        print(f"  {d.value} {d.source} -> {d.dest}")
    for e in result.merge_events:
        kind = 'spawn' if e.is_newly_spawned else 'merge'
        print(f"  {kind} {e.value} at {e.cell}")


def autoplay(rng: random.Random, best_score: int = 0, show_moves: bool = False) -> Session:
    """Plays random legal moves until the game is lost."""
    session = new_game(best_score=best_score, rng=rng)
    while session.status is not Status.LOST:
        options = legal_directions(session.board)
        if not options:
            break
        session, result = apply_move(session, rng.choice(options), rng)
        if show_moves:
            _print_moves(result)
    return session


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description='2048 in the terminal')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for tile spawns')
    parser.add_argument('--demo', type=int, default=0, metavar='N', help='Autoplay N random games and print the results')
    parser.add_argument('--show-moves', action='store_true', help='Print slides, merges and spawns after each move')
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)

    if args.demo > 0:
        best = 0
        for i in range(args.demo):
            session = autoplay(rng, best_score=best, show_moves=args.show_moves)
            best = session.best_score
            print(f"Game {i + 1}:")
            _print_session(session)
            print()
        return

    session = new_game(rng=rng)
    print('Commands: w (up), s (down), a (left), d (right), r (restart), q (quit)')
    _print_session(session)
    while True:
        command = input('\nEnter move: ').strip().lower()
        if command == 'q':
            print('Thanks for playing!')
            return
        if command == 'r':
            session = new_game(best_score=session.best_score, rng=rng)
            _print_session(session)
            continue
        if session.status is Status.LOST:
            print('Game over. Press r to restart or q to quit.')
            continue
        direction = KEYS.get(command)
        if direction is None:
            print('Invalid command! Use w/a/s/d to move, r to restart or q to quit.')
            continue
        was_won = session.won
        session, result = apply_move(session, direction, rng)
        if not result.changed:
            print('Nothing moves that way. Try another direction.')
            continue
        if args.show_moves:
            _print_moves(result)
        _print_session(session)
        if session.won and not was_won:
            print('You reached 2048! Keep going.')
        if session.status is Status.LOST:
            print(f"\nGame Over! Final score: {session.score}")


if __name__ == '__main__':
    main()
