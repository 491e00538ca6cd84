from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from .board import Board, Coord, Direction, GRID_SIZE, WIN_VALUE
from .config import trace
from .deal import spawn_random_tile
from .state import Session


@dataclass(frozen=True)
class Displacement:
    """A tile that slid from source to dest during one move."""
    source: Coord
    dest: Coord
    value: int  # value carried while sliding; a merge result is reported by its MergeEvent


@dataclass(frozen=True)
class MergeEvent:
    cell: Coord
    value: int
    is_newly_spawned: bool = False


@dataclass(frozen=True)
class MoveResult:
    changed: bool
    board: Board
    score_delta: int
    displacements: Tuple[Displacement, ...]
    merge_events: Tuple[MergeEvent, ...]


def slide_line(values: Sequence[int]) -> Tuple[List[int], int, List[Tuple[int, int]], List[Tuple[int, int]]]:
    """
    Compacts and merges one line toward index 0.
    Returns (new_values, gained, moves, merges) where moves are (src, dest) index pairs
    for tiles that changed position and merges are (dest, value) pairs.
    A cell produced by a merge is not merged again in the same pass.
    """
    out = [0] * len(values)
    moves: List[Tuple[int, int]] = []
    merges: List[Tuple[int, int]] = []
    gained = 0
    target = 0
    last_merged = -1
    for src, value in enumerate(values):
        if value == 0:
            continue
        if target > 0 and out[target - 1] == value and last_merged != target - 1:
            merged = value * 2
            out[target - 1] = merged
            gained += merged
            last_merged = target - 1
            moves.append((src, target - 1))
            merges.append((target - 1, merged))
        else:
            out[target] = value
            if src != target:
                moves.append((src, target))
            target += 1
    return out, gained, moves, merges


def line_coords(direction: Direction) -> List[List[Coord]]:
    """Each line's coordinates ordered from the edge the tiles move toward, inward."""
    span = range(GRID_SIZE)
    if direction is Direction.LEFT:
        return [[(r, c) for c in span] for r in span]
    if direction is Direction.RIGHT:
        return [[(r, c) for c in reversed(span)] for r in span]
    if direction is Direction.UP:
        return [[(r, c) for r in span] for c in span]
    if direction is Direction.DOWN:
        return [[(r, c) for r in reversed(span)] for c in span]
    raise ValueError(f'Invalid direction: {direction!r}')


def move(board: Board, direction: Direction) -> MoveResult:
    """Slides every line of the board toward `direction` and reports what moved and merged."""
    direction = Direction.parse(direction)
    cells: Dict[Coord, int] = {coord: board.at(*coord) for coord in board.coords()}
    displacements: List[Displacement] = []
    merge_events: List[MergeEvent] = []
    gained_total = 0

    for coords in line_coords(direction):
        values = [board.at(*coord) for coord in coords]
        new_values, gained, moves, merges = slide_line(values)
        gained_total += gained
        for coord, value in zip(coords, new_values):
            cells[coord] = value
        for src, dest in moves:
            displacements.append(Displacement(source=coords[src], dest=coords[dest], value=values[src]))
        for dest, value in merges:
            merge_events.append(MergeEvent(cell=coords[dest], value=value))

    new_board = Board(grid=tuple(cells[coord] for coord in board.coords()))
    if new_board == board:
        return MoveResult(changed=False, board=board, score_delta=0, displacements=(), merge_events=())
    trace('engine', f"move {direction.value} delta={gained_total} slid={len(displacements)} merged={len(merge_events)}")
    return MoveResult(
        changed=True,
        board=new_board,
        score_delta=gained_total,
        displacements=tuple(displacements),
        merge_events=tuple(merge_events),
    )


def has_adjacent_pair(board: Board) -> bool:
    for r, c in board.coords():
        value = board.at(r, c)
        if value == 0:
            continue
        if c < GRID_SIZE - 1 and board.at(r, c + 1) == value:
            return True
        if r < GRID_SIZE - 1 and board.at(r + 1, c) == value:
            return True
    return False


def legal_directions(board: Board) -> List[Direction]:
    """Directions whose move would change the board."""
    return [d for d in Direction if move(board, d).changed]


@dataclass(frozen=True)
class Terminal:
    won: bool
    lost: bool


def is_terminal(board: Board, already_won: bool = False) -> Terminal:
    """Won once any tile reaches 2048 (sticky through `already_won`); lost when full with no adjacent pair."""
    won = already_won or any(value == WIN_VALUE for value in board.grid)
    lost = not board.empty_cells() and not has_adjacent_pair(board)
    return Terminal(won=won, lost=lost)


def apply_move(session: Session, direction: Direction, rng: Optional[random.Random] = None) -> Tuple[Session, MoveResult]:
    """
    Session-level move: slide, score, spawn one tile, then refresh the status flags.
    A lost session or a move that changes nothing returns the session as-is.
    """
    direction = Direction.parse(direction)
    if not session.accepts_moves():
        return session, MoveResult(changed=False, board=session.board, score_delta=0, displacements=(), merge_events=())
    result = move(session.board, direction)
    if not result.changed:
        return session, result
    board, spawned = spawn_random_tile(result.board, rng)
    events = result.merge_events
    if spawned is not None:
        events = events + (MergeEvent(cell=spawned, value=board.at(*spawned), is_newly_spawned=True),)
    terminal = is_terminal(board, already_won=session.won)
    next_session = replace(session.with_board(board, result.score_delta), won=terminal.won, lost=terminal.lost)
    if terminal.won and not session.won:
        trace('engine', f"reached {WIN_VALUE} at score {next_session.score}")
    if terminal.lost:
        trace('engine', f"game over at score {next_session.score}")
    return next_session, MoveResult(
        changed=True,
        board=board,
        score_delta=result.score_delta,
        displacements=result.displacements,
        merge_events=events,
    )
