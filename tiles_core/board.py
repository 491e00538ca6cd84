from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

Coord = Tuple[int, int]

GRID_SIZE = 4
WIN_VALUE = 2048


class Direction(str, Enum):
    LEFT = 'left'
    RIGHT = 'right'
    UP = 'up'
    DOWN = 'down'

    @classmethod
    def parse(cls, name: str) -> 'Direction':
        """Parses a direction name (case-insensitive); unknown names are a ValueError."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise ValueError(f"Invalid direction: {name!r}. Must be 'left', 'right', 'up', or 'down'") from None


def _is_power_of_two(value: int) -> bool:
    return value >= 2 and (value & (value - 1)) == 0


def _tile_int(value: object) -> int:
    """Accepts ints and integral floats; bools, strings and fractional values are a ValueError."""
    if isinstance(value, bool):
        raise ValueError(f"Tile values must be integers, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"Tile values must be integers, got {value!r}")


@dataclass(frozen=True)
class Board:
    """The 4x4 grid of tile values; 0 marks an empty cell."""
    grid: Tuple[int, ...]  # row-major, length == GRID_SIZE * GRID_SIZE

    def __post_init__(self) -> None:
        if len(self.grid) != GRID_SIZE * GRID_SIZE:
            raise ValueError(f'Board must have {GRID_SIZE * GRID_SIZE} cells, got {len(self.grid)}')
        for value in self.grid:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f'Tile values must be integers, got {value!r}')
            if value != 0 and not _is_power_of_two(value):
                raise ValueError(f'Tile value {value} is not a power of two')

    @classmethod
    def empty(cls) -> 'Board':
        return cls(grid=(0,) * (GRID_SIZE * GRID_SIZE))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'Board':
        """Builds a board from four rows of four values."""
        if len(rows) != GRID_SIZE or any(len(r) != GRID_SIZE for r in rows):
            raise ValueError(f'Board must be {GRID_SIZE}x{GRID_SIZE}')
        return cls(grid=tuple(_tile_int(v) for row in rows for v in row))

    def index(self, r: int, c: int) -> int:
        return r * GRID_SIZE + c

    def at(self, r: int, c: int) -> int:
        return self.grid[self.index(r, c)]

    def rows(self) -> List[List[int]]:
        return [list(self.grid[r * GRID_SIZE:(r + 1) * GRID_SIZE]) for r in range(GRID_SIZE)]

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board."""
        for r in range(GRID_SIZE):
            for c in range(GRID_SIZE):
                yield (r, c)

    def empty_cells(self) -> List[Coord]:
        return [coord for coord in self.coords() if self.at(*coord) == 0]

    def with_cell(self, coord: Coord, value: int) -> 'Board':
        cells = list(self.grid)
        cells[self.index(*coord)] = value
        return Board(grid=tuple(cells))

    def max_tile(self) -> int:
        return max(self.grid)

    def tile_sum(self) -> int:
        return sum(self.grid)

    def pretty(self) -> str:
        """Human-readable grid, empty cells shown as dots."""
        width = max(4, len(str(self.max_tile())))
        lines: List[str] = []
        for row in self.rows():
            lines.append(' '.join((str(v) if v else '.').rjust(width) for v in row))
        return '\n'.join(lines)
