from __future__ import annotations

# Facade module that re-exports the 2048 core.
# Used by the Flask app, the tools and the tests.
# Single-responsibility modules live under tiles_core/*.

# Prefer the relative import when loaded as part of a package, else the top-level one.
try:
    from .tiles_core.board import Board, Coord, Direction, GRID_SIZE, WIN_VALUE  # type: ignore
    from .tiles_core.state import Session, Status  # type: ignore
    from .tiles_core.config import GameConfig, debug_enabled, trace  # type: ignore
    from .tiles_core.deal import default_rng, new_game, spawn_random_tile  # type: ignore
    from .tiles_core.moves import (  # type: ignore
        Displacement,
        MergeEvent,
        MoveResult,
        Terminal,
        slide_line,
        line_coords,
        move,
        apply_move,
        is_terminal,
        has_adjacent_pair,
        legal_directions,
    )
    from .tiles_core.animator import (  # type: ignore
        AnimationTimeline,
        Frame,
        MoveAnimator,
        TilePosition,
        TileScale,
        merge_pulse_scale,
        spawn_grow_scale,
    )
    from .tiles_core.loop import GameLoop, InputFrame  # type: ignore
except ImportError:
    from tiles_core.board import Board, Coord, Direction, GRID_SIZE, WIN_VALUE  # type: ignore
    from tiles_core.state import Session, Status  # type: ignore
    from tiles_core.config import GameConfig, debug_enabled, trace  # type: ignore
    from tiles_core.deal import default_rng, new_game, spawn_random_tile  # type: ignore
    from tiles_core.moves import (  # type: ignore
        Displacement,
        MergeEvent,
        MoveResult,
        Terminal,
        slide_line,
        line_coords,
        move,
        apply_move,
        is_terminal,
        has_adjacent_pair,
        legal_directions,
    )
    from tiles_core.animator import (  # type: ignore
        AnimationTimeline,
        Frame,
        MoveAnimator,
        TilePosition,
        TileScale,
        merge_pulse_scale,
        spawn_grow_scale,
    )
    from tiles_core.loop import GameLoop, InputFrame  # type: ignore


def main() -> None:
    # CLI driver delegated to tiles_core.cli
    try:
        from .tiles_core.cli import main as _main  # type: ignore
    except ImportError:
        from tiles_core.cli import main as _main  # type: ignore
    _main()


if __name__ == '__main__':
    main()
