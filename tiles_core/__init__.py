"""
2048 core Python package.

Pure game logic with no I/O, shared by the web app, the CLI and the tools.
Modules:
- board.py: Board, Coord, Direction
- state.py: Session, Status
- moves.py: line slide/merge, move, apply_move, is_terminal
- deal.py: tile spawning and new games
- animator.py: MoveAnimator and frame sampling
- loop.py: GameLoop, the per-frame driver
- config.py: environment settings and debug tracing
"""
