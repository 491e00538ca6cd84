from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

_TRUTHY = ('1', 'true', 'yes', 'on')

EASINGS = ('linear', 'ease_out', 'ease_in_out')


def debug_enabled() -> bool:
    """TILES_DEBUG=1 turns on the bracket-tagged trace lines."""
    return os.getenv('TILES_DEBUG', '0').lower() in _TRUTHY


def trace(tag: str, message: str) -> None:
    if debug_enabled():
        print(f"[{tag}] {message}")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        trace('config', f"{name}={raw!r} is not an integer; using {default}")
        return default


@dataclass(frozen=True)
class GameConfig:
    """Timing and randomness settings shared by the loop, the CLI and the web app."""
    animation_ms: int = 80
    input_cooldown_ms: int = 100
    easing: str = 'linear'
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.easing not in EASINGS:
            raise ValueError(f"Unknown easing {self.easing!r}; expected one of {', '.join(EASINGS)}")
        if self.animation_ms <= 0:
            raise ValueError('animation_ms must be positive')
        if self.input_cooldown_ms < 0:
            raise ValueError('input_cooldown_ms must not be negative')

    @classmethod
    def from_env(cls) -> 'GameConfig':
        seed_raw = os.getenv('TILES_SEED')
        seed: Optional[int] = None
        if seed_raw:
            try:
                seed = int(seed_raw)
            except ValueError:
                trace('config', f"TILES_SEED={seed_raw!r} is not an integer; ignoring")
        easing = os.getenv('TILES_EASING', 'linear').strip().lower() or 'linear'
        if easing not in EASINGS:
            trace('config', f"TILES_EASING={easing!r} unknown; using linear")
            easing = 'linear'
        return cls(
            animation_ms=max(1, _int_env('TILES_ANIMATION_MS', 80)),
            input_cooldown_ms=max(0, _int_env('TILES_INPUT_COOLDOWN_MS', 100)),
            easing=easing,
            seed=seed,
        )
