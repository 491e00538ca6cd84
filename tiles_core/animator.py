from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from .board import Coord
from .moves import Displacement, MergeEvent

Clock = Callable[[], float]

# Merge pulses start once tiles are mostly in place.
PULSE_START = 0.3
PULSE_AMPLITUDE = 0.1
SPAWN_START_SCALE = 0.3


def _linear(p: float) -> float:
    return p


def _ease_out(p: float) -> float:
    return 1.0 - (1.0 - p) ** 3


def _ease_in_out(p: float) -> float:
    if p < 0.5:
        return 4.0 * p ** 3
    return 1.0 - ((-2.0 * p + 2.0) ** 3) / 2.0


EASING_FUNCTIONS: Dict[str, Callable[[float], float]] = {
    'linear': _linear,
    'ease_out': _ease_out,
    'ease_in_out': _ease_in_out,
}


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def merge_pulse_scale(progress: float) -> float:
    """Sine bump over the tail of the timeline: 1 -> 1.1 -> 1."""
    if progress <= PULSE_START:
        return 1.0
    local = (progress - PULSE_START) / (1.0 - PULSE_START)
    return 1.0 + PULSE_AMPLITUDE * math.sin(local * math.pi)


def spawn_grow_scale(progress: float) -> float:
    return SPAWN_START_SCALE + (1.0 - SPAWN_START_SCALE) * progress


@dataclass(frozen=True)
class TilePosition:
    source: Coord
    dest: Coord
    value: int
    row: float
    col: float


@dataclass(frozen=True)
class TileScale:
    cell: Coord
    value: int
    scale: float
    is_newly_spawned: bool


@dataclass(frozen=True)
class Frame:
    progress: float
    tile_positions: Tuple[TilePosition, ...]
    tile_scales: Tuple[TileScale, ...]


EMPTY_FRAME = Frame(progress=1.0, tile_positions=(), tile_scales=())


@dataclass(frozen=True)
class AnimationTimeline:
    start_ms: float
    duration_ms: float
    displacements: Tuple[Displacement, ...]
    merge_events: Tuple[MergeEvent, ...]

    def fraction(self, now_ms: float) -> float:
        return min(1.0, max(0.0, (now_ms - self.start_ms) / self.duration_ms))


class MoveAnimator:
    """
    Replays one move's displacements and merge events over a fixed duration.
    Sampling is a pure function of the timestamp; the clock is injectable so tests
    can drive time by hand.
    """

    def __init__(self, clock: Optional[Clock] = None, easing: str = 'linear') -> None:
        if easing not in EASING_FUNCTIONS:
            raise ValueError(f"Unknown easing {easing!r}")
        self._clock: Clock = clock or monotonic_ms
        self._ease = EASING_FUNCTIONS[easing]
        self.easing = easing
        self._timeline: Optional[AnimationTimeline] = None

    @property
    def timeline(self) -> Optional[AnimationTimeline]:
        return self._timeline

    @property
    def active(self) -> bool:
        return self._timeline is not None

    def _now(self, now_ms: Optional[float]) -> float:
        return self._clock() if now_ms is None else float(now_ms)

    def begin(
        self,
        displacements: Iterable[Displacement],
        merge_events: Iterable[MergeEvent],
        duration_ms: float,
        now_ms: Optional[float] = None,
    ) -> AnimationTimeline:
        if duration_ms <= 0:
            raise ValueError('duration_ms must be positive')
        now = self._now(now_ms)
        if self._timeline is not None and self._timeline.fraction(now) < 1.0:
            raise RuntimeError('An animation is already in flight')
        self._timeline = AnimationTimeline(
            start_ms=now,
            duration_ms=float(duration_ms),
            displacements=tuple(displacements),
            merge_events=tuple(merge_events),
        )
        return self._timeline

    def sample(self, now_ms: Optional[float] = None) -> Frame:
        timeline = self._timeline
        if timeline is None:
            return EMPTY_FRAME
        progress = timeline.fraction(self._now(now_ms))
        eased = self._ease(progress)
        positions = tuple(
            TilePosition(
                source=d.source,
                dest=d.dest,
                value=d.value,
                row=d.source[0] + (d.dest[0] - d.source[0]) * eased,
                col=d.source[1] + (d.dest[1] - d.source[1]) * eased,
            )
            for d in timeline.displacements
        )
        scales = tuple(
            TileScale(
                cell=e.cell,
                value=e.value,
                scale=spawn_grow_scale(progress) if e.is_newly_spawned else merge_pulse_scale(progress),
                is_newly_spawned=e.is_newly_spawned,
            )
            for e in timeline.merge_events
        )
        return Frame(progress=progress, tile_positions=positions, tile_scales=scales)

    def is_complete(self, now_ms: Optional[float] = None) -> bool:
        if self._timeline is None:
            return True
        return self._timeline.fraction(self._now(now_ms)) >= 1.0

    def clear(self) -> None:
        self._timeline = None
