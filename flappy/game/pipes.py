# flappy/game/pipes.py
from __future__ import annotations
import random
from dataclasses import dataclass

from .config import SimulationConfig


@dataclass
class Pipe:
    """One vertical segment spanning from `top` to `top + height`."""
    top: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass
class PipePair:
    top_pipe: Pipe
    bottom_pipe: Pipe
    show: bool
    left: float
    width: float

    @property
    def right(self) -> float:
        return self.left + self.width

    def overlaps_x(self, left: float, right: float) -> bool:
        """Closed-interval overlap with [left, right] (touching edges count)."""
        return self.left <= right and self.right >= left

    def gap_contains(self, top: float, size: float) -> bool:
        """True if a box [top, top+size] sits strictly inside the gap."""
        return top > self.top_pipe.height and top + size < self.bottom_pipe.top


def random_top_pipe_height(config: SimulationConfig, rng: random.Random) -> float:
    lo = config.min_top_for_top_pipe
    hi = config.max_top_for_top_pipe
    return lo + (hi - lo) * rng.random()


def spawn_pipe_pair(config: SimulationConfig, rng: random.Random, show: bool) -> PipePair:
    """New pair at the right edge of the field; the bottom pipe runs past the field bottom."""
    height = random_top_pipe_height(config, rng)
    return PipePair(
        top_pipe=Pipe(top=0.0, height=height),
        bottom_pipe=Pipe(top=height + config.pipe_gap, height=config.height),
        show=show,
        left=config.width - config.pipe_width,
        width=config.pipe_width,
    )


def move_pipe_pair(pair: PipePair, other: PipePair,
                   config: SimulationConfig, rng: random.Random) -> PipePair:
    """
    Advance one slot of the two-slot pipe buffer by a frame.
    - a visible pair that has fully left the screen is hidden (geometry kept stale)
    - a visible pair scrolls left by `speed`
    - a hidden pair respawns visible once `other` is visible and past the spawn threshold
    Returns `pair` itself (mutated) or a freshly spawned pair.
    """
    if pair.show and pair.left <= -pair.width:
        pair.show = False
        return pair

    if pair.show:
        pair.left -= config.speed

    if other.show and other.left < config.spawn_threshold and not pair.show:
        return spawn_pipe_pair(config, rng, show=True)

    return pair
