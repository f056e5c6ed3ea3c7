# flappy/game/engine.py
from __future__ import annotations
import copy
import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .bird import Bird, Ground, decay_velocity, fall_step, jump_velocity
from .config import SimulationConfig
from .pipes import PipePair, move_pipe_pair, spawn_pipe_pair

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    """Snapshot of everything the presentation layer needs to draw one frame."""
    first_pipe: PipePair
    second_pipe: PipePair
    game_over: bool
    game_started: bool
    width: float
    height: float
    score: int
    ground: Ground
    bird: Bird

    @property
    def pipes(self) -> Tuple[PipePair, PipePair]:
        return self.first_pipe, self.second_pipe


class GameEngine:
    """
    Frame-stepped Flappy simulation.

    The engine owns the only mutable Frame plus the bird's upward velocity.
    Every public operation hands back a deep copy, so callers can keep old
    snapshots around without them changing underneath.

    States: not started -> running -> game over (terminal until reset/start).
    """

    def __init__(self, config: Optional[SimulationConfig] = None, seed: Optional[int] = None):
        self.config = (config or SimulationConfig()).validate()
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self._velocity = 0.0
        self.death_cause: Optional[str] = None   # "ground" | "pipe" | None
        self._frame = self._new_frame()

    # -------------------- Accessors --------------------

    @property
    def velocity(self) -> float:
        return self._velocity

    @property
    def frame(self) -> Frame:
        return copy.deepcopy(self._frame)

    @property
    def running(self) -> bool:
        return self._frame.game_started and not self._frame.game_over

    # -------------------- Core API --------------------

    def reset(self) -> Frame:
        """Fresh, not-yet-started game. Velocity goes back to zero."""
        self._frame = self._new_frame()
        self._velocity = 0.0
        self.death_cause = None
        return self.frame

    def start(self) -> Frame:
        self.reset()
        self._frame.game_started = True
        logger.debug("game started (seed=%s)", self.seed)
        return self.frame

    def restore(self, frame: Frame, velocity: float = 0.0) -> Frame:
        """Load an explicit snapshot, e.g. to replay from a saved position."""
        self._frame = copy.deepcopy(frame)
        self._velocity = float(velocity)
        self.death_cause = None
        return self.frame

    def jump(self) -> bool:
        """Upward impulse, ignored outside a running game. Returns True if applied."""
        if not self.running:
            return False
        before = self._velocity
        self._velocity = jump_velocity(self._velocity, self.config.jump_velocity)
        return self._velocity != before

    def next_frame(self) -> Frame:
        """Advance exactly one tick. No-op before start and after game over."""
        f = self._frame
        if f.game_over or not f.game_started:
            return self.frame

        cfg = self.config
        prev_lefts = (f.first_pipe.left, f.second_pipe.left)

        # Move pipes (second slot sees the already-moved first slot)
        f.first_pipe = move_pipe_pair(f.first_pipe, f.second_pipe, cfg, self.rng)
        f.second_pipe = move_pipe_pair(f.second_pipe, f.first_pipe, cfg, self.rng)

        floor = f.height - f.ground.height - f.bird.size
        if f.bird.top >= floor:
            f.bird.top = floor
            self._end("ground")
            return self.frame

        if self._hit_pipe():
            self._end("pipe")
            return self.frame

        self._velocity = decay_velocity(self._velocity, cfg.slow_velocity)

        for prev_left, pair in zip(prev_lefts, f.pipes):
            if self._crossed_score_line(prev_left, pair):
                f.score += 1
                logger.debug("score -> %d", f.score)

        f.bird.top += fall_step(cfg.gravity, self._velocity)
        return self.frame

    # -------------------- Helpers --------------------

    def _new_frame(self) -> Frame:
        cfg = self.config
        return Frame(
            first_pipe=spawn_pipe_pair(cfg, self.rng, show=True),
            second_pipe=spawn_pipe_pair(cfg, self.rng, show=False),
            game_over=False,
            game_started=False,
            width=cfg.width,
            height=cfg.height,
            score=0,
            ground=Ground(height=cfg.ground_height),
            bird=Bird(
                top=cfg.height / 2 - cfg.bird_size / 2,
                left=cfg.bird_x,
                size=cfg.bird_size,
            ),
        )

    def _hit_pipe(self) -> bool:
        """The first visible pair overlapping the bird horizontally decides."""
        bird = self._frame.bird
        for pair in self._frame.pipes:
            if pair.show and pair.overlaps_x(bird.left, bird.right):
                return not pair.gap_contains(bird.top, bird.size)
        return False

    def _crossed_score_line(self, prev_left: float, pair: PipePair) -> bool:
        # Threshold crossing of the pair's right edge over bird_x - speed.
        # With integer scroll steps this fires on the same frame as an exact match.
        line = self.config.score_line
        return pair.left + pair.width <= line < prev_left + pair.width

    def _end(self, cause: str) -> None:
        self._frame.game_over = True
        self.death_cause = cause
        logger.info("game over: %s (score=%d, seed=%s)", cause, self._frame.score, self.seed)
