# flappy/env/observations.py
from __future__ import annotations
from typing import Optional
import numpy as np

from flappy.game.config import SimulationConfig
from flappy.game.engine import Frame
from flappy.game.pipes import PipePair

OBS_SIZE = 6


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def next_pipe_pair(frame: Frame) -> Optional[PipePair]:
    """Closest visible pair whose right edge has not yet passed the bird."""
    ahead = [p for p in frame.pipes if p.show and p.right >= frame.bird.left]
    if not ahead:
        return None
    return min(ahead, key=lambda p: p.left)


def build_observation(frame: Frame, velocity: float, config: SimulationConfig) -> np.ndarray:
    """
    Returns a fixed (6,) float32 vector, every entry in [0,1]:
      [ bird_top_norm, velocity_norm, next_dx_norm, gap_top_norm, gap_bottom_norm, has_pipe ]
    - bird_top_norm uses [0, bird_floor]
    - velocity_norm is upward speed over the jump impulse
    - next_dx_norm is (pair.right - bird.left) / width
    - sentinels when no pair is ahead: dx=1, gap_top=0, gap_bottom=1, has_pipe=0
    """
    y_norm = _clamp01(frame.bird.top / max(1.0, config.bird_floor))
    vy_norm = _clamp01(velocity / max(1.0, config.jump_velocity))

    pair = next_pipe_pair(frame)
    if pair is None:
        feats = [y_norm, vy_norm, 1.0, 0.0, 1.0, 0.0]
    else:
        dx = _clamp01((pair.right - frame.bird.left) / float(frame.width))
        gap_top = _clamp01(pair.top_pipe.height / float(frame.height))
        gap_bot = _clamp01(pair.bottom_pipe.top / float(frame.height))
        feats = [y_norm, vy_norm, dx, gap_top, gap_bot, 1.0]

    return np.asarray(feats, dtype=np.float32)
