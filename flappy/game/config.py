# flappy/game/config.py
from __future__ import annotations
from dataclasses import dataclass

# --- Display ---
WIDTH = 400
HEIGHT = 800
FPS = 60

# --- Pipes ---
PIPE_WIDTH = 50
PIPE_GAP = 150                  # vertical gap between top and bottom pipe
MIN_TOP_PIPE_H = 70             # top pipe height is drawn from [MIN, MAX)
MAX_TOP_PIPE_H = 350
NEW_PIPE_PERCENT = 0.7          # fraction of travel after which the partner pair respawns
SCROLL_PX_PER_FRAME = 1

# --- World / Physics ---
GROUND_H = 20
GRAVITY = 1.5                   # squared every frame, constant downward term
JUMP_VELOCITY = 10.0
SLOW_VELOCITY = 0.3             # per-frame decay of upward velocity

# --- Bird ---
BIRD_X = 40
BIRD_SIZE = 20

SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_BG = (112, 197, 206)
COLOR_FG = (250, 250, 250)
COLOR_PIPE = (84, 170, 56)
COLOR_GROUND = (222, 216, 149)
COLOR_BIRD = (247, 207, 45)
COLOR_DANGER = (255, 86, 110)


class ConfigError(ValueError):
    """Raised when a SimulationConfig cannot describe a playable field."""


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable tuning of one simulation instance.
    All values are in pixels / frames; nothing here changes at runtime.
    """
    height: float = HEIGHT
    width: float = WIDTH
    pipe_width: float = PIPE_WIDTH
    pipe_gap: float = PIPE_GAP
    min_top_for_top_pipe: float = MIN_TOP_PIPE_H
    max_top_for_top_pipe: float = MAX_TOP_PIPE_H
    generate_new_pipe_percent: float = NEW_PIPE_PERCENT
    speed: float = SCROLL_PX_PER_FRAME
    ground_height: float = GROUND_H
    bird_x: float = BIRD_X
    bird_size: float = BIRD_SIZE
    gravity: float = GRAVITY
    jump_velocity: float = JUMP_VELOCITY
    slow_velocity: float = SLOW_VELOCITY

    @property
    def ground_top(self) -> float:
        return self.height - self.ground_height

    @property
    def bird_floor(self) -> float:
        """Lowest top coordinate the bird can reach before touching the ground."""
        return self.height - self.ground_height - self.bird_size

    @property
    def spawn_threshold(self) -> float:
        """A hidden pair respawns once its partner's left edge passes this x."""
        return self.width * (1 - self.generate_new_pipe_percent)

    @property
    def score_line(self) -> float:
        return self.bird_x - self.speed

    def validate(self) -> "SimulationConfig":
        for name in ("height", "width", "pipe_width", "pipe_gap", "speed", "bird_size"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be > 0, got {getattr(self, name)!r}")
        for name in ("ground_height", "bird_x", "min_top_for_top_pipe",
                     "jump_velocity", "slow_velocity"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)!r}")
        if self.min_top_for_top_pipe > self.max_top_for_top_pipe:
            raise ConfigError(
                f"min_top_for_top_pipe ({self.min_top_for_top_pipe}) > "
                f"max_top_for_top_pipe ({self.max_top_for_top_pipe})"
            )
        if not (0.0 < self.generate_new_pipe_percent <= 1.0):
            raise ConfigError(
                f"generate_new_pipe_percent must be in (0, 1], got {self.generate_new_pipe_percent!r}"
            )
        if self.pipe_width > self.width:
            raise ConfigError("pipe_width does not fit in the field width")
        if self.bird_floor < 0:
            raise ConfigError("bird does not fit between the top of the field and the ground")
        return self
