# flappy/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from flappy.game.config import FPS, SimulationConfig
from flappy.game.engine import GameEngine
from flappy.game.render import draw_frame
from flappy.env.observations import OBS_SIZE, build_observation


class FlappyEnv(gym.Env):
    """
    Flappy Gymnasium environment (vector observations).
    - One engine frame per simulation tick (60 Hz reference).
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Observation: shape (6,), float32, see build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0,
                 config: Optional[SimulationConfig] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode!r}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.config = (config or SimulationConfig()).validate()
        self.sim_fps = FPS

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            # decisions per second = sim_fps / frame_skip
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(
            low=np.zeros(OBS_SIZE, dtype=np.float32),
            high=np.ones(OBS_SIZE, dtype=np.float32),
            dtype=np.float32,
        )

        # --- Runtime state ---
        self.engine: Optional[GameEngine] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Seed given -> strict reproducibility; otherwise the engine picks its own.
        self.engine = GameEngine(self.config, seed=int(seed) if seed is not None else None)
        self.engine.start()
        self.timestep = 0
        self.current_seed = self.engine.seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0}
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.engine is not None, "Call reset() before step()"

        # Apply action once at the start of the decision step
        if int(action) == 1:
            self.engine.jump()

        score_before = self.engine.frame.score
        frame = None
        for _ in range(self.frame_skip):
            frame = self.engine.next_frame()
            if frame.game_over:
                break

        alive = not frame.game_over
        scored = frame.score - score_before
        reward = (1.0 + float(scored)) if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "score": frame.score,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "death_cause": self.engine.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.engine is not None
        return build_observation(self.engine.frame, self.engine.velocity, self.config)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.engine is None:
            return

        size = (int(self.config.width), int(self.config.height))
        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode(size)
                pygame.display.set_caption("Flappy — Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface(size)

        draw_frame(self.screen, self.engine.frame)

        if self.render_mode == "human":
            # Pump events so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata.get("render_fps", FPS))
            return None

        # Return an (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
