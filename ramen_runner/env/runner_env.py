# ramen_runner/env/runner_env.py
from __future__ import annotations
import random
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from ramen_runner.game.clock import ManualClock
from ramen_runner.game.config import WorldConfig
from ramen_runner.game.render import Renderer
from ramen_runner.game.state import RunState
from ramen_runner.env.observations import build_observation, OBS_LOW, OBS_HIGH


class RunnerEnv(gym.Env):
    """
    Ramen Runner Gymnasium environment (vector observations).
    - Simulation at 60 Hz on a ManualClock, so spawns, invincibility and
      speed-ups are reproducible for a given seed.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Actions: 0 = NOOP, 1 = JUMP (a second JUMP in the air is the double jump).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0,
                 width: int = 800,
                 height: int = 800):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.cfg = WorldConfig.for_canvas(width, height)

        self.sim_fps = 60
        self.dt_ms = 1000.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.state: Optional[RunState] = None
        self.clock: Optional[ManualClock] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.pg_clock = None
        self.renderer = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Seeded reset -> exact seed; otherwise draw one from the env's np_random
        if seed is not None:
            run_seed = int(seed)
        else:
            run_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.clock = ManualClock(0.0)
        self.state = RunState(cfg=self.cfg, clock=self.clock, rng=random.Random(run_seed))
        self.timestep = 0
        self.current_seed = run_seed

        obs = build_observation(self.state)
        return obs, self._info()

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None and self.clock is not None, "call reset() first"

        if int(action) == 1:
            self.state.jump()

        health_before = self.state.health
        for _ in range(self.frame_skip):
            self.clock.advance(self.dt_ms)
            self.state.step(self.dt_ms)
            if self.state.game_over:
                break

        if self.state.game_over:
            reward = -1.0
        elif self.state.health < health_before:
            reward = -0.5
        else:
            reward = 1.0

        self.timestep += 1
        terminated = self.state.game_over
        truncated = (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions)

        obs = build_observation(self.state)
        info = self._info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def _info(self) -> Dict[str, Any]:
        assert self.state is not None
        snap = self.state.snapshot()
        return {
            "seed": self.current_seed,
            "timestep": self.timestep,
            "score": snap["score"],
            "health": snap["health"],
            "speed": snap["speed"],
            "invincible": snap["invincible"],
            "n_entities": len(snap["entities"]),
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.state is None:
            return None

        if self.screen is None:
            pygame.init()
            size = (int(self.cfg.width), int(self.cfg.height))
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode(size)
                pygame.display.set_caption("Ramen Runner - Gym Env")
            else:
                self.screen = pygame.Surface(size)
            self.pg_clock = pygame.time.Clock()
            self.renderer = Renderer(self.screen)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()

        self.renderer.draw(self.state)

        if self.render_mode == "human":
            pygame.display.flip()
            self.pg_clock.tick(self.metadata.get("render_fps", 60))
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.pg_clock = None
            self.renderer = None
