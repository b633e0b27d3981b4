# src/vertex_run/env/vr_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from vertex_run.game.config import WIDTH, HEIGHT, FPS, LEVEL_CONFIG, JUMP_CONFIG, LevelConfig, JumpConfig
from vertex_run.game.run_state import RunState, RunEvent, Outcome
from vertex_run.game.storage import MemoryStore, RecordBook
from vertex_run.env.observations import build_observation, OBS_SIZE, LOOKAHEAD_SPIKES


class VertexRunEnv(gym.Env):
    """
    Vertex Run Gymnasium environment (vector observations).
    - One simulation tick per frame at 60 Hz.
    - Agent acts every `frame_skip` ticks (default 4) -> 15 decisions/sec.
    - Observation: shape (8,), float32, see build_observation().
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    REWARD_ALIVE = 1.0
    REWARD_DEATH = -1.0
    REWARD_COMPLETE = 10.0

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 90.0,
                 level_config: LevelConfig = LEVEL_CONFIG,
                 jump_config: JumpConfig = JUMP_CONFIG,
                 render_scale: float = 0.5):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode!r}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.render_scale = float(render_scale)

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            # decisions per second = FPS / frame_skip
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)

        # [y_norm, vy_norm, on_ground, grav_dir, d1, d2, d3, progress]
        low = np.array([0.0, -1.0, 0.0, -1.0] + [0.0] * LOOKAHEAD_SPIKES + [0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # Headless sessions never touch disk
        self.state = RunState(level_config=level_config, jump_config=jump_config,
                              records=RecordBook(MemoryStore()))
        self.timestep: int = 0

        # Rendering
        self.screen = None
        self.field = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # A given seed drives the level directly; otherwise draw one from np_random
        if seed is not None:
            level_seed = int(seed)
        else:
            level_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.state.start(level_seed)
        self.timestep = 0

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._info()

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state.seed is not None, "Call reset() before step()"

        jumped = False
        if int(action) == 1:
            jumped = RunEvent.JUMP in self.state.jump()

        outcome: Optional[Outcome] = None
        for _ in range(self.frame_skip):
            result = self.state.step()
            if result.ended:
                outcome = result.outcome
                break
            if not self.state.running:
                break

        if outcome is Outcome.DEATH:
            reward = self.REWARD_DEATH
        elif outcome is Outcome.COMPLETE:
            reward = self.REWARD_COMPLETE
        elif self.state.running:
            reward = self.REWARD_ALIVE
        else:
            # Stepping a finished episode
            reward = 0.0

        self.timestep += 1
        terminated = self.state.ended
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        info = self._info()
        info["jumped"] = jumped

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        return build_observation(self.state)

    def _info(self) -> Dict[str, Any]:
        s = self.state
        return {
            "seed": s.seed,
            "timestep": self.timestep,
            "camera_x": s.camera_x,
            "progress": s.progress,
            "on_ground": s.player.on_ground,
            "outcome": s.outcome.value if s.outcome is not None else None,
            "score": s.final_score,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None:
            return None

        # Imported here so headless training never loads fonts or a display
        from vertex_run.game.game import draw_world

        size = (int(WIDTH * self.render_scale), int(HEIGHT * self.render_scale))
        if self.field is None:
            self.field = pygame.Surface((WIDTH, HEIGHT))
        if self.render_mode == "human" and self.screen is None:
            pygame.init()
            self.screen = pygame.display.set_mode(size)
            pygame.display.set_caption("Vertex Run — Gym Env")
            self.clock = pygame.time.Clock()

        draw_world(self.field, self.state.snapshot())

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.transform.smoothscale(self.field, size, self.screen)
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata["render_fps"])
            return None

        frame = pygame.transform.smoothscale(self.field, size)
        arr = pygame.surfarray.array3d(frame)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
        self.field = None
