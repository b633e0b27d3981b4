# src/vertex_run/game/run_state.py
"""
Run lifecycle and per-tick simulation.

    IDLE --start()--> RUNNING --spike hit--> ENDED(death)
                         |
                         +----portal------> ENDED(complete)
    ENDED --restart()--> RUNNING

All state lives on a RunState instance. Side effects for the outside world
(sounds, music fade, result screen) are reported as RunEvent values returned
from start()/jump()/step(); persistence goes through a RecordBook.
"""
from __future__ import annotations
import copy
import logging
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .config import (
    LEVEL_CONFIG, JUMP_CONFIG, LevelConfig, JumpConfig,
    GROUND_Y, CEILING_Y, GRAVITY_DOWN, SCROLL_PX_PER_TICK,
    WIDTH, RENDER_MARGIN, MAX_PROGRESS,
)
from .collision import first_hazard_hit, check_goal, to_screen_x
from .level import Goal, Level, Obstacle, generate, resolve_seed
from .particles import Particle, emit, tick as tick_particles
from .player import Player, integrate
from .storage import RecordBook

logger = logging.getLogger(__name__)


class RunPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


class Outcome(Enum):
    DEATH = "death"
    COMPLETE = "complete"


class RunEvent(Enum):
    RUN_STARTED = "run_started"
    JUMP = "jump"
    HAZARD_HIT = "hazard_hit"
    GOAL_REACHED = "goal_reached"


@dataclass
class StepResult:
    events: List[RunEvent] = field(default_factory=list)
    outcome: Optional[Outcome] = None
    final_score: Optional[int] = None

    @property
    def ended(self) -> bool:
        return self.outcome is not None


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of one frame for drawing and the result screen."""
    phase: RunPhase
    player: Player
    obstacles: Tuple[Obstacle, ...]
    particles: Tuple[Particle, ...]
    goal: Optional[Goal]
    camera_x: float
    progress: float
    score: int
    deaths: int
    record: int
    grav_dir: int
    outcome: Optional[Outcome] = None
    final_score: Optional[int] = None


def clamp_progress(value: float) -> float:
    return max(0.0, min(float(MAX_PROGRESS), value))


class RunState:
    """One game session: the current run plus session-wide deaths and record."""

    def __init__(self,
                 level_config: LevelConfig = LEVEL_CONFIG,
                 jump_config: JumpConfig = JUMP_CONFIG,
                 records: Optional[RecordBook] = None,
                 ground_y: float = GROUND_Y,
                 ceiling_y: float = CEILING_Y,
                 scroll_speed: float = SCROLL_PX_PER_TICK,
                 view_width: float = WIDTH):
        self.level_config = level_config
        self.jump_config = jump_config
        self.records = records if records is not None else RecordBook()
        self.ground_y = ground_y
        self.ceiling_y = ceiling_y
        self.scroll_speed = scroll_speed
        self.view_width = view_width

        self.phase = RunPhase.IDLE
        self.seed: Optional[int] = None
        self.rng = random.Random()
        self.level = Level()
        self.player = Player.on_floor(ground_y)
        self.particles: List[Particle] = []
        self.grav_dir = GRAVITY_DOWN
        self.camera_x = 0.0
        self.progress = 0.0
        self.outcome: Optional[Outcome] = None
        self.final_score: Optional[int] = None

        self.deaths = self.records.load_deaths()
        self.record = self.records.load_record()

    # -------------------- Read-only views --------------------

    @property
    def running(self) -> bool:
        return self.phase is RunPhase.RUNNING

    @property
    def ended(self) -> bool:
        return self.phase is RunPhase.ENDED

    @property
    def obstacles(self) -> List[Obstacle]:
        return self.level.obstacles

    @property
    def goal(self) -> Optional[Goal]:
        return self.level.goal

    @property
    def level_length(self) -> float:
        return self.level.level_length

    @property
    def score(self) -> int:
        """Whole-percent progress as shown in the HUD."""
        return int(math.floor(clamp_progress(self.progress)))

    def visible_obstacles(self) -> List[Obstacle]:
        lo, hi = -RENDER_MARGIN, self.view_width + RENDER_MARGIN
        return [o for o in self.level.obstacles
                if lo <= to_screen_x(o.x, self.camera_x) <= hi]

    def snapshot(self) -> Snapshot:
        return Snapshot(
            phase=self.phase,
            player=copy.copy(self.player),
            obstacles=tuple(self.visible_obstacles()),
            particles=tuple(copy.copy(p) for p in self.particles),
            goal=self.level.goal,
            camera_x=self.camera_x,
            progress=self.progress,
            score=self.score,
            deaths=self.deaths,
            record=self.record,
            grav_dir=self.grav_dir,
            outcome=self.outcome,
            final_score=self.final_score,
        )

    # -------------------- Entry points --------------------

    def start(self, seed: Optional[int] = None) -> List[RunEvent]:
        """Build a fresh level and put the player back on the floor. None seed = random level."""
        self.seed = resolve_seed(seed)
        self.rng = random.Random(self.seed)
        self.level = generate(self.level_config, self.rng)
        self._reset_player()
        self.phase = RunPhase.RUNNING
        logger.debug("Run started (seed=%d, %d spikes)", self.seed, len(self.level.obstacles))
        return [RunEvent.RUN_STARTED]

    def restart(self, seed: Optional[int] = None) -> List[RunEvent]:
        return self.start(seed)

    def jump(self) -> List[RunEvent]:
        """Input hook; ignored unless running and standing on a surface."""
        if not self.running:
            return []
        if self.player.try_jump(self.jump_config):
            return [RunEvent.JUMP]
        return []

    def step(self) -> StepResult:
        """Advance the run by one tick. Does nothing unless running."""
        result = StepResult()
        if not self.running:
            return result

        p = self.player
        jc = self.jump_config
        integrate(p, self.grav_dir, jc.gravity_multiplier, self.ground_y, self.ceiling_y,
                  jc.velocity_cap_down, jc.velocity_cap_up)

        if p.on_ground:
            self.particles.extend(emit(p, self.grav_dir, self.camera_x, self.rng))
        self.particles = tick_particles(self.particles)

        self.camera_x += self.scroll_speed
        if self.level.level_length > 0:
            self.progress = clamp_progress(self.camera_x / self.level.level_length * 100)

        hit = first_hazard_hit(p, self.level.obstacles, self.grav_dir, self.camera_x,
                               self.ground_y, self.ceiling_y)
        if hit is not None:
            result.events.append(RunEvent.HAZARD_HIT)
            self._end(Outcome.DEATH, result)
            return result

        if check_goal(p, self.level.goal, self.camera_x):
            self.progress = float(MAX_PROGRESS)
            result.events.append(RunEvent.GOAL_REACHED)
            self._end(Outcome.COMPLETE, result)
        return result

    # -------------------- Internals --------------------

    def _reset_player(self):
        self.grav_dir = GRAVITY_DOWN
        self.player = Player.on_floor(self.ground_y)
        self.player.grav_dir = self.grav_dir
        self.camera_x = 0.0
        self.progress = 0.0
        self.particles = []
        self.outcome = None
        self.final_score = None

    def _end(self, outcome: Outcome, result: StepResult):
        self.phase = RunPhase.ENDED
        self.outcome = outcome
        if outcome is Outcome.DEATH:
            self.deaths += 1
            self.records.save_deaths(self.deaths)

        self.final_score = self.score
        self.record = max(self.record, self.records.submit_score(self.final_score))

        result.outcome = outcome
        result.final_score = self.final_score
        logger.info("Run ended: %s at %d%% (deaths=%d, record=%d)",
                    outcome.value, self.final_score, self.deaths, self.record)
