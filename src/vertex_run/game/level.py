# src/vertex_run/game/level.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from .config import (
    LEVEL_CONFIG, LevelConfig, SPIKE_W, SPIKE_H, PORTAL_W,
    GOAL_OFFSET, LEVEL_TRAILING_MARGIN,
)

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """The part of random.Random the generator relies on."""

    def random(self) -> float: ...

    def uniform(self, a: float, b: float) -> float: ...


@dataclass(frozen=True)
class Obstacle:
    """A spike: world-space left edge plus size."""
    x: float
    w: float = SPIKE_W
    h: float = SPIKE_H
    kind: str = "spike"

    @property
    def right(self) -> float:
        return self.x + self.w


@dataclass(frozen=True)
class Goal:
    """Finish portal; only its horizontal band matters for completion."""
    x: float
    w: float = PORTAL_W

    @property
    def right(self) -> float:
        return self.x + self.w


@dataclass(frozen=True)
class Level:
    obstacles: List[Obstacle] = field(default_factory=list)
    goal: Optional[Goal] = None
    level_length: float = 0.0

    @property
    def goal_x(self) -> Optional[float]:
        return None if self.goal is None else self.goal.x


def resolve_seed(seed: Optional[int]) -> int:
    """None -> fresh random seed, so every level can be reproduced afterwards."""
    if seed is None:
        seed = random.randrange(0, 2**32 - 1)
    return int(seed)


def generate(config: LevelConfig = LEVEL_CONFIG, rng: Optional[RandomSource] = None) -> Level:
    """
    Lay out spikes along the course and place the finish portal behind them.

    Every spike draws one value from rng to decide on a follow-up spike, a pair
    draws one more for its (integer, hence zero) jitter, and each cursor advance
    draws one uniform value, so a given seed always yields the same level.
    """
    if rng is None:
        rng = random.Random(resolve_seed(None))

    obstacles: List[Obstacle] = []
    x = config.first_obstacle_distance
    min_d = config.min_distance_between
    max_d = config.max_distance_between
    chance_two = (config.chance_two_in_row_percent or 0) / 100
    n = int(config.obstacle_count)

    i = 0
    while i < n:
        obstacles.append(Obstacle(x=x))
        if chance_two > 0 and rng.random() < chance_two and i + 1 < n:
            x += SPIKE_W + int(rng.random() * 1)
            obstacles.append(Obstacle(x=x))
            i += 1
        x += rng.uniform(min_d, max_d)
        i += 1

    goal = Goal(x=x + GOAL_OFFSET)
    level_length = goal.right + LEVEL_TRAILING_MARGIN
    logger.debug("Built level: %d spikes, goal at %.1f, length %.1f",
                 len(obstacles), goal.x, level_length)
    return Level(obstacles=obstacles, goal=goal, level_length=level_length)
