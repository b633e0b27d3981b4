# src/vertex_run/game/particles.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List

from .config import (
    PARTICLES_PER_EMIT, PARTICLE_VX_SPREAD, PARTICLE_VY_MIN, PARTICLE_VY_SPREAD,
    PARTICLE_LIFE_MIN, PARTICLE_LIFE_SPREAD, PARTICLE_SIZE_MIN, PARTICLE_SIZE_SPREAD,
)
from .level import RandomSource
from .player import Player


@dataclass
class Particle:
    """Friction spark in world coordinates."""
    x: float
    y: float
    vx: float
    vy: float
    life: int = 0
    max_life: float = PARTICLE_LIFE_MIN
    size: float = PARTICLE_SIZE_MIN

    @property
    def alive(self) -> bool:
        return self.life < self.max_life

    @property
    def fade(self) -> float:
        """1.0 when fresh, 0.0 at end of life (draw alpha)."""
        if self.max_life <= 0:
            return 0.0
        return max(0.0, 1.0 - self.life / self.max_life)

    def advance(self):
        self.x += self.vx
        self.y += self.vy
        self.life += 1


def emit(player: Player, grav_dir: int, camera_x: float, rng: RandomSource) -> List[Particle]:
    """Two sparks along the edge touching the surface, anchored in world space."""
    out: List[Particle] = []
    edge_y = player.bottom if grav_dir > 0 else player.y
    for _ in range(PARTICLES_PER_EMIT):
        px = player.x + camera_x + rng.random() * player.w
        vx = (rng.random() - 0.5) * PARTICLE_VX_SPREAD
        push = PARTICLE_VY_MIN + rng.random() * PARTICLE_VY_SPREAD
        vy = push if grav_dir > 0 else -push
        out.append(Particle(
            x=px, y=edge_y, vx=vx, vy=vy,
            life=0,
            max_life=PARTICLE_LIFE_MIN + rng.random() * PARTICLE_LIFE_SPREAD,
            size=PARTICLE_SIZE_MIN + rng.random() * PARTICLE_SIZE_SPREAD,
        ))
    return out


def tick(particles: Iterable[Particle]) -> List[Particle]:
    """Age every particle by one tick and keep the survivors (order preserved)."""
    survivors: List[Particle] = []
    for p in particles:
        p.advance()
        if p.alive:
            survivors.append(p)
    return survivors
