# src/vertex_run/game/player.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Tuple
from .config import (
    PLAYER_X, PLAYER_W, PLAYER_H, GROUND_Y, CEILING_Y, GRAVITY_DOWN,
    JUMP_CONFIG, JumpConfig,
)


@dataclass
class Player:
    """
    Runner square. x is a fixed screen coordinate, y is a world coordinate (top edge).
    - grav_dir = +1: pulled towards the ground line
    - grav_dir = -1: pulled towards the ceiling line
    """
    x: float = float(PLAYER_X)
    y: float = float(GROUND_Y - PLAYER_H)
    vy: float = 0.0
    grav_dir: int = GRAVITY_DOWN
    on_ground: bool = True
    rotation: float = 0.0
    w: float = float(PLAYER_W)
    h: float = float(PLAYER_H)

    @classmethod
    def on_floor(cls, ground_y: float = GROUND_Y) -> "Player":
        """Fresh player resting on the ground line, as at the start of a run."""
        return cls(y=float(ground_y - PLAYER_H))

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.w * 0.5, self.y + self.h * 0.5

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.w), int(self.h))

    def try_jump(self, jump: JumpConfig = JUMP_CONFIG) -> bool:
        """Jump only if resting on a surface. Returns True if performed."""
        if not self.on_ground:
            return False
        self.vy = self.grav_dir * -jump.initial_velocity_up
        self.on_ground = False
        self.rotation += jump.rotation_radians_per_jump
        return True

    def update_physics(self, jump: JumpConfig = JUMP_CONFIG,
                       ground_y: float = GROUND_Y, ceiling_y: float = CEILING_Y):
        integrate(self, self.grav_dir, jump.gravity_multiplier, ground_y, ceiling_y,
                  jump.velocity_cap_down, jump.velocity_cap_up)


def integrate(player: Player, grav_dir: int, gravity_multiplier: float,
              ground_y: float, ceiling_y: float,
              velocity_cap_down: float = 0.0, velocity_cap_up: float = 0.0):
    """One fixed tick of vertical motion, then snap onto the surface gravity points at."""
    player.vy += grav_dir * gravity_multiplier

    # Caps of 0 are disabled
    if velocity_cap_down > 0 and grav_dir > 0 and player.vy > velocity_cap_down:
        player.vy = velocity_cap_down
    if velocity_cap_up > 0 and grav_dir < 0 and player.vy < -velocity_cap_up:
        player.vy = -velocity_cap_up

    player.y += player.vy

    # Clamp after the move (not swept)
    if grav_dir > 0:
        if player.y >= ground_y - player.h:
            player.y = ground_y - player.h
            player.vy = 0.0
            player.on_ground = True
        else:
            player.on_ground = False
            if player.y < ceiling_y:
                # head bump: stop at the ceiling but stay airborne
                player.y = ceiling_y
                player.vy = 0.0
    else:
        if player.y <= ceiling_y:
            player.y = ceiling_y
            player.vy = 0.0
            player.on_ground = True
        else:
            player.on_ground = False
            if player.y > ground_y - player.h:
                player.y = ground_y - player.h
                player.vy = 0.0
