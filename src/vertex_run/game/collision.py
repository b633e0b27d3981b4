# src/vertex_run/game/collision.py
from __future__ import annotations
from typing import Iterable, List, Optional

from .config import GROUND_Y, CEILING_Y, HITBOX_INSET_X
from .geometry import Point, Triangle, point_in_triangle, spans_overlap
from .level import Obstacle, Goal
from .player import Player


def to_screen_x(world_x: float, camera_x: float) -> float:
    return world_x - camera_x


def hazard_triangle(obstacle: Obstacle, grav_dir: int, camera_x: float,
                    ground_y: float = GROUND_Y, ceiling_y: float = CEILING_Y) -> Triangle:
    """Screen-space spike: base on the active surface, apex pointing into the lane."""
    sx = to_screen_x(obstacle.x, camera_x)
    apex_x = sx + obstacle.w * 0.5
    if grav_dir > 0:
        A = (sx, ground_y)
        B = (sx + obstacle.w, ground_y)
        C = (apex_x, ground_y - obstacle.h)
    else:
        A = (sx, ceiling_y)
        B = (sx + obstacle.w, ceiling_y)
        C = (apex_x, ceiling_y + obstacle.h)
    return A, B, C


def sample_points(player: Player, grav_dir: int) -> List[Point]:
    """
    The six hitbox probes: foot center and foot corners, body center, head corners.
    "Foot" is the edge facing gravity. Corner probes sit HITBOX_INSET_X inside the sides.
    """
    cx, cy = player.center
    foot_y = player.bottom if grav_dir > 0 else player.y
    head_y = player.y if grav_dir > 0 else player.bottom
    left = player.x + HITBOX_INSET_X
    right = player.x + player.w - HITBOX_INSET_X
    return [
        (cx, foot_y),
        (left, foot_y),
        (right, foot_y),
        (cx, cy),
        (left, head_y),
        (right, head_y),
    ]


def _in_reach(player: Player, obstacle: Obstacle, grav_dir: int,
              ground_y: float, ceiling_y: float) -> bool:
    if grav_dir > 0:
        return player.bottom > ground_y - obstacle.h
    return player.y < ceiling_y + obstacle.h


def check_hazard(player: Player, obstacle: Obstacle, grav_dir: int, camera_x: float,
                 ground_y: float = GROUND_Y, ceiling_y: float = CEILING_Y) -> bool:
    """
    Spike hit test. Only the six sample points are tested against the triangle,
    so an edge slicing through the box between probes is not a hit.
    """
    left = to_screen_x(obstacle.x, camera_x)
    if not spans_overlap(player.left, player.right, left, left + obstacle.w):
        return False
    if not _in_reach(player, obstacle, grav_dir, ground_y, ceiling_y):
        return False

    a, b, c = hazard_triangle(obstacle, grav_dir, camera_x, ground_y, ceiling_y)
    return any(point_in_triangle(p, a, b, c) for p in sample_points(player, grav_dir))


def first_hazard_hit(player: Player, obstacles: Iterable[Obstacle], grav_dir: int,
                     camera_x: float, ground_y: float = GROUND_Y,
                     ceiling_y: float = CEILING_Y) -> Optional[Obstacle]:
    """Scan in course order; the first spike hit wins."""
    for obstacle in obstacles:
        if obstacle.kind != "spike":
            continue
        if check_hazard(player, obstacle, grav_dir, camera_x, ground_y, ceiling_y):
            return obstacle
    return None


def check_goal(player: Player, goal: Optional[Goal], camera_x: float) -> bool:
    """Horizontal band overlap with the portal; height does not matter."""
    if goal is None:
        return False
    left = to_screen_x(goal.x, camera_x)
    return spans_overlap(player.left, player.right, left, left + goal.w)
