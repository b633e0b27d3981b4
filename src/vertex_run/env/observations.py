# src/vertex_run/env/observations.py
from __future__ import annotations
from typing import List
import numpy as np

from vertex_run.game.config import GROUND_Y, CEILING_Y, PLAYER_H, MAX_PROGRESS
from vertex_run.game.collision import to_screen_x
from vertex_run.game.run_state import RunState

# Number of upcoming spikes reported, and how far ahead (screen px) is "far"
LOOKAHEAD_SPIKES: int = 3
LOOKAHEAD_PX: float = 1200.0
# |vy| that maps to 1.0 (twice the default jump impulse)
VY_NORM: float = 40.0

OBS_SIZE: int = 5 + LOOKAHEAD_SPIKES


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _norm_y(y_top: float) -> float:
    """0.0 at the ceiling, 1.0 resting on the ground."""
    denom = max(1.0, float(GROUND_Y - PLAYER_H - CEILING_Y))
    return _clamp01((y_top - CEILING_Y) / denom)


def _norm_vy(vy: float) -> float:
    return float(max(-1.0, min(1.0, vy / VY_NORM)))


def spike_distances(state: RunState, count: int = LOOKAHEAD_SPIKES) -> List[float]:
    """
    Normalized gaps between the player's front edge and the next `count` spikes
    not yet fully passed. 0.0 = overlapping, 1.0 = beyond LOOKAHEAD_PX or none left.
    """
    p = state.player
    out: List[float] = []
    for o in state.obstacles:
        left = to_screen_x(o.x, state.camera_x)
        if left + o.w <= p.left:
            continue
        out.append(_clamp01((left - p.right) / LOOKAHEAD_PX))
        if len(out) == count:
            break
    while len(out) < count:
        out.append(1.0)
    return out


def build_observation(state: RunState) -> np.ndarray:
    """
    Returns a fixed (8,) float32 vector:
      [ y_norm, vy_norm, on_ground, grav_dir, d1, d2, d3, progress ]
    - y_norm in [0,1], vy_norm in [-1,1], on_ground in {0,1}, grav_dir in {-1,+1}
    - d1..d3 from spike_distances()
    - progress in [0,1]
    """
    p = state.player
    feats = [
        _norm_y(float(p.y)),
        _norm_vy(float(p.vy)),
        1.0 if p.on_ground else 0.0,
        1.0 if state.grav_dir > 0 else -1.0,
    ]
    feats.extend(spike_distances(state))
    feats.append(_clamp01(state.progress / MAX_PROGRESS))
    return np.asarray(feats, dtype=np.float32)
