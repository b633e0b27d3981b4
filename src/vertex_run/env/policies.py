# src/vertex_run/env/policies.py
"""Reference policies for VertexRunEnv rollouts (baselines, smoke tests)."""
from __future__ import annotations
import numpy as np

from vertex_run.env.observations import LOOKAHEAD_PX

# Jump once the next spike is this close (screen px). With the default jump the
# player must leave the ground 31..110 px before a spike pair to clear it, and
# decisions come every 40 px at frame_skip=4.
JUMP_TRIGGER_PX = 100.0


def random_policy_init(action_seed: int, jump_prob: float = 0.1):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < jump_prob)
    return act


def tiny_heuristic_policy_init(trigger_px: float = JUMP_TRIGGER_PX):
    """
    Very small rule: jump when standing and the nearest spike (obs[4]) is
    closer than trigger_px.
    """
    threshold = trigger_px / LOOKAHEAD_PX
    def act(obs: np.ndarray) -> int:
        on_ground, d1 = obs[2], obs[4]
        return 1 if (on_ground > 0.5 and d1 < threshold) else 0
    return act
