# src/vertex_run/tests/test_env.py
"""
Quick tests for VertexRunEnv (Gymnasium environment).

Usage (from repo root):
  python -m vertex_run.tests.test_env
  python -m vertex_run.tests.test_env --render
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from vertex_run.env.vr_env import VertexRunEnv
from vertex_run.env.policies import tiny_heuristic_policy_init

SEED = 123
FRAME_SKIP = 4


def test_api_check():
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = VertexRunEnv(frame_skip=FRAME_SKIP)
    try:
        check_env(env)
    finally:
        env.close()


def test_smoke(steps: int = 300):
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = VertexRunEnv(frame_skip=FRAME_SKIP)
    env.action_space.seed(SEED)
    try:
        obs, info = env.reset(seed=SEED)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["seed"] == SEED

        for t in range(steps):
            a = env.action_space.sample()
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                break
    finally:
        env.close()


def test_determinism(steps: int = 300):
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = VertexRunEnv(frame_skip=FRAME_SKIP)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            obs, _ = env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.randint(0, 2)) for _ in range(steps)]

    t1 = rollout(SEED, action_seq)
    t2 = rollout(SEED, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        assert np.allclose(o1, o2), f"Determinism: obs mismatch at step {i}"
        assert (r1, te1, tr1) == (r2, te2, tr2), f"Determinism: transition mismatch at step {i}"


def _progress_with(policy, max_steps: int = 2000):
    env = VertexRunEnv(frame_skip=FRAME_SKIP)
    try:
        obs, info = env.reset(seed=SEED)
        for _ in range(max_steps):
            obs, r, term, trunc, info = env.step(policy(obs))
            if term or trunc:
                break
        return info, r, term
    finally:
        env.close()


def test_idle_runner_dies_on_first_spike():
    info, r, term = _progress_with(lambda _obs: 0)
    assert term and info["outcome"] == "death"
    assert r == VertexRunEnv.REWARD_DEATH
    # the first spike always sits at world x 2000
    assert info["camera_x"] == 1450.0


def test_heuristic_gets_further_than_idle():
    idle, _, _ = _progress_with(lambda _obs: 0)
    smart, _, _ = _progress_with(tiny_heuristic_policy_init())
    assert smart["progress"] > idle["progress"]


def test_rgb_render():
    env = VertexRunEnv(render_mode="rgb_array", frame_skip=FRAME_SKIP, render_scale=0.25)
    try:
        env.reset(seed=SEED)
        env.step(0)
        frame = env.render()
        assert isinstance(frame, np.ndarray)
        assert frame.shape == (270, 480, 3) and frame.dtype == np.uint8
    finally:
        env.close()


def render_demo(steps: int = 600):
    """Open a window and run the heuristic so you can visually verify behavior."""
    env = VertexRunEnv(render_mode="human", frame_skip=FRAME_SKIP)
    policy = tiny_heuristic_policy_init()
    try:
        obs, info = env.reset(seed=SEED)
        for _ in range(steps):
            obs, r, term, trunc, info = env.step(policy(obs))
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Render demo finished")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    args = ap.parse_args()

    try:
        test_api_check(); print("✓ API check ok")
        test_smoke(); print("✓ Smoke test ok")
        test_determinism(); print("✓ Determinism ok")
        test_idle_runner_dies_on_first_spike()
        test_heuristic_gets_further_than_idle(); print("✓ Policies ok")
        test_rgb_render(); print("✓ rgb_array render ok")
        if args.render:
            render_demo()
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
