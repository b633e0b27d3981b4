# experiments/replay.py
"""
Replay tool for VertexRunEnv traces written by experiments.sanity_rollout.

# Typical usage (run from REPO ROOT)
python -m experiments.replay --policy heuristic --seed 105
python -m experiments.replay --trace experiments/runs/traces/random/112_actions.npy --frame-skip 4
python -m experiments.replay --policy heuristic --seed 105 --slow

# Controls during replay
SPACE = pause/resume
N     = single step (when paused)
R     = restart episode
ESC   = quit

Given the same seed, frame_skip and action sequence the replay matches the recorded run.
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import List, Optional

import numpy as np
import pygame

from vertex_run.env.vr_env import VertexRunEnv
from vertex_run.game.config import WIDTH, HEIGHT
from vertex_run.game.game import draw_world

DEFAULT_OUT_DIR = "experiments/runs"
SCALE = 0.5


def _find_trace(out_dir: Path, policy: str, seed: int) -> Path:
    p = out_dir / "traces" / policy / f"{seed}_actions.npy"
    if not p.exists():
        raise FileNotFoundError(f"Trace not found: {p}")
    return p

def _read_meta(out_dir: Path, policy: str, seed: int) -> dict:
    meta_path = out_dir / "traces" / policy / f"{seed}_meta.txt"
    meta = {}
    if meta_path.exists():
        for line in meta_path.read_text(encoding="utf-8").splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                meta[k.strip()] = v.strip()
    return meta

def _draw_overlay(surf: pygame.Surface, font, env: VertexRunEnv, step_idx: int, action: Optional[int]):
    obs = env._get_obs()
    s = env.state
    lines: List[str] = [
        f"Step={step_idx}  Action={'NOOP' if action == 0 else ('JUMP' if action == 1 else '-')}",
        f"Progress={s.progress:.1f}%  Outcome={s.outcome.value if s.outcome else '—'}",
        f"y={obs[0]:.2f}  vy={obs[1]:.2f}  ground={int(obs[2])}",
        "spikes: " + "  ".join(f"{d:.2f}" for d in obs[4:7]),
    ]
    panel = pygame.Surface((420, 22 * (len(lines) + 1)), pygame.SRCALPHA)
    panel.fill((10, 20, 35, 160))
    surf.blit(panel, (12, 12))
    for i, txt in enumerate(lines):
        surf.blit(font.render(txt, True, (210, 230, 255)), (20, 18 + i * 22))

def replay_episode(seed: int, actions: np.ndarray, frame_skip: int, slow: bool = False):
    """
    Replays an episode deterministically with an on-screen overlay.
    Controls:
      SPACE: pause/resume   N: single-step when paused
      R: restart episode    ESC: quit
    """
    pygame.init()
    size = (int(WIDTH * SCALE), int(HEIGHT * SCALE))
    screen = pygame.display.set_mode(size)
    pygame.display.set_caption("Vertex Run — replay")
    field = pygame.Surface((WIDTH, HEIGHT))
    font = pygame.font.SysFont("jetbrainsmono", 18)
    clock = pygame.time.Clock()

    env = VertexRunEnv(frame_skip=frame_skip, time_limit_seconds=None)
    env.reset(seed=seed)

    paused = False
    single = False
    step_idx = 0
    action: Optional[int] = None

    try:
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_n and paused:
                        single = True
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step_idx = 0
                        action = None

            done = env.state.ended or step_idx >= len(actions)
            if (not paused or single) and not done:
                action = int(actions[step_idx])
                env.step(action)
                step_idx += 1
                single = False

            draw_world(field, env.state.snapshot())
            pygame.transform.smoothscale(field, size, screen)
            _draw_overlay(screen, font, env, step_idx, action)
            pygame.display.flip()

            # ~decision rate in slow mode
            clock.tick(15 if slow else 60)
    finally:
        env.close()
        pygame.quit()

def main():
    ap = argparse.ArgumentParser(description="Replay a recorded VertexRunEnv episode with overlay.")
    ap.add_argument("--seed", type=int, help="Episode seed")
    ap.add_argument("--policy", type=str, default="random",
                    help="Trace subfolder name, e.g. random / heuristic")
    ap.add_argument("--trace", type=str, default="",
                    help="Optional explicit path to a .npy action file")
    ap.add_argument("--out-dir", type=str, default=DEFAULT_OUT_DIR)
    ap.add_argument("--frame-skip", type=int, default=-1,
                    help="Override frame_skip. If <0, use meta or default=4")
    ap.add_argument("--slow", action="store_true", help="Slow display (~15 fps) for readability")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)

    if args.trace:
        trace_path = Path(args.trace)
        if not trace_path.exists():
            raise FileNotFoundError(f"Trace file not found: {trace_path}")
        if args.seed is None:
            try:
                args.seed = int(trace_path.stem.split("_")[0])
            except ValueError:
                raise SystemExit("Could not infer the seed from the trace name; pass --seed")
    else:
        if args.seed is None:
            raise SystemExit("Please provide --seed or --trace")
        trace_path = _find_trace(out_dir, args.policy, args.seed)

    actions = np.load(trace_path)
    if actions.ndim != 1:
        raise ValueError(f"Expected 1D action array, got shape {actions.shape}")

    fs = args.frame_skip
    if fs < 0:
        fs = 4
        if not args.trace:
            meta = _read_meta(out_dir, args.policy, args.seed)
            if "frame_skip" in meta:
                fs = int(meta["frame_skip"])

    print(f"Replaying seed={args.seed}  policy={args.policy}  steps={len(actions)}  frame_skip={fs}")
    print("Controls: SPACE pause/resume | N step (when paused) | R restart | ESC quit")

    replay_episode(seed=args.seed, actions=actions, frame_skip=fs, slow=args.slow)

if __name__ == "__main__":
    main()
