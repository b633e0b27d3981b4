# src/vertex_run/tests/test_level.py
"""
Level generation: fixed layouts, seeded determinism, spike budget.

Usage (from repo root):
  python -m vertex_run.tests.test_level
"""
from __future__ import annotations
import random

from vertex_run.game.config import LevelConfig, LEVEL_CONFIG, SPIKE_W, PORTAL_W
from vertex_run.game.level import generate, resolve_seed, Obstacle


def _xs(level):
    return [o.x for o in level.obstacles]


def test_fixed_spacing_layout():
    cfg = LevelConfig(first_obstacle_distance=2000, min_distance_between=350,
                      max_distance_between=350, chance_two_in_row_percent=0,
                      obstacle_count=3)
    level = generate(cfg, random.Random(7))
    assert _xs(level) == [2000, 2350, 2700]
    assert level.goal_x == 3350
    assert level.level_length == 3670
    assert level.goal.w == PORTAL_W
    assert all(o.kind == "spike" and o.w == 55 and o.h == 55 for o in level.obstacles)


def test_zero_obstacles():
    cfg = LevelConfig(first_obstacle_distance=2000, obstacle_count=0)
    level = generate(cfg, random.Random(1))
    assert level.obstacles == []
    assert level.goal_x == 2300
    assert level.level_length == 2300 + 120 + 200


def test_same_seed_same_level():
    a = generate(LEVEL_CONFIG, random.Random(12345))
    b = generate(LEVEL_CONFIG, random.Random(12345))
    assert a.obstacles == b.obstacles
    assert a.goal_x == b.goal_x and a.level_length == b.level_length


def test_different_seeds_differ():
    a = generate(LEVEL_CONFIG, random.Random(1))
    b = generate(LEVEL_CONFIG, random.Random(2))
    assert _xs(a) != _xs(b)


def test_budget_and_ordering():
    for seed in range(20):
        level = generate(LEVEL_CONFIG, random.Random(seed))
        n = LEVEL_CONFIG.obstacle_count
        assert n <= len(level.obstacles) <= 2 * n
        # pairs consume two slots of the budget, so the count is never exceeded
        assert len(level.obstacles) == n, f"seed {seed}: {len(level.obstacles)} spikes"
        xs = _xs(level)
        assert all(x1 <= x2 for x1, x2 in zip(xs, xs[1:])), f"seed {seed}: x not sorted"
        assert level.goal_x > xs[-1]


def test_pairs_sit_back_to_back():
    cfg = LevelConfig(first_obstacle_distance=1000, min_distance_between=400,
                      max_distance_between=400, chance_two_in_row_percent=100,
                      obstacle_count=3)
    level = generate(cfg, random.Random(3))
    # pair, then a lone spike because the budget has no room for a second one
    assert _xs(level) == [1000, 1000 + SPIKE_W, 1000 + SPIKE_W + 400]


def test_degenerate_config_is_accepted():
    cfg = LevelConfig(first_obstacle_distance=500, min_distance_between=300,
                      max_distance_between=100, chance_two_in_row_percent=0,
                      obstacle_count=5)
    level = generate(cfg, random.Random(0))
    assert len(level.obstacles) == 5
    assert all(isinstance(o, Obstacle) for o in level.obstacles)


def test_injected_source_drives_layout():
    class Fixed:
        """Always the low end: every pair roll succeeds, every gap is the minimum."""
        def random(self):
            return 0.0

        def uniform(self, a, b):
            return a

    cfg = LevelConfig(first_obstacle_distance=100, min_distance_between=200,
                      max_distance_between=900, chance_two_in_row_percent=30,
                      obstacle_count=4)
    level = generate(cfg, Fixed())
    assert _xs(level) == [100, 155, 355, 410]


def test_resolve_seed():
    assert resolve_seed(42) == 42
    s = resolve_seed(None)
    assert isinstance(s, int) and s >= 0


def main():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
    print("✓ level generation ok")


if __name__ == "__main__":
    main()
