# src/vertex_run/tests/test_player.py
"""
Vertical motion: gravity, caps, surface clamps, jump impulse.

Usage (from repo root):
  python -m vertex_run.tests.test_player
"""
from __future__ import annotations
import math

from vertex_run.game.config import JumpConfig, JUMP_CONFIG
from vertex_run.game.player import Player, integrate

GROUND, CEIL, H = 880, 200, 80


def _tick(p: Player, grav: int, jc: JumpConfig = JUMP_CONFIG):
    integrate(p, grav, jc.gravity_multiplier, GROUND, CEIL, jc.velocity_cap_down, jc.velocity_cap_up)


def test_settles_on_ground():
    p = Player(y=300.0, vy=0.0, on_ground=False)
    for _ in range(200):
        _tick(p, +1)
    assert p.y == GROUND - H == 800
    assert p.on_ground
    assert p.vy == 0.0


def test_resting_player_stays_put():
    p = Player.on_floor(GROUND)
    for _ in range(10):
        _tick(p, +1)
        assert p.y == 800 and p.on_ground and p.vy == 0.0


def test_settles_on_ceiling_when_inverted():
    p = Player(y=500.0, vy=0.0, on_ground=False, grav_dir=-1)
    for _ in range(200):
        _tick(p, -1)
    assert p.y == CEIL and p.on_ground and p.vy == 0.0


def test_position_stays_between_surfaces():
    for grav in (+1, -1):
        for vy in (-5000.0, -50.0, -20.0, 0.0, 3.0, 50.0, 5000.0):
            for y in (CEIL, 450.0, GROUND - H):
                p = Player(y=float(y), vy=vy, on_ground=False, grav_dir=grav)
                _tick(p, grav)
                assert CEIL <= p.y <= GROUND - H, f"grav={grav} vy={vy} y0={y}: y={p.y}"
                boundary = GROUND - H if grav > 0 else CEIL
                assert p.on_ground == (p.y == boundary), f"grav={grav} vy={vy} y0={y}"
                if p.on_ground:
                    assert p.vy == 0.0


def test_gravity_accumulates_in_air():
    p = Player(y=400.0, vy=0.0, on_ground=False)
    _tick(p, +1)
    assert math.isclose(p.vy, 1.2) and math.isclose(p.y, 401.2)
    _tick(p, +1)
    assert math.isclose(p.vy, 2.4) and math.isclose(p.y, 403.6)


def test_fall_cap():
    jc = JumpConfig(velocity_cap_down=5.0)
    p = Player(y=300.0, vy=10.0, on_ground=False)
    _tick(p, +1, jc)
    assert p.vy == 5.0 and p.y == 305.0


def test_rise_cap_only_applies_when_inverted():
    jc = JumpConfig(velocity_cap_up=5.0)
    p = Player(y=600.0, vy=-10.0, on_ground=False, grav_dir=-1)
    _tick(p, -1, jc)
    assert p.vy == -5.0 and p.y == 595.0

    # Same cap under normal gravity leaves an upward jump alone
    q = Player(y=600.0, vy=-10.0, on_ground=False)
    _tick(q, +1, jc)
    assert math.isclose(q.vy, -8.8)


def test_jump_then_airborne_jump_is_noop():
    p = Player.on_floor(GROUND)
    assert p.try_jump()
    assert p.vy == -JUMP_CONFIG.initial_velocity_up == -20.0
    assert p.rotation == JUMP_CONFIG.rotation_radians_per_jump == math.pi / 2
    assert not p.on_ground

    assert not p.try_jump(), "second jump while airborne must be ignored"
    assert p.vy == -20.0 and p.rotation == math.pi / 2


def test_inverted_jump_pushes_down():
    p = Player(y=float(CEIL), grav_dir=-1, on_ground=True)
    assert p.try_jump()
    assert p.vy == 20.0


def test_full_jump_arc_lands_again():
    p = Player.on_floor(GROUND)
    p.try_jump()
    apex = p.y
    for _ in range(60):
        p.update_physics(JUMP_CONFIG, GROUND, CEIL)
        apex = min(apex, p.y)
        if p.on_ground:
            break
    assert p.on_ground and p.y == 800
    assert apex < 800 - 55, "a default jump must clear a spike"


def main():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
    print("✓ player physics ok")


if __name__ == "__main__":
    main()
