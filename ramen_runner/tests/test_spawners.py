# ramen_runner/tests/test_spawners.py
"""
Spawn timing state machines and what they produce.

Usage (from repo root):
  python -m ramen_runner.tests.test_spawners
"""
import random

from ramen_runner.game.config import (
    WorldConfig, OBSTACLE_COOLDOWN, PLANE_COOLDOWN, POWERUP_COOLDOWN,
)
from ramen_runner.game.spawners import ObstacleSpawner, PlaneSpawner, PowerUpSpawner


class AlwaysLow(random.Random):
    """random() pinned to 0: always a gate, always minimum heights."""
    def random(self):
        return 0.0


class NeverGate(random.Random):
    def random(self):
        return 0.99


def cfg800(**overrides) -> WorldConfig:
    return WorldConfig.for_canvas(800, 800, **overrides)


def test_cooldown_retriggers_with_jitter():
    sp = ObstacleSpawner(cfg800(), random.Random(7), now_ms=0.0)
    base, lo, hi = OBSTACLE_COOLDOWN
    assert base + lo <= sp.cooldown_ms <= base + hi

    first = sp.cooldown_ms
    assert sp.update(first - 1, speed=4.0) == [], "too early"
    spawned = sp.update(first, speed=4.0)
    assert len(spawned) == 1
    assert sp.last_spawn_at == first
    assert base + lo <= sp.cooldown_ms <= base + hi
    assert sp.update(first + 1, speed=4.0) == [], "timer restarted from the spawn"


def test_one_spawn_per_update_even_after_long_gap():
    sp = PlaneSpawner(cfg800(), random.Random(3), now_ms=0.0)
    spawned = sp.update(60_000, speed=4.0)
    assert len(spawned) == 1
    assert sp.last_spawn_at == 60_000


def test_stop_and_start():
    sp = PowerUpSpawner(cfg800(), random.Random(1), now_ms=0.0)
    sp.stop()
    assert not sp.active
    assert sp.update(1_000_000, speed=4.0) == []

    sp.start(50_000)
    assert sp.active and sp.last_spawn_at == 50_000
    base, lo, hi = POWERUP_COOLDOWN
    assert sp.update(50_000 + base + lo - 1, speed=4.0) == []
    assert len(sp.update(50_000 + base + hi, speed=4.0)) == 1


def test_gate_gap_clears_max_jump():
    cfg = cfg800()
    sp = ObstacleSpawner(cfg, AlwaysLow(), now_ms=0.0)
    (gate,) = sp.update(sp.cooldown_ms, speed=4.0)
    assert gate.kind == "gate"
    ground, overhead = gate.members
    gap = ground.y - (overhead.y + overhead.height)
    assert gap >= cfg.max_jump_height * 1.2 - 1e-9
    assert ground.y + ground.height == cfg.ground_y, "ground member stands on the ground"
    assert overhead.y >= cfg.gate_top_margin


def test_gate_gap_scenario_b():
    cfg = cfg800(gravity=0.5, jump_force=-15.0)
    sp = ObstacleSpawner(cfg, AlwaysLow(), now_ms=0.0)
    assert abs(sp.gate_gap() - 270.0) < 1e-9
    (gate,) = sp.update(sp.cooldown_ms, speed=4.0)
    ground, overhead = gate.members
    assert ground.y - (overhead.y + overhead.height) >= 270.0 - 1e-9


def test_gate_that_does_not_fit_becomes_single():
    cfg = cfg800(ground_y=300.0)
    sp = ObstacleSpawner(cfg, AlwaysLow(), now_ms=0.0)
    (obs,) = sp.update(sp.cooldown_ms, speed=4.0)
    assert obs.kind == "ground"
    assert obs.y + obs.height == 300.0


def test_single_obstacle_height_and_sprite():
    cfg = cfg800()
    rng = random.Random(11)
    sp = ObstacleSpawner(cfg, rng, now_ms=0.0)
    now = 0.0
    for _ in range(50):
        now += sp.cooldown_ms
        for e in sp.update(now, speed=4.0):
            parts = e.members or [e]
            for part in parts:
                assert 0 <= part.sprite_index < 3
            if e.kind == "ground":
                assert cfg.obstacle_min_h <= e.height <= cfg.obstacle_max_h
                assert e.x == cfg.spawn_x


def test_single_obstacle_without_gate_roll():
    sp = ObstacleSpawner(cfg800(), NeverGate(), now_ms=0.0)
    (obs,) = sp.update(sp.cooldown_ms, speed=4.0)
    assert obs.kind == "ground"


def test_spawned_entities_capture_speed():
    cfg = cfg800()
    obs_sp = ObstacleSpawner(cfg, NeverGate(), now_ms=0.0)
    (obs,) = obs_sp.update(obs_sp.cooldown_ms, speed=7.0)
    assert obs.speed == 7.0

    plane_sp = PlaneSpawner(cfg, random.Random(2), now_ms=0.0)
    (plane,) = plane_sp.update(plane_sp.cooldown_ms, speed=5.0)
    assert abs(plane.speed - 6.0) < 1e-9, "planes fly 1.2x obstacle speed"
    assert cfg.height * 0.3 <= plane.y <= cfg.height * 0.6

    pu_sp = PowerUpSpawner(cfg, random.Random(2), now_ms=0.0)
    (pu,) = pu_sp.update(pu_sp.cooldown_ms, speed=5.0)
    assert pu.speed == 5.0 and pu.kind == "powerup"
    assert cfg.height * 0.2 <= pu.y <= cfg.height * 0.7


def test_plane_cooldown_range():
    sp = PlaneSpawner(cfg800(), random.Random(5), now_ms=0.0)
    base, lo, hi = PLANE_COOLDOWN
    for i in range(20):
        assert base + lo <= sp.cooldown_ms <= base + hi
        sp.start(float(i))


def test_shift_delays_spawn():
    sp = PlaneSpawner(cfg800(), random.Random(5), now_ms=0.0)
    due = sp.cooldown_ms
    sp.shift(1000.0)
    assert sp.update(due, speed=4.0) == []
    assert len(sp.update(due + 1000.0, speed=4.0)) == 1


def main():
    test_cooldown_retriggers_with_jitter()
    test_one_spawn_per_update_even_after_long_gap()
    test_stop_and_start()
    test_gate_gap_clears_max_jump()
    test_gate_gap_scenario_b()
    test_gate_that_does_not_fit_becomes_single()
    test_single_obstacle_height_and_sprite()
    test_single_obstacle_without_gate_roll()
    test_spawned_entities_capture_speed()
    test_plane_cooldown_range()
    test_shift_delays_spawn()
    print("✓ spawners ok")


if __name__ == "__main__":
    main()
