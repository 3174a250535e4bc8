# ramen_runner/tests/test_runner_env.py
"""
Quick tests for RunnerEnv (Gymnasium environment) and its observation vector.

Usage (from repo root):
  python -m ramen_runner.tests.test_runner_env
  python -m ramen_runner.tests.test_runner_env --render
  python -m ramen_runner.tests.test_runner_env --steps 1000
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from ramen_runner.env.observations import build_observation, OBS_SIZE
from ramen_runner.env.runner_env import RunnerEnv
from ramen_runner.game.clock import ManualClock
from ramen_runner.game.config import WorldConfig
from ramen_runner.game.entities import make_ground_obstacle
from ramen_runner.game.state import RunState


def test_api_check(frame_skip: int = 4) -> None:
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = RunnerEnv(frame_skip=frame_skip)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def test_smoke(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = RunnerEnv(frame_skip=frame_skip)
    try:
        obs, info = env.reset(seed=seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["health"] == 4 and info["score"] == 0

        rng = np.random.RandomState(seed)
        for t in range(steps):
            obs, r, term, trunc, info = env.step(int(rng.randint(0, 2)))
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term:
                assert info["health"] == 0 and r == -1.0
            if term or trunc:
                break
    finally:
        env.close()


def test_determinism(steps: int = 300, seed: int = 7, frame_skip: int = 4) -> None:
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = RunnerEnv(frame_skip=frame_skip)
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

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        assert np.array_equal(o1, o2), f"Determinism: obs mismatch at step {i}"
        assert (r1, te1, tr1) == (r2, te2, tr2), f"Determinism: transition mismatch at step {i}"


def test_time_limit_truncates() -> None:
    env = RunnerEnv(frame_skip=4, time_limit_seconds=1.0)
    try:
        env.reset(seed=1)
        for i in range(15):
            _, r, term, trunc, info = env.step(0)
        assert trunc and not term
        assert info["timestep"] == 15
        assert r == 1.0
    finally:
        env.close()


def test_jump_action_leaves_ground() -> None:
    env = RunnerEnv(frame_skip=4)
    try:
        obs, _ = env.reset(seed=3)
        assert obs[0] == 1.0 and obs[2] == 0.0, "starts grounded"
        obs, *_ = env.step(1)
        assert obs[0] < 1.0, "player rose"
        assert obs[1] < 0.0, "moving upward"
        assert obs[2] == 1.0 and obs[3] == 1.0, "jumping with double jump available"
    finally:
        env.close()


def test_observation_layout() -> None:
    state = RunState(cfg=WorldConfig.for_canvas(800, 800), clock=ManualClock(0.0))
    obs = build_observation(state)
    assert obs.shape == (OBS_SIZE,) and obs.dtype == np.float32
    assert obs[0] == 1.0 and obs[1] == 0.0
    assert list(obs[6:]) == [1.0] * 6, "no hazards -> sentinels"

    cfg = state.cfg
    near = make_ground_obstacle(400, cfg.ground_y, 45, 60, speed=4.0)
    far = make_ground_obstacle(700, cfg.ground_y, 45, 60, speed=4.0)
    behind = make_ground_obstacle(0, cfg.ground_y, 45, 60, speed=4.0)
    state.entities.extend([far, behind, near])
    obs = build_observation(state)

    me = state.player.hitbox()
    near_hb = near.hitboxes()[0]
    assert abs(obs[6] - (near_hb.x - me.right) / cfg.width) < 1e-6
    assert abs(obs[7] - near_hb.y / cfg.height) < 1e-6
    assert abs(obs[8] - near_hb.bottom / cfg.height) < 1e-6
    assert obs[9] > obs[6], "second slot is the farther hazard"


def render_demo(steps: int, seed: int, frame_skip: int) -> None:
    """Open a window and run a short NOOP demo so you can visually verify behavior."""
    env = RunnerEnv(render_mode="human", frame_skip=frame_skip)
    try:
        env.reset(seed=seed)
        for _ in range(steps):
            _, _, term, trunc, _ = env.step(0)
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Render demo finished")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=123, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=300, help="Max decision steps per test")
    ap.add_argument("--frame-skip", type=int, default=4, help="Sim frames per decision step")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    args = ap.parse_args()

    try:
        test_api_check(frame_skip=args.frame_skip)
        print("✓ API check ok")
        test_smoke(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
        print("✓ Smoke test ok")
        test_determinism(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
        print("✓ Determinism ok")
        test_time_limit_truncates()
        test_jump_action_leaves_ground()
        test_observation_layout()
        print("✓ Observation ok")
        if args.render:
            render_demo(steps=min(args.steps, 600), seed=args.seed, frame_skip=args.frame_skip)
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
