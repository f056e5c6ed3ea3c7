"""
Unit checks for the two-slot pipe buffer.

Usage (from repo root):
  python -m pytest flappy/tests/test_pipes.py
  python -m flappy.tests.test_pipes
"""

from __future__ import annotations
import random

from flappy.game.config import SimulationConfig
from flappy.game.pipes import Pipe, PipePair, move_pipe_pair, spawn_pipe_pair

CFG = SimulationConfig()


def make_pair(left: float, show: bool = True, top_h: float = 200.0) -> PipePair:
    return PipePair(
        top_pipe=Pipe(top=0.0, height=top_h),
        bottom_pipe=Pipe(top=top_h + CFG.pipe_gap, height=CFG.height),
        show=show,
        left=left,
        width=CFG.pipe_width,
    )


def test_spawn_geometry():
    rng = random.Random(7)
    for show in (True, False):
        for _ in range(200):
            pair = spawn_pipe_pair(CFG, rng, show=show)
            assert pair.show is show
            assert CFG.min_top_for_top_pipe <= pair.top_pipe.height < CFG.max_top_for_top_pipe
            assert pair.top_pipe.top == 0.0
            assert pair.bottom_pipe.top == pair.top_pipe.height + CFG.pipe_gap
            assert pair.bottom_pipe.height == CFG.height
            assert pair.left == CFG.width - CFG.pipe_width
            assert pair.width == CFG.pipe_width


def test_spawn_is_seeded():
    a = [spawn_pipe_pair(CFG, random.Random(99), True) for _ in range(3)]
    b = [spawn_pipe_pair(CFG, random.Random(99), True) for _ in range(3)]
    assert a == b


def test_visible_pair_scrolls_left():
    rng = random.Random(0)
    pair = make_pair(200.0)
    other = make_pair(0.0, show=False)
    moved = move_pipe_pair(pair, other, CFG, rng)
    assert moved is pair
    assert moved.left == 200.0 - CFG.speed
    assert moved.show


def test_offscreen_pair_is_hidden_without_moving():
    rng = random.Random(0)
    pair = make_pair(-CFG.pipe_width)
    other = make_pair(100.0)
    moved = move_pipe_pair(pair, other, CFG, rng)
    assert moved is pair
    assert not moved.show
    assert moved.left == -CFG.pipe_width  # stale until respawned


def test_hidden_pair_respawns_once_partner_is_past_threshold():
    rng = random.Random(0)
    hidden = make_pair(-60.0, show=False, top_h=123.0)

    # Partner not yet in the spawn window
    partner = make_pair(CFG.spawn_threshold)
    assert move_pipe_pair(hidden, partner, CFG, rng) is hidden
    assert not hidden.show

    # Partner just past it
    partner = make_pair(CFG.spawn_threshold - 1)
    fresh = move_pipe_pair(hidden, partner, CFG, rng)
    assert fresh is not hidden
    assert fresh.show
    assert fresh.left == CFG.width - CFG.pipe_width


def test_hidden_pair_waits_for_visible_partner():
    rng = random.Random(0)
    hidden = make_pair(-60.0, show=False)
    partner = make_pair(0.0, show=False)
    assert move_pipe_pair(hidden, partner, CFG, rng) is hidden


def test_gap_contains_is_strict():
    pair = make_pair(0.0, top_h=200.0)
    assert pair.gap_contains(250.0, 20.0)
    assert not pair.gap_contains(200.0, 20.0)                 # touching top pipe
    assert not pair.gap_contains(200.0 + CFG.pipe_gap - 20, 20.0)  # touching bottom pipe
    assert not pair.gap_contains(100.0, 20.0)


def test_overlaps_x_counts_touching_edges():
    pair = make_pair(60.0)
    assert pair.overlaps_x(40.0, 60.0)
    assert pair.overlaps_x(110.0, 130.0)
    assert not pair.overlaps_x(111.0, 131.0)
    assert not pair.overlaps_x(0.0, 59.9)


def main():
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"✓ {name}")
    print("🎉 pipe checks passed")


if __name__ == "__main__":
    main()
