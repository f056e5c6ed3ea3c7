# flappy/game/bird.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Bird:
    """
    The controlled square. Only `top` changes during play:
    - `left` is the fixed x the world scrolls past
    - `size` is both width and height
    """
    top: float
    left: float
    size: float

    @property
    def right(self) -> float:
        return self.left + self.size

    @property
    def bottom(self) -> float:
        return self.top + self.size


@dataclass
class Ground:
    height: float


def decay_velocity(velocity: float, slow: float) -> float:
    """Upward velocity bleeds off by `slow` per frame and never drops below zero."""
    if velocity > 0:
        return max(0.0, velocity - slow)
    return velocity


def fall_step(gravity: float, velocity: float) -> float:
    """Vertical displacement for one frame (positive = down)."""
    return gravity ** 2 - velocity


def jump_velocity(velocity: float, impulse: float) -> float:
    """Apply a jump impulse only while not already ascending."""
    if velocity <= 0:
        return velocity + impulse
    return velocity
