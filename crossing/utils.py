"""
Utility functions for game mechanics
"""

from __future__ import annotations
import random
from typing import Optional, Union

import numpy as np

from .constants import Hitbox

SeedLike = Union[int, np.random.Generator, None]


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """Return a generator; an existing Generator is passed through untouched"""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def random_int(rng: np.random.Generator, lo: int, hi: int) -> int:
    """Uniform integer in the closed interval [lo, hi]"""
    return int(rng.integers(lo, hi, endpoint=True))


def rect_overlap(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
    """Check if two axis-aligned rectangles overlap (touching edges do not count)"""
    return ax < bx + bw and bx < ax + aw and ay < by + bh and by < ay + ah


def hitbox_overlap(x1: float, y1: float, box1: Hitbox, x2: float, y2: float, box2: Hitbox) -> bool:
    """Check if two hit boxes anchored at (x1, y1) and (x2, y2) overlap"""
    return rect_overlap(
        x1 + box1.dx, y1 + box1.dy, box1.width, box1.height,
        x2 + box2.dx, y2 + box2.dy, box2.width, box2.height,
    )


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
