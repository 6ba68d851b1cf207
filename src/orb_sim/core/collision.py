"""Orb overlap detection and tap hit-testing."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .config import SIM_CFG, SimCfg
from .effects import EffectEmitter
from .model import Orb, SimContext


@dataclass(frozen=True)
class Collision:
    first: Orb
    second: Orb
    x: float
    y: float


def overlapping_pairs(orbs: Sequence[Orb]) -> list[tuple[int, int]]:
    """Index pairs ``(i, j)``, ``i < j``, whose discs overlap.

    Pairs come back in the same order as a nested ``i``/``j`` loop. Cost is
    quadratic in the orb count.
    """

    if len(orbs) < 2:
        return []
    positions = np.array([(orb.x, orb.y) for orb in orbs], dtype=float)
    radii = np.array([orb.radius for orb in orbs], dtype=float)
    distances = np.linalg.norm(positions[:, None, :] - positions[None, :, :], axis=-1)
    reach = radii[:, None] + radii[None, :]
    rows, cols = np.nonzero(np.triu(distances < reach, k=1))
    return list(zip(rows.tolist(), cols.tolist()))


def resolve_collisions(
    ctx: SimContext,
    emitter: EffectEmitter,
    cfg: SimCfg = SIM_CFG,
) -> list[Collision]:
    """Kill every overlapping pair of live orbs and burst them at the midpoint.

    Candidates are the orbs alive when the pass starts, so one orb touching
    two others takes part in both pairs.
    """

    candidates = ctx.live_orbs()
    collisions: list[Collision] = []
    for i, j in overlapping_pairs(candidates):
        first = candidates[i]
        second = candidates[j]
        mid_x = (first.x + second.x) / 2.0
        mid_y = (first.y + second.y) / 2.0
        emitter.explode(mid_x, mid_y, first.color, cfg.collision_burst)
        emitter.explode(mid_x, mid_y, second.color, cfg.collision_burst)
        first.dead = True
        second.dead = True
        collisions.append(Collision(first, second, mid_x, mid_y))
    return collisions


def hit_test(orbs: Sequence[Orb], x: float, y: float, padding: float) -> list[Orb]:
    """Every live orb whose centre is closer than ``radius + padding`` to ``(x, y)``."""

    return [
        orb
        for orb in orbs
        if not orb.dead and math.hypot(orb.x - x, orb.y - y) < orb.radius + padding
    ]


__all__ = ["Collision", "hit_test", "overlapping_pairs", "resolve_collisions"]
