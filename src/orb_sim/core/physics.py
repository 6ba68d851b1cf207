"""Spawning and per-tick motion for orbs and particles."""
from __future__ import annotations

import math
import random

from .config import SIM_CFG, RGB, SimCfg
from .model import Orb, OrbKind, Particle, Pulse, SimContext, Spark


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* between *lo* and *hi*."""

    return max(lo, min(hi, value))


def random_kind(rng: random.Random, cfg: SimCfg = SIM_CFG) -> OrbKind:
    """Pick an orb kind with a single draw against cumulative thresholds."""

    r = rng.random()
    if r < cfg.hazard_threshold:
        return OrbKind.HAZARD
    if r < cfg.big_threshold:
        return OrbKind.BIG
    return OrbKind.SMALL


def polar(angle: float, speed: float) -> tuple[float, float]:
    return math.cos(angle) * speed, math.sin(angle) * speed


def spawn_at_bottom(
    ctx: SimContext,
    kind: OrbKind | None = None,
    cfg: SimCfg = SIM_CFG,
) -> Orb:
    """Create an orb just below the field, heading up and sideways.

    ``kind=None`` draws the kind at random (hazard / big / small).
    """

    rng = ctx.rng
    if kind is None:
        kind = random_kind(rng, cfg)
    x = rng.uniform(cfg.spawn_margin_x, ctx.width - cfg.spawn_margin_x)
    y = ctx.height + cfg.spawn_offset_below
    angle = math.radians(rng.uniform(cfg.spawn_angle_min_deg, cfg.spawn_angle_max_deg))
    speed = rng.uniform(cfg.spawn_speed_min, cfg.spawn_speed_max)
    vx, vy = polar(angle, speed)
    return Orb(kind=kind, x=x, y=y, vx=vx, vy=vy - cfg.spawn_upward_bias)


def spawn_from_burst(
    x: float,
    y: float,
    rng: random.Random,
    cfg: SimCfg = SIM_CFG,
) -> Orb:
    """Create a child orb thrown out of a popped big orb at ``(x, y)``."""

    angle = rng.uniform(0.0, 2.0 * math.pi)
    speed = rng.uniform(cfg.burst_speed_min, cfg.burst_speed_max)
    vx, vy = polar(angle, speed)
    return Orb(kind=OrbKind.CHILD, x=x, y=y, vx=vx, vy=vy - cfg.burst_upward_bias)


def make_spark(x: float, y: float, color: RGB, rng: random.Random, cfg: SimCfg = SIM_CFG) -> Spark:
    angle = rng.uniform(0.0, 2.0 * math.pi)
    speed = rng.uniform(cfg.spark_speed_min, cfg.spark_speed_max)
    vx, vy = polar(angle, speed)
    return Spark(
        x=x,
        y=y,
        vx=vx,
        vy=vy,
        color=color,
        size=rng.uniform(cfg.spark_size_min, cfg.spark_size_max),
        gravity=cfg.spark_gravity,
    )


def make_pulse(x: float, y: float, color: RGB, cfg: SimCfg = SIM_CFG) -> Pulse:
    return Pulse(
        x=x,
        y=y,
        color=color,
        alpha=cfg.pulse_start_alpha,
        max_radius=cfg.pulse_max_radius,
    )


def step_orb(orb: Orb, width: float, height: float, cfg: SimCfg = SIM_CFG) -> bool:
    """Advance one orb by one tick.

    Returns ``True`` when the orb left through the top edge this tick.
    """

    if orb.dead:
        return False

    orb.x += orb.vx
    orb.y += orb.vy

    radius = orb.radius
    if orb.x < radius or orb.x > width - radius:
        orb.vx *= -cfg.wall_damping
        orb.x = clamp(orb.x, radius, width - radius)

    if orb.y < cfg.top_exit_y:
        orb.dead = True
        return True
    if orb.y > height + cfg.bottom_exit_offset:
        orb.dead = True
    return False


def step_particle(particle: Particle, cfg: SimCfg = SIM_CFG) -> None:
    if isinstance(particle, Pulse):
        particle.radius += cfg.pulse_growth
        particle.alpha -= cfg.pulse_fade
        return

    particle.x += particle.vx
    particle.y += particle.vy
    particle.vy += particle.gravity
    particle.alpha -= cfg.spark_fade
    particle.size *= cfg.spark_shrink


__all__ = [
    "clamp",
    "make_pulse",
    "make_spark",
    "polar",
    "random_kind",
    "spawn_at_bottom",
    "spawn_from_burst",
    "step_orb",
    "step_particle",
]
