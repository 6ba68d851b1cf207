"""Tests for orb/particle spawning and per-tick motion."""
from __future__ import annotations

import math
import random

import pytest

from conftest import HEIGHT, WIDTH, FixedRandom
from orb_sim.core.config import GOLD, SIM_CFG
from orb_sim.core.model import Orb, OrbKind, Pulse, SimContext, Spark
from orb_sim.core.physics import (
    clamp,
    make_pulse,
    make_spark,
    random_kind,
    spawn_at_bottom,
    spawn_from_burst,
    step_orb,
    step_particle,
)


# ── spawning ─────────────────────────────────────────────────────


class TestRandomKind:
    @pytest.mark.parametrize(
        ("draw", "expected"),
        [
            (0.0, OrbKind.HAZARD),
            (0.1199, OrbKind.HAZARD),
            (0.12, OrbKind.BIG),
            (0.3499, OrbKind.BIG),
            (0.35, OrbKind.SMALL),
            (0.99, OrbKind.SMALL),
        ],
    )
    def test_cumulative_thresholds(self, draw: float, expected: OrbKind) -> None:
        assert random_kind(FixedRandom(draw)) is expected

    def test_distribution_roughly_matches(self) -> None:
        rng = random.Random(7)
        kinds = [random_kind(rng) for _ in range(20_000)]
        hazard = kinds.count(OrbKind.HAZARD) / len(kinds)
        big = kinds.count(OrbKind.BIG) / len(kinds)
        assert abs(hazard - 0.12) < 0.01
        assert abs(big - 0.23) < 0.015


class TestSpawnAtBottom:
    def test_starts_below_viewport_moving_up(self, ctx: SimContext) -> None:
        for _ in range(200):
            orb = spawn_at_bottom(ctx, OrbKind.SMALL)
            assert orb.y == HEIGHT + 60
            assert 50 <= orb.x <= WIDTH - 50
            assert orb.vy < 0
            assert not orb.dead

    def test_speed_and_cone(self, ctx: SimContext) -> None:
        for _ in range(200):
            orb = spawn_at_bottom(ctx, OrbKind.BIG)
            vy = orb.vy + SIM_CFG.spawn_upward_bias
            speed = math.hypot(orb.vx, vy)
            angle = math.degrees(math.atan2(vy, orb.vx))
            assert 1.5 - 1e-9 <= speed <= 4.0 + 1e-9
            assert -135.0 - 1e-6 <= angle <= -45.0 + 1e-6

    def test_auto_kind_uses_draw(self) -> None:
        ctx = SimContext(width=WIDTH, height=HEIGHT, rng=FixedRandom(0.05))
        assert spawn_at_bottom(ctx).kind is OrbKind.HAZARD

    def test_explicit_kind_kept(self, ctx: SimContext) -> None:
        assert spawn_at_bottom(ctx, OrbKind.BIG).kind is OrbKind.BIG


class TestSpawnFromBurst:
    def test_child_at_burst_point(self) -> None:
        rng = random.Random(3)
        for _ in range(100):
            child = spawn_from_burst(100.0, 100.0, rng)
            assert child.kind is OrbKind.CHILD
            assert (child.x, child.y) == (100.0, 100.0)
            assert child.radius == 14
            assert child.color == GOLD
            speed = math.hypot(child.vx, child.vy + SIM_CFG.burst_upward_bias)
            assert 3.0 - 1e-9 <= speed <= 8.0 + 1e-9


# ── orb motion ───────────────────────────────────────────────────


class TestStepOrb:
    def test_constant_velocity_drift(self) -> None:
        orb = Orb(OrbKind.SMALL, x=400.0, y=300.0, vx=1.5, vy=-2.0)
        for _ in range(3):
            step_orb(orb, WIDTH, HEIGHT)
        assert math.isclose(orb.x, 404.5)
        assert math.isclose(orb.y, 294.0)
        assert orb.vy == -2.0

    def test_right_wall_bounce_damps_and_clamps(self) -> None:
        orb = Orb(OrbKind.SMALL, x=790.0, y=300.0, vx=5.0, vy=0.0)
        step_orb(orb, WIDTH, HEIGHT)
        assert orb.x == WIDTH - 18
        assert math.isclose(orb.vx, -4.0)

    def test_left_wall_bounce(self) -> None:
        orb = Orb(OrbKind.BIG, x=36.0, y=300.0, vx=-3.0, vy=0.0)
        step_orb(orb, WIDTH, HEIGHT)
        assert orb.x == 35.0
        assert math.isclose(orb.vx, 2.4)

    def test_bounce_never_leaves_bounds_or_gains_speed(self) -> None:
        rng = random.Random(11)
        for _ in range(500):
            kind = rng.choice(list(OrbKind))
            orb = Orb(kind, x=rng.uniform(0, WIDTH), y=300.0, vx=rng.uniform(-40, 40), vy=0.0)
            before = abs(orb.vx)
            step_orb(orb, WIDTH, HEIGHT)
            assert orb.radius <= orb.x <= WIDTH - orb.radius
            assert abs(orb.vx) <= before

    def test_top_exit_marks_dead_and_reports(self) -> None:
        orb = Orb(OrbKind.SMALL, x=400.0, y=-59.0, vx=0.0, vy=-2.0)
        assert step_orb(orb, WIDTH, HEIGHT) is True
        assert orb.dead

    def test_bottom_exit_when_falling(self) -> None:
        orb = Orb(OrbKind.CHILD, x=400.0, y=HEIGHT + 100.0, vx=0.0, vy=1.0)
        assert step_orb(orb, WIDTH, HEIGHT) is False
        assert orb.dead

    @pytest.mark.parametrize("vy", [-3.0, 0.0, 2.0])
    def test_below_bottom_line_dies_whatever_direction(self, vy: float) -> None:
        orb = Orb(OrbKind.SMALL, x=400.0, y=HEIGHT + 300.0, vx=0.0, vy=vy)
        assert step_orb(orb, WIDTH, HEIGHT) is False
        assert orb.dead

    def test_just_above_bottom_line_survives(self) -> None:
        orb = Orb(OrbKind.SMALL, x=400.0, y=HEIGHT + 99.0, vx=0.0, vy=-1.0)
        assert step_orb(orb, WIDTH, HEIGHT) is False
        assert not orb.dead

    def test_dead_orb_not_mutated(self) -> None:
        orb = Orb(OrbKind.SMALL, x=400.0, y=300.0, vx=3.0, vy=3.0, dead=True)
        assert step_orb(orb, WIDTH, HEIGHT) is False
        assert (orb.x, orb.y) == (400.0, 300.0)


# ── particles ────────────────────────────────────────────────────


class TestParticles:
    def test_spark_update_rule(self) -> None:
        spark = Spark(x=0.0, y=0.0, vx=2.0, vy=-1.0, color=GOLD, size=4.0)
        step_particle(spark)
        assert (spark.x, spark.y) == (2.0, -1.0)
        assert math.isclose(spark.vy, -0.85)
        assert math.isclose(spark.alpha, 0.98)
        assert math.isclose(spark.size, 3.84)

    def test_spark_dies_after_fifty_ticks(self) -> None:
        spark = make_spark(0.0, 0.0, GOLD, random.Random(2))
        ticks = 0
        previous = spark.alpha
        while spark.alive:
            step_particle(spark)
            assert spark.alpha < previous
            previous = spark.alpha
            ticks += 1
        assert ticks in (50, 51)
        assert spark.size > 0.0

    def test_make_spark_ranges(self) -> None:
        rng = random.Random(5)
        for _ in range(200):
            spark = make_spark(10.0, 20.0, GOLD, rng)
            assert 1.0 <= spark.size <= 5.0
            assert 2.0 - 1e-9 <= math.hypot(spark.vx, spark.vy) <= 10.0 + 1e-9
            assert spark.alpha == 1.0
            assert spark.gravity == 0.15

    def test_pulse_grows_and_fades(self) -> None:
        pulse = make_pulse(5.0, 5.0, (255, 255, 255))
        assert (pulse.radius, pulse.alpha) == (0.0, 0.5)
        step_particle(pulse)
        step_particle(pulse)
        assert pulse.radius == 20.0
        assert math.isclose(pulse.alpha, 0.44)

    def test_pulse_radius_not_capped(self) -> None:
        pulse = Pulse(x=0.0, y=0.0, color=(255, 255, 255), alpha=5.0)
        for _ in range(20):
            step_particle(pulse)
        assert pulse.radius == 200.0 > pulse.max_radius


def test_clamp() -> None:
    assert clamp(5.0, 0.0, 1.0) == 1.0
    assert clamp(-5.0, 0.0, 1.0) == 0.0
    assert clamp(0.5, 0.0, 1.0) == 0.5
