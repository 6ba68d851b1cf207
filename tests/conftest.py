from __future__ import annotations

import random

import pytest

from orb_sim.core.game import GameStateMachine
from orb_sim.core.model import Orb, Particle, SimContext
from orb_sim.core.storage import MemoryStore

WIDTH = 800.0
HEIGHT = 600.0


class FixedRandom(random.Random):
    """``random()`` always returns ``value`` so ``uniform(a, b)`` is predictable."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


class RecordingRenderer:
    def __init__(self) -> None:
        self.frames = 0
        self.finished = 0
        self.particles: list[Particle] = []
        self.orbs: list[Orb] = []

    def begin_frame(self, ctx: SimContext) -> None:
        self.frames += 1
        self.particles = []
        self.orbs = []

    def draw_particle(self, particle: Particle) -> None:
        self.particles.append(particle)

    def draw_orb(self, orb: Orb) -> None:
        self.orbs.append(orb)

    def end_frame(self) -> None:
        self.finished += 1


@pytest.fixture
def ctx() -> SimContext:
    return SimContext(width=WIDTH, height=HEIGHT, rng=random.Random(1234))


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def events() -> list[tuple[str, dict]]:
    return []


@pytest.fixture
def machine(ctx: SimContext, store: MemoryStore, events: list[tuple[str, dict]]) -> GameStateMachine:
    return GameStateMachine(ctx, store, on_event=lambda name, details: events.append((name, details)))


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()
