"""Data models for the orb field simulation state."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum

from .config import GOLD, RED, RGB


class Mode(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    OVER = "over"


@dataclass(frozen=True)
class OrbProfile:
    """Everything that depends on an orb's kind."""

    radius: float
    color: RGB
    tap_score: int
    ends_run: bool = False
    bursts: bool = False


class OrbKind(Enum):
    SMALL = "small"
    BIG = "big"
    HAZARD = "hazard"
    CHILD = "child"

    @property
    def profile(self) -> OrbProfile:
        return ORB_PROFILES[self]

    @property
    def radius(self) -> float:
        return self.profile.radius

    @property
    def color(self) -> RGB:
        return self.profile.color

    @property
    def is_hazard(self) -> bool:
        return self.profile.ends_run


ORB_PROFILES: dict[OrbKind, OrbProfile] = {
    OrbKind.SMALL: OrbProfile(radius=18.0, color=GOLD, tap_score=10),
    OrbKind.BIG: OrbProfile(radius=35.0, color=GOLD, tap_score=20, bursts=True),
    OrbKind.HAZARD: OrbProfile(radius=18.0, color=RED, tap_score=0, ends_run=True),
    # small orbs thrown out of a popped big orb
    OrbKind.CHILD: OrbProfile(radius=14.0, color=GOLD, tap_score=10),
}


@dataclass
class Orb:
    """A tappable orb. Radius and colour follow from ``kind``."""

    kind: OrbKind
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    dead: bool = False

    @property
    def radius(self) -> float:
        return self.kind.radius

    @property
    def color(self) -> RGB:
        return self.kind.color


@dataclass
class Spark:
    """Ejecta particle: falls under gravity, shrinks and fades."""

    x: float
    y: float
    vx: float
    vy: float
    color: RGB
    size: float
    alpha: float = 1.0
    gravity: float = 0.15

    @property
    def alive(self) -> bool:
        return self.alpha > 0.0


@dataclass
class Pulse:
    """Expanding ring. ``max_radius`` is cosmetic only."""

    x: float
    y: float
    color: RGB
    radius: float = 0.0
    alpha: float = 0.5
    max_radius: float = 150.0

    @property
    def alive(self) -> bool:
        return self.alpha > 0.0


Particle = Spark | Pulse


@dataclass
class GameState:
    mode: Mode = Mode.IDLE
    score: int = 0
    spawn_timer: int = 0
    best_score: int = 0
    tick: int = 0

    @property
    def playing(self) -> bool:
        return self.mode is Mode.PLAYING

    @property
    def paused(self) -> bool:
        return self.mode is Mode.PAUSED

    @property
    def over(self) -> bool:
        return self.mode is Mode.OVER


@dataclass
class SimContext:
    """Everything one tick reads or mutates."""

    width: float
    height: float
    rng: random.Random = field(default_factory=random.Random)
    orbs: list[Orb] = field(default_factory=list)
    particles: list[Particle] = field(default_factory=list)
    state: GameState = field(default_factory=GameState)

    def resize(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"surface size must be positive, got {width}x{height}")
        self.width = width
        self.height = height

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2.0, self.height / 2.0

    def live_orbs(self) -> list[Orb]:
        return [orb for orb in self.orbs if not orb.dead]

    def compact(self) -> None:
        """Drop dead orbs and faded particles."""

        self.orbs = [orb for orb in self.orbs if not orb.dead]
        self.particles = [p for p in self.particles if p.alive]


__all__ = [
    "GameState",
    "Mode",
    "ORB_PROFILES",
    "Orb",
    "OrbKind",
    "OrbProfile",
    "Particle",
    "Pulse",
    "SimContext",
    "Spark",
]
