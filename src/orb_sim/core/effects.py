"""Particle bursts emitted at a point."""
from __future__ import annotations

from .config import GOLD, PALETTE, RGB, SIM_CFG, WHITE, SimCfg
from .model import Particle, Pulse, SimContext, Spark
from .physics import make_pulse, make_spark


class EffectEmitter:
    """Appends particles to the context's live particle list."""

    def __init__(self, ctx: SimContext, cfg: SimCfg = SIM_CFG) -> None:
        self._ctx = ctx
        self._cfg = cfg

    def explode(
        self,
        x: float,
        y: float,
        color: RGB = GOLD,
        count: int | None = None,
    ) -> list[Spark]:
        """Emit ``count`` sparks. Gold bursts pick each spark's colour from the palette."""

        if count is None:
            count = self._cfg.default_burst
        if count < 0:
            raise ValueError(f"burst count must not be negative, got {count}")
        rng = self._ctx.rng
        sparks: list[Spark] = []
        for _ in range(count):
            spark_color = rng.choice(PALETTE) if color == GOLD else color
            sparks.append(make_spark(x, y, spark_color, rng, self._cfg))
        self._ctx.particles.extend(sparks)
        return sparks

    def pulse(self, x: float, y: float, color: RGB = WHITE) -> Pulse:
        ring = make_pulse(x, y, color, self._cfg)
        self._ctx.particles.append(ring)
        return ring

    def empty_space(self, x: float, y: float) -> list[Particle]:
        """Feedback for a tap that hit nothing: a ring and a few white sparks."""

        emitted: list[Particle] = [self.pulse(x, y, WHITE)]
        emitted.extend(self.explode(x, y, WHITE, self._cfg.empty_tap_burst))
        return emitted


__all__ = ["EffectEmitter"]
