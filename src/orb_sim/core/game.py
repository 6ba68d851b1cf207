"""Game mode state machine, scoring and spawn policy."""
from __future__ import annotations

from typing import Callable

from .collision import Collision, hit_test, resolve_collisions
from .config import RED, SIM_CFG, SimCfg
from .effects import EffectEmitter
from .model import GameState, Mode, Orb, OrbKind, SimContext
from .physics import spawn_at_bottom, spawn_from_burst
from .storage import HIGHSCORE_KEY, KeyValueStore

EventCallback = Callable[[str, dict], None]


class GameStateMachine:
    """Owns mode, score and best score for one :class:`SimContext`.

    Transitions::

        idle -> playing <-> paused
        playing -> over -> playing      (activate again)
        playing/paused/over -> idle     (deactivate, no finalisation)

    Idle mode is decoration only: orbs can still be tapped and collide, but
    nothing outside ``playing`` ever changes the score.
    """

    def __init__(
        self,
        ctx: SimContext,
        store: KeyValueStore,
        *,
        emitter: EffectEmitter | None = None,
        cfg: SimCfg = SIM_CFG,
        key: str = HIGHSCORE_KEY,
        on_event: EventCallback | None = None,
    ) -> None:
        self.ctx = ctx
        self.cfg = cfg
        self.emitter = emitter or EffectEmitter(ctx, cfg)
        self._store = store
        self._key = key
        self._on_event = on_event
        ctx.state.best_score = store.get_int(key)

    @property
    def state(self) -> GameState:
        return self.ctx.state

    @property
    def mode(self) -> Mode:
        return self.ctx.state.mode

    @property
    def score(self) -> int:
        return self.ctx.state.score

    @property
    def best_score(self) -> int:
        return self.ctx.state.best_score

    def _emit(self, name: str, **details: object) -> None:
        if self._on_event is not None:
            self._on_event(name, details)

    # --- mode triggers ---

    def activate(self) -> bool:
        """Start a fresh run from idle or after game over."""

        state = self.ctx.state
        if state.mode not in (Mode.IDLE, Mode.OVER):
            return False
        state.mode = Mode.PLAYING
        state.score = 0
        state.spawn_timer = 0
        self.ctx.orbs = []
        for i in range(self.cfg.seed_orb_count):
            orb = spawn_at_bottom(self.ctx, OrbKind.SMALL, self.cfg)
            orb.y = self.ctx.height + self.cfg.seed_offset_below + i * self.cfg.seed_spacing
            self.ctx.orbs.append(orb)
        self._emit("activated")
        return True

    def deactivate(self) -> bool:
        state = self.ctx.state
        if state.mode is Mode.IDLE:
            return False
        previous = state.mode
        state.mode = Mode.IDLE
        self._emit("deactivated", previous=previous.value)
        return True

    def toggle_pause(self) -> bool:
        state = self.ctx.state
        if state.mode is Mode.PLAYING:
            state.mode = Mode.PAUSED
            self._emit("paused")
            return True
        if state.mode is Mode.PAUSED:
            state.mode = Mode.PLAYING
            self._emit("resumed")
            return True
        return False

    def trigger_game_over(self, cause: str = "hazard") -> bool:
        """End the run once; later calls are no-ops."""

        state = self.ctx.state
        if state.mode in (Mode.IDLE, Mode.OVER):
            return False
        state.mode = Mode.OVER
        cx, cy = self.ctx.center
        self.emitter.explode(cx, cy, RED, self.cfg.game_over_burst)
        if state.score > state.best_score:
            state.best_score = state.score
            self._store.set_int(self._key, state.best_score)
            self._emit("best_score", score=state.best_score)
        self._emit("game_over", cause=cause, x=cx, y=cy)
        return True

    # --- scoring events ---

    def add_score(self, points: int) -> bool:
        if points < 0:
            raise ValueError(f"score increments must not be negative, got {points}")
        if not self.ctx.state.playing:
            return False
        self.ctx.state.score += points
        return True

    def handle_tap(self, x: float, y: float) -> list[Orb]:
        """Pop every orb under the pointer. Taps are ignored while paused."""

        if self.ctx.state.paused:
            return []
        hits = hit_test(self.ctx.orbs, x, y, self.cfg.hit_padding)
        for orb in hits:
            orb.dead = True
            self.emitter.explode(orb.x, orb.y, orb.color, self.cfg.tap_burst)
            if not self.ctx.state.playing:
                continue
            profile = orb.kind.profile
            if profile.ends_run:
                self.trigger_game_over("hazard")
                continue
            self.add_score(profile.tap_score)
            if profile.bursts:
                for _ in range(self.cfg.burst_children):
                    self.ctx.orbs.append(spawn_from_burst(orb.x, orb.y, self.ctx.rng, self.cfg))
        if not hits:
            self.emitter.empty_space(x, y)
        self._emit("tap", x=x, y=y, hits=len(hits))
        return hits

    def orb_escaped(self, orb: Orb) -> bool:
        """Called for an orb that left through the top edge."""

        if not self.ctx.state.playing or orb.kind.is_hazard:
            return False
        self._emit("miss", x=orb.x, y=orb.y, kind=orb.kind.value)
        return self.trigger_game_over("missed")

    def collide(self) -> list[Collision]:
        collisions = resolve_collisions(self.ctx, self.emitter, self.cfg)
        for collision in collisions:
            self.add_score(self.cfg.collision_score)
            self._emit("collision", x=collision.x, y=collision.y)
        return collisions

    # --- spawn policy ---

    def spawn_step(self) -> Orb | None:
        state = self.ctx.state
        orb: Orb | None = None
        if state.mode is Mode.PLAYING:
            state.spawn_timer += 1
            if state.spawn_timer > self.cfg.spawn_interval(state.score):
                orb = spawn_at_bottom(self.ctx, None, self.cfg)
                state.spawn_timer = 0
        elif state.mode is Mode.IDLE:
            if self.ctx.rng.random() < self.cfg.idle_spawn_chance:
                orb = spawn_at_bottom(self.ctx, OrbKind.SMALL, self.cfg)
        if orb is not None:
            self.ctx.orbs.append(orb)
        return orb


__all__ = ["EventCallback", "GameStateMachine"]
