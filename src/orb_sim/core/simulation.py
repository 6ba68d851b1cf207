"""Per-frame driver composing spawn, collision, update, render and cleanup."""
from __future__ import annotations

from typing import Callable, Protocol

from .config import SIM_CFG, SimCfg
from .game import GameStateMachine
from .model import Orb, Particle, SimContext
from .physics import step_orb, step_particle
from .timekeeping import FrameScheduler


class Renderer(Protocol):
    def begin_frame(self, ctx: SimContext) -> None: ...

    def draw_particle(self, particle: Particle) -> None: ...

    def draw_orb(self, orb: Orb) -> None: ...

    def end_frame(self) -> None: ...


class SimulationLoop:
    """Runs the ordered phases of one tick against a single context.

    1. spawn decision
    2. collision resolution   (skipped while paused)
    3. entity update          (skipped while paused)
    4. render
    5. compaction of dead orbs and faded particles
    """

    def __init__(
        self,
        machine: GameStateMachine,
        renderer: Renderer | None = None,
        *,
        cfg: SimCfg = SIM_CFG,
        before_tick: Callable[[], None] | None = None,
        after_tick: Callable[[], None] | None = None,
    ) -> None:
        self.machine = machine
        self.ctx: SimContext = machine.ctx
        self.renderer = renderer
        self.cfg = cfg
        self.before_tick = before_tick
        self.after_tick = after_tick
        self.running = False
        self._scheduler: FrameScheduler | None = None

    def resize(self, width: float, height: float) -> None:
        self.ctx.resize(width, height)

    def tick(self) -> None:
        ctx = self.ctx
        frozen = ctx.state.paused

        if not frozen:
            self.machine.spawn_step()
            self.machine.collide()

            for particle in ctx.particles:
                step_particle(particle, self.cfg)
            escaped = [
                orb for orb in ctx.orbs if step_orb(orb, ctx.width, ctx.height, self.cfg)
            ]
            for orb in escaped:
                self.machine.orb_escaped(orb)

        self.render()
        ctx.compact()
        ctx.state.tick += 1

    def render(self) -> None:
        renderer = self.renderer
        if renderer is None:
            return
        renderer.begin_frame(self.ctx)
        for particle in self.ctx.particles:
            if particle.alive:
                renderer.draw_particle(particle)
        for orb in self.ctx.orbs:
            if not orb.dead:
                renderer.draw_orb(orb)
        renderer.end_frame()

    # --- scheduling ---

    def start(self, scheduler: FrameScheduler) -> None:
        self._scheduler = scheduler
        self.running = True
        scheduler.request_frame(self._frame)

    def stop(self) -> None:
        self.running = False
        if self._scheduler is not None:
            self._scheduler.cancel()

    def _frame(self) -> None:
        if not self.running:
            return
        if self.before_tick is not None:
            self.before_tick()
        if not self.running:
            return
        self.tick()
        if self.after_tick is not None:
            self.after_tick()
        if self.running and self._scheduler is not None:
            self._scheduler.request_frame(self._frame)


__all__ = ["Renderer", "SimulationLoop"]
