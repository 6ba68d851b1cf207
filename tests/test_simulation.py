"""Tick phase ordering, pause semantics and frame scheduling."""
from __future__ import annotations

from conftest import RecordingRenderer
from orb_sim.core.config import WHITE
from orb_sim.core.game import GameStateMachine
from orb_sim.core.model import Mode, Orb, OrbKind, SimContext, Spark
from orb_sim.core.simulation import SimulationLoop
from orb_sim.core.timekeeping import FrameScheduler


class FakeClock:
    def __init__(self) -> None:
        self.calls: list[int] = []

    def tick(self, framerate: int = 0) -> int:
        self.calls.append(framerate)
        return 16


def names(events: list[tuple[str, dict]]) -> list[str]:
    return [name for name, _ in events]


class TestTick:
    def test_orbs_move_and_tick_advances(
        self, ctx: SimContext, machine: GameStateMachine, renderer: RecordingRenderer
    ) -> None:
        ctx.state.mode = Mode.PLAYING
        orb = Orb(OrbKind.SMALL, x=400.0, y=300.0, vx=1.0, vy=-2.0)
        ctx.orbs = [orb]
        loop = SimulationLoop(machine, renderer)
        loop.tick()
        assert (orb.x, orb.y) == (401.0, 298.0)
        assert ctx.state.tick == 1
        assert ctx.state.spawn_timer == 1
        assert renderer.frames == renderer.finished == 1
        assert renderer.orbs == [orb]

    def test_collision_before_motion(self, ctx: SimContext, machine: GameStateMachine) -> None:
        ctx.state.mode = Mode.PLAYING
        # these would drift apart this tick; collision is resolved on the old positions
        a = Orb(OrbKind.SMALL, x=100.0, y=300.0, vx=-10.0)
        b = Orb(OrbKind.SMALL, x=135.0, y=300.0, vx=10.0)
        ctx.orbs = [a, b]
        SimulationLoop(machine).tick()
        assert machine.score == 5
        assert ctx.orbs == []
        assert len(ctx.particles) == 40

    def test_fresh_particles_update_in_same_tick(self, ctx: SimContext, machine: GameStateMachine) -> None:
        ctx.orbs = [Orb(OrbKind.SMALL, x=100.0, y=300.0), Orb(OrbKind.SMALL, x=110.0, y=300.0)]
        SimulationLoop(machine).tick()
        assert all(p.alpha < 1.0 for p in ctx.particles)

    def test_dead_orbs_are_not_drawn_and_are_compacted(
        self, ctx: SimContext, machine: GameStateMachine, renderer: RecordingRenderer
    ) -> None:
        ctx.state.mode = Mode.OVER
        alive = Orb(OrbKind.SMALL, x=400.0, y=300.0)
        ctx.orbs = [alive, Orb(OrbKind.BIG, x=100.0, y=100.0, dead=True)]
        SimulationLoop(machine, renderer).tick()
        assert renderer.orbs == [alive]
        assert ctx.orbs == [alive]

    def test_faded_particles_never_drawn(
        self, ctx: SimContext, machine: GameStateMachine, renderer: RecordingRenderer
    ) -> None:
        fading = Spark(x=0.0, y=0.0, vx=0.0, vy=0.0, color=WHITE, size=2.0, alpha=0.015)
        ctx.particles = [fading]
        SimulationLoop(machine, renderer).tick()
        assert renderer.particles == []
        assert ctx.particles == []

    def test_two_escapes_one_game_over(
        self, ctx: SimContext, machine: GameStateMachine, events: list[tuple[str, dict]]
    ) -> None:
        ctx.state.mode = Mode.PLAYING
        ctx.orbs = [
            Orb(OrbKind.SMALL, x=100.0, y=-59.0, vy=-2.0),
            Orb(OrbKind.SMALL, x=600.0, y=-59.0, vy=-2.0),
        ]
        SimulationLoop(machine).tick()
        assert machine.mode is Mode.OVER
        assert names(events) == ["miss", "game_over"]
        assert ctx.orbs == []

    def test_hazard_escape_is_silent(
        self, ctx: SimContext, machine: GameStateMachine, events: list[tuple[str, dict]]
    ) -> None:
        ctx.state.mode = Mode.PLAYING
        ctx.orbs = [Orb(OrbKind.HAZARD, x=100.0, y=-59.0, vy=-2.0)]
        SimulationLoop(machine).tick()
        assert machine.mode is Mode.PLAYING
        assert events == []

    def test_seeds_below_bottom_line_are_culled_on_first_tick(
        self, ctx: SimContext, machine: GameStateMachine
    ) -> None:
        machine.activate()
        first = ctx.orbs[0]
        SimulationLoop(machine).tick()
        assert ctx.orbs == [first]
        assert ctx.state.mode is Mode.PLAYING

    def test_runs_without_renderer(self, ctx: SimContext, machine: GameStateMachine) -> None:
        loop = SimulationLoop(machine)
        for _ in range(5):
            loop.tick()
        assert ctx.state.tick == 5


class TestPause:
    def test_freezes_world_but_still_renders(
        self, ctx: SimContext, machine: GameStateMachine, renderer: RecordingRenderer
    ) -> None:
        machine.activate()
        loop = SimulationLoop(machine, renderer)
        loop.tick()
        machine.emitter.explode(300.0, 300.0, WHITE, 5)
        machine.toggle_pause()
        positions = [(orb.x, orb.y) for orb in ctx.orbs]
        alphas = [p.alpha for p in ctx.particles]
        timer = ctx.state.spawn_timer
        for _ in range(10):
            loop.tick()
        assert [(orb.x, orb.y) for orb in ctx.orbs] == positions
        assert [p.alpha for p in ctx.particles] == alphas
        assert ctx.state.spawn_timer == timer
        assert renderer.frames == 11
        assert renderer.orbs == ctx.orbs
        assert len(renderer.orbs) == 1
        assert len(renderer.particles) == 5

    def test_resume_continues(self, ctx: SimContext, machine: GameStateMachine) -> None:
        machine.activate()
        loop = SimulationLoop(machine)
        machine.toggle_pause()
        loop.tick()
        machine.toggle_pause()
        loop.tick()
        assert ctx.state.spawn_timer == 1


class TestGameOverKeepsAnimating:
    def test_world_still_moves_after_game_over(self, ctx: SimContext, machine: GameStateMachine) -> None:
        machine.activate()
        machine.trigger_game_over()
        orb = ctx.orbs[0]
        y = orb.y
        SimulationLoop(machine).tick()
        assert orb.y < y
        assert ctx.state.spawn_timer == 0


class TestScheduling:
    def test_run_drives_frames_until_stopped(self, ctx: SimContext, machine: GameStateMachine) -> None:
        clock = FakeClock()
        scheduler = FrameScheduler(fps=30, clock=clock)
        loop = SimulationLoop(machine)

        def stop_after_three() -> None:
            if ctx.state.tick == 3:
                loop.stop()

        loop.after_tick = stop_after_three
        loop.start(scheduler)
        assert scheduler.pending
        assert scheduler.run() == 3
        assert ctx.state.tick == 3
        assert not scheduler.pending
        assert clock.calls == [30, 30, 30]

    def test_max_frames(self, ctx: SimContext, machine: GameStateMachine) -> None:
        scheduler = FrameScheduler()
        loop = SimulationLoop(machine)
        loop.start(scheduler)
        assert scheduler.run(max_frames=4) == 4
        assert ctx.state.tick == 4
        assert scheduler.pending
        assert scheduler.frames == 4

    def test_stop_in_before_tick_skips_tick(self, ctx: SimContext, machine: GameStateMachine) -> None:
        scheduler = FrameScheduler()
        loop = SimulationLoop(machine)
        loop.before_tick = loop.stop
        loop.start(scheduler)
        assert scheduler.run() == 1
        assert ctx.state.tick == 0
        assert not loop.running

    def test_resize_applies_to_context(self, ctx: SimContext, machine: GameStateMachine) -> None:
        loop = SimulationLoop(machine)
        loop.resize(320, 240)
        assert (ctx.width, ctx.height) == (320, 240)
