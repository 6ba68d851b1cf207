# src/main.py
"""
Orb Field - Light orbs that turn into an arcade game
=====================================================

A field of glowing orbs drifts up the page. Scroll down past the first
third of the window and the field becomes a game: tap orbs for points,
avoid the red hazards and don't let a gold orb escape off the top.

Controls: mouse wheel / arrow keys scroll, click or touch taps,
Space or P pauses, R restarts after game over, Esc quits.
"""

import sys

import pygame
from pygame.locals import DOUBLEBUF, RESIZABLE

from orb_sim.core.config import RENDER_CFG, SIM_CFG
from orb_sim.core.game import GameStateMachine
from orb_sim.core.logging_utils import SessionLogger
from orb_sim.core.model import Mode, SimContext
from orb_sim.core.simulation import SimulationLoop
from orb_sim.core.storage import JsonFileStore
from orb_sim.core.timekeeping import FrameScheduler, FrameTimer
from orb_sim.render import (
    Button,
    ButtonVisualStyle,
    PageScroll,
    PygameRenderer,
    build_text_panel,
    get_text_surface,
    hud_lines,
    load_font,
    overlay_lines,
    route_tap,
)

CODE_VERSION = "Orb Field v1.0"

PAGE_SECTIONS = [
    (0.42, "ORB FIELD", "title"),
    (0.42, "scroll down to play", "subtitle"),
    (1.35, "Tap gold orbs. Big ones split in four.", "subtitle"),
    (1.35, "Red orbs end the run. So does a gold orb slipping away.", "subtitle"),
]


def main():
    pygame.init()
    pygame.display.set_caption("Orb Field")
    screen = pygame.display.set_mode(RENDER_CFG.windowed_default_size, RESIZABLE | DOUBLEBUF)
    width, height = screen.get_size()

    clock = pygame.time.Clock()
    font = load_font(RENDER_CFG.font_names, 18)
    font_fps = load_font(RENDER_CFG.font_names, 14)
    overlay_font = load_font(RENDER_CFG.font_names, 22, bold=True)
    title_font = load_font(RENDER_CFG.font_names, 64, bold=True)
    subtitle_font = load_font(RENDER_CFG.font_names, 22)
    glyph_font = load_font(RENDER_CFG.font_names, RENDER_CFG.hazard_glyph_size, bold=True)

    timer = FrameTimer()
    logger = SessionLogger()
    ctx = SimContext(width=width, height=height)

    def on_game_event(name: str, details: dict) -> None:
        logger.record(ctx, timer.elapsed(), name, details)
        if name == "game_over":
            print(f"Game over ({details.get('cause')}): score {ctx.state.score}, best {ctx.state.best_score}")
        elif name == "best_score":
            print(f"New best score: {details.get('score')}")

    store = JsonFileStore()
    machine = GameStateMachine(ctx, store, on_event=on_game_event)
    logger.write_meta(
        {
            "code_version": CODE_VERSION,
            "window": [width, height],
            "best_score_at_start": machine.best_score,
            "highscore_path": str(store.path),
            "spawn_interval_base": SIM_CFG.spawn_interval_base,
            "spawn_interval_min": SIM_CFG.spawn_interval_min,
            "idle_spawn_chance": SIM_CFG.idle_spawn_chance,
            "sample_every_ticks": logger.sample_every_ticks,
        }
    )
    print(f"Session {logger.run_id} - best score {machine.best_score}")

    background = pygame.Surface((width, height))
    renderer = PygameRenderer(screen, glyph_font=glyph_font, background=background)
    scroll = PageScroll(
        (width, height),
        page_length_factor=RENDER_CFG.page_length_factor,
        threshold_ratio=SIM_CFG.scroll_threshold_ratio,
    )

    button_style = ButtonVisualStyle(
        base_color=RENDER_CFG.button_color,
        hover_color=RENDER_CFG.button_hover_color,
        icon_color=RENDER_CFG.button_text_color,
        radius=RENDER_CFG.button_radius,
        border_color=RENDER_CFG.button_border_color,
        border_width=1,
    )
    pause_button = Button(
        (0, 0, RENDER_CFG.button_size, RENDER_CFG.button_size),
        machine.toggle_pause,
        lambda: "play" if machine.mode is Mode.PAUSED else "pause",
        style=button_style,
    )
    overlay_rect: pygame.Rect | None = None
    hud_visible = False

    def layout_chrome() -> None:
        margin = RENDER_CFG.hud_margin
        pause_button.rect.topright = (int(ctx.width) - margin, margin)

    layout_chrome()

    def sync_size() -> None:
        nonlocal screen, background
        screen = pygame.display.get_surface()
        size = screen.get_size()
        if size == (int(ctx.width), int(ctx.height)) or size[0] <= 0 or size[1] <= 0:
            return
        loop.resize(*size)
        scroll.update_size(size)
        background = pygame.Surface(size)
        renderer.set_target(screen)
        renderer.background = background
        layout_chrome()

    def sync_mode_with_scroll() -> None:
        nonlocal hud_visible
        hud_visible = scroll.past_threshold()
        if hud_visible and machine.mode is Mode.IDLE:
            machine.activate()
        elif not hud_visible and machine.mode is not Mode.IDLE:
            machine.deactivate()

    def tap(pos: tuple[int, int]) -> None:
        target = route_tap(pos, pause_button=pause_button, overlay_rect=overlay_rect, mode=machine.mode)
        if target == "pause":
            machine.toggle_pause()
        elif target == "restart":
            machine.activate()
        elif target == "field":
            machine.handle_tap(float(pos[0]), float(pos[1]))

    def quit_app() -> None:
        loop.stop()

    def draw_page() -> None:
        background.fill(RENDER_CFG.background_color)
        w, h = background.get_size()
        line_offsets: dict[float, int] = {}
        for anchor, text, style in PAGE_SECTIONS:
            page_font = title_font if style == "title" else subtitle_font
            color = RENDER_CFG.title_color if style == "title" else RENDER_CFG.subtitle_color
            surf = get_text_surface(page_font, text, color)
            extra = line_offsets.get(anchor, 0)
            y = int(h * anchor - scroll.offset) + extra
            line_offsets[anchor] = extra + surf.get_height() + 12
            if -surf.get_height() < y < h:
                background.blit(surf, surf.get_rect(midtop=(w // 2, y)))

    def handle_events() -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_app()
                return
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    quit_app()
                    return
                if event.key in (pygame.K_SPACE, pygame.K_p):
                    machine.toggle_pause()
                elif event.key == pygame.K_r:
                    if machine.mode is Mode.OVER:
                        machine.activate()
                elif event.key in (pygame.K_DOWN, pygame.K_PAGEDOWN):
                    scroll.scroll_by(RENDER_CFG.scroll_step_pixels)
                elif event.key in (pygame.K_UP, pygame.K_PAGEUP):
                    scroll.scroll_by(-RENDER_CFG.scroll_step_pixels)
                elif event.key == pygame.K_HOME:
                    scroll.scroll_to(0.0)
            elif event.type == pygame.MOUSEWHEEL:
                scroll.scroll_by(-event.y * RENDER_CFG.scroll_step_pixels)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                # touches also arrive as FINGERDOWN
                if event.button != 1 or getattr(event, "touch", False):
                    continue
                if pause_button.handle_event(event):
                    continue
                tap(event.pos)
            elif event.type == pygame.FINGERDOWN:
                w, h = screen.get_size()
                tap((int(event.x * w), int(event.y * h)))

        sync_size()
        scroll.update(RENDER_CFG.scroll_smoothing)
        sync_mode_with_scroll()
        draw_page()

    def draw_chrome() -> None:
        nonlocal overlay_rect
        state = ctx.state
        w, h = screen.get_size()

        if hud_visible:
            hud_surface = build_text_panel(
                font,
                hud_lines(
                    state,
                    text_color=RENDER_CFG.hud_text_color,
                    accent_color=RENDER_CFG.hud_accent_color,
                ),
                background_color=RENDER_CFG.hud_background_color,
            )
            screen.blit(hud_surface, (RENDER_CFG.hud_margin, RENDER_CFG.hud_margin))

        pause_button.visible = state.mode in (Mode.PLAYING, Mode.PAUSED)
        pause_button.draw(screen)

        lines = overlay_lines(
            state,
            title_color=RENDER_CFG.overlay_title_color,
            text_color=RENDER_CFG.overlay_text_color,
        )
        if lines is None:
            overlay_rect = None
        else:
            dim = pygame.Surface((w, h), pygame.SRCALPHA)
            dim.fill((0, 0, 0, 90))
            screen.blit(dim, (0, 0))
            panel = build_text_panel(
                overlay_font,
                lines,
                background_color=RENDER_CFG.overlay_color,
                padding=(28, 22),
                align="center",
            )
            overlay_rect = panel.get_rect(center=(w // 2, h // 2))
            screen.blit(panel, overlay_rect)

        fps_text = font_fps.render(f"FPS: {clock.get_fps():.1f}", True, RENDER_CFG.hud_text_color)
        fps_text.set_alpha(RENDER_CFG.fps_text_alpha)
        screen.blit(fps_text, fps_text.get_rect(bottomright=(w - 16, h - 16)))

        logger.sample(ctx, timer.elapsed())
        pygame.display.flip()

    scheduler = FrameScheduler(fps=RENDER_CFG.target_fps, clock=clock)
    loop = SimulationLoop(machine, renderer, before_tick=handle_events, after_tick=draw_chrome)
    loop.start(scheduler)
    try:
        scheduler.run()
    finally:
        logger.close()
        pygame.quit()
    sys.exit()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pygame.quit()
