from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Sequence

import pygame

from orb_sim.core.model import GameState, Mode

from .assets import Color, get_text_surface

RGB = tuple[int, int, int]
TextLine = tuple[str, RGB]
IconPainter = Callable[[pygame.Surface, pygame.Rect, RGB], None]


@dataclass(frozen=True)
class ButtonVisualStyle:
    base_color: Color
    hover_color: Color
    icon_color: RGB
    radius: int
    border_color: Color | None = None
    border_width: int = 0


def draw_pause_icon(surface: pygame.Surface, rect: pygame.Rect, color: RGB) -> None:
    bar = pygame.Rect(0, 0, max(2, rect.width // 7), rect.height // 2)
    for dx in (-bar.width, bar.width):
        bar.center = (rect.centerx + dx, rect.centery)
        pygame.draw.rect(surface, color, bar, border_radius=1)


def draw_play_icon(surface: pygame.Surface, rect: pygame.Rect, color: RGB) -> None:
    half = rect.height // 4
    # nudged right so the triangle looks centred
    cx, cy = rect.centerx + 2, rect.centery
    pygame.draw.polygon(surface, color, [(cx - half, cy - half), (cx - half, cy + half), (cx + half, cy)])


ICONS: dict[str, IconPainter] = {
    "pause": draw_pause_icon,
    "play": draw_play_icon,
}


class Button:
    """Round icon button; the icon name is looked up in :data:`ICONS` every draw."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        callback: Callable[[], None],
        icon_getter: Callable[[], str],
        *,
        style: ButtonVisualStyle,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.visible = True
        self._on_click = callback
        self._icon_name = icon_getter
        self._style = style

    def contains(self, pos: tuple[int, int]) -> bool:
        return self.visible and self.rect.collidepoint(pos)

    def draw(self, surface: pygame.Surface, mouse_pos: tuple[int, int] | None = None) -> None:
        if not self.visible:
            return
        style = self._style
        pointer = pygame.mouse.get_pos() if mouse_pos is None else mouse_pos
        fill = style.hover_color if self.rect.collidepoint(pointer) else style.base_color

        face = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bounds = face.get_rect()
        pygame.draw.rect(face, fill, bounds, border_radius=style.radius)
        if style.border_color is not None and style.border_width > 0:
            pygame.draw.rect(face, style.border_color, bounds, style.border_width, border_radius=style.radius)
        painter = ICONS.get(self._icon_name())
        if painter is not None:
            painter(face, bounds, style.icon_color)
        surface.blit(face, self.rect)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Fire the callback for a left click inside the button."""

        clicked = (
            event.type == pygame.MOUSEBUTTONDOWN
            and event.button == 1
            and self.contains(event.pos)
        )
        if clicked:
            self._on_click()
        return clicked


TapTarget = Literal["pause", "restart", "chrome", "field"]


def route_tap(
    pos: tuple[int, int],
    *,
    pause_button: Button,
    overlay_rect: pygame.Rect | None,
    mode: Mode,
) -> TapTarget:
    """Decide what a tap at ``pos`` hits.

    Taps on the pause button or the overlay panel never reach the field.
    The game over panel doubles as a restart button.
    """

    if pause_button.contains(pos):
        return "pause"
    if overlay_rect is not None and overlay_rect.collidepoint(pos):
        return "restart" if mode is Mode.OVER else "chrome"
    return "field"


def build_text_panel(
    font: pygame.font.Font,
    lines: Sequence[TextLine],
    *,
    background_color: Color,
    padding: tuple[int, int] = (14, 14),
    align: Literal["left", "center"] = "left",
) -> pygame.Surface:
    """Rounded panel with one text row per line; empty lines are half-height spacers."""

    if not lines:
        raise ValueError("lines must not be empty")
    pad_x, pad_y = padding
    full = font.get_linesize()
    heights = [full if text else full // 2 for text, _ in lines]
    inner_width = max(font.size(text)[0] for text, _ in lines)

    panel = pygame.Surface((inner_width + 2 * pad_x, sum(heights) + 2 * pad_y), pygame.SRCALPHA)
    pygame.draw.rect(panel, background_color, panel.get_rect(), border_radius=12)
    y = pad_y
    for (text, color), height in zip(lines, heights):
        if text:
            rendered = get_text_surface(font, text, color)
            if align == "center":
                panel.blit(rendered, rendered.get_rect(midtop=(panel.get_width() // 2, y)))
            else:
                panel.blit(rendered, (pad_x, y))
        y += height
    return panel


def hud_lines(state: GameState, *, text_color: RGB, accent_color: RGB) -> list[TextLine]:
    return [
        (f"Score {state.score}", accent_color),
        (f"Best  {state.best_score}", text_color),
    ]


def overlay_lines(state: GameState, *, title_color: RGB, text_color: RGB) -> list[TextLine] | None:
    """Lines for the paused / game over overlay, or ``None`` when there is none."""

    if state.mode is Mode.PAUSED:
        return [
            ("PAUSED", title_color),
            ("", text_color),
            ("Space or the button resumes", text_color),
        ]
    if state.mode is Mode.OVER:
        return [
            ("GAME OVER", title_color),
            ("", text_color),
            (f"Score: {state.score}", text_color),
            (f"Best: {state.best_score}", text_color),
            ("", text_color),
            ("Tap here or press R to play again", text_color),
        ]
    return None
