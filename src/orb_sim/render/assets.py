from __future__ import annotations

import math
from functools import lru_cache
from typing import Callable, Iterable

import numpy as np
import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]


def build_orb_sprite(
    radius: int,
    color: tuple[int, int, int],
    *,
    highlight_offset: float = 0.3,
    color_stop: float = 0.3,
    edge_alpha: float = 0.4,
) -> pygame.Surface:
    """Disc shaded from a white highlight (up-left) through ``color`` to a faded rim."""

    if radius <= 0:
        raise ValueError("Orb sprite radius must be positive")
    size = radius * 2
    ys, xs = np.mgrid[0:size, 0:size].astype(float) + 0.5
    center = size / 2.0
    highlight = center - radius * highlight_offset
    from_center = np.hypot(xs - center, ys - center)
    from_highlight = np.hypot(xs - highlight, ys - highlight)
    reach = radius * (1.0 + highlight_offset * math.sqrt(2.0))
    t = np.clip(from_highlight / reach, 0.0, 1.0)

    stops = [0.0, color_stop, 1.0]
    channels = [np.interp(t, stops, [255.0, float(c), float(c)]) for c in color]
    rgb = np.stack(channels, axis=-1).astype(np.uint8)
    alpha = np.interp(t, stops, [255.0, 255.0, 255.0 * edge_alpha])
    alpha[from_center > radius] = 0.0

    sprite = pygame.Surface((size, size), pygame.SRCALPHA)
    # surfarray indexes pixels as [x][y]
    pixels = pygame.surfarray.pixels3d(sprite)
    pixels[...] = rgb.swapaxes(0, 1)
    del pixels
    alphas = pygame.surfarray.pixels_alpha(sprite)
    alphas[...] = alpha.astype(np.uint8).swapaxes(0, 1)
    del alphas
    return sprite


def build_glow_sprite(
    radius: int,
    color: tuple[int, int, int],
    *,
    spread: int,
    alpha: int,
) -> pygame.Surface:
    """Soft halo of ``spread`` pixels around a disc of ``radius``."""

    if radius <= 0:
        raise ValueError("Glow radius must be positive")
    outer = radius + max(0, spread)
    glow_surface = pygame.Surface((outer * 2, outer * 2), pygame.SRCALPHA)
    center = (outer, outer)
    steps = max(1, spread // 2)
    for step in range(steps, 0, -1):
        ring_radius = radius + int(spread * step / steps)
        ring_alpha = int(alpha * (1.0 - step / (steps + 1)))
        if ring_alpha > 0:
            pygame.draw.circle(glow_surface, (*color, ring_alpha), center, ring_radius)
    pygame.draw.circle(glow_surface, (*color, alpha), center, radius)
    return glow_surface

class AssetLibrary:
    """Sprites keyed by everything that affects their pixels, built on first use."""

    def __init__(self) -> None:
        self._sprites: dict[tuple, pygame.Surface] = {}

    def _cached(self, key: tuple, build: Callable[[], pygame.Surface]) -> pygame.Surface:
        sprite = self._sprites.get(key)
        if sprite is None:
            sprite = self._sprites[key] = build()
        return sprite

    def get_orb_sprite(
        self,
        radius: int,
        color: tuple[int, int, int],
        *,
        highlight_offset: float = 0.3,
        color_stop: float = 0.3,
        edge_alpha: float = 0.4,
    ) -> pygame.Surface:
        return self._cached(
            ("orb", radius, color, highlight_offset, color_stop, edge_alpha),
            lambda: build_orb_sprite(
                radius,
                color,
                highlight_offset=highlight_offset,
                color_stop=color_stop,
                edge_alpha=edge_alpha,
            ),
        )

    def get_glow_sprite(
        self,
        radius: int,
        color: tuple[int, int, int],
        *,
        spread: int,
        alpha: int,
    ) -> pygame.Surface:
        return self._cached(
            ("glow", radius, color, spread, alpha),
            lambda: build_glow_sprite(radius, color, spread=spread, alpha=alpha),
        )

    def clear(self) -> None:
        self._sprites.clear()


@lru_cache(maxsize=256)
def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    """Rendered text, reused while the same font/text/colour keeps being drawn."""

    return font.render(text, True, color)


def load_font(preferred_names: Iterable[str], size: int, *, bold: bool = False) -> pygame.font.Font:
    """First installed font from ``preferred_names``, else pygame's bundled default."""

    for name in preferred_names:
        path = pygame.font.match_font(name, bold=bold)
        if path:
            return pygame.font.Font(path, size)
    font = pygame.font.Font(None, size)
    font.set_bold(bold)
    return font
