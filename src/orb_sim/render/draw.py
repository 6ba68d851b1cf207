from __future__ import annotations

import pygame

from orb_sim.core.config import RENDER_CFG, RenderCfg
from orb_sim.core.model import Orb, Particle, Pulse, SimContext, Spark

from .assets import AssetLibrary, get_text_surface


def _alpha_byte(alpha: float) -> int:
    return max(0, min(255, int(255 * alpha)))


def draw_orb(
    surface: pygame.Surface,
    orb: Orb,
    *,
    assets: AssetLibrary,
    render_cfg: RenderCfg,
    glyph_font: pygame.font.Font | None = None,
) -> None:
    radius = max(1, int(round(orb.radius)))
    position = (int(orb.x), int(orb.y))
    glow = assets.get_glow_sprite(
        radius,
        orb.color,
        spread=render_cfg.orb_glow_radius,
        alpha=render_cfg.orb_glow_alpha,
    )
    surface.blit(glow, glow.get_rect(center=position))
    sprite = assets.get_orb_sprite(
        radius,
        orb.color,
        highlight_offset=render_cfg.orb_highlight_offset,
        color_stop=render_cfg.orb_color_stop,
        edge_alpha=render_cfg.orb_edge_alpha,
    )
    surface.blit(sprite, sprite.get_rect(center=position))

    if orb.kind.is_hazard and glyph_font is not None:
        glyph = get_text_surface(glyph_font, render_cfg.hazard_glyph, render_cfg.glyph_color)
        surface.blit(
            glyph,
            glyph.get_rect(center=(position[0], position[1] + render_cfg.hazard_glyph_offset)),
        )


def draw_spark(surface: pygame.Surface, spark: Spark, *, render_cfg: RenderCfg) -> None:
    if spark.alpha <= 0.0:
        return
    position = (int(spark.x), int(spark.y))
    alpha = _alpha_byte(spark.alpha)
    glow_alpha = int(render_cfg.spark_glow_alpha * spark.alpha)
    if glow_alpha > 0:
        glow_radius = max(1, int(spark.size + render_cfg.spark_glow_radius * 0.5))
        pygame.draw.circle(surface, (*spark.color, glow_alpha), position, glow_radius)
    pygame.draw.circle(surface, (*spark.color, alpha), position, max(1, int(round(spark.size))))


def draw_pulse(surface: pygame.Surface, pulse: Pulse, *, render_cfg: RenderCfg) -> None:
    if pulse.alpha <= 0.0 or pulse.radius <= 0.0:
        return
    pygame.draw.circle(
        surface,
        (*pulse.color, _alpha_byte(pulse.alpha)),
        (int(pulse.x), int(pulse.y)),
        int(pulse.radius),
        render_cfg.pulse_line_width,
    )


class PygameRenderer:
    """Draws a :class:`SimContext` onto a pygame surface.

    Particles go to one alpha layer and orbs to another; both are composed
    onto the target in :meth:`end_frame`, particles underneath.
    """

    def __init__(
        self,
        target: pygame.Surface,
        *,
        assets: AssetLibrary | None = None,
        render_cfg: RenderCfg = RENDER_CFG,
        glyph_font: pygame.font.Font | None = None,
        background: pygame.Surface | None = None,
    ) -> None:
        self.target = target
        self.assets = assets or AssetLibrary()
        self.render_cfg = render_cfg
        self.glyph_font = glyph_font
        self.background = background
        self._layer_size = target.get_size()
        self.effects_layer = pygame.Surface(self._layer_size, pygame.SRCALPHA)
        self.orb_layer = pygame.Surface(self._layer_size, pygame.SRCALPHA)
        self.drawn_particles = 0
        self.drawn_orbs = 0

    def set_target(self, target: pygame.Surface) -> None:
        self.target = target

    def begin_frame(self, ctx: SimContext) -> None:
        size = self.target.get_size()
        if size != self._layer_size:
            self._layer_size = size
            self.effects_layer = pygame.Surface(size, pygame.SRCALPHA)
            self.orb_layer = pygame.Surface(size, pygame.SRCALPHA)
        if self.background is not None:
            self.target.blit(self.background, (0, 0))
        else:
            self.target.fill(self.render_cfg.background_color)
        self.effects_layer.fill((0, 0, 0, 0))
        self.orb_layer.fill((0, 0, 0, 0))
        self.drawn_particles = 0
        self.drawn_orbs = 0

    def draw_particle(self, particle: Particle) -> None:
        if isinstance(particle, Pulse):
            draw_pulse(self.effects_layer, particle, render_cfg=self.render_cfg)
        else:
            draw_spark(self.effects_layer, particle, render_cfg=self.render_cfg)
        self.drawn_particles += 1

    def draw_orb(self, orb: Orb) -> None:
        draw_orb(
            self.orb_layer,
            orb,
            assets=self.assets,
            render_cfg=self.render_cfg,
            glyph_font=self.glyph_font,
        )
        self.drawn_orbs += 1

    def end_frame(self) -> None:
        self.target.blit(self.effects_layer, (0, 0))
        self.target.blit(self.orb_layer, (0, 0))
