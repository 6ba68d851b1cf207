"""Configuration dataclasses for the orb field simulation."""
from __future__ import annotations

from dataclasses import dataclass

RGB = tuple[int, int, int]

GOLD: RGB = (212, 175, 55)
WHITE: RGB = (255, 255, 255)
RED: RGB = (255, 68, 68)
GREEN: RGB = (76, 175, 80)
PURPLE: RGB = (200, 160, 255)

PALETTE: tuple[RGB, ...] = (GOLD, WHITE, RED, GREEN, PURPLE)


@dataclass(frozen=True)
class SimCfg:
    # spawning
    hazard_threshold: float = 0.12
    big_threshold: float = 0.35
    spawn_margin_x: float = 50.0
    spawn_offset_below: float = 60.0
    spawn_angle_min_deg: float = -135.0
    spawn_angle_max_deg: float = -45.0
    spawn_speed_min: float = 1.5
    spawn_speed_max: float = 4.0
    spawn_upward_bias: float = 1.0
    burst_speed_min: float = 3.0
    burst_speed_max: float = 8.0
    burst_upward_bias: float = 2.0
    burst_children: int = 4
    seed_orb_count: int = 5
    seed_offset_below: float = 50.0
    seed_spacing: float = 120.0
    idle_spawn_chance: float = 0.012
    spawn_interval_base: int = 60
    spawn_interval_min: int = 20
    spawn_interval_score_step: int = 90

    # orb motion
    wall_damping: float = 0.8
    top_exit_y: float = -60.0
    bottom_exit_offset: float = 100.0

    # particles
    spark_speed_min: float = 2.0
    spark_speed_max: float = 10.0
    spark_size_min: float = 1.0
    spark_size_max: float = 5.0
    spark_gravity: float = 0.15
    spark_fade: float = 0.02
    spark_shrink: float = 0.96
    pulse_start_alpha: float = 0.5
    pulse_growth: float = 10.0
    pulse_fade: float = 0.03
    pulse_max_radius: float = 150.0

    # taps and scoring
    hit_padding: float = 35.0
    tap_burst: int = 40
    empty_tap_burst: int = 6
    collision_burst: int = 20
    game_over_burst: int = 100
    default_burst: int = 25
    collision_score: int = 5

    # host
    scroll_threshold_ratio: float = 0.3

    def spawn_interval(self, score: int) -> int:
        """Ticks between spawns while playing; shrinks as the score grows."""

        return max(
            self.spawn_interval_min,
            self.spawn_interval_base - score // self.spawn_interval_score_step,
        )


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1000
    height: int = 800
    windowed_default_size: tuple[int, int] = (1000, 800)
    target_fps: int = 60
    background_color: RGB = (10, 12, 20)
    page_length_factor: float = 3.0
    scroll_step_pixels: int = 80
    scroll_smoothing: float = 0.2
    title_color: RGB = (234, 230, 214)
    subtitle_color: RGB = (170, 164, 150)
    orb_glow_radius: int = 20
    orb_glow_alpha: int = 70
    orb_edge_alpha: float = 0.4
    orb_highlight_offset: float = 0.3
    orb_color_stop: float = 0.3
    spark_glow_radius: int = 10
    spark_glow_alpha: int = 50
    pulse_line_width: int = 2
    hazard_glyph: str = "!"
    hazard_glyph_size: int = 20
    hazard_glyph_offset: int = 2
    glyph_color: RGB = (255, 255, 255)
    font_names: tuple[str, ...] = ("outfit", "arial", "dejavusans")
    hud_text_color: RGB = (234, 230, 214)
    hud_background_color: tuple[int, int, int, int] = (12, 14, 24, int(255 * 0.55))
    hud_accent_color: RGB = GOLD
    hud_margin: int = 20
    button_size: int = 44
    button_color: tuple[int, int, int, int] = (20, 22, 34, int(255 * 0.8))
    button_hover_color: tuple[int, int, int, int] = (40, 42, 60, int(255 * 0.9))
    button_border_color: tuple[int, int, int, int] = (212, 175, 55, int(255 * 0.6))
    button_text_color: RGB = (234, 230, 214)
    button_radius: int = 22
    overlay_color: tuple[int, int, int, int] = (8, 8, 14, int(255 * 0.72))
    overlay_title_color: RGB = RED
    overlay_text_color: RGB = (234, 230, 214)
    fps_text_alpha: int = int(255 * 0.5)


SIM_CFG = SimCfg()
RENDER_CFG = RenderCfg()


__all__ = [
    "GOLD",
    "GREEN",
    "PALETTE",
    "PURPLE",
    "RED",
    "RENDER_CFG",
    "RGB",
    "RenderCfg",
    "SIM_CFG",
    "SimCfg",
    "WHITE",
]
