"""Rendering helpers for the orb field."""

from .assets import (
    AssetLibrary,
    build_glow_sprite,
    build_orb_sprite,
    get_text_surface,
    load_font,
)
from .draw import PygameRenderer, draw_orb, draw_pulse, draw_spark
from .scroll import PageScroll
from .ui import (
    Button,
    ButtonVisualStyle,
    build_text_panel,
    hud_lines,
    overlay_lines,
    route_tap,
)

__all__ = [
    "AssetLibrary",
    "Button",
    "ButtonVisualStyle",
    "PageScroll",
    "PygameRenderer",
    "build_glow_sprite",
    "build_orb_sprite",
    "build_text_panel",
    "draw_orb",
    "draw_pulse",
    "draw_spark",
    "get_text_surface",
    "hud_lines",
    "load_font",
    "overlay_lines",
    "route_tap",
]
