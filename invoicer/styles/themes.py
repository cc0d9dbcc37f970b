from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from reportlab.lib import colors


def rgb(r: float, g: float, b: float, alpha: float = 1.0) -> colors.Color:
    return colors.Color(r, g, b, alpha=alpha)


def with_alpha(color: colors.Color, alpha: float) -> colors.Color:
    return colors.Color(color.red, color.green, color.blue, alpha=alpha)


@dataclass(frozen=True)
class Theme:
    """Three-color palette applied to one rendered document."""

    name: str
    primary: colors.Color
    secondary: colors.Color
    accent: colors.Color
    background: colors.Color = colors.white
    line: colors.Color = field(default_factory=lambda: colors.Color(0.85, 0.85, 0.85))
    subtle_text: colors.Color = field(default_factory=lambda: colors.Color(0.42, 0.42, 0.45))


def palette(name: str, primary: colors.Color, secondary: Optional[colors.Color] = None,
            accent: Optional[colors.Color] = None) -> Theme:
    """Build a Theme, deriving secondary/accent from the primary color when omitted."""
    return Theme(
        name=name,
        primary=primary,
        secondary=secondary if secondary is not None else with_alpha(primary, 0.7),
        accent=accent if accent is not None else with_alpha(primary, 0.3),
    )


_PALETTES: Tuple[Theme, ...] = (
    # Business
    palette("Ocean Blue", rgb(0.0, 0.48, 0.65), rgb(0.0, 0.65, 0.85)),
    palette("Forest Green", rgb(0.0, 0.5, 0.0), rgb(0.2, 0.7, 0.2)),
    palette("Royal Purple", rgb(0.4, 0.0, 0.6), rgb(0.6, 0.2, 0.8)),
    palette("Crimson Red", rgb(0.8, 0.0, 0.0), rgb(0.9, 0.2, 0.2)),
    palette("Midnight Blue", rgb(0.1, 0.1, 0.3), rgb(0.2, 0.2, 0.5)),
    # Creative
    palette("Sunset Orange", rgb(1.0, 0.4, 0.0), rgb(1.0, 0.6, 0.2)),
    palette("Emerald Green", rgb(0.0, 0.7, 0.4), rgb(0.2, 0.8, 0.5)),
    palette("Violet Dream", rgb(0.6, 0.0, 0.8), rgb(0.8, 0.2, 0.9)),
    palette("Golden Yellow", rgb(1.0, 0.8, 0.0), rgb(1.0, 0.9, 0.3)),
    palette("Coral Pink", rgb(1.0, 0.4, 0.4), rgb(1.0, 0.6, 0.6)),
    # Professional
    palette("Charcoal Gray", rgb(0.2, 0.2, 0.2), rgb(0.4, 0.4, 0.4)),
    palette("Navy Blue", rgb(0.0, 0.0, 0.5), rgb(0.2, 0.2, 0.7)),
    palette("Steel Blue", rgb(0.3, 0.4, 0.6), rgb(0.5, 0.6, 0.8)),
    palette("Slate Gray", rgb(0.3, 0.3, 0.4), rgb(0.5, 0.5, 0.6)),
    palette("Deep Teal", rgb(0.0, 0.4, 0.4), rgb(0.2, 0.6, 0.6)),
    # Unique
    palette("Electric Blue", rgb(0.0, 0.5, 1.0), rgb(0.3, 0.7, 1.0)),
    palette("Lime Green", rgb(0.5, 1.0, 0.0), rgb(0.7, 1.0, 0.3)),
    palette("Hot Pink", rgb(1.0, 0.0, 0.5), rgb(1.0, 0.3, 0.7)),
    palette("Turquoise", rgb(0.0, 0.8, 0.8), rgb(0.3, 0.9, 0.9)),
    palette("Amber", rgb(1.0, 0.6, 0.0), rgb(1.0, 0.8, 0.3)),
    palette("Magenta", rgb(1.0, 0.0, 1.0), rgb(1.0, 0.3, 1.0)),
    palette("Cyan", rgb(0.0, 1.0, 1.0), rgb(0.3, 1.0, 1.0)),
    palette("Indigo", rgb(0.3, 0.0, 0.7), rgb(0.5, 0.2, 0.9)),
    palette("Maroon", rgb(0.5, 0.0, 0.0), rgb(0.7, 0.2, 0.2)),
    palette("Olive", rgb(0.5, 0.5, 0.0), rgb(0.7, 0.7, 0.3)),
)

THEMES: Dict[str, Theme] = {t.name: t for t in _PALETTES}
DEFAULT_THEME = _PALETTES[0]


def get_theme(name: Optional[str]) -> Theme:
    """Palette by name (case-insensitive); unknown names get the default palette."""
    if name:
        key = name.strip().lower()
        for theme in _PALETTES:
            if theme.name.lower() == key:
                return theme
    return DEFAULT_THEME
