"""
Colour lookup: semantic role + scheme (dark/light) -> hex colour.
Status colours use darker variants on the light scheme for contrast.
"""

from __future__ import annotations

from PIL import ImageColor

from watchface.core.types import ColorRole, ColorScheme

# role: (dark, light)
PALETTE: dict[ColorRole, tuple[str, str]] = {
    ColorRole.BACKGROUND: ("#000000", "#FFFFFF"),
    ColorRole.TEXT: ("#FFFFFF", "#000000"),
    ColorRole.MINUTE_HAND: ("#FFFFFF", "#000000"),
    ColorRole.HOUR_HAND_CONNECTED: ("#FF5500", "#FF5500"),
    ColorRole.HOUR_HAND_DISCONNECTED: ("#AAAAAA", "#555555"),
    ColorRole.ARBOR_NORMAL: ("#FFFFFF", "#000000"),
    ColorRole.ARBOR_ALERT: ("#FF0000", "#FF0000"),
    ColorRole.HOUR_HASH: ("#FFFFFF", "#000000"),
    ColorRole.MINUTE_HASH: ("#AAAAAA", "#555555"),
    ColorRole.GAUGE_LINE: ("#AAAAAA", "#555555"),
    ColorRole.GAUGE_GREEN: ("#00FF00", "#00AA00"),
    ColorRole.GAUGE_RED: ("#FF0000", "#AA0000"),
    ColorRole.GAUGE_YELLOW: ("#FFFF00", "#FFAA00"),
    ColorRole.GAUGE_BLUE: ("#00AAFF", "#0000FF"),
}


def resolve(role: ColorRole, scheme: ColorScheme) -> str:
    """Concrete colour for role under scheme. Pure table lookup."""
    dark, light = PALETTE[ColorRole(role)]
    return light if scheme == ColorScheme.LIGHT else dark


def to_rgb(color: str) -> tuple[int, int, int]:
    """Hex (or any Pillow colour name) to an RGB triple."""
    rgb = ImageColor.getrgb(color)
    return (rgb[0], rgb[1], rgb[2])


class ThemeResolver:
    """Palette for one scheme, built once per settings load."""

    def __init__(self, scheme: ColorScheme = ColorScheme.DARK) -> None:
        self.scheme = ColorScheme(scheme)
        self._colors = {role: resolve(role, self.scheme) for role in ColorRole}

    def __call__(self, role: ColorRole) -> str:
        return self._colors[role]
