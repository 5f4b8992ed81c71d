"""Small helpers shared by the built-in demonstrations."""
from __future__ import annotations

import colorsys
import math


def hsl(hue_deg: float, saturation: float = 0.7, lightness: float = 0.5) -> str:
    """CSS-like hsl() as a "#rrggbb" string."""
    r, g, b = colorsys.hls_to_rgb((hue_deg % 360.0) / 360.0, lightness, saturation)
    return f"#{round(r * 255):02x}{round(g * 255):02x}{round(b * 255):02x}"


def rotated_rect(cx: float, cy: float, length: float, thickness: float, angle_rad: float) -> list[tuple[float, float]]:
    """Corners of a bar anchored at (cx, cy), pointing at ``angle_rad`` (y down)."""
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    half = thickness / 2.0
    corners = [(0.0, -half), (length, -half), (length, half), (0.0, half)]
    return [(cx + x * c + y * s, cy - x * s + y * c) for x, y in corners]
