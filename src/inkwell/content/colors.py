"""Deterministic category → color mapping.

Every category label hashes to a stable HSL color with good saturation and
lightness for readability.  The hash and the HSL → RGB conversion follow
the browser implementation exactly (32-bit string hash over UTF-16 code
units, round-half-up channels) so the same category gets the same color
everywhere the collection is shown.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict

TINT_ALPHA = 0.15


class RGB(BaseModel):
    """An 8-bit RGB triple."""

    model_config = ConfigDict(frozen=True)

    r: int
    g: int
    b: int


class CategoryColor(BaseModel):
    """Presentation colors for one category."""

    model_config = ConfigDict(frozen=True)

    primary_hex: str
    tint_rgba: str
    rgb: RGB


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def category_hash(category: str) -> int:
    """Return the signed 32-bit hash of a category label."""
    raw = category.encode("utf-16-le")
    h = 0
    for i in range(0, len(raw), 2):
        code_unit = raw[i] | (raw[i + 1] << 8)
        h = _to_int32(code_unit + (_to_int32(h << 5) - h))
    return h


def category_hsl(category: str) -> tuple[int, int, int]:
    """Return (hue degrees, saturation %, lightness %) for a category."""
    h = category_hash(category)
    hue = abs(h) % 360
    saturation = 65 + (abs(h) % 15)
    lightness = 50 + (abs(h >> 8) % 10)
    return hue, saturation, lightness


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:  # noqa: E741
    """Convert HSL fractions (each in [0, 1]) to 8-bit RGB."""
    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_rgb(p, q, h + 1 / 3)
        g = _hue_to_rgb(p, q, h)
        b = _hue_to_rgb(p, q, h - 1 / 3)
    return RGB(
        r=_round_half_up(r * 255),
        g=_round_half_up(g * 255),
        b=_round_half_up(b * 255),
    )


def compute_category_color(category: str) -> CategoryColor:
    """Compute the color for a category without caching."""
    hue, saturation, lightness = category_hsl(category)
    rgb = hsl_to_rgb(hue / 360, saturation / 100, lightness / 100)
    return CategoryColor(
        primary_hex=f"#{rgb.r:02x}{rgb.g:02x}{rgb.b:02x}",
        tint_rgba=f"rgba({rgb.r}, {rgb.g}, {rgb.b}, {TINT_ALPHA})",
        rgb=rgb,
    )


class ColorAssigner:
    """Memoizing category color lookup.

    The first request for a category computes and stores its color; every
    later request returns the stored object.
    """

    def __init__(self) -> None:
        self._cache: dict[str, CategoryColor] = {}

    def color_for(self, category: str) -> CategoryColor:
        cached = self._cache.get(category)
        if cached is not None:
            return cached
        color = compute_category_color(category)
        self._cache[category] = color
        return color

    def __contains__(self, category: object) -> bool:
        return category in self._cache

    def __len__(self) -> int:
        return len(self._cache)
