# colormath.py – HSL / RGB / hex conversions and WCAG contrast scoring
#   - CSS Color HSL→RGB (chroma / sextant / lightness offset)
#   - hue handled on the circle: normalisation, short/long arc lerp
#   - WCAG 2.x relative luminance with the 0.03928 sRGB knee

from __future__ import annotations

import math
import string
from dataclasses import dataclass
from typing import Literal, Optional

import numpy as np

Hex = str
WCAGLevel = Literal["AAA", "AA", "A", "Fail"]


@dataclass(frozen=True)
class HSL:
    h: float  # 0 ≤ h < 360
    s: float  # 0..100
    l: float  # 0..100


@dataclass(frozen=True)
class RGB:
    r: int
    g: int
    b: int


WHITE = RGB(255, 255, 255)
BLACK = RGB(0, 0, 0)


# --- rounding ----------------------------------------------------------------
def _round(x: float) -> int:
    # round half up, like Math.round(); builtin round() is half-to-even
    return int(math.floor(x + 0.5))


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


# --- HSL → RGB → hex ---------------------------------------------------------
def hsl_to_rgb(hsl: HSL) -> RGB:
    hue = normalize_hue(hsl.h) / 360.0
    sat = hsl.s / 100.0
    light = hsl.l / 100.0

    c = (1.0 - abs(2.0 * light - 1.0)) * sat
    x = c * (1.0 - abs((hue * 6.0) % 2.0 - 1.0))
    m = light - c / 2.0

    sextant = int(hue * 6.0)
    r, g, b = (
        (c, x, 0.0),
        (x, c, 0.0),
        (0.0, c, x),
        (0.0, x, c),
        (x, 0.0, c),
        (c, 0.0, x),
    )[min(sextant, 5)]

    return RGB(_round((r + m) * 255), _round((g + m) * 255), _round((b + m) * 255))


def rgb_to_hex(rgb: RGB) -> Hex:
    return f"#{rgb.r:02X}{rgb.g:02X}{rgb.b:02X}"


def hsl_to_hex(hsl: HSL) -> Hex:
    return rgb_to_hex(hsl_to_rgb(hsl))


# --- hex parsing -------------------------------------------------------------
def canon_hex(s: str) -> Hex:
    """Normalize to '#RRGGBB'; accept 3- or 6-digit hex only (leading '#' optional)."""
    raw = s or ""
    if raw.startswith("#"):
        raw = raw[1:]
    if len(raw) not in (3, 6) or not all(c in string.hexdigits for c in raw):
        raise ValueError(f"invalid hex: {s!r}")
    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    return "#" + raw.upper()


def hex_to_rgb(s: str) -> Optional[RGB]:
    """Parse a hex colour, returning None instead of raising on bad input."""
    try:
        raw = canon_hex(s)
    except ValueError:
        return None
    return RGB(*(int(raw[i : i + 2], 16) for i in (1, 3, 5)))


def rgb_to_hsl(rgb: RGB) -> HSL:
    r, g, b = rgb.r / 255.0, rgb.g / 255.0, rgb.b / 255.0
    hi = max(r, g, b)
    lo = min(r, g, b)
    light = (hi + lo) / 2.0

    if hi == lo:
        return HSL(0.0, 0.0, light * 100.0)

    d = hi - lo
    sat = d / (2.0 - hi - lo) if light > 0.5 else d / (hi + lo)
    if hi == r:
        h = (g - b) / d + (6.0 if g < b else 0.0)
    elif hi == g:
        h = (b - r) / d + 2.0
    else:
        h = (r - g) / d + 4.0

    return HSL(normalize_hue(h * 60.0), sat * 100.0, light * 100.0)


def hex_to_hsl(s: str) -> Optional[HSL]:
    rgb = hex_to_rgb(s)
    return None if rgb is None else rgb_to_hsl(rgb)


# --- WCAG --------------------------------------------------------------------
_KNEE = 0.03928
_GAMMA = 2.4
_REC709 = np.array([0.2126, 0.7152, 0.0722])


def get_luminance(rgb: RGB) -> float:
    c = np.array([rgb.r, rgb.g, rgb.b], dtype=np.float64) / 255.0
    lin = np.where(c <= _KNEE, c / 12.92, ((c + 0.055) / 1.055) ** _GAMMA)
    return float(lin @ _REC709)


def get_contrast_ratio(c1: RGB, c2: RGB) -> float:
    l1 = get_luminance(c1)
    l2 = get_luminance(c2)
    return (max(l1, l2) + 0.05) / (min(l1, l2) + 0.05)


def get_wcag_level(ratio: float, is_large_text: bool = False) -> WCAGLevel:
    # large text currently shares the normal-text thresholds
    if ratio >= 7:
        return "AAA"
    if ratio >= 4.5:
        return "AA"
    if ratio >= 3:
        return "A"
    return "Fail"


# --- hue circle --------------------------------------------------------------
def normalize_hue(h: float) -> float:
    while h < 0:
        h += 360.0
    while h >= 360:
        h -= 360.0
    return h


def interpolate_hue(
    start: float, end: float, progress: float, long_path: bool = False
) -> float:
    """Lerp around the hue wheel.

    The short arc is taken by default (an exact 180° gap keeps its sign);
    ``long_path`` swaps to the complementary arc. Equal endpoints never spin.
    """
    start = normalize_hue(start)
    end = normalize_hue(end)

    diff = end - start
    if abs(diff) > 180:
        diff = diff - 360 if diff > 0 else diff + 360
    if long_path and diff != 0:
        diff = diff - 360 if diff > 0 else diff + 360

    return normalize_hue(start + diff * progress)


def interpolate_linear(start: float, end: float, progress: float) -> float:
    return start + (end - start) * progress


# --- similarity --------------------------------------------------------------
def hue_distance(h1: float, h2: float) -> float:
    d = abs(h1 - h2)
    return min(d, 360.0 - d)


def hsl_distance(a: HSL, b: HSL) -> float:
    """Euclidean distance with every axis scaled to [0, 1]."""
    v = np.array(
        [hue_distance(a.h, b.h) / 180.0, (a.s - b.s) / 100.0, (a.l - b.l) / 100.0]
    )
    return float(np.linalg.norm(v))


__all__ = [
    "HSL",
    "RGB",
    "Hex",
    "WCAGLevel",
    "WHITE",
    "BLACK",
    "clamp",
    "hsl_to_rgb",
    "rgb_to_hex",
    "hsl_to_hex",
    "canon_hex",
    "hex_to_rgb",
    "rgb_to_hsl",
    "hex_to_hsl",
    "get_luminance",
    "get_contrast_ratio",
    "get_wcag_level",
    "normalize_hue",
    "interpolate_hue",
    "interpolate_linear",
    "hue_distance",
    "hsl_distance",
]
