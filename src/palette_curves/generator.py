from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence

from .colormath import (
    BLACK,
    HSL,
    RGB,
    WHITE,
    Hex,
    WCAGLevel,
    clamp,
    get_contrast_ratio,
    get_luminance,
    get_wcag_level,
    hex_to_hsl,
    hsl_distance,
    hsl_to_rgb,
    interpolate_hue,
    interpolate_linear,
    rgb_to_hex,
)
from .config import Channel, PaletteConfig
from .easing import EasingFunction, get_cubic_bezier, get_easing_function

log = logging.getLogger(__name__)

EDGE_BIAS = 2.0  # start/end placement must be twice as close to win
SINGLE_COLOR_THRESHOLD = 0.5


@dataclass(frozen=True)
class ColorStep:
    index: int
    hsl: HSL
    rgb: RGB
    hex: Hex
    contrast_ratio_white: float
    contrast_ratio_black: float
    wcag_white: WCAGLevel
    wcag_black: WCAGLevel
    is_pinned: bool = False


@dataclass
class PaletteResult:
    colors: List[ColorStep] = field(default_factory=list)
    hue_values: List[float] = field(default_factory=list)
    saturation_values: List[float] = field(default_factory=list)
    brightness_values: List[float] = field(default_factory=list)
    luminance_values: List[float] = field(default_factory=list)  # percent

    def __len__(self) -> int:
        return len(self.colors)

    def to_dict(self) -> dict:
        return {
            "colors": [
                {
                    "index": c.index,
                    "hex": c.hex,
                    "hsl": {"h": c.hsl.h, "s": c.hsl.s, "l": c.hsl.l},
                    "rgb": {"r": c.rgb.r, "g": c.rgb.g, "b": c.rgb.b},
                    "contrastRatioWhite": c.contrast_ratio_white,
                    "contrastRatioBlack": c.contrast_ratio_black,
                    "wcagWhite": c.wcag_white,
                    "wcagBlack": c.wcag_black,
                    "isPinned": c.is_pinned,
                }
                for c in self.colors
            ],
            "hueValues": list(self.hue_values),
            "saturationValues": list(self.saturation_values),
            "brightnessValues": list(self.brightness_values),
            "luminanceValues": list(self.luminance_values),
        }


def make_step(index: int, hsl: HSL, *, pinned: bool = False) -> ColorStep:
    rgb = hsl_to_rgb(hsl)
    white = get_contrast_ratio(rgb, WHITE)
    black = get_contrast_ratio(rgb, BLACK)
    return ColorStep(
        index=index,
        hsl=hsl,
        rgb=rgb,
        hex=rgb_to_hex(rgb),
        contrast_ratio_white=white,
        contrast_ratio_black=black,
        wcag_white=get_wcag_level(white),
        wcag_black=get_wcag_level(black),
        is_pinned=pinned,
    )


def resolve_easing(channel: Channel) -> EasingFunction:
    if channel.custom is not None:
        return get_cubic_bezier(*channel.custom.as_tuple())
    return get_easing_function(channel.curve)


def generate_palette(config: PaletteConfig) -> PaletteResult:
    steps = config.steps
    hue, sat, bri = config.hue, config.saturation, config.brightness

    ease_h = resolve_easing(hue)
    ease_s = resolve_easing(sat)
    ease_l = resolve_easing(bri)

    out = PaletteResult()
    for i in range(steps):
        progress = 0.0 if steps == 1 else i / (steps - 1)

        h = interpolate_hue(hue.start, hue.end, ease_h(progress), hue.long_path)
        s = interpolate_linear(sat.start, sat.end, ease_s(progress)) * sat.rate
        l = interpolate_linear(bri.start, bri.end, ease_l(progress))

        step = make_step(i, HSL(h, clamp(s, 0.0, 100.0), clamp(l, 0.0, 100.0)))
        _put(out, step)

    if config.pinned_color:
        apply_pinned_color(out, config.pinned_color, config.pinned_index)
    return out


def _put(out: PaletteResult, step: ColorStep, at: Optional[int] = None) -> None:
    lum = get_luminance(step.rgb) * 100.0
    if at is None:
        out.colors.append(step)
        out.hue_values.append(step.hsl.h)
        out.saturation_values.append(step.hsl.s)
        out.brightness_values.append(step.hsl.l)
        out.luminance_values.append(lum)
    else:
        out.colors[at] = step
        out.hue_values[at] = step.hsl.h
        out.saturation_values[at] = step.hsl.s
        out.brightness_values[at] = step.hsl.l
        out.luminance_values[at] = lum


# -----------------------------------------------------------------------------
# Pinned colour
# -----------------------------------------------------------------------------


def apply_pinned_color(
    palette: PaletteResult, pinned: str, index: Optional[int] = None
) -> Optional[int]:
    """
    Overwrite one step of ``palette`` with ``pinned`` (in place).

    An explicit ``index`` is clamped into range; otherwise the slot comes from
    :func:`find_best_position`. Returns the overwritten index, or None when
    the colour does not parse or the palette is empty.
    """
    hsl = hex_to_hsl(pinned)
    if hsl is None:
        log.debug("ignoring pinned colour %r: not a hex colour", pinned)
        return None
    n = len(palette.colors)
    if n == 0:
        return None

    if index is not None:
        at = int(clamp(index, 0, n - 1))
    else:
        at = _slot_for_position(find_best_position(hsl, palette.colors), hsl, palette.colors)

    _put(palette, make_step(at, hsl, pinned=True), at)
    log.debug("pinned %s at step %d", palette.colors[at].hex, at)
    return at


def find_best_position(pinned: HSL, colors: Sequence[ColorStep]) -> int:
    """Insertion position (0..len) where ``pinned`` fits the gradient best.

    Interior gaps score the summed distance to both neighbours; the two ends
    score ``EDGE_BIAS`` times the distance to the end colour.
    """
    n = len(colors)
    if n == 0:
        return 0
    if n == 1:
        return 0 if hsl_distance(pinned, colors[0].hsl) < SINGLE_COLOR_THRESHOLD else 1

    best_pos = 1
    best_score = float("inf")
    for i in range(n - 1):
        score = hsl_distance(pinned, colors[i].hsl) + hsl_distance(
            pinned, colors[i + 1].hsl
        )
        if score < best_score:
            best_score = score
            best_pos = i + 1

    start_score = EDGE_BIAS * hsl_distance(pinned, colors[0].hsl)
    end_score = EDGE_BIAS * hsl_distance(pinned, colors[-1].hsl)
    if start_score < best_score:
        best_pos, best_score = 0, start_score
    if end_score < best_score:
        best_pos = n
    return best_pos


def _slot_for_position(pos: int, pinned: HSL, colors: Sequence[ColorStep]) -> int:
    # a gap is replaced by whichever neighbour is closer; ties go right
    n = len(colors)
    if pos <= 0:
        return 0
    if pos >= n:
        return n - 1
    left = hsl_distance(pinned, colors[pos - 1].hsl)
    right = hsl_distance(pinned, colors[pos].hsl)
    return pos - 1 if left < right else pos


def best_text_color(step: ColorStep) -> Literal["white", "black"]:
    return "white" if step.contrast_ratio_white > step.contrast_ratio_black else "black"


__all__ = [
    "ColorStep",
    "PaletteResult",
    "EDGE_BIAS",
    "make_step",
    "resolve_easing",
    "generate_palette",
    "apply_pinned_color",
    "find_best_position",
    "best_text_color",
]
