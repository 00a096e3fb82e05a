from dataclasses import replace

import numpy as np
import pytest

from palette_curves.colormath import HSL, hsl_to_rgb, rgb_to_hex
from palette_curves.config import (
    DEFAULT_CONFIG,
    BezierPoints,
    BrightnessChannel,
    HueChannel,
    PaletteConfig,
    SaturationChannel,
)
from palette_curves.generator import (
    best_text_color,
    find_best_position,
    generate_palette,
    make_step,
)


def flat_config(steps=5, **hue):
    return PaletteConfig(
        steps=steps,
        hue=HueChannel(**{"start": 0, "end": 100, "curve": "Linear", **hue}),
        saturation=SaturationChannel(start=50, end=50, curve="Linear"),
        brightness=BrightnessChannel(start=50, end=50, curve="Linear"),
    )


def test_linear_hue_ramp():
    out = generate_palette(flat_config())
    assert out.hue_values == [0, 25, 50, 75, 100]
    assert out.saturation_values == [50] * 5
    assert out.brightness_values == [50] * 5
    assert [c.index for c in out.colors] == [0, 1, 2, 3, 4]


def test_parallel_arrays_align():
    out = generate_palette(DEFAULT_CONFIG)
    assert len(out) == DEFAULT_CONFIG.steps
    for i, c in enumerate(out.colors):
        assert out.hue_values[i] == c.hsl.h
        assert out.saturation_values[i] == c.hsl.s
        assert out.brightness_values[i] == c.hsl.l
        assert 0 <= out.luminance_values[i] <= 100
        assert c.rgb == hsl_to_rgb(c.hsl)
        assert c.hex == rgb_to_hex(c.rgb)
        assert c.is_pinned is False


def test_easing_is_per_channel():
    cfg = replace(
        flat_config(steps=3),
        brightness=BrightnessChannel(start=0, end=100, curve="Quad - EaseIn"),
    )
    out = generate_palette(cfg)
    assert out.hue_values == [0, 50, 100]
    assert out.brightness_values == [0, 25, 100]


def test_custom_bezier_wins_over_curve_name():
    cfg = replace(
        flat_config(steps=3),
        hue=HueChannel(
            start=0,
            end=100,
            curve="Expo - EaseIn",
            custom=BezierPoints(0.25, 0.25, 0.75, 0.75),
        ),
    )
    out = generate_palette(cfg)
    assert np.allclose(out.hue_values, [0, 50, 100], atol=1e-3)


def test_unknown_curve_uses_quad_ease_in():
    out = generate_palette(flat_config(steps=3, curve="nope"))
    assert out.hue_values == [0, 25, 100]


def test_single_step_uses_start():
    out = generate_palette(flat_config(steps=1, start=42, end=300))
    assert out.hue_values == [42]
    assert len(out.colors) == 1


def test_zero_steps_is_empty():
    out = generate_palette(flat_config(steps=0))
    assert out.colors == [] and out.luminance_values == []


def test_long_path_hue():
    out = generate_palette(flat_config(steps=3, start=350, end=10, long_path=True))
    assert out.hue_values == [350, 180, 10]
    out = generate_palette(flat_config(steps=3, start=350, end=10))
    assert out.hue_values == [350, 0, 10]


def test_saturation_rate_applies_before_clamp():
    cfg = replace(
        flat_config(steps=3),
        saturation=SaturationChannel(start=40, end=80, curve="Linear", rate=1.5),
    )
    out = generate_palette(cfg)
    assert out.saturation_values == [60, 90, 100]


def test_brightness_clamped_by_overshoot():
    cfg = replace(
        flat_config(steps=21),
        brightness=BrightnessChannel(start=0, end=100, curve="Back - EaseInOut"),
    )
    out = generate_palette(cfg)
    assert min(out.brightness_values) == 0
    assert max(out.brightness_values) == 100


def test_contrast_fields():
    step = make_step(0, HSL(0, 0, 100))
    assert step.hex == "#FFFFFF"
    assert step.contrast_ratio_white == 1.0
    assert step.contrast_ratio_black == pytest.approx(21.0)
    assert step.wcag_white == "Fail" and step.wcag_black == "AAA"
    assert best_text_color(step) == "black"
    assert best_text_color(make_step(0, HSL(240, 100, 20))) == "white"


def test_generation_is_idempotent():
    a = generate_palette(DEFAULT_CONFIG)
    b = generate_palette(DEFAULT_CONFIG)
    assert a == b
    assert a.colors is not b.colors


# -----------------------------------------------------------------------------
# pinned colour
# -----------------------------------------------------------------------------


def test_pin_at_explicit_index():
    base = generate_palette(DEFAULT_CONFIG)
    out = generate_palette(replace(DEFAULT_CONFIG, pinned_color="#ff8800", pinned_index=4))

    assert out.colors[4].hex == "#FF8800"
    assert out.colors[4].is_pinned
    assert out.colors[4].index == 4
    for i, (a, b) in enumerate(zip(base.colors, out.colors)):
        if i != 4:
            assert a.hex == b.hex
            assert not b.is_pinned
    assert out.hue_values[4] == pytest.approx(32, abs=0.5)
    assert out.hue_values[:4] == base.hue_values[:4]


@pytest.mark.parametrize("index, expected", [(-3, 0), (99, 10)])
def test_pin_index_is_clamped(index, expected):
    out = generate_palette(replace(DEFAULT_CONFIG, pinned_color="000", pinned_index=index))
    assert [c.is_pinned for c in out.colors].index(True) == expected
    assert out.colors[expected].hex == "#000000"


@pytest.mark.parametrize("bad", ["#12", "zzzzzz", "#1234567"])
def test_invalid_pin_is_ignored(bad):
    base = generate_palette(DEFAULT_CONFIG)
    out = generate_palette(replace(DEFAULT_CONFIG, pinned_color=bad, pinned_index=2))
    assert out == base


def test_pin_lands_on_nearest_step():
    base = generate_palette(flat_config(steps=5))
    # hue 70 sits between steps 2 (50) and 3 (75), nearer the latter
    pinned = rgb_to_hex(hsl_to_rgb(HSL(70, 50, 50)))
    out = generate_palette(replace(flat_config(steps=5), pinned_color=pinned))
    assert [c.is_pinned for c in out.colors] == [False, False, False, True, False]
    assert [c.hex for i, c in enumerate(out.colors) if i != 3] == [
        c.hex for i, c in enumerate(base.colors) if i != 3
    ]


def test_pin_prefers_edges_only_when_clearly_closer():
    cfg = flat_config(steps=5)
    out = generate_palette(replace(cfg, pinned_color=rgb_to_hex(hsl_to_rgb(HSL(0, 50, 50)))))
    assert out.colors[0].is_pinned
    out = generate_palette(replace(cfg, pinned_color=rgb_to_hex(hsl_to_rgb(HSL(110, 50, 50)))))
    assert out.colors[4].is_pinned


def test_find_best_position_small_palettes():
    one = [make_step(0, HSL(200, 50, 50))]
    assert find_best_position(HSL(0, 0, 0), []) == 0
    assert find_best_position(HSL(205, 50, 50), one) == 0
    assert find_best_position(HSL(20, 100, 100), one) == 1


def test_find_best_position_gap_and_edges():
    ramp = [make_step(i, HSL(h, 50, 50)) for i, h in enumerate((0, 40, 80, 120))]
    assert find_best_position(HSL(60, 50, 50), ramp) == 2
    # beyond the end: 2×distance to the last colour beats every gap
    assert find_best_position(HSL(125, 50, 50), ramp) == 4
    assert find_best_position(HSL(355, 50, 50), ramp) == 0


def test_single_step_pin():
    out = generate_palette(replace(flat_config(steps=1), pinned_color="#00ff00"))
    assert out.colors[0].hex == "#00FF00"
    assert out.colors[0].is_pinned


@pytest.mark.parametrize("curve", ["Back - EaseIn", "Back - EaseOut", "Back - EaseInOut"])
def test_overshooting_curve_still_lands_on_endpoints(curve):
    out = generate_palette(flat_config(curve=curve))
    assert out.hue_values[0] == 0
    assert out.hue_values[-1] == 100


@pytest.mark.parametrize("padded", [" #ff0000\n", "#ff0000 ", "\tff0000"])
def test_whitespace_padded_pin_is_ignored(padded):
    base = generate_palette(flat_config())
    out = generate_palette(replace(flat_config(), pinned_color=padded, pinned_index=2))
    assert out == base
    assert not any(c.is_pinned for c in out.colors)
