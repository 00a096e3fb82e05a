from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, TypeVar, Union

from .easing import CURVE_PRESETS, DEFAULT_CURVE


@dataclass(frozen=True)
class BezierPoints:
    x1: float
    y1: float
    x2: float
    y2: float

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x1, self.y1, self.x2, self.y2)


@dataclass(frozen=True)
class HueChannel:
    start: float = 180.0
    end: float = 270.0
    curve: str = DEFAULT_CURVE
    long_path: bool = False
    custom: Optional[BezierPoints] = None


@dataclass(frozen=True)
class SaturationChannel:
    start: float = 50.0
    end: float = 80.0
    curve: str = DEFAULT_CURVE
    rate: float = 1.0  # applied after interpolation, before clamping
    custom: Optional[BezierPoints] = None


@dataclass(frozen=True)
class BrightnessChannel:
    start: float = 80.0
    end: float = 20.0
    curve: str = DEFAULT_CURVE
    custom: Optional[BezierPoints] = None


Channel = Union[HueChannel, SaturationChannel, BrightnessChannel]
C = TypeVar("C", HueChannel, SaturationChannel, BrightnessChannel)


@dataclass(frozen=True)
class PaletteConfig:
    steps: int = 11
    hue: HueChannel = HueChannel()
    saturation: SaturationChannel = SaturationChannel()
    brightness: BrightnessChannel = BrightnessChannel()
    pinned_color: Optional[str] = None
    pinned_index: Optional[int] = None

    # ---- wire format (camelCase, as posted by the browser) ----

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "PaletteConfig":
        """Build a config from the browser shape; missing keys take defaults."""
        data = data or {}
        if not isinstance(data, Mapping):
            raise ValueError("config must be an object")
        d = DEFAULT_CONFIG

        hue = _section(data, "hue")
        sat = _section(data, "saturation")
        bri = _section(data, "brightness")

        pinned = data.get("pinnedColor")
        index = data.get("pinnedIndex")
        return cls(
            steps=_int(data.get("steps", d.steps), "steps"),
            hue=HueChannel(
                start=_num(hue.get("start", d.hue.start), "hue.start"),
                end=_num(hue.get("end", d.hue.end), "hue.end"),
                curve=str(hue.get("curve", d.hue.curve)),
                long_path=bool(hue.get("longPath", d.hue.long_path)),
                custom=_bezier(hue.get("custom"), "hue.custom"),
            ),
            saturation=SaturationChannel(
                start=_num(sat.get("start", d.saturation.start), "saturation.start"),
                end=_num(sat.get("end", d.saturation.end), "saturation.end"),
                curve=str(sat.get("curve", d.saturation.curve)),
                rate=_num(sat.get("rate", d.saturation.rate), "saturation.rate"),
                custom=_bezier(sat.get("custom"), "saturation.custom"),
            ),
            brightness=BrightnessChannel(
                start=_num(bri.get("start", d.brightness.start), "brightness.start"),
                end=_num(bri.get("end", d.brightness.end), "brightness.end"),
                curve=str(bri.get("curve", d.brightness.curve)),
                custom=_bezier(bri.get("custom"), "brightness.custom"),
            ),
            pinned_color=str(pinned) if pinned else None,
            pinned_index=None if index is None else _int(index, "pinnedIndex"),
        )

    def to_dict(self) -> dict[str, Any]:
        hue: dict[str, Any] = {
            "start": self.hue.start,
            "end": self.hue.end,
            "curve": self.hue.curve,
            "longPath": self.hue.long_path,
        }
        sat: dict[str, Any] = {
            "start": self.saturation.start,
            "end": self.saturation.end,
            "curve": self.saturation.curve,
            "rate": self.saturation.rate,
        }
        bri: dict[str, Any] = {
            "start": self.brightness.start,
            "end": self.brightness.end,
            "curve": self.brightness.curve,
        }
        for sec, ch in ((hue, self.hue), (sat, self.saturation), (bri, self.brightness)):
            if ch.custom is not None:
                sec["custom"] = {
                    "x1": ch.custom.x1,
                    "y1": ch.custom.y1,
                    "x2": ch.custom.x2,
                    "y2": ch.custom.y2,
                }

        out: dict[str, Any] = {
            "steps": self.steps,
            "hue": hue,
            "saturation": sat,
            "brightness": bri,
        }
        if self.pinned_color is not None:
            out["pinnedColor"] = self.pinned_color
        if self.pinned_index is not None:
            out["pinnedIndex"] = self.pinned_index
        return out


DEFAULT_CONFIG = PaletteConfig()


# ---- helpers ----------------------------------------------------------------


def with_curve(channel: C, name: str) -> C:
    """Select a named curve; its preset (if any) becomes the custom Bézier."""
    preset = CURVE_PRESETS.get(name)
    if preset is None:
        return replace(channel, curve=name)
    return replace(channel, curve=name, custom=BezierPoints(*preset))


def toggle_pin(config: PaletteConfig, hex_color: str) -> PaletteConfig:
    """Pin ``hex_color``, or unpin it when it is already the pinned colour."""
    normalized = hex_color.lower()
    current = config.pinned_color.lower() if config.pinned_color else None
    if current == normalized:
        return replace(config, pinned_color=None, pinned_index=None)
    # leave placement to the similarity search
    return replace(config, pinned_color=normalized, pinned_index=None)


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    sec = data.get(key)
    if sec is None:
        return {}
    if not isinstance(sec, Mapping):
        raise ValueError(f"{key} must be an object")
    return sec


def _num(val: Any, name: str) -> float:
    if isinstance(val, bool):
        raise ValueError(f"{name} must be a number")
    try:
        f = float(val)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number") from None
    if not math.isfinite(f):
        raise ValueError(f"{name} must be finite")
    return f


def _int(val: Any, name: str) -> int:
    f = _num(val, name)
    if f != int(f):
        raise ValueError(f"{name} must be an integer")
    return int(f)


def _bezier(val: Any, name: str) -> Optional[BezierPoints]:
    if val is None:
        return None
    if not isinstance(val, Mapping):
        raise ValueError(f"{name} must be an object")
    return BezierPoints(
        *(_num(val.get(k), f"{name}.{k}") for k in ("x1", "y1", "x2", "y2"))
    )


__all__ = [
    "BezierPoints",
    "HueChannel",
    "SaturationChannel",
    "BrightnessChannel",
    "Channel",
    "PaletteConfig",
    "DEFAULT_CONFIG",
    "with_curve",
    "toggle_pin",
]
