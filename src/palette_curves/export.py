"""Text renderings of a generated palette (CSS, JSON, plain text, SVG).

All functions are pure; copying to the clipboard or saving a file is left to
the caller.
"""

from __future__ import annotations

import json
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .config import PaletteConfig
from .generator import PaletteResult

# format → download extension
EXPORT_FORMATS: Mapping[str, str] = MappingProxyType(
    {"css": "css", "json": "json", "text": "text", "svg": "svg"}
)

SWATCH_SIZE = 40
SWATCH_GAP = 8


def export_as_css(palette: PaletteResult) -> str:
    lines = "\n".join(
        f"  --color-{i}: {c.hex};" for i, c in enumerate(palette.colors)
    )
    return f":root {{\n{lines}\n}}"


def export_as_json(palette: PaletteResult, config: PaletteConfig) -> str:
    payload = {
        "settings": config.to_dict(),
        "colors": [
            {
                "index": c.index,
                "hex": c.hex,
                "hsl": {"h": c.hsl.h, "s": c.hsl.s, "l": c.hsl.l},
                "rgb": {"r": c.rgb.r, "g": c.rgb.g, "b": c.rgb.b},
                "accessibility": {
                    "contrastRatioWhite": c.contrast_ratio_white,
                    "contrastRatioBlack": c.contrast_ratio_black,
                    "wcagWhite": c.wcag_white,
                    "wcagBlack": c.wcag_black,
                },
            }
            for c in palette.colors
        ],
    }
    return json.dumps(payload, indent=2)


def export_as_plain_text(
    palette: PaletteResult, *, numbered: bool = True, include_hash: bool = True
) -> str:
    out = []
    for i, c in enumerate(palette.colors):
        hex_ = c.hex if include_hash else c.hex.lstrip("#")
        out.append(f"{i + 1}. {hex_}" if numbered else hex_)
    return "\n".join(out)


def export_as_svg(palette: PaletteResult, *, now: Optional[datetime] = None) -> str:
    """One row of 40×40 swatches, 8px apart, for pasting into Figma."""
    n = len(palette.colors)
    width = n * SWATCH_SIZE + max(n - 1, 0) * SWATCH_GAP
    stamp = (now or datetime.now()).strftime("%Y%m%d-%H%M%S")

    rects = "\n".join(
        f'  <rect id="{c.hex.lstrip("#")}" x="{i * (SWATCH_SIZE + SWATCH_GAP)}" y="0" '
        f'width="{SWATCH_SIZE}" height="{SWATCH_SIZE}" fill="{c.hex}"/>'
        for i, c in enumerate(palette.colors)
    )
    return (
        f'<svg id="{stamp}" xmlns="http://www.w3.org/2000/svg" '
        f'width="{width}" height="{SWATCH_SIZE}" viewBox="0 0 {width} {SWATCH_SIZE}">\n'
        f"{rects}\n"
        "</svg>"
    )


def export_palette(
    palette: PaletteResult, config: PaletteConfig, fmt: str, **options: Any
) -> str:
    fmt = (fmt or "").strip().lower()
    if fmt == "css":
        return export_as_css(palette)
    if fmt == "json":
        return export_as_json(palette, config)
    if fmt == "text":
        return export_as_plain_text(
            palette,
            numbered=bool(options.get("numbered", True)),
            include_hash=bool(options.get("include_hash", True)),
        )
    if fmt == "svg":
        return export_as_svg(palette, now=options.get("now"))
    raise ValueError(f"unknown export format '{fmt}'")


__all__ = [
    "EXPORT_FORMATS",
    "export_as_css",
    "export_as_json",
    "export_as_plain_text",
    "export_as_svg",
    "export_palette",
]
