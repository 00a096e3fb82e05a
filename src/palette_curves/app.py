from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, jsonify, request

from .config import PaletteConfig
from .easing import CURVE_PRESETS, curve_names
from .export import EXPORT_FORMATS, export_palette
from .generator import generate_palette

log = logging.getLogger(__name__)

MAX_STEPS = 512


def parse_config(body: Any, max_steps: int) -> PaletteConfig:
    config = PaletteConfig.from_dict(body)
    if not 1 <= config.steps <= max_steps:
        raise ValueError(f"steps must be between 1 and {max_steps}")
    return config


def _flag(val: Any, default: bool) -> bool:
    if val is None:
        return default
    if isinstance(val, str):
        return val.strip().lower() not in {"0", "false", "no", "off", ""}
    return bool(val)


# ----------------------------- Flask app ----------------------------------


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update(MAX_STEPS=MAX_STEPS)
    if config:
        app.config.update(config)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    def _body() -> Any:
        if not request.data:
            return {}
        body = request.get_json(silent=True)
        if body is None:
            raise ValueError("body must be JSON")
        if not isinstance(body, Mapping):
            raise ValueError("body must be a JSON object")
        return body

    @app.route("/curves")
    def curves():
        return jsonify(
            {
                "curves": curve_names(),
                "presets": {
                    name: dict(zip(("x1", "y1", "x2", "y2"), pts))
                    for name, pts in CURVE_PRESETS.items()
                },
            }
        )

    @app.route("/palette", methods=["POST"])
    def palette():
        try:
            cfg = parse_config(_body(), app.config["MAX_STEPS"])
        except ValueError as e:
            return jsonify({"error": f"invalid config: {e}"}), 400

        try:
            result = generate_palette(cfg)
        except Exception as exc:
            log.exception("Palette generation failed")
            return jsonify({"error": str(exc)}), 500

        return jsonify(result.to_dict())

    @app.route("/export/<fmt>", methods=["POST"])
    def export(fmt: str):
        fmt = fmt.lower()
        if fmt not in EXPORT_FORMATS:
            return (
                jsonify(
                    {
                        "error": f"unknown format '{fmt}'",
                        "supported": list(EXPORT_FORMATS),
                    }
                ),
                400,
            )
        try:
            body = _body()
            cfg = parse_config(body, app.config["MAX_STEPS"])
        except ValueError as e:
            return jsonify({"error": f"invalid config: {e}"}), 400

        try:
            content = export_palette(
                generate_palette(cfg),
                cfg,
                fmt,
                numbered=_flag(body.get("numbered"), True),
                include_hash=_flag(body.get("includeHash"), True),
            )
        except Exception as exc:
            log.exception("Export failed")
            return jsonify({"error": str(exc)}), 500

        return jsonify(
            {
                "format": fmt,
                "filename": f"color-palette.{EXPORT_FORMATS[fmt]}",
                "content": content,
            }
        )

    return app


if __name__ == "__main__":
    create_app().run(debug=False, threaded=True)
