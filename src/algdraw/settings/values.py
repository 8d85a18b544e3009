"""Centralized named colors and canvas defaults loaded from YAML.

The master source is ``values.yml`` in this package. Literal fallbacks
mirror the shipped YAML so the canvas still comes up with its historical
defaults if the file is missing or a section fails to parse.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

logger = logging.getLogger(__name__)

_PKG_DIR = Path(__file__).parent
_YAML_PATH = _PKG_DIR / "values.yml"

Color = Tuple[int, int, int, int]

# --- Fallback literals ---------------------------------------------------
_FALLBACK_COLORS: Dict[str, Color] = {
    "black": (0, 0, 0, 255),
    "blue": (0, 0, 255, 255),
    "cyan": (0, 255, 255, 255),
    "dark_gray": (169, 169, 169, 255),
    "gray": (128, 128, 128, 255),
    "green": (0, 128, 0, 255),
    "light_gray": (211, 211, 211, 255),
    "magenta": (255, 0, 255, 255),
    "orange": (255, 165, 0, 255),
    "pink": (255, 192, 203, 255),
    "red": (255, 0, 0, 255),
    "white": (255, 255, 255, 255),
    "yellow": (255, 255, 0, 255),
    "book_blue": (9, 90, 166, 255),
    "book_light_blue": (103, 198, 243, 255),
    "book_red": (150, 35, 31, 255),
}
_FALLBACK_CANVAS: Dict[str, Any] = {
    "title": "Draw",
    "width_px": 512,
    "height_px": 512,
    "x_min": 0.0,
    "x_max": 1.0,
    "y_min": 0.0,
    "y_max": 1.0,
    "border": 0.0,
    "pen_radius": 0.002,
    "pen_color": "black",
    "clear_color": "white",
    "font_family": None,
    "font_size_px": 16,
    "window_fps": 60.0,
}


def _col(v: object) -> Color | None:
    if (
        isinstance(v, (list, tuple))
        and len(v) in (3, 4)
        and all(isinstance(c, int) and 0 <= c <= 255 for c in v)
    ):
        a = v[3] if len(v) == 4 else 255
        return (int(v[0]), int(v[1]), int(v[2]), int(a))
    return None


# --- Load YAML -----------------------------------------------------------
_colors: Dict[str, Color] = dict(_FALLBACK_COLORS)
_canvas: Dict[str, Any] = dict(_FALLBACK_CANVAS)

if _YAML_PATH.exists():
    try:
        with _YAML_PATH.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        logger.warning("could not parse %s; using built-in defaults", _YAML_PATH)
        raw = {}
    colors = raw.get("colors")
    if isinstance(colors, dict):
        for name, value in colors.items():
            c = _col(value)
            if isinstance(name, str) and c is not None:
                _colors[name] = c
    canvas = raw.get("canvas")
    if isinstance(canvas, dict):
        _canvas.update({k: v for k, v in canvas.items() if k in _FALLBACK_CANVAS})


def named_color(name: str) -> Color:
    """Return the RGBA tuple registered under *name*.

    Case and spaces are ignored, so ``"Book Red"`` finds ``book_red``.
    Raises ``KeyError`` for an unknown name.
    """
    return _colors[name.strip().lower().replace(" ", "_")]


# --- Public accessors ----------------------------------------------------
COLORS: Dict[str, Color] = dict(_colors)
CANVAS_DEFAULTS: Dict[str, Any] = dict(_canvas)

__all__ = ["COLORS", "CANVAS_DEFAULTS", "named_color"]
