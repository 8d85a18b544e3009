"""Pydantic model for persisted canvas settings."""

from __future__ import annotations

from typing import Any, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from .values import CANVAS_DEFAULTS, COLORS, named_color

Color = Tuple[int, int, int, int]


def _resolve_color(v: Any) -> Any:
    if isinstance(v, str):
        try:
            return named_color(v)
        except KeyError:
            raise ValueError(f"unknown color name: {v!r}") from None
    if isinstance(v, (list, tuple)) and len(v) == 3:
        return (*v, 255)
    return v


class Settings(BaseModel):
    """Canvas defaults persisted to disk.

    Parameters
    ----------
    title: Window caption for canvases constructed without a name.
    width_px, height_px: Canvas size in device pixels.
    x_min, x_max, y_min, y_max: Default user-coordinate ranges.
    border: Fraction added on each side of a rescaled range.
    pen_radius: Default pen radius as a fraction of the 512 px default size.
    pen_color, clear_color: Color names from ``values.yml`` or RGB(A) lists.
    font_family: System font name; ``None`` selects pygame's default face.
    font_size_px: Default font size.
    window_fps: Paint/poll rate of the window thread.
    save_dir: Directory used by the Ctrl+S shortcut; ``None`` uses
        the settings home.
    """

    title: str = Field(default=str(CANVAS_DEFAULTS["title"]))
    width_px: int = Field(default=int(CANVAS_DEFAULTS["width_px"]), gt=0)
    height_px: int = Field(default=int(CANVAS_DEFAULTS["height_px"]), gt=0)
    x_min: float = Field(default=float(CANVAS_DEFAULTS["x_min"]))
    x_max: float = Field(default=float(CANVAS_DEFAULTS["x_max"]))
    y_min: float = Field(default=float(CANVAS_DEFAULTS["y_min"]))
    y_max: float = Field(default=float(CANVAS_DEFAULTS["y_max"]))
    border: float = Field(default=float(CANVAS_DEFAULTS["border"]), ge=0.0)
    pen_radius: float = Field(default=float(CANVAS_DEFAULTS["pen_radius"]), ge=0.0)
    pen_color: Color = Field(default=COLORS[str(CANVAS_DEFAULTS["pen_color"])])
    clear_color: Color = Field(default=COLORS[str(CANVAS_DEFAULTS["clear_color"])])
    font_family: str | None = Field(default=CANVAS_DEFAULTS["font_family"])
    font_size_px: int = Field(default=int(CANVAS_DEFAULTS["font_size_px"]), gt=0)
    window_fps: float = Field(default=float(CANVAS_DEFAULTS["window_fps"]), gt=0.0)
    save_dir: str | None = Field(default=None)

    @field_validator("pen_color", "clear_color", mode="before")
    @classmethod
    def _named_color(cls, v: Any) -> Any:
        return _resolve_color(v)

    @field_validator("pen_color", "clear_color")
    @classmethod
    def _rgba_range(cls, v: Color) -> Color:
        if any(c < 0 or c > 255 for c in v):
            raise ValueError(f"color components must be within 0..255: {v}")
        return v

    @model_validator(mode="after")
    def _ordered_scales(self) -> "Settings":
        if self.x_min >= self.x_max:
            raise ValueError("x_min must be less than x_max")
        if self.y_min >= self.y_max:
            raise ValueError("y_min must be less than y_max")
        return self
