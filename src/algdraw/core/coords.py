"""User <-> device coordinate mapping.

User coordinates are the resolution-independent space callers draw in,
origin bottom-left with y growing upward. Device coordinates are pixel
positions on the render surface, origin top-left with y growing downward.

Mapping for a viewport ``[x_min, x_max] x [y_min, y_max]`` on a ``W x H``
surface::

    px = W * (ux - x_min) / (x_max - x_min)
    py = H * (y_max - uy) / (y_max - y_min)

The viewport is immutable and replaced wholesale on every rescale/resize so
that readers on another thread (input mapping) always observe a consistent
snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from math import isfinite
from typing import Literal, Tuple

from algdraw.errors import ConfigurationError

__all__ = ["Viewport", "CoordinateMapper", "DEFAULT_SIZE"]

DEFAULT_SIZE: int = 512

Axis = Literal["x", "y"]


@dataclass(frozen=True, slots=True)
class Viewport:
    x_min: float = 0.0
    x_max: float = 1.0
    y_min: float = 0.0
    y_max: float = 1.0
    width_px: int = DEFAULT_SIZE
    height_px: int = DEFAULT_SIZE

    def __post_init__(self) -> None:
        _check_range("x", self.x_min, self.x_max)
        _check_range("y", self.y_min, self.y_max)
        _check_size(self.width_px, self.height_px)


def _check_range(axis: str, lo: float, hi: float) -> None:
    if not (isfinite(lo) and isfinite(hi)):
        raise ConfigurationError(f"{axis} scale must be finite: [{lo}, {hi}]")
    if lo >= hi:
        raise ConfigurationError(f"{axis} scale is degenerate: min {lo} >= max {hi}")


def _check_size(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise ConfigurationError("width and height must be positive")


class CoordinateMapper:
    """Convert between user coordinates and device pixels.

    Parameters
    ----------
    viewport:
        Initial viewport; defaults to [0,1]x[0,1] on 512x512 pixels.
    border:
        Fraction of the requested range added symmetrically on each side by
        the rescale calls. Must be >= 0.
    """

    def __init__(self, viewport: Viewport | None = None, *, border: float = 0.0) -> None:
        if border < 0 or not isfinite(border):
            raise ConfigurationError(f"border fraction must be >= 0: {border}")
        self._viewport = viewport if viewport is not None else Viewport()
        self._border = float(border)

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def border(self) -> float:
        return self._border

    def size(self) -> Tuple[int, int]:
        vp = self._viewport
        return (vp.width_px, vp.height_px)

    # --- rescale ---------------------------------------------------------
    def _bordered(self, axis: str, lo: float, hi: float) -> Tuple[float, float]:
        # Validate the requested range first so a bad call never mutates state
        _check_range(axis, float(lo), float(hi))
        span = float(hi) - float(lo)
        return (float(lo) - self._border * span, float(hi) + self._border * span)

    def set_x_scale(self, x_min: float = 0.0, x_max: float = 1.0) -> None:
        lo, hi = self._bordered("x", x_min, x_max)
        self._viewport = replace(self._viewport, x_min=lo, x_max=hi)

    def set_y_scale(self, y_min: float = 0.0, y_max: float = 1.0) -> None:
        lo, hi = self._bordered("y", y_min, y_max)
        self._viewport = replace(self._viewport, y_min=lo, y_max=hi)

    def set_scale(self, lo: float = 0.0, hi: float = 1.0) -> None:
        """Set both axes to the same range in one atomic replacement."""
        x_lo, x_hi = self._bordered("x", lo, hi)
        y_lo, y_hi = self._bordered("y", lo, hi)
        self._viewport = replace(
            self._viewport, x_min=x_lo, x_max=x_hi, y_min=y_lo, y_max=y_hi
        )

    def resize(self, width_px: int, height_px: int) -> None:
        _check_size(int(width_px), int(height_px))
        self._viewport = replace(
            self._viewport, width_px=int(width_px), height_px=int(height_px)
        )

    # --- mapping ---------------------------------------------------------
    def to_device(self, ux: float, uy: float) -> Tuple[float, float]:
        vp = self._viewport
        px = vp.width_px * (ux - vp.x_min) / (vp.x_max - vp.x_min)
        py = vp.height_px * (vp.y_max - uy) / (vp.y_max - vp.y_min)
        return (px, py)

    def to_user(self, px: float, py: float) -> Tuple[float, float]:
        vp = self._viewport
        ux = vp.x_min + px * (vp.x_max - vp.x_min) / vp.width_px
        uy = vp.y_max - py * (vp.y_max - vp.y_min) / vp.height_px
        return (ux, uy)

    def scale_length(self, length: float, axis: Axis = "x") -> float:
        """Convert a user-space length along *axis* into device pixels.

        The factor uses the absolute span so the result never flips sign
        with the viewport orientation.
        """
        vp = self._viewport
        if axis == "x":
            return length * vp.width_px / abs(vp.x_max - vp.x_min)
        if axis == "y":
            return length * vp.height_px / abs(vp.y_max - vp.y_min)
        raise ValueError(f"unknown axis: {axis!r}")
