"""Framework-agnostic device-space Canvas and DisplayBackend protocols.

``Canvas`` is the set of raster primitives a back buffer offers, addressed
in device pixels (origin top-left). ``DisplayBackend`` owns the back/front
buffer pair and the present/paint/save operations. The user-coordinate
layer (:class:`algdraw.draw.DrawCanvas`) only talks to these protocols so
a different raster library could be plugged in.
"""

from __future__ import annotations

from typing import Any, Literal, Optional, Protocol, Sequence, Tuple

from algdraw.render.fonts import Font

Color = Tuple[int, int, int, int]
PointF = Tuple[float, float]
# left, top, width, height in device pixels
RectF = Tuple[float, float, float, float]
TextAlign = Literal["center", "left", "right"]


class Canvas(Protocol):
    def clear(self, color: Color) -> None:
        ...

    def pixel(self, p: Tuple[int, int], color: Color) -> None:
        ...

    def line(self, p0: PointF, p1: PointF, width: int, color: Color) -> None:
        ...

    def ellipse(self, rect: RectF, width: int, color: Color) -> None:
        """Outline ellipse inscribed in *rect*; ``width=0`` fills it."""
        ...

    def arc(
        self, rect: RectF, start_deg: float, stop_deg: float, width: int, color: Color
    ) -> None:
        ...

    def rect(self, rect: RectF, width: int, color: Color) -> None:
        ...

    def polygon(self, pts: Sequence[PointF], width: int, color: Color) -> None:
        ...

    def image(
        self,
        img: Any,
        center: PointF,
        size: Optional[Tuple[int, int]] = None,
        degrees: float = 0.0,
    ) -> None:
        ...

    def text(
        self,
        anchor: PointF,
        s: str,
        font: Font,
        color: Color,
        align: TextAlign = "center",
        degrees: float = 0.0,
    ) -> None:
        ...


class DisplayBackend(Protocol):
    def size(self) -> Tuple[int, int]:
        ...

    def resize(self, width: int, height: int) -> None:
        ...

    def back(self) -> Canvas:
        ...

    def present(self) -> None:
        ...

    def paint(self, target: Any) -> None:
        ...

    def load_image(self, path: str) -> Any:
        ...

    def save(self, path: str) -> None:
        ...
