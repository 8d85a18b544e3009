"""Pygame-based double-buffered DisplayBackend with headless support.

All drawing lands on an offscreen *back* surface. ``present()`` replaces the
*front* surface with a complete copy of the back one; the window thread
only ever paints the front surface. Replacement and painting both happen
under a dedicated front lock, since pygame gives no guarantee that a
Surface can be swapped atomically while another thread blits from it.

It's suitable for deterministic, headless tests by setting the environment
variable SDL_VIDEODRIVER=dummy before importing pygame.

Example:
    import os
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    from algdraw.platform.display.pygame_backend import PygameDisplayBackend

    backend = PygameDisplayBackend(size=(320, 240))
    canvas = backend.back()
    canvas.clear((255, 255, 255, 255))
    canvas.line((10, 10), (310, 10), 2, (0, 0, 0, 255))
    backend.present()
    backend.save("/tmp/frame.png")
"""

from __future__ import annotations

import logging
import os
import threading
from math import radians
from typing import Any, Optional, Sequence, Tuple

import pygame as pg

from algdraw.errors import ResourceUnavailable
from algdraw.render.canvas import (
    Canvas,
    Color,
    DisplayBackend,
    PointF,
    RectF,
    TextAlign,
)
from algdraw.render.fonts import Font, FontCache
from algdraw.render.persist import save_frame

logger = logging.getLogger(__name__)

WHITE: Color = (255, 255, 255, 255)


def _pygame_color(c: Color) -> Tuple[int, int, int, int]:
    r, g, b, a = c
    return int(r), int(g), int(b), int(a)


def _ipt(p: PointF) -> Tuple[int, int]:
    return (int(round(p[0])), int(round(p[1])))


def _irect(rect: RectF) -> Any:
    left, top, w, h = rect
    return pg.Rect(
        int(round(left)), int(round(top)), max(1, int(round(w))), max(1, int(round(h)))
    )


class _PygameCanvas(Canvas):
    def __init__(self, backend: "PygameDisplayBackend") -> None:
        self._backend = backend

    @property
    def _surface(self) -> Any:
        # Looked up per call so a resize is picked up by existing handles
        return self._backend._back

    def clear(self, color: Color) -> None:
        self._surface.fill(_pygame_color(color))

    def pixel(self, p: Tuple[int, int], color: Color) -> None:
        # set_at ignores coordinates outside the surface
        self._surface.set_at((int(p[0]), int(p[1])), _pygame_color(color))

    def line(self, p0: PointF, p1: PointF, width: int, color: Color) -> None:
        pg.draw.line(
            self._surface, _pygame_color(color), _ipt(p0), _ipt(p1), max(1, width)
        )

    def ellipse(self, rect: RectF, width: int, color: Color) -> None:
        pg.draw.ellipse(self._surface, _pygame_color(color), _irect(rect), width)

    def arc(
        self, rect: RectF, start_deg: float, stop_deg: float, width: int, color: Color
    ) -> None:
        pg.draw.arc(
            self._surface,
            _pygame_color(color),
            _irect(rect),
            radians(start_deg),
            radians(stop_deg),
            max(1, width),
        )

    def rect(self, rect: RectF, width: int, color: Color) -> None:
        pg.draw.rect(self._surface, _pygame_color(color), _irect(rect), width)

    def polygon(self, pts: Sequence[PointF], width: int, color: Color) -> None:
        ipts = [_ipt(p) for p in pts]
        if not ipts:
            return
        if len(ipts) == 1:
            self.pixel(ipts[0], color)
            return
        if len(ipts) == 2:
            pg.draw.line(
                self._surface, _pygame_color(color), ipts[0], ipts[1], max(1, width)
            )
            return
        pg.draw.polygon(self._surface, _pygame_color(color), ipts, width)

    def image(
        self,
        img: Any,
        center: PointF,
        size: Optional[Tuple[int, int]] = None,
        degrees: float = 0.0,
    ) -> None:
        if size is not None:
            img = pg.transform.scale(img, (max(1, size[0]), max(1, size[1])))
        if degrees:
            # rotate() turns counterclockwise about the image's own center
            img = pg.transform.rotate(img, degrees)
        self._surface.blit(img, img.get_rect(center=_ipt(center)))

    def text(
        self,
        anchor: PointF,
        s: str,
        font: Font,
        color: Color,
        align: TextAlign = "center",
        degrees: float = 0.0,
    ) -> None:
        f = self._backend._fonts.get(font)
        # Antialiased rendering for consistent appearance
        surf = f.render(s, True, _pygame_color(color))
        box = surf.get_rect()
        if align == "left":
            box.midleft = _ipt(anchor)
        elif align == "right":
            box.midright = _ipt(anchor)
        else:
            box.center = _ipt(anchor)
        if degrees:
            surf = pg.transform.rotate(surf, degrees)
            box = surf.get_rect(center=box.center)
        self._surface.blit(surf, box)


class PygameDisplayBackend(DisplayBackend):
    """Back/front pygame surfaces with lock-guarded present and paint.

    Initializes pygame (headless when SDL_VIDEODRIVER is "dummy"). No window
    is created here; :class:`~algdraw.platform.display.window.PygameWindow`
    owns the on-screen side and calls :meth:`paint` from its own thread.
    """

    def __init__(self, size: Tuple[int, int] = (512, 512)) -> None:
        # Ensure headless if requested
        if os.environ.get("SDL_VIDEODRIVER") == "dummy":
            os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

        if not pg.get_init():
            pg.init()
        if not pg.font.get_init():
            pg.font.init()

        self._front_lock = threading.Lock()
        self._width, self._height = int(size[0]), int(size[1])
        self._back = self._new_surface()
        self._front = self._new_surface()
        self._fonts = FontCache(pg)
        self._canvas = _PygameCanvas(self)

    def _new_surface(self) -> Any:
        # SRCALPHA for per-pixel alpha; start opaque white
        surf = pg.Surface((self._width, self._height), flags=pg.SRCALPHA)
        surf.fill(WHITE)
        return surf

    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    def resize(self, width: int, height: int) -> None:
        self._width, self._height = int(width), int(height)
        self._back = self._new_surface()
        front = self._new_surface()
        with self._front_lock:
            self._front = front

    def back(self) -> Canvas:
        return self._canvas

    def present(self) -> None:
        frame = self._back.copy()
        with self._front_lock:
            self._front = frame

    def paint(self, target: Any) -> None:
        with self._front_lock:
            target.blit(self._front, (0, 0))

    def front_copy(self) -> Any:
        with self._front_lock:
            return self._front.copy()

    def front_bytes(self) -> bytes:
        with self._front_lock:
            return bytes(pg.image.tobytes(self._front, "RGBA"))

    def back_bytes(self) -> bytes:
        return bytes(pg.image.tobytes(self._back, "RGBA"))

    def front_at(self, x: int, y: int) -> Color:
        with self._front_lock:
            return tuple(self._front.get_at((x, y)))  # type: ignore[return-value]

    def back_at(self, x: int, y: int) -> Color:
        return tuple(self._back.get_at((x, y)))  # type: ignore[return-value]

    def load_image(self, path: str) -> Any:
        """Load an image file.

        Raises
        ------
        ResourceUnavailable
            If the file is missing or cannot be decoded.
        """
        try:
            return pg.image.load(path)
        except (OSError, pg.error) as e:
            raise ResourceUnavailable(str(path), str(e)) from e

    def save(self, path: str) -> None:
        # Encode outside the lock; the copy is a consistent presented frame
        save_frame(self.front_copy(), path)
        logger.debug("saved frame to %s", path)
