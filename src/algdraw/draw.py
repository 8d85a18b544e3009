"""User-coordinate drawing canvas with explicit defer/present semantics.

``DrawCanvas`` ties together the coordinate mapper, the double-buffered
pygame backend, the pen state, the input snapshots and (optionally) an
on-screen window running on its own thread.

Rendering model
---------------
Every primitive draws into the back buffer and then presents unless the
canvas is deferred. Presenting copies the whole back buffer into the front
buffer, so the window (and ``save``) always sees a complete frame.

- ``show()`` switches to immediate mode and presents.
- ``show(ms)`` presents, blocks the caller for ``ms`` milliseconds, then
  switches to deferred mode; subsequent draws accumulate silently until
  the next ``show``.

Typical animation loop::

    canvas = DrawCanvas("bouncing ball")
    canvas.set_scale(-1.0, 1.0)
    while True:
        canvas.clear()
        canvas.filled_circle(x, y, 0.05)
        canvas.show(20)

Primitives whose mapped size is at most one device pixel in both
directions draw exactly one pixel at the mapped center, clamped onto the
canvas when it falls exactly on the right or bottom edge. Negative sizes are
rejected with :class:`~algdraw.errors.InvalidArgument` before anything is
drawn.
"""

from __future__ import annotations

import logging
import re
import threading
import time
from math import ceil
from pathlib import Path
from typing import Sequence, Tuple

from algdraw.core.coords import DEFAULT_SIZE, CoordinateMapper, Viewport
from algdraw.core.events import EventQueue, InputEvent
from algdraw.core.input_capture import DrawListener, InputCapture
from algdraw.errors import (
    ConfigurationError,
    InvalidArgument,
    ResourceUnavailable,
    UnsupportedFormat,
)
from algdraw.platform.display.pygame_backend import PygameDisplayBackend
from algdraw.platform.display.window import PygameWindow
from algdraw.render.canvas import Color, PointF, TextAlign
from algdraw.render.fonts import Font
from algdraw.settings.schema import Settings
from algdraw.settings.store import SettingsStore
from algdraw.settings.values import COLORS, named_color

logger = logging.getLogger(__name__)

__all__ = ["DrawCanvas"]


def _check_nonnegative(name: str, value: float) -> None:
    if value < 0:
        raise InvalidArgument(f"{name} must be nonnegative: {value}")


def _check_component(name: str, value: int) -> int:
    if not isinstance(value, int) or value < 0 or value >= 256:
        raise InvalidArgument(f"amount of {name} must be between 0 and 255")
    return value


def _as_color(color: object) -> Color:
    if color is None:
        raise InvalidArgument("color must not be None")
    if isinstance(color, str):
        try:
            return named_color(color)
        except KeyError:
            raise InvalidArgument(f"unknown color name: {color!r}") from None
    if isinstance(color, (tuple, list)) and len(color) in (3, 4):
        names = ("red", "green", "blue", "alpha")
        comps = [_check_component(n, c) for n, c in zip(names, color)]
        if len(comps) == 3:
            comps.append(255)
        return (comps[0], comps[1], comps[2], comps[3])
    raise InvalidArgument(f"not a color: {color!r}")


class DrawCanvas:
    """A windowed drawing canvas addressed in user coordinates.

    Parameters
    ----------
    name:
        Window title; defaults to the settings title ("Draw").
    settings:
        Canvas defaults (size, scales, pen, font, fps). Built-in defaults when
        omitted; pass :meth:`SettingsStore.load` to use persisted ones.
    show_window:
        Start the window thread. ``False`` keeps the canvas offscreen; input
        can still be posted to :attr:`events` and applied with
        :meth:`pump_events`.
    icon:
        Optional window icon path. A missing icon is logged and ignored.
    """

    BLACK: Color = COLORS["black"]
    BLUE: Color = COLORS["blue"]
    CYAN: Color = COLORS["cyan"]
    DARK_GRAY: Color = COLORS["dark_gray"]
    GRAY: Color = COLORS["gray"]
    GREEN: Color = COLORS["green"]
    LIGHT_GRAY: Color = COLORS["light_gray"]
    MAGENTA: Color = COLORS["magenta"]
    ORANGE: Color = COLORS["orange"]
    PINK: Color = COLORS["pink"]
    RED: Color = COLORS["red"]
    WHITE: Color = COLORS["white"]
    YELLOW: Color = COLORS["yellow"]
    BOOK_BLUE: Color = COLORS["book_blue"]
    BOOK_LIGHT_BLUE: Color = COLORS["book_light_blue"]
    BOOK_RED: Color = COLORS["book_red"]

    def __init__(
        self,
        name: str | None = None,
        *,
        settings: Settings | None = None,
        show_window: bool = True,
        icon: str | None = None,
    ) -> None:
        self._settings = settings if settings is not None else Settings()
        s = self._settings
        self._name = name if name is not None else s.title
        self._mapper = CoordinateMapper(
            Viewport(width_px=s.width_px, height_px=s.height_px), border=s.border
        )
        self._backend = PygameDisplayBackend((s.width_px, s.height_px))
        # Serializes back-buffer mutation and present across threads; a
        # listener may draw from the window thread while the app thread draws.
        self._render_lock = threading.RLock()
        self._defer = False
        self._pen_color: Color = s.pen_color
        self._pen_radius = s.pen_radius
        self._font = Font(s.font_family, s.font_size_px)
        self._capture = InputCapture(self._mapper.to_user)
        self._events = EventQueue()
        self._reset()
        self._window = PygameWindow(
            self._backend,
            self._events,
            self._capture.handle,
            title=self._name,
            fps=s.window_fps,
            on_save=self._save_shortcut,
            icon=icon,
        )
        if show_window:
            self._window.start()

    def _reset(self) -> None:
        s = self._settings
        self._mapper.set_x_scale(s.x_min, s.x_max)
        self._mapper.set_y_scale(s.y_min, s.y_max)
        self.set_pen_color()
        self.set_pen_radius()
        self.set_font()
        self.clear()

    # --- properties --------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def mapper(self) -> CoordinateMapper:
        return self._mapper

    @property
    def backend(self) -> PygameDisplayBackend:
        return self._backend

    @property
    def events(self) -> EventQueue:
        return self._events

    @property
    def is_deferred(self) -> bool:
        return self._defer

    @property
    def window_open(self) -> bool:
        return self._window.running

    # --- window ------------------------------------------------------------
    def set_location_on_screen(self, x: int, y: int) -> None:
        self._window.set_location(x, y)

    def set_canvas_size(self, width: int | None = None, height: int | None = None) -> None:
        """Resize the canvas and reset scales, pen and font to their defaults.

        Raises
        ------
        ConfigurationError
            If either dimension is less than 1.
        """
        w = self._settings.width_px if width is None else int(width)
        h = self._settings.height_px if height is None else int(height)
        if w < 1 or h < 1:
            raise ConfigurationError("width and height must be positive")
        with self._render_lock:
            self._mapper.resize(w, h)
            self._backend.resize(w, h)
            self._reset()

    def close(self) -> None:
        """Stop the window thread; the canvas keeps working offscreen."""
        self._window.stop()
        self._events.close()

    # --- scales ------------------------------------------------------------
    def set_x_scale(self, x_min: float = 0.0, x_max: float = 1.0) -> None:
        self._mapper.set_x_scale(x_min, x_max)

    def set_y_scale(self, y_min: float = 0.0, y_max: float = 1.0) -> None:
        self._mapper.set_y_scale(y_min, y_max)

    def set_scale(self, lo: float = 0.0, hi: float = 1.0) -> None:
        self._mapper.set_scale(lo, hi)

    # --- pen -----------------------------------------------------------------
    def get_pen_radius(self) -> float:
        return self._pen_radius

    def set_pen_radius(self, r: float | None = None) -> None:
        r = self._settings.pen_radius if r is None else float(r)
        if r < 0:
            raise InvalidArgument("pen radius must be nonnegative")
        self._pen_radius = r

    def get_pen_color(self) -> Color:
        return self._pen_color

    def set_pen_color(self, *args: object) -> None:
        """Set the pen color.

        ``set_pen_color()`` restores the default, ``set_pen_color(color)``
        takes an RGB(A) tuple or a color name, ``set_pen_color(r, g, b)``
        takes three components in 0..255.
        """
        if not args:
            self._pen_color = self._settings.pen_color
        elif len(args) == 1:
            self._pen_color = _as_color(args[0])
        elif len(args) == 3:
            r, g, b = args
            self._pen_color = (
                _check_component("red", r),  # type: ignore[arg-type]
                _check_component("green", g),  # type: ignore[arg-type]
                _check_component("blue", b),  # type: ignore[arg-type]
                255,
            )
        else:
            raise InvalidArgument("set_pen_color takes a color or (red, green, blue)")

    def get_font(self) -> Font:
        return self._font

    def set_font(self, font: Font | None = None) -> None:
        if font is None:
            font = Font(self._settings.font_family, self._settings.font_size_px)
        self._font = font

    # --- defer/present -----------------------------------------------------
    def show(self, duration_ms: int | None = None) -> None:
        """Present the back buffer.

        Without an argument, switch to immediate mode. With ``duration_ms``,
        present, block for that many milliseconds, then defer further draws.
        """
        if duration_ms is not None and duration_ms < 0:
            raise InvalidArgument(f"duration must be nonnegative: {duration_ms}")
        self._defer = False
        self._present()
        if duration_ms is not None:
            time.sleep(duration_ms / 1000.0)
            self._defer = True

    def _present(self) -> None:
        with self._render_lock:
            self._backend.present()

    def _draw_done(self) -> None:
        if not self._defer:
            self._present()

    def clear(self, color: object = None) -> None:
        c = self._settings.clear_color if color is None else _as_color(color)
        with self._render_lock:
            self._backend.back().clear(c)
            self._draw_done()

    # --- helpers -------------------------------------------------------------
    def _stroke(self) -> int:
        return max(1, int(round(self._pen_radius * DEFAULT_SIZE)))

    def _pixel(self, xs: float, ys: float) -> None:
        # The right/bottom viewport edge maps to W/H; pull it onto the last
        # pixel. Points beyond the viewport stay off-canvas.
        w, h = self._backend.size()
        px, py = int(round(xs)), int(round(ys))
        if 0 <= xs <= w:
            px = min(px, w - 1)
        if 0 <= ys <= h:
            py = min(py, h - 1)
        self._backend.back().pixel((px, py), self._pen_color)

    def _box(
        self, x: float, y: float, w: float, h: float
    ) -> Tuple[float, float, float, float]:
        """Map a user-space box centered at (x, y) with size (w, h)."""
        xs, ys = self._mapper.to_device(x, y)
        ws = self._mapper.scale_length(w, "x")
        hs = self._mapper.scale_length(h, "y")
        return xs, ys, ws, hs

    def _shape(self, x: float, y: float, w: float, h: float, kind: str, fill: bool) -> None:
        xs, ys, ws, hs = self._box(x, y, w, h)
        with self._render_lock:
            if ws <= 1 and hs <= 1:
                self._pixel(xs, ys)
            else:
                rect = (xs - ws / 2, ys - hs / 2, ws, hs)
                width = 0 if fill else self._stroke()
                back = self._backend.back()
                if kind == "ellipse":
                    back.ellipse(rect, width, self._pen_color)
                else:
                    back.rect(rect, width, self._pen_color)
            self._draw_done()

    # --- primitives ----------------------------------------------------------
    def point(self, x: float, y: float) -> None:
        """Draw a dot of the pen's diameter, or a single pixel if that is <= 1."""
        xs, ys = self._mapper.to_device(x, y)
        d = self._pen_radius * DEFAULT_SIZE
        with self._render_lock:
            if d <= 1:
                self._pixel(xs, ys)
            else:
                self._backend.back().ellipse(
                    (xs - d / 2, ys - d / 2, d, d), 0, self._pen_color
                )
            self._draw_done()

    def line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        p0 = self._mapper.to_device(x0, y0)
        p1 = self._mapper.to_device(x1, y1)
        with self._render_lock:
            if abs(p1[0] - p0[0]) <= 1 and abs(p1[1] - p0[1]) <= 1:
                self._pixel((p0[0] + p1[0]) / 2, (p0[1] + p1[1]) / 2)
            else:
                self._backend.back().line(p0, p1, self._stroke(), self._pen_color)
            self._draw_done()

    def circle(self, x: float, y: float, r: float) -> None:
        _check_nonnegative("circle radius", r)
        self._shape(x, y, 2 * r, 2 * r, "ellipse", fill=False)

    def filled_circle(self, x: float, y: float, r: float) -> None:
        _check_nonnegative("circle radius", r)
        self._shape(x, y, 2 * r, 2 * r, "ellipse", fill=True)

    def ellipse(self, x: float, y: float, semi_major: float, semi_minor: float) -> None:
        _check_nonnegative("ellipse semimajor axis", semi_major)
        _check_nonnegative("ellipse semiminor axis", semi_minor)
        self._shape(x, y, 2 * semi_major, 2 * semi_minor, "ellipse", fill=False)

    def filled_ellipse(
        self, x: float, y: float, semi_major: float, semi_minor: float
    ) -> None:
        _check_nonnegative("ellipse semimajor axis", semi_major)
        _check_nonnegative("ellipse semiminor axis", semi_minor)
        self._shape(x, y, 2 * semi_major, 2 * semi_minor, "ellipse", fill=True)

    def arc(self, x: float, y: float, r: float, angle1: float, angle2: float) -> None:
        """Draw a circular arc from *angle1* to *angle2*, degrees counterclockwise.

        An end angle smaller than the start wraps around by whole turns.
        """
        _check_nonnegative("arc radius", r)
        if angle2 < angle1:
            angle2 += 360.0 * ceil((angle1 - angle2) / 360.0)
        xs, ys, ws, hs = self._box(x, y, 2 * r, 2 * r)
        with self._render_lock:
            if ws <= 1 and hs <= 1:
                self._pixel(xs, ys)
            else:
                self._backend.back().arc(
                    (xs - ws / 2, ys - hs / 2, ws, hs),
                    angle1,
                    angle2,
                    self._stroke(),
                    self._pen_color,
                )
            self._draw_done()

    def square(self, x: float, y: float, half_length: float) -> None:
        _check_nonnegative("square side length", half_length)
        self._shape(x, y, 2 * half_length, 2 * half_length, "rect", fill=False)

    def filled_square(self, x: float, y: float, half_length: float) -> None:
        _check_nonnegative("square side length", half_length)
        self._shape(x, y, 2 * half_length, 2 * half_length, "rect", fill=True)

    def rectangle(self, x: float, y: float, half_width: float, half_height: float) -> None:
        _check_nonnegative("half width", half_width)
        _check_nonnegative("half height", half_height)
        self._shape(x, y, 2 * half_width, 2 * half_height, "rect", fill=False)

    def filled_rectangle(
        self, x: float, y: float, half_width: float, half_height: float
    ) -> None:
        _check_nonnegative("half width", half_width)
        _check_nonnegative("half height", half_height)
        self._shape(x, y, 2 * half_width, 2 * half_height, "rect", fill=True)

    def polygon(self, x: Sequence[float], y: Sequence[float]) -> None:
        self._polygon(x, y, fill=False)

    def filled_polygon(self, x: Sequence[float], y: Sequence[float]) -> None:
        self._polygon(x, y, fill=True)

    def _polygon(self, x: Sequence[float], y: Sequence[float], fill: bool) -> None:
        if x is None or y is None:
            raise InvalidArgument("polygon coordinates must not be None")
        if len(x) != len(y):
            raise InvalidArgument("polygon x and y must have the same length")
        if len(x) == 0:
            raise InvalidArgument("polygon needs at least one vertex")
        pts: list[PointF] = [self._mapper.to_device(a, b) for a, b in zip(x, y)]
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        with self._render_lock:
            if max(xs) - min(xs) <= 1 and max(ys) - min(ys) <= 1:
                self._pixel(pts[0][0], pts[0][1])
            else:
                width = 0 if fill else self._stroke()
                self._backend.back().polygon(pts, width, self._pen_color)
            self._draw_done()

    # --- images --------------------------------------------------------------
    def picture(
        self,
        x: float,
        y: float,
        path: str,
        w: float | None = None,
        h: float | None = None,
        degrees: float = 0.0,
    ) -> None:
        """Draw the image at *path* centered on (x, y).

        With *w* and *h* (user units) the image is scaled to that size;
        *degrees* rotates it counterclockwise about its center. A missing or
        unreadable file is logged and nothing is drawn.
        """
        if path is None:
            raise InvalidArgument("image path must not be None")
        if (w is None) != (h is None):
            raise InvalidArgument("picture needs both width and height, or neither")
        if w is not None and h is not None:
            _check_nonnegative("width", w)
            _check_nonnegative("height", h)
        try:
            img = self._backend.load_image(str(path))
        except ResourceUnavailable as e:
            logger.warning("%s", e)
            return
        xs, ys = self._mapper.to_device(x, y)
        with self._render_lock:
            if w is not None and h is not None:
                ws = self._mapper.scale_length(w, "x")
                hs = self._mapper.scale_length(h, "y")
                if ws <= 1 and hs <= 1:
                    self._pixel(xs, ys)
                else:
                    size = (int(round(ws)), int(round(hs)))
                    self._backend.back().image(img, (xs, ys), size, degrees)
            else:
                self._backend.back().image(img, (xs, ys), None, degrees)
            self._draw_done()

    # --- text ----------------------------------------------------------------
    def _text(self, x: float, y: float, s: str, align: TextAlign, degrees: float) -> None:
        if s is None:
            raise InvalidArgument("text must not be None")
        anchor = self._mapper.to_device(x, y)
        with self._render_lock:
            self._backend.back().text(
                anchor, str(s), self._font, self._pen_color, align, degrees
            )
            self._draw_done()

    def text(self, x: float, y: float, s: str, degrees: float = 0.0) -> None:
        """Draw *s* centered on (x, y), optionally rotated about its center."""
        self._text(x, y, s, "center", degrees)

    def text_left(self, x: float, y: float, s: str, degrees: float = 0.0) -> None:
        """Draw *s* left-aligned at (x, y), vertically centered."""
        self._text(x, y, s, "left", degrees)

    def text_right(self, x: float, y: float, s: str, degrees: float = 0.0) -> None:
        """Draw *s* right-aligned at (x, y), vertically centered."""
        self._text(x, y, s, "right", degrees)

    # --- persistence ---------------------------------------------------------
    def save(self, path: str) -> bool:
        """Write the last presented frame to *path* (``.png`` or ``.jpg``).

        Returns True when the file was written. An unsupported extension or
        an I/O failure is logged and the write is skipped.
        """
        if path is None:
            raise InvalidArgument("file name must not be None")
        try:
            self._backend.save(str(path))
        except UnsupportedFormat as e:
            logger.warning("%s", e)
            return False
        except ResourceUnavailable as e:
            logger.warning("save failed: %s", e)
            return False
        return True

    def default_save_path(self) -> Path:
        base = self._settings.save_dir
        folder = Path(base).expanduser() if base else SettingsStore.settings_path().parent
        stem = re.sub(r"[^A-Za-z0-9_.-]+", "_", self._name).strip("._") or "draw"
        return folder / f"{stem}.png"

    def _save_shortcut(self) -> None:
        path = self.default_save_path()
        if self.save(str(path)):
            logger.info("saved %s", path)

    # --- input ---------------------------------------------------------------
    def add_listener(self, listener: DrawListener) -> None:
        """Register *listener* for press/drag/release/key-typed callbacks.

        Also presents, so a window showing the current drawing is there to
        receive the events. Listeners cannot be removed.
        """
        self.show()
        self._capture.add_listener(listener)

    def post_event(self, event: InputEvent) -> None:
        self._events.post(event)

    def pump_events(self) -> int:
        """Apply queued input events on the calling thread (offscreen canvases)."""
        return self._events.drain(self._capture.handle)

    def mouse_down(self) -> bool:
        return self._capture.mouse_down()

    def mouse_x(self) -> float:
        return self._capture.mouse_x()

    def mouse_y(self) -> float:
        return self._capture.mouse_y()

    def has_next_key_typed(self) -> bool:
        return self._capture.has_next_key_typed()

    def next_key_typed(self) -> str:
        return self._capture.next_key_typed()

    def is_key_pressed(self, code: int) -> bool:
        return self._capture.is_key_pressed(code)

