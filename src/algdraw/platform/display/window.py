"""On-screen window driven by its own event/paint thread.

The window thread owns the pygame display. Each iteration it:

1. pumps pygame events and translates them into ``InputEvent`` messages,
   posting them into the canvas's :class:`~algdraw.core.events.EventQueue`;
2. drains that queue into the input handler (listeners run here);
3. paints the backend's front buffer and flips the display;
4. sleeps until the next frame at the configured rate.

The application thread never touches the display; it only presents into the
front buffer and polls the input snapshots. SDL supports a single display
per process, so only the first window to start gets a real window; later
ones log a warning and leave their canvas offscreen.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Callable, Optional, Tuple

import pygame as pg

from algdraw.core.events import EventQueue, InputEvent
from algdraw.errors import ResourceUnavailable
from algdraw.platform.display.pygame_backend import PygameDisplayBackend
from algdraw.platform.input.pygame_input import PygameInputBackend, WindowCommand

logger = logging.getLogger(__name__)

_DISPLAY_LOCK = threading.Lock()
_display_owner: Optional["PygameWindow"] = None


def _claim_display(window: "PygameWindow") -> bool:
    global _display_owner
    with _DISPLAY_LOCK:
        if _display_owner is not None and _display_owner is not window:
            return False
        _display_owner = window
        return True


def _release_display(window: "PygameWindow") -> None:
    global _display_owner
    with _DISPLAY_LOCK:
        if _display_owner is window:
            _display_owner = None


class PygameWindow:
    """Host window for one canvas.

    Parameters
    ----------
    backend:
        Source of the front buffer to paint.
    events:
        Queue the translated events are posted into and drained from.
    deliver:
        Called on the window thread for every drained event.
    title:
        Window caption.
    fps:
        Paint/poll rate.
    on_save:
        Invoked on the window thread for the Ctrl+S shortcut.
    icon:
        Optional path to a window icon image.
    """

    def __init__(
        self,
        backend: PygameDisplayBackend,
        events: EventQueue,
        deliver: Callable[[InputEvent], None],
        *,
        title: str = "Draw",
        fps: float = 60.0,
        on_save: Optional[Callable[[], None]] = None,
        icon: Optional[str] = None,
    ) -> None:
        self._backend = backend
        self._events = events
        self._deliver = deliver
        self._title = title
        self._frame_ms = int(1000.0 / max(1.0, float(fps)))
        self._on_save = on_save
        self._icon = icon
        self._input = PygameInputBackend()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._location: Tuple[int, int] | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Launch the window thread; return False if another window owns SDL.

        Returns immediately without waiting for the first paint.
        """
        if self.running:
            return True
        if not _claim_display(self):
            logger.warning(
                "a display window is already open; %r stays offscreen", self._title
            )
            return False
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name=f"algdraw-window-{self._title}", daemon=True
        )
        self._thread.start()
        return True

    def stop(self) -> None:
        self._stop.set()
        t = self._thread
        if t is not None and t is not threading.current_thread():
            t.join()
        self._thread = None

    def set_location(self, x: int, y: int) -> None:
        # Applied on the window thread at the next frame
        self._location = (int(x), int(y))

    # --- thread body -----------------------------------------------------
    def _open(self, size: Tuple[int, int]) -> object:
        self._apply_location()
        screen = pg.display.set_mode(size)
        pg.display.set_caption(self._title)
        if self._icon:
            try:
                pg.display.set_icon(self._backend.load_image(self._icon))
            except (ResourceUnavailable, pg.error) as e:
                # Missing icon degrades to the default one
                logger.warning("window icon unavailable: %s", e)
        return screen

    def _run(self) -> None:
        try:
            pg.display.init()
            size = self._backend.size()
            screen = self._open(size)
            logger.info("window %r opened (%dx%d)", self._title, size[0], size[1])
        except pg.error:
            logger.exception("window creation failed; %r stays offscreen", self._title)
            _release_display(self)
            return
        try:
            while not self._stop.is_set():
                for item in self._input.pump():
                    if isinstance(item, WindowCommand):
                        if item.type == "quit":
                            self._stop.set()
                        elif item.type == "save" and self._on_save is not None:
                            self._on_save()
                        continue
                    self._events.post(item)
                try:
                    self._events.drain(self._deliver)
                except Exception:
                    logger.exception("listener raised while handling input")
                if self._location is not None or self._backend.size() != size:
                    size = self._backend.size()
                    screen = self._open(size)
                self._backend.paint(screen)
                pg.display.flip()
                pg.time.wait(self._frame_ms)
        finally:
            pg.display.quit()
            _release_display(self)
            logger.info("window %r closed", self._title)

    def _apply_location(self) -> None:
        # SDL reads the position hint when the display mode is (re)set
        if self._location is not None:
            x, y = self._location
            os.environ["SDL_VIDEO_WINDOW_POS"] = f"{x},{y}"
            self._location = None
