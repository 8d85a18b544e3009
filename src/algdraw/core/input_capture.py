"""Pollable mouse/keyboard state bridged from the window's event thread.

Pointer and keyboard events arrive on the thread that owns the window. Each
handler updates a lock-guarded snapshot and, for the meaningful gestures
(press, drag, release, typed character), notifies registered listeners
after the lock has been released. Listeners run synchronously on the
delivering thread, in registration order: a listener that blocks stalls
further event delivery, and an exception raised by a listener propagates
to the delivering thread.

Plain pointer motion only updates the coordinates; it never notifies
listeners. Typed characters form a most-recent-first queue: the last key
typed is the first one returned by :meth:`InputCapture.next_key_typed`.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Deque, List, Protocol, Set, Tuple, runtime_checkable

from algdraw.core.events import InputEvent
from algdraw.errors import InvalidArgument, NoKeyTyped

__all__ = ["DrawListener", "InputCapture"]

LEFT_BUTTON = 1


@runtime_checkable
class DrawListener(Protocol):
    """Callbacks invoked on pointer and keyboard gestures (user coordinates)."""

    def mouse_pressed(self, x: float, y: float) -> None:
        ...

    def mouse_dragged(self, x: float, y: float) -> None:
        ...

    def mouse_released(self, x: float, y: float) -> None:
        ...

    def key_typed(self, c: str) -> None:
        ...


class InputCapture:
    """Lock-guarded mouse and key snapshots plus listener fan-out.

    Parameters
    ----------
    to_user:
        Maps device pixels to user coordinates, evaluated at event time.
    """

    def __init__(self, to_user: Callable[[float, float], Tuple[float, float]]) -> None:
        self._to_user = to_user
        # Independent locks so key traffic never contends with mouse traffic
        self._mouse_lock = threading.Lock()
        self._key_lock = threading.Lock()
        self._mouse_pressed = False
        self._mouse_x = 0.0
        self._mouse_y = 0.0
        self._keys_typed: Deque[str] = deque()
        self._keys_down: Set[int] = set()
        self._listeners: List[DrawListener] = []

    # --- listeners -------------------------------------------------------
    def add_listener(self, listener: DrawListener) -> None:
        if listener is None:
            raise InvalidArgument("listener must not be None")
        self._listeners.append(listener)

    def listeners(self) -> List[DrawListener]:
        return list(self._listeners)

    # --- polling (application thread) ------------------------------------
    def mouse_down(self) -> bool:
        with self._mouse_lock:
            return self._mouse_pressed

    def mouse_x(self) -> float:
        with self._mouse_lock:
            return self._mouse_x

    def mouse_y(self) -> float:
        with self._mouse_lock:
            return self._mouse_y

    def has_next_key_typed(self) -> bool:
        with self._key_lock:
            return len(self._keys_typed) != 0

    def next_key_typed(self) -> str:
        """Pop the most recently typed character.

        Raises
        ------
        NoKeyTyped
            If no typed character is pending.
        """
        with self._key_lock:
            if not self._keys_typed:
                raise NoKeyTyped("no key typed")
            return self._keys_typed.popleft()

    def is_key_pressed(self, code: int) -> bool:
        with self._key_lock:
            return code in self._keys_down

    # --- delivery (event thread) -----------------------------------------
    def handle(self, ev: InputEvent) -> None:
        """Dispatch a translated host event to the matching handler."""
        if ev.type == "press":
            self.on_press(ev.x, ev.y, ev.button)
        elif ev.type == "release":
            self.on_release(ev.x, ev.y, ev.button)
        elif ev.type == "move":
            self.on_move(ev.x, ev.y)
        elif ev.type == "drag":
            self.on_drag(ev.x, ev.y)
        elif ev.type == "key_typed":
            self.on_key_typed(ev.char)
        elif ev.type == "key_down":
            self.on_key_down(ev.key)
        elif ev.type == "key_up":
            self.on_key_up(ev.key)
        else:
            raise ValueError(f"unknown input event type: {ev.type!r}")

    def on_press(self, px: float, py: float, button: int = LEFT_BUTTON) -> None:
        ux, uy = self._to_user(px, py)
        with self._mouse_lock:
            self._mouse_x = ux
            self._mouse_y = uy
            self._mouse_pressed = True
        if button == LEFT_BUTTON:
            for listener in list(self._listeners):
                listener.mouse_pressed(ux, uy)

    def on_release(self, px: float, py: float, button: int = LEFT_BUTTON) -> None:
        ux, uy = self._to_user(px, py)
        with self._mouse_lock:
            self._mouse_pressed = False
        if button == LEFT_BUTTON:
            for listener in list(self._listeners):
                listener.mouse_released(ux, uy)

    def on_drag(self, px: float, py: float) -> None:
        ux, uy = self._to_user(px, py)
        with self._mouse_lock:
            self._mouse_x = ux
            self._mouse_y = uy
        for listener in list(self._listeners):
            listener.mouse_dragged(ux, uy)

    def on_move(self, px: float, py: float) -> None:
        ux, uy = self._to_user(px, py)
        with self._mouse_lock:
            self._mouse_x = ux
            self._mouse_y = uy

    def on_key_typed(self, c: str) -> None:
        with self._key_lock:
            self._keys_typed.appendleft(c)
        for listener in list(self._listeners):
            listener.key_typed(c)

    def on_key_down(self, code: int) -> None:
        with self._key_lock:
            self._keys_down.add(int(code))

    def on_key_up(self, code: int) -> None:
        with self._key_lock:
            self._keys_down.discard(int(code))
