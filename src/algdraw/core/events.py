"""Thread-safe input event queue that coalesces pointer motion under backpressure.

The window thread translates host events into :class:`InputEvent` messages
and posts them here; the same thread later drains the queue into
:class:`~algdraw.core.input_capture.InputCapture`. Any thread may post
(tests and headless canvases post synthetic events directly).

Usage example:

    q = EventQueue(maxsize=256)
    q.post(InputEvent("press", 10.0, 20.0))
    q.drain(capture.handle)

Notes
-----
- When the queue is full the oldest pending ``move``/``drag`` event is
  dropped (and logged); press, release and key events are never dropped,
  so the queue may grow past ``maxsize`` while holding only transitions.
- ``drain`` delivers events outside the queue lock, in posting order.
- After ``close()`` posts are ignored and ``drain`` delivers what is left.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from time import monotonic
from typing import Callable, Deque, Literal

__all__ = ["InputEvent", "EventType", "EventQueue", "QueueMetrics", "COALESCABLE"]

logger = logging.getLogger(__name__)

EventType = Literal[
    "press", "release", "move", "drag", "key_typed", "key_down", "key_up"
]

# Event types that may be discarded when the queue is full
COALESCABLE = frozenset({"move", "drag"})


@dataclass(slots=True)
class InputEvent:
    type: EventType
    x: float = 0.0  # device pixels
    y: float = 0.0
    ts: float = 0.0
    key: int = 0  # physical key code for key_down/key_up
    char: str = ""  # typed character for key_typed
    button: int = 1  # 1 = left


@dataclass(slots=True)
class QueueMetrics:
    queue_len: int
    drops: int
    posts: int
    deliveries: int


class EventQueue:
    """FIFO of :class:`InputEvent` shared between threads, bounded for motion.

    Parameters
    ----------
    maxsize:
        Pending-event count above which motion events are dropped (min 1).
    """

    def __init__(self, *, maxsize: int = 1024) -> None:
        self._maxsize = max(1, int(maxsize))
        self._items: Deque[InputEvent] = deque()
        self._lock = threading.Lock()
        self._closed = False
        # metrics
        self._drops = 0
        self._posts = 0
        self._deliveries = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def post(self, event: InputEvent) -> None:
        """Append *event*; when full, first drop the oldest pending motion event."""
        if event.ts == 0.0:
            event.ts = monotonic()
        dropped: InputEvent | None = None
        with self._lock:
            if self._closed:
                return
            self._posts += 1
            if len(self._items) >= self._maxsize:
                dropped = self._drop_oldest_motion()
            self._items.append(event)
        if dropped is not None:
            logger.warning(
                "input queue full (%d); dropped %s event at (%.0f, %.0f)",
                self._maxsize,
                dropped.type,
                dropped.x,
                dropped.y,
            )

    def _drop_oldest_motion(self) -> InputEvent | None:
        # Only pointer motion is coalescable; transitions are never dropped
        for i, ev in enumerate(self._items):
            if ev.type in COALESCABLE:
                del self._items[i]
                self._drops += 1
                return ev
        return None

    def drain(self, deliver: Callable[[InputEvent], None]) -> int:
        """Deliver all pending events to *deliver*; return how many ran.

        Events posted while draining are left for the next call. An exception
        raised by *deliver* propagates; events after the failing one stay
        queued.
        """
        with self._lock:
            pending = len(self._items)
        delivered = 0
        for _ in range(pending):
            with self._lock:
                if not self._items:
                    break
                ev = self._items.popleft()
            deliver(ev)
            delivered += 1
            with self._lock:
                self._deliveries += 1
        return delivered

    def close(self) -> None:
        with self._lock:
            self._closed = True

    def metrics(self) -> QueueMetrics:
        with self._lock:
            return QueueMetrics(
                queue_len=len(self._items),
                drops=self._drops,
                posts=self._posts,
                deliveries=self._deliveries,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
