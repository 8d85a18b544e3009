"""Translate pygame events into :class:`~algdraw.core.events.InputEvent`.

Runs on the window thread: ``pump()`` must be called from the thread that
created the display, since SDL delivers events to that thread only. Mouse
motion with the left button held becomes a ``drag``; otherwise ``move``.
A key press yields ``key_down`` and, when it produces a printable
character (or Enter, Backspace, Tab), a ``key_typed`` as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generator, Iterable

import pygame as pg

from algdraw.core.events import InputEvent

# Enter, Backspace and Tab are delivered as typed characters too
TYPED_CONTROLS = ("\r", "\b", "\t")


@dataclass(slots=True)
class WindowCommand:
    type: str  # "quit" | "save"


def translate(events: Iterable[Any]) -> Generator[InputEvent | WindowCommand, None, None]:
    """Yield input events (and window commands) for a batch of pygame events."""
    for ev in events:
        if ev.type == pg.QUIT:
            yield WindowCommand("quit")
        elif ev.type == pg.MOUSEBUTTONDOWN:
            if ev.button in (4, 5):  # wheel on pygame 1-style backends
                continue
            yield InputEvent(
                "press", float(ev.pos[0]), float(ev.pos[1]), button=int(ev.button)
            )
        elif ev.type == pg.MOUSEBUTTONUP:
            if ev.button in (4, 5):
                continue
            yield InputEvent(
                "release", float(ev.pos[0]), float(ev.pos[1]), button=int(ev.button)
            )
        elif ev.type == pg.MOUSEMOTION:
            kind = "drag" if ev.buttons and ev.buttons[0] else "move"
            yield InputEvent(kind, float(ev.pos[0]), float(ev.pos[1]))
        elif ev.type == pg.KEYDOWN:
            if ev.key == pg.K_s and ev.mod & pg.KMOD_CTRL:
                yield WindowCommand("save")
                continue
            yield InputEvent("key_down", key=int(ev.key))
            ch = getattr(ev, "unicode", "")
            if ch and (ch.isprintable() or ch in TYPED_CONTROLS):
                yield InputEvent("key_typed", char=ch)
        elif ev.type == pg.KEYUP:
            yield InputEvent("key_up", key=int(ev.key))


class PygameInputBackend:
    """Collects pygame events from the display's event queue.

    Use pump() in the window loop. In headless mode (dummy video), pygame
    may not deliver events; tests can synthesize by posting events.
    """

    def pump(self) -> Generator[InputEvent | WindowCommand, None, None]:
        yield from translate(pg.event.get())
