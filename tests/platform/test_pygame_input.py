from __future__ import annotations

import pygame as pg

from algdraw.core.events import InputEvent
from algdraw.platform.input.pygame_input import WindowCommand, translate


def test_mouse_events_translate() -> None:
    out = list(
        translate(
            [
                pg.event.Event(pg.MOUSEBUTTONDOWN, pos=(10, 20), button=1),
                pg.event.Event(pg.MOUSEMOTION, pos=(11, 21), rel=(1, 1), buttons=(1, 0, 0)),
                pg.event.Event(pg.MOUSEMOTION, pos=(12, 22), rel=(1, 1), buttons=(0, 0, 0)),
                pg.event.Event(pg.MOUSEBUTTONUP, pos=(12, 22), button=3),
            ]
        )
    )
    assert [(e.type, e.x, e.y) for e in out] == [  # type: ignore[union-attr]
        ("press", 10.0, 20.0),
        ("drag", 11.0, 21.0),
        ("move", 12.0, 22.0),
        ("release", 12.0, 22.0),
    ]
    assert out[-1].button == 3  # type: ignore[union-attr]
    assert all(e.ts == 0.0 for e in out)  # type: ignore[union-attr]


def test_wheel_buttons_are_skipped() -> None:
    out = list(
        translate(
            [
                pg.event.Event(pg.MOUSEBUTTONDOWN, pos=(0, 0), button=4),
                pg.event.Event(pg.MOUSEBUTTONUP, pos=(0, 0), button=5),
            ]
        )
    )
    assert out == []


def test_printable_key_yields_down_and_typed() -> None:
    out = list(
        translate(
            [
                pg.event.Event(pg.KEYDOWN, key=pg.K_a, mod=0, unicode="a"),
                pg.event.Event(pg.KEYUP, key=pg.K_a, mod=0),
            ]
        )
    )
    assert out == [
        InputEvent("key_down", key=pg.K_a),
        InputEvent("key_typed", char="a"),
        InputEvent("key_up", key=pg.K_a),
    ]


def test_non_printable_key_is_not_typed() -> None:
    out = list(translate([pg.event.Event(pg.KEYDOWN, key=pg.K_LSHIFT, mod=0, unicode="")]))
    assert out == [InputEvent("key_down", key=pg.K_LSHIFT)]


def test_window_commands() -> None:
    out = list(
        translate(
            [
                pg.event.Event(pg.KEYDOWN, key=pg.K_s, mod=pg.KMOD_LCTRL, unicode="\x13"),
                pg.event.Event(pg.QUIT),
            ]
        )
    )
    assert out == [WindowCommand("save"), WindowCommand("quit")]


def test_enter_backspace_and_tab_are_typed() -> None:
    keys = [(pg.K_RETURN, "\r"), (pg.K_BACKSPACE, "\b"), (pg.K_TAB, "\t")]
    out = list(
        translate(pg.event.Event(pg.KEYDOWN, key=k, mod=0, unicode=u) for k, u in keys)
    )
    typed = [e.char for e in out if isinstance(e, InputEvent) and e.type == "key_typed"]
    assert typed == ["\r", "\b", "\t"]


def test_other_control_characters_are_not_typed() -> None:
    out = list(translate([pg.event.Event(pg.KEYDOWN, key=pg.K_ESCAPE, mod=0, unicode="\x1b")]))
    assert out == [InputEvent("key_down", key=pg.K_ESCAPE)]
