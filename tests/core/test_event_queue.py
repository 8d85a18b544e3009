from __future__ import annotations

import logging

import pytest

from algdraw.core.events import EventQueue, InputEvent
from algdraw.draw import DrawCanvas


def test_drain_delivers_in_posting_order() -> None:
    q = EventQueue()
    for i in range(3):
        q.post(InputEvent("move", float(i), 0.0))
    seen: list[float] = []
    assert q.drain(lambda ev: seen.append(ev.x)) == 3
    assert seen == [0.0, 1.0, 2.0]
    assert len(q) == 0


def test_post_stamps_missing_timestamp() -> None:
    q = EventQueue()
    ev = InputEvent("press")
    q.post(ev)
    assert ev.ts > 0.0
    kept = InputEvent("press", ts=12.5)
    q.post(kept)
    assert kept.ts == 12.5


def test_full_queue_drops_oldest_motion_only(caplog: pytest.LogCaptureFixture) -> None:
    q = EventQueue(maxsize=3)
    q.post(InputEvent("move", 0.0))
    q.post(InputEvent("key_down", key=65))
    q.post(InputEvent("move", 1.0))
    with caplog.at_level(logging.WARNING, logger="algdraw"):
        q.post(InputEvent("key_up", key=65))
    assert "dropped move" in caplog.text
    seen: list[tuple[str, float]] = []
    q.drain(lambda ev: seen.append((ev.type, ev.x)))
    assert seen == [("key_down", 0.0), ("move", 1.0), ("key_up", 0.0)]
    m = q.metrics()
    assert m.drops == 1
    assert m.posts == 4
    assert m.deliveries == 3


def test_transitions_survive_overflow() -> None:
    q = EventQueue(maxsize=2)
    for kind in ("press", "key_down", "key_up", "release"):
        q.post(InputEvent(kind))  # type: ignore[arg-type]
    assert len(q) == 4
    assert q.metrics().drops == 0


def test_key_up_survives_motion_flood_on_canvas(canvas: DrawCanvas) -> None:
    canvas.post_event(InputEvent("key_down", key=65))
    canvas.pump_events()
    assert canvas.is_key_pressed(65)
    canvas.post_event(InputEvent("press", 10.0, 10.0))
    canvas.post_event(InputEvent("key_up", key=65))
    canvas.post_event(InputEvent("release", 10.0, 10.0))
    for i in range(2000):
        canvas.post_event(InputEvent("move", float(i % 64), 5.0))
    canvas.pump_events()
    assert not canvas.is_key_pressed(65)
    assert not canvas.mouse_down()


def test_events_posted_during_drain_wait_for_next_call() -> None:
    q = EventQueue()
    q.post(InputEvent("press"))

    def deliver(ev: InputEvent) -> None:
        q.post(InputEvent("release"))

    assert q.drain(deliver) == 1
    assert len(q) == 1


def test_delivery_error_leaves_later_events_queued() -> None:
    q = EventQueue()
    q.post(InputEvent("press"))
    q.post(InputEvent("release"))

    def deliver(ev: InputEvent) -> None:
        raise RuntimeError(ev.type)

    with pytest.raises(RuntimeError, match="press"):
        q.drain(deliver)
    assert len(q) == 1


def test_close_ignores_new_posts_but_drains_pending() -> None:
    q = EventQueue()
    q.post(InputEvent("press"))
    q.close()
    q.post(InputEvent("release"))
    assert q.closed
    seen: list[str] = []
    q.drain(lambda ev: seen.append(ev.type))
    assert seen == ["press"]
