from __future__ import annotations

import os

# Headless SDL before anything imports pygame
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from pathlib import Path  # noqa: E402
from typing import Callable, Iterator  # noqa: E402

import pytest  # noqa: E402

from algdraw.draw import DrawCanvas  # noqa: E402
from algdraw.settings.schema import Settings  # noqa: E402

WHITE = (255, 255, 255, 255)


@pytest.fixture(autouse=True)
def algdraw_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    monkeypatch.setenv("ALGDRAW_HOME", str(home))
    return home


@pytest.fixture
def make_canvas() -> Iterator[Callable[..., DrawCanvas]]:
    made: list[DrawCanvas] = []

    def _make(width: int = 64, height: int = 64, **kwargs: object) -> DrawCanvas:
        settings = Settings(width_px=width, height_px=height)
        c = DrawCanvas("test", settings=settings, show_window=False, **kwargs)  # type: ignore[arg-type]
        made.append(c)
        return c

    yield _make
    for c in made:
        c.close()


@pytest.fixture
def canvas(make_canvas: Callable[..., DrawCanvas]) -> DrawCanvas:
    return make_canvas()


def changed_pixels(data: bytes, background: tuple[int, int, int, int] = WHITE) -> int:
    """Count RGBA pixels in *data* that differ from *background*."""
    bg = bytes(background)
    return sum(1 for i in range(0, len(data), 4) if data[i : i + 4] != bg)


@pytest.fixture
def count_changed() -> Callable[..., int]:
    return changed_pixels
