from __future__ import annotations

import logging
from pathlib import Path

import pygame as pg
import pytest

from algdraw.draw import DrawCanvas
from algdraw.errors import UnsupportedFormat
from algdraw.render.persist import image_format_for


@pytest.mark.parametrize(
    "name,fmt",
    [("out.png", "png"), ("OUT.PNG", "png"), ("a.b.jpg", "jpg"), ("x.JpG", "jpg")],
)
def test_image_format_for_accepts_png_and_jpg(name: str, fmt: str) -> None:
    assert image_format_for(name) == fmt


@pytest.mark.parametrize("name", ["out.bmp", "out.jpeg", "noext", "out."])
def test_image_format_for_rejects_others(name: str) -> None:
    with pytest.raises(UnsupportedFormat):
        image_format_for(name)


@pytest.mark.parametrize("name", ["frame.png", "FRAME.PNG", "frame.jpg"])
def test_save_writes_presented_frame(
    canvas: DrawCanvas, tmp_path: Path, name: str
) -> None:
    canvas.filled_square(0.5, 0.5, 0.25)
    dest = tmp_path / "nested" / name
    assert canvas.save(str(dest)) is True
    assert dest.exists()
    img = pg.image.load(str(dest))
    assert img.get_size() == (64, 64)
    r, g, b, _ = img.get_at((32, 32))
    assert max(r, g, b) < 40
    r, g, b, _ = img.get_at((2, 2))
    assert min(r, g, b) > 215


def test_save_ignores_undisplayed_drawing(canvas: DrawCanvas, tmp_path: Path) -> None:
    canvas.show(0)
    canvas.filled_square(0.5, 0.5, 0.25)
    dest = tmp_path / "frame.png"
    assert canvas.save(str(dest))
    assert tuple(pg.image.load(str(dest)).get_at((32, 32))) == DrawCanvas.WHITE


def test_unsupported_extension_is_logged_not_raised(
    canvas: DrawCanvas, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    dest = tmp_path / "frame.bmp"
    with caplog.at_level(logging.WARNING, logger="algdraw"):
        assert canvas.save(str(dest)) is False
    assert not dest.exists()
    assert "Invalid image file type" in caplog.text


def test_unwritable_destination_is_logged(
    canvas: DrawCanvas, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with caplog.at_level(logging.WARNING, logger="algdraw"):
        assert canvas.save(str(blocker / "frame.png")) is False
    assert "save failed" in caplog.text


def test_default_save_path_uses_settings_home(
    canvas: DrawCanvas, algdraw_home: Path
) -> None:
    assert canvas.default_save_path() == algdraw_home / "test.png"
