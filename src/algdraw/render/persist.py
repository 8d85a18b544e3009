"""Encode a presented frame to a PNG or JPEG file.

The format is chosen by the destination's extension, compared
case-insensitively. Only ``png`` and ``jpg`` are accepted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pygame as pg

from algdraw.errors import ResourceUnavailable, UnsupportedFormat

__all__ = ["SUPPORTED_FORMATS", "image_format_for", "save_frame"]

SUPPORTED_FORMATS = ("png", "jpg")


def image_format_for(path: str) -> str:
    """Return ``"png"`` or ``"jpg"`` for *path*.

    Raises
    ------
    UnsupportedFormat
        For any other (or missing) extension.
    """
    name = str(path)
    dot = name.rfind(".")
    suffix = name[dot + 1 :] if dot >= 0 else ""
    fmt = suffix.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise UnsupportedFormat(name, suffix)
    return fmt


def save_frame(surface: Any, path: str) -> str:
    """Write *surface* to *path*; return the format used.

    Raises
    ------
    UnsupportedFormat
        Before touching the filesystem when the extension is not png/jpg.
    ResourceUnavailable
        When the file cannot be created or the encoder fails.
    """
    fmt = image_format_for(path)
    dest = Path(path)
    if fmt == "jpg":
        # JPEG has no alpha channel
        opaque = pg.Surface(surface.get_size())
        opaque.blit(surface, (0, 0))
        surface = opaque
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        with dest.open("wb") as f:
            # namehint selects the encoder for file objects
            pg.image.save(surface, f, f"frame.{fmt}")
    except (OSError, pg.error) as e:
        raise ResourceUnavailable(str(path), str(e)) from e
    return fmt
