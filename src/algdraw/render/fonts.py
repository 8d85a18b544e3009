"""Font descriptions and a pygame-backed font cache.

``Font`` is a plain value the pen carries around; the backend turns it into
a pygame font object on first use and caches it. A ``family`` of ``None``
selects pygame's bundled default face, which renders identically across
platforms.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True, slots=True)
class Font:
    family: str | None = None
    size_px: int = 16
    bold: bool = False
    italic: bool = False


class FontCache:
    """Resolve :class:`Font` values to pygame font objects, memoized."""

    def __init__(self, pg: Any) -> None:
        self._pg = pg
        self._fonts: Dict[Font, Any] = {}

    def get(self, font: Font) -> Any:
        f = self._fonts.get(font)
        if f is None:
            f = self._load(font)
            self._fonts[font] = f
        return f

    def _load(self, font: Font) -> Any:
        pg = self._pg
        if not pg.font.get_init():
            pg.font.init()
        size = max(1, int(font.size_px))
        if font.family:
            # SysFont falls back to the default face for unknown names
            return pg.font.SysFont(font.family, size, font.bold, font.italic)
        f = pg.font.Font(None, size)
        f.set_bold(font.bold)
        f.set_italic(font.italic)
        return f
