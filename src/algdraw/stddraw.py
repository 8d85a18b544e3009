"""Process-wide default canvas behind an explicit init/teardown handle.

Scripts that want a single implicit canvas call :func:`init` once, draw via
:func:`get`, and release the window with :func:`teardown`::

    from algdraw import stddraw

    canvas = stddraw.init("sketch")
    canvas.filled_square(0.5, 0.5, 0.25)
    stddraw.teardown()

Nothing is created on import; :func:`get` before :func:`init` is an error.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from algdraw.draw import DrawCanvas
from algdraw.errors import ConfigurationError

logger = logging.getLogger(__name__)

_LOCK = threading.Lock()
_CANVAS: DrawCanvas | None = None


def init(name: str | None = None, **kwargs: Any) -> DrawCanvas:
    """Create the default canvas, replacing (and closing) any previous one.

    Keyword arguments are passed to :class:`DrawCanvas`. The previous canvas
    is closed first so the new one can take over the display window.
    """
    global _CANVAS
    with _LOCK:
        old = _CANVAS
        _CANVAS = None
        if old is not None:
            logger.debug("replacing default canvas %r", old.name)
            old.close()
        _CANVAS = DrawCanvas(name, **kwargs)
        return _CANVAS


def get() -> DrawCanvas:
    """Return the default canvas.

    Raises
    ------
    ConfigurationError
        If :func:`init` has not been called (or after :func:`teardown`).
    """
    with _LOCK:
        canvas = _CANVAS
    if canvas is None:
        raise ConfigurationError("default canvas not initialized; call init() first")
    return canvas


def is_initialized() -> bool:
    with _LOCK:
        return _CANVAS is not None


def teardown() -> None:
    """Close and forget the default canvas; a no-op when none exists."""
    global _CANVAS
    with _LOCK:
        canvas = _CANVAS
        _CANVAS = None
    if canvas is not None:
        canvas.close()
