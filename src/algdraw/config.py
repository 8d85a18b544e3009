"""Runtime configuration helpers.

Small aggregator that merges the persisted :class:`Settings` with CLI
overrides, producing the settings a canvas is constructed with.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .settings.schema import Settings
from .settings.store import SettingsStore

# CLI attribute -> Settings field
_OVERRIDES = {
    "width": "width_px",
    "height": "height_px",
    "fps": "window_fps",
    "title": "title",
    "save_dir": "save_dir",
}


def make_canvas_config(*, args: Optional[object] = None) -> Settings:
    """Build canvas Settings from persisted values and optional CLI *args*.

    Rules:
    - Persisted settings (``SettingsStore.load()``) provide user defaults;
      a missing or invalid file yields the built-in defaults.
    - Attributes of *args* (argparse.Namespace-like) that are not None
      override the matching fields for the current session.

    Raises pydantic's ``ValidationError`` when an override is invalid.
    """
    settings = SettingsStore.load()
    if args is None:
        return settings
    updates: Dict[str, Any] = {}
    for attr, field in _OVERRIDES.items():
        value = getattr(args, attr, None)
        if value is not None:
            updates[field] = value
    if not updates:
        return settings
    return Settings.model_validate({**settings.model_dump(), **updates})
