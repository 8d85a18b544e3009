"""algdraw package root.

A windowed, double-buffered drawing canvas addressed in user coordinates,
with pollable mouse/keyboard state and PNG/JPEG export.

The project version is defined here as the single source of truth and
exposed via ``__version__``. The packaging configuration (pyproject.toml)
reads this attribute using ``version = { attr = "algdraw.__version__" }``.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
