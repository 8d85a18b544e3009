"""Console entrypoint for the algdraw demo client.

This module delegates to :mod:`algdraw.cli` so that running
``python -m algdraw`` or the installed ``algdraw`` console script
executes the same code.
"""

from __future__ import annotations

from algdraw.cli import main as cli_main


def main() -> None:
    """Application entrypoint (delegates to :func:`algdraw.cli.main`)."""
    cli_main()


if __name__ == "__main__":
    main()
