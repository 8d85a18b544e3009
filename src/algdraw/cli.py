"""Command-line demo client for algdraw.

Draws the textbook's test-client scene. In headless mode the scene is
rendered offscreen (optionally saved) and the program exits; otherwise a
window opens and the demo echoes input: click or drag to paint dots, type
to stamp characters at the pointer, ``q`` to quit.
"""

from __future__ import annotations

import argparse
import logging
import os
import time

from pydantic import ValidationError

from algdraw import __version__
from algdraw.config import make_canvas_config
from algdraw.draw import DrawCanvas

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    When ``argv`` is None the values are read from ``sys.argv`` as usual.
    Accepting an ``argv`` list makes the parser testable programmatically.
    """
    p = argparse.ArgumentParser(description="algdraw demo client")
    p.add_argument(
        "--headless",
        action="store_true",
        help="Render offscreen without opening a window",
    )
    p.add_argument(
        "--save",
        type=str,
        default=None,
        help="Write the final frame to this .png or .jpg file",
    )
    p.add_argument("--width", type=int, default=None, help="Canvas width in px")
    p.add_argument("--height", type=int, default=None, help="Canvas height in px")
    p.add_argument("--title", type=str, default=None, help="Window title")
    p.add_argument(
        "--fps", type=float, default=None, help="Window paint/poll rate (frames/s)"
    )
    p.add_argument(
        "--save-dir",
        dest="save_dir",
        type=str,
        default=None,
        help="Directory for the Ctrl+S shortcut (default: settings home)",
    )
    p.add_argument(
        "--duration-ms",
        dest="duration_ms",
        type=int,
        default=None,
        help="Close the interactive window after this many milliseconds",
    )
    p.add_argument(
        "--log-level",
        dest="log_level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


def draw_test_scene(canvas: DrawCanvas) -> None:
    """Draw the shapes, arc, polygon and text of the textbook test client."""
    canvas.show(0)
    canvas.square(0.2, 0.8, 0.1)
    canvas.filled_square(0.8, 0.8, 0.2)
    canvas.circle(0.8, 0.2, 0.2)
    canvas.set_pen_color(DrawCanvas.MAGENTA)
    canvas.set_pen_radius(0.02)
    canvas.arc(0.8, 0.2, 0.1, 200, 45)

    # a blue diamond
    canvas.set_pen_radius()
    canvas.set_pen_color(DrawCanvas.BLUE)
    canvas.filled_polygon([0.1, 0.2, 0.3, 0.2], [0.2, 0.3, 0.2, 0.1])

    canvas.set_pen_color(DrawCanvas.BLACK)
    canvas.text(0.2, 0.5, "black text")
    canvas.set_pen_color(DrawCanvas.WHITE)
    canvas.text(0.8, 0.8, "white text")
    canvas.show()


class _EchoListener:
    """Logs every gesture the canvas reports."""

    def mouse_pressed(self, x: float, y: float) -> None:
        logger.info("pressed at (%.3f, %.3f)", x, y)

    def mouse_dragged(self, x: float, y: float) -> None:
        logger.debug("dragged to (%.3f, %.3f)", x, y)

    def mouse_released(self, x: float, y: float) -> None:
        logger.info("released at (%.3f, %.3f)", x, y)

    def key_typed(self, c: str) -> None:
        logger.info("typed %r", c)


def _interact(canvas: DrawCanvas, duration_ms: int | None) -> None:
    deadline = None if duration_ms is None else time.monotonic() + duration_ms / 1000.0
    canvas.add_listener(_EchoListener())
    canvas.set_pen_color(DrawCanvas.BOOK_RED)
    while canvas.window_open:
        if deadline is not None and time.monotonic() >= deadline:
            break
        if canvas.has_next_key_typed():
            c = canvas.next_key_typed()
            if c == "q":
                break
            canvas.text(canvas.mouse_x(), canvas.mouse_y(), c)
        if canvas.mouse_down():
            canvas.filled_circle(canvas.mouse_x(), canvas.mouse_y(), 0.005)
        canvas.show(20)


def run(args: argparse.Namespace) -> int:
    """Run the demo with parsed *args*; return a process exit code."""
    if args.headless:
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    try:
        settings = make_canvas_config(args=args)
    except ValidationError as e:
        logger.error("invalid settings: %s", e)
        return 2

    canvas = DrawCanvas(settings=settings, show_window=not args.headless)
    try:
        draw_test_scene(canvas)
        if not args.headless:
            _interact(canvas, args.duration_ms)
        if args.save and not canvas.save(args.save):
            return 1
    finally:
        canvas.close()
    return 0


def main(argv: list[str] | None = None) -> None:
    """Synchronous entrypoint for the algdraw CLI."""
    args = parse_args(argv)

    # Support a top-level --version
    if args.version:
        print(f"algdraw {__version__}")
        return

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        code = run(args)
    except KeyboardInterrupt:
        # Allow graceful cancellation via Ctrl+C
        code = 0
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
