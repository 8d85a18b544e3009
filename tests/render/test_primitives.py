from __future__ import annotations

from typing import Callable

import pytest

from algdraw.draw import DrawCanvas
from algdraw.errors import InvalidArgument


def changed_columns(data: bytes, width: int) -> set[int]:
    white = bytes((255, 255, 255, 255))
    return {
        (i // 4) % width for i in range(0, len(data), 4) if data[i : i + 4] != white
    }


def test_filled_square_covers_expected_area(
    canvas: DrawCanvas, count_changed: Callable[..., int]
) -> None:
    canvas.filled_square(0.5, 0.5, 0.25)
    assert count_changed(canvas.backend.front_bytes()) == 32 * 32
    assert canvas.backend.front_at(32, 32) == DrawCanvas.BLACK


def test_point_with_zero_radius_sets_one_pixel(
    canvas: DrawCanvas, count_changed: Callable[..., int]
) -> None:
    canvas.set_pen_radius(0)
    canvas.point(0.5, 0.5)
    assert count_changed(canvas.backend.front_bytes()) == 1
    assert canvas.backend.front_at(32, 32) == DrawCanvas.BLACK


@pytest.mark.parametrize(
    "draw",
    [
        lambda c: c.circle(0.5, 0.5, 0.001),
        lambda c: c.filled_circle(0.5, 0.5, 0.0),
        lambda c: c.ellipse(0.5, 0.5, 0.001, 0.002),
        lambda c: c.filled_rectangle(0.5, 0.5, 0.0, 0.0),
        lambda c: c.square(0.5, 0.5, 0.005),
        lambda c: c.arc(0.5, 0.5, 0.001, 0.0, 90.0),
        lambda c: c.line(0.5, 0.5, 0.505, 0.5),
        lambda c: c.polygon([0.5, 0.5, 0.5], [0.5, 0.5, 0.5]),
    ],
)
def test_degenerate_primitive_draws_single_pixel(
    canvas: DrawCanvas, count_changed: Callable[..., int], draw: Callable[..., None]
) -> None:
    draw(canvas)
    assert count_changed(canvas.backend.front_bytes()) == 1


@pytest.mark.parametrize(
    "draw",
    [
        lambda c: c.circle(0.5, 0.5, -0.1),
        lambda c: c.filled_circle(0.5, 0.5, -0.1),
        lambda c: c.ellipse(0.5, 0.5, 0.1, -0.1),
        lambda c: c.filled_ellipse(0.5, 0.5, -0.1, 0.1),
        lambda c: c.arc(0.5, 0.5, -0.1, 0.0, 90.0),
        lambda c: c.square(0.5, 0.5, -0.1),
        lambda c: c.filled_square(0.5, 0.5, -0.1),
        lambda c: c.rectangle(0.5, 0.5, -0.1, 0.1),
        lambda c: c.filled_rectangle(0.5, 0.5, 0.1, -0.1),
    ],
)
def test_negative_size_rejected_without_drawing(
    canvas: DrawCanvas, count_changed: Callable[..., int], draw: Callable[..., None]
) -> None:
    with pytest.raises(InvalidArgument):
        draw(canvas)
    assert count_changed(canvas.backend.back_bytes()) == 0


def test_arc_end_before_start_wraps_around(
    make_canvas: Callable[..., DrawCanvas], count_changed: Callable[..., int]
) -> None:
    a = make_canvas()
    b = make_canvas()
    a.arc(0.5, 0.5, 0.4, 350.0, 10.0)
    b.arc(0.5, 0.5, 0.4, 350.0, 370.0)
    data = a.backend.front_bytes()
    assert count_changed(data) > 0
    assert data == b.backend.front_bytes()
    # A short arc around angle zero stays on the right-hand side
    assert min(changed_columns(data, 64)) > 40


def test_outline_leaves_interior_untouched(canvas: DrawCanvas) -> None:
    canvas.square(0.5, 0.5, 0.25)
    assert canvas.backend.front_at(32, 32) == DrawCanvas.WHITE
    assert canvas.backend.front_at(16, 32) == DrawCanvas.BLACK


def test_filled_polygon(canvas: DrawCanvas, count_changed: Callable[..., int]) -> None:
    canvas.filled_polygon([0.1, 0.9, 0.5], [0.1, 0.1, 0.9])
    assert count_changed(canvas.backend.front_bytes()) > 200
    assert canvas.backend.front_at(32, 40) == DrawCanvas.BLACK


@pytest.mark.parametrize(
    "xs,ys",
    [([0.1, 0.2], [0.1]), ([], [])],
)
def test_polygon_rejects_bad_vertex_lists(
    canvas: DrawCanvas, xs: list[float], ys: list[float]
) -> None:
    with pytest.raises(InvalidArgument):
        canvas.polygon(xs, ys)
    with pytest.raises(InvalidArgument):
        canvas.filled_polygon(xs, ys)


def test_thick_pen_widens_lines(
    make_canvas: Callable[..., DrawCanvas], count_changed: Callable[..., int]
) -> None:
    thin = make_canvas()
    thick = make_canvas()
    thick.set_pen_radius(0.01)
    for c in (thin, thick):
        c.line(0.1, 0.5, 0.9, 0.5)
    assert count_changed(thick.backend.front_bytes()) > count_changed(
        thin.backend.front_bytes()
    )


def test_pen_radius_validation(canvas: DrawCanvas) -> None:
    with pytest.raises(InvalidArgument):
        canvas.set_pen_radius(-0.5)
    canvas.set_pen_radius(0.05)
    assert canvas.get_pen_radius() == 0.05
    canvas.set_pen_radius()
    assert canvas.get_pen_radius() == 0.002


def test_pen_color_forms(canvas: DrawCanvas) -> None:
    canvas.set_pen_color(10, 20, 30)
    assert canvas.get_pen_color() == (10, 20, 30, 255)
    canvas.set_pen_color("book blue")
    assert canvas.get_pen_color() == DrawCanvas.BOOK_BLUE
    canvas.set_pen_color((1, 2, 3, 4))
    assert canvas.get_pen_color() == (1, 2, 3, 4)
    canvas.set_pen_color()
    assert canvas.get_pen_color() == DrawCanvas.BLACK


@pytest.mark.parametrize(
    "args",
    [(256, 0, 0), (0, -1, 0), ("no-such-color",), (None,), (1, 2), (1.5, 0, 0)],
)
def test_pen_color_rejects_bad_values(canvas: DrawCanvas, args: tuple) -> None:
    canvas.set_pen_color("red")
    with pytest.raises(InvalidArgument):
        canvas.set_pen_color(*args)
    assert canvas.get_pen_color() == DrawCanvas.RED


def test_clear_with_color(canvas: DrawCanvas) -> None:
    canvas.clear(DrawCanvas.BOOK_RED)
    assert canvas.backend.front_at(0, 0) == DrawCanvas.BOOK_RED
    assert canvas.backend.front_at(63, 63) == DrawCanvas.BOOK_RED


def test_user_scale_applies_to_drawing(canvas: DrawCanvas) -> None:
    canvas.set_scale(-1.0, 1.0)
    canvas.set_pen_radius(0)
    canvas.point(0.0, 0.0)
    assert canvas.backend.front_at(32, 32) == DrawCanvas.BLACK


@pytest.mark.parametrize(
    "x,y,expected",
    [(1.0, 0.5, (63, 32)), (0.5, 0.0, (32, 63)), (1.0, 0.0, (63, 63)), (0.0, 1.0, (0, 0))],
)
def test_degenerate_point_on_viewport_edge_lands_on_canvas(
    canvas: DrawCanvas,
    count_changed: Callable[..., int],
    x: float,
    y: float,
    expected: tuple[int, int],
) -> None:
    canvas.set_pen_radius(0)
    canvas.point(x, y)
    assert count_changed(canvas.backend.front_bytes()) == 1
    assert canvas.backend.front_at(*expected) == DrawCanvas.BLACK


def test_degenerate_point_beyond_viewport_is_not_drawn(
    canvas: DrawCanvas, count_changed: Callable[..., int]
) -> None:
    canvas.set_pen_radius(0)
    canvas.point(1.5, 0.5)
    canvas.point(0.5, -0.5)
    assert count_changed(canvas.backend.front_bytes()) == 0
