"""Tests for artboard_core/geometry.py pure functions."""
import pytest

from artboard_core.geometry import (
    CORNER_HANDLES,
    LINE_HANDLES,
    MIN_SIZE,
    compute_bounds,
    crop_from_drag,
    crop_handle_positions,
    ellipse_from_drag,
    handle_positions,
    line_from_drag,
    move_handle_bounds,
    path_from_points,
    rect_from_drag,
    resize,
    resize_crop,
    translate,
    translate_crop,
)
from artboard_core.shapes import Bounds, Crop, Ellipse, Line, Path, Rect

POINTERS = [(-50.0, -50.0), (0.0, 0.0), (5.0, 5.0), (9.0, 31.0), (25.0, -3.0), (200.0, 200.0)]
CORNERS = list(CORNER_HANDLES)


# --- translate ---

def test_translate_round_trip(shapes):
    for d in shapes:
        assert translate(translate(d, 7.0, -3.0), -7.0, 3.0) == d


def test_translate_path_moves_every_point():
    p = Path(id="p", points=((0.0, 0.0), (1.0, 1.0)))
    assert translate(p, 2.0, 3.0).points == ((2.0, 3.0), (3.0, 4.0))


def test_translate_line_moves_both_endpoints():
    ln = translate(Line(id="l", x1=0, y1=0, x2=10, y2=10), 1.0, 2.0)
    assert (ln.x1, ln.y1, ln.x2, ln.y2) == (1.0, 2.0, 11.0, 12.0)


def test_translate_unknown_returned_unchanged():
    thing = object()
    assert translate(thing, 1.0, 1.0) is thing


# --- resize ---

def test_resize_rect_floor_scenario(square):
    out = resize(square, "right", "bottom", 5.0, 5.0)
    assert out.width == 10.0
    assert out.height == 10.0
    assert (out.x, out.y) == (0.0, 0.0)


def test_resize_rect_left_top_moves_origin(square):
    out = resize(square, "left", "top", -5.0, 4.0)
    assert (out.x, out.y) == (-5.0, 4.0)
    assert out.width == 25.0
    assert out.height == 16.0


def test_resize_never_below_floor(square):
    ellipse = Ellipse(id="e", cx=50.0, cy=50.0, rx=20.0, ry=20.0)
    for hx, hy in CORNERS:
        for px, py in POINTERS:
            r = resize(square, hx, hy, px, py)
            assert r.width >= MIN_SIZE and r.height >= MIN_SIZE
            e = resize(ellipse, hx, hy, px, py)
            assert e.rx >= MIN_SIZE and e.ry >= MIN_SIZE


def test_resize_ellipse_keeps_opposite_edge():
    e = Ellipse(id="e", cx=50.0, cy=50.0, rx=20.0, ry=20.0)
    out = resize(e, "right", "bottom", 80.0, 60.0)
    assert abs(out.rx - 25.0) < 1e-12
    assert abs(out.cx - 55.0) < 1e-12
    assert abs((out.cx - out.rx) - 30.0) < 1e-12
    assert abs(out.ry - 15.0) < 1e-12
    assert abs((out.cy - out.ry) - 30.0) < 1e-12


def test_resize_line_moves_dragged_endpoint_only():
    ln = Line(id="l", x1=0, y1=0, x2=10, y2=10)
    out = resize(ln, "right", "bottom", 3.0, 4.0)
    assert (out.x1, out.y1, out.x2, out.y2) == (0, 0, 3.0, 4.0)
    out = resize(ln, "left", "top", -1.0, -2.0)
    assert (out.x1, out.y1, out.x2, out.y2) == (-1.0, -2.0, 10, 10)


def test_resize_path_unchanged():
    p = Path(id="p", points=((0.0, 0.0), (5.0, 5.0)))
    assert resize(p, "right", "bottom", 100.0, 100.0) is p


# --- bounds ---

def test_bounds_per_kind(shapes):
    r, e, ln, p = shapes
    assert compute_bounds(r) == Bounds(0.0, 0.0, 20.0, 20.0)
    assert compute_bounds(e) == Bounds(30.0, 40.0, 40.0, 20.0)
    assert compute_bounds(ln) == Bounds(0.0, 0.0, 30.0, 40.0)
    assert compute_bounds(p) == Bounds(-2.0, 2.0, 5.0, 3.0)


def test_bounds_of_inverted_line():
    ln = Line(id="l", x1=30, y1=40, x2=0, y2=0)
    assert compute_bounds(ln) == Bounds(0, 0, 30, 40)


def test_bounds_empty_path():
    assert compute_bounds(Path(id="p")) is None


# --- drag builders ---

def test_rect_from_drag_order_independent():
    for p0, p1 in [((10, 10), (40, 50)), ((0, 30), (25, -4)), ((3, 3), (3, 80))]:
        assert rect_from_drag(p0, p1) == rect_from_drag(p1, p0)


def test_rect_from_drag_normalizes():
    assert rect_from_drag((40, 50), (10, 10)) == Bounds(10, 10, 30, 40)


def test_rect_from_drag_rejects_only_when_both_small():
    assert rect_from_drag((0, 0), (5, 5)) is None
    # width clears the floor, height does not
    assert rect_from_drag((0, 0), (30, 2)) == Bounds(0, 0, 30, 2)
    # and the other way round
    assert rect_from_drag((0, 0), (2, 30)) == Bounds(0, 0, 2, 30)


def test_ellipse_from_drag():
    assert ellipse_from_drag((10, 10), (50, 30)) == (30.0, 20.0, 20.0, 10.0)
    assert ellipse_from_drag((0, 0), (4, 4)) is None


def test_line_from_drag_has_no_floor():
    assert line_from_drag((1, 1), (2, 2)) == (1, 1, 2, 2)


def test_path_from_points_copies():
    pts = [(0.0, 0.0), (1.0, 1.0)]
    out = path_from_points(pts)
    pts.append((2.0, 2.0))
    assert out == ((0.0, 0.0), (1.0, 1.0))


# --- crop ---

def test_resize_crop_scenario():
    crop = Crop(0.0, 0.0, 100.0, 100.0)
    assert resize_crop(crop, "left", "top", 10.0, 10.0) == Crop(10.0, 10.0, 90.0, 90.0)


def test_resize_crop_floor():
    crop = Crop(0.0, 0.0, 100.0, 100.0)
    out = resize_crop(crop, "right", "bottom", -20.0, 3.0)
    assert out.width == 10.0
    assert out.height == 10.0


def test_translate_crop():
    assert translate_crop(Crop(0, 0, 10, 10), 2.0, -1.0) == Crop(2.0, -1.0, 10, 10)


def test_crop_from_drag():
    assert crop_from_drag((60, 80), (10, 10)) == Crop(10, 10, 50, 70)
    assert crop_from_drag((0, 0), (3, 3)) is None


# --- handles ---

def test_rect_handles_sit_on_inflated_bounds(square):
    handles = handle_positions(square, 4.0)
    assert handles[("left", "top")] == (-2.0, -2.0)
    assert handles[("right", "bottom")] == (22.0, 22.0)
    assert len(handles) == 4
    assert move_handle_bounds(square, 4.0) == Bounds(-2.0, -2.0, 24.0, 24.0)


def test_line_handles_on_endpoints():
    handles = handle_positions(Line(id="l", x1=1, y1=2, x2=3, y2=4), 5.0)
    assert tuple(handles) == LINE_HANDLES
    assert handles == {("left", "top"): (1, 2), ("right", "bottom"): (3, 4)}


def test_path_has_no_resize_handles():
    assert handle_positions(Path(id="p", points=((0.0, 0.0),)), 5.0) == {}


@pytest.mark.parametrize("corner", CORNERS)
def test_crop_handles(corner):
    handles = crop_handle_positions(Crop(10, 20, 30, 40))
    expected = {
        ("left", "top"): (10, 20),
        ("right", "top"): (40, 20),
        ("left", "bottom"): (10, 60),
        ("right", "bottom"): (40, 60),
    }
    assert handles[corner] == expected[corner]
