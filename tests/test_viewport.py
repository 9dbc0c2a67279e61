"""Tests for artboard_core/viewport.py."""
import pytest

from artboard_core.shapes import Bounds, Crop
from artboard_core.viewport import (
    ROTATIONS,
    CoordinateMapper,
    ViewportState,
    apply_matrix,
    compute_matrix,
    invert_matrix,
    on_wheel,
    rotate_step,
    rotated_content_size,
    screen_to_canvas,
    visible_region,
)


def _close(m1, m2, tol=1e-12):
    return all(abs(a - b) < tol for a, b in zip(m1, m2))


# --- compute_matrix ---

def test_identity_at_rest():
    m = compute_matrix(1.0, 640.0, 480.0, 0.0, 0.0, 0)
    assert _close(m, (1.0, 0.0, 0.0, 1.0, 0.0, 0.0))
    assert apply_matrix(m, (12.5, -3.0)) == (12.5, -3.0)


def test_rotate_0_branch():
    m = compute_matrix(2.0, 100.0, 50.0, 3.0, 4.0, 0)
    assert _close(m, (2.0, 0.0, 0.0, 2.0, -47.0, -21.0))


def test_rotate_90_branch():
    m = compute_matrix(2.0, 100.0, 50.0, 3.0, 4.0, 90)
    assert _close(m, (0.0, 2.0, -2.0, 0.0, 78.0, -46.0))


def test_rotate_180_branch():
    m = compute_matrix(2.0, 100.0, 50.0, 3.0, 4.0, 180)
    assert _close(m, (-2.0, 0.0, 0.0, -2.0, 153.0, 79.0))


def test_rotate_270_branch():
    m = compute_matrix(2.0, 100.0, 50.0, 3.0, 4.0, 270)
    assert _close(m, (0.0, -2.0, 2.0, 0.0, -22.0, 154.0))


def test_rotate_90_keeps_content_in_frame():
    # at zoom 1 the rotated content lands in [0, h] x [0, w]
    m = compute_matrix(1.0, 100.0, 50.0, 0.0, 0.0, 90)
    assert _close(apply_matrix(m, (0.0, 0.0)), (50.0, 0.0))
    assert _close(apply_matrix(m, (100.0, 50.0)), (0.0, 100.0))


def test_unsupported_rotation_ignored():
    m = compute_matrix(1.0, 100.0, 50.0, 5.0, 6.0, 45)
    assert _close(m, (1.0, 0.0, 0.0, 1.0, 5.0, 6.0))


# --- wheel / rotation ---

def test_wheel_up_zooms_in():
    assert abs(on_wheel(-100.0, 1.0) - 2.0) < 1e-12


def test_wheel_clamped():
    assert on_wheel(100.0, 1.0) == 1.0
    assert on_wheel(-1000.0, 1.0) == 4.0
    assert on_wheel(-50.0, 1.0, min_zoom=0.5, max_zoom=1.2) == 1.2


def test_rotate_step_wraps():
    assert rotate_step(0, -90) == 270
    assert rotate_step(270, 90) == 0
    assert rotate_step(90, -90) == 0
    assert rotate_step(180, 90) == 270


def test_viewport_state_helpers():
    vp = ViewportState().with_pan(3.0, 4.0).with_pan(1.0, 1.0).with_zoom(2.0).with_rotation(-90)
    assert (vp.translate_x, vp.translate_y, vp.zoom, vp.rotate) == (4.0, 5.0, 2.0, 270)


# --- inverse mapping ---

@pytest.mark.parametrize("rotate", ROTATIONS)
def test_screen_to_canvas_inverts_matrix(rotate):
    m = compute_matrix(2.5, 300.0, 200.0, 11.0, -7.0, rotate)
    for p in [(0.0, 0.0), (123.0, 45.0), (-10.0, 250.0)]:
        back = screen_to_canvas(m, apply_matrix(m, p))
        assert abs(back[0] - p[0]) < 1e-9
        assert abs(back[1] - p[1]) < 1e-9


def test_singular_matrix_has_no_inverse():
    m = compute_matrix(0.0, 100.0, 100.0, 0.0, 0.0, 0)
    assert invert_matrix(m) is None
    assert screen_to_canvas(m, (1.0, 1.0)) is None


def test_mapper_without_background():
    mapper = CoordinateMapper(lambda: ViewportState(), lambda: None)
    assert mapper.matrix() is None
    assert mapper.screen_to_canvas((1.0, 2.0)) is None
    assert mapper.canvas_to_screen((1.0, 2.0)) is None


def test_mapper_follows_viewport():
    state = {"vp": ViewportState()}
    mapper = CoordinateMapper(lambda: state["vp"], lambda: (100.0, 50.0))
    assert mapper.screen_to_canvas((10.0, 20.0)) == (10.0, 20.0)
    state["vp"] = state["vp"].with_pan(5.0, 5.0)
    p = mapper.screen_to_canvas((10.0, 20.0))
    assert abs(p[0] - 5.0) < 1e-12
    assert abs(p[1] - 15.0) < 1e-12


# --- visible region ---

def test_visible_region_is_crop():
    crop = Crop(5.0, 6.0, 50.0, 60.0)
    assert visible_region(100.0, 80.0, 0, crop) == Bounds(5.0, 6.0, 50.0, 60.0)


def test_visible_region_while_cropping_is_content():
    crop = Crop(5.0, 6.0, 50.0, 60.0)
    assert visible_region(100.0, 80.0, 90, crop, cropping=True) == Bounds(0.0, 0.0, 80.0, 100.0)


def test_rotated_content_size():
    assert rotated_content_size(100.0, 80.0, 0) == (100.0, 80.0)
    assert rotated_content_size(100.0, 80.0, 270) == (80.0, 100.0)
