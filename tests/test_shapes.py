"""Tests for artboard_core/shapes.py."""
import pytest

from artboard_core.shapes import (
    Crop,
    Ellipse,
    Path,
    Rect,
    append_drawable,
    counter_ids,
    counter_start,
    crop_from_dict,
    crop_to_dict,
    drawable_from_dict,
    drawable_to_dict,
    drawables_from_dicts,
    duplicate_ids,
    find_drawable,
    ordered_for_display,
    remove_drawable,
    replace_drawable,
    uuid_ids,
)


# --- id factories ---

def test_counter_ids_monotonic():
    next_id = counter_ids()
    assert [next_id(), next_id(), next_id()] == ["S0001", "S0002", "S0003"]


def test_counter_ids_are_independent():
    a = counter_ids()
    b = counter_ids(prefix="D", start=7)
    assert a() == "S0001"
    assert b() == "D0007"
    assert a() == "S0002"


def test_counter_start_follows_highest_id(shapes):
    assert counter_start(()) == 1
    assert counter_start(shapes) == 1
    ids = (Rect(id="S0002", x=0, y=0, width=1, height=1), Rect(id="S0009", x=0, y=0, width=1, height=1))
    assert counter_start(ids) == 10
    assert counter_start(ids, prefix="D") == 1


def test_duplicate_ids(square, shapes):
    assert duplicate_ids(shapes) == []
    assert duplicate_ids(shapes + (square, square)) == ["r1"]


def test_uuid_ids_unique():
    next_id = uuid_ids()
    ids = {next_id() for _ in range(50)}
    assert len(ids) == 50


# --- defaults ---

def test_box_defaults():
    r = Rect(id="r", x=0, y=0, width=1, height=1)
    e = Ellipse(id="e", cx=0, cy=0, rx=1, ry=1)
    for d in (r, e):
        assert d.fill == "black"
        assert d.stroke == "none"
        assert d.stroke_width == 0.0


def test_path_defaults():
    p = Path(id="p")
    assert p.points == ()
    assert p.stroke == "black"
    assert p.stroke_width == 5.0
    assert p.type == "path"


# --- collection helpers ---

def test_append_returns_new_tuple(shapes):
    extra = Rect(id="r9", x=1, y=1, width=2, height=2)
    out = append_drawable(shapes, extra)
    assert len(out) == len(shapes) + 1
    assert out[-1] is extra
    assert len(shapes) == 4


def test_replace_keeps_z_order(shapes):
    moved = Rect(id="r1", x=5, y=5, width=20, height=20)
    out = replace_drawable(shapes, moved)
    assert [d.id for d in out] == [d.id for d in shapes]
    assert out[0] == moved
    assert shapes[0].x == 0.0


def test_remove_by_id(shapes):
    out = remove_drawable(shapes, "l1")
    assert [d.id for d in out] == ["r1", "e1", "p1"]


def test_find_drawable(shapes):
    assert find_drawable(shapes, "e1") is shapes[1]
    assert find_drawable(shapes, "nope") is None
    assert find_drawable(shapes, None) is None


def test_selected_drawn_last(shapes):
    out = ordered_for_display(shapes, "r1")
    assert [d.id for d in out] == ["e1", "l1", "p1", "r1"]
    assert ordered_for_display(shapes, None) == shapes


# --- dict form ---

def test_dict_form_keeps_fields(shapes):
    for d in shapes:
        data = drawable_to_dict(d)
        assert data["type"] == d.type
        assert drawable_from_dict(data) == d


def test_path_points_serialize_as_lists():
    data = drawable_to_dict(Path(id="p", points=((1.0, 2.0),)))
    assert data["points"] == [[1.0, 2.0]]


def test_unknown_type_skipped():
    items = [{"type": "star", "id": "x"}, {"type": "rect", "id": "r", "x": 0, "y": 0, "width": 5, "height": 5}]
    out = drawables_from_dicts(items)
    assert len(out) == 1
    assert out[0].id == "r"


def test_crop_dict():
    crop = Crop(1.0, 2.0, 3.0, 4.0)
    assert crop_from_dict(crop_to_dict(crop)) == crop
    assert crop_to_dict(None) is None
    assert crop_from_dict(None) is None


def test_numeric_fields_coerced():
    d = drawable_from_dict({"type": "rect", "id": "r", "x": "1.5", "y": 2, "width": 5, "height": 5})
    assert d.x == 1.5
    assert isinstance(d.y, float)


def test_malformed_dict_raises():
    with pytest.raises(ValueError):
        drawable_from_dict({"type": "rect", "id": "r", "x": "foo", "y": 0, "width": 5, "height": 5})
    with pytest.raises(ValueError):
        drawable_from_dict({"type": "path", "id": "p", "points": [[1]]})
    with pytest.raises(ValueError):
        drawable_from_dict({"id": "r", "x": 0, "y": 0, "width": 5, "height": 5})
