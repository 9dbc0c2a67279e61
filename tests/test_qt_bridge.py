"""Tests for the PySide6 glue (artboard_playground/bridge.py)."""
import pytest

QtCore = pytest.importorskip("PySide6.QtCore")
pytest.importorskip("PySide6.QtGui")

from PySide6.QtCore import QPointF, Qt  # noqa: E402

from artboard_core.editor import EditorState  # noqa: E402
from artboard_core.selection import Intent  # noqa: E402
from artboard_core.viewport import ROTATIONS, apply_matrix, compute_matrix  # noqa: E402
from artboard_playground.bridge import (  # noqa: E402
    QtCoordinateMapper,
    QtPointerStream,
    intent_from_key,
    qtransform_from_matrix,
)


@pytest.fixture(scope="module")
def qt_core():
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    return app


# --- keys ---

def test_intent_from_key():
    assert intent_from_key(Qt.Key_Delete) is Intent.DELETE
    assert intent_from_key(Qt.Key_Backspace) is Intent.DELETE
    assert intent_from_key(Qt.Key_Escape) is Intent.ESCAPE
    assert intent_from_key(Qt.Key_Return) is Intent.CONFIRM
    assert intent_from_key(Qt.Key_Enter) is Intent.CONFIRM
    assert intent_from_key(Qt.Key_A) is None


# --- transforms ---

@pytest.mark.parametrize("rotate", ROTATIONS)
def test_qtransform_matches_matrix(rotate):
    m = compute_matrix(1.5, 120.0, 80.0, 4.0, -6.0, rotate)
    t = qtransform_from_matrix(m)
    for p in [(0.0, 0.0), (30.0, 70.0)]:
        q = t.map(QPointF(*p))
        expected = apply_matrix(m, p)
        assert abs(q.x() - expected[0]) < 1e-9
        assert abs(q.y() - expected[1]) < 1e-9


def test_qt_mapper_inverts():
    m = compute_matrix(2.0, 100.0, 50.0, 3.0, 4.0, 90)
    mapper = QtCoordinateMapper(lambda: m)
    back = mapper(apply_matrix(m, (12.0, 34.0)))
    assert abs(back[0] - 12.0) < 1e-9
    assert abs(back[1] - 34.0) < 1e-9


def test_qt_mapper_without_matrix():
    assert QtCoordinateMapper(lambda: None)((1.0, 1.0)) is None


# --- pointer stream ---

def test_pointer_stream_drives_editor(qt_core):
    stream = QtPointerStream()
    state = EditorState(200, 200, input_stream=stream)
    c = state.controller
    c.set_tool("rect")
    c.begin((10.0, 10.0))
    stream.emit_move((40.0, 50.0))
    stream.emit_end((40.0, 50.0))
    assert state.drawables[0].width == 30.0
    assert c.session is None
    # the subscription is gone: further events do nothing
    c.set_tool("line")
    stream.emit_end((0.0, 0.0))
    assert len(state.drawables) == 1


def test_pointer_stream_release_is_idempotent(qt_core):
    stream = QtPointerStream()
    seen = []
    sub = stream.subscribe(seen.append, seen.append)
    stream.emit_move((1.0, 2.0))
    sub.release()
    sub.release()
    stream.emit_move((3.0, 4.0))
    assert seen == [(1.0, 2.0)]
