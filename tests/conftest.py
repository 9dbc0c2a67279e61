"""Shared fixtures for the artboard tests."""
import pytest

from artboard_core.editor import EditorState
from artboard_core.session import CallbackStream
from artboard_core.shapes import Crop, Ellipse, Line, Path, Rect


@pytest.fixture
def stream():
    """In-process input stream the tests push pointer events through."""
    return CallbackStream()


@pytest.fixture
def editor():
    """400 x 300 artboard with no drawables and no crop."""
    state = EditorState(400, 300)
    yield state
    state.close()


@pytest.fixture
def square():
    return Rect(id="r1", x=0.0, y=0.0, width=20.0, height=20.0)


@pytest.fixture
def shapes(square):
    """One drawable of each kind, in z-order."""
    return (
        square,
        Ellipse(id="e1", cx=50.0, cy=50.0, rx=20.0, ry=10.0),
        Line(id="l1", x1=0.0, y1=0.0, x2=30.0, y2=40.0),
        Path(id="p1", points=((1.0, 2.0), (3.0, 5.0), (-2.0, 4.0))),
    )


@pytest.fixture
def populated(shapes):
    """Artboard holding :func:`shapes`."""
    state = EditorState(400, 300, drawables=shapes)
    yield state
    state.close()


@pytest.fixture
def cropped():
    """Artboard with a 100 x 100 crop at the origin and the crop tool active."""
    state = EditorState(400, 300, crop=Crop(0.0, 0.0, 100.0, 100.0))
    state.controller.set_tool("crop")
    yield state
    state.close()
