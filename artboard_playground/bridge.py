"""Qt glue for the artboard core: keys, transforms and pointer streams."""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, Tuple

from PySide6.QtCore import QObject, QPointF, Qt, Signal
from PySide6.QtGui import QTransform

from artboard_core.selection import Intent

log = logging.getLogger("artboard.qt")

Point = Tuple[float, float]


def intent_from_key(key) -> Optional[Intent]:
    """Translate a Qt key code into a keyboard intent."""
    if key in (Qt.Key_Delete, Qt.Key_Backspace):
        return Intent.DELETE
    if key == Qt.Key_Escape:
        return Intent.ESCAPE
    if key in (Qt.Key_Return, Qt.Key_Enter):
        return Intent.CONFIRM
    return None


def qtransform_from_matrix(matrix: Sequence[float]) -> QTransform:
    a, b, c, d, e, f = (float(v) for v in matrix)
    return QTransform(a, b, c, d, e, f)


class QtCoordinateMapper:
    """Maps widget positions to canvas space by inverting the painter transform."""

    def __init__(self, get_matrix: Callable[[], Optional[Sequence[float]]]):
        self._get_matrix = get_matrix

    def __call__(self, pos: Point) -> Optional[Point]:
        matrix = self._get_matrix()
        if matrix is None:
            return None
        inverse, invertible = qtransform_from_matrix(matrix).inverted()
        if not invertible:
            log.warning("View transform is not invertible")
            return None
        mapped = inverse.map(QPointF(float(pos[0]), float(pos[1])))
        return (mapped.x(), mapped.y())


class _SignalSubscription:
    def __init__(self, stream: "QtPointerStream", on_move, on_end) -> None:
        self._stream = stream
        self._on_move = on_move
        self._on_end = on_end
        self._active = True

    def release(self) -> None:
        if not self._active:
            return
        self._active = False
        self._stream.moved.disconnect(self._on_move)
        self._stream.released.disconnect(self._on_end)


class QtPointerStream(QObject):
    """Global pointer stream fed by a widget's mouse move/release events."""

    moved = Signal(float, float)
    released = Signal(float, float)

    def subscribe(self, on_move, on_end) -> _SignalSubscription:
        def _move(x: float, y: float) -> None:
            on_move((x, y))

        def _end(x: float, y: float) -> None:
            on_end((x, y))

        self.moved.connect(_move)
        self.released.connect(_end)
        return _SignalSubscription(self, _move, _end)

    def emit_move(self, pos: Point) -> None:
        self.moved.emit(float(pos[0]), float(pos[1]))

    def emit_end(self, pos: Point) -> None:
        self.released.emit(float(pos[0]), float(pos[1]))


__all__ = ["intent_from_key", "qtransform_from_matrix", "QtCoordinateMapper", "QtPointerStream"]
