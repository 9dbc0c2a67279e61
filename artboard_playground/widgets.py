"""Qt canvas hosting an :class:`~artboard_core.editor.EditorState`."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from PySide6.QtCore import QPointF, QRectF, QSize, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen
from PySide6.QtWidgets import QWidget

from artboard_core.config import EditorConfig
from artboard_core.editor import EditorState
from artboard_core.geometry import compute_bounds, crop_handle_positions, handle_positions, move_handle_bounds
from artboard_core.shapes import Bounds, Crop, Ellipse, Line, Path, Rect
from artboard_core.tools import Tool

from .bridge import QtCoordinateMapper, QtPointerStream, intent_from_key, qtransform_from_matrix

log = logging.getLogger("artboard.qt")

Point = Tuple[float, float]

HANDLE_HIT = 8.0


def _pen(color: str, width: float) -> QPen:
    if color == "none" or width <= 0:
        return QPen(Qt.NoPen)
    pen = QPen(QColor(color))
    pen.setWidthF(width)
    return pen


def _brush(color: str) -> QBrush:
    if color == "none":
        return QBrush(Qt.NoBrush)
    return QBrush(QColor(color))


def _contains(bounds: Optional[Bounds], point: Point) -> bool:
    if bounds is None:
        return False
    return bounds.x <= point[0] <= bounds.right and bounds.y <= point[1] <= bounds.bottom


def _near(a: Point, b: Point, tol: float) -> bool:
    return abs(a[0] - b[0]) <= tol and abs(a[1] - b[1]) <= tol


class ArtboardCanvas(QWidget):
    """Paints the artboard and routes mouse, wheel and key events to the editor."""

    status_changed = Signal(str)

    def __init__(self, width: float = 800.0, height: float = 600.0, config: Optional[EditorConfig] = None):
        super().__init__()
        self.setObjectName("ArtboardCanvas")
        self.setMinimumSize(QSize(640, 480))
        self.setFocusPolicy(Qt.StrongFocus)
        self.stream = QtPointerStream(self)
        self._mapper = QtCoordinateMapper(self._view_matrix)
        self.editor = EditorState(
            width,
            height,
            config=config,
            mapper=self._mapper,
            input_stream=self.stream,
            on_change=self._on_editor_change,
        )

    # ------------------------------------------------------------------
    # Editor hooks
    def _view_matrix(self):
        if self.editor.content_size() is None:
            return None
        return self.editor.matrix()

    def _on_editor_change(self, what: str) -> None:
        self.status_changed.emit(what)
        self.update()

    def set_tool(self, name: Optional[str]) -> bool:
        accepted = self.editor.controller.set_tool(name)
        self.update()
        return accepted

    def rotate(self, degrees: int) -> None:
        self.editor.rotate(degrees)

    # ------------------------------------------------------------------
    # Hit testing
    def _press_target(self, raw: Point) -> bool:
        controller = self.editor.controller
        pos = self._mapper(raw)
        if pos is None:
            return False
        tol = HANDLE_HIT / max(self.editor.viewport.zoom, 1e-6)
        if controller.tool is Tool.CROP and self.editor.crop is not None:
            crop = self.editor.crop
            for (hx, hy), point in crop_handle_positions(crop).items():
                if _near(point, pos, tol):
                    return controller.begin_crop_resize(hx, hy, raw)
            if _contains(Bounds(crop.x, crop.y, crop.width, crop.height), pos):
                return controller.begin_crop_move(raw)
            return False
        if controller.tool is not None:
            return False
        stroke = self.editor.config.handle_stroke_width
        selected = next((d for d in self.editor.drawables if d.id == self.editor.selection.selected_id), None)
        if selected is not None:
            for (hx, hy), point in handle_positions(selected, stroke).items():
                if _near(point, pos, tol):
                    return controller.begin_resize(selected.id, hx, hy, raw)
            if _contains(move_handle_bounds(selected, stroke), pos):
                return controller.begin_move(selected.id, raw)
        for drawable in reversed(self.editor.display_order()):
            if _contains(compute_bounds(drawable), pos):
                return controller.click_drawable(drawable.id)
        return False

    # ------------------------------------------------------------------
    # Qt events
    def mousePressEvent(self, event):  # pragma: no cover - GUI entry point
        if event.button() != Qt.LeftButton:
            return
        raw = (event.position().x(), event.position().y())
        if not self._press_target(raw):
            self.editor.controller.begin(raw)
        self.update()

    def mouseMoveEvent(self, event):  # pragma: no cover - GUI entry point
        self.stream.emit_move((event.position().x(), event.position().y()))
        self.update()

    def mouseReleaseEvent(self, event):  # pragma: no cover - GUI entry point
        if event.button() != Qt.LeftButton:
            return
        self.stream.emit_end((event.position().x(), event.position().y()))
        self.update()

    def wheelEvent(self, event):  # pragma: no cover - GUI entry point
        # Qt reports +120 per notch away from the user; browsers report about -100
        self.editor.wheel(-event.angleDelta().y() / 1.2)
        event.accept()

    def keyPressEvent(self, event):  # pragma: no cover - GUI entry point
        intent = intent_from_key(event.key())
        if intent is None or not self.editor.handle_intent(intent):
            super().keyPressEvent(event)
            return
        self.update()

    def closeEvent(self, event):  # pragma: no cover - GUI entry point
        self.editor.close()
        super().closeEvent(event)

    # ------------------------------------------------------------------
    # Painting
    def paintEvent(self, event):  # pragma: no cover - GUI entry point
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.fillRect(self.rect(), QColor("#2b2b2b"))
        if self.editor.content_size() is None:
            return
        painter.setTransform(qtransform_from_matrix(self.editor.matrix()))
        painter.fillRect(QRectF(0, 0, self.editor.content_width, self.editor.content_height), QColor("white"))

        for drawable in self.editor.display_order():
            self._paint_drawable(painter, drawable)
        provisional = self.editor.controller.provisional
        if isinstance(provisional, Crop):
            self._paint_crop(painter, provisional)
        elif provisional is not None:
            self._paint_drawable(painter, provisional)
        if self.editor.crop is not None:
            self._paint_crop(painter, self.editor.crop)
        self._paint_handles(painter)
        painter.end()

    def _paint_drawable(self, painter: QPainter, drawable) -> None:
        if isinstance(drawable, Rect):
            painter.setPen(_pen(drawable.stroke, drawable.stroke_width))
            painter.setBrush(_brush(drawable.fill))
            painter.drawRect(QRectF(drawable.x, drawable.y, drawable.width, drawable.height))
        elif isinstance(drawable, Ellipse):
            painter.setPen(_pen(drawable.stroke, drawable.stroke_width))
            painter.setBrush(_brush(drawable.fill))
            painter.drawEllipse(QPointF(drawable.cx, drawable.cy), drawable.rx, drawable.ry)
        elif isinstance(drawable, Line):
            painter.setPen(_pen(drawable.stroke, drawable.stroke_width))
            painter.drawLine(QPointF(drawable.x1, drawable.y1), QPointF(drawable.x2, drawable.y2))
        elif isinstance(drawable, Path) and drawable.points:
            path = QPainterPath(QPointF(*drawable.points[0]))
            for point in drawable.points[1:]:
                path.lineTo(QPointF(*point))
            painter.setPen(_pen(drawable.stroke, drawable.stroke_width))
            painter.setBrush(Qt.NoBrush)
            painter.drawPath(path)

    def _paint_crop(self, painter: QPainter, crop: Crop) -> None:
        pen = QPen(QColor("#00a0ff"))
        pen.setStyle(Qt.DashLine)
        pen.setWidthF(1.5)
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(QRectF(crop.x, crop.y, crop.width, crop.height))

    def _paint_handles(self, painter: QPainter) -> None:
        handles = self.editor.handles()
        if not handles:
            return
        painter.setPen(QPen(QColor("#00a0ff")))
        painter.setBrush(QBrush(QColor("white")))
        for handle in handles["resize"]:
            painter.drawRect(QRectF(handle["x"] - 4, handle["y"] - 4, 8, 8))
