"""Application bootstrap for the Artboard playground."""
from __future__ import annotations

import logging
import sys

from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QAction, QActionGroup
from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QStatusBar, QToolBar

from artboard_core.config import load_config

from .widgets import ArtboardCanvas


class Main(QMainWindow):
    """Top-level window: tool bar, canvas and status line."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Artboard Playground")
        self.canvas = ArtboardCanvas(config=load_config())
        self.setCentralWidget(self.canvas)
        self._tool_actions: dict[str, QAction] = {}
        self._make_toolbar()
        self._make_status_bar()
        self.canvas.status_changed.connect(self._on_status)

    def _make_toolbar(self) -> None:
        toolbar = QToolBar("Tools")
        toolbar.setMovable(False)
        toolbar.setIconSize(QSize(24, 24))
        self.addToolBar(Qt.LeftToolBarArea, toolbar)

        action_group = QActionGroup(self)
        action_group.setExclusive(True)
        definitions = (
            ("pointer", "Pointer", "Select shapes, drag handles, pan the view."),
            ("pen", "Pen", "Freehand stroke."),
            ("rect", "Rect", "Drag a rectangle."),
            ("ellipse", "Ellipse", "Drag an ellipse."),
            ("line", "Line", "Drag a straight line."),
            ("crop", "Crop", "Drag a crop; Enter confirms, Delete removes it."),
        )
        for name, text, tip in definitions:
            action = QAction(text, self)
            action.setCheckable(True)
            action.setToolTip(tip)
            action.triggered.connect(lambda _checked=False, n=name: self._select_tool(n))
            action_group.addAction(action)
            toolbar.addAction(action)
            self._tool_actions[name] = action
        self._tool_actions["pointer"].setChecked(True)

        toolbar.addSeparator()
        rotate_left = QAction("Rotate -90", self)
        rotate_left.triggered.connect(lambda: self.canvas.rotate(-90))
        toolbar.addAction(rotate_left)
        rotate_right = QAction("Rotate +90", self)
        rotate_right.triggered.connect(lambda: self.canvas.rotate(90))
        toolbar.addAction(rotate_right)

    def _make_status_bar(self) -> None:
        bar = QStatusBar(self)
        self.setStatusBar(bar)
        self._mode_label = QLabel("Tool: Pointer")
        bar.addPermanentWidget(self._mode_label)

    def _select_tool(self, name: str) -> None:
        if not self.canvas.set_tool(name):
            return
        self._mode_label.setText(f"Tool: {name.title()}")

    def _on_status(self, what: str) -> None:
        editor = self.canvas.editor
        if what == "viewport":
            vp = editor.viewport
            self.statusBar().showMessage(f"zoom {vp.zoom:.2f}  rotate {vp.rotate}", 2000)
        name = "pointer" if editor.tool is None else editor.tool.value
        if not self._tool_actions[name].isChecked():
            self._tool_actions[name].setChecked(True)
            self._mode_label.setText(f"Tool: {name.title()}")


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    app = QApplication(sys.argv)
    window = Main()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
