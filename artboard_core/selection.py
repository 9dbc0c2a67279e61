"""Single selection and keyboard intents."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .context import EditorContext
from .shapes import find_drawable, remove_drawable

log = logging.getLogger("artboard.selection")

CROP_SELECTION = "__crop__"


class Intent(str, Enum):
    DELETE = "delete"
    ESCAPE = "escape"
    CONFIRM = "confirm"


class SelectionController:
    """Tracks the one selected drawable id, or the crop.

    Key filtering (ignoring keys typed into text fields) is the host's job;
    only intents reach this class.
    """

    def __init__(self, ctx: EditorContext):
        self.ctx = ctx
        self._selected: Optional[str] = None
        self._crop_selected = False

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected

    @property
    def crop_selected(self) -> bool:
        return self._crop_selected

    def select(self, drawable_id: Optional[str], check: bool = True) -> None:
        if check and drawable_id is not None and find_drawable(self.ctx.get_drawables(), drawable_id) is None:
            log.warning("Cannot select unknown drawable %s", drawable_id)
            return
        changed = drawable_id != self._selected or self._crop_selected
        self._selected = drawable_id
        self._crop_selected = False
        if changed:
            self.ctx.on_selection_change(drawable_id)

    def select_crop(self) -> None:
        if self.ctx.get_crop() is None:
            return
        changed = not self._crop_selected
        self._selected = None
        self._crop_selected = True
        if changed:
            self.ctx.on_selection_change(CROP_SELECTION)

    def clear(self) -> None:
        if self._selected is None and not self._crop_selected:
            return
        self._selected = None
        self._crop_selected = False
        self.ctx.on_selection_change(None)

    def delete_selected(self) -> bool:
        """Remove the selected drawable (or crop); ``False`` when nothing is selected."""
        if self._crop_selected:
            self.clear()
            self.ctx.on_crop_change(None)
            return True
        if self._selected is None:
            return False
        selected = self._selected
        drawables = self.ctx.get_drawables()
        remaining = remove_drawable(drawables, selected)
        self.clear()
        if len(remaining) != len(drawables):
            self.ctx.on_drawables_change(remaining)
        return True

    def handle_intent(self, intent: Intent) -> bool:
        """Apply ``intent``; returns whether it was consumed."""
        intent = Intent(intent)
        if intent is Intent.DELETE:
            return self.delete_selected()
        if intent is Intent.ESCAPE:
            if self._selected is None and not self._crop_selected:
                return False
            self.clear()
            return True
        return False


__all__ = ["Intent", "SelectionController", "CROP_SELECTION"]
