"""In-memory host model wiring the controllers to one artboard."""
from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, Iterable, List, Optional, Union

from .config import EditorConfig
from .context import EditorContext
from .controller import Mapper, PointerInteractionController
from .crop import CropOverlay
from .geometry import crop_handle_positions, handle_positions, move_handle_bounds
from .selection import CROP_SELECTION, Intent, SelectionController
from .session import InputStream
from .shapes import (
    Collection,
    Crop,
    Drawable,
    IdFactory,
    counter_ids,
    counter_start,
    crop_to_dict,
    drawable_to_dict,
    duplicate_ids,
    find_drawable,
    ordered_for_display,
)
from .tools import Tool
from .viewport import CoordinateMapper, Matrix, ViewportState, on_wheel, visible_region

log = logging.getLogger("artboard.editor")

HISTORY_LIMIT = 32


class EditorState:
    """Owns the drawables, crop, viewport and selection of one artboard.

    ``on_change`` is called with ``"drawables"``, ``"crop"``, ``"selection"``
    or ``"viewport"`` after each committed change. With ``map_pointer`` the
    controller receives display positions and maps them through the current
    viewport; otherwise positions are taken as canvas coordinates. A host
    with its own mapping (a Qt view, say) passes ``mapper`` instead.
    """

    def __init__(
        self,
        content_width: float = 0.0,
        content_height: float = 0.0,
        *,
        drawables: Iterable[Drawable] = (),
        crop: Optional[Crop] = None,
        config: Optional[EditorConfig] = None,
        id_factory: Optional[IdFactory] = None,
        map_pointer: bool = False,
        mapper: Optional[Mapper] = None,
        input_stream: Optional[InputStream] = None,
        on_change: Optional[Callable[[str], None]] = None,
    ):
        self.config = config or EditorConfig()
        self.content_width = float(content_width)
        self.content_height = float(content_height)
        self._drawables: Collection = tuple(drawables)
        dupes = duplicate_ids(self._drawables)
        if dupes:
            raise ValueError(f"Duplicate drawable ids: {', '.join(dupes)}")
        self._crop = crop
        self._viewport = ViewportState(zoom=min(self.config.max_zoom, max(self.config.min_zoom, 1.0)))
        self._on_change = on_change
        self.history: Deque[str] = deque(maxlen=HISTORY_LIMIT)

        self.ctx = EditorContext(
            get_drawables=lambda: self._drawables,
            get_crop=lambda: self._crop,
            get_viewport=lambda: self._viewport,
            on_drawables_change=self._set_drawables,
            on_crop_change=self._set_crop,
            on_selection_change=lambda _selected: self._notify("selection"),
            on_viewport_change=self._set_viewport,
            on_gesture_end=self.history.append,
        )
        self.mapper = CoordinateMapper(lambda: self._viewport, self.content_size)
        self.selection = SelectionController(self.ctx)
        self.crop_overlay = CropOverlay(self.ctx, min_size=self.config.min_shape_size)
        self.controller = PointerInteractionController(
            self.ctx,
            self.selection,
            self.crop_overlay,
            config=self.config,
            id_factory=id_factory or counter_ids(start=counter_start(self._drawables)),
            mapper=mapper or (self.mapper.screen_to_canvas if map_pointer else None),
            input_stream=input_stream,
        )

    # ------------------------------------------------------------------
    # Sinks
    def _notify(self, what: str) -> None:
        if self._on_change is not None:
            self._on_change(what)

    def _set_drawables(self, drawables: Collection) -> None:
        self._drawables = tuple(drawables)
        self._notify("drawables")

    def _set_crop(self, crop: Optional[Crop]) -> None:
        self._crop = crop
        self._notify("crop")

    def _set_viewport(self, viewport: ViewportState) -> None:
        self._viewport = viewport
        self._notify("viewport")

    # ------------------------------------------------------------------
    # Read access
    @property
    def drawables(self) -> Collection:
        return self._drawables

    @property
    def crop(self) -> Optional[Crop]:
        return self._crop

    @property
    def viewport(self) -> ViewportState:
        return self._viewport

    @property
    def selected_id(self) -> Optional[str]:
        if self.selection.crop_selected:
            return CROP_SELECTION
        return self.selection.selected_id

    @property
    def tool(self) -> Optional[Tool]:
        return self.controller.tool

    def content_size(self):
        if self.content_width <= 0 or self.content_height <= 0:
            return None
        return self.content_width, self.content_height

    def set_background(self, width: float, height: float) -> None:
        self.content_width = float(width)
        self.content_height = float(height)

    # ------------------------------------------------------------------
    # Viewport
    def wheel(self, delta_y: float) -> float:
        zoom = on_wheel(
            delta_y, self._viewport.zoom, self.config.min_zoom, self.config.max_zoom, self.config.wheel_divisor
        )
        if zoom != self._viewport.zoom:
            self._set_viewport(self._viewport.with_zoom(zoom))
        return zoom

    def rotate(self, degrees: int) -> int:
        if degrees not in (90, -90):
            raise ValueError(f"rotation step must be 90 or -90, got {degrees}")
        self._set_viewport(self._viewport.with_rotation(degrees))
        return self._viewport.rotate

    def matrix(self) -> Matrix:
        return self._viewport.matrix(self.content_width, self.content_height)

    def visible_region(self):
        return visible_region(
            self.content_width,
            self.content_height,
            self._viewport.rotate,
            self._crop,
            cropping=self.controller.tool is Tool.CROP,
        )

    # ------------------------------------------------------------------
    # Keyboard
    def remove_crop(self) -> bool:
        self.selection.clear()
        return self.crop_overlay.remove()

    def handle_intent(self, intent: Union[Intent, str]) -> bool:
        intent = Intent(intent)
        if intent is Intent.CONFIRM:
            return self.controller.confirm_crop()
        return self.selection.handle_intent(intent)

    # ------------------------------------------------------------------
    # Rendering data
    def display_order(self) -> Collection:
        return ordered_for_display(self._drawables, self.selection.selected_id)

    def handles(self) -> Dict[str, Any]:
        """Handle geometry for the current selection, or the crop under the crop tool."""
        if self.controller.tool is Tool.CROP and self._crop is not None:
            return {
                "target": CROP_SELECTION,
                "resize": _handles_to_list(crop_handle_positions(self._crop)),
                "move": crop_to_dict(self._crop),
            }
        selected = find_drawable(self._drawables, self.selection.selected_id)
        if selected is None or self.controller.tool is not None:
            return {}
        stroke = self.config.handle_stroke_width
        bounds = move_handle_bounds(selected, stroke)
        return {
            "target": selected.id,
            "resize": _handles_to_list(handle_positions(selected, stroke)),
            "move": None if bounds is None else {
                "x": bounds.x, "y": bounds.y, "width": bounds.width, "height": bounds.height,
            },
        }

    def snapshot(self) -> Dict[str, Any]:
        provisional = self.controller.provisional
        if isinstance(provisional, Crop):
            provisional_data = crop_to_dict(provisional)
        elif provisional is not None:
            provisional_data = drawable_to_dict(provisional)
        else:
            provisional_data = None
        region = self.visible_region()
        session = self.controller.session
        return {
            "content_width": self.content_width,
            "content_height": self.content_height,
            "tool": None if self.controller.tool is None else self.controller.tool.value,
            "drawables": [drawable_to_dict(d) for d in self.display_order()],
            "crop": crop_to_dict(self._crop),
            "selected_id": self.selected_id,
            "session": None if session is None else session.kind,
            "provisional": provisional_data,
            "viewport": {
                "zoom": self._viewport.zoom,
                "translate_x": self._viewport.translate_x,
                "translate_y": self._viewport.translate_y,
                "rotate": self._viewport.rotate,
            },
            "visible_region": {"x": region.x, "y": region.y, "width": region.width, "height": region.height},
            "handles": self.handles(),
        }

    def close(self) -> None:
        self.controller.close()
        log.debug("Editor closed")


def _handles_to_list(handles) -> List[Dict[str, Any]]:
    return [
        {"handle_x": hx, "handle_y": hy, "x": point[0], "y": point[1]}
        for (hx, hy), point in handles.items()
    ]


__all__ = ["EditorState"]
