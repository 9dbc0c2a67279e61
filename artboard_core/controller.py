"""Pointer gesture state machine for the artboard.

The controller turns ``begin``/``move``/``end`` pointer events into shape
creation, shape resize/move, crop gestures and viewport panning. One
gesture (session) can be active at a time.

Shape and crop gestures run in canvas space: positions go through the
host's coordinate mapper first. Panning works on the positions as
delivered, in the un-zoomed frame of the viewport.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from .config import EditorConfig, ToolStyle
from .context import EditorContext
from .crop import CropOverlay
from .geometry import HandleX, HandleY, resize, translate
from .selection import SelectionController
from .session import (
    DefiningCrop,
    Drawing,
    InputStream,
    MovingCrop,
    MovingShape,
    PanningViewport,
    ResizingCrop,
    ResizingShape,
    Session,
)
from .shapes import Crop, Drawable, IdFactory, Path, Point, append_drawable, counter_ids, find_drawable, replace_drawable
from .tools import STRATEGIES, Tool, parse_tool

log = logging.getLogger("artboard.controller")

Mapper = Callable[[Point], Optional[Point]]

PROVISIONAL_ID = ""


class PointerInteractionController:
    """Drives one pointer gesture at a time against host-owned state."""

    def __init__(
        self,
        ctx: EditorContext,
        selection: SelectionController,
        crop_overlay: CropOverlay,
        *,
        config: Optional[EditorConfig] = None,
        id_factory: Optional[IdFactory] = None,
        mapper: Optional[Mapper] = None,
        input_stream: Optional[InputStream] = None,
    ):
        self.ctx = ctx
        self.selection = selection
        self.crop_overlay = crop_overlay
        self.config = config or EditorConfig()
        self._next_id = id_factory or counter_ids()
        self._mapper = mapper
        self._input = input_stream
        self._tool: Optional[Tool] = None
        self._session: Optional[Session] = None
        self._closed = False

    # ------------------------------------------------------------------
    # State
    @property
    def tool(self) -> Optional[Tool]:
        return self._tool

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def active(self) -> bool:
        return self._session is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def set_tool(self, tool: Union[Tool, str, None]) -> bool:
        """Switch tool; ``None`` is pointer mode. Refused mid-gesture."""
        tool = parse_tool(tool)
        if self._session is not None:
            log.warning("Cannot switch tool while a %s session is active", self._session.kind)
            return False
        self._tool = tool
        self.selection.clear()
        if tool is Tool.CROP:
            self.selection.select_crop()
        return True

    def style_for(self, tool: Tool) -> ToolStyle:
        return getattr(self.config.styles, tool.value)

    @property
    def provisional(self) -> Union[Drawable, Crop, None]:
        """Geometry of the gesture in progress, for the renderer."""
        session = self._session
        if isinstance(session, Drawing):
            strategy = STRATEGIES[session.tool]
            geom = strategy.from_drag(session.points, self.config.min_shape_size)
            if geom is None:
                return None
            return strategy.to_shape(PROVISIONAL_ID, geom, self.style_for(session.tool))
        if isinstance(session, DefiningCrop):
            return self.crop_overlay.provisional(session)
        return None

    # ------------------------------------------------------------------
    # Helpers
    def _to_canvas(self, pos: Point) -> Optional[Point]:
        if self._mapper is None:
            return (float(pos[0]), float(pos[1]))
        mapped = self._mapper(pos)
        if mapped is None:
            log.error("Coordinate mapping not available, aborting gesture")
        return mapped

    def _can_begin(self) -> bool:
        if self._closed:
            log.warning("Controller is closed, ignoring pointer begin")
            return False
        if self._session is not None:
            log.warning("Pointer begin while a %s session is active, ignored", self._session.kind)
            return False
        return True

    def _start(self, session: Session) -> bool:
        self.selection.clear()
        if self._input is not None:
            session.subscription = self._input.subscribe(self.move, self.end)
        self._session = session
        log.debug("Started %s session", session.kind)
        return True

    def _finish(self) -> Optional[Session]:
        session, self._session = self._session, None
        if session is not None:
            session.release()
        return session

    def _abort(self) -> None:
        session = self._finish()
        if session is not None:
            log.warning("Aborted %s session", session.kind)

    # ------------------------------------------------------------------
    # Begin
    def begin(self, pos: Point) -> bool:
        """Pointer pressed on the artboard background."""
        if not self._can_begin():
            return False
        tool = self._tool
        if tool is None:
            return self._start(PanningViewport(last_pos=(float(pos[0]), float(pos[1]))))

        canvas_pos = self._to_canvas(pos)
        if canvas_pos is None:
            return False
        if tool is Tool.CROP:
            session = self.crop_overlay.begin_define(canvas_pos)
            if session is None:
                return False
            return self._start(session)
        return self._start(Drawing(tool=tool, points=[canvas_pos]))

    def begin_resize(self, drawable_id: str, handle_x: HandleX, handle_y: HandleY, pos: Point) -> bool:
        """Pointer pressed on a resize handle of the selected drawable."""
        target = self._handle_target(drawable_id)
        if target is None:
            return False
        if isinstance(target, Path):
            log.warning("Paths cannot be resized (%s)", drawable_id)
            return False
        if self._to_canvas(pos) is None:
            return False
        return self._start(ResizingShape(id=drawable_id, handle_x=handle_x, handle_y=handle_y))

    def begin_move(self, drawable_id: str, pos: Point) -> bool:
        """Pointer pressed on the move handle of the selected drawable."""
        if self._handle_target(drawable_id) is None:
            return False
        canvas_pos = self._to_canvas(pos)
        if canvas_pos is None:
            return False
        return self._start(MovingShape(id=drawable_id, last_pos=canvas_pos))

    def _handle_target(self, drawable_id: str) -> Optional[Drawable]:
        if not self._can_begin():
            return None
        if self._tool is not None:
            log.debug("Shape handles are inactive while the %s tool is selected", self._tool.value)
            return None
        if drawable_id != self.selection.selected_id:
            log.warning("Handle gesture on %s, which is not selected", drawable_id)
            return None
        target = find_drawable(self.ctx.get_drawables(), drawable_id)
        if target is None:
            log.warning("Handle gesture on unknown drawable %s", drawable_id)
        return target

    def begin_crop_resize(self, handle_x: HandleX, handle_y: HandleY, pos: Point) -> bool:
        if not self._can_begin() or self._tool is not Tool.CROP:
            return False
        if self._to_canvas(pos) is None:
            return False
        session = self.crop_overlay.begin_resize(handle_x, handle_y)
        if session is None:
            return False
        return self._start(session)

    def begin_crop_move(self, pos: Point) -> bool:
        if not self._can_begin() or self._tool is not Tool.CROP:
            return False
        canvas_pos = self._to_canvas(pos)
        if canvas_pos is None:
            return False
        session = self.crop_overlay.begin_move(canvas_pos)
        if session is None:
            return False
        return self._start(session)

    # ------------------------------------------------------------------
    # Move / end
    def move(self, pos: Point) -> bool:
        session = self._session
        if session is None:
            return False

        if isinstance(session, PanningViewport):
            x, y = float(pos[0]), float(pos[1])
            dx = x - session.last_pos[0]
            dy = y - session.last_pos[1]
            session.last_pos = (x, y)
            self.ctx.on_viewport_change(self.ctx.get_viewport().with_pan(dx, dy))
            return True

        canvas_pos = self._to_canvas(pos)
        if canvas_pos is None:
            self._abort()
            return False

        if isinstance(session, Drawing):
            if STRATEGIES[session.tool].accumulate:
                session.points.append(canvas_pos)
            else:
                session.points[1:] = [canvas_pos]
        elif isinstance(session, ResizingShape):
            self._update_drawable(
                session.id,
                lambda d: resize(d, session.handle_x, session.handle_y, canvas_pos[0], canvas_pos[1],
                                 self.config.min_shape_size),
            )
        elif isinstance(session, MovingShape):
            dx = canvas_pos[0] - session.last_pos[0]
            dy = canvas_pos[1] - session.last_pos[1]
            session.last_pos = canvas_pos
            self._update_drawable(session.id, lambda d: translate(d, dx, dy))
        elif isinstance(session, DefiningCrop):
            self.crop_overlay.update_define(session, canvas_pos)
        elif isinstance(session, ResizingCrop):
            self.crop_overlay.update_resize(session, canvas_pos)
        elif isinstance(session, MovingCrop):
            self.crop_overlay.update_move(session, canvas_pos)
        return True

    def _update_drawable(self, drawable_id: str, change) -> None:
        drawables = self.ctx.get_drawables()
        target = find_drawable(drawables, drawable_id)
        if target is None:
            log.warning("Drawable %s disappeared during the gesture", drawable_id)
            return
        self.ctx.on_drawables_change(replace_drawable(drawables, change(target)))

    def end(self, pos: Optional[Point] = None) -> bool:
        """Pointer released. A final position, when given, counts as a last move.

        Freehand strokes do not take the release position as a point.
        """
        session = self._session
        if session is None:
            return False
        if pos is not None and not (isinstance(session, Drawing) and STRATEGIES[session.tool].accumulate):
            if not self.move(pos):
                return False

        self._finish()
        if isinstance(session, Drawing):
            self._commit_drawing(session)
        elif isinstance(session, DefiningCrop):
            if self.crop_overlay.finish_define(session) is not None:
                self.selection.select_crop()
        elif isinstance(session, (ResizingCrop, MovingCrop)):
            self.selection.select_crop()
        log.debug("Finished %s session", session.kind)
        self.ctx.on_gesture_end(session.kind)
        return True

    def _commit_drawing(self, session: Drawing) -> None:
        strategy = STRATEGIES[session.tool]
        geom = strategy.from_drag(session.points, self.config.min_shape_size)
        if geom is None:
            log.debug("%s drag below minimum size, discarded", session.tool.value)
            return
        drawables = self.ctx.get_drawables()
        new_id = self._next_id()
        while find_drawable(drawables, new_id) is not None:
            log.debug("Id %s already taken, drawing another", new_id)
            new_id = self._next_id()
        drawable = strategy.to_shape(new_id, geom, self.style_for(session.tool))
        self.ctx.on_drawables_change(append_drawable(drawables, drawable))
        self.selection.select(drawable.id, check=False)

    # ------------------------------------------------------------------
    # Clicks and teardown
    def click_drawable(self, drawable_id: str) -> bool:
        """Discrete click on a drawable; returns whether the click was consumed."""
        if self._tool is not None or self._session is not None:
            return False
        if find_drawable(self.ctx.get_drawables(), drawable_id) is None:
            return False
        self.selection.select(drawable_id)
        return True

    def confirm_crop(self) -> bool:
        """Leave the crop tool once a crop is in place."""
        if self._tool is not Tool.CROP or self.ctx.get_crop() is None:
            return False
        return self.set_tool(None)

    def close(self) -> None:
        """Tear down: drop any gesture in progress without committing it."""
        if self._session is not None:
            session = self._finish()
            log.info("Discarded %s session on teardown", session.kind)
        self._closed = True

    def __enter__(self) -> "PointerInteractionController":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["PointerInteractionController", "Mapper", "PROVISIONAL_ID"]
