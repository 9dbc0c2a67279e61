"""The crop overlay: one optional rectangle with its own drag gestures."""
from __future__ import annotations

import logging
from typing import Optional

from .context import EditorContext
from .geometry import MIN_SIZE, HandleX, HandleY, crop_from_drag, resize_crop, translate_crop
from .session import DefiningCrop, MovingCrop, ResizingCrop
from .shapes import Crop, Point

log = logging.getLogger("artboard.crop")


class CropOverlay:
    """Defines, resizes and moves the host's crop.

    A crop can only be defined while none exists; resizing and moving need
    an existing one.
    """

    def __init__(self, ctx: EditorContext, min_size: float = MIN_SIZE):
        self.ctx = ctx
        self.min_size = min_size

    @property
    def crop(self) -> Optional[Crop]:
        return self.ctx.get_crop()

    def can_define(self) -> bool:
        return self.crop is None

    def can_transform(self) -> bool:
        return self.crop is not None

    # ------------------------------------------------------------------
    # Define
    def begin_define(self, pos: Point) -> Optional[DefiningCrop]:
        if not self.can_define():
            log.debug("Crop already defined, ignoring define gesture")
            return None
        return DefiningCrop(start=pos)

    def update_define(self, session: DefiningCrop, pos: Point) -> None:
        session.current = pos

    def provisional(self, session: DefiningCrop) -> Optional[Crop]:
        if session.current is None:
            return None
        return crop_from_drag(session.start, session.current, self.min_size, self.min_size)

    def finish_define(self, session: DefiningCrop) -> Optional[Crop]:
        crop = self.provisional(session)
        if crop is None:
            log.debug("Crop drag below minimum size, discarded")
            return None
        self.ctx.on_crop_change(crop)
        return crop

    # ------------------------------------------------------------------
    # Resize / move
    def begin_resize(self, handle_x: HandleX, handle_y: HandleY) -> Optional[ResizingCrop]:
        if not self.can_transform():
            log.debug("No crop to resize")
            return None
        return ResizingCrop(handle_x=handle_x, handle_y=handle_y)

    def update_resize(self, session: ResizingCrop, pos: Point) -> None:
        crop = self.crop
        if crop is None:
            log.warning("Crop vanished during resize")
            return
        self.ctx.on_crop_change(resize_crop(crop, session.handle_x, session.handle_y, pos[0], pos[1], self.min_size))

    def begin_move(self, pos: Point) -> Optional[MovingCrop]:
        if not self.can_transform():
            log.debug("No crop to move")
            return None
        return MovingCrop(last_pos=pos)

    def update_move(self, session: MovingCrop, pos: Point) -> None:
        crop = self.crop
        if crop is None:
            log.warning("Crop vanished during move")
            return
        dx = pos[0] - session.last_pos[0]
        dy = pos[1] - session.last_pos[1]
        session.last_pos = pos
        self.ctx.on_crop_change(translate_crop(crop, dx, dy))

    def remove(self) -> bool:
        if self.crop is None:
            return False
        self.ctx.on_crop_change(None)
        return True


__all__ = ["CropOverlay"]
