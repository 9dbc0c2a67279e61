"""Pure geometry operations on drawables and crops.

Nothing in here raises for an unsupported shape: the input comes back
unchanged and a warning is logged, so partially migrated data cannot take
the editor down.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, Literal, Optional, Sequence, Tuple

from .shapes import Bounds, Crop, Drawable, Ellipse, Line, Path, Point, Rect

log = logging.getLogger("artboard.geometry")

HandleX = Literal["left", "right"]
HandleY = Literal["top", "bottom"]
Handle = Tuple[HandleX, HandleY]

MIN_SIZE = 10.0

CORNER_HANDLES: Tuple[Handle, ...] = (
    ("left", "top"),
    ("right", "top"),
    ("left", "bottom"),
    ("right", "bottom"),
)
LINE_HANDLES: Tuple[Handle, ...] = (("left", "top"), ("right", "bottom"))


def translate(drawable: Drawable, dx: float, dy: float) -> Drawable:
    """Shift ``drawable`` by ``(dx, dy)``."""
    if isinstance(drawable, Rect):
        return replace(drawable, x=drawable.x + dx, y=drawable.y + dy)
    if isinstance(drawable, Ellipse):
        return replace(drawable, cx=drawable.cx + dx, cy=drawable.cy + dy)
    if isinstance(drawable, Line):
        return replace(
            drawable,
            x1=drawable.x1 + dx,
            y1=drawable.y1 + dy,
            x2=drawable.x2 + dx,
            y2=drawable.y2 + dy,
        )
    if isinstance(drawable, Path):
        return replace(drawable, points=tuple((x + dx, y + dy) for x, y in drawable.points))
    log.warning("Unknown drawable type, cannot translate %r", drawable)
    return drawable


def _resize_box(
    x: float,
    y: float,
    width: float,
    height: float,
    handle_x: str,
    handle_y: str,
    pointer_x: float,
    pointer_y: float,
    min_size: float,
) -> Tuple[float, float, float, float]:
    if handle_x == "left":
        width = max(min_size, width - (pointer_x - x))
        x = pointer_x
    elif handle_x == "right":
        width = max(min_size, pointer_x - x)

    if handle_y == "top":
        height = max(min_size, height - (pointer_y - y))
        y = pointer_y
    elif handle_y == "bottom":
        height = max(min_size, pointer_y - y)
    return x, y, width, height


def resize(
    drawable: Drawable,
    handle_x: HandleX,
    handle_y: HandleY,
    pointer_x: float,
    pointer_y: float,
    min_size: float = MIN_SIZE,
) -> Drawable:
    """Drag the ``(handle_x, handle_y)`` handle of ``drawable`` to the pointer.

    The edge opposite the dragged handle stays where it is. Paths cannot be
    resized and come back unchanged.
    """
    if isinstance(drawable, Rect):
        x, y, width, height = _resize_box(
            drawable.x, drawable.y, drawable.width, drawable.height,
            handle_x, handle_y, pointer_x, pointer_y, min_size,
        )
        return replace(drawable, x=x, y=y, width=width, height=height)

    if isinstance(drawable, Ellipse):
        cx, cy, rx, ry = drawable.cx, drawable.cy, drawable.rx, drawable.ry
        # half of the edge movement goes to the radius, half to the center
        if handle_x == "left":
            half = (pointer_x - (cx - rx)) / 2
            rx = max(min_size, rx - half)
            cx += half
        elif handle_x == "right":
            half = (pointer_x - (cx + rx)) / 2
            rx = max(min_size, rx + half)
            cx += half

        if handle_y == "top":
            half = (pointer_y - (cy - ry)) / 2
            ry = max(min_size, ry - half)
            cy += half
        elif handle_y == "bottom":
            half = (pointer_y - (cy + ry)) / 2
            ry = max(min_size, ry + half)
            cy += half
        return replace(drawable, cx=cx, cy=cy, rx=rx, ry=ry)

    if isinstance(drawable, Line):
        x1, y1, x2, y2 = drawable.x1, drawable.y1, drawable.x2, drawable.y2
        if handle_x == "left":
            x1 = pointer_x
        elif handle_x == "right":
            x2 = pointer_x
        if handle_y == "top":
            y1 = pointer_y
        elif handle_y == "bottom":
            y2 = pointer_y
        return replace(drawable, x1=x1, y1=y1, x2=x2, y2=y2)

    log.warning("Can't resize item of type %s", getattr(drawable, "type", type(drawable).__name__))
    return drawable


def compute_bounds(drawable: Drawable) -> Optional[Bounds]:
    if isinstance(drawable, Rect):
        return Bounds(drawable.x, drawable.y, drawable.width, drawable.height)
    if isinstance(drawable, Ellipse):
        return Bounds(drawable.cx - drawable.rx, drawable.cy - drawable.ry, 2 * drawable.rx, 2 * drawable.ry)
    if isinstance(drawable, Line):
        return _bounds_of(((drawable.x1, drawable.y1), (drawable.x2, drawable.y2)))
    if isinstance(drawable, Path):
        return _bounds_of(drawable.points)
    log.warning("Unknown drawable type, no bounds for %r", drawable)
    return None


def _bounds_of(points: Iterable[Point]) -> Optional[Bounds]:
    pts = list(points)
    if not pts:
        return None
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    lo_x, lo_y = min(xs), min(ys)
    return Bounds(lo_x, lo_y, max(xs) - lo_x, max(ys) - lo_y)


# ---------------------------------------------------------------------------
# Drag builders


def rect_from_drag(p0: Point, p1: Point, min_width: float = MIN_SIZE, min_height: float = MIN_SIZE) -> Optional[Bounds]:
    """Normalize two drag corners into a rectangle.

    Only a drag that is below the floor on *both* axes is rejected; a thin
    shape that clears one floor is accepted.
    """
    lower_x, higher_x = min(p0[0], p1[0]), max(p0[0], p1[0])
    lower_y, higher_y = min(p0[1], p1[1]), max(p0[1], p1[1])
    width = higher_x - lower_x
    height = higher_y - lower_y
    if width < min_width and height < min_height:
        return None
    return Bounds(lower_x, lower_y, width, height)


def ellipse_from_drag(
    p0: Point, p1: Point, min_width: float = MIN_SIZE, min_height: float = MIN_SIZE
) -> Optional[Tuple[float, float, float, float]]:
    """Same floor rule as :func:`rect_from_drag`; returns ``(cx, cy, rx, ry)``."""
    box = rect_from_drag(p0, p1, min_width, min_height)
    if box is None:
        return None
    half_w = box.width / 2
    half_h = box.height / 2
    return (box.x + half_w, box.y + half_h, half_w, half_h)


def line_from_drag(p0: Point, p1: Point) -> Tuple[float, float, float, float]:
    return (p0[0], p0[1], p1[0], p1[1])


def path_from_points(points: Sequence[Point]) -> Tuple[Point, ...]:
    return tuple((float(x), float(y)) for x, y in points)


# ---------------------------------------------------------------------------
# Crop


def translate_crop(crop: Crop, dx: float, dy: float) -> Crop:
    return replace(crop, x=crop.x + dx, y=crop.y + dy)


def resize_crop(
    crop: Crop,
    handle_x: HandleX,
    handle_y: HandleY,
    pointer_x: float,
    pointer_y: float,
    min_size: float = MIN_SIZE,
) -> Crop:
    x, y, width, height = _resize_box(
        crop.x, crop.y, crop.width, crop.height, handle_x, handle_y, pointer_x, pointer_y, min_size
    )
    return Crop(x=x, y=y, width=width, height=height)


def crop_from_drag(p0: Point, p1: Point, min_width: float = MIN_SIZE, min_height: float = MIN_SIZE) -> Optional[Crop]:
    box = rect_from_drag(p0, p1, min_width, min_height)
    if box is None:
        return None
    return Crop(x=box.x, y=box.y, width=box.width, height=box.height)


# ---------------------------------------------------------------------------
# Handles


def move_handle_bounds(drawable: Drawable, handle_stroke_width: float) -> Optional[Bounds]:
    """Bounds of the move handle: shape bounds grown by half the handle stroke."""
    bounds = compute_bounds(drawable)
    if bounds is None:
        return None
    return bounds.inflate(handle_stroke_width / 2)


def handle_positions(drawable: Drawable, handle_stroke_width: float) -> Dict[Handle, Point]:
    """Centers of the resize handles offered for ``drawable``.

    Lines get two handles sitting on their endpoints; paths get none.
    """
    if isinstance(drawable, Path):
        return {}
    if isinstance(drawable, Line):
        return {
            ("left", "top"): (drawable.x1, drawable.y1),
            ("right", "bottom"): (drawable.x2, drawable.y2),
        }
    box = move_handle_bounds(drawable, handle_stroke_width)
    if box is None:
        return {}
    return {
        ("left", "top"): (box.x, box.y),
        ("right", "top"): (box.right, box.y),
        ("left", "bottom"): (box.x, box.bottom),
        ("right", "bottom"): (box.right, box.bottom),
    }


def crop_handle_positions(crop: Crop) -> Dict[Handle, Point]:
    return {
        ("left", "top"): (crop.x, crop.y),
        ("right", "top"): (crop.x + crop.width, crop.y),
        ("left", "bottom"): (crop.x, crop.y + crop.height),
        ("right", "bottom"): (crop.x + crop.width, crop.y + crop.height),
    }


__all__ = [
    "HandleX",
    "HandleY",
    "Handle",
    "MIN_SIZE",
    "CORNER_HANDLES",
    "LINE_HANDLES",
    "translate",
    "resize",
    "compute_bounds",
    "rect_from_drag",
    "ellipse_from_drag",
    "line_from_drag",
    "path_from_points",
    "translate_crop",
    "resize_crop",
    "crop_from_drag",
    "move_handle_bounds",
    "handle_positions",
    "crop_handle_positions",
]
