"""Drawable shape model for the artboard.

Drawables are frozen dataclasses tagged by a ``type`` class attribute. A
collection is a plain tuple of drawables whose order is the z-order (later
entries paint on top). Every helper here returns a new tuple instead of
mutating, so snapshots can be handed to the host between events.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Optional, Sequence, Tuple, Union
from uuid import uuid4

log = logging.getLogger("artboard.shapes")

Point = Tuple[float, float]


@dataclass(frozen=True)
class Rect:
    id: str
    x: float
    y: float
    width: float
    height: float
    fill: str = "black"
    stroke: str = "none"
    stroke_width: float = 0.0

    type: ClassVar[str] = "rect"


@dataclass(frozen=True)
class Ellipse:
    id: str
    cx: float
    cy: float
    rx: float
    ry: float
    fill: str = "black"
    stroke: str = "none"
    stroke_width: float = 0.0

    type: ClassVar[str] = "ellipse"


@dataclass(frozen=True)
class Line:
    id: str
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str = "black"
    stroke_width: float = 5.0

    type: ClassVar[str] = "line"


@dataclass(frozen=True)
class Path:
    """Freehand stroke; ``points`` keeps insertion (stroke) order."""

    id: str
    points: Tuple[Point, ...] = field(default_factory=tuple)
    stroke: str = "black"
    stroke_width: float = 5.0

    type: ClassVar[str] = "path"


Drawable = Union[Rect, Ellipse, Line, Path]
Collection = Tuple[Drawable, ...]

DRAWABLE_TYPES: Dict[str, type] = {cls.type: cls for cls in (Rect, Ellipse, Line, Path)}


@dataclass(frozen=True)
class Crop:
    """The single optional clipping rectangle."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inflate(self, amount: float) -> "Bounds":
        return Bounds(self.x - amount, self.y - amount, self.width + 2 * amount, self.height + 2 * amount)


# ---------------------------------------------------------------------------
# Id factories


IdFactory = Callable[[], str]


def counter_ids(prefix: str = "S", start: int = 1) -> IdFactory:
    """Return a monotonic id factory producing ``S0001``, ``S0002``, ..."""
    counter = itertools.count(start)

    def next_id() -> str:
        return f"{prefix}{next(counter):04d}"

    return next_id


def counter_start(collection: Iterable[Drawable], prefix: str = "S") -> int:
    """First counter value above every ``<prefix>NNNN`` id in ``collection``."""
    highest = 0
    for item in collection:
        suffix = item.id[len(prefix):] if item.id.startswith(prefix) else ""
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return highest + 1


def duplicate_ids(collection: Iterable[Drawable]) -> List[str]:
    seen, dupes = set(), []
    for item in collection:
        if item.id in seen and item.id not in dupes:
            dupes.append(item.id)
        seen.add(item.id)
    return dupes


def uuid_ids() -> IdFactory:
    def next_id() -> str:
        return str(uuid4())

    return next_id


# ---------------------------------------------------------------------------
# Copy-on-write collection helpers


def find_drawable(collection: Sequence[Drawable], drawable_id: Optional[str]) -> Optional[Drawable]:
    if drawable_id is None:
        return None
    for item in collection:
        if item.id == drawable_id:
            return item
    return None


def append_drawable(collection: Sequence[Drawable], drawable: Drawable) -> Collection:
    return tuple(collection) + (drawable,)


def replace_drawable(collection: Sequence[Drawable], drawable: Drawable) -> Collection:
    """Swap the entry sharing ``drawable.id`` in place, keeping z-order."""
    return tuple(drawable if item.id == drawable.id else item for item in collection)


def remove_drawable(collection: Sequence[Drawable], drawable_id: str) -> Collection:
    return tuple(item for item in collection if item.id != drawable_id)


def ordered_for_display(collection: Sequence[Drawable], selected_id: Optional[str]) -> Collection:
    """Presentation order with the selected drawable painted last.

    The stored collection keeps its order; only renderers use this.
    """
    if selected_id is None:
        return tuple(collection)
    rest = [item for item in collection if item.id != selected_id]
    chosen = [item for item in collection if item.id == selected_id]
    return tuple(rest + chosen)


# ---------------------------------------------------------------------------
# Dict form used by the HTTP service


def drawable_to_dict(drawable: Drawable) -> Dict[str, Any]:
    if isinstance(drawable, Rect):
        return {
            "type": "rect",
            "id": drawable.id,
            "x": drawable.x,
            "y": drawable.y,
            "width": drawable.width,
            "height": drawable.height,
            "fill": drawable.fill,
            "stroke": drawable.stroke,
            "stroke_width": drawable.stroke_width,
        }
    if isinstance(drawable, Ellipse):
        return {
            "type": "ellipse",
            "id": drawable.id,
            "cx": drawable.cx,
            "cy": drawable.cy,
            "rx": drawable.rx,
            "ry": drawable.ry,
            "fill": drawable.fill,
            "stroke": drawable.stroke,
            "stroke_width": drawable.stroke_width,
        }
    if isinstance(drawable, Line):
        return {
            "type": "line",
            "id": drawable.id,
            "x1": drawable.x1,
            "y1": drawable.y1,
            "x2": drawable.x2,
            "y2": drawable.y2,
            "stroke": drawable.stroke,
            "stroke_width": drawable.stroke_width,
        }
    if isinstance(drawable, Path):
        return {
            "type": "path",
            "id": drawable.id,
            "points": [list(p) for p in drawable.points],
            "stroke": drawable.stroke,
            "stroke_width": drawable.stroke_width,
        }
    raise TypeError(f"Unsupported drawable {drawable!r}")


NUMERIC_FIELDS = frozenset(
    {"x", "y", "width", "height", "cx", "cy", "rx", "ry", "x1", "y1", "x2", "y2", "stroke_width"}
)


def _point_from_value(value: Any) -> Point:
    if len(value) != 2:
        raise ValueError(f"path point must have two coordinates, got {value!r}")
    return (float(value[0]), float(value[1]))


def drawable_from_dict(data: Dict[str, Any]) -> Optional[Drawable]:
    """Build a drawable from its dict form; unknown types yield ``None``.

    Numeric fields are coerced with ``float``. Malformed values raise
    ``ValueError`` and missing or unknown fields raise ``TypeError``.
    """
    if "type" not in data:
        raise ValueError(f"drawable has no type: {data!r}")
    typ = data["type"]
    cls = DRAWABLE_TYPES.get(typ)
    if cls is None:
        log.warning("Unknown drawable type %r, skipping %r", typ, data)
        return None
    kwargs = {key: value for key, value in data.items() if key != "type"}
    for key in NUMERIC_FIELDS.intersection(kwargs):
        kwargs[key] = float(kwargs[key])
    if cls is Path:
        kwargs["points"] = tuple(_point_from_value(p) for p in kwargs.get("points", ()))
    return cls(**kwargs)


def drawables_from_dicts(items: Iterable[Dict[str, Any]]) -> Collection:
    out = []
    for item in items or []:
        drawable = drawable_from_dict(item)
        if drawable is not None:
            out.append(drawable)
    return tuple(out)


def crop_to_dict(crop: Optional[Crop]) -> Optional[Dict[str, float]]:
    if crop is None:
        return None
    return {"x": crop.x, "y": crop.y, "width": crop.width, "height": crop.height}


def crop_from_dict(data: Optional[Dict[str, Any]]) -> Optional[Crop]:
    if not data:
        return None
    return Crop(x=float(data["x"]), y=float(data["y"]), width=float(data["width"]), height=float(data["height"]))


__all__ = [
    "Point",
    "Rect",
    "Ellipse",
    "Line",
    "Path",
    "Drawable",
    "Collection",
    "Crop",
    "Bounds",
    "IdFactory",
    "counter_ids",
    "counter_start",
    "duplicate_ids",
    "uuid_ids",
    "find_drawable",
    "append_drawable",
    "replace_drawable",
    "remove_drawable",
    "ordered_for_display",
    "drawable_to_dict",
    "drawable_from_dict",
    "drawables_from_dicts",
    "crop_to_dict",
    "crop_from_dict",
]
