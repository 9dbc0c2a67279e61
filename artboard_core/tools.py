"""Drawing tools and the strategy table shared by the drag controller.

Each draw tool is described by a :class:`DrawStrategy`: ``from_drag`` turns
the recorded drag points into provisional geometry (or ``None`` while the
drag is too small) and ``to_shape`` builds the committed drawable.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence

from .config import ToolStyle
from .geometry import ellipse_from_drag, line_from_drag, path_from_points, rect_from_drag
from .shapes import Drawable, Ellipse, Line, Path, Point, Rect


class Tool(str, Enum):
    PEN = "pen"
    RECT = "rect"
    ELLIPSE = "ellipse"
    LINE = "line"
    CROP = "crop"


DRAW_TOOLS = (Tool.PEN, Tool.RECT, Tool.ELLIPSE, Tool.LINE)


@dataclass(frozen=True)
class DrawStrategy:
    from_drag: Callable[[Sequence[Point], float], Optional[Any]]
    to_shape: Callable[[str, Any, ToolStyle], Drawable]
    accumulate: bool = False  # keep every move point instead of only the latest corner


def _rect_from_points(points: Sequence[Point], min_size: float):
    if len(points) < 2:
        return None
    return rect_from_drag(points[0], points[-1], min_size, min_size)


def _ellipse_from_points(points: Sequence[Point], min_size: float):
    if len(points) < 2:
        return None
    return ellipse_from_drag(points[0], points[-1], min_size, min_size)


def _line_from_points(points: Sequence[Point], _min_size: float):
    if len(points) < 2:
        return None
    return line_from_drag(points[0], points[-1])


def _path_from_points(points: Sequence[Point], _min_size: float):
    return path_from_points(points)


def _rect_shape(shape_id: str, box, style: ToolStyle) -> Rect:
    return Rect(
        id=shape_id,
        x=box.x,
        y=box.y,
        width=box.width,
        height=box.height,
        fill=style.fill,
        stroke=style.stroke,
        stroke_width=style.stroke_width,
    )


def _ellipse_shape(shape_id: str, geom, style: ToolStyle) -> Ellipse:
    cx, cy, rx, ry = geom
    return Ellipse(
        id=shape_id, cx=cx, cy=cy, rx=rx, ry=ry,
        fill=style.fill, stroke=style.stroke, stroke_width=style.stroke_width,
    )


def _line_shape(shape_id: str, geom, style: ToolStyle) -> Line:
    x1, y1, x2, y2 = geom
    return Line(id=shape_id, x1=x1, y1=y1, x2=x2, y2=y2, stroke=style.stroke, stroke_width=style.stroke_width)


def _path_shape(shape_id: str, points, style: ToolStyle) -> Path:
    return Path(id=shape_id, points=tuple(points), stroke=style.stroke, stroke_width=style.stroke_width)


STRATEGIES: Dict[Tool, DrawStrategy] = {
    Tool.PEN: DrawStrategy(_path_from_points, _path_shape, accumulate=True),
    Tool.RECT: DrawStrategy(_rect_from_points, _rect_shape),
    Tool.ELLIPSE: DrawStrategy(_ellipse_from_points, _ellipse_shape),
    Tool.LINE: DrawStrategy(_line_from_points, _line_shape),
}


def parse_tool(name: Optional[str]) -> Optional[Tool]:
    """``None``/``""``/``"pointer"`` select pointer mode; unknown names raise ``ValueError``."""
    if name in (None, "", "pointer"):
        return None
    return Tool(name)


__all__ = ["Tool", "DRAW_TOOLS", "DrawStrategy", "STRATEGIES", "parse_tool"]
