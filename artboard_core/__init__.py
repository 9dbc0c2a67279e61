"""Artboard core: vector shapes, viewport transform and pointer interaction."""
from __future__ import annotations

from .config import EditorConfig, ToolStyle, ToolStyles, load_config
from .context import EditorContext
from .controller import PointerInteractionController
from .crop import CropOverlay
from .editor import EditorState
from .geometry import (
    compute_bounds,
    crop_from_drag,
    ellipse_from_drag,
    handle_positions,
    line_from_drag,
    path_from_points,
    rect_from_drag,
    resize,
    resize_crop,
    translate,
    translate_crop,
)
from .selection import CROP_SELECTION, Intent, SelectionController
from .session import CallbackStream, InputStream, Session, Subscription
from .shapes import Bounds, Crop, Drawable, Ellipse, Line, Path, Rect, counter_ids, uuid_ids
from .tools import STRATEGIES, Tool, parse_tool
from .viewport import CoordinateMapper, ViewportState, compute_matrix, on_wheel, rotate_step

__all__ = [
    "EditorConfig",
    "ToolStyle",
    "ToolStyles",
    "load_config",
    "EditorContext",
    "PointerInteractionController",
    "CropOverlay",
    "EditorState",
    "compute_bounds",
    "crop_from_drag",
    "ellipse_from_drag",
    "handle_positions",
    "line_from_drag",
    "path_from_points",
    "rect_from_drag",
    "resize",
    "resize_crop",
    "translate",
    "translate_crop",
    "CROP_SELECTION",
    "Intent",
    "SelectionController",
    "CallbackStream",
    "InputStream",
    "Session",
    "Subscription",
    "Bounds",
    "Crop",
    "Drawable",
    "Ellipse",
    "Line",
    "Path",
    "Rect",
    "counter_ids",
    "uuid_ids",
    "STRATEGIES",
    "Tool",
    "parse_tool",
    "CoordinateMapper",
    "ViewportState",
    "compute_matrix",
    "on_wheel",
    "rotate_step",
]
