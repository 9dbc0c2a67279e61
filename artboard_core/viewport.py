"""Viewport transform: zoom, 90° rotation steps and pan.

The matrix is the usual 2D affine ``(a, b, c, d, e, f)`` mapping content
(canvas) coordinates to display coordinates::

    x' = a*x + c*y + e
    y' = b*x + d*y + f
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

import numpy as np

from .shapes import Bounds, Crop, Point

log = logging.getLogger("artboard.viewport")

Matrix = Tuple[float, float, float, float, float, float]

ROTATIONS = (0, 90, 180, 270)
DEFAULT_MIN_ZOOM = 1.0
DEFAULT_MAX_ZOOM = 4.0
WHEEL_DIVISOR = 100.0


def compute_matrix(
    zoom: float,
    content_width: float,
    content_height: float,
    translate_x: float,
    translate_y: float,
    rotate: int,
) -> Matrix:
    """Build the zoom/rotate/pan matrix keeping content centered in its frame."""
    m = [zoom, 0.0, 0.0, zoom, translate_x, translate_y]
    w, h = content_width, content_height

    if rotate == 0:
        m[4] -= (w / 2) * (zoom - 1)
        m[5] -= (h / 2) * (zoom - 1)
    elif rotate == 90:
        # 1 0 0 1 -> 0 1 -1 0
        m[1] = m[0]
        m[0] = 0.0
        m[2] = -m[3]
        m[3] = 0.0
        m[4] += h + (h / 2) * (zoom - 1)
        m[5] -= (w / 2) * (zoom - 1)
    elif rotate == 180:
        # 1 0 0 1 -> -1 0 0 -1
        m[0] *= -1
        m[3] *= -1
        m[4] += w + (w / 2) * (zoom - 1)
        m[5] += h + (h / 2) * (zoom - 1)
    elif rotate == 270:
        # 1 0 0 1 -> 0 -1 1 0
        m[1] = -m[0]
        m[0] = 0.0
        m[2] = m[3]
        m[3] = 0.0
        m[4] -= (h / 2) * (zoom - 1)
        m[5] += w + (w / 2) * (zoom - 1)
    else:
        log.warning("Unsupported rotation %r, ignoring it", rotate)
    return (m[0], m[1], m[2], m[3], m[4], m[5])


def on_wheel(
    delta_y: float,
    current_zoom: float,
    min_zoom: float = DEFAULT_MIN_ZOOM,
    max_zoom: float = DEFAULT_MAX_ZOOM,
    divisor: float = WHEEL_DIVISOR,
) -> float:
    """Zoom in on wheel-up (negative delta), clamped to ``[min_zoom, max_zoom]``."""
    return min(max_zoom, max(min_zoom, current_zoom - delta_y / divisor))


def rotate_step(rotate: int, degrees: int) -> int:
    """Step the rotation by ``+90``/``-90`` degrees, wrapping into ``0..270``."""
    if degrees >= 0:
        return (rotate + degrees) % 360
    rotation = rotate + degrees
    return 270 if rotation < 0 else rotation


def rotated_content_size(content_width: float, content_height: float, rotate: int) -> Tuple[float, float]:
    if rotate in (90, 270):
        return content_height, content_width
    return content_width, content_height


def visible_region(
    content_width: float,
    content_height: float,
    rotate: int,
    crop: Optional[Crop],
    cropping: bool = False,
) -> Bounds:
    """Region shown to the user: the crop, unless the crop tool is editing it."""
    if crop is not None and not cropping:
        return Bounds(crop.x, crop.y, crop.width, crop.height)
    width, height = rotated_content_size(content_width, content_height, rotate)
    return Bounds(0.0, 0.0, width, height)


# ---------------------------------------------------------------------------
# Matrix helpers


def matrix_to_array(matrix: Sequence[float]) -> np.ndarray:
    a, b, c, d, e, f = (float(v) for v in matrix)
    return np.array([[a, c, e], [b, d, f], [0.0, 0.0, 1.0]], dtype=float)


def array_to_matrix(array: np.ndarray) -> Matrix:
    return (
        float(array[0, 0]),
        float(array[1, 0]),
        float(array[0, 1]),
        float(array[1, 1]),
        float(array[0, 2]),
        float(array[1, 2]),
    )


def invert_matrix(matrix: Sequence[float]) -> Optional[Matrix]:
    """Inverse of ``matrix`` or ``None`` when it is singular (zero zoom)."""
    arr = matrix_to_array(matrix)
    if abs(np.linalg.det(arr)) < 1e-12:
        log.warning("Viewport matrix %r is singular", tuple(matrix))
        return None
    return array_to_matrix(np.linalg.inv(arr))


def apply_matrix(matrix: Sequence[float], point: Point) -> Point:
    a, b, c, d, e, f = matrix
    x, y = float(point[0]), float(point[1])
    return (a * x + c * y + e, b * x + d * y + f)


def screen_to_canvas(matrix: Sequence[float], point: Point) -> Optional[Point]:
    inverse = invert_matrix(matrix)
    if inverse is None:
        return None
    return apply_matrix(inverse, point)


@dataclass(frozen=True)
class ViewportState:
    zoom: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0
    rotate: int = 0

    def matrix(self, content_width: float, content_height: float) -> Matrix:
        return compute_matrix(
            self.zoom, content_width, content_height, self.translate_x, self.translate_y, self.rotate
        )

    def with_pan(self, dx: float, dy: float) -> "ViewportState":
        return replace(self, translate_x=self.translate_x + dx, translate_y=self.translate_y + dy)

    def with_zoom(self, zoom: float) -> "ViewportState":
        return replace(self, zoom=zoom)

    def with_rotation(self, degrees: int) -> "ViewportState":
        return replace(self, rotate=rotate_step(self.rotate, degrees))


class CoordinateMapper:
    """Maps raw display points into canvas space for the current viewport.

    ``content_size`` is a callable so the mapper follows background changes;
    it returns ``None`` while the background is not available yet.
    """

    def __init__(self, get_viewport, get_content_size):
        self._get_viewport = get_viewport
        self._get_content_size = get_content_size

    def matrix(self) -> Optional[Matrix]:
        size = self._get_content_size()
        if size is None:
            return None
        viewport: ViewportState = self._get_viewport()
        return viewport.matrix(size[0], size[1])

    def screen_to_canvas(self, point: Point) -> Optional[Point]:
        matrix = self.matrix()
        if matrix is None:
            return None
        return screen_to_canvas(matrix, point)

    def canvas_to_screen(self, point: Point) -> Optional[Point]:
        matrix = self.matrix()
        if matrix is None:
            return None
        return apply_matrix(matrix, point)


__all__ = [
    "Matrix",
    "ROTATIONS",
    "DEFAULT_MIN_ZOOM",
    "DEFAULT_MAX_ZOOM",
    "compute_matrix",
    "on_wheel",
    "rotate_step",
    "rotated_content_size",
    "visible_region",
    "matrix_to_array",
    "array_to_matrix",
    "invert_matrix",
    "apply_matrix",
    "screen_to_canvas",
    "ViewportState",
    "CoordinateMapper",
]
