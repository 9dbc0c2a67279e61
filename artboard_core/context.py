"""Host bindings shared by the controllers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .shapes import Collection, Crop
from .viewport import ViewportState


def _ignore(*_args) -> None:
    return None


@dataclass
class EditorContext:
    """Read access to host-owned state plus the change sinks.

    The controllers never mutate what the getters return; every change is
    reported as a fresh value through one of the ``on_*`` callbacks.
    """

    get_drawables: Callable[[], Collection]
    get_crop: Callable[[], Optional[Crop]]
    get_viewport: Callable[[], ViewportState]
    on_drawables_change: Callable[[Collection], None] = _ignore
    on_crop_change: Callable[[Optional[Crop]], None] = _ignore
    on_selection_change: Callable[[Optional[str]], None] = _ignore
    on_viewport_change: Callable[[ViewportState], None] = _ignore
    on_gesture_end: Callable[[str], None] = _ignore
