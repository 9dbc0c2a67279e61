"""Interaction sessions: the transient state of one pointer gesture.

A session owns the subscription it took on the host's input stream and
gives it back exactly once, whether the gesture ends normally or the
controller is torn down underneath it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, ClassVar, List, Optional, Protocol

from .geometry import HandleX, HandleY
from .shapes import Point
from .tools import Tool

log = logging.getLogger("artboard.session")


class Subscription(Protocol):
    def release(self) -> None:
        ...


class InputStream(Protocol):
    """Host-side stream of global pointer events."""

    def subscribe(self, on_move: Callable[[Point], None], on_end: Callable[[Point], None]) -> Subscription:
        ...


class CallbackStream:
    """Minimal in-process input stream; the host pushes events with :meth:`emit_move`/:meth:`emit_end`."""

    def __init__(self) -> None:
        self._listeners: List[tuple] = []

    def subscribe(self, on_move, on_end) -> "_CallbackSubscription":
        entry = (on_move, on_end)
        self._listeners.append(entry)
        return _CallbackSubscription(self, entry)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit_move(self, pos: Point) -> None:
        for on_move, _ in list(self._listeners):
            on_move(pos)

    def emit_end(self, pos: Point) -> None:
        for _, on_end in list(self._listeners):
            on_end(pos)

    def unsubscribe(self, entry) -> None:
        if entry in self._listeners:
            self._listeners.remove(entry)


class _CallbackSubscription:
    def __init__(self, stream: CallbackStream, entry) -> None:
        self._stream = stream
        self._entry = entry

    def release(self) -> None:
        self._stream.unsubscribe(self._entry)


@dataclass
class Session:
    subscription: Optional[Subscription] = field(default=None, repr=False, compare=False)

    kind: ClassVar[str] = "session"

    def release(self) -> None:
        if self.subscription is None:
            return
        subscription, self.subscription = self.subscription, None
        subscription.release()
        log.debug("Released input subscription of %s session", self.kind)


@dataclass
class Drawing(Session):
    tool: Tool = Tool.PEN
    points: List[Point] = field(default_factory=list)

    kind: ClassVar[str] = "drawing"


@dataclass
class ResizingShape(Session):
    id: str = ""
    handle_x: HandleX = "right"
    handle_y: HandleY = "bottom"

    kind: ClassVar[str] = "resizing_shape"


@dataclass
class MovingShape(Session):
    id: str = ""
    last_pos: Point = (0.0, 0.0)

    kind: ClassVar[str] = "moving_shape"


@dataclass
class DefiningCrop(Session):
    start: Point = (0.0, 0.0)
    current: Optional[Point] = None

    kind: ClassVar[str] = "defining_crop"


@dataclass
class ResizingCrop(Session):
    handle_x: HandleX = "right"
    handle_y: HandleY = "bottom"

    kind: ClassVar[str] = "resizing_crop"


@dataclass
class MovingCrop(Session):
    last_pos: Point = (0.0, 0.0)

    kind: ClassVar[str] = "moving_crop"


@dataclass
class PanningViewport(Session):
    last_pos: Point = (0.0, 0.0)

    kind: ClassVar[str] = "panning_viewport"


__all__ = [
    "Subscription",
    "InputStream",
    "CallbackStream",
    "Session",
    "Drawing",
    "ResizingShape",
    "MovingShape",
    "DefiningCrop",
    "ResizingCrop",
    "MovingCrop",
    "PanningViewport",
]
