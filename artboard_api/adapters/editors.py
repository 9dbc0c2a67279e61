"""In-memory editor store backing the editor routes."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from artboard_core.config import EditorConfig
from artboard_core.editor import EditorState
from artboard_core.selection import Intent
from artboard_core.shapes import crop_from_dict, drawables_from_dicts, uuid_ids

log = logging.getLogger("artboard.api")

Point = Tuple[float, float]


@dataclass
class EditorEntry:
    """Stored editor with metadata."""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    state: EditorState = field(repr=False)


class EditorStore:
    """Simple store keyed by editor id."""

    def __init__(self, config: Optional[EditorConfig] = None) -> None:
        self._items: Dict[str, EditorEntry] = {}
        self.config = config or EditorConfig()

    def create(
        self,
        name: str,
        width: float,
        height: float,
        drawables: List[Dict[str, Any]],
        crop: Optional[Dict[str, Any]],
        id_style: str = "counter",
        map_pointer: bool = False,
    ) -> EditorEntry:
        try:
            initial = drawables_from_dicts(drawables)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid drawable: {exc}") from exc
        state = EditorState(
            width,
            height,
            drawables=initial,
            crop=crop_from_dict(crop),
            config=self.config,
            id_factory=uuid_ids() if id_style == "uuid" else None,
            map_pointer=map_pointer,
        )
        editor_id = str(uuid4())
        now = datetime.utcnow()
        entry = EditorEntry(id=editor_id, name=name, created_at=now, updated_at=now, state=state)
        self._items[editor_id] = entry
        log.info("Created editor %s (%s x %s)", editor_id, width, height)
        return entry

    def list(self) -> List[EditorEntry]:
        return list(self._items.values())

    def get(self, editor_id: str) -> EditorEntry:
        entry = self._items.get(editor_id)
        if entry is None:
            raise KeyError(editor_id)
        return entry

    def touch(self, editor_id: str) -> EditorState:
        entry = self.get(editor_id)
        entry.updated_at = datetime.utcnow()
        return entry.state

    def delete(self, editor_id: str) -> None:
        entry = self._items.pop(editor_id, None)
        if entry is None:
            raise KeyError(editor_id)
        entry.state.close()

    def clear(self) -> None:
        for entry in self._items.values():
            entry.state.close()
        self._items.clear()


_store = EditorStore()


def store() -> EditorStore:
    return _store


def create_editor(payload: Dict[str, Any]) -> Dict[str, Any]:
    entry = _store.create(
        name=payload.get("name", "Untitled"),
        width=payload.get("width", 0.0),
        height=payload.get("height", 0.0),
        drawables=payload.get("drawables", []),
        crop=payload.get("crop"),
        id_style=payload.get("id_style", "counter"),
        map_pointer=payload.get("map_pointer", False),
    )
    return serialize_editor(entry)


def list_editors() -> List[Dict[str, Any]]:
    return [serialize_editor(item) for item in _store.list()]


def get_editor(editor_id: str) -> Dict[str, Any]:
    return serialize_editor(_store.get(editor_id))


def delete_editor(editor_id: str) -> None:
    _store.delete(editor_id)


def set_tool(editor_id: str, tool: Optional[str]) -> Dict[str, Any]:
    state = _store.touch(editor_id)
    accepted = state.controller.set_tool(tool)
    return _result(editor_id, accepted)


def pointer(editor_id: str, phase: str, pos: Optional[Point]) -> Dict[str, Any]:
    state = _store.touch(editor_id)
    controller = state.controller
    if phase == "begin":
        accepted = controller.begin(pos)
    elif phase == "move":
        accepted = controller.move(pos)
    elif phase == "end":
        accepted = controller.end(pos)
    else:
        raise ValueError(f"Unsupported pointer phase '{phase}'")
    return _result(editor_id, accepted)


def begin_resize(editor_id: str, drawable_id: str, handle_x: str, handle_y: str, pos: Point) -> Dict[str, Any]:
    state = _store.touch(editor_id)
    return _result(editor_id, state.controller.begin_resize(drawable_id, handle_x, handle_y, pos))


def begin_move(editor_id: str, drawable_id: str, pos: Point) -> Dict[str, Any]:
    state = _store.touch(editor_id)
    return _result(editor_id, state.controller.begin_move(drawable_id, pos))


def begin_crop_resize(editor_id: str, handle_x: str, handle_y: str, pos: Point) -> Dict[str, Any]:
    state = _store.touch(editor_id)
    return _result(editor_id, state.controller.begin_crop_resize(handle_x, handle_y, pos))


def begin_crop_move(editor_id: str, pos: Point) -> Dict[str, Any]:
    state = _store.touch(editor_id)
    return _result(editor_id, state.controller.begin_crop_move(pos))


def select(editor_id: str, drawable_id: str) -> Dict[str, Any]:
    state = _store.touch(editor_id)
    return _result(editor_id, state.controller.click_drawable(drawable_id))


def intent(editor_id: str, name: str) -> Dict[str, Any]:
    state = _store.touch(editor_id)
    return _result(editor_id, state.handle_intent(Intent(name)))


def wheel(editor_id: str, delta_y: float) -> Dict[str, Any]:
    state = _store.touch(editor_id)
    state.wheel(delta_y)
    return _result(editor_id, True)


def rotate(editor_id: str, degrees: int) -> Dict[str, Any]:
    state = _store.touch(editor_id)
    state.rotate(degrees)
    return _result(editor_id, True)


def matrix(editor_id: str) -> Dict[str, Any]:
    state = _store.get(editor_id).state
    return {"id": editor_id, "matrix": list(state.matrix())}


def _result(editor_id: str, accepted: bool) -> Dict[str, Any]:
    data = serialize_editor(_store.get(editor_id))
    data["accepted"] = bool(accepted)
    return data


def serialize_editor(entry: EditorEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "name": entry.name,
        "created_at": entry.created_at.isoformat() + "Z",
        "updated_at": entry.updated_at.isoformat() + "Z",
        "state": entry.state.snapshot(),
    }
