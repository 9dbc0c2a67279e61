from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from ..adapters import editors as editors_adapter


class RectIn(BaseModel):
    type: Literal["rect"]
    id: str
    x: float
    y: float
    width: float
    height: float
    fill: str = "black"
    stroke: str = "none"
    stroke_width: float = Field(default=0.0, ge=0.0)


class EllipseIn(BaseModel):
    type: Literal["ellipse"]
    id: str
    cx: float
    cy: float
    rx: float
    ry: float
    fill: str = "black"
    stroke: str = "none"
    stroke_width: float = Field(default=0.0, ge=0.0)


class LineIn(BaseModel):
    type: Literal["line"]
    id: str
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str = "black"
    stroke_width: float = Field(default=5.0, ge=0.0)


class PathIn(BaseModel):
    type: Literal["path"]
    id: str
    points: List[Tuple[float, float]] = Field(default_factory=list)
    stroke: str = "black"
    stroke_width: float = Field(default=5.0, ge=0.0)


DrawableIn = Annotated[Union[RectIn, EllipseIn, LineIn, PathIn], Field(discriminator="type")]


class CropIn(BaseModel):
    x: float
    y: float
    width: float = Field(..., gt=0.0)
    height: float = Field(..., gt=0.0)


class EditorCreate(BaseModel):
    name: str = Field(default="Untitled", description="Editor name")
    width: float = Field(default=0.0, ge=0.0, description="Background content width")
    height: float = Field(default=0.0, ge=0.0, description="Background content height")
    drawables: List[DrawableIn] = Field(default_factory=list, description="Initial drawables in dict form")
    crop: Optional[CropIn] = Field(default=None, description="Initial crop rectangle")
    id_style: Literal["counter", "uuid"] = Field(default="counter", description="Drawable id factory")
    map_pointer: bool = Field(default=False, description="Map pointer positions through the viewport")


class EditorResponse(BaseModel):
    id: str
    name: str
    created_at: str
    updated_at: str
    state: Dict[str, Any]
    accepted: Optional[bool] = None


class ToolRequest(BaseModel):
    tool: Optional[Literal["pointer", "pen", "rect", "ellipse", "line", "crop"]] = None


class PointerRequest(BaseModel):
    x: float
    y: float


class PointerEndRequest(BaseModel):
    x: Optional[float] = None
    y: Optional[float] = None


class ResizeRequest(BaseModel):
    drawable_id: str
    handle_x: Literal["left", "right"]
    handle_y: Literal["top", "bottom"]
    x: float
    y: float


class MoveRequest(BaseModel):
    drawable_id: str
    x: float
    y: float


class CropResizeRequest(BaseModel):
    handle_x: Literal["left", "right"]
    handle_y: Literal["top", "bottom"]
    x: float
    y: float


class SelectRequest(BaseModel):
    drawable_id: str


class IntentRequest(BaseModel):
    intent: Literal["delete", "escape", "confirm"]


class WheelRequest(BaseModel):
    delta_y: float = Field(..., description="Wheel delta; negative zooms in")


class RotateRequest(BaseModel):
    degrees: Literal[90, -90]


class MatrixResponse(BaseModel):
    id: str
    matrix: List[float]


router = APIRouter(prefix="/editors", tags=["editors"])

NOT_FOUND = "Editor not found"


def _gesture(result: Dict[str, Any]) -> EditorResponse:
    if not result["accepted"]:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Gesture rejected")
    return EditorResponse(**result)


@router.get("/", response_model=List[EditorResponse])
async def list_editors() -> List[EditorResponse]:
    return [EditorResponse(**item) for item in editors_adapter.list_editors()]


@router.post("/", response_model=EditorResponse, status_code=status.HTTP_201_CREATED)
async def create_editor(body: EditorCreate) -> EditorResponse:
    try:
        item = editors_adapter.create_editor(body.model_dump())
    except (KeyError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return EditorResponse(**item)


@router.get("/{editor_id}", response_model=EditorResponse)
async def get_editor(editor_id: str) -> EditorResponse:
    try:
        data = editors_adapter.get_editor(editor_id)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc
    return EditorResponse(**data)


@router.delete("/{editor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_editor(editor_id: str) -> None:
    try:
        editors_adapter.delete_editor(editor_id)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.post("/{editor_id}/tool", response_model=EditorResponse)
async def set_tool(editor_id: str, body: ToolRequest) -> EditorResponse:
    try:
        return _gesture(editors_adapter.set_tool(editor_id, body.tool))
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.post("/{editor_id}/pointer/begin", response_model=EditorResponse)
async def pointer_begin(editor_id: str, body: PointerRequest) -> EditorResponse:
    try:
        return _gesture(editors_adapter.pointer(editor_id, "begin", (body.x, body.y)))
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.post("/{editor_id}/pointer/move", response_model=EditorResponse)
async def pointer_move(editor_id: str, body: PointerRequest) -> EditorResponse:
    try:
        return EditorResponse(**editors_adapter.pointer(editor_id, "move", (body.x, body.y)))
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.post("/{editor_id}/pointer/end", response_model=EditorResponse)
async def pointer_end(editor_id: str, body: PointerEndRequest) -> EditorResponse:
    if (body.x is None) != (body.y is None):
        raise HTTPException(status_code=422, detail="x and y go together")
    pos = None if body.x is None else (body.x, body.y)
    try:
        return EditorResponse(**editors_adapter.pointer(editor_id, "end", pos))
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.post("/{editor_id}/handles/resize", response_model=EditorResponse)
async def begin_resize(editor_id: str, body: ResizeRequest) -> EditorResponse:
    try:
        return _gesture(
            editors_adapter.begin_resize(editor_id, body.drawable_id, body.handle_x, body.handle_y, (body.x, body.y))
        )
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.post("/{editor_id}/handles/move", response_model=EditorResponse)
async def begin_move(editor_id: str, body: MoveRequest) -> EditorResponse:
    try:
        return _gesture(editors_adapter.begin_move(editor_id, body.drawable_id, (body.x, body.y)))
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.post("/{editor_id}/crop/resize", response_model=EditorResponse)
async def begin_crop_resize(editor_id: str, body: CropResizeRequest) -> EditorResponse:
    try:
        return _gesture(editors_adapter.begin_crop_resize(editor_id, body.handle_x, body.handle_y, (body.x, body.y)))
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.post("/{editor_id}/crop/move", response_model=EditorResponse)
async def begin_crop_move(editor_id: str, body: PointerRequest) -> EditorResponse:
    try:
        return _gesture(editors_adapter.begin_crop_move(editor_id, (body.x, body.y)))
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.post("/{editor_id}/select", response_model=EditorResponse)
async def select(editor_id: str, body: SelectRequest) -> EditorResponse:
    try:
        return EditorResponse(**editors_adapter.select(editor_id, body.drawable_id))
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.post("/{editor_id}/intent", response_model=EditorResponse)
async def intent(editor_id: str, body: IntentRequest) -> EditorResponse:
    try:
        return EditorResponse(**editors_adapter.intent(editor_id, body.intent))
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.post("/{editor_id}/wheel", response_model=EditorResponse)
async def wheel(editor_id: str, body: WheelRequest) -> EditorResponse:
    try:
        return EditorResponse(**editors_adapter.wheel(editor_id, body.delta_y))
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.post("/{editor_id}/rotate", response_model=EditorResponse)
async def rotate(editor_id: str, body: RotateRequest) -> EditorResponse:
    try:
        return EditorResponse(**editors_adapter.rotate(editor_id, body.degrees))
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/{editor_id}/matrix", response_model=MatrixResponse)
async def get_matrix(editor_id: str) -> MatrixResponse:
    try:
        return MatrixResponse(**editors_adapter.matrix(editor_id))
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc
