"""Editor settings validated with pydantic."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, model_validator

log = logging.getLogger("artboard.config")

CONFIG_ENV = "ARTBOARD_CONFIG"


class ToolStyle(BaseModel):
    fill: str = Field("black", description="Fill color applied to closed shapes.")
    stroke: str = Field("black", description="Stroke color.")
    stroke_width: float = Field(5.0, ge=0.0, description="Stroke width in canvas units.")


def _box_style() -> ToolStyle:
    return ToolStyle(fill="black", stroke="none", stroke_width=0.0)


def _stroke_style() -> ToolStyle:
    return ToolStyle(fill="none", stroke="black", stroke_width=5.0)


class ToolStyles(BaseModel):
    pen: ToolStyle = Field(default_factory=_stroke_style)
    rect: ToolStyle = Field(default_factory=_box_style)
    ellipse: ToolStyle = Field(default_factory=_box_style)
    line: ToolStyle = Field(default_factory=_stroke_style)


class EditorConfig(BaseModel):
    min_zoom: float = Field(1.0, gt=0.0, description="Lowest zoom the wheel can reach.")
    max_zoom: float = Field(4.0, gt=0.0, description="Highest zoom the wheel can reach.")
    wheel_divisor: float = Field(100.0, gt=0.0, description="Wheel delta units per zoom step of 1.0.")
    min_shape_size: float = Field(10.0, ge=0.0, description="Floor for drag-produced widths, heights and radii.")
    handle_stroke_width: float = Field(5.0, gt=0.0, description="Stroke width of the move/resize handles.")
    styles: ToolStyles = Field(default_factory=ToolStyles)

    @model_validator(mode="after")
    def _check_zoom_range(self) -> "EditorConfig":
        if self.min_zoom > self.max_zoom:
            raise ValueError("min_zoom must not exceed max_zoom")
        return self


def load_config(path: Optional[Union[str, Path]] = None) -> EditorConfig:
    """Read settings from ``path`` or ``$ARTBOARD_CONFIG``; defaults when neither exists."""
    if path is None:
        path = os.getenv(CONFIG_ENV)
    if not path:
        return EditorConfig()
    config_path = Path(path)
    if not config_path.exists():
        log.warning("Config file %s not found, using defaults", config_path)
        return EditorConfig()
    with config_path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    return EditorConfig.model_validate(data)


__all__ = ["ToolStyle", "ToolStyles", "EditorConfig", "load_config", "CONFIG_ENV"]
