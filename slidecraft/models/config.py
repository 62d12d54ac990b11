"""Config model."""

from __future__ import annotations

from pydantic import Field, PositiveInt, constr

from .base import LayoutBaseModel

NonEmptyStr = constr(min_length=1)


class Config(LayoutBaseModel):
    project_root: NonEmptyStr = Field(..., description="Project root directory")
    inputs_dir: NonEmptyStr = Field(..., description="Inputs directory")
    runs_dir: NonEmptyStr = Field(..., description="Runs output directory")
    sample_deck_path: NonEmptyStr = Field(..., description="Sample deck JSON path")
    canvas_width: PositiveInt = Field(1920, description="Design canvas width")
    canvas_height: PositiveInt = Field(1080, description="Design canvas height")
    preview_padding: int = Field(40, ge=0, description="Preview padding in container pixels")
