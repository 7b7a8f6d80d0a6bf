"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RenderRequest(BaseModel):
    seed: int | None = Field(default=None, description="Render seed; random when omitted")
    params: dict[str, Any] = Field(
        default_factory=dict,
        description="Overrides for the sketch's default parameters",
    )
    resolve_colors: bool = Field(
        default=False,
        description="Attach resolved pen strokes for every colour token used",
    )
