"""Pen catalog: resolves semantic colour tokens ("family.pen") to stroke settings.

The catalog is plain JSON keyed by family:

    {"micronPens": {"name": "...", "lineWidth": 0.25, "opaque": true,
                    "pens": {"black_005": [20, 20, 20, 255]}}}

Unknown families, unknown pens and malformed tokens raise
``UnknownPenError``; a bad token is a sketch bug and is never skipped.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

from sketchbook.engine.errors import UnknownPenError

logger = logging.getLogger(__name__)

OPAQUE_ALPHA = 250
TRANSLUCENT_ALPHA = 220


class PenFamily(BaseModel):
    """One pen set. Stroke alpha comes from ``opaque``: a fourth colour
    channel is accepted for catalog compatibility but never used.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    line_width: float = Field(default=0.3, alias="lineWidth", gt=0)
    opaque: bool = False
    pens: dict[str, list[int]] = Field(default_factory=dict)

    @field_validator("pens")
    @classmethod
    def _check_colors(cls, pens: dict[str, list[int]]) -> dict[str, list[int]]:
        for pen, color in pens.items():
            if len(color) not in (3, 4):
                raise ValueError(f"Pen {pen!r} needs 3 or 4 channels, got {len(color)}")
            if any(c < 0 or c > 255 for c in color):
                raise ValueError(f"Pen {pen!r} channels must be in 0-255, got {color}")
        return pens


class PenStroke(BaseModel):
    token: str
    rgba: tuple[int, int, int, int]
    stroke_width: float
    opaque: bool

    @property
    def alpha(self) -> int:
        return self.rgba[3]


class PenCatalog(RootModel[dict[str, PenFamily]]):
    """All pen families, keyed by family name."""

    def families(self) -> list[str]:
        return sorted(self.root)

    def family(self, name: str) -> PenFamily:
        try:
            return self.root[name]
        except KeyError:
            raise UnknownPenError(name, f"Pen family {name!r} not found") from None

    def tokens(self, family: str) -> list[str]:
        """Every token of ``family`` in catalog order."""
        return [f"{family}.{pen}" for pen in self.family(family).pens]

    def resolve(self, token: str) -> PenStroke:
        family_name, sep, pen_name = token.partition(".")
        if not sep or not family_name or not pen_name or "." in pen_name:
            raise UnknownPenError(token, f"Malformed pen token {token!r}; expected 'family.pen'")

        family = self.family(family_name)
        color = family.pens.get(pen_name)
        if color is None:
            raise UnknownPenError(token, f"Pen {pen_name!r} not found in family {family_name!r}")

        alpha = OPAQUE_ALPHA if family.opaque else TRANSLUCENT_ALPHA
        return PenStroke(
            token=token,
            rgba=(color[0], color[1], color[2], alpha),
            stroke_width=family.line_width,
            opaque=family.opaque,
        )


def load_catalog(path: str | Path | None = None) -> PenCatalog:
    """Load a catalog from ``path``, or the bundled one when None."""
    if path is None:
        raw = resources.files("sketchbook.pens").joinpath("pens.json").read_text(encoding="utf-8")
    else:
        raw = Path(path).read_text(encoding="utf-8")
    catalog = PenCatalog.model_validate(json.loads(raw))
    logger.debug("Loaded %d pen families from %s", len(catalog.root), path or "bundled catalog")
    return catalog


@lru_cache(maxsize=4)
def get_catalog(path: str | None = None) -> PenCatalog:
    return load_catalog(path)
