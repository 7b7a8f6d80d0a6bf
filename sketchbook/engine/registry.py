"""Sketch registry: every sketch is a function registered via decorator.

Usage:
    @sketch(key="stairs-04", title="Stairs 04", params=StairsParams)
    def stairs_04(ctx: SketchContext, params: StairsParams) -> None:
        ctx.polyline(generate_hamiltonian_path(ctx.rng, ctx.area).path, "micronPens.black_005")

Adding a sketch = one module with the decorator plus one import line in
``sketchbook/sketches/__init__.py``. Nothing is discovered dynamically.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from sketchbook.engine.errors import UnknownSketchError

if TYPE_CHECKING:
    from sketchbook.engine.context import SketchContext

logger = logging.getLogger(__name__)


@dataclass
class SketchParams:
    """Canvas parameters shared by every sketch. Sketches subclass this."""

    width: float = 700
    height: float = 850
    margin_x: float = 80
    margin_y: float = 80
    # Degrees; applied to every primitive around the canvas centre
    rotate: float = 0.0


@dataclass
class SketchSpec:
    key: str
    title: str
    fn: Callable[["SketchContext", Any], None]
    params: type[SketchParams] = SketchParams
    description: str = ""

    def default_params(self) -> dict[str, Any]:
        return dataclasses.asdict(self.params())


class SketchRegistry:
    """Registry of all sketches, keyed by slug."""

    def __init__(self) -> None:
        self._sketches: dict[str, SketchSpec] = {}

    def register(self, spec: SketchSpec) -> None:
        if spec.key in self._sketches:
            raise ValueError(f"Duplicate sketch key: {spec.key}")
        if not (isinstance(spec.params, type) and issubclass(spec.params, SketchParams)):
            raise ValueError(f"Sketch {spec.key} params must subclass SketchParams")
        self._sketches[spec.key] = spec
        logger.debug("Registered sketch %s", spec.key)

    def get(self, key: str) -> SketchSpec:
        try:
            return self._sketches[key]
        except KeyError:
            raise UnknownSketchError(key) from None

    def __contains__(self, key: object) -> bool:
        return key in self._sketches

    def all(self) -> list[SketchSpec]:
        return sorted(self._sketches.values(), key=lambda s: s.key)

    def keys(self) -> list[str]:
        return sorted(self._sketches)

    @property
    def count(self) -> int:
        return len(self._sketches)


# Module-level singleton
_registry = SketchRegistry()


def get_registry() -> SketchRegistry:
    return _registry


def sketch(
    *,
    key: str,
    title: str,
    params: type[SketchParams] = SketchParams,
    description: str = "",
):
    """Decorator to register a sketch function."""

    def decorator(fn: Callable[["SketchContext", Any], None]):
        _registry.register(
            SketchSpec(key=key, title=title, fn=fn, params=params, description=description)
        )
        return fn

    return decorator
