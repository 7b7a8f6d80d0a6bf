"""Engine error hierarchy.

Generation-time randomness never raises: undersized boxes stall, searches
return partial coverage, degenerate segments fall back to default
directions. Only configuration mistakes surface as exceptions.
"""

from __future__ import annotations


class SketchbookError(Exception):
    """Base class for configuration errors raised by the engine."""


class UnknownPenError(SketchbookError, KeyError):
    """A semantic color token names a pen family or pen that does not exist."""

    def __init__(self, token: str, message: str) -> None:
        super().__init__(message)
        self.token = token
        self.message = message

    def __str__(self) -> str:
        return self.message


class UnknownSketchError(SketchbookError, KeyError):
    """No sketch is registered under the requested key."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown sketch: {self.key!r}"


class InvalidParameterError(SketchbookError, ValueError):
    """A parameter override has an unknown name or an unusable value."""
