# lanebattle/errors.py
from __future__ import annotations


class DefinitionError(ValueError):
    """Unit definition data is missing or malformed."""


class PlacementError(ValueError):
    """A placement request was rejected. `reason` is one of rules.REJECT_*."""

    def __init__(self, reason: str, message: str = "") -> None:
        self.reason = reason
        super().__init__(message or reason)


class LifecycleError(RuntimeError):
    """A lifecycle control was used in the wrong phase."""
