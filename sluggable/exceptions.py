"""Exceptions raised by the sluggable capability."""

from __future__ import annotations

from typing import Any


class SluggableError(Exception):
    """Base class for errors raised by this package."""


class NotFoundError(SluggableError, LookupError):
    """No record matched a slug or key lookup."""

    def __init__(self, key: Any, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or f"No results for slug {key}")


class UnboundRecordError(SluggableError):
    """A slug has to be checked but the record has no session to query."""
