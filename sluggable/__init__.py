"""Automatic, unique slugs for SQLAlchemy models."""

from .exceptions import NotFoundError, SluggableError, UnboundRecordError
from .mixin import SluggableMixin, as_primary_key
from .text import random_token, slugify, unique_slug
from .validation import UniqueRule

__all__ = [
    "SluggableMixin",
    "as_primary_key",
    "NotFoundError",
    "SluggableError",
    "UnboundRecordError",
    "UniqueRule",
    "random_token",
    "slugify",
    "unique_slug",
]
