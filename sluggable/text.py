"""Helpers for turning text into slugs and making them unique."""

from __future__ import annotations

import logging
import re
import secrets
import unicodedata
from typing import Callable

from sluggable.config import get_settings

logger = logging.getLogger(__name__)

SuggestSlug = Callable[[str, int, str], str]


def _normalize(value: str) -> str:
    """Normalize and clean up the raw value prior to slugification."""

    normalized = unicodedata.normalize("NFKC", value).strip()
    if not normalized:
        return ""
    lowered = normalized.casefold()
    slug = re.sub(r"[^\w]+", "-", lowered, flags=re.UNICODE)
    slug = re.sub(r"[-_]+", "-", slug).strip("-")
    return slug


def _truncate(slug: str, max_length: int | None) -> str:
    if max_length is None or len(slug) <= max_length:
        return slug
    return slug[:max_length].rstrip("-") or slug[:max_length]


def slugify(value: str, *, max_length: int | None = None) -> str:
    """Generate a URL-friendly slug based on the provided value."""

    return _truncate(_normalize(str(value)), max_length)


def random_token(nbytes: int | None = None) -> str:
    """Return an opaque hex token used when a record has nothing to slug from."""

    if nbytes is None:
        nbytes = get_settings().random_token_bytes
    return secrets.token_hex(nbytes)


def suffix_slug(
    original: str, iteration: int, previous: str, *, max_length: int | None = None
) -> str:
    """Append ``-<iteration>`` to ``original``, trimming the base to fit ``max_length``.

    The suffix itself is never cut, so every iteration yields a new candidate.
    """

    suffix = f"-{iteration}"
    if max_length is None:
        return f"{original}{suffix}"
    if len(suffix) + 1 > max_length:
        raise ValueError(f"max_length {max_length} leaves no room for suffix {suffix!r}")

    allowed_length = max_length - len(suffix)
    base_part = original[:allowed_length].rstrip("-") or original[:allowed_length]
    return f"{base_part}{suffix}"


def unique_slug(
    base: str,
    exists: Callable[[str], bool],
    *,
    suggest: SuggestSlug | None = None,
    max_length: int | None = None,
) -> str:
    """Return ``base`` or the first suffixed variant for which ``exists`` is false.

    Candidates are tried in order ``base``, ``base-1``, ``base-2``... and each
    one costs a single call to ``exists``.
    """

    if suggest is None:

        def suggest(original: str, iteration: int, previous: str) -> str:
            return suffix_slug(original, iteration, previous, max_length=max_length)

    slug = base
    iteration = 0
    while exists(slug):
        iteration += 1
        logger.debug("Slug %r is taken, trying variant %d", slug, iteration)
        slug = suggest(base, iteration, slug)
    return slug
