"""Schemas for the example article and tag endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, constr


class ArticleBase(BaseModel):
    """Fields shared by article payloads."""

    name: constr(strip_whitespace=True, min_length=1, max_length=200) | None = Field(
        default=None, description="Human readable article name"
    )
    body: str | None = None


class ArticleCreate(ArticleBase):
    """Payload for creating an article. The slug is derived from the name when omitted."""

    slug: constr(strip_whitespace=True, max_length=255) | None = None


class ArticleUpdate(BaseModel):
    """Partial update. Send ``slug: null`` to regenerate it from the name."""

    name: constr(strip_whitespace=True, min_length=1, max_length=200) | None = None
    body: str | None = None
    slug: constr(strip_whitespace=True, max_length=255) | None = None


class ArticleRead(ArticleBase):
    """Article representation returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    created_at: datetime
    updated_at: datetime


class TagCreate(BaseModel):
    label: constr(strip_whitespace=True, max_length=128) | None = None
    handle: constr(strip_whitespace=True, max_length=32) | None = None


class TagRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    label: str | None
    handle: str | None
