from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from sluggable.mixin import SluggableMixin


class Base(DeclarativeBase):
    pass


class Article(SluggableMixin, Base):
    """Article addressed by a slug derived from its name."""

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str | None] = mapped_column(String(200))
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    body: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class Tag(SluggableMixin, Base):
    """Tag with an optional short handle taken from its label."""

    __tablename__ = "tags"
    __slug_source__ = "label"
    __slug_field__ = "handle"
    __slug_nullable__ = True
    __slug_max_length__ = 32

    id: Mapped[int] = mapped_column(primary_key=True)
    label: Mapped[str | None] = mapped_column(String(128))
    handle: Mapped[str | None] = mapped_column(String(32), unique=True)
