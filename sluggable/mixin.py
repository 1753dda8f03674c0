"""Automatic slug generation and slug based lookups for SQLAlchemy models.

Mix :class:`SluggableMixin` into a declarative model to get a slug that is
filled in right before the row is inserted or updated, kept unique across the
table, and usable as the model's route key::

    class Article(SluggableMixin, Base):
        __tablename__ = "articles"
        __slug_source__ = "title"

        id: Mapped[int] = mapped_column(primary_key=True)
        title: Mapped[str | None] = mapped_column(String(200))
        slug: Mapped[str] = mapped_column(String(255), unique=True)

The uniqueness check is a plain check-then-write. Keep a unique constraint on
the slug column so concurrent writers fail loudly instead of storing twins.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from sqlalchemy import event, inspect, select
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Mapper, Session, object_session

from sluggable import text
from sluggable.config import MIN_SLUG_LENGTH, get_settings
from sluggable.exceptions import NotFoundError, UnboundRecordError
from sluggable.validation import UniqueRule

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="SluggableMixin")

# signed 64-bit range of integer primary key columns
MAX_KEY = 2**63

Bind = Session | Connection


def as_primary_key(value: str) -> int | None:
    """Return ``value`` as an integer key only if it round-trips exactly.

    ``"42"`` becomes ``42`` while ``"042"``, ``"+42"``, ``"42a"``, ``"0"`` and
    numbers outside the 64-bit key range stay slugs.
    """

    try:
        number = int(value)
    except ValueError:
        return None
    if not -MAX_KEY <= number < MAX_KEY:
        return None
    if number and str(number) == value:
        return number
    return None


class SluggableMixin:
    """Slug capability for declarative models.

    Per-model configuration lives in class attributes; unset values fall back
    to :class:`sluggable.config.Settings`.
    """

    __slug_source__ = None
    __slug_field__ = None
    __slug_nullable__ = None
    __slug_max_length__ = None

    # set once a slug has been assigned to this in-memory instance
    _slugified = False

    @classmethod
    def slug_source_name(cls) -> str:
        return cls.__slug_source__ or get_settings().default_source_field

    @classmethod
    def slug_field_name(cls) -> str:
        return cls.__slug_field__ or get_settings().default_slug_field

    @classmethod
    def slug_nullable(cls) -> bool:
        """If true, a record without slug and source text keeps a null slug."""

        if cls.__slug_nullable__ is None:
            return get_settings().default_nullable
        return bool(cls.__slug_nullable__)

    @classmethod
    def slug_max_length(cls) -> int | None:
        if cls.__slug_max_length__ is None:
            return get_settings().max_slug_length
        if cls.__slug_max_length__ < MIN_SLUG_LENGTH:
            raise ValueError(
                f"{cls.__name__}.__slug_max_length__ must be at least {MIN_SLUG_LENGTH}"
            )
        return cls.__slug_max_length__

    @classmethod
    def _slug_column(cls):
        return getattr(cls, cls.slug_field_name())

    @classmethod
    def _key_column(cls):
        return inspect(cls).primary_key[0]

    def _key_value(self) -> Any:
        mapper = inspect(type(self))
        return getattr(self, mapper.get_property_by_column(mapper.primary_key[0]).key)

    def get_slug_source(self) -> str | None:
        value = getattr(self, self.slug_source_name())
        return None if value is None else str(value)

    def get_slug(self) -> str | None:
        value = getattr(self, self.slug_field_name())
        return None if value is None else str(value)

    def set_slug(self, value: str | None) -> None:
        setattr(self, self.slug_field_name(), value)
        self._slugified = True

    @property
    def is_slugified(self) -> bool:
        return self._slugified

    def slugify_text(self, source: str) -> str:
        """Turn raw text into a slug. Override to plug in another slugifier."""

        return text.slugify(source, max_length=self.slug_max_length())

    def suggest_unique_slug(self, original: str, iteration: int, previous: str) -> str:
        """Return the next variant to try after ``previous`` was found taken."""

        return text.suffix_slug(original, iteration, previous, max_length=self.slug_max_length())

    def _resolve_bind(self, bind: Bind | None) -> Bind:
        if bind is not None:
            return bind
        session = object_session(self)
        if session is None:
            raise UnboundRecordError(
                f"{type(self).__name__} is not attached to a session; pass a session or connection"
            )
        return session

    def _taken_by_pending(self, slug: str) -> bool:
        # Siblings slugified earlier in the same flush are not in the table yet.
        session = object_session(self)
        if session is None:
            return False
        base_mapper = inspect(type(self)).base_mapper
        for other in (*session.new, *session.dirty):
            if other is self or not isinstance(other, SluggableMixin):
                continue
            if inspect(other).mapper.base_mapper is not base_mapper:
                continue
            if other.is_slugified and other.get_slug() == slug:
                return True
        return False

    def is_slug_unique(self, slug: str, bind: Bind | None = None) -> bool:
        """Check ``slug`` against every other row of this model.

        The record itself is excluded once it has been persisted, so saving an
        unchanged slug never collides with itself.
        """

        bind = self._resolve_bind(bind)
        if self._taken_by_pending(slug):
            return False

        key_column = self._key_column()
        stmt = select(key_column).where(self._slug_column() == slug)
        if inspect(self).has_identity:
            stmt = stmt.where(key_column != self._key_value())
        stmt = stmt.limit(1)

        if isinstance(bind, Session):
            with bind.no_autoflush:
                return bind.execute(stmt).first() is None
        return bind.execute(stmt).first() is None

    def _fallback_source(self) -> str | None:
        if self.slug_nullable():
            return None
        key = self._key_value()
        if key:
            return str(key)
        logger.info("No slug source for %s, using a random token", type(self).__name__)
        return text.random_token()

    def generate_slug(self, bind: Bind | None = None) -> str | None:
        """Compute a unique slug for this record without assigning it.

        The current slug wins over the source field. When both are empty the
        result is ``None`` for nullable models, otherwise the primary key or a
        random token is used instead.
        """

        source = self.get_slug() or self.get_slug_source()
        base = self.slugify_text(source) if source is not None else ""
        if not base:
            source = self._fallback_source()
            if source is None:
                return None
            base = self.slugify_text(source)

        bind = self._resolve_bind(bind)
        slug = text.unique_slug(
            base,
            lambda candidate: not self.is_slug_unique(candidate, bind),
            suggest=self.suggest_unique_slug,
        )
        if slug != base:
            logger.debug("Resolved slug collision for %s: %r -> %r", type(self).__name__, base, slug)
        return slug

    def slugify(self: T, bind: Bind | None = None) -> T:
        """Assign a freshly generated slug. Nothing is written to the database."""

        self.set_slug(self.generate_slug(bind))
        return self

    def needs_slug(self) -> bool:
        """Whether the pre-save hook should (re)generate the slug."""

        if self._slugified:
            return False
        state = inspect(self)
        if not state.has_identity or not self.get_slug():
            return True
        return state.attrs[self.slug_field_name()].history.has_changes()

    @classmethod
    def find_by_slug(cls: type[T], session: Session, slug: str) -> T | None:
        stmt = select(cls).where(cls._slug_column() == slug).limit(1)
        return session.execute(stmt).scalars().first()

    @classmethod
    def find_by_slug_or_fail(cls: type[T], session: Session, slug: str) -> T:
        item = cls.find_by_slug(session, slug)
        if item is None:
            raise NotFoundError(slug)
        return item

    @classmethod
    def find_by_any(cls: type[T], session: Session, key: Any) -> T | None:
        """Find by primary key or slug.

        Non-string keys are primary keys. Strings that round-trip as integers
        are primary keys too and take precedence over an equal slug.
        """

        if not isinstance(key, str):
            return session.get(cls, key)
        number = as_primary_key(key)
        if number is not None:
            return session.get(cls, number)
        return cls.find_by_slug(session, key)

    @classmethod
    def find_by_any_or_fail(cls: type[T], session: Session, key: Any) -> T:
        item = cls.find_by_any(session, key)
        if item is None:
            raise NotFoundError(key, f"No results for key or slug {key}")
        return item

    @classmethod
    def get_route_key_name(cls) -> str:
        return cls.slug_field_name()

    @classmethod
    def resolve_route_binding(cls: type[T], session: Session, value: Any) -> T | None:
        return cls.find_by_any(session, value)

    def slug_unique_validation_rule(self) -> UniqueRule:
        """Uniqueness rule for the slug column that ignores this row once saved."""

        mapper = inspect(type(self))
        key_column = mapper.primary_key[0]
        return UniqueRule(
            table=mapper.local_table.name,
            column=mapper.columns[self.slug_field_name()].name,
            ignore=self._key_value() if inspect(self).has_identity else None,
            ignore_column=key_column.name,
        )


@event.listens_for(SluggableMixin, "before_insert", propagate=True)
@event.listens_for(SluggableMixin, "before_update", propagate=True)
def _slug_before_save(mapper: Mapper, connection: Connection, target: SluggableMixin) -> None:
    if not target.needs_slug():
        logger.debug("Keeping slug %r on %s", target.get_slug(), mapper.class_.__name__)
        return
    target.slugify(connection)
    logger.debug("Assigned slug %r to %s", target.get_slug(), mapper.class_.__name__)
