"""Article and tag endpoints routed by id or slug."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from sluggable.database import get_db
from sluggable.example.models import Article, Tag
from sluggable.example.schemas import (
    ArticleCreate,
    ArticleRead,
    ArticleUpdate,
    TagCreate,
    TagRead,
)
from sluggable.mixin import SluggableMixin
from sluggable.routing import bind_model, route_path

router = APIRouter(prefix="/articles", tags=["articles"])
tags_router = APIRouter(prefix="/tags", tags=["tags"])

get_article = bind_model(Article, get_db)
get_tag = bind_model(Tag, get_db)


def _ensure_slug_available(item: SluggableMixin, requested: str | None, db: Session) -> None:
    if not requested:
        return
    rule = item.slug_unique_validation_rule()
    if not rule.passes(db, item.slugify_text(requested)):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Slug is already taken",
        )


@router.get("", response_model=list[ArticleRead])
def list_articles(db: Session = Depends(get_db)) -> list[Article]:
    """Return all articles ordered by slug."""

    return db.execute(select(Article).order_by(Article.slug)).scalars().all()


@router.post("", response_model=ArticleRead, status_code=status.HTTP_201_CREATED)
def create_article(payload: ArticleCreate, db: Session = Depends(get_db)) -> Article:
    """Create an article; its slug is filled in on save."""

    article = Article(name=payload.name, body=payload.body, slug=payload.slug)
    _ensure_slug_available(article, payload.slug, db)
    db.add(article)
    db.commit()
    db.refresh(article)
    return article


@router.get("/by-slug/{slug}", response_model=ArticleRead)
def get_article_by_slug(slug: str, db: Session = Depends(get_db)) -> Article:
    """Strict slug lookup, numeric values are never treated as ids."""

    return Article.find_by_slug_or_fail(db, slug)


@router.get(route_path(Article), response_model=ArticleRead)
def get_article_detail(article: Article = Depends(get_article)) -> Article:
    """Return an article by id or slug."""

    return article


@router.patch(route_path(Article), response_model=ArticleRead)
def update_article(
    payload: ArticleUpdate,
    article: Article = Depends(get_article),
    db: Session = Depends(get_db),
) -> Article:
    """Apply a partial update. Renaming keeps the slug unless it is cleared."""

    changes = payload.model_dump(exclude_unset=True)
    if "slug" in changes:
        _ensure_slug_available(article, changes["slug"], db)
    for field, value in changes.items():
        setattr(article, field, value)
    db.commit()
    db.refresh(article)
    return article


@tags_router.post("", response_model=TagRead, status_code=status.HTTP_201_CREATED)
def create_tag(payload: TagCreate, db: Session = Depends(get_db)) -> Tag:
    tag = Tag(label=payload.label, handle=payload.handle)
    _ensure_slug_available(tag, payload.handle, db)
    db.add(tag)
    db.commit()
    db.refresh(tag)
    return tag


@tags_router.get(route_path(Tag), response_model=TagRead)
def get_tag_detail(tag: Tag = Depends(get_tag)) -> Tag:
    return tag
