"""FastAPI integration: bind path parameters to sluggable models."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from sluggable.exceptions import NotFoundError
from sluggable.mixin import SluggableMixin

logger = logging.getLogger(__name__)


def route_path(model: type[SluggableMixin], suffix: str = "") -> str:
    """Return ``/{<route key>}`` for ``model`` followed by ``suffix``."""

    return f"/{{{model.get_route_key_name()}}}{suffix}"


def bind_model(
    model: type[SluggableMixin],
    get_session: Callable[..., Iterator[Session]],
) -> Callable[..., Any]:
    """Build a dependency resolving the route key path parameter to a ``model`` row.

    The path parameter is looked up by id first and by slug second, see
    :meth:`SluggableMixin.find_by_any`.
    """

    key_name = model.get_route_key_name()

    def dependency(request: Request, db: Session = Depends(get_session)) -> Any:
        value = request.path_params[key_name]
        item = model.resolve_route_binding(db, value)
        if item is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{model.__name__} not found",
            )
        return item

    dependency.__name__ = f"bind_{model.__name__.lower()}"
    return dependency


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("Lookup failed for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    """Render :class:`NotFoundError` raised by handlers as HTTP 404."""

    app.add_exception_handler(NotFoundError, _not_found_handler)
