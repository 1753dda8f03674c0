import logging.config

from fastapi import FastAPI

from sluggable.config import get_settings
from sluggable.example.api import router as articles_router
from sluggable.example.api import tags_router
from sluggable.routing import register_exception_handlers

settings = get_settings()

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        }
    },
    "handlers": {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        }
    },
    "root": {
        "handlers": ["default"],
        "level": settings.log_level,
    },
}


logging.config.dictConfig(LOGGING_CONFIG)


def create_app() -> FastAPI:
    """Build the example application."""

    app = FastAPI(title=settings.app_name, debug=settings.debug)
    register_exception_handlers(app)

    @app.get("/health", tags=["system"])
    def health_check() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    app.include_router(articles_router, prefix="/api")
    app.include_router(tags_router, prefix="/api")
    return app


app = create_app()
