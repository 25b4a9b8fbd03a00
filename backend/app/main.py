import logging.config
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import install_error_handlers
from app.api.routes import router as api_router
from app.config import Settings, get_settings

settings = get_settings()


def build_logging_config(level: str) -> dict[str, Any]:
    """Console logging for the service; ``level`` applies to ``app.*`` loggers."""

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "standard"},
        },
        "root": {"handlers": ["console"], "level": "INFO"},
        "loggers": {
            "app": {"handlers": ["console"], "level": level, "propagate": False},
            "sqlalchemy.engine": {"level": "INFO" if settings.debug else "WARNING"},
        },
    }


def create_app(config: Settings = settings) -> FastAPI:
    logging.config.dictConfig(build_logging_config(config.log_level))

    application = FastAPI(title=config.app_name, debug=config.debug)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in config.cors_origins],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    install_error_handlers(application)

    @application.get("/health", tags=["system"])
    def health_check() -> dict[str, str]:
        return {"status": "ok", "environment": config.environment}

    application.include_router(api_router, prefix="/api")
    logging.getLogger(__name__).info("%s ready (%s)", config.app_name, config.environment)
    return application


app = create_app()
