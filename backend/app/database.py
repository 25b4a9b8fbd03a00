from typing import Any, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from app.config import get_settings

settings = get_settings()


def engine_options(url: str) -> dict[str, Any]:
    """Driver-specific engine arguments for ``url``."""

    options: dict[str, Any] = {"echo": settings.debug, "future": True}
    backend = make_url(url).get_backend_name()
    if backend == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
    else:
        # MySQL drops idle connections after wait_timeout.
        options["pool_pre_ping"] = True
        options["pool_recycle"] = 1800
    return options


engine = create_engine(settings.database_url, **engine_options(settings.database_url))
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=True)


def get_db() -> Iterator[Session]:
    """Request-scoped session; handlers and services commit explicitly."""

    with SessionLocal() as db:
        yield db
