"""Application service helpers."""

from .cache import get_cache
from .sessions import create_session, destroy_session, load_session

__all__ = [
    "get_cache",
    "create_session",
    "destroy_session",
    "load_session",
]
