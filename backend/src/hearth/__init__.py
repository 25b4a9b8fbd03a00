"""Client-side helpers for talking to the Hearth API."""

from .client import ApiError, HearthClient, UnauthorizedError

__all__ = ["ApiError", "HearthClient", "UnauthorizedError"]
