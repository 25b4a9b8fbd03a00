"""Core utilities for the Hearth backend."""

from .security import IdentityClaims, decode_identity_token

__all__ = ["IdentityClaims", "decode_identity_token"]
