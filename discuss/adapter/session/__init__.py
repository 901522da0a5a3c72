"""Session resolution adapters."""

from .resolver import JWTSessionResolver, MockSessionResolver

__all__ = ["JWTSessionResolver", "MockSessionResolver"]
