"""API routes package."""

from exchange_log.api import auth, echo, health

__all__ = ["auth", "echo", "health"]
