"""Structured request/response payload logging for ASGI applications."""

__version__ = "1.0.0"
