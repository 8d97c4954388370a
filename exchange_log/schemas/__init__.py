"""Schemas package."""

from exchange_log.schemas.error import AuthenticationError, ErrorResponse, InternalServerError
from exchange_log.schemas.log_record import LogRecord, RequestData, ResponseData

__all__ = [
    "AuthenticationError",
    "ErrorResponse",
    "InternalServerError",
    "LogRecord",
    "RequestData",
    "ResponseData",
]
