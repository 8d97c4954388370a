"""Error schemas."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standard error response."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "AuthenticationError",
                "message": "Invalid or missing API key",
                "request_id": "3b4f0c2d9e8a4f1b",
            }
        }
    )

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")


class AuthenticationError(ErrorResponse):
    """Authentication error response."""
    error: str = "AuthenticationError"


class InternalServerError(ErrorResponse):
    """Internal server error response."""
    error: str = "InternalServerError"
    message: str = "An unexpected error occurred"
