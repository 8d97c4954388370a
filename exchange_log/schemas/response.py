"""Response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response for health check."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "timestamp": "2024-01-01T10:00:00Z",
                "version": "1.0.0",
                "environment": "production",
            }
        }
    )

    status: str = Field(..., description="Service status")
    timestamp: str = Field(..., description="Health check timestamp")
    version: str = Field(..., description="API version")
    environment: str = Field(..., description="Environment (development/production)")


class TokenResponse(BaseModel):
    """Response for token exchange."""
    access_token: str = Field(..., description="Opaque access token")
    token_type: str = Field("bearer", description="Token type")
