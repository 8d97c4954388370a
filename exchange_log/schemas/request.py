"""Request schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TokenRequest(BaseModel):
    """Request for exchanging an API key for an access token."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "api_key": "sk_live_abc123",
            }
        }
    )

    api_key: str = Field(..., description="Configured API key", min_length=1)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v):
        """Validate key is not just whitespace."""
        if not v.strip():
            raise ValueError("API key cannot be empty or whitespace only")
        return v.strip()
