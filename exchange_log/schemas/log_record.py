"""HTTP exchange log record schemas."""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class RequestData(BaseModel):
    """Captured request section."""

    headers: Dict[str, str] = Field(default_factory=dict, description="Request headers, first value per name")
    body: str = Field("", description="Request bytes read by the handler, decoded as UTF-8")


class ResponseData(BaseModel):
    """Captured response section."""
    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(..., alias="statusCode", description="Status as observed at capture time")
    headers: Dict[str, str] = Field(default_factory=dict, description="Response headers, first value per name")
    body: str = Field("", description="Response bytes written by the handler, decoded as UTF-8")


class LogRecord(BaseModel):
    """One captured request/response exchange."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "requestId": "9f1c2a7e4b0d4e8f8a3b6c5d2e1f0a9b",
                "requestData": {
                    "headers": {"content-type": "text/plain"},
                    "body": "hello",
                },
                "responseData": {
                    "statusCode": 201,
                    "headers": {"content-type": "text/plain; charset=utf-8"},
                    "body": "created",
                },
            }
        },
    )

    request_id: str = Field(..., alias="requestId", min_length=1, description="Exchange identifier")
    request_data: RequestData = Field(..., alias="requestData")
    response_data: ResponseData = Field(..., alias="responseData")

    def to_json(self) -> str:
        """Serialize to a single-line JSON object using the wire field names."""
        return self.model_dump_json(by_alias=True)
