"""Token exchange endpoint. Traffic under this router is never payload-logged."""

from fastapi import APIRouter, Depends
import logging
import secrets

from exchange_log.dependencies import verify_token_request
from exchange_log.schemas.error import ErrorResponse
from exchange_log.schemas.request import TokenRequest
from exchange_log.schemas.response import TokenResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/token",
    response_model=TokenResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized"},
    },
    summary="Issue access token",
    description="Exchange a valid API key for an opaque access token",
)
async def issue_token(body: TokenRequest = Depends(verify_token_request)) -> TokenResponse:
    """
    Issue a token for a verified API key.

    Args:
        body: Verified token request

    Returns:
        TokenResponse
    """
    logger.info("Issued access token")
    return TokenResponse(access_token=secrets.token_urlsafe(32))
