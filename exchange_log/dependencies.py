"""FastAPI dependency injection."""

from fastapi import Depends, HTTPException, Request, status

from exchange_log.config import Settings, get_settings
from exchange_log.schemas.request import TokenRequest


def get_app_settings(request: Request) -> Settings:
    """
    Settings the running app was created with.

    Returns:
        Settings stored on app state, or the process-wide instance
    """
    return getattr(request.app.state, "settings", None) or get_settings()


async def verify_token_request(
    body: TokenRequest,
    settings: Settings = Depends(get_app_settings),
) -> TokenRequest:
    """
    Check the API key submitted for token exchange.

    Raises:
        HTTPException: If a key is configured and the submitted one differs
    """
    if settings.api_key and body.api_key != settings.api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    return body
