"""Echo endpoint for checking payload capture end to end."""

from fastapi import APIRouter, Request
from fastapi.responses import Response

router = APIRouter()


@router.post(
    "/echo",
    summary="Echo request body",
    description="Return the request body unchanged with the same content type",
)
async def echo(request: Request) -> Response:
    body = await request.body()
    return Response(
        content=body,
        media_type=request.headers.get("content-type", "text/plain"),
    )
