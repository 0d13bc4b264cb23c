"""Webhook relay router."""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from ..dependencies import get_relay
from ..errors import RelayUnreachable
from ..relay import WebhookRelay

router = APIRouter(prefix="/api", tags=["webhook"])


@router.post("/webhook")
async def forward_webhook(request: Request, relay: WebhookRelay = Depends(get_relay)):
    """Forward the raw request body and mirror the endpoint's response."""
    payload = await request.body()
    try:
        result = await relay.relay(payload)
    except RelayUnreachable:
        return JSONResponse(
            {"error": "Webhook endpoint unreachable"},
            status_code=status.HTTP_502_BAD_GATEWAY,
        )
    return Response(
        content=result.body,
        status_code=result.status_code,
        media_type=result.media_type,
    )
