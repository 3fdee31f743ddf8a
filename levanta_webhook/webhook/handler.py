"""
Webhook Handler Module

This module defines the FastAPI endpoint for Levanta webhooks.
One route answers every method: OPTIONS for CORS pre-flight, GET as a
liveness probe, POST for signed events, 405 for everything else.

Design Decisions:
- Read the raw body ourselves, never let FastAPI parse JSON first
- Every response carries the CORS headers, errors included
- Settings and the notification sink come in through dependencies
- Outbound notifications run as background tasks after the response
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from levanta_webhook.config import Settings, get_settings
from levanta_webhook.logging_config import get_logger
from levanta_webhook.models import Event, isoformat_utc
from levanta_webhook.notifications import NotificationSink, build_notification_sink
from levanta_webhook.webhook.formatter import format_detailed_notification, format_notification
from levanta_webhook.webhook.security import (
    SIGNATURE_HEADER,
    WebhookSecurityError,
    extract_signature,
    verify_request_signature,
)

logger = get_logger(__name__)

WEBHOOK_PATH = "/api/levanta-webhook"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": f"Content-Type, {SIGNATURE_HEADER}",
}

ROUTE_METHODS = ["GET", "POST", "OPTIONS", "PUT", "PATCH", "DELETE", "HEAD"]

router = APIRouter(tags=["webhook"])


def get_notification_sink(
    settings: Settings = Depends(get_settings)
) -> NotificationSink:
    """Dependency providing the configured notification sink."""
    return build_notification_sink(settings)


def json_response(status_code: int, content: Dict[str, Any]) -> JSONResponse:
    """JSON response with the CORS headers attached."""
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


def health_payload() -> Dict[str, str]:
    """Body of the liveness probe."""
    return {
        "status": "ok",
        "message": "Levanta webhook is running!",
        "timestamp": isoformat_utc(datetime.now(timezone.utc)),
    }


@router.api_route(WEBHOOK_PATH, methods=ROUTE_METHODS)
async def levanta_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    sink: NotificationSink = Depends(get_notification_sink)
) -> Response:
    """
    Levanta webhook endpoint.

    Verifies the HMAC signature over the raw body, parses the event,
    and answers with a one-line notification for it.

    Args:
        request: FastAPI request object
        background_tasks: FastAPI background tasks
        settings: Application settings
        sink: Destination for the detailed notification

    Returns:
        JSON response (empty for pre-flight)
    """
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)

    if request.method == "GET":
        return json_response(status.HTTP_200_OK, health_payload())

    if request.method != "POST":
        return json_response(
            status.HTTP_405_METHOD_NOT_ALLOWED,
            {"error": "Method not allowed"}
        )

    try:
        # Signature covers the exact bytes, so read them before anything else
        raw_body = await asyncio.wait_for(
            request.body(),
            timeout=settings.body_read_timeout
        )

        verify_request_signature(
            raw_body,
            extract_signature(request.headers),
            settings.levanta_webhook_secret
        )

        event = Event.model_validate_json(raw_body)

        logger.info(
            "Event received",
            event_type=event.type,
            event_id=event.id,
            created=isoformat_utc(event.created_at),
            data=event.data
        )

        message = format_notification(event)
        logger.info("Notification formatted", notification=message)

    except WebhookSecurityError as e:
        return json_response(status.HTTP_401_UNAUTHORIZED, {"error": e.detail})

    except Exception as e:
        logger.error(
            "Webhook processing failed",
            error=str(e),
            error_type=type(e).__name__
        )
        return json_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"error": "Internal server error", "message": str(e)}
        )

    background_tasks.add_task(forward_notification, sink, event)

    return json_response(
        status.HTTP_200_OK,
        {
            "received": True,
            "eventType": event.type,
            "eventId": event.id,
            "message": message,
        }
    )


async def forward_notification(sink: NotificationSink, event: Event) -> None:
    """
    Send the detailed notification for an event to a sink.

    Runs after the response has been sent, so nothing here may raise.
    """
    try:
        message = format_detailed_notification(event)
    except Exception as e:
        logger.error(
            "Detailed notification could not be formatted",
            event_type=event.type,
            event_id=event.id,
            error=str(e),
            error_type=type(e).__name__
        )
        return

    await sink.send(message)
