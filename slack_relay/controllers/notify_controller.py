"""
Notify Controller

FastAPI controller for the /notify endpoint. Every outcome of the relay
pipeline, including failures, is answered with a JSON body.
"""

import json

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from slack_relay.models.notification import RelayResponse
from slack_relay.services.exceptions import (
    NotificationValidationError,
    RelayError,
    UpstreamDeliveryError,
)
from slack_relay.services.relay_service import RelayService
from slack_relay.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["notify"])


def get_relay_service(request: Request) -> RelayService:
    """Resolve the RelayService built during application startup."""
    relay_service = getattr(request.app.state, "relay_service", None)
    if relay_service is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return relay_service


def relay_json_response(status_code: int, body: RelayResponse) -> JSONResponse:
    """Serialize a RelayResponse, dropping unset fields."""
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _error_response(error: RelayError) -> JSONResponse:
    body = RelayResponse(ok=False, error=error.message)
    if isinstance(error, UpstreamDeliveryError):
        body.response = error.response_excerpt
    return relay_json_response(error.status_code, body)


def _decode_body(raw_body: bytes) -> dict:
    """Decode the request body; an empty body is an empty notification."""
    try:
        text = raw_body.decode("utf-8")
        data = json.loads(text or "{}")
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise NotificationValidationError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise NotificationValidationError(
            f"Invalid JSON: request body must be an object, got {type(data).__name__}"
        )
    return data


@router.post("/notify", response_model=RelayResponse, response_model_exclude_none=True)
async def notify(
    request: Request,
    relay_service: RelayService = Depends(get_relay_service)
) -> JSONResponse:
    """
    Relay a notification to Slack at most once per dedupe window.

    Returns:
        - 200 ``{ok: true}`` when delivered
        - 202 ``{ok: true, skipped: "disabled" | "duplicate"}`` when skipped
        - 400 for missing text or malformed JSON
        - 500 for configuration and transport failures
        - 502 when the webhook rejects the message or times out
    """
    try:
        data = _decode_body(await request.body())
        outcome = await relay_service.relay(data)
    except RelayError as e:
        if e.status_code >= 500:
            logger.error(f"Notification failed ({e.status_code}): {e.message}")
        else:
            logger.warning(f"Notification rejected ({e.status_code}): {e.message}")
        return _error_response(e)
    except Exception as e:
        logger.exception(f"Unexpected error relaying notification: {str(e)}")
        return relay_json_response(
            500, RelayResponse(ok=False, error=str(e) or type(e).__name__)
        )

    if outcome.is_skip:
        return relay_json_response(202, RelayResponse(ok=True, skipped=outcome.value))
    return relay_json_response(200, RelayResponse(ok=True))
