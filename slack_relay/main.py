"""
slack-relay - FastAPI Application
Main entry point for the notification relay service.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from slack_relay.config.relay_config import RelayConfigLoader
from slack_relay.config.settings import get_settings
from slack_relay.controllers.notify_controller import (
    relay_json_response,
    router as notify_router,
)
from slack_relay.models.notification import RelayResponse
from slack_relay.services.deduplicator import get_deduplicator
from slack_relay.services.relay_service import RelayService
from slack_relay.services.slack_service import SlackWebhookClient, create_http_client
from slack_relay.utils.logger import get_module_logger, setup_logging

logger = get_module_logger(__name__)

SERVICE_NAME = "slack-relay"

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()

    setup_logging(settings.log_level)

    webhook_client = SlackWebhookClient(create_http_client(settings.webhook_timeout_seconds))
    deduplicator = get_deduplicator()
    app.state.relay_service = RelayService(
        config_loader=RelayConfigLoader(settings.config_path),
        deduplicator=deduplicator,
        webhook_client=webhook_client,
    )

    logger.info(f"Listening on http://{settings.host}:{settings.port}")
    logger.info(f"Relay config: {settings.config_path}")
    if deduplicator.enabled:
        logger.info(f"Dedupe window: {deduplicator.window_ms}ms")
    else:
        logger.info("Dedupe window disabled - every notification is delivered")

    yield

    logger.info("slack-relay shutting down...")
    await webhook_client.close()
    app.state.relay_service = None
    logger.info("slack-relay shutdown complete")


app = FastAPI(
    title="slack-relay",
    description="Relays notifications to a Slack webhook with duplicate suppression",
    version="0.1.0",
    lifespan=lifespan,
    # Trailing-slash paths are unknown routes, not redirects
    redirect_slashes=False
)


@app.middleware("http")
async def cors_middleware(request: Request, call_next):
    """Answer preflight requests anywhere and add CORS headers to every response."""
    if request.method == "OPTIONS":
        response = relay_json_response(200, RelayResponse(ok=True))
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing and framework errors in the relay's JSON shape."""
    # Wrong method on a known path is reported the same as an unknown path
    if exc.status_code in (404, 405):
        return relay_json_response(404, RelayResponse(ok=False, error="Not found"))
    return relay_json_response(exc.status_code, RelayResponse(ok=False, error=str(exc.detail)))


app.include_router(notify_router)


@app.get("/health", response_model=RelayResponse, response_model_exclude_none=True)
async def health_check() -> RelayResponse:
    """Liveness probe, independent of the relay configuration."""
    return RelayResponse(ok=True, service=SERVICE_NAME)


def run() -> None:
    """Run the relay under uvicorn on the configured address."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "slack_relay.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
