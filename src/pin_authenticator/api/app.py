"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from pin_authenticator.api.models import FeedbackRequest, VerifyPinRequest
from pin_authenticator.api.records import router as records_router
from pin_authenticator.api.records import serialize_pin
from pin_authenticator.app_logging import configure_logging
from pin_authenticator.config import resolve_server_target
from pin_authenticator.containers import AppContainer
from pin_authenticator.domain.errors import (
    NetworkError,
    NotFoundError,
    PinAuthError,
    RelayError,
    RelayTimeoutError,
    RemoteServiceError,
    ServiceUnavailableError,
    ValidationError,
)

_ERROR_STATUSES: tuple[tuple[type[PinAuthError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ServiceUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (RelayTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (NetworkError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (RemoteServiceError, status.HTTP_502_BAD_GATEWAY),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(PinAuthError)
    async def handle_pin_auth_error(
        request: Request, exc: PinAuthError
    ) -> JSONResponse:
        status_code = error_status(exc)
        if isinstance(exc, RelayError):
            logger.warning("Relay failure on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=status_code, content=error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = ValidationError(_describe_validation_errors(exc))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=error_body(error)
        )

    app.include_router(records_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Process liveness only."""
        return {"status": "ok"}

    @app.get("/api/health")
    async def api_health(request: Request) -> dict[str, str]:
        """Liveness with environment details."""
        state_container: AppContainer = request.app.state.container
        return {
            "status": "healthy",
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "environment": state_container.settings.environment,
        }

    @app.get("/api/config")
    async def api_config(request: Request) -> dict[str, object]:
        """Return relay configuration without exposing the API key."""
        settings = request.app.state.container.settings
        return {
            "environment": settings.environment,
            "deploymentTarget": settings.deployment_target,
            "baseUrl": settings.pim_api_url,
            "endpoints": {"directVerify": "/mobile-upload", "health": "/health"},
            "uploadTimeoutSeconds": settings.upload_timeout_seconds,
            "hasApiKey": bool(settings.pim_api_key),
        }

    @app.get("/api/test-connection")
    async def test_connection(request: Request) -> dict[str, object]:
        """Check that the remote authentication service is reachable."""
        state_container: AppContainer = request.app.state.container
        payload = await state_container.relay.check_health()
        return {
            "success": True,
            "message": "Successfully connected to the authentication service",
            "endpoint": state_container.relay.client.health_url,
            "remote": payload,
        }

    @app.post("/mobile-upload")
    @app.post("/api/mobile/verify-pin")
    @app.post("/api/mobile/direct-verify")
    @app.post("/api/analyze")
    async def verify_pin(payload: VerifyPinRequest, request: Request) -> dict[str, object]:
        """Relay captured images and create the provisional pin record."""
        state_container: AppContainer = request.app.state.container
        verification = await state_container.verification_service.verify(
            payload.front_image,
            payload.back_image,
            payload.angled_image,
            session_id=payload.session_id,
        )
        return {
            "success": True,
            "message": "Pin analysis complete - awaiting user confirmation",
            "id": verification.pin.id,
            "pinId": verification.pin.pin_id,
            **verification.result.to_response(),
        }

    @app.post("/api/feedback")
    @app.post("/api/mobile/confirm-pin")
    async def submit_feedback(
        payload: FeedbackRequest, request: Request
    ) -> dict[str, object]:
        """Store the user's agreement with a pin analysis."""
        if not payload.pin_id or not payload.user_agreement:
            raise ValidationError(
                "Missing required fields: pinId and userAgreement are required"
            )
        state_container: AppContainer = request.app.state.container
        updated = state_container.verification_service.confirm(
            payload.pin_id,
            payload.user_agreement,
            feedback_comment=payload.feedback_comment,
            analysis_id=payload.analysis_id,
        )
        return {
            "success": True,
            "message": "Feedback saved successfully",
            **serialize_pin(updated),
        }

    static_dir = resolve_server_target(container.settings).static_dir
    if static_dir and Path(static_dir).is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


def error_status(exc: PinAuthError) -> int:
    """Map a domain error to its HTTP status."""
    for error_type, status_code in _ERROR_STATUSES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(exc: PinAuthError) -> dict[str, object]:
    """Build the JSON error payload returned to clients."""
    body: dict[str, object] = {
        "success": False,
        "message": str(exc),
        "errorCode": exc.error_code,
    }
    if isinstance(exc, RemoteServiceError):
        body["remoteStatus"] = exc.status_code
        body["remoteBody"] = exc.body
    if isinstance(exc, ServiceUnavailableError | RelayTimeoutError | NetworkError):
        body["retryable"] = True
    return body


def _describe_validation_errors(exc: RequestValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part != "body"
        )
        message = error.get("msg", "invalid value")
        problems.append(f"{location}: {message}" if location else message)
    return "Invalid request: " + "; ".join(problems or ["malformed body"])
