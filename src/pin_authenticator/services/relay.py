"""Upload relay to the remote authentication service."""

import logging
from dataclasses import dataclass

from pin_authenticator.adapters.pim_client import PimClient
from pin_authenticator.domain.analysis import AnalysisResult, UploadRequest
from pin_authenticator.domain.errors import (
    RelayError,
    RemoteServiceError,
    ValidationError,
)
from pin_authenticator.domain.images import strip_data_uri
from pin_authenticator.domain.sessions import generate_session_id, is_valid_session_id
from pin_authenticator.services.normalizer import normalize_response
from pin_authenticator.services.transmission_log import TransmissionSink

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_TIMEOUT_SECONDS = 180.0
DEFAULT_HEALTH_TIMEOUT_SECONDS = 10.0


@dataclass
class UploadRelay:
    """Sends captured images to the remote service and classifies the outcome.

    The relay performs exactly one attempt per call. Retrying is left to the
    caller because remote analysis can take minutes and a blind retry would
    duplicate that work.
    """

    client: PimClient
    transmission_log: TransmissionSink
    upload_timeout_seconds: float = DEFAULT_UPLOAD_TIMEOUT_SECONDS
    health_timeout_seconds: float = DEFAULT_HEALTH_TIMEOUT_SECONDS

    def build_request(
        self,
        front_image: str | None,
        back_image: str | None = None,
        angled_image: str | None = None,
        session_id: str | None = None,
    ) -> UploadRequest:
        """Validate inputs and build the upload request."""
        front = strip_data_uri(front_image)
        if not front:
            raise ValidationError("Front image is required for verification")
        resolved_session_id = session_id or generate_session_id()
        if not is_valid_session_id(resolved_session_id):
            raise ValidationError("Session ID must be 12-digit format")
        return UploadRequest(
            session_id=resolved_session_id,
            front_image_data=front,
            back_image_data=strip_data_uri(back_image) or None,
            angled_image_data=strip_data_uri(angled_image) or None,
        )

    async def relay(
        self,
        front_image: str | None,
        back_image: str | None = None,
        angled_image: str | None = None,
        *,
        session_id: str | None = None,
        timeout_seconds: float | None = None,
    ) -> AnalysisResult:
        """Upload images once and return the normalized analysis."""
        request = self.build_request(front_image, back_image, angled_image, session_id)
        return await self.send(request, timeout_seconds=timeout_seconds)

    async def send(
        self, request: UploadRequest, *, timeout_seconds: float | None = None
    ) -> AnalysisResult:
        """Send a prepared request and normalize the response."""
        timeout = (
            self.upload_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        payload = request.to_payload()
        logger.info(
            "Relaying upload to %s (images: %s)",
            self.client.upload_url,
            ", ".join(key for key in payload if key.endswith("ImageData")),
            extra={"session_id": request.session_id},
        )
        try:
            body = await self.client.upload(payload, timeout)
        except RelayError as exc:
            logger.warning(
                "Upload relay failed: %s",
                exc,
                extra={"session_id": request.session_id},
            )
            self.transmission_log.log_image_upload(
                "failed",
                f"Upload failed ({type(exc).__name__})",
                endpoint=self.client.upload_url,
                session_id=request.session_id,
                response_status=(
                    exc.status_code if isinstance(exc, RemoteServiceError) else None
                ),
                error_message=str(exc),
            )
            raise

        self.transmission_log.log_image_upload(
            "success",
            "Upload accepted by remote service",
            endpoint=self.client.upload_url,
            session_id=request.session_id,
        )
        return normalize_response(body, session_id=request.session_id)

    async def check_health(
        self, timeout_seconds: float | None = None
    ) -> dict[str, object]:
        """Check remote service liveness and record the attempt."""
        timeout = (
            self.health_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        try:
            payload = await self.client.check_health(timeout)
        except RelayError as exc:
            self.transmission_log.log_health_check(
                "failed",
                "Remote health check failed",
                endpoint=self.client.health_url,
                error_message=str(exc),
            )
            raise
        self.transmission_log.log_health_check(
            "success",
            "Remote service healthy",
            endpoint=self.client.health_url,
        )
        return payload
