"""Verification flow: relay images, record provisional pins, confirm results."""

import logging
from dataclasses import dataclass

from pin_authenticator.domain.analysis import AnalysisResult
from pin_authenticator.domain.errors import NotFoundError
from pin_authenticator.domain.pins import PinRecord
from pin_authenticator.services.feedback import FeedbackService
from pin_authenticator.services.pins import PinService, validate_agreement
from pin_authenticator.services.relay import UploadRelay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Verification:
    """Analysis result together with its provisional record."""

    result: AnalysisResult
    pin: PinRecord


@dataclass
class VerificationService:
    """Coordinates the relay with the pin and feedback stores."""

    relay: UploadRelay
    pin_service: PinService
    feedback_service: FeedbackService

    async def verify(  # noqa: PLR0913
        self,
        front_image: str | None,
        back_image: str | None = None,
        angled_image: str | None = None,
        *,
        session_id: str | None = None,
        timeout_seconds: float | None = None,
    ) -> Verification:
        """Relay images and persist the provisional pin record."""
        request = self.relay.build_request(
            front_image, back_image, angled_image, session_id
        )
        result = await self.relay.send(request, timeout_seconds=timeout_seconds)
        pin = self.pin_service.create_provisional_pin(request.session_id)
        logger.info(
            "Created provisional pin record %s (id=%s)",
            pin.pin_id,
            pin.id,
            extra={"session_id": request.session_id},
        )
        return Verification(result=result, pin=pin)

    def confirm(
        self,
        pin_id: str,
        user_agreement: str,
        feedback_comment: str | None = None,
        analysis_id: int | None = None,
    ) -> PinRecord:
        """Store the user's agreement on a pin and append a feedback row."""
        agreement = validate_agreement(user_agreement)
        updated = self.pin_service.update_feedback(pin_id, agreement, feedback_comment)
        if updated is None:
            raise NotFoundError(f"Pin record not found: {pin_id}")
        try:
            self.feedback_service.create_user_feedback(
                analysis_id=analysis_id if analysis_id is not None else updated.id,
                pin_id=pin_id,
                user_agreement=agreement,
                feedback_comment=feedback_comment,
            )
        except Exception:
            logger.exception(
                "Failed to append feedback row", extra={"pin_id": pin_id}
            )
        logger.info("User feedback saved: %s for pin %s", agreement, pin_id)
        return updated

    def provisional_pins(self) -> list[PinRecord]:
        """Return pins still awaiting confirmation."""
        return self.pin_service.list_provisional_pins()
