"""Provisional pin record business logic."""

from dataclasses import dataclass
from typing import Protocol

from pin_authenticator.domain.errors import ValidationError
from pin_authenticator.domain.pins import USER_AGREEMENTS, AgreementStats, PinRecord
from pin_authenticator.domain.sessions import pin_id_for_session


class PinRepository(Protocol):
    """Persistence interface for pin records."""

    def create_pin(self, pin_id: str) -> PinRecord:
        """Insert a pin row and return it with its generated id."""

    def get_pin_by_id(self, pin_id: str) -> PinRecord | None:
        """Return the pin with the given pin id, if present."""

    def update_pin_feedback(
        self, pin_id: str, user_agreement: str, feedback_comment: str | None
    ) -> PinRecord | None:
        """Store feedback on a pin; return None when no row matches."""

    def list_pins(self) -> list[PinRecord]:
        """Return all pins, newest first."""


@dataclass
class PinService:
    """Application service for provisional pin records."""

    repository: PinRepository

    def create_provisional_pin(self, session_id: str) -> PinRecord:
        """Persist the provisional record for a relayed session."""
        return self.repository.create_pin(pin_id_for_session(session_id))

    def get_pin(self, pin_id: str) -> PinRecord | None:
        """Return a pin by its pin id."""
        return self.repository.get_pin_by_id(pin_id)

    def update_feedback(
        self, pin_id: str, user_agreement: str, feedback_comment: str | None = None
    ) -> PinRecord | None:
        """Record agreement on a pin; None means the pin does not exist."""
        validate_agreement(user_agreement)
        return self.repository.update_pin_feedback(
            pin_id, user_agreement, feedback_comment or None
        )

    def list_pins(self) -> list[PinRecord]:
        """Return all pins."""
        return self.repository.list_pins()

    def list_provisional_pins(self) -> list[PinRecord]:
        """Return pins still awaiting user feedback."""
        return [pin for pin in self.repository.list_pins() if not pin.user_agreement]

    def agreement_stats(self) -> AgreementStats:
        """Count pins by recorded agreement."""
        pins = self.repository.list_pins()
        return AgreementStats(
            agree=sum(1 for pin in pins if pin.user_agreement == "agree"),
            disagree=sum(1 for pin in pins if pin.user_agreement == "disagree"),
        )


def validate_agreement(user_agreement: object) -> str:
    """Ensure a user agreement value is 'agree' or 'disagree'."""
    if user_agreement not in USER_AGREEMENTS:
        raise ValidationError("userAgreement must be either 'agree' or 'disagree'")
    return str(user_agreement)
