"""Supabase-backed pin record repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from pin_authenticator.domain.pins import PinRecord
from pin_authenticator.services.pins import PinRepository

_PIN_COLUMNS = (
    "id, pin_id, user_agreement, feedback_comment, feedback_submitted_at, created_at"
)


@dataclass
class SupabasePinRepository(PinRepository):
    """Supabase implementation for pin persistence."""

    client: Client

    def create_pin(self, pin_id: str) -> PinRecord:
        """Insert a pin row and return it."""
        response = self.client.table("pins").insert({"pin_id": pin_id}).execute()
        if not response.data:
            raise RuntimeError("Failed to create pin record")
        return _parse_pin(response.data[0])

    def get_pin_by_id(self, pin_id: str) -> PinRecord | None:
        """Return a pin by its pin id, if present."""
        response = (
            self.client.table("pins")
            .select(_PIN_COLUMNS)
            .eq("pin_id", pin_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_pin(response.data[0])

    def update_pin_feedback(
        self, pin_id: str, user_agreement: str, feedback_comment: str | None
    ) -> PinRecord | None:
        """Update feedback columns; return None when the pin is unknown."""
        response = (
            self.client.table("pins")
            .update(
                {
                    "user_agreement": user_agreement,
                    "feedback_comment": feedback_comment,
                    "feedback_submitted_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("pin_id", pin_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_pin(response.data[0])

    def list_pins(self) -> list[PinRecord]:
        """Return all pins, newest first."""
        response = (
            self.client.table("pins")
            .select(_PIN_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_pin(row) for row in response.data or []]


def _parse_pin(row: dict[str, object]) -> PinRecord:
    return PinRecord(
        id=int(row["id"]),
        pin_id=str(row["pin_id"]),
        user_agreement=row.get("user_agreement"),
        feedback_comment=row.get("feedback_comment"),
        feedback_submitted_at=_parse_timestamp(row.get("feedback_submitted_at")),
        created_at=_parse_timestamp(row.get("created_at")) or datetime.now(tz=UTC),
    )


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
