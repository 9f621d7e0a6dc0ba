"""Supabase-backed user feedback repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from pin_authenticator.domain.pins import FeedbackRecord
from pin_authenticator.services.feedback import FeedbackRepository

_FEEDBACK_COLUMNS = (
    "id, analysis_id, pin_id, user_agreement, feedback_comment, submitted_at"
)


@dataclass
class SupabaseFeedbackRepository(FeedbackRepository):
    """Supabase implementation for the user_feedback table."""

    client: Client

    def create_feedback(
        self,
        analysis_id: int,
        pin_id: str,
        user_agreement: str,
        feedback_comment: str | None,
    ) -> FeedbackRecord:
        """Insert a feedback row and return it."""
        response = (
            self.client.table("user_feedback")
            .insert(
                {
                    "analysis_id": analysis_id,
                    "pin_id": pin_id,
                    "user_agreement": user_agreement,
                    "feedback_comment": feedback_comment,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create feedback record")
        return _parse_feedback(response.data[0])

    def list_by_analysis_id(self, analysis_id: int) -> list[FeedbackRecord]:
        """Return feedback for an analysis id, newest first."""
        response = (
            self.client.table("user_feedback")
            .select(_FEEDBACK_COLUMNS)
            .eq("analysis_id", analysis_id)
            .order("submitted_at", desc=True)
            .execute()
        )
        return [_parse_feedback(row) for row in response.data or []]

    def list_all(self) -> list[FeedbackRecord]:
        """Return all feedback rows, newest first."""
        response = (
            self.client.table("user_feedback")
            .select(_FEEDBACK_COLUMNS)
            .order("submitted_at", desc=True)
            .execute()
        )
        return [_parse_feedback(row) for row in response.data or []]


def _parse_feedback(row: dict[str, object]) -> FeedbackRecord:
    submitted_raw = row.get("submitted_at")
    submitted_at = (
        datetime.fromisoformat(submitted_raw)
        if isinstance(submitted_raw, str) and submitted_raw
        else datetime.now(tz=UTC)
    )
    return FeedbackRecord(
        id=int(row["id"]),
        analysis_id=int(row.get("analysis_id") or 0),
        pin_id=str(row["pin_id"]),
        user_agreement=str(row["user_agreement"]),
        feedback_comment=row.get("feedback_comment"),
        submitted_at=submitted_at,
    )
