"""User feedback business logic."""

from dataclasses import dataclass
from typing import Protocol

from pin_authenticator.domain.pins import AgreementStats, FeedbackRecord
from pin_authenticator.services.pins import validate_agreement


class FeedbackRepository(Protocol):
    """Persistence interface for feedback rows."""

    def create_feedback(
        self,
        analysis_id: int,
        pin_id: str,
        user_agreement: str,
        feedback_comment: str | None,
    ) -> FeedbackRecord:
        """Insert a feedback row and return it."""

    def list_by_analysis_id(self, analysis_id: int) -> list[FeedbackRecord]:
        """Return feedback rows for an analysis id."""

    def list_all(self) -> list[FeedbackRecord]:
        """Return every feedback row, newest first."""


@dataclass
class FeedbackService:
    """Service for the append-only feedback store."""

    repository: FeedbackRepository

    def create_user_feedback(
        self,
        analysis_id: int,
        pin_id: str,
        user_agreement: str,
        feedback_comment: str | None = None,
    ) -> FeedbackRecord:
        """Validate and append a feedback row."""
        agreement = validate_agreement(user_agreement)
        return self.repository.create_feedback(
            analysis_id=analysis_id,
            pin_id=pin_id,
            user_agreement=agreement,
            feedback_comment=feedback_comment or None,
        )

    def get_feedback_by_analysis_id(self, analysis_id: int) -> list[FeedbackRecord]:
        """Return feedback recorded for an analysis id."""
        return self.repository.list_by_analysis_id(analysis_id)

    def get_all_user_feedback(self) -> list[FeedbackRecord]:
        """Return all feedback rows."""
        return self.repository.list_all()

    def agreement_stats(self) -> AgreementStats:
        """Count feedback rows by agreement."""
        feedback = self.repository.list_all()
        return AgreementStats(
            agree=sum(1 for row in feedback if row.user_agreement == "agree"),
            disagree=sum(1 for row in feedback if row.user_agreement == "disagree"),
        )
