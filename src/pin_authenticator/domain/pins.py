"""Domain models for pin records and user feedback."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

UserAgreement = Literal["agree", "disagree"]

USER_AGREEMENTS: frozenset[str] = frozenset({"agree", "disagree"})


@dataclass(frozen=True)
class PinRecord:
    """Provisional pin record persisted after a successful relay."""

    id: int
    pin_id: str
    user_agreement: str | None
    feedback_comment: str | None
    feedback_submitted_at: datetime | None
    created_at: datetime


@dataclass(frozen=True)
class FeedbackRecord:
    """Append-only user feedback row."""

    id: int
    analysis_id: int
    pin_id: str
    user_agreement: str
    feedback_comment: str | None
    submitted_at: datetime


@dataclass(frozen=True)
class AgreementStats:
    """Agree/disagree counts across a set of records."""

    agree: int
    disagree: int
