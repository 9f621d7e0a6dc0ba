"""Domain models for the transmission log."""

from dataclasses import dataclass
from typing import Literal

TransmissionKind = Literal["health_check", "image_upload"]
TransmissionStatus = Literal["success", "failed"]


@dataclass(frozen=True)
class TransmissionLogEntry:
    """One recorded attempt to reach the remote service."""

    id: str
    image_number: int
    timestamp: str
    kind: TransmissionKind
    status: TransmissionStatus
    details: str
    endpoint: str | None = None
    image_title: str | None = None
    session_id: str | None = None
    response_status: int | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class TransmissionStats:
    """Summary counts over the retained log entries."""

    total: int
    successful: int
    failed: int
    health_checks: int
    image_uploads: int
    success_rate: int
