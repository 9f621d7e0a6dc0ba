"""Bounded in-process log of calls made to the remote service."""

from collections import deque
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from pin_authenticator.domain.transmissions import (
    TransmissionKind,
    TransmissionLogEntry,
    TransmissionStats,
    TransmissionStatus,
)

DEFAULT_MAX_ENTRIES = 50


class TransmissionSink(Protocol):
    """Interface for recording relay and health-check attempts."""

    def log_image_upload(  # noqa: PLR0913
        self,
        status: TransmissionStatus,
        details: str,
        *,
        endpoint: str | None = None,
        session_id: str | None = None,
        response_status: int | None = None,
        error_message: str | None = None,
    ) -> str:
        """Record an image upload attempt and return its title."""

    def log_health_check(
        self,
        status: TransmissionStatus,
        details: str,
        *,
        endpoint: str | None = None,
        error_message: str | None = None,
    ) -> None:
        """Record a health check attempt."""


@dataclass
class TransmissionLog(TransmissionSink):
    """Ring buffer keeping the most recent transmission entries."""

    _entries: deque[TransmissionLogEntry]
    _next_image_number: int

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._entries = deque(maxlen=max_entries)
        self._next_image_number = 1

    @property
    def max_entries(self) -> int:
        """Return the buffer capacity."""
        return self._entries.maxlen or 0

    def log_image_upload(  # noqa: PLR0913
        self,
        status: TransmissionStatus,
        details: str,
        *,
        endpoint: str | None = None,
        session_id: str | None = None,
        response_status: int | None = None,
        error_message: str | None = None,
    ) -> str:
        """Record an upload and return its sequential image title."""
        image_number = self._next_image_number
        image_title = f"Image #{image_number}"
        self._append(
            kind="image_upload",
            image_number=image_number,
            status=status,
            details=details,
            endpoint=endpoint,
            image_title=image_title,
            session_id=session_id,
            response_status=response_status,
            error_message=error_message,
        )
        self._next_image_number += 1
        return image_title

    def log_health_check(
        self,
        status: TransmissionStatus,
        details: str,
        *,
        endpoint: str | None = None,
        error_message: str | None = None,
    ) -> None:
        """Record a health check; health checks carry image number 0."""
        self._append(
            kind="health_check",
            image_number=0,
            status=status,
            details=details,
            endpoint=endpoint,
            error_message=error_message,
        )

    def entries(self) -> list[TransmissionLogEntry]:
        """Return retained entries, most recent first."""
        return list(reversed(self._entries))

    def stats(self) -> TransmissionStats:
        """Return summary counts for retained entries."""
        total = len(self._entries)
        successful = sum(1 for entry in self._entries if entry.status == "success")
        return TransmissionStats(
            total=total,
            successful=successful,
            failed=total - successful,
            health_checks=sum(
                1 for entry in self._entries if entry.kind == "health_check"
            ),
            image_uploads=sum(
                1 for entry in self._entries if entry.kind == "image_upload"
            ),
            success_rate=round(successful / total * 100) if total else 0,
        )

    def clear(self) -> None:
        """Drop all entries and restart image numbering."""
        self._entries.clear()
        self._next_image_number = 1

    def _append(  # noqa: PLR0913
        self,
        *,
        kind: TransmissionKind,
        image_number: int,
        status: TransmissionStatus,
        details: str,
        endpoint: str | None,
        image_title: str | None = None,
        session_id: str | None = None,
        response_status: int | None = None,
        error_message: str | None = None,
    ) -> None:
        self._entries.append(
            TransmissionLogEntry(
                id=uuid4().hex,
                image_number=image_number,
                timestamp=datetime.now(tz=UTC).isoformat(),
                kind=kind,
                status=status,
                details=details,
                endpoint=endpoint,
                image_title=image_title,
                session_id=session_id,
                response_status=response_status,
                error_message=error_message,
            )
        )
