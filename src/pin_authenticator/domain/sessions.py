"""Upload session identifiers."""

import re
from datetime import datetime

SESSION_ID_PATTERN = re.compile(r"^\d{12}$", re.ASCII)


def generate_session_id(now: datetime | None = None) -> str:
    """Return a 12-digit YYMMDDHHMMSS id from local wall-clock time."""
    moment = now or datetime.now()
    return moment.strftime("%y%m%d%H%M%S")


def is_valid_session_id(value: object) -> bool:
    """Return True when the value is exactly twelve ASCII digits."""
    return isinstance(value, str) and SESSION_ID_PATTERN.fullmatch(value) is not None


def pin_id_for_session(session_id: str) -> str:
    """Derive the canonical pin record id for a session."""
    return f"pin_{session_id}"
