"""Response normalization for the remote authentication service.

The remote service has returned several different payload shapes over time.
Each known shape is handled by its own adapter; adapters are consulted in a
fixed order and the first non-empty value for every field wins. Missing
values fall back to defaults so callers always receive a fully populated
``AnalysisResult``.
"""

import math
import re
from collections.abc import Callable, Mapping
from datetime import UTC, datetime

from pin_authenticator.domain.analysis import AnalysisResult, ResponseVersion

AUTHENTIC_RATING_THRESHOLD = 60
FIVE_POINT_SCALE_FACTOR = 20

_FINAL_RATING = re.compile(r"Final Rating:\s*(\d+(?:\.\d+)?)\s*/\s*5", re.IGNORECASE)

_NARRATIVE_FIELDS = ("analysis", "identification", "pricing", "characters")

_VERSION_MARKERS: dict[ResponseVersion, tuple[str, ...]] = {
    ResponseVersion.FLAT: (
        "authenticityRating",
        "analysis",
        "identification",
        "pricing",
        "characters",
    ),
    ResponseVersion.RESULT_ENVELOPE: ("result",),
    ResponseVersion.LEGACY_ALIASES: ("aiFindings", "pinIdHtml", "pricingHtml", "pinId"),
    ResponseVersion.REPORT_TEXT: ("analysisReport",),
}

_Fields = dict[str, object]


def normalize_response(
    body: object, session_id: str, now: datetime | None = None
) -> AnalysisResult:
    """Normalize any remote response body into an ``AnalysisResult``."""
    payload: Mapping[str, object] = body if isinstance(body, Mapping) else {}
    candidates = [adapter(payload) for adapter in _ADAPTERS.values()]

    narrative = {
        field: _first_text(candidate.get(field) for candidate in candidates) or ""
        for field in _NARRATIVE_FIELDS
    }
    rating = _first_rating(candidate.get("rating") for candidate in candidates)
    if rating is None:
        rating = _rating_from_text(payload.get("analysisReport"))
    if rating is None:
        rating = _rating_from_text(narrative["analysis"])
    if rating is None:
        rating = 0

    authentic = payload.get("authentic")
    if not isinstance(authentic, bool):
        authentic = rating >= AUTHENTIC_RATING_THRESHOLD

    timestamp = _text(payload.get("timestamp")) or (
        now or datetime.now(tz=UTC)
    ).isoformat()

    return AnalysisResult(
        authentic=authentic,
        authenticity_rating=rating,
        analysis=narrative["analysis"],
        identification=narrative["identification"],
        pricing=narrative["pricing"],
        characters=narrative["characters"],
        session_id=_identifier(payload.get("sessionId")) or session_id,
        timestamp=timestamp,
        response_version=detect_version(payload),
    )


def detect_version(body: object) -> ResponseVersion:
    """Return the first known response version whose marker fields are present."""
    if not isinstance(body, Mapping):
        return ResponseVersion.UNKNOWN
    for version, markers in _VERSION_MARKERS.items():
        if version is ResponseVersion.RESULT_ENVELOPE:
            if isinstance(body.get("result"), Mapping):
                return version
            continue
        if any(body.get(marker) is not None for marker in markers):
            return version
    return ResponseVersion.UNKNOWN


def _adapt_flat(body: Mapping[str, object]) -> _Fields:
    fields: _Fields = {field: body.get(field) for field in _NARRATIVE_FIELDS}
    fields["rating"] = _number(body.get("authenticityRating"))
    return fields


def _adapt_result_envelope(body: Mapping[str, object]) -> _Fields:
    result = body.get("result")
    if not isinstance(result, Mapping):
        return {}
    rating = _number(result.get("authenticityRating"))
    return {
        "analysis": result.get("aiFindings"),
        "identification": result.get("pinId"),
        "pricing": result.get("pricingInfo"),
        "characters": result.get("characters"),
        "rating": rating * FIVE_POINT_SCALE_FACTOR if rating is not None else None,
    }


def _adapt_legacy_aliases(body: Mapping[str, object]) -> _Fields:
    return {
        "analysis": body.get("aiFindings"),
        "identification": _text(body.get("pinIdHtml")) or body.get("pinId"),
        "pricing": body.get("pricingHtml"),
    }


def _adapt_report_text(body: Mapping[str, object]) -> _Fields:
    report = body.get("analysisReport")
    return {"analysis": report, "rating": _rating_from_text(report)}


_ADAPTERS: dict[ResponseVersion, Callable[[Mapping[str, object]], _Fields]] = {
    ResponseVersion.FLAT: _adapt_flat,
    ResponseVersion.RESULT_ENVELOPE: _adapt_result_envelope,
    ResponseVersion.LEGACY_ALIASES: _adapt_legacy_aliases,
    ResponseVersion.REPORT_TEXT: _adapt_report_text,
}


def _first_text(values) -> str | None:  # type: ignore[no-untyped-def]
    for value in values:
        text = _text(value)
        if text:
            return text
    return None


def _first_rating(values) -> int | None:  # type: ignore[no-untyped-def]
    for value in values:
        number = _number(value)
        if number is not None:
            return _clamp_rating(number)
    return None


def _rating_from_text(value: object) -> int | None:
    """Parse ``Final Rating: <n>/5`` and scale it to 0-100."""
    if not isinstance(value, str):
        return None
    match = _FINAL_RATING.search(value)
    if not match:
        return None
    return _clamp_rating(float(match.group(1)) * FIVE_POINT_SCALE_FACTOR)


def _clamp_rating(value: float) -> int:
    return int(round(min(100.0, max(0.0, value))))


def _number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None
    if math.isnan(number):
        return None
    return number


def _text(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _identifier(value: object) -> str | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return _text(value)
