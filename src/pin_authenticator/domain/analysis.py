"""Domain models for upload requests and analysis results."""

from dataclasses import dataclass
from enum import StrEnum


class ResponseVersion(StrEnum):
    """Historical response shapes returned by the remote service."""

    FLAT = "flat"
    RESULT_ENVELOPE = "result_envelope"
    LEGACY_ALIASES = "legacy_aliases"
    REPORT_TEXT = "report_text"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class UploadRequest:
    """Images for one upload attempt, already stripped of data-URI prefixes."""

    session_id: str
    front_image_data: str
    back_image_data: str | None = None
    angled_image_data: str | None = None

    def to_payload(self) -> dict[str, str]:
        """Return the wire body, omitting images that were not captured."""
        payload = {
            "sessionId": self.session_id,
            "frontImageData": self.front_image_data,
        }
        if self.back_image_data:
            payload["backImageData"] = self.back_image_data
        if self.angled_image_data:
            payload["angledImageData"] = self.angled_image_data
        return payload


@dataclass(frozen=True)
class AnalysisResult:
    """Normalized outcome of a successful relay call."""

    authentic: bool
    authenticity_rating: int
    analysis: str
    identification: str
    pricing: str
    characters: str
    session_id: str
    timestamp: str
    response_version: ResponseVersion = ResponseVersion.UNKNOWN

    def to_response(self) -> dict[str, object]:
        """Return the camelCase representation sent to clients."""
        return {
            "authentic": self.authentic,
            "authenticityRating": self.authenticity_rating,
            "analysis": self.analysis,
            "identification": self.identification,
            "pricing": self.pricing,
            "characters": self.characters,
            "sessionId": self.session_id,
            "timestamp": self.timestamp,
        }
