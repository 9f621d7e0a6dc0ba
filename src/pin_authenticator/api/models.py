"""Pydantic models for inbound API payloads."""

from pydantic import AliasChoices, BaseModel, Field, field_validator


class VerifyPinRequest(BaseModel):
    """Captured images posted by web and mobile clients."""

    front_image: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "frontImageBase64", "frontImageData", "frontImage"
        ),
    )
    back_image: str | None = Field(
        default=None,
        validation_alias=AliasChoices("backImageBase64", "backImageData", "backImage"),
    )
    angled_image: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "angledImageBase64", "angledImageData", "angledImage"
        ),
    )
    session_id: str | None = Field(default=None, validation_alias="sessionId")


class FeedbackRequest(BaseModel):
    """User agreement with an analysis result."""

    pin_id: str | None = Field(default=None, validation_alias="pinId")
    user_agreement: str | None = Field(default=None, validation_alias="userAgreement")
    feedback_comment: str | None = Field(
        default=None, validation_alias="feedbackComment"
    )
    analysis_id: int | None = Field(
        default=None, validation_alias=AliasChoices("analysisId", "recordNumber")
    )

    @field_validator("analysis_id", mode="before")
    @classmethod
    def _parse_analysis_id(cls, value: object) -> int | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            return int(value.strip())
        return None
