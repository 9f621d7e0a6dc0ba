"""Read endpoints for pins, feedback and the transmission log."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

if TYPE_CHECKING:
    from pin_authenticator.containers import AppContainer
    from pin_authenticator.domain.pins import FeedbackRecord, PinRecord

router = APIRouter(prefix="/api", tags=["records"])


@router.get("/mobile/provisional-pins")
async def provisional_pins(request: Request) -> dict[str, object]:
    """Return pins that have not received user feedback yet."""
    container: AppContainer = request.app.state.container
    pins = container.verification_service.provisional_pins()
    return {
        "success": True,
        "provisionalPins": [serialize_pin(pin) for pin in pins],
        "total": len(pins),
    }


@router.get("/pins/all")
async def all_pins(request: Request) -> dict[str, object]:
    """Return every pin with feedback counts."""
    container: AppContainer = request.app.state.container
    pins = container.pin_service.list_pins()
    stats = container.pin_service.agreement_stats()
    return {
        "success": True,
        "pins": [serialize_pin(pin) for pin in pins],
        "total": len(pins),
        "feedbackStats": {
            "withFeedback": stats.agree + stats.disagree,
            "agree": stats.agree,
            "disagree": stats.disagree,
        },
    }


@router.get("/feedback/all")
async def all_feedback(request: Request) -> dict[str, object]:
    """Return all feedback rows with agreement counts."""
    container: AppContainer = request.app.state.container
    feedback = container.feedback_service.get_all_user_feedback()
    stats = container.feedback_service.agreement_stats()
    return {
        "success": True,
        "feedback": [serialize_feedback(row) for row in feedback],
        "total": len(feedback),
        "agreementStats": asdict(stats),
    }


@router.get("/feedback/analysis/{analysis_id}")
async def feedback_for_analysis(analysis_id: int, request: Request) -> dict[str, object]:
    """Return feedback recorded against one analysis id."""
    container: AppContainer = request.app.state.container
    feedback = container.feedback_service.get_feedback_by_analysis_id(analysis_id)
    return {
        "success": True,
        "feedback": [serialize_feedback(row) for row in feedback],
        "count": len(feedback),
    }


@router.get("/transmission-logs")
async def transmission_logs(request: Request) -> dict[str, object]:
    """Return recent relay and health-check attempts."""
    container: AppContainer = request.app.state.container
    log = container.transmission_log
    return {
        "logs": [asdict(entry) for entry in log.entries()],
        "stats": asdict(log.stats()),
        "capacity": log.max_entries,
    }


@router.delete("/transmission-logs")
async def clear_transmission_logs(request: Request) -> dict[str, object]:
    """Clear the transmission log."""
    container: AppContainer = request.app.state.container
    container.transmission_log.clear()
    return {"success": True}


def serialize_pin(pin: PinRecord) -> dict[str, object]:
    """Return the camelCase representation of a pin record."""
    return {
        "id": pin.id,
        "pinId": pin.pin_id,
        "userAgreement": pin.user_agreement,
        "feedbackComment": pin.feedback_comment,
        "feedbackSubmittedAt": (
            pin.feedback_submitted_at.isoformat() if pin.feedback_submitted_at else None
        ),
        "createdAt": pin.created_at.isoformat(),
    }


def serialize_feedback(row: FeedbackRecord) -> dict[str, object]:
    """Return the camelCase representation of a feedback row."""
    return {
        "id": row.id,
        "analysisId": row.analysis_id,
        "pinId": row.pin_id,
        "userAgreement": row.user_agreement,
        "feedbackComment": row.feedback_comment,
        "submittedAt": row.submitted_at.isoformat(),
    }
