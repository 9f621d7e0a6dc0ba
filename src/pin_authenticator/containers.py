"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from pin_authenticator.adapters.pim_client import HttpxPimClient
from pin_authenticator.adapters.supabase_feedback_repository import (
    SupabaseFeedbackRepository,
)
from pin_authenticator.adapters.supabase_pin_repository import SupabasePinRepository
from pin_authenticator.config import Settings
from pin_authenticator.services.feedback import FeedbackService
from pin_authenticator.services.pins import PinService
from pin_authenticator.services.relay import UploadRelay
from pin_authenticator.services.transmission_log import TransmissionLog
from pin_authenticator.services.verification import VerificationService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    transmission_log: TransmissionLog
    relay: UploadRelay
    pin_service: PinService
    feedback_service: FeedbackService
    verification_service: VerificationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    pin_service = PinService(SupabasePinRepository(supabase_client))
    feedback_service = FeedbackService(SupabaseFeedbackRepository(supabase_client))
    transmission_log = TransmissionLog(resolved_settings.transmission_log_size)
    pim_client = HttpxPimClient.create(
        api_key=resolved_settings.pim_api_key,
        base_url=resolved_settings.pim_api_url,
    )
    relay = UploadRelay(
        client=pim_client,
        transmission_log=transmission_log,
        upload_timeout_seconds=resolved_settings.upload_timeout_seconds,
        health_timeout_seconds=resolved_settings.health_timeout_seconds,
    )
    verification_service = VerificationService(
        relay=relay,
        pin_service=pin_service,
        feedback_service=feedback_service,
    )

    async def close_resources() -> None:
        await pim_client.close()

    return AppContainer(
        settings=resolved_settings,
        transmission_log=transmission_log,
        relay=relay,
        pin_service=pin_service,
        feedback_service=feedback_service,
        verification_service=verification_service,
        close_resources=close_resources,
    )
