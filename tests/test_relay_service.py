"""Tests for the upload relay service."""

import asyncio
import re

import pytest

from pin_authenticator.domain.analysis import ResponseVersion
from pin_authenticator.domain.errors import (
    NetworkError,
    ServiceUnavailableError,
    ValidationError,
)
from pin_authenticator.services.relay import UploadRelay
from pin_authenticator.services.transmission_log import TransmissionLog
from tests.conftest import FakePimClient


def _relay(client: FakePimClient) -> tuple[UploadRelay, TransmissionLog]:
    log = TransmissionLog(max_entries=10)
    return UploadRelay(client=client, transmission_log=log), log


def test_relay_strips_prefix_and_omits_missing_images() -> None:
    client = FakePimClient()
    relay, _ = _relay(client)

    asyncio.run(relay.relay("data:image/png;base64,AAAA"))

    sent = client.uploads[0]
    assert set(sent) == {"sessionId", "frontImageData"}
    assert sent["frontImageData"] == "AAAA"
    assert re.fullmatch(r"\d{12}", sent["sessionId"])


def test_relay_includes_back_and_angled_images() -> None:
    client = FakePimClient()
    relay, _ = _relay(client)

    asyncio.run(
        relay.relay(
            "AAAA",
            "data:image/jpeg;base64,BBBB",
            "data:image/webp;base64,CCCC",
            session_id="250610150919",
        )
    )

    assert client.uploads[0] == {
        "sessionId": "250610150919",
        "frontImageData": "AAAA",
        "backImageData": "BBBB",
        "angledImageData": "CCCC",
    }


def test_relay_never_sends_empty_optional_images() -> None:
    client = FakePimClient()
    relay, _ = _relay(client)

    asyncio.run(relay.relay("AAAA", "", "data:image/png;base64,"))

    assert "backImageData" not in client.uploads[0]
    assert "angledImageData" not in client.uploads[0]


def test_relay_returns_normalized_result() -> None:
    client = FakePimClient()
    relay, log = _relay(client)

    result = asyncio.run(relay.relay("AAAA", session_id="250610150919"))

    assert result.authentic is True
    assert result.authenticity_rating == 85
    assert result.session_id == "250610150919"
    assert result.response_version is ResponseVersion.FLAT
    entry = log.entries()[0]
    assert entry.kind == "image_upload"
    assert entry.status == "success"
    assert entry.image_title == "Image #1"


@pytest.mark.parametrize("front", [None, "", "data:image/png;base64,"])
def test_relay_requires_front_image(front: str | None) -> None:
    client = FakePimClient()
    relay, _ = _relay(client)

    with pytest.raises(ValidationError):
        asyncio.run(relay.relay(front))

    assert client.uploads == []


def test_relay_rejects_malformed_session_id() -> None:
    client = FakePimClient()
    relay, _ = _relay(client)

    with pytest.raises(ValidationError):
        asyncio.run(relay.relay("AAAA", session_id="session_1700000000"))

    assert client.uploads == []


def test_relay_records_and_reraises_service_unavailable() -> None:
    client = FakePimClient(error=ServiceUnavailableError(503, "down"))
    relay, log = _relay(client)

    with pytest.raises(ServiceUnavailableError):
        asyncio.run(relay.relay("AAAA"))

    entry = log.entries()[0]
    assert entry.status == "failed"
    assert entry.response_status == 503
    assert "down" in (entry.error_message or "")


def test_relay_does_not_retry_on_failure() -> None:
    client = FakePimClient(error=NetworkError("unreachable"))
    relay, _ = _relay(client)

    with pytest.raises(NetworkError):
        asyncio.run(relay.relay("AAAA"))

    assert len(client.uploads) == 1


def test_check_health_logs_attempts() -> None:
    client = FakePimClient()
    relay, log = _relay(client)

    payload = asyncio.run(relay.check_health())

    assert payload == {"status": "ok"}
    entry = log.entries()[0]
    assert entry.kind == "health_check"
    assert entry.image_number == 0
    assert entry.endpoint == "https://pim.test/health"


def test_relay_uses_default_timeout_only_when_omitted() -> None:
    client = FakePimClient()
    relay, _ = _relay(client)

    asyncio.run(relay.relay("AAAA"))
    asyncio.run(relay.relay("AAAA", timeout_seconds=0))
    asyncio.run(relay.check_health())
    asyncio.run(relay.check_health(timeout_seconds=0))

    assert client.timeouts == [180.0, 0, 10.0, 0]
