"""Tests for the bounded transmission log."""

import pytest

from pin_authenticator.services.transmission_log import TransmissionLog


def test_upload_titles_are_sequential() -> None:
    log = TransmissionLog(max_entries=5)

    first = log.log_image_upload("success", "ok")
    second = log.log_image_upload("failed", "boom", error_message="boom")

    assert first == "Image #1"
    assert second == "Image #2"
    assert [entry.image_title for entry in log.entries()] == ["Image #2", "Image #1"]


def test_log_keeps_only_most_recent_entries() -> None:
    log = TransmissionLog(max_entries=3)

    for _ in range(5):
        log.log_image_upload("success", "ok")

    entries = log.entries()
    assert len(entries) == 3
    assert [entry.image_number for entry in entries] == [5, 4, 3]
    assert log.max_entries == 3


def test_stats_summarize_retained_entries() -> None:
    log = TransmissionLog()
    log.log_image_upload("success", "ok")
    log.log_image_upload("failed", "bad")
    log.log_health_check("success", "healthy")
    log.log_health_check("success", "healthy")

    stats = log.stats()

    assert stats.total == 4
    assert stats.successful == 3
    assert stats.failed == 1
    assert stats.health_checks == 2
    assert stats.image_uploads == 2
    assert stats.success_rate == 75


def test_health_checks_do_not_consume_image_numbers() -> None:
    log = TransmissionLog()
    log.log_health_check("success", "healthy")

    title = log.log_image_upload("success", "ok")

    assert title == "Image #1"
    assert log.entries()[1].image_number == 0


def test_clear_resets_entries_and_numbering() -> None:
    log = TransmissionLog()
    log.log_image_upload("success", "ok")
    log.log_image_upload("success", "ok")

    log.clear()

    assert log.entries() == []
    assert log.stats().success_rate == 0
    assert log.log_image_upload("success", "ok") == "Image #1"


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        TransmissionLog(max_entries=0)
