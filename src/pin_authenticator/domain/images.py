"""Captured image payload helpers."""

import re

_DATA_URI_PREFIX = re.compile(
    r"^data:image/(?:png|jpeg|jpg|webp|gif);base64,", re.IGNORECASE
)


def strip_data_uri(value: str | None) -> str | None:
    """Strip a data-URI image prefix, leaving the base64 payload."""
    if not value:
        return value
    return _DATA_URI_PREFIX.sub("", value, count=1)
