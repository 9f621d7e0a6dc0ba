"""HTTP client for the remote pin authentication ("master") service."""

import asyncio
from dataclasses import dataclass
from typing import Protocol

import httpx

from pin_authenticator.domain.errors import (
    NetworkError,
    RelayTimeoutError,
    RemoteServiceError,
    remote_error_for_status,
)

UPLOAD_PATH = "/mobile-upload"
HEALTH_PATH = "/health"


class PimClient(Protocol):
    """Interface for the remote authentication service."""

    @property
    def upload_url(self) -> str:
        """Return the absolute upload endpoint."""

    @property
    def health_url(self) -> str:
        """Return the absolute health endpoint."""

    async def upload(
        self, payload: dict[str, str], timeout_seconds: float
    ) -> dict[str, object]:
        """Post images and return the parsed JSON body."""

    async def check_health(self, timeout_seconds: float) -> dict[str, object]:
        """Return the remote health payload."""


@dataclass
class HttpxPimClient(PimClient):
    """PIM client implemented with httpx."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxPimClient":
        """Create a PIM client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
        )

    @property
    def upload_url(self) -> str:
        """Return the absolute upload endpoint."""
        return f"{self.base_url}{UPLOAD_PATH}"

    @property
    def health_url(self) -> str:
        """Return the absolute health endpoint."""
        return f"{self.base_url}{HEALTH_PATH}"

    async def upload(
        self, payload: dict[str, str], timeout_seconds: float
    ) -> dict[str, object]:
        """POST the upload body to /mobile-upload."""
        return await self._send(
            "POST", self.upload_url, timeout_seconds, json_body=payload
        )

    async def check_health(self, timeout_seconds: float) -> dict[str, object]:
        """GET /health on the remote service."""
        return await self._send("GET", self.health_url, timeout_seconds)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _send(
        self,
        method: str,
        url: str,
        timeout_seconds: float,
        json_body: dict[str, str] | None = None,
    ) -> dict[str, object]:
        headers = {"Content-Type": "application/json", "x-api-key": self.api_key}
        request = self.http_client.build_request(
            method,
            url,
            headers=headers,
            json=json_body,
            timeout=timeout_seconds,
        )
        try:
            response = await asyncio.wait_for(
                self._read(request), timeout=timeout_seconds
            )
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise RelayTimeoutError(timeout_seconds) from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"Could not reach {url}: {exc}") from exc

        if not response.is_success:
            raise remote_error_for_status(response.status_code, response.text)
        try:
            data = response.json()
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
            raise RemoteServiceError(response.status_code, response.text) from exc
        return data if isinstance(data, dict) else {"data": data}

    async def _read(self, request: httpx.Request) -> httpx.Response:
        response = await self.http_client.send(request, stream=True)
        try:
            await response.aread()
        except httpx.DecodingError as exc:
            raise remote_error_for_status(
                response.status_code, f"Undecodable response body: {exc}"
            ) from exc
        finally:
            await response.aclose()
        return response
