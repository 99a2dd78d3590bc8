from __future__ import annotations

"""Small async HTTP client for the sentiment analysis service."""

import logging
from typing import Any, Optional

import httpx

from sentiment_ui.services.config import DEFAULT_API_BASE_URL, ClientConfig, sanitize_base_url
from sentiment_ui.state import HISTORY_LIMIT

logger = logging.getLogger(__name__)

ANALYSIS_FAILED = "Analysis failed. Please try again."
HISTORY_FAILED = "Failed to load history"
MALFORMED_RESPONSE = "Malformed response from analysis service"


class SentimentApiError(Exception):
    """Base class for failures talking to the analysis service."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AnalysisFailedError(SentimentApiError):
    pass


class HistoryLoadError(SentimentApiError):
    pass


class MalformedResponseError(SentimentApiError):
    pass


class SentimentApiClient:
    """Thin wrapper around ``httpx.AsyncClient`` for ``/analyze`` and ``/history``.

    A fresh ``AsyncClient`` is opened per request so the client can be driven
    from a different event loop on every UI rerun.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = sanitize_base_url(base_url, default=DEFAULT_API_BASE_URL)
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(
        cls, config: ClientConfig, *, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "SentimentApiClient":
        return cls(config.api_base_url, timeout=config.request_timeout, transport=transport)

    def _build_url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = self._build_url(path)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.request(method, url, **kwargs)
        logger.debug(
            "%s %s -> %s",
            method,
            url,
            response.status_code,
            extra={"_extra_status": response.status_code, "_extra_path": path},
        )
        return response

    @staticmethod
    def _parse_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(MALFORMED_RESPONSE, status_code=response.status_code) from exc

    async def analyze(self, text: str) -> Any:
        """POST ``text`` to ``/analyze`` and return the decoded body."""

        response = await self._request("POST", "/analyze", json={"text": text})
        if not response.is_success:
            raise AnalysisFailedError(ANALYSIS_FAILED, status_code=response.status_code)
        return self._parse_json(response)

    async def history(self, limit: int = HISTORY_LIMIT) -> Any:
        """GET the most recent analyses, at most :data:`HISTORY_LIMIT`."""

        limit = max(1, min(int(limit), HISTORY_LIMIT))
        response = await self._request("GET", "/history", params={"limit": limit})
        if not response.is_success:
            raise HistoryLoadError(HISTORY_FAILED, status_code=response.status_code)
        return self._parse_json(response)


__all__ = [
    "ANALYSIS_FAILED",
    "HISTORY_FAILED",
    "MALFORMED_RESPONSE",
    "AnalysisFailedError",
    "HistoryLoadError",
    "MalformedResponseError",
    "SentimentApiClient",
    "SentimentApiError",
]
