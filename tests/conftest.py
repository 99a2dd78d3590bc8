from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx
import pytest

from sentiment_ui.lib.api_client import SentimentApiClient
from sentiment_ui.services.config import ClientConfig
from sentiment_ui.services.controller import InteractionController

BASE_URL = "http://sentiment.test"
FIXED_NOW = datetime(2025, 1, 1, 12, 30, tzinfo=timezone.utc)


class FakeSentimentService:
    """In-memory analysis service served through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.records: List[Dict[str, Any]] = []
        self.requests: List[httpx.Request] = []
        self.analyze_status = 200
        self.history_status = 200
        self.analyze_body: Optional[Any] = None
        self.history_body: Optional[Any] = None
        self.raise_on: Optional[str] = None
        self.label = "Positive"
        self.score = 0.8
        self._created = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)

    @property
    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    def add_record(self, text: str, sentiment: str = "Neutral", score: float = 0.0) -> Dict[str, Any]:
        self._created += timedelta(minutes=1)
        record = {
            "id": f"rec-{len(self.records) + 1}",
            "input_text": text,
            "sentiment": sentiment,
            "compound_score": score,
            "created_at": self._created.isoformat().replace("+00:00", "Z"),
        }
        self.records.insert(0, record)
        return record

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_on == request.url.path:
            raise httpx.ConnectError("Connection refused", request=request)
        if request.url.path == "/analyze":
            return self._analyze(request)
        if request.url.path == "/history":
            return self._history(request)
        return httpx.Response(404, json={"detail": "not found"})

    def _analyze(self, request: httpx.Request) -> httpx.Response:
        if self.analyze_status != 200:
            return httpx.Response(self.analyze_status, json={"detail": "boom"})
        if self.analyze_body is not None:
            return _body_response(self.analyze_body)
        text = json.loads(request.content)["text"]
        self.add_record(text, self.label, self.score)
        return httpx.Response(
            200,
            json={"input_text": text, "sentiment": self.label, "compound_score": self.score},
        )

    def _history(self, request: httpx.Request) -> httpx.Response:
        if self.history_status != 200:
            return httpx.Response(self.history_status, json={"detail": "boom"})
        if self.history_body is not None:
            return _body_response(self.history_body)
        limit = int(request.url.params.get("limit", "10"))
        return httpx.Response(200, json=self.records[:limit])


def _body_response(body: Any) -> httpx.Response:
    if isinstance(body, (bytes, str)):
        return httpx.Response(200, content=body, headers={"content-type": "application/json"})
    return httpx.Response(200, json=body)


@pytest.fixture
def service() -> FakeSentimentService:
    return FakeSentimentService()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_base_url=BASE_URL)


@pytest.fixture
def api(service: FakeSentimentService, config: ClientConfig) -> SentimentApiClient:
    return SentimentApiClient.from_config(config, transport=httpx.MockTransport(service.handler))


@pytest.fixture
def controller(config: ClientConfig, api: SentimentApiClient) -> InteractionController:
    return InteractionController(config, api=api, clock=lambda: FIXED_NOW)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
