"""Interaction controller driving the sentiment analyzer page.

The controller owns every mutable slot the page renders: the draft text, the
current result, the history list, the two busy flags and the last error. Each
slot is replaced wholesale; records themselves are immutable.

Operations are coroutines that only suspend on HTTP I/O. Overlapping calls of
the same operation race and the last response wins, unless
``ClientConfig.discard_stale_responses`` is set, in which case any response
that does not belong to the most recently issued request is dropped.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from sentiment_ui.lib.api_client import ANALYSIS_FAILED, HISTORY_FAILED, SentimentApiClient
from sentiment_ui.services.config import ClientConfig, get_client_config
from sentiment_ui.services.normalize import normalize_history, normalize_result
from sentiment_ui.state import HISTORY_LIMIT, AnalysisRecord, ControllerView

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InteractionController:
    """Validates input, sequences remote calls and exposes a view model."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        api: Optional[SentimentApiClient] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or get_client_config()
        self._api = api or SentimentApiClient.from_config(self.config)
        self._clock = clock or _utcnow

        self._draft_text = ""
        self._current_result: Optional[AnalysisRecord] = None
        self._history: Tuple[AnalysisRecord, ...] = ()
        self._analyzing = False
        self._loading_history = False
        self._error_message: Optional[str] = None

        self._analyze_seq = 0
        self._history_seq = 0
        self._started = False

    # -------------------------
    # Read-only state
    # -------------------------
    @property
    def draft_text(self) -> str:
        return self._draft_text

    @property
    def current_result(self) -> Optional[AnalysisRecord]:
        return self._current_result

    @property
    def history(self) -> Tuple[AnalysisRecord, ...]:
        return self._history

    @property
    def analyzing(self) -> bool:
        return self._analyzing

    @property
    def loading_history(self) -> bool:
        return self._loading_history

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    def view(self) -> ControllerView:
        return ControllerView(
            draft_text=self._draft_text,
            current_result=self._current_result,
            history=self._history,
            analyzing=self._analyzing,
            loading_history=self._loading_history,
            error_message=self._error_message,
        )

    # -------------------------
    # Operations
    # -------------------------
    def set_draft_text(self, text: str) -> None:
        self._draft_text = text

    async def start(self) -> None:
        """Load history the first time the page is mounted."""

        if self._started:
            return
        self._started = True
        await self.refresh_history()

    async def submit_analysis(self) -> None:
        text = self._draft_text.strip()
        if not text:
            return

        self._analyze_seq += 1
        seq = self._analyze_seq
        self._analyzing = True
        self._error_message = None
        logger.debug("submitting analysis", extra={"_extra_chars": len(text), "_extra_seq": seq})

        try:
            payload = await self._api.analyze(text)
            result = normalize_result(payload, observed_at=self._clock())
            if not self._is_current("analyze", seq):
                logger.info("discarding stale analysis response", extra={"_extra_seq": seq})
                return
            self._current_result = result
            self._error_message = None
            logger.info(
                "analysis complete",
                extra={"_extra_sentiment": result.sentiment, "_extra_score": result.score},
            )
            await self.refresh_history()
        except Exception as exc:  # noqa: BLE001 - surfaced through error_message
            if self._is_current("analyze", seq):
                self._fail("analyze", exc, ANALYSIS_FAILED)
        finally:
            if self._is_current("analyze", seq):
                self._analyzing = False

    async def refresh_history(self) -> None:
        self._history_seq += 1
        seq = self._history_seq
        self._loading_history = True
        self._error_message = None
        logger.debug("refreshing history", extra={"_extra_seq": seq})

        try:
            payload = await self._api.history(HISTORY_LIMIT)
            history = normalize_history(payload)[:HISTORY_LIMIT]
            if not self._is_current("history", seq):
                logger.info("discarding stale history response", extra={"_extra_seq": seq})
                return
            self._history = history
            self._error_message = None
            logger.info("history loaded", extra={"_extra_count": len(history)})
        except Exception as exc:  # noqa: BLE001 - surfaced through error_message
            if self._is_current("history", seq):
                self._fail("history", exc, HISTORY_FAILED)
        finally:
            if self._is_current("history", seq):
                self._loading_history = False

    # -------------------------
    # Helpers
    # -------------------------
    def _is_current(self, operation: str, seq: int) -> bool:
        if not self.config.discard_stale_responses:
            return True
        latest = self._analyze_seq if operation == "analyze" else self._history_seq
        return seq == latest

    def _fail(self, operation: str, exc: Exception, fallback: str) -> None:
        message = str(exc).strip() or fallback
        logger.warning(
            "%s failed: %s",
            operation,
            message,
            extra={"_extra_operation": operation, "_extra_error_type": type(exc).__name__},
        )
        self._error_message = message


__all__ = ["InteractionController"]
