"""Conversion of analysis service payloads into :class:`AnalysisRecord` values."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from sentiment_ui.state import AnalysisRecord

_NUMERIC = re.compile(r"[+-]?\d+(\.\d*)?")


class RecordNormalizationError(ValueError):
    """Raised when a wire record cannot be turned into an analysis record."""


class AnalyzeResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    input_text: str
    sentiment: str
    compound_score: float = Field(strict=True)


class HistoryItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    input_text: str
    sentiment: str
    compound_score: float = Field(strict=True)
    created_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("created_at", mode="before")
    @classmethod
    def _iso_only(cls, value: Any) -> Any:
        # epoch numbers are not ISO-8601, even when sent as strings
        if not isinstance(value, str) or _NUMERIC.fullmatch(value.strip()):
            raise ValueError("created_at must be an ISO-8601 string")
        return value


_HISTORY_ADAPTER = TypeAdapter(List[HistoryItem])


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def normalize_result(payload: Any, *, observed_at: Optional[datetime] = None) -> AnalysisRecord:
    """Map an ``/analyze`` response onto a local record without an id."""

    timestamp = observed_at or datetime.now(timezone.utc)
    try:
        wire = AnalyzeResponse.model_validate(payload)
        return AnalysisRecord(
            text=wire.input_text,
            sentiment=wire.sentiment,
            score=wire.compound_score,
            timestamp=timestamp,
        )
    except ValidationError as exc:
        raise RecordNormalizationError(f"Malformed analysis result ({_describe(exc)})") from exc


def normalize_history(payload: Any) -> Tuple[AnalysisRecord, ...]:
    """Map a ``/history`` response onto records, preserving service order.

    The whole list is rejected if any item is malformed.
    """

    try:
        items = _HISTORY_ADAPTER.validate_python(payload)
        return tuple(
            AnalysisRecord(
                id=item.id,
                text=item.input_text,
                sentiment=item.sentiment,
                score=item.compound_score,
                timestamp=item.created_at,
            )
            for item in items
        )
    except ValidationError as exc:
        raise RecordNormalizationError(f"Malformed history record ({_describe(exc)})") from exc


__all__ = [
    "AnalyzeResponse",
    "HistoryItem",
    "RecordNormalizationError",
    "normalize_history",
    "normalize_result",
]
