"""Session state and data models for the sentiment analyzer UI."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

HISTORY_LIMIT = 10


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


class AnalysisRecord(BaseModel):
    """A single analysis, either freshly produced or read back from history."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    text: str
    sentiment: str
    score: float = Field(ge=-1.0, le=1.0)
    timestamp: datetime

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must not be blank")
        return value


class ControllerView(BaseModel):
    """Read-only snapshot of the interaction controller handed to the page."""

    model_config = ConfigDict(frozen=True)

    draft_text: str = ""
    current_result: Optional[AnalysisRecord] = None
    history: Tuple[AnalysisRecord, ...] = ()
    analyzing: bool = False
    loading_history: bool = False
    error_message: Optional[str] = None

    @property
    def can_submit(self) -> bool:
        return bool(self.draft_text.strip()) and not self.analyzing

    @property
    def show_history(self) -> bool:
        return bool(self.history) or self.loading_history

    @property
    def history_empty(self) -> bool:
        return not self.loading_history and not self.history

    @property
    def character_count(self) -> int:
        from sentiment_ui.utils.format import character_count

        return character_count(self.draft_text)

    @property
    def word_count(self) -> int:
        from sentiment_ui.utils.format import word_count

        return word_count(self.draft_text)

    @property
    def history_count_label(self) -> str:
        from sentiment_ui.utils.format import history_count_label

        return history_count_label(len(self.history))


__all__ = ["HISTORY_LIMIT", "Sentiment", "AnalysisRecord", "ControllerView"]
