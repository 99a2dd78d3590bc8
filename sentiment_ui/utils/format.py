from __future__ import annotations

from datetime import datetime
from typing import Any

from sentiment_ui.state import HISTORY_LIMIT, Sentiment

SCORE_THRESHOLD = 0.1

SENTIMENT_ICONS = {
    "up": "📈",
    "down": "📉",
    "flat": "➖",
}

COLOR_HEX = {
    "positive": "#38A169",
    "negative": "#E53E3E",
    "neutral": "#4A5568",
}


def _label(sentiment: Any) -> str:
    if isinstance(sentiment, Sentiment):
        return sentiment.value
    return str(sentiment)


def sentiment_icon(sentiment: Any) -> str:
    label = _label(sentiment)
    if label == Sentiment.POSITIVE.value:
        return "up"
    if label == Sentiment.NEGATIVE.value:
        return "down"
    return "flat"


def sentiment_color(sentiment: Any) -> str:
    label = _label(sentiment)
    if label == Sentiment.POSITIVE.value:
        return "positive"
    if label == Sentiment.NEGATIVE.value:
        return "negative"
    return "neutral"


def score_color(score: float) -> str:
    """Colour category derived from the score alone, ignoring the label."""

    if score > SCORE_THRESHOLD:
        return "positive"
    if score < -SCORE_THRESHOLD:
        return "negative"
    return "neutral"


def score_bar_position(score: float) -> float:
    position = (score + 1) / 2
    return min(1.0, max(0.0, position))


def format_score(score: float, digits: int = 2) -> str:
    sign = "+" if score > 0 else ""
    return f"{sign}{score:.{digits}f}"


def truncate_text(text: str, max_length: int = 60) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_time(timestamp: datetime) -> str:
    # naive timestamps are already local wall-clock time
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone()
    return timestamp.strftime("%H:%M")


def character_count(text: str) -> int:
    return len(text)


def word_count(text: str) -> int:
    return len(text.split())


def history_count_label(count: int, limit: int = HISTORY_LIMIT) -> str:
    return f"{count} of {limit}"
