"""Reusable badge components."""

from __future__ import annotations

import html

import streamlit as st

from sentiment_ui.state import AnalysisRecord
from sentiment_ui.utils.format import (
    COLOR_HEX,
    SENTIMENT_ICONS,
    format_score,
    format_time,
    score_bar_position,
    score_color,
    sentiment_color,
    sentiment_icon,
    truncate_text,
)


def _badge_html(sentiment: str, *, with_label: bool = True) -> str:
    color = COLOR_HEX[sentiment_color(sentiment)]
    icon = SENTIMENT_ICONS[sentiment_icon(sentiment)]
    label = f"<span style='margin-left:6px;'>{html.escape(sentiment)}</span>" if with_label else ""
    return (
        f"<span style='display:inline-flex;align-items:center;padding:2px 8px;border-radius:12px;"
        f"border:1px solid {color};color:{color};font-size:0.85rem;font-weight:600;'>"
        f"{icon}{label}</span>"
    )


def sentiment_badge(sentiment: str) -> None:
    st.markdown(_badge_html(sentiment), unsafe_allow_html=True)


def score_value(score: float) -> None:
    color = COLOR_HEX[score_color(score)]
    st.markdown(
        f"<div style='text-align:right;font-size:2rem;font-weight:700;color:{color};'>"
        f"{format_score(score)}</div>",
        unsafe_allow_html=True,
    )


def score_bar(score: float) -> None:
    """Horizontal bar filled from the negative end up to the score."""
    color = COLOR_HEX[score_color(score)]
    width = score_bar_position(score) * 100
    st.markdown(
        "<div style='display:flex;justify-content:space-between;font-size:0.75rem;color:#718096;'>"
        "<span>Negative</span><span>Neutral</span><span>Positive</span></div>"
        "<div style='height:8px;width:100%;border-radius:4px;background:#2D3748;overflow:hidden;'>"
        f"<div style='height:100%;width:{width:.1f}%;border-radius:4px;background:{color};'></div></div>",
        unsafe_allow_html=True,
    )


def result_card(result: AnalysisRecord) -> None:
    st.subheader("Analysis Result")
    left, right = st.columns(2)
    with left:
        st.caption("Sentiment")
        sentiment_badge(result.sentiment)
    with right:
        st.caption("Compound Score")
        score_value(result.score)
    score_bar(result.score)


def history_row(record: AnalysisRecord) -> None:
    score_hex = COLOR_HEX[score_color(record.score)]
    st.markdown(
        "<div style='display:flex;align-items:center;gap:12px;padding:8px;border-radius:8px;"
        "border:1px solid #2D3748;margin-bottom:6px;'>"
        f"<div>{_badge_html(record.sentiment, with_label=False)}</div>"
        f"<div style='flex:1;min-width:0;'><div>{html.escape(truncate_text(record.text))}</div>"
        f"<div>{_badge_html(record.sentiment)} "
        f"<code style='color:{score_hex};'>{format_score(record.score)}</code></div></div>"
        f"<div style='font-size:0.75rem;color:#718096;'>🕒 {format_time(record.timestamp)}</div>"
        "</div>",
        unsafe_allow_html=True,
    )
