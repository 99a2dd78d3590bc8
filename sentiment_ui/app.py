"""Streamlit entrypoint for the sentiment analyzer page."""

from __future__ import annotations

# Must be first so absolute `sentiment_ui.*` imports work regardless of launch dir.
import sys
from pathlib import Path

_ROOT = str(Path(__file__).resolve().parents[1])
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

import asyncio
from typing import Any, Coroutine

import streamlit as st

from sentiment_ui.components.badges import history_row, result_card
from sentiment_ui.log import configure_logging
from sentiment_ui.services.config import get_client_config
from sentiment_ui.services.controller import InteractionController

_CONTROLLER_KEY = "sentiment.controller"
_DRAFT_KEY = "sentiment.draft_text"


def _run(operation: Coroutine[Any, Any, None]) -> None:
    # each rerun drives the controller on a short-lived event loop
    asyncio.run(operation)


def get_controller() -> InteractionController:
    controller = st.session_state.get(_CONTROLLER_KEY)
    if isinstance(controller, InteractionController):
        return controller
    config = get_client_config()
    configure_logging(config.log_path, config.log_level)
    controller = InteractionController(config)
    st.session_state[_CONTROLLER_KEY] = controller
    return controller


def _render_history(controller: InteractionController) -> None:
    view = controller.view()
    if not view.show_history:
        if view.history_empty and not view.error_message:
            st.caption("No history yet. Analyze a sentence to see it here.")
        return
    header, count = st.columns([3, 1])
    header.subheader("🕘 Recent Analyses")
    count.caption(view.history_count_label)
    if view.loading_history:
        st.caption("Loading history...")
    for record in view.history:
        history_row(record)


def main() -> None:
    st.set_page_config(page_title="AI Sentiment Analyzer", page_icon="✨")
    controller = get_controller()
    _run(controller.start())

    st.title("✨ AI Sentiment Analyzer")
    st.caption("Enter any text below to analyze its emotional tone and sentiment")

    text = st.text_area(
        "Text",
        key=_DRAFT_KEY,
        placeholder="Type or paste your text here...",
        height=140,
        label_visibility="collapsed",
    )
    controller.set_draft_text(text)
    view = controller.view()

    chars, words = st.columns(2)
    chars.caption(f"{view.character_count} characters")
    words.caption(f"{view.word_count} words")

    if st.button("✨ Analyze", type="primary", disabled=not view.can_submit):
        with st.spinner("Analyzing..."):
            _run(controller.submit_analysis())
        view = controller.view()

    if view.error_message:
        st.error(view.error_message)

    if view.current_result is not None:
        st.divider()
        result_card(view.current_result)

    st.divider()
    _render_history(controller)


if __name__ == "__main__":
    main()
