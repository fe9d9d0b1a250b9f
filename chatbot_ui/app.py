"""Streamlit chat page for the Chatbot Assistant.

Talks to the FastAPI relay at BACKEND_URL; all conversation state lives in a
ChatSession held in st.session_state and is lost on reload.
"""

import asyncio

import requests
import streamlit as st
import streamlit.components.v1 as components

from chatbot_ui.relay.client import BACKEND_URL, RelayClient
from chatbot_ui.session.controller import ChatSession
from chatbot_ui.ui.components import (COPIED_MARK, INPUT_PLACEHOLDER,
                                      LOADING_TEXT, PAGE_TITLE,
                                      action_states, avatar_for,
                                      copy_refresh_interval, copy_script,
                                      format_timestamp, prompt_index_for)

st.set_page_config(page_title=PAGE_TITLE, page_icon="🤖", layout="centered")

st.title(f"🤖 {PAGE_TITLE}")


def _write_clipboard(text: str) -> None:
    # Rendered on the next full run; the copy click triggers one.
    st.session_state.clipboard_text = text


if "chat" not in st.session_state:
    st.session_state.chat = ChatSession(
        RelayClient(BACKEND_URL), clipboard=_write_clipboard
    )

session: ChatSession = st.session_state.chat

if text := st.session_state.pop("clipboard_text", None):
    components.html(copy_script(text), height=0)


def _regenerate(index: int) -> None:
    with st.spinner(LOADING_TEXT):
        asyncio.run(session.regenerate(prompt_index_for(session, index)))


def _render_actions(index: int, watching_copy: bool) -> None:
    actions = action_states(session, index)
    if watching_copy and not actions.copied:
        # Marker cleared by its timer: full rerun drops the polling.
        st.rerun()
    like, dislike, regen, copy, _ = st.columns([1, 1, 1, 1, 6])
    like.button(
        "👍" if not actions.liked else "💚",
        key=f"like-{index}",
        help="Like",
        on_click=session.like,
        args=(index,),
    )
    dislike.button(
        "👎" if not actions.disliked else "🔻",
        key=f"dislike-{index}",
        help="Dislike",
        on_click=session.dislike,
        args=(index,),
    )
    if regen.button(
        "🔄",
        key=f"regen-{index}",
        help="Regenerate",
        disabled=actions.regenerate_disabled,
    ):
        _regenerate(index)
        st.rerun()
    if copy.button(
        COPIED_MARK if actions.copied else "📋",
        key=f"copy-{index}",
        help="Copy",
    ):
        session.copy(index)
        st.rerun()


with st.container():
    for i, turn in enumerate(session.transcript):
        with st.chat_message(turn.role, avatar=avatar_for(turn.role)):
            st.markdown(turn.content)
            if turn.role == "assistant":
                run_every = copy_refresh_interval(session, i)
                st.fragment(_render_actions, run_every=run_every)(
                    i, run_every is not None
                )
            st.caption(format_timestamp(turn.timestamp))

prompt = st.chat_input(INPUT_PLACEHOLDER, disabled=session.pending)
if prompt:
    session.set_input(prompt)
    with st.chat_message("user", avatar=avatar_for("user")):
        st.markdown(prompt)
    with st.chat_message("assistant", avatar=avatar_for("assistant")):
        with st.spinner(LOADING_TEXT):
            asyncio.run(session.submit())
    st.rerun()

with st.sidebar:
    st.header("Diagnostics")
    st.write("Backend:", BACKEND_URL)
    if st.button("Health check"):
        try:
            r = requests.get(f"{BACKEND_URL}/healthz", timeout=5)
            st.success(r.json())
        except Exception as e:
            st.error(str(e))
    if st.button("GenAI status"):
        try:
            r = requests.get(f"{BACKEND_URL}/admin/genai-status", timeout=5)
            st.info(r.json())
        except Exception as e:
            st.error(str(e))
