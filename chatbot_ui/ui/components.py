"""Shared UI pieces for the chat page.

Kept free of Streamlit calls so the rendering decisions can be tested.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime

from chatbot_ui.session.controller import ChatSession
from chatbot_ui.session.transcript import Role

PAGE_TITLE = "Chatbot Assistant"
INPUT_PLACEHOLDER = "Type your message..."
LOADING_TEXT = "Generating response..."
COPIED_MARK = "✓"
COPIED_POLL_S = 0.5

AVATARS: dict[str, str] = {"user": "👤", "assistant": "🤖"}


@dataclass
class MessageActions:
    liked: bool
    disliked: bool
    copied: bool
    regenerate_disabled: bool


def avatar_for(role: Role) -> str:
    return AVATARS.get(role, "🤖")


def format_timestamp(ts: datetime) -> str:
    # Render in the viewer's local time, hour and minute only
    return ts.astimezone().strftime("%H:%M")


def action_states(session: ChatSession, index: int) -> MessageActions:
    return MessageActions(
        liked=index in session.liked,
        disliked=index in session.disliked,
        copied=session.copied_index == index,
        regenerate_disabled=session.pending,
    )


def prompt_index_for(session: ChatSession, index: int) -> int:
    """Index of the user turn an assistant turn answered.

    Walks back from `index`; falls back to `index` itself if no user turn
    precedes it.
    """
    session.transcript.check_index(index)
    for i in range(index, -1, -1):
        if session.transcript[i].role == "user":
            return i
    return index


def copy_script(text: str) -> str:
    """Browser snippet writing `text` to the clipboard."""
    # json.dumps yields a valid JS string literal; escape "</" so the text
    # cannot close the script tag.
    literal = json.dumps(text).replace("</", "<\\/")
    return f"<script>navigator.clipboard.writeText({literal});</script>"


def copy_refresh_interval(session: ChatSession, index: int) -> float | None:
    """Poll interval for a message's action row while its copy mark is shown.

    The copied marker is cleared off-thread, so the row has to re-render on
    its own to drop the check mark.
    """
    return COPIED_POLL_S if session.copied_index == index else None
