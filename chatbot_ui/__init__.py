"""chatbot_ui: browser-side pieces of the Chatbot Assistant (session, relay client, UI).

The relay backend lives in `backend` and `chatbot`; this package only talks to it over HTTP.
"""

__all__ = [
    "relay",
    "session",
    "ui",
]
