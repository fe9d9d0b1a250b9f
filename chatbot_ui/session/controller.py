"""ChatSession: in-memory state for one user's chat in the browser client.

The session owns the transcript, the like/dislike index sets, the transient
copied marker and typing flag, and the pending count of outstanding relay
calls. Nothing is persisted; a new session starts empty.

Failure visibility is asymmetric: a failed `submit` only logs, while a failed
`regenerate` appends an apology turn.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Set

from chatbot_ui.relay.client import RelayError
from chatbot_ui.session.timers import Handle, Scheduler, ThreadScheduler
from chatbot_ui.session.transcript import Transcript, Turn

logger = logging.getLogger(__name__)

COPIED_CLEAR_DELAY_S = 2.0
TYPING_CLEAR_DELAY_S = 1.0
REGENERATE_ERROR_MESSAGE = (
    "Sorry, I encountered an error while regenerating the response. Please try again."
)


class Relay(Protocol):
    async def send(self, message: str) -> str: ...


def _no_clipboard(text: str) -> None:
    logger.debug("No clipboard configured; dropping %d chars", len(text))


class ChatSession:
    def __init__(
        self,
        relay: Relay,
        *,
        clipboard: Optional[Callable[[str], None]] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        self.relay = relay
        self.clipboard = clipboard or _no_clipboard
        self.scheduler = scheduler or ThreadScheduler()
        self.transcript = Transcript()
        self.liked: Set[int] = set()
        self.disliked: Set[int] = set()
        self.copied_index: Optional[int] = None
        self.typing = False
        self.input = ""
        self._in_flight = 0
        self._timers: Set[Handle] = set()

    @property
    def pending(self) -> bool:
        return self._in_flight > 0

    @property
    def can_send(self) -> bool:
        return not self.pending and bool(self.input.strip())

    def set_input(self, text: str) -> None:
        self.input = text
        self.typing = True
        self._schedule(TYPING_CLEAR_DELAY_S, self._clear_typing)

    async def submit(self, text: Optional[str] = None) -> bool:
        """Send `text` (or the current input) as a new user turn.

        Returns False without touching state for blank input or while a
        request is pending.
        """
        if text is None:
            text = self.input
        if not text.strip() or self.pending:
            return False

        self.transcript.append(Turn(role="user", content=text))
        self.input = ""
        self._in_flight += 1
        try:
            reply = await self.relay.send(text)
        except RelayError as e:
            logger.error("Error: %s", e)
        else:
            self.transcript.append(Turn(role="assistant", content=reply))
        finally:
            self._in_flight -= 1
        return True

    async def regenerate(self, index: int) -> None:
        """Re-send the content of turn `index` and append the outcome.

        Does not consult the pending flag, so it may overlap a submit; the
        later completion is appended later.
        """
        self._in_flight += 1
        try:
            source = self.transcript[index]
            reply = await self.relay.send(source.content)
        except (RelayError, IndexError) as e:
            logger.error("Error: %s", e)
            self.transcript.append(Turn(role="assistant", content=REGENERATE_ERROR_MESSAGE))
        else:
            self.transcript.append(Turn(role="assistant", content=reply))
        finally:
            self._in_flight -= 1

    def like(self, index: int) -> None:
        self.transcript.check_index(index)
        self.disliked.discard(index)
        self.liked.add(index)

    def dislike(self, index: int) -> None:
        self.transcript.check_index(index)
        self.liked.discard(index)
        self.disliked.add(index)

    def copy(self, index: int) -> None:
        self.clipboard(self.transcript[index].content)
        self.copied_index = index
        # Each copy gets its own timer; an older one may clear a newer marker.
        self._schedule(COPIED_CLEAR_DELAY_S, self._clear_copied)

    def close(self) -> None:
        for h in list(self._timers):
            h.cancel()
        self._timers.clear()

    def _clear_copied(self) -> None:
        self.copied_index = None

    def _clear_typing(self) -> None:
        self.typing = False

    def _schedule(self, delay_s: float, callback: Callable[[], None]) -> None:
        holder: dict = {}

        def fire():
            self._timers.discard(holder.get("handle"))
            callback()

        handle = self.scheduler.call_later(delay_s, fire)
        holder["handle"] = handle
        self._timers.add(handle)
