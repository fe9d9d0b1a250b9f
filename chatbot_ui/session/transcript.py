"""Turn and Transcript: the append-only conversation history of one session."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, List, Literal

Role = Literal["user", "assistant"]


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Turn:
    role: Role
    content: str
    timestamp: datetime = field(default_factory=_now)


class Transcript:
    """Ordered turns; insertion order is display order.

    There is no edit or delete: entries are only ever appended.
    """

    def __init__(self) -> None:
        self._turns: List[Turn] = []

    def append(self, turn: Turn) -> int:
        self._turns.append(turn)
        return len(self._turns) - 1

    def check_index(self, index: int) -> int:
        if not 0 <= index < len(self._turns):
            raise IndexError(f"transcript index out of range: {index}")
        return index

    def __getitem__(self, index: int) -> Turn:
        return self._turns[self.check_index(index)]

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(list(self._turns))
