# sevasetu/session/messages.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, List, Optional


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


def new_message_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Message:
    role: Role
    text: str
    audio: Optional[str] = None  # data URI
    image: Optional[str] = None  # data URI
    id: str = ""

    def __post_init__(self):
        if not self.id:
            object.__setattr__(self, "id", new_message_id())


class MessageLog:
    """
    Ordered transcript of one session.

    Appends are the normal path. `replace_text` and `remove` exist for the
    voice placeholder only: it is rewritten in place once transcribed, or
    taken out when the turn fails.
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def __len__(self) -> int:
        return len(self._messages)

    def append(self, message: Message) -> Message:
        self._messages.append(message)
        return message

    def replace_text(self, message_id: str, text: str) -> bool:
        for i, m in enumerate(self._messages):
            if m.id == message_id:
                self._messages[i] = replace(m, text=text)
                return True
        return False

    def remove(self, message_id: str) -> bool:
        before = len(self._messages)
        self._messages = [m for m in self._messages if m.id != message_id]
        return len(self._messages) != before

    def clear(self) -> None:
        self._messages = []

    def snapshot(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def last(self, role: Role) -> Optional[Message]:
        for m in reversed(self._messages):
            if m.role == role and m.text:
                return m
        return None

    def transcript(self) -> str:
        """
        Plain text transcript like:

          assistant: ...
          user: ...
        """
        return "\n".join(f"{m.role.value}: {m.text}" for m in self._messages)
