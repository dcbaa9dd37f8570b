"""Data models for the chat transcript export pipeline."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Tuple

logger = logging.getLogger('chat_transcript_exporter')

EXPORTED_AT_FORMAT = '%Y-%m-%d %H:%M'


class ExportError(Exception):
    """Base exception for transcript export failures at the pipeline boundary."""
    pass


class Role(Enum):
    """Speaker roles. The value is the exact heading text used in the transcript."""
    USER = "User"
    ASSISTANT = "Assistant"
    SYSTEM = "System"


@dataclass(frozen=True)
class Message:
    """A single classified, normalized conversation turn."""

    role: Role
    content: str

    def __post_init__(self) -> None:
        """Reject empty content; empty turns are dropped before they become messages."""
        if not self.content or not self.content.strip():
            raise ValueError("Message content must not be empty")


@dataclass(frozen=True)
class Conversation:
    """An assembled transcript: header fields plus messages in document order."""

    title: str
    source_identifier: str
    exported_at: datetime
    messages: Tuple[Message, ...] = field(default_factory=tuple)

    @property
    def exported_at_text(self) -> str:
        """Export timestamp at minute precision, no timezone suffix."""
        return self.exported_at.strftime(EXPORTED_AT_FORMAT)

    @property
    def message_count(self) -> int:
        return len(self.messages)
