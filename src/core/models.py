"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class MediaKind(str, Enum):
    """Kinds of media attachment the pipeline distinguishes."""

    PHOTO = "photo"
    DOCUMENT = "document"
    STICKER = "sticker"
    CONTACT = "contact"
    OTHER = "other"


@dataclass(frozen=True)
class MediaAttachment:
    """Reference to platform-hosted content attached to a message.

    ``raw`` is the transport object handed back to the transport when the
    bytes are downloaded; the core never looks inside it.
    """

    kind: MediaKind
    file_name: str = ""
    mime_type: Optional[str] = None
    size: Optional[int] = None
    raw: Any = None


@dataclass(frozen=True)
class SourceMessage:
    """Minimal message record used by the forwarding pipeline."""

    id: int
    chat_id: int
    text: str
    grouped_id: Optional[int] = None
    media: Optional[MediaAttachment] = None


@dataclass(frozen=True)
class Dialog:
    """One entry of the account's dialog list."""

    chat_id: int
    name: str
    handle: Any


class ForwardOutcome(str, Enum):
    """Terminal state of one message in the forwarding pipeline."""

    FORWARDED = "forwarded"
    ALREADY_FORWARDED = "already_forwarded"
    SKIPPED = "skipped"
