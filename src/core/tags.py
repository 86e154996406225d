"""Idempotency tags embedded in every forwarded message."""

from __future__ import annotations

from core.models import SourceMessage

TAG_MARKER = "#"


def message_dedup_tag(chat_id: int, message_id: int) -> str:
    """Return the stable tag identifying one source message."""

    return f"{chat_id}_{message_id}"


def marker_tag(chat_id: int, message_id: int) -> str:
    """Return the tag in the marker-prefixed form written into message text."""

    return f"{TAG_MARKER}{message_dedup_tag(chat_id, message_id)}"


def marker_tag_for(message: SourceMessage) -> str:
    return marker_tag(message.chat_id, message.id)
