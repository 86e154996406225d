"""Telegram-to-core message mapping adapter.

This keeps Telethon-specific details out of the core pipeline.
"""

from __future__ import annotations

from typing import Optional

from telethon import utils
from telethon.tl.custom import Message
from telethon.tl.types import (
    Document,
    DocumentAttributeFilename,
    DocumentAttributeSticker,
    MessageMediaContact,
    MessageMediaDocument,
    MessageMediaPhoto,
    Photo,
)

from core.models import MediaAttachment, MediaKind, SourceMessage


def _document_attachment(media: MessageMediaDocument) -> MediaAttachment:
    document = media.document
    if not isinstance(document, Document):
        # Expired or self-destructed documents carry no downloadable file.
        return MediaAttachment(kind=MediaKind.OTHER, raw=media)

    file_name = ""
    kind = MediaKind.DOCUMENT
    for attribute in document.attributes:
        if isinstance(attribute, DocumentAttributeFilename):
            file_name = attribute.file_name or ""
        elif isinstance(attribute, DocumentAttributeSticker):
            kind = MediaKind.STICKER

    return MediaAttachment(
        kind=kind,
        file_name=file_name,
        mime_type=document.mime_type,
        size=document.size,
        raw=media,
    )


def build_attachment(media) -> Optional[MediaAttachment]:
    """Classify Telethon message media into a core MediaAttachment."""

    if media is None:
        return None
    if isinstance(media, MessageMediaPhoto):
        if not isinstance(media.photo, Photo):
            return MediaAttachment(kind=MediaKind.OTHER, raw=media)
        return MediaAttachment(kind=MediaKind.PHOTO, mime_type="image/jpeg", raw=media)
    if isinstance(media, MessageMediaDocument):
        return _document_attachment(media)
    if isinstance(media, MessageMediaContact):
        return MediaAttachment(kind=MediaKind.CONTACT, mime_type="text/vcard", raw=media)
    # Web pages, polls, geo points, games, etc.
    return MediaAttachment(kind=MediaKind.OTHER, raw=media)


def chat_id_from_message(message: Message) -> int:
    """Return the bare (unmarked) id of the chat the message lives in."""

    return utils.get_peer_id(message.peer_id, add_mark=False)


def build_source_message(message: Message) -> SourceMessage:
    """Build a core SourceMessage from a Telethon Message."""

    return SourceMessage(
        id=message.id,
        chat_id=chat_id_from_message(message),
        text=message.raw_text or "",
        grouped_id=message.grouped_id,
        media=build_attachment(message.media),
    )
