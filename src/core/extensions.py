"""Filename suffixes for media attachments."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Optional

from core.models import MediaAttachment, MediaKind


def mime_extension(mime_type: Optional[str]) -> str:
    """Return ``.<subtype>`` for a MIME type, or "" if it cannot be parsed."""

    if not mime_type:
        return ""
    essence = mime_type.split(";", 1)[0].strip()
    main_type, sep, subtype = essence.partition("/")
    if not sep or not main_type or not subtype:
        return ""
    return f".{subtype.lower()}"


def _name_extension(file_name: str) -> str:
    if not file_name:
        return ""
    # Telegram file names come from arbitrary clients; treat them as plain names.
    return PurePosixPath(file_name.replace("\\", "/")).suffix


def resolve_extension(media: MediaAttachment) -> str:
    """Return the suffix used for the local copy of an attachment.

    - Photo: ``.jpg``
    - Sticker/Document: declared file name suffix, else the MIME subtype
    - Contact: ``.vcf``
    - Anything else: "" (unsupported)
    """

    if media.kind is MediaKind.PHOTO:
        return ".jpg"
    if media.kind in (MediaKind.STICKER, MediaKind.DOCUMENT):
        return _name_extension(media.file_name) or mime_extension(media.mime_type)
    if media.kind is MediaKind.CONTACT:
        return ".vcf"
    return ""


def is_supported(media: MediaAttachment) -> bool:
    """Only photos, documents, stickers and contacts are mirrored."""

    return media.kind is not MediaKind.OTHER
