"""Resumable media transfer (core domain).

An attachment is downloaded chunk by chunk into the media directory and the
local file is then uploaded to the target. File writes go through aiofiles so
the event loop is not blocked between chunks. A file that already exists is
treated as complete, which makes re-runs skip finished downloads.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

import aiofiles

from core.errors import MediaTransferError
from core.extensions import resolve_extension
from core.models import MediaAttachment
from core.ports import TransportPort

LOGGER = logging.getLogger(__name__)


def media_file_name(message_id: int, extension: str) -> str:
    return f"message-{message_id}{extension}"


class MediaTransfer:
    """Download attachments to a local cache and re-upload them."""

    def __init__(self, transport: TransportPort, media_path: Path) -> None:
        self._transport = transport
        self._media_path = Path(media_path)

    def destination_for(self, message_id: int, media: MediaAttachment) -> Path:
        """Return the cache path for the attachment of ``message_id``."""

        return self._media_path / media_file_name(message_id, resolve_extension(media))

    async def download(self, message_id: int, media: MediaAttachment) -> Path:
        """Download the attachment unless a local copy already exists."""

        dest = self.destination_for(message_id, media)

        try:
            self._media_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise MediaTransferError(f"Failed to create media directory {self._media_path}") from exc

        # Existing bytes are trusted as-is; size is not verified.
        if dest.exists():
            LOGGER.info("Reusing downloaded media %s", dest)
            return dest

        try:
            handle = await aiofiles.open(dest, "xb")
        except OSError as exc:
            raise MediaTransferError(f"Failed to open media file {dest}") from exc

        transferred = 0
        started = time.monotonic()
        async with handle:
            try:
                async for chunk in self._transport.iter_download(media):
                    LOGGER.debug("Writing chunk of %s bytes", len(chunk))
                    try:
                        await handle.write(chunk)
                    except OSError as exc:
                        raise MediaTransferError(f"Failed to write to media file {dest}") from exc
                    transferred += len(chunk)
            except MediaTransferError:
                raise
            except Exception as exc:
                raise MediaTransferError(f"Failed to get next chunk for {dest}") from exc

        elapsed = time.monotonic() - started
        rate = transferred / elapsed if elapsed > 0 else float(transferred)
        LOGGER.info("Downloaded %s (%s bytes, %.0f B/s)", dest, transferred, rate)
        return dest

    async def transfer(self, message_id: int, media: MediaAttachment) -> Any:
        """Download (or reuse) the attachment and upload it for sending."""

        path = await self.download(message_id, media)

        LOGGER.info("Media downloaded, reuploading")
        try:
            uploaded = await self._transport.upload_file(path)
        except Exception as exc:
            raise MediaTransferError(f"Failed to upload media file {path}") from exc
        LOGGER.info("Media reuploaded")
        return uploaded
