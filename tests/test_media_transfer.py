from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from core.errors import MediaTransferError
from core.media import MediaTransfer
from core.models import MediaAttachment, MediaKind


class FakeMediaTransport:
    def __init__(self, chunks: list[bytes], fail_after: "int | None" = None) -> None:
        self.chunks = chunks
        self.fail_after = fail_after
        self.downloads = 0
        self.uploaded: list[Path] = []
        self.upload_error: "Exception | None" = None

    async def iter_download(self, media: MediaAttachment):
        self.downloads += 1
        for index, chunk in enumerate(self.chunks):
            if self.fail_after is not None and index == self.fail_after:
                raise ConnectionError("connection reset")
            yield chunk

    async def upload_file(self, path: Path):
        if self.upload_error is not None:
            raise self.upload_error
        self.uploaded.append(path)
        return f"uploaded:{path.name}"


PDF = MediaAttachment(kind=MediaKind.DOCUMENT, file_name="report.pdf", mime_type="application/pdf")


def test_destination_path_uses_message_id_and_extension(tmp_path: Path) -> None:
    transfer = MediaTransfer(FakeMediaTransport([]), tmp_path / "media")
    assert transfer.destination_for(12, PDF) == tmp_path / "media" / "message-12.pdf"
    photo = MediaAttachment(kind=MediaKind.PHOTO)
    assert transfer.destination_for(3, photo).name == "message-3.jpg"


def test_transfer_downloads_chunks_then_uploads(tmp_path: Path) -> None:
    transport = FakeMediaTransport([b"abc", b"def", b"g"])
    media_dir = tmp_path / "nested" / "media"
    transfer = MediaTransfer(transport, media_dir)

    handle = asyncio.run(transfer.transfer(7, PDF))

    dest = media_dir / "message-7.pdf"
    assert dest.read_bytes() == b"abcdefg"
    assert transport.downloads == 1
    assert transport.uploaded == [dest]
    assert handle == "uploaded:message-7.pdf"


def test_existing_file_is_reused_without_download(tmp_path: Path) -> None:
    media_dir = tmp_path / "media"
    media_dir.mkdir()
    dest = media_dir / "message-7.pdf"
    dest.write_bytes(b"\x00partial?")
    transport = FakeMediaTransport([b"fresh"])

    handle = asyncio.run(MediaTransfer(transport, media_dir).transfer(7, PDF))

    assert transport.downloads == 0
    assert dest.read_bytes() == b"\x00partial?"
    assert transport.uploaded == [dest]
    assert handle == "uploaded:message-7.pdf"


def test_chunk_failure_aborts_and_leaves_partial_file(tmp_path: Path) -> None:
    transport = FakeMediaTransport([b"abc", b"def"], fail_after=1)
    transfer = MediaTransfer(transport, tmp_path)

    with pytest.raises(MediaTransferError) as excinfo:
        asyncio.run(transfer.transfer(9, PDF))

    assert "chunk" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert (tmp_path / "message-9.pdf").read_bytes() == b"abc"
    assert transport.uploaded == []


def test_upload_failure_is_wrapped(tmp_path: Path) -> None:
    transport = FakeMediaTransport([b"abc"])
    transport.upload_error = TimeoutError("upload timed out")

    with pytest.raises(MediaTransferError) as excinfo:
        asyncio.run(MediaTransfer(transport, tmp_path).transfer(1, PDF))

    assert "upload" in str(excinfo.value)


def test_media_dir_creation_failure_is_wrapped(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    transport = FakeMediaTransport([b"abc"])

    with pytest.raises(MediaTransferError) as excinfo:
        asyncio.run(MediaTransfer(transport, blocker / "media").transfer(1, PDF))

    assert "media directory" in str(excinfo.value)
    assert transport.downloads == 0


def test_download_writes_through_async_file(tmp_path: Path) -> None:
    transport = FakeMediaTransport([b"x" * 1024, b"y" * 10])

    path = asyncio.run(MediaTransfer(transport, tmp_path).download(5, PDF))

    assert path.stat().st_size == 1034
    assert path.read_bytes().endswith(b"y" * 10)
