"""Core forwarding pipeline.

Each source message goes through a strict order:
1) Look for its tag in the target chat; stop if it is already there
2) Build the outgoing text (tag, hashtags, album marker, original text)
3) Skip the message entirely if its media kind is unsupported
4) Download (or reuse) and re-upload the media, if any
5) Send, then pause before the next message

Messages are handled one at a time so the target receives them in source
order, which album grouping on the reading side relies on.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, AsyncIterable, Awaitable, Callable

from core.dedup import is_forwarded
from core.errors import ForwardingError
from core.extensions import is_supported
from core.media import MediaTransfer
from core.models import ForwardOutcome, SourceMessage
from core.ports import TransportPort
from core.tags import marker_tag_for

LOGGER = logging.getLogger(__name__)


def build_forward_text(message: SourceMessage, hashtags: str) -> str:
    """Return the text sent in place of ``message``."""

    grouped = f" group {message.grouped_id}" if message.grouped_id is not None else ""
    return f"{marker_tag_for(message)} {hashtags}{grouped}\n\n{message.text}"


@dataclass
class ForwardStats:
    """Per-run counters, logged once the run completes."""

    forwarded: int = 0
    already_forwarded: int = 0
    skipped: int = 0

    def record(self, outcome: ForwardOutcome) -> None:
        if outcome is ForwardOutcome.FORWARDED:
            self.forwarded += 1
        elif outcome is ForwardOutcome.ALREADY_FORWARDED:
            self.already_forwarded += 1
        else:
            self.skipped += 1

    @property
    def total(self) -> int:
        return self.forwarded + self.already_forwarded + self.skipped


class MessageForwarder:
    """Orchestrates duplicate detection, media transfer and sending."""

    def __init__(
        self,
        transport: TransportPort,
        target_chat: Any,
        hashtags: str,
        media_transfer: MediaTransfer,
        delay: float,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._transport = transport
        self._target_chat = target_chat
        self._hashtags = hashtags
        self._media_transfer = media_transfer
        self._delay = delay
        self._sleep = sleep

    async def forward_message(self, message: SourceMessage) -> ForwardOutcome:
        """Process one source message through the pipeline."""

        if await is_forwarded(self._transport, self._target_chat, message):
            LOGGER.info("Message %s already forwarded", message.id)
            return ForwardOutcome.ALREADY_FORWARDED

        LOGGER.info("Processing message %s", message.id)
        text = build_forward_text(message, self._hashtags)

        uploaded = None
        if message.media is not None:
            # Sending the text alone would lose the attachment silently, so
            # unsupported media skips the whole message.
            if not is_supported(message.media):
                LOGGER.warning(
                    "Skipping message %s with unsupported media (%s)",
                    message.id,
                    message.media.kind.value,
                )
                return ForwardOutcome.SKIPPED
            LOGGER.info("Downloading media for message %s", message.id)
            uploaded = await self._media_transfer.transfer(message.id, message.media)

        await self._transport.send_message(self._target_chat, text, file=uploaded)
        LOGGER.info("Message %s forwarded", message.id)
        return ForwardOutcome.FORWARDED

    async def forward_all(self, messages: AsyncIterable[SourceMessage]) -> ForwardStats:
        """Forward every message in the order the sequence yields them.

        The first failure aborts the run; re-running resumes from the target
        chat's tags and the media cache.
        """

        stats = ForwardStats()
        iterator = messages.__aiter__()
        while True:
            try:
                message = await iterator.__anext__()
            except StopAsyncIteration:
                break
            except Exception as exc:
                raise ForwardingError("Failed to get next message") from exc

            try:
                outcome = await self.forward_message(message)
            except Exception as exc:
                raise ForwardingError(f"Failed to forward message {message.id}") from exc
            stats.record(outcome)

            await self._sleep(self._delay)

        LOGGER.info(
            "Forwarding complete: messages=%s, forwarded=%s, already_forwarded=%s, skipped=%s",
            stats.total,
            stats.forwarded,
            stats.already_forwarded,
            stats.skipped,
        )
        return stats
