"""Error taxonomy for telemirror.

Every error is raised with a short "Failed to ..." description and chained to
its cause, so the final traceback names each pipeline stage that broke.
"""

from __future__ import annotations

from typing import Optional


class MirrorError(Exception):
    """Base class for all errors surfaced by the mirror."""


class ConfigError(MirrorError):
    """Configuration is missing or malformed."""


class AuthenticationError(MirrorError):
    """Sign-in could not be completed."""


class SessionSaveError(AuthenticationError):
    """The authenticated session could not be persisted."""


class ChatNotFoundError(MirrorError):
    """A configured chat id is not in the account's dialog list."""

    def __init__(self, chat_id: int) -> None:
        super().__init__(f"Failed to find chat {chat_id}")
        self.chat_id = chat_id


class SearchError(MirrorError):
    """Searching the target chat for a tag failed."""


class MediaTransferError(MirrorError):
    """Downloading or re-uploading an attachment failed."""


class ForwardingError(MirrorError):
    """Forwarding stopped on a message."""


def format_error_chain(exc: BaseException) -> str:
    """Join an exception and its causes into one line, outermost first."""

    parts = []
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current) or type(current).__name__
        parts.append(text)
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__suppress_context__:
            current = None
        else:
            current = current.__context__
    return ": ".join(parts)
