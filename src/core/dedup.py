"""Duplicate detection against the target chat (core domain).

The target chat is the idempotency ledger: a message counts as forwarded if
a message containing its marker tag can be found there.
"""

from __future__ import annotations

import logging
from typing import Any

from core.errors import SearchError
from core.models import SourceMessage
from core.ports import TransportPort
from core.tags import marker_tag_for

LOGGER = logging.getLogger(__name__)


async def is_forwarded(transport: TransportPort, target_chat: Any, message: SourceMessage) -> bool:
    """Return True if the target chat already holds a copy of ``message``."""

    tag = marker_tag_for(message)
    LOGGER.debug("Searching for %s", tag)

    try:
        # Server-side search is fuzzy, so each hit is confirmed by substring.
        async for found in transport.search_messages(target_chat, tag):
            if tag in found.text:
                return True
    except Exception as exc:
        raise SearchError(f"Failed to search for message {tag}") from exc

    return False
