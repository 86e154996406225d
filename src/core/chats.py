"""Chat lookup by numeric id (core domain)."""

from __future__ import annotations

import logging
from typing import Any, Optional

from core.chat_ids import same_chat
from core.errors import ChatNotFoundError, MirrorError
from core.ports import TransportPort

LOGGER = logging.getLogger(__name__)


async def find_chat(transport: TransportPort, chat_id: int) -> Any:
    """Return the handle of the dialog whose id is ``chat_id``.

    An exact id match wins immediately. Otherwise the first dialog whose id is
    an equivalent encoding (bare, ``-id`` or ``-100id``) is used once the
    dialog list is exhausted.
    """

    fallback: Optional[Any] = None
    fallback_id: Optional[int] = None
    try:
        async for dialog in transport.iter_dialogs():
            LOGGER.debug("Processing chat %s (%s)", dialog.chat_id, dialog.name)
            if dialog.chat_id == chat_id:
                return dialog.handle
            if fallback is None and same_chat(dialog.chat_id, chat_id):
                fallback = dialog.handle
                fallback_id = dialog.chat_id
    except Exception as exc:
        raise MirrorError("Failed to get next dialog") from exc

    if fallback is not None:
        LOGGER.warning(
            "No dialog with id %s; using %s, which has an equivalent id",
            chat_id,
            fallback_id,
        )
        return fallback
    raise ChatNotFoundError(chat_id)


async def resolve_target(transport: TransportPort, target_chat_id: Optional[int]) -> Any:
    """Return the target chat handle, defaulting to the account's own chat."""

    if target_chat_id is None:
        LOGGER.info("No target chat specified, using Saved Messages")
        try:
            return await transport.get_self()
        except Exception as exc:
            raise MirrorError("Failed to get own chat") from exc
    LOGGER.info("Finding target chat %s", target_chat_id)
    return await find_chat(transport, target_chat_id)
