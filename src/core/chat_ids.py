"""Helpers for comparing Telegram chat ids across their encodings."""

from __future__ import annotations

CHANNEL_PREFIX = "-100"


def expand_chat_id_variants(raw_chat_id: int) -> set[int]:
    """Return equivalent chat id variants (peer id, chat id, channel id).

    Telegram exposes the same chat as a bare id, a ``-id`` basic group peer or
    a ``-100<id>`` channel/supergroup peer, depending on the API surface.
    """

    variants: set[int] = {raw_chat_id}
    if raw_chat_id < 0:
        raw_text = str(raw_chat_id)
        if raw_text.startswith(CHANNEL_PREFIX):
            # Channel/supergroup peer id: -100<channel_id>
            channel_part = raw_text[len(CHANNEL_PREFIX):]
            if channel_part.isdigit():
                variants.add(int(channel_part))
        else:
            variants.add(abs(raw_chat_id))
        return variants

    # raw_chat_id is positive: add PeerChat and PeerChannel-style ids.
    variants.add(-raw_chat_id)
    variants.add(-1000000000000 - raw_chat_id)
    return variants


def same_chat(left: int, right: int) -> bool:
    """Return True if two ids address the same chat."""

    return bool(expand_chat_id_variants(left) & expand_chat_id_variants(right))
