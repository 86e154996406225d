"""Telegram client factory for telemirror.

We explicitly manage the client's lifecycle (connect/disconnect) so it is
obvious when the session is loaded and when it ends.
"""

from __future__ import annotations

import logging

from telethon import TelegramClient

from core.config import MirrorConfig


def build_client(config: MirrorConfig) -> TelegramClient:
    """Create a Telethon client bound to the configured session file.

    Telethon loads the SQLite session at this path if it exists and creates
    it otherwise.
    """

    logging.getLogger(__name__).info("Initializing Telegram client")

    return TelegramClient(str(config.session_path), config.api_id, config.api_hash)
