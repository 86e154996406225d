"""Log in once and persist the Telegram session.

Useful before the first run, so the interactive phone/code/password prompts
happen outside the long forwarding job.
"""

import asyncio
import logging
from typing import Optional

from telethon import TelegramClient

from adapters.console import TerminalConsole
from adapters.telegram_transport import TelegramTransport
from client import build_client
from core.auth import authenticate
from core.config import MirrorConfig
from core.errors import MirrorError
from core.ports import ConsolePort
from settings import load_settings

LOGGER = logging.getLogger(__name__)


async def connect(client: TelegramClient) -> None:
    try:
        await client.connect()
    except OSError as exc:
        raise MirrorError("Failed to connect to Telegram") from exc


async def authorize(client: TelegramClient, console: Optional[ConsolePort] = None) -> TelegramTransport:
    """Authenticate the connected client, prompting on the console if needed."""

    transport = TelegramTransport(client)
    await authenticate(transport, console or TerminalConsole())
    LOGGER.info("Logged in as: %s", await transport.describe_me())
    return transport


async def login(config: MirrorConfig) -> None:
    client = build_client(config)
    await connect(client)
    try:
        await authorize(client)
    finally:
        await client.disconnect()


async def main() -> None:
    await login(load_settings())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
