"""Application entry point for the telemirror exporter."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from art import tprint

from adapters.console import TerminalConsole
from adapters.telegram_transport import TelegramTransport
from client import build_client
from core.auth import authenticate
from core.chats import find_chat, resolve_target
from core.config import LoggingConfig, MirrorConfig
from core.errors import ConfigError, ForwardingError, MirrorError, format_error_chain
from core.media import MediaTransfer
from core.processor import MessageForwarder
from get_session import authorize, connect, login
from settings import load_settings

NAME = "TELEMIRROR"
FONT = "tarty-1"

LOGGER = logging.getLogger(__name__)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = sorted({secret for secret in secrets if secret}, key=len, reverse=True)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _configure_logging(config: LoggingConfig, secrets: list[str]) -> None:
    level = getattr(logging, config.level.upper(), logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = _RedactingFormatter(secrets if config.redact else [], fmt=fmt, datefmt=datefmt)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [console_handler]

    if config.file_path:
        directory = os.path.dirname(config.file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers)
    # Telethon is chatty at INFO about reconnects and datacenter switches.
    logging.getLogger("telethon").setLevel(max(level, logging.WARNING))


async def _forward(config: MirrorConfig) -> None:
    """Authenticate, resolve both chats and mirror every source message."""

    client = build_client(config)
    await connect(client)
    try:
        transport = TelegramTransport(client, oldest_first=config.oldest_first)
        LOGGER.info("Client created, logging in...")
        try:
            await authenticate(transport, TerminalConsole())
        except MirrorError as exc:
            raise MirrorError("Failed to login") from exc

        LOGGER.info("Logged in, finding source chat %s", config.source_chat_id)
        try:
            source_chat = await find_chat(transport, config.source_chat_id)
        except MirrorError as exc:
            raise MirrorError("Failed to find source chat") from exc

        try:
            target_chat = await resolve_target(transport, config.target_chat_id)
        except MirrorError as exc:
            raise MirrorError("Failed to find target chat") from exc

        forwarder = MessageForwarder(
            transport=transport,
            target_chat=target_chat,
            hashtags=config.export_hashtags,
            media_transfer=MediaTransfer(transport, config.media_path),
            delay=config.forward_delay,
        )
        try:
            await forwarder.forward_all(transport.iter_messages(source_chat))
        except MirrorError as exc:
            raise ForwardingError("Failed to forward messages") from exc
        LOGGER.info("Export finished")
    finally:
        await client.disconnect()


def _dialog_type(dialog: Any) -> str:
    if getattr(dialog, "is_channel", False):
        entity = getattr(dialog, "entity", None)
        if getattr(entity, "megagroup", False):
            return "group"
        return "channel"
    if getattr(dialog, "is_group", False):
        return "group"
    if getattr(dialog, "is_user", False):
        return "user"
    return "chat"


async def _list_dialogs(config: MirrorConfig) -> None:
    """Print every dialog with the id to use for SOURCE_CHAT_ID/TARGET_CHAT_ID."""

    client = build_client(config)
    await connect(client)
    try:
        await authorize(client)
        index = 0
        async for dialog in client.iter_dialogs():
            index += 1
            print(f"{index}. {_dialog_type(dialog)} | {dialog.name} | {dialog.id}")
        if not index:
            print("No dialogs found.")
    finally:
        await client.disconnect()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="telemirror")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Mirror the source chat into the target chat")
    subparsers.add_parser("login", help="Log in and save the session, then exit")
    subparsers.add_parser("discover", help="List dialogs with their chat ids")

    args = parser.parse_args(argv)

    try:
        config = load_settings()
        if args.command in (None, "run"):
            config.validate_forwarding()
    except ConfigError as exc:
        logging.basicConfig(level=logging.INFO)
        LOGGER.error("Failed to load config: %s", exc)
        raise SystemExit(1) from exc

    _print_banner()
    _configure_logging(config.logging, [config.api_hash])
    LOGGER.info("Starting telemirror")

    if args.command == "login":
        runner = login(config)
    elif args.command == "discover":
        runner = _list_dialogs(config)
    else:
        runner = _forward(config)

    try:
        asyncio.run(runner)
    except MirrorError as exc:
        LOGGER.error("%s", format_error_chain(exc))
        LOGGER.debug("Traceback", exc_info=exc)
        raise SystemExit(1) from exc
    except KeyboardInterrupt:
        LOGGER.info("Interrupted by user, shutting down.")
        raise SystemExit(130)


if __name__ == "__main__":
    main()
