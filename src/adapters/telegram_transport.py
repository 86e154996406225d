"""Telethon transport adapter.

Implements the core TransportPort and AuthPort contracts on top of a
connected TelegramClient.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, AsyncIterator

from telethon import TelegramClient, errors, functions
from telethon.tl.types import MessageMediaContact

from adapters.telegram_mapper import build_source_message
from core.models import Dialog, MediaAttachment, MediaKind, SourceMessage
from core.ports import PasswordRequired


@dataclass(frozen=True)
class LoginToken:
    """What Telegram needs to match a sign-in to its code request."""

    phone: str
    phone_code_hash: str


def contact_vcard(contact: MessageMediaContact) -> bytes:
    """Return a vCard for a shared contact.

    Contacts have no hosted file, so the card shipped with the message is used
    and a minimal one is built when it is empty.
    """

    if contact.vcard:
        return contact.vcard.encode("utf-8")

    first_name = contact.first_name or ""
    last_name = contact.last_name or ""
    return (
        "BEGIN:VCARD\n"
        "VERSION:4.0\n"
        f"N:{first_name};{last_name};;;\n"
        f"FN:{first_name} {last_name}\n"
        f"TEL;TYPE=cell;VALUE=uri:tel:+{contact.phone_number}\n"
        "END:VCARD\n"
    ).encode("utf-8")


class TelegramTransport:
    """Thin TelegramClient wrapper that satisfies the core ports."""

    def __init__(self, client: TelegramClient, oldest_first: bool = False) -> None:
        self._client = client
        self._oldest_first = oldest_first

    # Transport

    async def iter_dialogs(self) -> AsyncIterator[Dialog]:
        async for dialog in self._client.iter_dialogs():
            yield Dialog(chat_id=dialog.id, name=dialog.name or "", handle=dialog.input_entity)

    async def iter_messages(self, chat: Any) -> AsyncIterator[SourceMessage]:
        # Telethon yields newest-first unless reverse=True.
        async for message in self._client.iter_messages(chat, reverse=self._oldest_first):
            yield build_source_message(message)

    async def search_messages(self, chat: Any, query: str) -> AsyncIterator[SourceMessage]:
        async for message in self._client.iter_messages(chat, search=query):
            yield build_source_message(message)

    async def iter_download(self, media: MediaAttachment) -> AsyncIterator[bytes]:
        if media.kind is MediaKind.CONTACT:
            yield contact_vcard(media.raw)
            return
        async for chunk in self._client.iter_download(media.raw):
            yield chunk

    async def upload_file(self, path: Path) -> Any:
        return await self._client.upload_file(str(path))

    async def send_message(self, chat: Any, text: str, file: Any = None) -> None:
        # parse_mode=None keeps the source text verbatim.
        await self._client.send_message(chat, text, file=file, parse_mode=None)

    async def get_self(self) -> Any:
        return await self._client.get_input_entity("me")

    # Authentication

    async def is_authorized(self) -> bool:
        return await self._client.is_user_authorized()

    async def request_login_code(self, phone: str) -> LoginToken:
        sent = await self._client.send_code_request(phone)
        return LoginToken(phone=phone, phone_code_hash=sent.phone_code_hash)

    async def sign_in(self, token: LoginToken, code: str) -> None:
        try:
            await self._client.sign_in(
                phone=token.phone,
                code=code,
                phone_code_hash=token.phone_code_hash,
            )
        except errors.SessionPasswordNeededError as exc:
            password = await self._client(functions.account.GetPasswordRequest())
            raise PasswordRequired(password.hint) from exc

    async def check_password(self, token: LoginToken, password: str) -> None:
        await self._client.sign_in(phone=token.phone, password=password)

    async def save_session(self) -> None:
        self._client.session.save()

    async def sign_out_disconnect(self) -> None:
        # log_out also disconnects the client.
        await self._client.log_out()

    async def describe_me(self) -> str:
        me = await self._client.get_me()
        name = " ".join(part for part in [me.first_name, me.last_name] if part)
        return name or str(me.id)
