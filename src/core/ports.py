"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for the transport, authentication and
console adapters so that the core can be exercised without Telegram.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, AsyncIterator, Optional, Protocol

from core.models import Dialog, MediaAttachment, SourceMessage


class PasswordRequired(Exception):
    """Raised by ``AuthPort.sign_in`` when the account has a 2FA password."""

    def __init__(self, hint: Optional[str] = None) -> None:
        super().__init__("Two-step verification password required")
        self.hint = hint


class TransportPort(Protocol):
    """Messaging operations required by the forwarding pipeline."""

    def iter_dialogs(self) -> AsyncIterator[Dialog]:
        ...

    def iter_messages(self, chat: Any) -> AsyncIterator[SourceMessage]:
        ...

    def search_messages(self, chat: Any, query: str) -> AsyncIterator[SourceMessage]:
        ...

    def iter_download(self, media: MediaAttachment) -> AsyncIterator[bytes]:
        ...

    async def upload_file(self, path: Path) -> Any:
        ...

    async def send_message(self, chat: Any, text: str, file: Any = None) -> None:
        ...

    async def get_self(self) -> Any:
        ...


class AuthPort(Protocol):
    """Sign-in operations required by the authentication flow."""

    async def is_authorized(self) -> bool:
        ...

    async def request_login_code(self, phone: str) -> Any:
        ...

    async def sign_in(self, token: Any, code: str) -> None:
        ...

    async def check_password(self, token: Any, password: str) -> None:
        ...

    async def save_session(self) -> None:
        ...

    async def sign_out_disconnect(self) -> None:
        ...


class ConsolePort(Protocol):
    """Interactive prompts used during sign-in."""

    def prompt_line(self, message: str) -> str:
        ...

    def prompt_secret(self, message: str) -> str:
        ...
