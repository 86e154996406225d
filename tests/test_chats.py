from __future__ import annotations

import asyncio
import logging

import pytest

from core.chat_ids import expand_chat_id_variants, same_chat
from core.chats import find_chat, resolve_target
from core.errors import ChatNotFoundError
from core.models import Dialog


class FakeDialogTransport:
    def __init__(self, dialogs: list[Dialog]) -> None:
        self.dialogs = dialogs
        self.pulled = 0

    async def iter_dialogs(self):
        for dialog in self.dialogs:
            self.pulled += 1
            yield dialog

    async def get_self(self):
        return "me"


def test_expand_chat_id_variants_positive() -> None:
    variants = expand_chat_id_variants(123)
    assert variants == {123, -123, -1000000000123}


def test_expand_chat_id_variants_negative_100() -> None:
    variants = expand_chat_id_variants(-100987654321)
    assert variants == {-100987654321, 987654321}


def test_same_chat() -> None:
    assert same_chat(-1001234, 1234)
    assert same_chat(42, -42)
    assert not same_chat(42, 43)


def test_find_chat_returns_first_exact_match_and_stops() -> None:
    transport = FakeDialogTransport(
        [
            Dialog(chat_id=1, name="one", handle="h1"),
            Dialog(chat_id=-1005, name="five", handle="h5"),
            Dialog(chat_id=-1005, name="five again", handle="h5b"),
            Dialog(chat_id=9, name="nine", handle="h9"),
        ]
    )

    assert asyncio.run(find_chat(transport, -1005)) == "h5"
    assert transport.pulled == 2


def test_find_chat_accepts_bare_channel_id() -> None:
    transport = FakeDialogTransport([Dialog(chat_id=-100777, name="channel", handle="hc")])

    assert asyncio.run(find_chat(transport, 777)) == "hc"


def test_find_chat_not_found() -> None:
    transport = FakeDialogTransport([Dialog(chat_id=1, name="one", handle="h1")])

    with pytest.raises(ChatNotFoundError) as excinfo:
        asyncio.run(find_chat(transport, 2))
    assert excinfo.value.chat_id == 2
    assert "Failed to find chat 2" in str(excinfo.value)


def test_resolve_target_defaults_to_self() -> None:
    transport = FakeDialogTransport([])

    assert asyncio.run(resolve_target(transport, None)) == "me"
    assert transport.pulled == 0


def test_find_chat_warns_when_using_equivalent_id(caplog) -> None:
    transport = FakeDialogTransport([Dialog(chat_id=-123, name="group", handle="hg")])

    with caplog.at_level(logging.WARNING, logger="core.chats"):
        assert asyncio.run(find_chat(transport, 123)) == "hg"

    assert "No dialog with id 123" in caplog.text


def test_find_chat_exact_match_does_not_warn(caplog) -> None:
    transport = FakeDialogTransport([Dialog(chat_id=123, name="user", handle="hu")])

    with caplog.at_level(logging.WARNING, logger="core.chats"):
        assert asyncio.run(find_chat(transport, 123)) == "hu"

    assert caplog.records == []
