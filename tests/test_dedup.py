from __future__ import annotations

import asyncio

import pytest

from core.dedup import is_forwarded
from core.errors import SearchError
from core.models import SourceMessage


class FakeSearchTransport:
    def __init__(self, results: list[str], fail: bool = False) -> None:
        self.results = results
        self.fail = fail
        self.queries: list[tuple[object, str]] = []

    async def search_messages(self, chat, query: str):
        self.queries.append((chat, query))
        for index, text in enumerate(self.results):
            yield SourceMessage(id=index, chat_id=1, text=text)
        if self.fail:
            raise ConnectionError("network down")


def test_is_forwarded_true_when_tag_found() -> None:
    transport = FakeSearchTransport(["unrelated", "#100_5 #export\n\nhello"])
    message = SourceMessage(id=5, chat_id=100, text="hello")

    assert asyncio.run(is_forwarded(transport, "target", message))
    assert transport.queries == [("target", "#100_5")]


def test_is_forwarded_false_when_results_exhausted() -> None:
    transport = FakeSearchTransport(["#100_6 #export", "#1000_5"])
    message = SourceMessage(id=5, chat_id=100, text="hello")

    assert not asyncio.run(is_forwarded(transport, "target", message))


def test_tag_matches_as_plain_substring() -> None:
    # A longer message id containing the tag still counts as forwarded.
    transport = FakeSearchTransport(["#100_45 #export\n\nx"])
    message = SourceMessage(id=4, chat_id=100, text="")

    assert asyncio.run(is_forwarded(transport, "target", message))


def test_search_failure_is_wrapped() -> None:
    transport = FakeSearchTransport([], fail=True)
    message = SourceMessage(id=5, chat_id=100, text="hello")

    with pytest.raises(SearchError) as excinfo:
        asyncio.run(is_forwarded(transport, "target", message))
    assert isinstance(excinfo.value.__cause__, ConnectionError)
