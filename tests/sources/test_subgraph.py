from __future__ import annotations

import io
import json

import pytest

from hex_lab.sources import LobbyQuery, LobbySource, SubgraphClient, SubgraphError
from hex_lab.sources.lobby import LOBBY_QUERY, LOBBY_QUERY_WITH_ADDRESSES


def test_lobby_source_posts_query_and_parses_rows(fake_subgraph) -> None:
    entries = LobbySource(SubgraphClient("https://example.invalid/graphql")).fetch()
    assert [e.entry_id for e in entries] == ["1", "2", "3"]
    payload = fake_subgraph.requests[0]
    assert payload["query"] == LOBBY_QUERY
    assert payload["variables"] == {
        "first": 10,
        "orderBy": "rawAmount",
        "orderDirection": "desc",
        "minAmount": "500",
        "skip": 0,
    }


def test_graphql_errors_raise(monkeypatch: pytest.MonkeyPatch) -> None:
    def _errors(*_args: object, **_kwargs: object) -> io.BytesIO:
        body = {"errors": [{"message": "Invalid orderBy"}]}
        return io.BytesIO(json.dumps(body).encode())

    monkeypatch.setattr("hex_lab.sources.subgraph.urllib.request.urlopen", _errors)
    with pytest.raises(SubgraphError, match="Invalid orderBy"):
        SubgraphClient().query("{ xfLobbyEnters { id } }")


def test_address_filter_switches_document(fake_subgraph) -> None:
    query = LobbyQuery(
        member_addresses=" 0x4444444444444444444444444444444444444444 , nope,"
        "0X5555555555555555555555555555555555555555"
    )
    LobbySource(SubgraphClient(), query).fetch()
    payload = fake_subgraph.requests[0]
    assert payload["query"] == LOBBY_QUERY_WITH_ADDRESSES
    assert payload["variables"]["memberAddresses"] == [
        "0x4444444444444444444444444444444444444444",
        "0x5555555555555555555555555555555555555555",
    ]


def test_invalid_addresses_degrade_to_no_filter(fake_subgraph, caplog) -> None:
    query = LobbyQuery(member_addresses="0x123, hello")
    with caplog.at_level("WARNING"):
        document, variables = query.document()
    assert document == LOBBY_QUERY
    assert "memberAddresses" not in variables
    assert "Invalid address format" in caplog.text


@pytest.mark.parametrize(
    "kwargs",
    [{"order_by": "memberAddr"}, {"order_direction": "up"}, {"min_amount": "lots"}],
)
def test_lobby_query_validates_parameters(kwargs) -> None:
    with pytest.raises(ValueError):
        LobbyQuery(**kwargs)


def test_lobby_pagination() -> None:
    query = LobbyQuery().with_limit(50).next_page().next_page()
    assert query.page.skip == 100
    assert query.previous_page().page.skip == 50
    assert query.with_limit(20).page.skip == 0
