"""``xfLobbyEnters`` query and adapter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from functools import cached_property
from typing import Any

from ..addresses import parse_address_list
from ..core import LobbyEntry, PageWindow
from ..core.params import SortDirection, check_direction
from .subgraph import SubgraphClient

logger = logging.getLogger(__name__)

LOBBY_ORDER_FIELDS: tuple[str, ...] = ("rawAmount", "timestamp", "enterDay", "entryId")

_LOBBY_FIELDS = """
      id
      enterDay
      entryId
      memberAddr
      rawAmount
      timestamp
      transactionHash
      referrerAddr
"""

LOBBY_QUERY = (
    """
  query GetXfLobbyEnters($first: Int!, $orderBy: String!, $orderDirection: String!, $minAmount: String!, $skip: Int!) {
    xfLobbyEnters(
      first: $first
      orderBy: $orderBy
      orderDirection: $orderDirection
      skip: $skip
      where: { rawAmount_gt: $minAmount }
    ) {"""
    + _LOBBY_FIELDS
    + """    }
  }
"""
)

LOBBY_QUERY_WITH_ADDRESSES = (
    """
  query GetXfLobbyEntersWithAddresses($first: Int!, $orderBy: String!, $orderDirection: String!, $minAmount: String!, $skip: Int!, $memberAddresses: [String!]!) {
    xfLobbyEnters(
      first: $first
      orderBy: $orderBy
      orderDirection: $orderDirection
      skip: $skip
      where: { rawAmount_gt: $minAmount, memberAddr_in: $memberAddresses }
    ) {"""
    + _LOBBY_FIELDS
    + """    }
  }
"""
)


def _check_min_amount(value: str) -> str:
    try:
        Decimal(value)
    except InvalidOperation:
        raise ValueError(f"Minimum amount must be a decimal string, got {value!r}") from None
    return value


@dataclass(frozen=True)
class LobbyQuery:
    """User-facing parameters of the lobby table."""

    page: PageWindow = field(default_factory=PageWindow)
    min_amount: str = "500"
    order_by: str = "rawAmount"
    order_direction: SortDirection = "desc"
    member_addresses: str = ""

    def __post_init__(self) -> None:
        if self.order_by not in LOBBY_ORDER_FIELDS:
            raise ValueError(f"Unknown lobby order field: {self.order_by!r}")
        check_direction(self.order_direction)
        _check_min_amount(self.min_amount)

    @cached_property
    def addresses(self) -> list[str]:
        return parse_address_list(self.member_addresses)

    def next_page(self) -> "LobbyQuery":
        return replace(self, page=self.page.next())

    def previous_page(self) -> "LobbyQuery":
        return replace(self, page=self.page.previous())

    def with_limit(self, limit: int | str | None) -> "LobbyQuery":
        return replace(self, page=self.page.resize(limit))

    def document(self) -> tuple[str, dict[str, Any]]:
        """Return the GraphQL document and variables for this query."""

        variables: dict[str, Any] = {
            "first": self.page.limit,
            "orderBy": self.order_by,
            "orderDirection": self.order_direction,
            "minAmount": self.min_amount,
            "skip": self.page.skip,
        }
        addresses = self.addresses
        if addresses:
            variables["memberAddresses"] = addresses
            return LOBBY_QUERY_WITH_ADDRESSES, variables
        return LOBBY_QUERY, variables


class LobbySource:
    """Fetch one page of lobby entries for a :class:`LobbyQuery`."""

    def __init__(self, client: SubgraphClient, query: LobbyQuery | None = None) -> None:
        self.client = client
        self.query = query or LobbyQuery()

    def fetch(self) -> list[LobbyEntry]:
        document, variables = self.query.document()
        data = self.client.query(document, variables)
        rows = data.get("xfLobbyEnters") or []
        logger.debug("Fetched %d lobby entries (skip=%d)", len(rows), self.query.page.skip)
        return [LobbyEntry.from_dict(row) for row in rows]


__all__ = [
    "LOBBY_ORDER_FIELDS",
    "LOBBY_QUERY",
    "LOBBY_QUERY_WITH_ADDRESSES",
    "LobbyQuery",
    "LobbySource",
]
