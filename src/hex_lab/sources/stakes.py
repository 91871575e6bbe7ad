"""``stakeStarts`` query and adapter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from ..core import PageWindow, SortState, StakeStart
from ..core.constants import HEX_LAUNCH_DATE, STAKE_ORDER_MAPPING, STAKE_SORT_FIELDS
from ..dates import day_start
from .subgraph import SubgraphClient

logger = logging.getLogger(__name__)

STAKES_QUERY = """
  query GetStakesData(
    $first: Int!
    $skip: Int!
    $timestampFrom: BigInt!
    $orderBy: String!
    $orderDirection: String!
  ) {
    stakeStarts(
      first: $first
      skip: $skip
      orderBy: $orderBy
      orderDirection: $orderDirection
      where: { timestamp_gt: $timestampFrom }
    ) {
      id
      stakerAddr
      stakeId
      stakedHearts
      stakeShares
      stakeTShares
      stakedDays
      startDay
      endDay
      timestamp
      isAutoStake
      transactionHash
      stakeEnd {
        id
        payout
        penalty
        servedDays
        daysLate
        daysEarly
        timestamp
        transactionHash
      }
    }
  }
"""


def default_stake_sort() -> SortState:
    return SortState(field="start", direction="desc", fields=STAKE_SORT_FIELDS)


@dataclass(frozen=True)
class StakeQuery:
    """Server-side half of the stakes table: page, order and start lower bound."""

    page: PageWindow = field(default_factory=PageWindow)
    sort: SortState = field(default_factory=default_stake_sort)
    start_from: date = HEX_LAUNCH_DATE

    @property
    def order_by(self) -> str:
        return STAKE_ORDER_MAPPING.get(self.sort.field, "timestamp")

    @property
    def timestamp_from(self) -> int:
        return day_start(self.start_from)

    def next_page(self) -> "StakeQuery":
        return replace(self, page=self.page.next())

    def previous_page(self) -> "StakeQuery":
        return replace(self, page=self.page.previous())

    def with_limit(self, limit: int | str | None) -> "StakeQuery":
        return replace(self, page=self.page.resize(limit))

    def sorted_by(self, sort_field: str) -> "StakeQuery":
        return replace(self, sort=self.sort.toggle(sort_field))

    def variables(self) -> dict[str, Any]:
        return {
            "first": self.page.limit,
            "skip": self.page.skip,
            "timestampFrom": self.timestamp_from,
            "orderBy": self.order_by,
            "orderDirection": self.sort.direction,
        }


class StakeSource:
    """Fetch one page of stakes for a :class:`StakeQuery`."""

    def __init__(self, client: SubgraphClient, query: StakeQuery | None = None) -> None:
        self.client = client
        self.query = query or StakeQuery()

    def fetch(self) -> list[StakeStart]:
        data = self.client.query(STAKES_QUERY, self.query.variables())
        rows = data.get("stakeStarts") or []
        logger.debug("Fetched %d stakes (skip=%d)", len(rows), self.query.page.skip)
        return [StakeStart.from_dict(row) for row in rows]


__all__ = ["STAKES_QUERY", "StakeQuery", "StakeSource", "default_stake_sort"]
