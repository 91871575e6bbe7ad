"""Data orchestration pipelines for the lobby, stakes and flush views."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from ..analytics.flush import FlushSummary, aggregate, default_flush_sort
from ..analytics.lobby import LobbySummary, summarize
from ..analytics.stakes import StakeFilter, sort_stakes
from ..core import FLUSH_ADDRESS, LobbyRepository, PageWindow, SortState, StakeRepository, StakeStart
from ..sources import FlushCSVSource, LobbyQuery, LobbySource, StakeQuery, StakeSource, SubgraphClient
from ..sources.flush import TransactionType
from .state import FetchState, Loader

logger = logging.getLogger(__name__)


def _has_next(state: FetchState) -> bool:
    # data survives a failed reload but then describes the previous page
    if state.status != "success" or state.data is None:
        return PageWindow.has_next(None)
    return PageWindow.has_next(len(state.data))


class LobbyPipeline:
    """Lobby table: one subgraph page per :class:`LobbyQuery`."""

    def __init__(self, client: SubgraphClient, query: LobbyQuery | None = None) -> None:
        self.client = client
        self.query = query or LobbyQuery()
        self.loader: Loader[LobbyQuery, LobbyRepository] = Loader(self._fetch, name="lobby")

    def _fetch(self, query: LobbyQuery) -> LobbyRepository:
        return LobbyRepository(LobbySource(self.client, query).fetch())

    @property
    def state(self) -> FetchState[LobbyRepository]:
        return self.loader.state

    def run(self, query: LobbyQuery | None = None) -> FetchState[LobbyRepository]:
        if query is not None:
            self.query = query
        return self.loader.load(self.query)

    def next_page(self) -> FetchState[LobbyRepository]:
        return self.run(self.query.next_page())

    def previous_page(self) -> FetchState[LobbyRepository]:
        return self.run(self.query.previous_page())

    @property
    def has_next(self) -> bool:
        return _has_next(self.state)

    def summary(self) -> LobbySummary | None:
        data = self.state.data
        if data is None:
            return None
        return summarize(data, self.query.addresses)


@dataclass
class StakesView:
    """Client-side view state applied over the fetched page."""

    filter: StakeFilter = field(default_factory=StakeFilter)
    sort: SortState | None = None


class StakesPipeline:
    """Stakes table: server-side page plus client-side filter and sort.

    The filter's start lower bound is also the server-side ``timestampFrom``;
    every fetch takes it from ``view.filter`` so the two cannot diverge.
    """

    def __init__(self, client: SubgraphClient, query: StakeQuery | None = None) -> None:
        self.client = client
        self.query = query or StakeQuery()
        self.view = StakesView(filter=StakeFilter(start_from=self.query.start_from))
        self.loader: Loader[StakeQuery, StakeRepository] = Loader(self._fetch, name="stakes")

    def _fetch(self, query: StakeQuery) -> StakeRepository:
        return StakeRepository(StakeSource(self.client, query).fetch())

    @property
    def state(self) -> FetchState[StakeRepository]:
        return self.loader.state

    def run(self, query: StakeQuery | None = None) -> FetchState[StakeRepository]:
        if query is not None:
            self.query = query
        start_from = self.view.filter.start_from
        if self.query.start_from != start_from:
            self.query = replace(self.query, start_from=start_from)
        return self.loader.load(self.query)

    def set_filter(self, stake_filter: StakeFilter) -> FetchState[StakeRepository]:
        """Apply a new filter; a changed start bound narrows the server query, so refetch."""

        refetch = stake_filter.start_from != self.query.start_from
        self.view.filter = stake_filter
        if refetch:
            return self.run(self.query.with_limit(self.query.page.limit))
        return self.state

    def sort_by(self, sort_field: str) -> FetchState[StakeRepository]:
        """Toggle the sort column; the server-side order follows, so refetch."""

        return self.run(self.query.sorted_by(sort_field))

    @property
    def has_next(self) -> bool:
        return _has_next(self.state)

    def rows(self) -> list[StakeStart]:
        """Filtered and sorted stakes of the current page (recomputed on each call)."""

        data = self.state.data
        if data is None:
            return []
        filtered = self.view.filter.apply(data)
        return sort_stakes(filtered, self.view.sort or self.query.sort)


class FlushPipeline:
    """Flush view: reload and re-aggregate the export for the selected type."""

    def __init__(
        self,
        base: str | Path,
        transaction_type: TransactionType = "send",
        target: str = FLUSH_ADDRESS,
    ) -> None:
        self.base = base
        self.transaction_type: TransactionType = transaction_type
        self.target = target
        self.sort = default_flush_sort()
        self.loader: Loader[TransactionType, FlushSummary] = Loader(self._fetch, name="flush")

    def _fetch(self, transaction_type: TransactionType) -> FlushSummary:
        transfers = FlushCSVSource(self.base, transaction_type).fetch()
        summary = aggregate(transfers, transaction_type, self.target)
        logger.info(
            "Aggregated %d %s transfers into %d entries over %d days",
            len(transfers),
            transaction_type,
            summary.addresses,
            len(summary.daily),
        )
        return summary

    @property
    def state(self) -> FetchState[FlushSummary]:
        return self.loader.state

    def run(self, transaction_type: TransactionType | None = None) -> FetchState[FlushSummary]:
        if transaction_type is not None:
            self.transaction_type = transaction_type
        return self.loader.load(self.transaction_type)

    def toggle_sort(self, sort_field: str) -> SortState:
        self.sort = self.sort.toggle(sort_field)
        return self.sort


__all__ = [
    "FetchState",
    "Loader",
    "LobbyPipeline",
    "StakesPipeline",
    "StakesView",
    "FlushPipeline",
]
