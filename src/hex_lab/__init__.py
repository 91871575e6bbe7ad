"""
HexLab: analytics toolkit for HEX lobby entries, stakes and flush-address transfers.

Design goals:
- Thin adapters over the HEX subgraph (GraphQL) and the static CSV exports
- Immutable records (LobbyEntry, StakeStart, StakeEnd) + light repositories
- Client-side filters, sorts and aggregations as pure functions over a page
- Fetch state machine where only the latest request may publish its result
- Matplotlib charts and CSV reports for the aggregated views
"""

from __future__ import annotations

import logging

from . import analytics, formatting, links
from .addresses import normalize_address, parse_address_list
from .analytics.flush import FlushSummary, aggregate, daily_totals
from .analytics.lobby import LobbySummary, summarize
from .analytics.stakes import StakeFilter, minted, roi, sort_stakes
from .core import (
    DailyTotal,
    FlushTransfer,
    LobbyEntry,
    LobbyRepository,
    PageWindow,
    SortState,
    StakeEnd,
    StakeRepository,
    StakeStart,
    SummaryEntry,
)
from .pipeline import FlushPipeline, LobbyPipeline, StakesPipeline
from .pipeline.state import FetchState, Loader
from .reporting import flush_report, lobby_report, stakes_report
from .sources import (
    DataSource,
    FlushCSVSource,
    LobbyQuery,
    LobbySource,
    StakeQuery,
    StakeSource,
    SubgraphClient,
    SubgraphError,
)
from .visualization import Visualizer

logger = logging.getLogger(__name__)

__all__ = [
    "analytics",
    "formatting",
    "links",
    "normalize_address",
    "parse_address_list",
    "LobbyEntry",
    "StakeStart",
    "StakeEnd",
    "FlushTransfer",
    "SummaryEntry",
    "DailyTotal",
    "LobbyRepository",
    "StakeRepository",
    "PageWindow",
    "SortState",
    "DataSource",
    "SubgraphClient",
    "SubgraphError",
    "LobbyQuery",
    "LobbySource",
    "StakeQuery",
    "StakeSource",
    "FlushCSVSource",
    "LobbySummary",
    "summarize",
    "StakeFilter",
    "sort_stakes",
    "roi",
    "minted",
    "FlushSummary",
    "aggregate",
    "daily_totals",
    "FetchState",
    "Loader",
    "LobbyPipeline",
    "StakesPipeline",
    "FlushPipeline",
    "lobby_report",
    "stakes_report",
    "flush_report",
    "Visualizer",
]
