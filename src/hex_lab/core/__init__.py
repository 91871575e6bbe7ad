"""Core data structures for :mod:`hex_lab`.

This subpackage groups the record models, query parameters and repositories
used across the project so they can be shared without importing the entire
public interface exposed in :mod:`hex_lab.__init__`.
"""

from __future__ import annotations

from .constants import FLUSH_ADDRESS, HEX_LAUNCH_TIMESTAMP, SECONDS_PER_DAY, SUBGRAPH_URL
from .models import DailyTotal, FlushTransfer, LobbyEntry, StakeEnd, StakeStart, SummaryEntry
from .params import PageWindow, SortState, clamp_limit
from .repositories import LobbyRepository, StakeRepository

__all__ = [
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
    "clamp_limit",
    "FLUSH_ADDRESS",
    "HEX_LAUNCH_TIMESTAMP",
    "SECONDS_PER_DAY",
    "SUBGRAPH_URL",
]
