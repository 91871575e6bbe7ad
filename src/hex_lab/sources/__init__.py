"""Data source adapters used by :mod:`hex_lab`."""

from __future__ import annotations

from typing import Protocol, TypeVar

from .flush import TRANSACTION_TYPES, FlushCSVSource, TransactionType
from .lobby import LobbyQuery, LobbySource
from .stakes import StakeQuery, StakeSource
from .subgraph import SubgraphClient, SubgraphError

T_co = TypeVar("T_co", covariant=True)


class DataSource(Protocol[T_co]):
    """Adapter protocol: ``fetch`` returns one freshly loaded batch of records."""

    def fetch(self) -> list[T_co]: ...


__all__ = [
    "DataSource",
    "SubgraphClient",
    "SubgraphError",
    "LobbyQuery",
    "LobbySource",
    "StakeQuery",
    "StakeSource",
    "FlushCSVSource",
    "TransactionType",
    "TRANSACTION_TYPES",
]
