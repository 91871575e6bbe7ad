from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..core import LobbyEntry, LobbyRepository
from ..core.constants import WEI_PER_ETH


def wei_to_eth(raw_amount: str | int) -> float:
    """Convert an integer wei amount (possibly as string) to ETH."""

    return int(raw_amount) / WEI_PER_ETH


def selection_label(addresses: Sequence[str]) -> str:
    if not addresses:
        return ""
    if len(addresses) == 1:
        return addresses[0]
    return f"{len(addresses)} Addresses Selected"


@dataclass(frozen=True)
class LobbySummary:
    total_eth: float
    transactions: int
    selection: str = ""


def summarize(
    entries: LobbyRepository | Sequence[LobbyEntry], addresses: Sequence[str] = ()
) -> LobbySummary:
    repo = entries if isinstance(entries, LobbyRepository) else LobbyRepository(entries)
    return LobbySummary(
        total_eth=repo.total_eth(),
        transactions=len(repo),
        selection=selection_label(addresses),
    )


__all__ = ["wei_to_eth", "selection_label", "LobbySummary", "summarize"]
