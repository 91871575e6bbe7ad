"""In-memory repositories for HexLab data models."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Literal

import pandas as pd

from .constants import WEI_PER_ETH
from .models import LobbyEntry, StakeStart

StakeStatus = Literal["all", "active", "ended"]

STAKE_STATUSES: tuple[str, ...] = ("all", "active", "ended")


class LobbyRepository:
    """Page of lobby entries with exact wei aggregation."""

    def __init__(self, entries: Iterable[LobbyEntry] | None = None) -> None:
        self._entries: list[LobbyEntry] = list(entries) if entries else []

    def extend(self, items: Iterable[LobbyEntry]) -> None:
        self._entries.extend(items)

    def total_wei(self) -> int:
        return sum((entry.wei for entry in self._entries), 0)

    def total_eth(self) -> float:
        """Sum in integer wei first so float drift never accumulates."""

        return self.total_wei() / WEI_PER_ETH

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([entry.to_dict() for entry in self._entries])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LobbyEntry]:
        return iter(self._entries)


class StakeRepository:
    """Page of stakes supporting the client-side filters of the stakes table."""

    def __init__(self, stakes: Iterable[StakeStart] | None = None) -> None:
        self._stakes: list[StakeStart] = list(stakes) if stakes else []

    def extend(self, items: Iterable[StakeStart]) -> None:
        self._stakes.extend(items)

    def filter(
        self,
        *,
        status: StakeStatus = "all",
        address: str = "",
        start_from: int | None = None,
        start_to: int | None = None,
        end_from: int | None = None,
        end_to: int | None = None,
    ) -> "StakeRepository":
        if status not in STAKE_STATUSES:
            raise ValueError(f"Unknown stake status: {status!r}")
        needle = address.strip().lower()
        res: list[StakeStart] = []
        for stake in self._stakes:
            if status == "active" and not stake.is_active:
                continue
            if status == "ended" and stake.is_active:
                continue
            if needle and needle not in stake.staker_addr.lower():
                continue
            started = stake.started_at
            if start_from is not None and started < start_from:
                continue
            if start_to is not None and started > start_to:
                continue
            expected_end = stake.expected_end
            if end_from is not None and expected_end < end_from:
                continue
            if end_to is not None and expected_end > end_to:
                continue
            res.append(stake)
        return StakeRepository(res)

    def to_dataframe(self) -> pd.DataFrame:
        rows = []
        for stake in self._stakes:
            end = stake.stake_end
            rows.append(
                {
                    "id": stake.id,
                    "staker_addr": stake.staker_addr,
                    "stake_id": stake.stake_id,
                    "start": stake.started_at,
                    "expected_end": stake.expected_end,
                    "staked_days": stake.days,
                    "hex_staked": stake.hex,
                    "t_shares": stake.t_shares,
                    "is_auto_stake": stake.is_auto_stake,
                    "ended_at": end.ended_at if end else None,
                    "transaction_hash": stake.transaction_hash,
                }
            )
        return pd.DataFrame(rows)

    def __len__(self) -> int:
        return len(self._stakes)

    def __iter__(self) -> Iterator[StakeStart]:
        return iter(self._stakes)


__all__ = ["LobbyRepository", "StakeRepository", "StakeStatus", "STAKE_STATUSES"]
