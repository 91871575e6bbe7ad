"""Data models used throughout HexLab.

Subgraph records keep the wire values verbatim (big integers arrive as
strings) and expose numeric views as properties.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any, Mapping

import pandas as pd

from .constants import HEARTS_PER_HEX, HEX_LAUNCH_TIMESTAMP, SECONDS_PER_DAY, WEI_PER_ETH


def _int(value: str | None) -> int:
    """Parse a subgraph integer string, treating missing values as ``0``."""

    if not value:
        return 0
    return int(value)


def _float(value: str | None) -> float:
    if not value:
        return 0.0
    return float(value)


@dataclass(frozen=True)
class LobbyEntry:
    """A single ``xfLobbyEnter`` event."""

    id: str
    enter_day: str
    entry_id: str
    member_addr: str
    raw_amount: str  # wei
    timestamp: str  # unix seconds
    transaction_hash: str
    referrer_addr: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LobbyEntry":
        return cls(
            id=str(data["id"]),
            enter_day=str(data.get("enterDay", "")),
            entry_id=str(data.get("entryId", "")),
            member_addr=str(data.get("memberAddr", "")),
            raw_amount=str(data.get("rawAmount", "0")),
            timestamp=str(data.get("timestamp", "0")),
            transaction_hash=str(data.get("transactionHash", "")),
            referrer_addr=str(data.get("referrerAddr", "")),
        )

    @property
    def wei(self) -> int:
        return _int(self.raw_amount)

    @property
    def eth(self) -> float:
        return self.wei / WEI_PER_ETH

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["eth"] = self.eth
        data["timestamp_iso"] = datetime.fromtimestamp(_int(self.timestamp), tz=UTC).isoformat()
        return data


@dataclass(frozen=True)
class StakeEnd:
    """Closing event of a stake; fields the query does not select stay empty."""

    id: str
    staker_addr: str = ""
    stake_id: str = ""
    payout: str = ""
    staked_hearts: str = ""
    staked_shares: str = ""
    timestamp: str = ""
    penalty: str = ""
    served_days: str = ""
    days_late: str = ""
    days_early: str = ""
    transaction_hash: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StakeEnd":
        return cls(
            id=str(data["id"]),
            staker_addr=str(data.get("stakerAddr") or ""),
            stake_id=str(data.get("stakeId") or ""),
            payout=str(data.get("payout") or ""),
            staked_hearts=str(data.get("stakedHearts") or ""),
            staked_shares=str(data.get("stakedShares") or ""),
            timestamp=str(data.get("timestamp") or ""),
            penalty=str(data.get("penalty") or ""),
            served_days=str(data.get("servedDays") or ""),
            days_late=str(data.get("daysLate") or ""),
            days_early=str(data.get("daysEarly") or ""),
            transaction_hash=str(data.get("transactionHash") or ""),
        )

    @property
    def payout_hearts(self) -> float:
        return _float(self.payout)

    @property
    def penalty_hearts(self) -> float:
        return _float(self.penalty)

    @property
    def ended_at(self) -> int:
        return _int(self.timestamp)

    @property
    def served(self) -> int:
        return _int(self.served_days)

    @property
    def late_minus_early(self) -> int:
        return _int(self.days_late) - _int(self.days_early)


@dataclass(frozen=True)
class StakeStart:
    """A ``stakeStart`` event with its optional :class:`StakeEnd`."""

    id: str
    staker_addr: str
    stake_id: str
    staked_hearts: str
    stake_shares: str
    stake_t_shares: str
    staked_days: str
    start_day: str
    end_day: str
    timestamp: str
    is_auto_stake: bool
    transaction_hash: str
    stake_end: StakeEnd | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StakeStart":
        end = data.get("stakeEnd")
        return cls(
            id=str(data["id"]),
            staker_addr=str(data.get("stakerAddr", "")),
            stake_id=str(data.get("stakeId", "")),
            staked_hearts=str(data.get("stakedHearts", "0")),
            stake_shares=str(data.get("stakeShares", "0")),
            stake_t_shares=str(data.get("stakeTShares", "0")),
            staked_days=str(data.get("stakedDays", "0")),
            start_day=str(data.get("startDay", "0")),
            end_day=str(data.get("endDay", "0")),
            timestamp=str(data.get("timestamp", "0")),
            is_auto_stake=bool(data.get("isAutoStake", False)),
            transaction_hash=str(data.get("transactionHash", "")),
            stake_end=StakeEnd.from_dict(end) if end else None,
        )

    @property
    def is_active(self) -> bool:
        return self.stake_end is None

    @property
    def started_at(self) -> int:
        return _int(self.timestamp)

    @property
    def expected_end(self) -> int:
        """Unix timestamp of the first second of ``endDay``."""

        return HEX_LAUNCH_TIMESTAMP + _int(self.end_day) * SECONDS_PER_DAY

    @property
    def hearts(self) -> float:
        return _float(self.staked_hearts)

    @property
    def hex(self) -> float:
        return self.hearts / HEARTS_PER_HEX

    @property
    def t_shares(self) -> float:
        return _float(self.stake_t_shares)

    @property
    def days(self) -> int:
        return _int(self.staked_days)


@dataclass(frozen=True)
class FlushTransfer:
    """One parsed row of a flush-address CSV export."""

    tx_hash: str
    timestamp: pd.Timestamp
    from_addr: str
    to_addr: str
    amount: float


@dataclass
class SummaryEntry:
    """Running totals for one counterparty (or one internal transaction)."""

    key: str
    amount: float
    count: int
    first_date: pd.Timestamp
    last_date: pd.Timestamp
    address: str = ""
    tx_hash: str = ""

    def add(self, amount: float, timestamp: pd.Timestamp) -> None:
        self.amount += amount
        self.count += 1
        self.first_date = min(self.first_date, timestamp)
        self.last_date = max(self.last_date, timestamp)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DailyTotal:
    """Amount moved on one calendar day plus the running total up to it."""

    date: str
    amount: float
    cumulative: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


__all__ = [
    "LobbyEntry",
    "StakeEnd",
    "StakeStart",
    "FlushTransfer",
    "SummaryEntry",
    "DailyTotal",
]
