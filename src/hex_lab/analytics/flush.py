"""Aggregation of flush-address transfers into per-counterparty totals and a daily series."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

import pandas as pd

from ..core import DailyTotal, FlushTransfer, SortState, SummaryEntry
from ..core.constants import FLUSH_ADDRESS
from ..dates import date_key
from ..sources.flush import TRANSACTION_TYPES

FLUSH_SORT_FIELDS: tuple[str, ...] = ("amount", "count", "date")


def default_flush_sort() -> SortState:
    return SortState(field="amount", direction="desc", fields=FLUSH_SORT_FIELDS)


@dataclass
class FlushSummary:
    """Result of one aggregation pass; rebuilt from scratch on every run."""

    transaction_type: str
    entries: dict[str, SummaryEntry] = field(default_factory=dict)
    daily: list[DailyTotal] = field(default_factory=list)

    @property
    def addresses(self) -> int:
        return len(self.entries)

    @property
    def total_amount(self) -> float:
        return sum(entry.amount for entry in self.entries.values())

    def sorted_entries(self, sort: SortState | None = None) -> list[SummaryEntry]:
        return sort_entries(self.entries.values(), sort or default_flush_sort())

    def to_dataframe(self, sort: SortState | None = None) -> pd.DataFrame:
        return pd.DataFrame([entry.to_dict() for entry in self.sorted_entries(sort)])

    def daily_frame(self) -> pd.DataFrame:
        if not self.daily:
            return pd.DataFrame(columns=["amount", "cumulative"])
        df = pd.DataFrame([row.to_dict() for row in self.daily])
        df["date"] = pd.to_datetime(df["date"])
        return df.set_index("date")


def matches_direction(transfer: FlushTransfer, transaction_type: str, target: str) -> bool:
    if transfer.amount <= 0:
        return False
    if transaction_type == "send":
        return transfer.from_addr == target
    if transaction_type == "receive":
        return transfer.to_addr == target
    return False


def daily_totals(amounts: Mapping[str, float]) -> list[DailyTotal]:
    """Order day buckets ascending and attach the running total."""

    cumulative = 0.0
    series: list[DailyTotal] = []
    for day in sorted(amounts):
        cumulative += amounts[day]
        series.append(DailyTotal(date=day, amount=amounts[day], cumulative=cumulative))
    return series


def aggregate(
    transfers: Iterable[FlushTransfer],
    transaction_type: str,
    target: str = FLUSH_ADDRESS,
) -> FlushSummary:
    """Group transfers by counterparty (or by hash for internal rows) and bucket by day.

    Internal rows are kept one entry per hash; a repeated hash replaces the
    earlier entry while both amounts still land in the day buckets.
    """

    if transaction_type not in TRANSACTION_TYPES:
        raise ValueError(f"Unknown transaction type: {transaction_type!r}")
    target = target.lower()
    entries: dict[str, SummaryEntry] = {}
    per_day: dict[str, float] = {}

    for transfer in transfers:
        if transaction_type == "internal":
            entries[transfer.tx_hash] = SummaryEntry(
                key=transfer.tx_hash,
                amount=transfer.amount,
                count=1,
                first_date=transfer.timestamp,
                last_date=transfer.timestamp,
                tx_hash=transfer.tx_hash,
            )
        else:
            if not matches_direction(transfer, transaction_type, target):
                continue
            counterparty = transfer.to_addr if transfer.from_addr == target else transfer.from_addr
            entry = entries.get(counterparty)
            if entry is None:
                entry = SummaryEntry(
                    key=counterparty,
                    amount=0.0,
                    count=0,
                    first_date=transfer.timestamp,
                    last_date=transfer.timestamp,
                    address=counterparty,
                )
                entries[counterparty] = entry
            entry.add(transfer.amount, transfer.timestamp)

        day = date_key(transfer.timestamp)
        per_day[day] = per_day.get(day, 0.0) + transfer.amount

    return FlushSummary(
        transaction_type=transaction_type,
        entries=entries,
        daily=daily_totals(per_day),
    )


_ENTRY_KEYS = {
    "amount": lambda e: e.amount,
    "count": lambda e: e.count,
    "date": lambda e: e.last_date,
}


def sort_entries(entries: Iterable[SummaryEntry], sort: SortState) -> list[SummaryEntry]:
    try:
        key = _ENTRY_KEYS[sort.field]
    except KeyError:
        raise ValueError(f"Unknown flush sort field: {sort.field!r}") from None
    return sorted(entries, key=key, reverse=sort.descending)


__all__ = [
    "FLUSH_SORT_FIELDS",
    "FlushSummary",
    "aggregate",
    "daily_totals",
    "default_flush_sort",
    "matches_direction",
    "sort_entries",
]
