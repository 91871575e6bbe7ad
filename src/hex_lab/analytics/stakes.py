"""Derived stake metrics plus the client-side filter and sort of the stakes table.

Ended stakes carry a payout; for active stakes ``yield``, ``minted`` and
``roi`` are not applicable and are reported as ``None``. Sorting treats any
missing or non-finite value as ``0`` so active stakes rank like a zero yield.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date

import pandas as pd

from ..core import SortState, StakeRepository, StakeStart
from ..core.constants import HEARTS_PER_HEX, HEX_LAUNCH_DATE
from ..core.repositories import STAKE_STATUSES, StakeStatus
from ..dates import day_start

STAKE_END_CEILING = date(2050, 1, 1)


def payout(stake: StakeStart) -> float | None:
    if stake.stake_end is None:
        return None
    return stake.stake_end.payout_hearts


def minted(stake: StakeStart) -> float | None:
    """Principal plus payout in hearts for ended stakes."""

    if stake.stake_end is None:
        return None
    return stake.stake_end.payout_hearts + stake.hearts


def roi(stake: StakeStart) -> float | None:
    """``payout / stakedHearts`` as a ratio; ``nan`` for a zero principal."""

    if stake.stake_end is None:
        return None
    principal = stake.hearts
    if principal == 0:
        return float("nan")
    return stake.stake_end.payout_hearts / principal


def _or_zero(value: float | None) -> float:
    if value is None or math.isnan(value):
        return 0.0
    return value


def _end_attr(name: str) -> Callable[[StakeStart], float]:
    def key(stake: StakeStart) -> float:
        end = stake.stake_end
        return float(getattr(end, name)) if end is not None else 0.0

    return key


SORT_KEYS: dict[str, Callable[[StakeStart], float]] = {
    "start": lambda s: s.started_at,
    "exp_end": lambda s: s.expected_end,
    "days": lambda s: s.days,
    "hex_staked": lambda s: s.hearts,
    "t_shares": lambda s: s.t_shares,
    "stake_ended": _end_attr("ended_at"),
    "yield": lambda s: _or_zero(payout(s)),
    "minted": lambda s: _or_zero(minted(s)),
    "roi": lambda s: _or_zero(roi(s)),
    "days_served": _end_attr("served"),
    "early_late": _end_attr("late_minus_early"),
    "penalty": _end_attr("penalty_hearts"),
}


def sort_stakes(stakes: Iterable[StakeStart], sort: SortState) -> list[StakeStart]:
    """Stable sort on the single active field; ties keep fetch order."""

    try:
        key = SORT_KEYS[sort.field]
    except KeyError:
        raise ValueError(f"Unknown stake sort field: {sort.field!r}") from None
    return sorted(stakes, key=key, reverse=sort.descending)


@dataclass(frozen=True)
class StakeFilter:
    """Client-side filter state; all date bounds are inclusive UTC midnights."""

    status: StakeStatus = "all"
    address: str = ""
    start_from: date = HEX_LAUNCH_DATE
    start_to: date = field(default_factory=date.today)
    end_from: date = HEX_LAUNCH_DATE
    end_to: date = STAKE_END_CEILING

    def __post_init__(self) -> None:
        if self.status not in STAKE_STATUSES:
            raise ValueError(f"Unknown stake status: {self.status!r}")

    def apply(self, repo: StakeRepository) -> StakeRepository:
        return repo.filter(
            status=self.status,
            address=self.address,
            start_from=day_start(self.start_from),
            start_to=day_start(self.start_to),
            end_from=day_start(self.end_from),
            end_to=day_start(self.end_to),
        )


def stake_table(stakes: Iterable[StakeStart]) -> pd.DataFrame:
    """Tabular view with the derived columns rendered by the stakes page."""

    rows = []
    for stake in stakes:
        end = stake.stake_end
        paid = payout(stake)
        total = minted(stake)
        rows.append(
            {
                "staker_addr": stake.staker_addr,
                "start": pd.Timestamp(stake.started_at, unit="s", tz="UTC"),
                "expected_end": pd.Timestamp(stake.expected_end, unit="s", tz="UTC"),
                "days": stake.days,
                "hex_staked": stake.hex,
                "t_shares": stake.t_shares,
                "stake_ended": (
                    pd.Timestamp(end.ended_at, unit="s", tz="UTC") if end is not None else None
                ),
                "yield": paid / HEARTS_PER_HEX if paid is not None else None,
                "minted": total / HEARTS_PER_HEX if total is not None else None,
                "roi": roi(stake),
                "days_served": end.served if end is not None else None,
                "early_late": end.late_minus_early if end is not None else None,
                "penalty": end.penalty_hearts / HEARTS_PER_HEX if end is not None else None,
                "transaction_hash": stake.transaction_hash,
            }
        )
    return pd.DataFrame(rows)


__all__ = [
    "STAKE_END_CEILING",
    "SORT_KEYS",
    "payout",
    "minted",
    "roi",
    "sort_stakes",
    "StakeFilter",
    "stake_table",
]
