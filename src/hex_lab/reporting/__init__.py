from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from ..analytics.flush import FlushSummary
from ..analytics.lobby import summarize
from ..analytics.stakes import stake_table
from ..core import LobbyRepository, SortState, StakeStart
from ..dates import date_key
from ..formatting import date_span, format_percent
from ..links import address_link, transaction_link


def _ensure_outdir(outdir: str | Path) -> Path:
    p = Path(outdir)
    p.mkdir(parents=True, exist_ok=True)
    return p


def lobby_report(
    repo: LobbyRepository, outdir: str | Path, addresses: Iterable[str] = ()
) -> dict[str, Path]:
    """Write the lobby page and its totals; returns the written paths."""

    out = _ensure_outdir(outdir)
    paths: dict[str, Path] = {}

    df = repo.to_dataframe()
    if not df.empty:
        df["etherscan"] = df["member_addr"].map(address_link)
        df["tx_link"] = df["transaction_hash"].map(transaction_link)
    paths["lobby"] = out / "lobby_entries.csv"
    df.to_csv(paths["lobby"], index=False)

    summary = summarize(repo, list(addresses))
    totals = pd.DataFrame(
        [
            {
                "total_eth": round(summary.total_eth, 2),
                "transactions": summary.transactions,
                "selection": summary.selection,
            }
        ]
    )
    paths["lobby_totals"] = out / "lobby_totals.csv"
    totals.to_csv(paths["lobby_totals"], index=False)
    return paths


def stakes_report(stakes: Iterable[StakeStart], outdir: str | Path) -> dict[str, Path]:
    out = _ensure_outdir(outdir)
    df = stake_table(stakes)
    if not df.empty:
        df["pulsescan"] = df["staker_addr"].map(lambda a: address_link(a, "pulsescan"))
        df["hexscout"] = df["staker_addr"].map(lambda a: address_link(a, "hexscout"))
        df["roi_pct"] = df["roi"].map(format_percent)
        df["tx_link"] = df["transaction_hash"].map(lambda h: transaction_link(h, "pulsescan"))
    path = out / "stakes.csv"
    df.to_csv(path, index=False)
    return {"stakes": path}


def flush_report(
    summary: FlushSummary, outdir: str | Path, sort: SortState | None = None
) -> dict[str, Path]:
    """Write the grouped summary table, the daily series and the headline totals."""

    out = _ensure_outdir(outdir)
    paths: dict[str, Path] = {}
    kind = summary.transaction_type

    table = summary.to_dataframe(sort)
    if not table.empty:
        table["dates"] = [
            date_span(date_key(first), date_key(last))
            for first, last in zip(table["first_date"], table["last_date"])
        ]
        if kind == "internal":
            table["link"] = table["tx_hash"].map(transaction_link)
        else:
            table["link"] = table["address"].map(address_link)
    paths["summary"] = out / f"flush_{kind}_summary.csv"
    table.to_csv(paths["summary"], index=False)

    paths["daily"] = out / f"flush_{kind}_daily.csv"
    summary.daily_frame().to_csv(paths["daily"], index_label="date")

    totals = pd.DataFrame(
        [{"addresses": summary.addresses, "total_eth": round(summary.total_amount, 2)}]
    )
    paths["totals"] = out / f"flush_{kind}_totals.csv"
    totals.to_csv(paths["totals"], index=False)
    return paths


__all__ = ["lobby_report", "stakes_report", "flush_report"]
