from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from hex_lab.analytics.flush import aggregate
from hex_lab.core import LobbyEntry, LobbyRepository, StakeStart
from hex_lab.reporting import flush_report, lobby_report, stakes_report
from hex_lab.sources import FlushCSVSource


def test_flush_report_writes_tables(tmp_path: Path, fixtures_dir: Path) -> None:
    summary = aggregate(FlushCSVSource(fixtures_dir, "send").fetch(), "send")
    paths = flush_report(summary, tmp_path)
    table = pd.read_csv(paths["summary"])
    assert table["link"].iloc[0] == (
        "https://etherscan.io/address/0x2222222222222222222222222222222222222222"
    )
    daily = pd.read_csv(paths["daily"])
    assert list(daily.columns) == ["date", "amount", "cumulative"]
    totals = pd.read_csv(paths["totals"])
    assert totals.loc[0, "total_eth"] == pytest.approx(1700.0)


def test_internal_report_links_transactions(tmp_path: Path, fixtures_dir: Path) -> None:
    summary = aggregate(FlushCSVSource(fixtures_dir, "internal").fetch(), "internal")
    paths = flush_report(summary, tmp_path)
    table = pd.read_csv(paths["summary"])
    assert table["link"].iloc[0] == "https://etherscan.io/tx/0xb001"


def test_lobby_report(tmp_path: Path, fixtures_dir: Path) -> None:
    raw = json.loads((fixtures_dir / "lobby_enters.json").read_text())
    repo = LobbyRepository(LobbyEntry.from_dict(r) for r in raw["data"]["xfLobbyEnters"])
    paths = lobby_report(repo, tmp_path)
    assert len(pd.read_csv(paths["lobby"])) == 3
    assert pd.read_csv(paths["lobby_totals"]).loc[0, "total_eth"] == pytest.approx(2584.75)


def test_stakes_report(tmp_path: Path, fixtures_dir: Path) -> None:
    raw = json.loads((fixtures_dir / "stake_starts.json").read_text())
    stakes = [StakeStart.from_dict(r) for r in raw["data"]["stakeStarts"]]
    paths = stakes_report(stakes, tmp_path)
    df = pd.read_csv(paths["stakes"])
    assert df["hexscout"].iloc[0] == "https://hexscout.com/0xAbCd000000000000000000000000000000000001"
    assert df["tx_link"].iloc[1] == "https://scan.pulsechain.com/tx/0xd002"
