from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from hex_lab.analytics.stakes import StakeFilter
from hex_lab.pipeline import FlushPipeline, LobbyPipeline, StakesPipeline
from hex_lab.sources import LobbyQuery, StakeQuery, SubgraphClient


def test_lobby_pipeline_summary(fake_subgraph) -> None:
    pipeline = LobbyPipeline(
        SubgraphClient(),
        LobbyQuery(member_addresses="0x4444444444444444444444444444444444444444"),
    )
    state = pipeline.run()
    assert state.status == "success"
    summary = pipeline.summary()
    assert summary is not None
    assert summary.total_eth == pytest.approx(2584.75)
    assert summary.transactions == 3
    assert summary.selection == "0x4444444444444444444444444444444444444444"
    assert pipeline.has_next


def test_lobby_pipeline_pages_and_disables_next(fake_subgraph) -> None:
    pipeline = LobbyPipeline(SubgraphClient())
    pipeline.run()
    fake_subgraph.responses["xfLobbyEnters"] = {"data": {"xfLobbyEnters": []}}
    pipeline.next_page()
    assert fake_subgraph.requests[-1]["variables"]["skip"] == 10
    assert not pipeline.has_next
    pipeline.previous_page()
    assert fake_subgraph.requests[-1]["variables"]["skip"] == 0


def test_lobby_pipeline_network_error(fake_subgraph) -> None:
    fake_subgraph.error = OSError("connection refused")
    state = LobbyPipeline(SubgraphClient()).run()
    assert state.status == "error"
    assert state.error == "connection refused"


def test_stakes_pipeline_filters_and_sorts_client_side(fake_subgraph) -> None:
    pipeline = StakesPipeline(SubgraphClient())
    pipeline.view.filter = StakeFilter(status="ended", start_to=date(2030, 1, 1))
    pipeline.sort_by("roi")
    assert fake_subgraph.requests[-1]["variables"]["orderBy"] == "stakeEnd__payout"
    assert [s.id for s in pipeline.rows()] == ["s3", "s2", "s4"]
    pipeline.sort_by("roi")
    assert [s.id for s in pipeline.rows()] == ["s4", "s2", "s3"]


def test_flush_pipeline_switches_type(fixtures_dir: Path) -> None:
    pipeline = FlushPipeline(fixtures_dir)
    send = pipeline.run()
    assert send.status == "success"
    assert send.data.addresses == 2
    internal = pipeline.run("internal")
    assert internal.data.transaction_type == "internal"
    assert internal.data.addresses == 3
    assert pipeline.toggle_sort("amount").direction == "asc"
    assert pipeline.toggle_sort("count").direction == "desc"


def test_flush_pipeline_missing_file(tmp_path: Path) -> None:
    state = FlushPipeline(tmp_path).run()
    assert state.status == "error"
    assert "all-trans.csv" in state.error


def test_lobby_next_disabled_after_failed_load(fake_subgraph) -> None:
    pipeline = LobbyPipeline(SubgraphClient())
    fake_subgraph.error = OSError("down")
    assert pipeline.run().status == "error"
    assert not pipeline.has_next


def test_failed_reload_keeps_data_but_disables_next(fake_subgraph) -> None:
    pipeline = LobbyPipeline(SubgraphClient())
    pipeline.run()
    assert pipeline.has_next
    fake_subgraph.error = OSError("down")
    state = pipeline.next_page()
    assert state.status == "error"
    assert state.data is not None
    assert not pipeline.has_next


def test_stakes_next_disabled_after_failed_load(fake_subgraph) -> None:
    pipeline = StakesPipeline(SubgraphClient())
    assert not pipeline.has_next
    fake_subgraph.error = OSError("down")
    assert pipeline.run().status == "error"
    assert not pipeline.has_next
    fake_subgraph.error = None
    assert pipeline.run().status == "success"
    assert pipeline.has_next


def test_lobby_address_warning_logged_once_per_run(fake_subgraph, caplog) -> None:
    pipeline = LobbyPipeline(SubgraphClient(), LobbyQuery(member_addresses="0x123, hello"))
    with caplog.at_level("WARNING"):
        pipeline.run()
        pipeline.summary()
    warnings = [r for r in caplog.records if "Invalid address format" in r.getMessage()]
    assert len(warnings) == 1


def test_stakes_filter_start_bound_drives_server_query(fake_subgraph) -> None:
    pipeline = StakesPipeline(SubgraphClient(), StakeQuery(start_from=date(2023, 1, 1)))
    assert pipeline.view.filter.start_from == date(2023, 1, 1)
    pipeline.view.filter = StakeFilter(start_from=date(2020, 1, 1))
    pipeline.run()
    assert fake_subgraph.requests[-1]["variables"]["timestampFrom"] == 1577836800
    assert pipeline.query.start_from == date(2020, 1, 1)


def test_set_filter_refetches_from_first_page_on_new_start_bound(fake_subgraph) -> None:
    pipeline = StakesPipeline(SubgraphClient())
    pipeline.run()
    pipeline.run(pipeline.query.next_page())
    sent = len(fake_subgraph.requests)

    pipeline.set_filter(StakeFilter(status="ended", start_from=date(2019, 12, 3)))
    assert len(fake_subgraph.requests) == sent

    pipeline.set_filter(StakeFilter(start_from=date(2021, 1, 1)))
    assert len(fake_subgraph.requests) == sent + 1
    variables = fake_subgraph.requests[-1]["variables"]
    assert variables["timestampFrom"] == 1609459200
    assert variables["skip"] == 0
