from __future__ import annotations

import logging
import os
import sys
import tomllib
from datetime import date
from pathlib import Path
from typing import Any, cast

from hex_lab import (
    FlushPipeline,
    LobbyPipeline,
    LobbyQuery,
    PageWindow,
    SortState,
    StakeFilter,
    StakeQuery,
    StakesPipeline,
    SubgraphClient,
    Visualizer,
    flush_report,
    lobby_report,
    stakes_report,
)
from hex_lab.analytics.flush import FLUSH_SORT_FIELDS
from hex_lab.core.constants import STAKE_SORT_FIELDS, SUBGRAPH_URL
from hex_lab.formatting import format_amount

logger = logging.getLogger(__name__)


def _parse_date(raw: Any, fallback: date) -> date:
    if not raw:
        return fallback
    if isinstance(raw, date):
        return raw
    return date.fromisoformat(str(raw))


def load_config(path: str | Path | None) -> dict[str, Any]:
    """Load configuration from a TOML file and merge with defaults.

    Parameters
    ----------
    path:
        Optional path to a configuration file. When ``None`` or missing, the
        built-in defaults are used.

    Returns
    -------
    dict[str, Any]
        Configuration dictionary with any file overrides applied.
    """

    default = {
        "subgraph": {"url": SUBGRAPH_URL, "timeout": 30.0},
        "lobby": {
            "enabled": True,
            "limit": 10,
            "min_amount": "500",
            "order_by": "rawAmount",
            "order_direction": "desc",
            "addresses": "",
        },
        "stakes": {
            "enabled": True,
            "limit": 100,
            "sort_field": "start",
            "sort_direction": "desc",
            "status": "all",
            "address": "",
            "start_from": "2019-12-03",
            "start_to": None,
            "end_from": "2019-12-03",
            "end_to": "2050-01-01",
        },
        "flush": {
            "enabled": True,
            "data_dir": str(Path(__file__).with_name("data")),
            "transaction_types": ["send", "receive", "internal"],
            "sort_field": "amount",
            "sort_direction": "desc",
        },
        "output": {"outdir": None, "show": True, "charts": ["daily", "counterparties"]},
        "logging": {"level": "INFO"},
    }

    cfg_path = Path(path) if path else None

    if cfg_path and cfg_path.is_file():
        with open(cfg_path, "rb") as f:
            file_cfg = tomllib.load(f)

        for k, v in file_cfg.items():
            if isinstance(v, dict) and k in default and isinstance(default[k], dict):
                cast(dict, default[k]).update(v)
            else:
                default[k] = v
    elif cfg_path:
        logger.warning("Config file not found at %s. Using defaults.", cfg_path)

    return default


def _run_lobby(client: SubgraphClient, cfg: dict[str, Any], outdir: Path | None) -> None:
    query = LobbyQuery(
        page=PageWindow(limit=cfg.get("limit", 10)),
        min_amount=str(cfg.get("min_amount", "500")),
        order_by=str(cfg.get("order_by", "rawAmount")),
        order_direction=cfg.get("order_direction", "desc"),
        member_addresses=str(cfg.get("addresses", "")),
    )
    pipeline = LobbyPipeline(client, query)
    state = pipeline.run()
    if state.status == "error":
        print(f"Lobby error: {state.error}")
        return
    summary = pipeline.summary()
    if summary is None:
        return
    label = f" ({summary.selection})" if summary.selection else ""
    print(
        f"Lobby{label}: {summary.transactions} entries, "
        f"{format_amount(summary.total_eth)} ETH"
    )
    if outdir and state.data is not None:
        lobby_report(state.data, outdir, query.addresses)


def _run_stakes(client: SubgraphClient, cfg: dict[str, Any], outdir: Path | None) -> None:
    stake_filter = StakeFilter(
        status=cfg.get("status", "all"),
        address=str(cfg.get("address", "")),
        start_from=_parse_date(cfg.get("start_from"), date(2019, 12, 3)),
        start_to=_parse_date(cfg.get("start_to"), date.today()),
        end_from=_parse_date(cfg.get("end_from"), date(2019, 12, 3)),
        end_to=_parse_date(cfg.get("end_to"), date(2050, 1, 1)),
    )
    query = StakeQuery(
        page=PageWindow(limit=cfg.get("limit", 100)),
        sort=SortState(
            field=str(cfg.get("sort_field", "start")),
            direction=cfg.get("sort_direction", "desc"),
            fields=STAKE_SORT_FIELDS,
        ),
        start_from=stake_filter.start_from,
    )
    pipeline = StakesPipeline(client, query)
    pipeline.set_filter(stake_filter)
    state = pipeline.run()
    if state.status == "error":
        print(f"Stakes error: {state.error}")
        return
    rows = pipeline.rows()
    print(f"Stakes after filter: {len(rows)} of {len(state.data or [])}")
    if outdir:
        stakes_report(rows, outdir)


def _run_flush(cfg: dict[str, Any], out: dict[str, Any], outdir: Path | None) -> None:
    pipeline = FlushPipeline(str(cfg.get("data_dir")))
    pipeline.sort = SortState(
        field=str(cfg.get("sort_field", "amount")),
        direction=cfg.get("sort_direction", "desc"),
        fields=FLUSH_SORT_FIELDS,
    )
    show = bool(out.get("show", True)) if not outdir else False
    charts = out.get("charts", [])
    for kind in cfg.get("transaction_types", []):
        state = pipeline.run(kind)
        if state.status == "error" or state.data is None:
            print(f"Flush {kind} error: {state.error}")
            continue
        summary = state.data
        print(
            f"Flush {kind}: {summary.addresses} entries, "
            f"{format_amount(summary.total_amount)} ETH over {len(summary.daily)} days"
        )
        if outdir:
            flush_report(summary, outdir, pipeline.sort)
        if "daily" in charts:
            Visualizer.daily_flow(
                summary.daily_frame(),
                title=f"Flush address: {kind.capitalize()} Transactions",
                save_path=str(outdir / f"flush_{kind}_daily.png") if outdir else None,
                show=show,
            )
        if "counterparties" in charts and kind != "internal":
            Visualizer.bar_counterparties(
                summary.to_dataframe(pipeline.sort),
                save_path=str(outdir / f"flush_{kind}_top.png") if outdir else None,
                show=show,
            )


def main() -> None:
    """Run the demo using configuration from file or environment variables."""
    cfg_file = os.getenv("HEX_LAB_CONFIG") or (sys.argv[1] if len(sys.argv) > 1 else None)
    cfg = load_config(cfg_file)

    if url_env := os.getenv("HEX_LAB_SUBGRAPH_URL"):
        cfg.setdefault("subgraph", {})["url"] = url_env
    if data_env := os.getenv("HEX_LAB_DATA_DIR"):
        cfg.setdefault("flush", {})["data_dir"] = data_env
    if outdir_env := os.getenv("HEX_LAB_OUTDIR"):
        cfg.setdefault("output", {})["outdir"] = outdir_env

    logging.basicConfig(
        level=str(cfg.get("logging", {}).get("level", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    out = cfg.get("output", {})
    outdir = Path(out["outdir"]) if out.get("outdir") else None
    if outdir:
        outdir.mkdir(parents=True, exist_ok=True)

    sub = cfg.get("subgraph", {})
    client = SubgraphClient(str(sub.get("url", SUBGRAPH_URL)), float(sub.get("timeout", 30.0)))

    if cfg.get("lobby", {}).get("enabled", True):
        _run_lobby(client, cfg["lobby"], outdir)
    if cfg.get("stakes", {}).get("enabled", True):
        _run_stakes(client, cfg["stakes"], outdir)
    if cfg.get("flush", {}).get("enabled", True):
        _run_flush(cfg["flush"], out, outdir)


if __name__ == "__main__":
    main()
