from __future__ import annotations

from pathlib import Path

import pytest

from hex_lab.sources import FlushCSVSource
from hex_lab.sources.flush import first_positive, parse_csv_text, split_row

HEADER = "h0,h1,h2,h3,h4,h5,h6,h7,h8,h9,h10,h11,h12,h13,h14\n"


def test_split_row_strips_prefix_and_quotes() -> None:
    assert split_row('42|"0xaa","1",x') == ["0xaa", "1", "x"]
    assert split_row('"0xaa",7|x') == ["0xaa", "7|x"]


def test_first_positive_skips_empty_and_zero() -> None:
    assert first_positive(["", "100.5"]) == 100.5
    assert first_positive(["0", "2"]) == 2.0
    assert first_positive(["nan", "abc"]) == 0.0
    assert first_positive(["3", "9"]) == 3.0


def test_short_rows_are_dropped() -> None:
    text = HEADER + '1|"0xa","1","2","2024-01-01 00:00:00","0xf","0xt","","1"\n'
    assert parse_csv_text(text, "send") == []


def test_unparseable_timestamp_dropped() -> None:
    row = '"0xa","1","2","not a date","0xf","0xt","","1","","","","","","",""\n'
    assert parse_csv_text(HEADER + row, "send") == []


def test_transfer_row_columns() -> None:
    row = '7|"0xa","1","2","2024-01-01 10:00:00","0xFROM","0xTO","","","100.5","200.3","","","","",""\n'
    (transfer,) = parse_csv_text(HEADER + row + "\n", "send")
    assert transfer.from_addr == "0xfrom"
    assert transfer.to_addr == "0xto"
    assert transfer.amount == 100.5
    assert str(transfer.timestamp.tz) == "UTC"


def test_source_reads_fixture_exports(fixtures_dir: Path) -> None:
    sends = FlushCSVSource(fixtures_dir, "send").fetch()
    internal = FlushCSVSource(fixtures_dir, "internal").fetch()
    assert len(sends) == 7
    assert [t.tx_hash for t in internal] == ["0xb001", "0xb002", "0xb003"]
    assert internal[0].amount == 12.5


def test_csv_location_for_urls() -> None:
    src = FlushCSVSource("https://dash.example/", "internal")
    assert src.location == "https://dash.example/internal-trans.csv"
    assert FlushCSVSource("/srv/data", "receive").location.endswith("all-trans.csv")


def test_unknown_transaction_type() -> None:
    with pytest.raises(ValueError):
        FlushCSVSource(".", "burn")  # type: ignore[arg-type]
