from __future__ import annotations

import json
import math
from datetime import date

import pytest

from hex_lab.analytics.stakes import SORT_KEYS, StakeFilter, minted, roi, sort_stakes, stake_table
from hex_lab.core import SortState, StakeRepository, StakeStart
from hex_lab.core.constants import STAKE_SORT_FIELDS


@pytest.fixture
def stakes(fixtures_dir) -> list[StakeStart]:
    raw = json.loads((fixtures_dir / "stake_starts.json").read_text())
    return [StakeStart.from_dict(r) for r in raw["data"]["stakeStarts"]]


def _by_id(stakes: list[StakeStart]) -> dict[str, StakeStart]:
    return {s.id: s for s in stakes}


def _order(stakes: list[StakeStart], field: str, direction: str = "desc") -> list[str]:
    sort = SortState(field, direction, STAKE_SORT_FIELDS)  # type: ignore[arg-type]
    return [s.id for s in sort_stakes(stakes, sort)]


def test_every_sort_field_has_a_key() -> None:
    assert tuple(SORT_KEYS) == STAKE_SORT_FIELDS


def test_roi_and_minted_for_ended_stake(stakes) -> None:
    s2 = _by_id(stakes)["s2"]
    assert roi(s2) == pytest.approx(0.25)
    assert minted(s2) == pytest.approx(250_000_000_000)


def test_active_stake_metrics_not_applicable(stakes) -> None:
    s1 = _by_id(stakes)["s1"]
    assert roi(s1) is None
    assert minted(s1) is None


def test_zero_principal_roi_is_nan(stakes) -> None:
    assert math.isnan(roi(_by_id(stakes)["s4"]))


@pytest.mark.parametrize(
    ("field", "expected"),
    [
        ("start", ["s1", "s4", "s2", "s3"]),
        ("exp_end", ["s1", "s4", "s2", "s3"]),
        ("days", ["s3", "s1", "s2", "s4"]),
        ("hex_staked", ["s2", "s1", "s3", "s4"]),
        ("t_shares", ["s2", "s1", "s3", "s4"]),
        ("stake_ended", ["s4", "s2", "s3", "s1"]),
        ("yield", ["s2", "s3", "s1", "s4"]),
        ("minted", ["s2", "s3", "s1", "s4"]),
        ("roi", ["s3", "s2", "s1", "s4"]),
        ("days_served", ["s3", "s2", "s4", "s1"]),
        ("early_late", ["s2", "s1", "s4", "s3"]),
        ("penalty", ["s3", "s1", "s2", "s4"]),
    ],
)
def test_sort_fields_descending(stakes, field, expected) -> None:
    assert _order(stakes, field) == expected


def test_sort_is_stable_for_ties(stakes) -> None:
    # s1 (active) and s4 (zero principal) both rank as zero yield
    assert _order(stakes, "yield", "asc") == ["s1", "s4", "s3", "s2"]


def test_stake_filter_uses_inclusive_midnight_bounds(stakes) -> None:
    repo = StakeRepository(stakes)
    flt = StakeFilter(
        status="ended",
        start_from=date(2022, 1, 1),
        start_to=date(2022, 6, 1),
        end_to=date(2022, 8, 30),
    )
    assert [s.id for s in flt.apply(repo)] == ["s2", "s4"]


def test_stake_filter_defaults_include_everything(stakes) -> None:
    assert len(StakeFilter().apply(StakeRepository(stakes))) == 4


def test_stake_table_renders_not_applicable_as_missing(stakes) -> None:
    df = stake_table(stakes).set_index("transaction_hash")
    assert df.loc["0xd001", "minted"] is None or math.isnan(df.loc["0xd001", "minted"])
    assert df.loc["0xd002", "minted"] == pytest.approx(2500.0)
    assert df.loc["0xd003", "penalty"] == pytest.approx(10.0)
