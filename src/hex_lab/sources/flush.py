"""Static CSV exports of flush-address transfers."""

from __future__ import annotations

import logging
import math
import re
import urllib.request
from pathlib import Path
from typing import Literal

from ..core import FlushTransfer
from ..core.constants import ALL_TRANSACTIONS_CSV, INTERNAL_TRANSACTIONS_CSV
from ..dates import parse_timestamp

logger = logging.getLogger(__name__)

TransactionType = Literal["send", "receive", "internal"]

TRANSACTION_TYPES: tuple[str, ...] = ("send", "receive", "internal")

_ROW_PREFIX = re.compile(r"^\d+\|")

# Column layout of all-trans.csv
TRANSFER_MIN_COLUMNS = 15
TRANSFER_TIMESTAMP = 3
TRANSFER_FROM = 4
TRANSFER_TO = 5
TRANSFER_AMOUNTS = (7, 8)

# Column layout of internal-trans.csv
INTERNAL_MIN_COLUMNS = 11
INTERNAL_HASH = 0
INTERNAL_TIMESTAMP = 3
INTERNAL_AMOUNT = 10


def csv_name(transaction_type: str) -> str:
    if transaction_type not in TRANSACTION_TYPES:
        raise ValueError(f"Unknown transaction type: {transaction_type!r}")
    if transaction_type == "internal":
        return INTERNAL_TRANSACTIONS_CSV
    return ALL_TRANSACTIONS_CSV


def split_row(line: str) -> list[str]:
    """Drop the ``<digits>|`` prefix, split on commas and strip quotes."""

    clean = _ROW_PREFIX.sub("", line.rstrip("\r"))
    return [col.replace('"', "") for col in clean.split(",")]


def parse_amount(value: str) -> float | None:
    try:
        amount = float(value)
    except ValueError:
        return None
    if not math.isfinite(amount):
        return None
    return amount


def first_positive(values: list[str]) -> float:
    """First candidate that parses to a positive number, else ``0.0``."""

    for value in values:
        amount = parse_amount(value)
        if amount is not None and amount > 0:
            return amount
    return 0.0


def parse_transfer_row(columns: list[str]) -> FlushTransfer | None:
    if len(columns) < TRANSFER_MIN_COLUMNS:
        return None
    timestamp = parse_timestamp(columns[TRANSFER_TIMESTAMP])
    if timestamp is None:
        return None
    return FlushTransfer(
        tx_hash=columns[0].strip(),
        timestamp=timestamp,
        from_addr=columns[TRANSFER_FROM].strip().lower(),
        to_addr=columns[TRANSFER_TO].strip().lower(),
        amount=first_positive([columns[i] for i in TRANSFER_AMOUNTS]),
    )


def parse_internal_row(columns: list[str]) -> FlushTransfer | None:
    if len(columns) < INTERNAL_MIN_COLUMNS:
        return None
    timestamp = parse_timestamp(columns[INTERNAL_TIMESTAMP])
    if timestamp is None:
        return None
    amount = parse_amount(columns[INTERNAL_AMOUNT])
    return FlushTransfer(
        tx_hash=columns[INTERNAL_HASH].strip(),
        timestamp=timestamp,
        from_addr="",
        to_addr="",
        amount=amount or 0.0,
    )


def parse_csv_text(text: str, transaction_type: str) -> list[FlushTransfer]:
    """Parse an export; the header line is skipped and malformed rows dropped."""

    parser = parse_internal_row if transaction_type == "internal" else parse_transfer_row
    rows: list[FlushTransfer] = []
    dropped = 0
    for line in text.split("\n")[1:]:
        if not line.strip():
            continue
        row = parser(split_row(line))
        if row is None:
            dropped += 1
            continue
        rows.append(row)
    if dropped:
        logger.debug("Dropped %d malformed %s rows", dropped, transaction_type)
    return rows


class FlushCSVSource:
    """Load one flush export from a local directory or an HTTP base URL."""

    def __init__(self, base: str | Path, transaction_type: TransactionType = "send") -> None:
        self.base = str(base)
        self.transaction_type = transaction_type
        self.name = csv_name(transaction_type)

    @property
    def location(self) -> str:
        if self.base.startswith(("http://", "https://")):
            return f"{self.base.rstrip('/')}/{self.name}"
        return str(Path(self.base) / self.name)

    def _read_text(self) -> str:
        location = self.location
        if location.startswith(("http://", "https://")):
            with urllib.request.urlopen(location) as resp:  # pragma: no cover - network path
                return resp.read().decode("utf-8")
        return Path(location).read_text(encoding="utf-8")

    def fetch(self) -> list[FlushTransfer]:
        return parse_csv_text(self._read_text(), self.transaction_type)


__all__ = [
    "TransactionType",
    "TRANSACTION_TYPES",
    "csv_name",
    "split_row",
    "parse_amount",
    "first_positive",
    "parse_csv_text",
    "FlushCSVSource",
]
