"""Display helpers mirroring how the dashboard renders amounts and addresses."""

from __future__ import annotations

import math


def format_amount(value: float | None, decimals: int = 2) -> str:
    """Thousands-separated fixed-point string, ``"-"`` for missing values."""

    if value is None or not math.isfinite(value):
        return "-"
    return f"{value:,.{decimals}f}"


def format_percent(ratio: float | None) -> str:
    if ratio is None or not math.isfinite(ratio):
        return "-"
    return f"{ratio * 100.0:.2f}%"


def abbreviate_number(value: float) -> str:
    """Chart-axis label: ``1.50M``, ``12K`` or the plain value."""

    if value >= 1_000_000:
        return f"{value / 1_000_000:,.2f}M"
    if value >= 1_000:
        return f"{round(value / 1_000):,}K"
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"


def abbreviate_address(address: str) -> str:
    return f"{address[:6]}...{address[-4:]}"


def date_span(first: str, last: str) -> str:
    """Single date when both ends coincide, otherwise ``first - last``."""

    if first == last:
        return first
    return f"{first} - {last}"


__all__ = [
    "format_amount",
    "format_percent",
    "abbreviate_number",
    "abbreviate_address",
    "date_span",
]
