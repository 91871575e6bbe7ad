"""Immutable query parameters shared by the HexLab pipelines."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from .constants import MAX_PAGE_SIZE, MIN_PAGE_SIZE

SortDirection = Literal["asc", "desc"]

DIRECTIONS: tuple[str, ...] = ("asc", "desc")


def clamp_limit(value: int | str | None) -> int:
    """Clamp a page size into ``[MIN_PAGE_SIZE, MAX_PAGE_SIZE]``.

    Unparseable input falls back to the minimum page size.
    """

    try:
        limit = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return MIN_PAGE_SIZE
    return max(MIN_PAGE_SIZE, min(limit, MAX_PAGE_SIZE))


def check_direction(direction: str) -> SortDirection:
    if direction not in DIRECTIONS:
        raise ValueError(f"Unknown sort direction: {direction!r}")
    return direction  # type: ignore[return-value]


@dataclass(frozen=True)
class PageWindow:
    """``first``/``skip`` pair driving subgraph pagination."""

    limit: int = MIN_PAGE_SIZE
    skip: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "limit", clamp_limit(self.limit))
        object.__setattr__(self, "skip", max(0, int(self.skip)))

    def next(self) -> "PageWindow":
        return replace(self, skip=self.skip + self.limit)

    def previous(self) -> "PageWindow":
        return replace(self, skip=max(0, self.skip - self.limit))

    def resize(self, limit: int | str | None) -> "PageWindow":
        """Change the page size and jump back to the first page."""

        return PageWindow(limit=clamp_limit(limit), skip=0)

    @staticmethod
    def has_next(last_page_size: int | None) -> bool:
        # no page loaded (not yet, or the load failed)
        if last_page_size is None:
            return False
        return last_page_size > 0


@dataclass(frozen=True)
class SortState:
    """Active sort column and direction for a client-side table."""

    field: str
    direction: SortDirection = "desc"
    fields: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.fields and self.field not in self.fields:
            raise ValueError(f"Unknown sort field: {self.field!r}")
        check_direction(self.direction)

    @property
    def descending(self) -> bool:
        return self.direction == "desc"

    def toggle(self, field: str) -> "SortState":
        """Flip direction for the active field, otherwise select ``field`` descending."""

        if field == self.field:
            return replace(self, direction="asc" if self.descending else "desc")
        return replace(self, field=field, direction="desc")


__all__ = [
    "SortDirection",
    "DIRECTIONS",
    "clamp_limit",
    "check_direction",
    "PageWindow",
    "SortState",
]
