"""Parsing of free-text address lists typed into the lobby filter."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

ADDRESS_LENGTH = 42


def normalize_address(value: str) -> str:
    return value.strip().lower()


def is_valid_address(value: str) -> bool:
    """Syntactic check only: ``0x`` prefix and 42 characters in total."""

    return len(value) == ADDRESS_LENGTH and value.startswith("0x")


def parse_address_list(text: str | None) -> list[str]:
    """Split comma-separated input into normalised, syntactically valid addresses.

    Invalid tokens are dropped. When the input is non-empty but nothing
    survives, a warning is logged and an empty list (no address filter) is
    returned.
    """

    if not text:
        return []
    addresses = [normalize_address(token) for token in text.split(",")]
    addresses = [addr for addr in addresses if is_valid_address(addr)]
    if not addresses:
        logger.warning(
            "Invalid address format in %r. Please enter valid Ethereum addresses.", text
        )
    return addresses


__all__ = ["ADDRESS_LENGTH", "normalize_address", "is_valid_address", "parse_address_list"]
