"""Outbound block-explorer and analytics-site links."""

from __future__ import annotations

from .core.constants import EXPLORER_LINKS, TRANSACTION_LINKS


def address_link(address: str, service: str = "etherscan") -> str:
    try:
        template = EXPLORER_LINKS[service]
    except KeyError:
        raise ValueError(f"Unknown explorer service: {service!r}") from None
    return template.format(address=address)


def address_links(address: str, services: tuple[str, ...] | None = None) -> dict[str, str]:
    """All (or the selected) explorer URLs for ``address`` keyed by service."""

    names = services or tuple(EXPLORER_LINKS)
    return {name: address_link(address, name) for name in names}


def transaction_link(tx_hash: str, service: str = "etherscan") -> str:
    try:
        template = TRANSACTION_LINKS[service]
    except KeyError:
        raise ValueError(f"Unknown explorer service: {service!r}") from None
    return template.format(tx_hash=tx_hash)


__all__ = ["address_link", "address_links", "transaction_link"]
