"""Analytics subpackage bundling lobby, stake and flush-transfer helpers."""

from . import flush, lobby, stakes

__all__ = [
    "flush",
    "lobby",
    "stakes",
]
