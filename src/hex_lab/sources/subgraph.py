"""Minimal GraphQL client for the HEX subgraph."""

from __future__ import annotations

import json
import logging
import urllib.request
from typing import Any, Mapping

from ..core import SUBGRAPH_URL

logger = logging.getLogger(__name__)


class SubgraphError(RuntimeError):
    """Raised when the subgraph answers with GraphQL ``errors``."""


class SubgraphClient:
    """POSTs ``{"query", "variables"}`` payloads and returns the ``data`` member."""

    def __init__(self, url: str = SUBGRAPH_URL, timeout: float = 30.0) -> None:
        self.url = url
        self.timeout = timeout

    def _post_json(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        req = urllib.request.Request(
            self.url,
            data=json.dumps(payload).encode(),
            headers={"Content-Type": "application/json"},
        )
        with urllib.request.urlopen(req, timeout=self.timeout) as resp:
            return json.load(resp)

    def query(self, document: str, variables: Mapping[str, Any] | None = None) -> dict[str, Any]:
        raw = self._post_json({"query": document, "variables": dict(variables or {})})
        errors = raw.get("errors")
        if errors:
            message = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            raise SubgraphError(message)
        data = raw.get("data")
        if data is None:
            raise SubgraphError("Subgraph response carried no data")
        logger.debug("Subgraph query returned keys %s", sorted(data))
        return data


__all__ = ["SubgraphClient", "SubgraphError"]
