"""Fetch state machine with request tagging.

``idle -> loading -> success | error``. Every request receives a token from a
monotonically increasing counter; a result is applied only when its token is
still the latest one, so a slow response to an outdated request can never
overwrite newer data. While a reload is in flight the previous data stays
available, and only the very first load reports ``show_skeleton``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future
from dataclasses import dataclass, replace
from typing import Generic, Literal, TypeVar

logger = logging.getLogger(__name__)

P = TypeVar("P")
T = TypeVar("T")

Status = Literal["idle", "loading", "success", "error"]


@dataclass(frozen=True)
class FetchState(Generic[T]):
    status: Status = "idle"
    data: T | None = None
    error: str | None = None
    token: int = 0
    loaded_once: bool = False

    @property
    def show_skeleton(self) -> bool:
        return self.status == "loading" and not self.loaded_once


class Loader(Generic[P, T]):
    """Run ``fetch(params)`` and keep the result of the most recent request only."""

    def __init__(self, fetch: Callable[[P], T], name: str = "loader") -> None:
        self._fetch = fetch
        self.name = name
        self._state: FetchState[T] = FetchState()
        self._lock = threading.Lock()

    @property
    def state(self) -> FetchState[T]:
        return self._state

    def begin(self) -> int:
        """Mark a new request as current and return its token."""

        with self._lock:
            token = self._state.token + 1
            self._state = replace(self._state, status="loading", token=token)
            return token

    def is_current(self, token: int) -> bool:
        return token == self._state.token

    def complete(self, token: int, data: T) -> bool:
        with self._lock:
            if not self.is_current(token):
                logger.debug("%s: dropping stale result for request %d", self.name, token)
                return False
            self._state = replace(
                self._state, status="success", data=data, error=None, loaded_once=True
            )
            return True

    def fail(self, token: int, exc: BaseException) -> bool:
        with self._lock:
            if not self.is_current(token):
                logger.debug("%s: dropping stale error for request %d: %s", self.name, token, exc)
                return False
            logger.warning("%s failed: %s", self.name, exc)
            self._state = replace(self._state, status="error", error=str(exc), loaded_once=True)
            return True

    def _run(self, token: int, params: P) -> None:
        try:
            data = self._fetch(params)
        except Exception as exc:
            self.fail(token, exc)
            return
        self.complete(token, data)

    def load(self, params: P) -> FetchState[T]:
        """Fetch inline and return the resulting state."""

        self._run(self.begin(), params)
        return self._state

    def submit(self, params: P, executor: Executor) -> Future[None]:
        """Fetch on ``executor``; the result is applied only if still current."""

        token = self.begin()
        return executor.submit(self._run, token, params)


__all__ = ["FetchState", "Loader", "Status"]
