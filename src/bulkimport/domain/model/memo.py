"""Compute-once cell used for lazily derived, thread-shared values."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class Memoized[T]:
    """Run ``compute`` at most once and hand the same result to every caller.

    Concurrent first calls block on a per-cell lock; only one of them runs
    ``compute``. If ``compute`` raises, nothing is cached and the exception
    reaches the caller that triggered it.
    """

    __slots__ = ("_compute", "_computed", "_lock", "_value")

    def __init__(self, compute: Callable[[], T]) -> None:
        self._compute = compute
        self._lock = threading.Lock()
        self._computed = False
        self._value: T | None = None

    @property
    def is_computed(self) -> bool:
        return self._computed

    def get(self) -> T:
        if self._computed:
            return self._value  # type: ignore[return-value]
        with self._lock:
            # another thread may have finished while we waited
            if not self._computed:
                self._value = self._compute()
                self._computed = True
        return self._value  # type: ignore[return-value]
