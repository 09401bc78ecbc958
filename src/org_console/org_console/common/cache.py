from __future__ import annotations

import time
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class TTLValue(Generic[T]):
    """Single cached value that expires ``ttl_seconds`` after it was stored."""

    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] = time.monotonic):
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._value: Optional[T] = None
        self._stored_at = 0.0

    def get(self) -> Optional[T]:
        if self._value is None:
            return None
        if self._clock() - self._stored_at >= self._ttl:
            self.clear()
            return None
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self._stored_at = self._clock()

    def clear(self) -> None:
        self._value = None
        self._stored_at = 0.0
