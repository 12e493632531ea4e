"""
Local Greece - Stale response guard

Async requests (backend loads, geolocation) can resolve out of order. Each
request takes a token from a GenerationGuard when it starts; its result is
applied only if no newer request has started since.

Usage:
    guard = GenerationGuard()

    token = guard.begin()
    result = await fetch()
    if guard.is_current(token):
        apply(result)
"""

from __future__ import annotations

import threading


class GenerationGuard:
    """Monotonic request counter."""

    def __init__(self) -> None:
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        """Start a new request generation and return its token."""
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, token: int) -> bool:
        """True if no request has started since `token` was issued."""
        return token == self._generation

    def invalidate(self) -> None:
        """Make every outstanding token stale."""
        self.begin()
