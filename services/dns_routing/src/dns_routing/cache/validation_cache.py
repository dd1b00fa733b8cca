"""In-memory memo of domain validation verdicts."""

import time
from typing import Callable, Dict, Optional, Tuple


class ValidationCache:
    """Maps a token to its (valid, reason) verdict.

    Only a speed-up: a cold cache and a warm cache must yield the same
    verdicts. Entries live for the process lifetime unless a ttl is given.
    """

    def __init__(
        self,
        ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self.clock = clock
        self._entries: Dict[str, Tuple[bool, str, float]] = {}

    def get(self, token: str) -> Optional[Tuple[bool, str]]:
        entry = self._entries.get(token)
        if entry is None:
            return None

        valid, reason, stored_at = entry
        if self.ttl is not None and self.clock() - stored_at > self.ttl:
            del self._entries[token]
            return None
        return valid, reason

    def set(self, token: str, valid: bool, reason: str = "") -> None:
        self._entries[token] = (valid, reason, self.clock())

    def clear(self) -> None:
        """Drop every memoized verdict."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, token: str) -> bool:
        return self.get(token) is not None
