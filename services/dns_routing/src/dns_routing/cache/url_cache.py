"""On-disk cache for remote domain lists."""

import hashlib
from datetime import datetime, timedelta, UTC
from pathlib import Path
from typing import Callable, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from routing_common import compute_checksum
from routing_common.constants import DEFAULT_URL_CACHE_TTL, URL_CACHE_DIR_NAME
from routing_schemas import URLCacheEntry

logger = structlog.get_logger()


class URLCache:
    """File-backed URL content cache with TTL and checksum tracking.

    One JSON file per URL, named after the MD5 hash of the URL. Expired
    entries are kept on disk: they no longer serve content, but their
    checksum still tells whether a refetched list changed.
    """

    def __init__(
        self,
        cache_dir: Path,
        ttl: int = DEFAULT_URL_CACHE_TTL,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize URL cache.

        Args:
            cache_dir: Directory holding cache files (created on first write)
            ttl: Default time-to-live in seconds for new entries
            clock: Returns the current aware datetime (injectable for tests)
        """
        self.cache_dir = Path(cache_dir)
        self.ttl = ttl
        self.clock = clock or (lambda: datetime.now(UTC))

    @classmethod
    def from_data_dir(
        cls, data_dir: Optional[str] = None, ttl: int = DEFAULT_URL_CACHE_TTL
    ) -> "URLCache":
        """Create a cache under data_dir, or under the user's home directory."""
        base = Path(data_dir).expanduser() if data_dir else Path.home()
        return cls(base / URL_CACHE_DIR_NAME, ttl=ttl)

    def path_for(self, url: str) -> Path:
        digest = hashlib.md5(url.encode("utf-8")).hexdigest()
        return self.cache_dir / f"url_{digest}.json"

    def get(self, url: str) -> Optional[URLCacheEntry]:
        """Return the stored entry for url, expired or not."""
        path = self.path_for(url)
        try:
            data = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Cannot read URL cache entry", url=url, error=str(e))
            return None

        try:
            return URLCacheEntry.model_validate_json(data)
        except PydanticValidationError:
            logger.warning("Ignoring corrupt URL cache entry", url=url, path=str(path))
            return None

    def get_fresh(self, url: str) -> Optional[str]:
        """Return cached content if present and not expired."""
        entry = self.get(url)
        if entry is None or entry.is_expired(self.clock()):
            return None
        return entry.content

    def get_checksum(self, url: str) -> str:
        """Return the last known checksum for url, or an empty string."""
        entry = self.get(url)
        return entry.checksum if entry else ""

    def set(self, url: str, content: str, ttl: Optional[int] = None) -> URLCacheEntry:
        """
        Store content for url with a fresh expiry.

        Write failures are logged and otherwise ignored: the cache only
        saves network round-trips.

        Returns:
            The entry that was (or would have been) written
        """
        entry = URLCacheEntry(
            content=content,
            checksum=compute_checksum(content),
            expires_at=self.clock() + timedelta(seconds=self.ttl if ttl is None else ttl),
        )

        path = self.path_for(url)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(entry.model_dump_json(), encoding="utf-8")
            path.chmod(0o600)
        except OSError as e:
            logger.warning("Cannot write URL cache entry", url=url, error=str(e))

        return entry

    def clear(self) -> int:
        """Delete every cache file. Returns the number of files removed."""
        if not self.cache_dir.is_dir():
            return 0

        removed = 0
        for path in self.cache_dir.glob("url_*.json"):
            path.unlink(missing_ok=True)
            removed += 1
        return removed
