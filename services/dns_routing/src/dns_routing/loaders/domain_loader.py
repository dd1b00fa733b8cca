"""Domain Source Loader: files and URLs to validated tokens."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import structlog

from routing_common import LoadError, compute_checksum
from routing_common.constants import (
    DEFAULT_URL_FETCH_RETRIES,
    DEFAULT_URL_FETCH_TIMEOUT,
)
from routing_schemas import DnsRoutingGroup
from ..cache import URLCache
from ..fetchers import FileFetcher, HTTPFetcher
from ..validators import DomainValidator

logger = structlog.get_logger()


@dataclass
class SourceResult:
    """Accepted tokens loaded from one file or URL."""

    source: str
    kind: str
    domains: List[str] = field(default_factory=list)
    skipped: int = 0
    changed: bool = False
    from_cache: bool = False


class DomainLoader:
    """Loads every source of a group, accumulating per-source failures."""

    def __init__(
        self,
        url_cache: URLCache,
        validator: Optional[DomainValidator] = None,
        fetch_timeout: int = DEFAULT_URL_FETCH_TIMEOUT,
        fetch_retries: int = DEFAULT_URL_FETCH_RETRIES,
    ):
        """
        Initialize domain loader.

        Args:
            url_cache: Cache for remote list content
            validator: Line validator (a fresh one when omitted)
            fetch_timeout: Per-URL timeout in seconds
            fetch_retries: Attempts per URL
        """
        self.url_cache = url_cache
        self.validator = validator or DomainValidator()
        self.fetch_timeout = fetch_timeout
        self.fetch_retries = fetch_retries

    async def load_file(self, group_name: str, path: str) -> SourceResult:
        """
        Load and validate a local domain file.

        Raises:
            FetchError: If the file cannot be read
        """
        result = await FileFetcher(group_name, path).fetch()
        domains, skipped = self.validator.validate_lines(
            result["content"].splitlines(), source=f"file {Path(path).name}"
        )

        if skipped:
            logger.info(
                "Skipped invalid domains from file",
                group=group_name,
                file=Path(path).name,
                skipped=skipped,
            )

        return SourceResult(source=path, kind="file", domains=domains, skipped=skipped)

    async def load_url(self, group_name: str, url: str) -> SourceResult:
        """
        Load and validate a remote domain list, going through the URL cache.

        A fresh cache entry skips the network entirely. Otherwise the list is
        fetched, its checksum compared with the previous one (even an expired
        one) and the cache entry renewed.

        Raises:
            FetchError: If the URL cannot be fetched
        """
        cached = self.url_cache.get_fresh(url)
        if cached is not None:
            domains, skipped = self.validator.validate_lines(
                cached.splitlines(), source="URL"
            )
            logger.info(
                "Loaded domains from cache",
                group=group_name,
                url=url,
                domains=len(domains),
            )
            return SourceResult(
                source=url,
                kind="url",
                domains=domains,
                skipped=skipped,
                from_cache=True,
            )

        previous_checksum = self.url_cache.get_checksum(url)

        fetcher = HTTPFetcher(
            source_name=group_name,
            url=url,
            timeout=self.fetch_timeout,
            retries=self.fetch_retries,
        )
        result = await fetcher.fetch()
        content = result["content"]

        changed = bool(previous_checksum) and previous_checksum != compute_checksum(content)
        self.url_cache.set(url, content)

        domains, skipped = self.validator.validate_lines(content.splitlines(), source="URL")

        if changed:
            logger.info("Domain list updated (checksum changed)", group=group_name, url=url)
        if skipped:
            logger.info("Skipped invalid domains from URL", group=group_name, url=url, skipped=skipped)
        logger.info("Loaded domains", group=group_name, url=url, domains=len(domains))

        return SourceResult(
            source=url,
            kind="url",
            domains=domains,
            skipped=skipped,
            changed=changed,
        )

    async def load_group(
        self, group: DnsRoutingGroup
    ) -> Tuple[List[SourceResult], List[LoadError]]:
        """
        Load all sources of a group: files first, then URLs.

        Sources are loaded one after another. A failing source does not stop
        the others.

        Returns:
            Tuple of (source_results, load_errors)
        """
        results = []
        errors = []

        for path in group.domain_files:
            try:
                results.append(await self.load_file(group.name, path))
            except LoadError as e:
                e.context.setdefault("group", group.name)
                errors.append(e)

        for url in group.domain_urls:
            try:
                results.append(await self.load_url(group.name, url))
            except LoadError as e:
                e.context.setdefault("group", group.name)
                errors.append(e)

        return results, errors
