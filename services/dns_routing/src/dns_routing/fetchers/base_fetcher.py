"""Base fetcher for domain list sources.

A group draws its domains from local files and remote URLs. Both kinds of
source share this interface: `location` is a file path for FileFetcher and
a URL for HTTPFetcher, and every failure to read or decode the source
surfaces as FetchError so the loader can report it per source.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class BaseFetcher(ABC):
    """Reads the raw text of one domain list source."""

    def __init__(self, source_name: str, location: str):
        """
        Initialize fetcher.

        Args:
            source_name: Name of the data source (usually the group name)
            location: File path or URL to fetch from
        """
        self.source_name = source_name
        self.location = location

    @abstractmethod
    async def fetch(self) -> Dict[str, Any]:
        """
        Fetch raw text from source.

        Returns:
            Dictionary containing:
                - content: The fetched content as string
                - metadata: Metadata about the fetch (status, size, etc.)

        Raises:
            FetchError: If fetching fails
        """
        pass
