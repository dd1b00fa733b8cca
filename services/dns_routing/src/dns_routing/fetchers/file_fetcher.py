"""Local file fetcher."""

from pathlib import Path
from typing import Dict, Any

from routing_common import FetchError
from .base_fetcher import BaseFetcher


class FileFetcher(BaseFetcher):
    """Reads a whole local domain list file."""

    async def fetch(self) -> Dict[str, Any]:
        path = Path(self.location)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FetchError(
                message=f"Failed to read domain file {path}",
                context={"source_name": self.source_name, "path": str(path)},
                original_error=e,
            )

        return {
            "content": content,
            "metadata": {"path": str(path), "content_length": len(content)},
        }
