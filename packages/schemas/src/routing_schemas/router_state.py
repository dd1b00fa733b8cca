"""Router-side data models: actual state, command envelope and results."""

from datetime import datetime, UTC
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from routing_common import DomainLoadErrors


class ObjectGroup(BaseModel):
    """FQDN object-group as reported by the router."""

    name: str
    domains: List[str] = Field(default_factory=list)


class DnsProxyRoute(BaseModel):
    """dns-proxy route binding an object-group to an interface."""

    group: str
    interface: str


class ParseRequest(BaseModel):
    """One CLI command inside an RCI batch."""

    parse: str = Field(..., description="CLI command, e.g. 'object-group fqdn social'")


class CommandResult(BaseModel):
    """Outcome of one submitted command, in submission order."""

    command: str
    status: Literal["ok", "error"] = "ok"
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class ApplyResult(BaseModel):
    """What one apply or delete run planned and executed.

    ``errors`` holds non-fatal per-group failures (limit errors) for groups
    that were left out while their siblings were still shipped.
    """

    commands: List[str] = Field(default_factory=list)
    results: List[CommandResult] = Field(default_factory=list)
    skipped_groups: List[str] = Field(default_factory=list)
    resolved: Dict[str, List[str]] = Field(default_factory=dict)
    errors: List[Exception] = Field(default_factory=list)
    dry_run: bool = False

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def changed(self) -> bool:
        return bool(self.commands) and not self.dry_run

    def raise_for_errors(self) -> None:
        """Raise one multi-error report if any group was left out."""
        if self.errors:
            raise DomainLoadErrors(
                self.errors, message=f"{len(self.errors)} group(s) were not applied"
            )


class URLCacheEntry(BaseModel):
    """Cached remote domain list, persisted as JSON per URL."""

    content: str
    checksum: str
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at
