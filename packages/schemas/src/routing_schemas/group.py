"""DNS-routing group data model."""

from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field

from routing_common import ConfigurationError


class DnsRoutingGroup(BaseModel):
    """A named domain group routed through one interface."""

    name: str = Field(..., description="Object-group name on the router")
    domain_files: List[str] = Field(
        default_factory=list,
        alias="domain-file",
        description="Local text files with one domain per line",
    )
    domain_urls: List[str] = Field(
        default_factory=list,
        alias="domain-url",
        description="Remote text files with one domain per line",
    )
    interface_id: str = Field(
        "",
        alias="interfaceId",
        description="Target interface (e.g., Wireguard0)",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "social",
                "domain-file": ["/etc/lists/social.txt"],
                "domain-url": ["https://example.com/social.txt"],
                "interfaceId": "Wireguard0",
            }
        },
    )

    @property
    def has_sources(self) -> bool:
        return bool(self.domain_files or self.domain_urls)


def validate_groups(groups: Iterable[DnsRoutingGroup]) -> None:
    """
    Check group records before any I/O happens.

    Args:
        groups: Desired groups

    Raises:
        ConfigurationError: On an empty or whitespace-only name, a duplicate
            name, a group without sources, or an empty interface ID
    """
    seen = {}

    for position, group in enumerate(groups):
        if not group.name:
            raise ConfigurationError(
                "DNS-routing group name cannot be empty",
                context={"position": position},
            )
        if not group.name.strip():
            raise ConfigurationError(
                "DNS-routing group name cannot contain only whitespace",
                context={"position": position},
            )
        if group.name in seen:
            raise ConfigurationError(
                f"Duplicate DNS-routing group name '{group.name}'",
                context={"first": seen[group.name], "position": position},
            )
        seen[group.name] = position

        if not group.has_sources:
            raise ConfigurationError(
                "DNS-routing group must contain at least one domain-file or domain-url",
                context={"group": group.name, "position": position},
            )
        if not group.interface_id.strip():
            raise ConfigurationError(
                "Interface ID cannot be empty in DNS-routing group",
                context={"group": group.name, "position": position},
            )
