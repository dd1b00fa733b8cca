"""Schemas package."""

from routing_schemas.group import DnsRoutingGroup, validate_groups
from routing_schemas.router_state import (
    ObjectGroup,
    DnsProxyRoute,
    ParseRequest,
    CommandResult,
    ApplyResult,
    URLCacheEntry,
)
from routing_schemas.validation_rules import (
    is_valid_ipv4,
    is_valid_domain,
    is_valid_entry,
    check_domain,
    check_entry,
)

__all__ = [
    "DnsRoutingGroup",
    "validate_groups",
    "ObjectGroup",
    "DnsProxyRoute",
    "ParseRequest",
    "CommandResult",
    "ApplyResult",
    "URLCacheEntry",
    "is_valid_ipv4",
    "is_valid_domain",
    "is_valid_entry",
    "check_domain",
    "check_entry",
]
