"""Router CLI command builders."""

from typing import List

SAVE_CONFIG_CMD = "system configuration save"


def create_group_cmd(group: str) -> str:
    return f"object-group fqdn {group}"


def include_domain_cmd(group: str, domain: str) -> str:
    return f"object-group fqdn {group} include {domain}"


def exclude_domain_cmd(group: str, domain: str) -> str:
    return f"no object-group fqdn {group} include {domain}"


def delete_group_cmd(group: str) -> str:
    return f"no object-group fqdn {group}"


def route_cmd(group: str, interface_id: str) -> str:
    """Create or replace the dns-proxy route of a group."""
    return f"dns-proxy route object-group {group} {interface_id} auto"


def delete_route_cmd(group: str, interface_id: str) -> str:
    return f"no dns-proxy route object-group {group} {interface_id}"


def ensure_save_at_end(commands: List[str]) -> List[str]:
    """Return commands with exactly one save, placed last."""
    return [c for c in commands if c != SAVE_CONFIG_CMD] + [SAVE_CONFIG_CMD]
