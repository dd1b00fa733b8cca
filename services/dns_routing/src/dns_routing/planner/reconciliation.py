"""Reconciliation Planner: desired vs. actual state to an ordered batch.

Everything here is pure: the same four inputs always give the same
command list, and nothing touches the router.

Batch order:

1. per group, ``object-group fqdn <name>`` if the group is missing,
   then removal of stale domains, then additions, so a group never holds
   more than the router limit mid-batch;
2. ``dns-proxy route`` for every group whose route is missing or points
   elsewhere, after all groups exist;
3. ``system configuration save`` if anything else was emitted.
"""

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Sequence

from routing_schemas import DnsRoutingGroup
from .commands import (
    SAVE_CONFIG_CMD,
    create_group_cmd,
    delete_group_cmd,
    delete_route_cmd,
    ensure_save_at_end,
    exclude_domain_cmd,
    include_domain_cmd,
    route_cmd,
)


@dataclass(frozen=True)
class PlanSummary:
    """Counts of each command kind in a batch."""

    groups_created: int = 0
    groups_deleted: int = 0
    domains_added: int = 0
    domains_removed: int = 0
    routes_set: int = 0
    routes_deleted: int = 0

    @property
    def empty(self) -> bool:
        return not any(
            (
                self.groups_created,
                self.groups_deleted,
                self.domains_added,
                self.domains_removed,
                self.routes_set,
                self.routes_deleted,
            )
        )


def _unique(items: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for item in items:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered


def plan(
    groups: Sequence[DnsRoutingGroup],
    resolved: Mapping[str, Sequence[str]],
    existing_groups: Mapping[str, Iterable[str]],
    existing_routes: Mapping[str, str],
) -> List[str]:
    """
    Compute the commands that converge the router to the desired groups.

    Args:
        groups: Desired groups, in configuration order
        resolved: Group name to validated domains; groups missing here
            (empty or over the limit) are left untouched
        existing_groups: Object-group name to current domains
        existing_routes: Object-group name to current interface

    Returns:
        Ordered commands ending with a save, or an empty list when the
        router already matches
    """
    planned = [group for group in groups if group.name in resolved]
    commands: List[str] = []

    for group in planned:
        desired = _unique(resolved[group.name])
        desired_set = set(desired)

        if group.name in existing_groups:
            current = _unique(existing_groups[group.name])
            for domain in current:
                if domain not in desired_set:
                    commands.append(exclude_domain_cmd(group.name, domain))
            current_set = set(current)
        else:
            commands.append(create_group_cmd(group.name))
            current_set = set()

        for domain in desired:
            if domain not in current_set:
                commands.append(include_domain_cmd(group.name, domain))

    for group in planned:
        if existing_routes.get(group.name) != group.interface_id:
            commands.append(route_cmd(group.name, group.interface_id))

    if not commands:
        return []

    return ensure_save_at_end(commands)


def plan_delete(groups: Sequence[DnsRoutingGroup]) -> List[str]:
    """
    Compute removal commands for the given groups.

    Routes go first so no route is left pointing at a missing group.
    """
    if not groups:
        return []

    commands = [delete_route_cmd(group.name, group.interface_id) for group in groups]
    commands.extend(delete_group_cmd(group.name) for group in groups)
    return ensure_save_at_end(commands)


def summarize(commands: Iterable[str]) -> PlanSummary:
    """Count command kinds for diagnostics."""
    counts = dict(
        groups_created=0,
        groups_deleted=0,
        domains_added=0,
        domains_removed=0,
        routes_set=0,
        routes_deleted=0,
    )

    for command in commands:
        if command == SAVE_CONFIG_CMD:
            continue
        negated = command.startswith("no ")
        body = command[3:] if negated else command

        if body.startswith("dns-proxy route "):
            counts["routes_deleted" if negated else "routes_set"] += 1
        elif " include " in body:
            counts["domains_removed" if negated else "domains_added"] += 1
        elif body.startswith("object-group fqdn "):
            counts["groups_deleted" if negated else "groups_created"] += 1

    return PlanSummary(**counts)
