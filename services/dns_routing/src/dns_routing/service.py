"""DNS-routing orchestration: apply and delete runs."""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import structlog

from routing_common import (
    ConfigurationError,
    DnsRoutingError,
    DomainLoadErrors,
    LimitError,
    LoadError,
    PartialApplicationError,
    RouterAPIError,
    StateFetchError,
    ValidationError,
)
from routing_schemas import ApplyResult, CommandResult, DnsRoutingGroup, validate_groups
from .assembler import GroupAssembler, warn_cross_group_duplicates
from .loaders import DomainLoader
from .planner import plan, plan_delete, summarize
from .router import BaseRouterClient
from .version_gate import check_dns_routing_support

logger = structlog.get_logger()


class DnsRoutingService:
    """Reconciles DNS-routing groups on one router.

    A run is sequential: version gate, per-group loading and assembly,
    state fetch, planning, then one command batch.
    """

    def __init__(
        self,
        router: BaseRouterClient,
        loader: DomainLoader,
        assembler: Optional[GroupAssembler] = None,
    ):
        """
        Initialize DNS-routing service.

        Args:
            router: Authenticated router client
            loader: Domain source loader
            assembler: Group assembler (router limit defaults apply)
        """
        self.router = router
        self.loader = loader
        self.assembler = assembler or GroupAssembler()

    def check_support(self) -> None:
        """Raise VersionGateError unless the cached firmware supports DNS-routing."""
        check_dns_routing_support(self.router.firmware_version)

    async def check_interfaces(self, groups: Sequence[DnsRoutingGroup]) -> None:
        """
        Make sure every target interface exists on the router.

        Raises:
            StateFetchError: If interfaces cannot be listed
            ConfigurationError: If a group targets an unknown interface
        """
        try:
            interfaces = await self.router.get_interfaces()
        except RouterAPIError as e:
            raise StateFetchError(
                "Failed to fetch interfaces", original_error=e
            )

        for group in groups:
            if group.interface_id not in interfaces:
                raise ConfigurationError(
                    f"Interface '{group.interface_id}' not found",
                    context={"group": group.name},
                )

    async def resolve_groups(
        self, groups: Sequence[DnsRoutingGroup]
    ) -> Tuple[Dict[str, List[str]], List[str], List[DnsRoutingError]]:
        """
        Load, validate and assemble every group.

        Returns:
            Tuple of (resolved domains per group, names of skipped groups,
            collected errors). Errors are LoadErrors for unreadable sources
            and LimitErrors/ValidationErrors for excluded groups.
        """
        resolved: Dict[str, List[str]] = {}
        skipped: List[str] = []
        errors: List[DnsRoutingError] = []

        for group in groups:
            source_results, load_errors = await self.loader.load_group(group)
            errors.extend(load_errors)

            try:
                domains = self.assembler.assemble(group.name, source_results)
            except (LimitError, ValidationError) as e:
                logger.error("Group excluded", group=group.name, error=str(e))
                errors.append(e)
                skipped.append(group.name)
                continue

            if domains is None:
                skipped.append(group.name)
                continue

            resolved[group.name] = domains

        return resolved, skipped, errors

    async def fetch_state(self) -> Tuple[Dict[str, List[str]], Dict[str, str]]:
        """
        Read current object-groups and routes, uncached.

        Raises:
            StateFetchError: If either read fails
        """
        try:
            existing_groups = await self.router.get_existing_groups()
        except RouterAPIError as e:
            raise StateFetchError(
                "Failed to get existing DNS-routing groups", original_error=e
            )

        try:
            existing_routes = await self.router.get_existing_routes()
        except RouterAPIError as e:
            raise StateFetchError(
                "Failed to get existing dns-proxy routes", original_error=e
            )

        return existing_groups, existing_routes

    async def submit(self, commands: List[str], action: str) -> List[CommandResult]:
        """
        Execute a batch and report every per-command result.

        Raises:
            PartialApplicationError: If any command failed; accepted
                commands stay applied
        """
        results = await self.router.execute(commands)

        for result in results:
            if result.ok:
                logger.debug("Command accepted", command=result.command, message=result.message)
            else:
                logger.error("Command failed", command=result.command, message=result.message)

        failed = [r for r in results if not r.ok]
        if failed:
            raise PartialApplicationError(
                f"{len(failed)} of {len(results)} command(s) failed while {action}",
                results=results,
                context={"failed": len(failed), "total": len(results)},
            )

        return results

    async def apply(
        self, groups: Sequence[DnsRoutingGroup], dry_run: bool = False
    ) -> ApplyResult:
        """
        Converge the router to the desired groups.

        Args:
            groups: Desired groups
            dry_run: Plan only, do not submit commands

        Returns:
            ApplyResult; groups excluded for exceeding the limit are listed
            in ``errors`` while their siblings are applied

        Raises:
            ConfigurationError: Structurally invalid groups or unknown interface
            VersionGateError: Firmware too old or unknown
            DomainLoadErrors: Any source failed to load (nothing is applied)
            StateFetchError: Existing state could not be read
            PartialApplicationError: The router rejected some commands
        """
        if not groups:
            logger.info("No DNS-routing groups to add")
            return ApplyResult(dry_run=dry_run)

        validate_groups(groups)
        self.check_support()
        await self.check_interfaces(groups)

        resolved, skipped, errors = await self.resolve_groups(groups)

        if any(isinstance(e, LoadError) for e in errors):
            raise DomainLoadErrors(errors)

        warn_cross_group_duplicates(resolved)

        existing_groups, existing_routes = await self.fetch_state()
        commands = plan(groups, resolved, existing_groups, existing_routes)

        result = ApplyResult(
            commands=commands,
            skipped_groups=skipped,
            resolved=resolved,
            errors=errors,
            dry_run=dry_run,
        )

        if not commands:
            logger.info("All DNS-routing groups and domains are up to date")
            return result

        summary = summarize(commands)
        logger.info(
            "Planned DNS-routing changes",
            groups_created=summary.groups_created,
            domains_to_add=summary.domains_added,
            domains_to_remove=summary.domains_removed,
            routes_to_set=summary.routes_set,
        )

        if dry_run:
            return result

        result.results = await self.submit(commands, action="applying DNS-routing groups")
        logger.info("Successfully applied DNS-routing groups", groups=len(resolved))
        return result

    async def delete(self, groups: Sequence[DnsRoutingGroup]) -> ApplyResult:
        """
        Remove routes and object-groups of the given groups.

        Raises:
            VersionGateError: Firmware too old or unknown
            PartialApplicationError: The router rejected some commands
        """
        if not groups:
            logger.info("No DNS-routing groups to delete")
            return ApplyResult()

        self.check_support()

        commands = plan_delete(groups)
        result = ApplyResult(commands=commands)
        result.results = await self.submit(commands, action="deleting DNS-routing groups")

        logger.info("Successfully deleted DNS-routing groups", groups=len(groups))
        return result

    async def delete_for_interfaces(
        self, interface_ids: Iterable[str]
    ) -> Tuple[List[DnsRoutingGroup], Dict[str, List[str]]]:
        """
        Find router groups routed through any of the given interfaces.

        Nothing is deleted here; the caller confirms and then passes the
        groups to :meth:`delete`.

        Returns:
            Tuple of (groups to delete, their current domains by name)
        """
        self.check_support()

        targets = set(interface_ids)
        existing_groups, existing_routes = await self.fetch_state()

        found = []
        domains = {}
        for name in sorted(existing_groups):
            interface_id = existing_routes.get(name)
            if interface_id is None or interface_id not in targets:
                continue
            found.append(DnsRoutingGroup(name=name, interface_id=interface_id))
            domains[name] = list(existing_groups[name])

        return found, domains
