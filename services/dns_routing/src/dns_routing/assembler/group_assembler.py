"""Group Assembler: merge per-source tokens into one set per group."""

from typing import Dict, Iterable, List, Mapping, Optional

import structlog

from routing_common import LimitError, ValidationError
from routing_common.constants import MAX_DOMAINS_PER_GROUP
from routing_schemas import check_entry
from ..loaders import SourceResult

logger = structlog.get_logger()


class GroupAssembler:
    """Deduplicates and limit-checks the domains of one group."""

    def __init__(self, max_domains: int = MAX_DOMAINS_PER_GROUP):
        self.max_domains = max_domains

    def assemble(
        self, group_name: str, source_results: Iterable[SourceResult]
    ) -> Optional[List[str]]:
        """
        Build the sorted, deduplicated domain list of a group.

        Args:
            group_name: Group name
            source_results: Per-source results in declaration order

        Returns:
            Sorted unique domains, or None when nothing was loaded

        Raises:
            LimitError: If the group exceeds the router limit
            ValidationError: If an assembled entry is not a domain or IPv4
        """
        collected = []
        for result in source_results:
            collected.extend(result.domains)

        if not collected:
            logger.info("Skipping group: no domains loaded", group=group_name)
            return None

        domains = sorted(set(collected))
        duplicates = len(collected) - len(domains)
        if duplicates:
            logger.info(
                "Removed duplicate domains",
                group=group_name,
                duplicates=duplicates,
            )

        if len(domains) > self.max_domains:
            raise LimitError(
                f"Group '{group_name}' exceeds router limit of {self.max_domains} domains",
                context={
                    "group": group_name,
                    "limit": self.max_domains,
                    "count": len(domains),
                },
            )

        for domain in domains:
            valid, reason = check_entry(domain)
            if not valid:
                raise ValidationError(
                    f"Invalid domain or IP address '{domain}'",
                    context={"group": group_name, "reason": reason},
                )

        return domains


def find_cross_group_duplicates(
    resolved: Mapping[str, Iterable[str]],
) -> Dict[str, List[str]]:
    """
    Find domains that belong to more than one group.

    Returns:
        Mapping of domain to the names of every group holding it, sorted by domain
    """
    domain_to_groups: Dict[str, List[str]] = {}
    for group_name, domains in resolved.items():
        for domain in domains:
            domain_to_groups.setdefault(domain, []).append(group_name)

    return {
        domain: groups
        for domain, groups in sorted(domain_to_groups.items())
        if len(groups) > 1
    }


def warn_cross_group_duplicates(
    resolved: Mapping[str, Iterable[str]],
) -> Dict[str, List[str]]:
    """Log a warning per domain shared between groups. Never fails."""
    duplicates = find_cross_group_duplicates(resolved)
    if not duplicates:
        return duplicates

    logger.warning(
        "Misconfiguration found: domains cannot appear in multiple groups",
        count=len(duplicates),
    )
    for domain, groups in duplicates.items():
        logger.warning("Domain appears in several groups", domain=domain, groups=groups)
    logger.warning(
        "Each domain should belong to exactly one DNS-routing group; continuing anyway"
    )

    return duplicates
