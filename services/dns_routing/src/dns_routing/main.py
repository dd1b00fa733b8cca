"""Command-line entry point for DNS-routing management."""

import argparse
import asyncio
import sys
from typing import Callable, List, Optional

import structlog

from routing_common import ConfigurationError, DnsRoutingError, setup_logging
from routing_common.constants import DEFAULT_LOG_LEVEL
from .cache import URLCache, ValidationCache
from .config import AppConfig, load_config
from .loaders import DomainLoader
from .router import BaseRouterClient, KeeneticClient
from .service import DnsRoutingService
from .validators import DomainValidator

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keenetic-dns-routing",
        description="Manage DNS-based routing groups on a Keenetic router",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (default: from DNS_ROUTING_CONFIG env var)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Output logs in JSON format",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Shortcut for --log-level DEBUG",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser(
        "add-dns-routing", help="Create or update DNS-routing groups from the configuration"
    )
    add_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print planned commands without applying them",
    )

    delete_parser = subparsers.add_parser(
        "delete-dns-routing", help="Delete DNS-routing groups bound to interfaces"
    )
    delete_parser.add_argument(
        "--interface-id",
        type=str,
        default=None,
        help="Interface whose groups are deleted (default: every configured interface)",
    )
    delete_parser.add_argument(
        "--force",
        action="store_true",
        help="Delete without asking for confirmation",
    )

    return parser


def build_router(config: AppConfig) -> KeeneticClient:
    """Create a router client from the connection settings."""
    keenetic = config.keenetic
    if not keenetic.url:
        raise ConfigurationError("Router URL is not configured (keenetic.url)")
    if not keenetic.login or not keenetic.password:
        raise ConfigurationError(
            "Router credentials are not configured. Set keenetic.login/keenetic.password "
            "or KEENETIC_LOGIN/KEENETIC_PASSWORD"
        )
    return KeeneticClient(url=keenetic.url, login=keenetic.login, password=keenetic.password)


def build_service(config: AppConfig, router: BaseRouterClient) -> DnsRoutingService:
    """Wire caches, validator and loader around a router client."""
    url_cache = URLCache.from_data_dir(config.data_dir, ttl=config.cache.url_ttl)
    validator = DomainValidator(cache=ValidationCache())
    loader = DomainLoader(
        url_cache,
        validator=validator,
        fetch_timeout=config.fetch.timeout,
        fetch_retries=config.fetch.retries,
    )
    return DnsRoutingService(router=router, loader=loader)


def print_commands(commands: List[str]) -> None:
    for command in commands:
        print(command)


async def add_dns_routing(
    config: AppConfig, router: BaseRouterClient, dry_run: bool = False
) -> None:
    """
    Apply configured groups to the router.

    Raises:
        DnsRoutingError: On any failure, including groups left out for
            exceeding the router limit
    """
    async with router:
        await router.authenticate()
        service = build_service(config, router)
        result = await service.apply(config.groups, dry_run=dry_run)

    if dry_run:
        print_commands(result.commands)

    result.raise_for_errors()


async def delete_dns_routing(
    config: AppConfig,
    router: BaseRouterClient,
    interface_id: Optional[str] = None,
    force: bool = False,
    confirm: Callable[[str], str] = input,
) -> bool:
    """
    Delete groups routed through the selected interfaces.

    Args:
        config: Loaded configuration
        router: Router client (not yet authenticated)
        interface_id: Single interface to clean up; every interface used
            by a configured group when omitted
        force: Skip the confirmation prompt
        confirm: Prompt function returning the user's answer

    Returns:
        True if groups were deleted, False if there was nothing to do or
        the user declined
    """
    if interface_id:
        interface_ids = [interface_id]
    else:
        interface_ids = sorted({g.interface_id for g in config.groups if g.interface_id})

    if not interface_ids:
        logger.info("No interfaces selected for deletion")
        return False

    async with router:
        await router.authenticate()
        service = build_service(config, router)

        groups, domains = await service.delete_for_interfaces(interface_ids)
        if not groups:
            logger.info("No DNS-routing groups found", interfaces=interface_ids)
            return False

        for group in groups:
            print(f"{group.name} -> {group.interface_id}")
            for domain in domains.get(group.name, []):
                print(f"    {domain}")

        if not force:
            answer = confirm(f"Delete {len(groups)} DNS-routing group(s)? [y/N] ")
            if answer.strip().lower() not in ("y", "yes"):
                logger.info("Deletion cancelled")
                return False

        await service.delete(groups)

    return True


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else args.log_level

    global logger
    logger = setup_logging(
        level=log_level,
        service_name="dns-routing",
        json_format=args.json_logs,
    )

    try:
        config = load_config(args.config)

        if config.logs.debug and log_level != "DEBUG":
            logger = setup_logging(
                level="DEBUG", service_name="dns-routing", json_format=args.json_logs
            )

        router = build_router(config)

        if args.command == "add-dns-routing":
            asyncio.run(add_dns_routing(config, router, dry_run=args.dry_run))
        else:
            asyncio.run(
                delete_dns_routing(
                    config, router, interface_id=args.interface_id, force=args.force
                )
            )

        sys.exit(0)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)

    except DnsRoutingError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
