"""Common utilities package."""

from routing_common.logging import setup_logging
from routing_common.exceptions import (
    DnsRoutingError,
    ConfigurationError,
    LoadError,
    FetchError,
    ValidationError,
    LimitError,
    StateFetchError,
    VersionGateError,
    RouterAPIError,
    PartialApplicationError,
    DomainLoadErrors,
)
from routing_common.utils import get_env, get_env_int, compute_checksum
from routing_common import constants

__all__ = [
    "setup_logging",
    "DnsRoutingError",
    "ConfigurationError",
    "LoadError",
    "FetchError",
    "ValidationError",
    "LimitError",
    "StateFetchError",
    "VersionGateError",
    "RouterAPIError",
    "PartialApplicationError",
    "DomainLoadErrors",
    "get_env",
    "get_env_int",
    "compute_checksum",
    "constants",
]
