"""Firmware version gate for DNS-routing."""

import re
from typing import Tuple

from routing_common import VersionGateError
from routing_common.constants import MIN_DNS_ROUTING_VERSION

_LEADING_DIGITS = re.compile(r"^(\d+)")
_PRERELEASE = re.compile(r"^\d+(?:\.\d+)*-")


def parse_version(version: str) -> Tuple[int, ...]:
    """
    Parse a dotted firmware version into integers.

    Only the first whitespace-separated word counts, and parsing stops at
    the first component without leading digits.

    Examples:
        >>> parse_version("5.0.1")
        (5, 0, 1)
        >>> parse_version("4.3.6.3")
        (4, 3, 6, 3)
        >>> parse_version("5.01.A.1")
        (5, 1)

    Raises:
        VersionGateError: If no numeric component is found
    """
    words = version.split()
    components = []
    for part in words[0].split(".") if words else []:
        match = _LEADING_DIGITS.match(part)
        if not match:
            break
        components.append(int(match.group(1)))

    if not components:
        raise VersionGateError(
            f"Failed to parse router version '{version}'",
            context={"version": version},
        )
    return tuple(components)


def is_prerelease(version: str) -> bool:
    """
    Tell whether the version carries a pre-release suffix.

    Examples:
        >>> is_prerelease("5.0.1-beta")
        True
        >>> is_prerelease("5.0.1 (build 123)")
        False
    """
    words = version.split()
    return bool(words) and _PRERELEASE.match(words[0]) is not None


def compare_versions(left: str, right: str) -> int:
    """Return -1, 0 or 1 comparing dotted versions numerically.

    With equal numbers a pre-release such as ``5.0.1-beta`` sorts below
    the release.
    """
    a, b = parse_version(left), parse_version(right)
    width = max(len(a), len(b))
    a += (0,) * (width - len(a))
    b += (0,) * (width - len(b))
    if a == b:
        return is_prerelease(right) - is_prerelease(left)
    return (a > b) - (a < b)


def check_dns_routing_support(
    version: str, minimum: str = MIN_DNS_ROUTING_VERSION
) -> None:
    """
    Fail unless the router firmware supports DNS-routing.

    Args:
        version: Firmware version cached at authentication
        minimum: Lowest supported version

    Raises:
        VersionGateError: If the version is unknown or below minimum
    """
    if not version:
        raise VersionGateError(
            "Router version information not available. Please authenticate first"
        )

    if compare_versions(version, minimum) < 0:
        raise VersionGateError(
            f"DNS-routing requires firmware version {minimum} or higher",
            context={"version": version, "required": minimum},
        )
