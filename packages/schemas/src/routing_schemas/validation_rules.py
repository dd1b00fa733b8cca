"""Domain validation rules.

Pure structural checks: no DNS resolution happens here. A routable entry
is either a dotted-decimal IPv4 address or a domain name that

- contains at least one dot (bare names such as ``youtube`` are rejected),
- survives the IDNA ToASCII transform (UTS-46 mapping, so ``Example.COM``
  and ``пример.рф`` are fine),
- has ASCII labels of 1-63 characters made of letters, digits and internal
  hyphens, and
- is no longer than 253 characters in its ASCII form.
"""

import ipaddress
import re
from typing import Tuple

import idna

from routing_common.constants import MAX_DOMAIN_LENGTH, MAX_LABEL_LENGTH

# Matches one ASCII label: alphanumeric at both ends, hyphens allowed inside
LABEL_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")


def is_valid_ipv4(value: str) -> bool:
    """
    Check if value is a dotted-decimal IPv4 address.

    Examples:
        >>> is_valid_ipv4("192.168.1.1")
        True
        >>> is_valid_ipv4("192.168.01.1")
        False
        >>> is_valid_ipv4("example.com")
        False
    """
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def check_domain(domain: str) -> Tuple[bool, str]:
    """
    Check a domain name and explain a rejection.

    Args:
        domain: Candidate domain, already stripped of list prefixes

    Returns:
        Tuple of (valid, reason); reason is empty for valid domains
    """
    if not domain:
        return False, "empty domain"

    if "." not in domain:
        return False, "missing TLD (no dot)"

    try:
        ascii_form = idna.encode(domain, uts46=True).decode("ascii")
    except (idna.IDNAError, UnicodeError) as e:
        return False, f"IDNA validation failed: {e}"

    if len(ascii_form) > MAX_DOMAIN_LENGTH:
        return False, f"longer than {MAX_DOMAIN_LENGTH} characters"

    for label in ascii_form.split("."):
        if not label:
            return False, "empty label"
        if len(label) > MAX_LABEL_LENGTH:
            return False, f"label longer than {MAX_LABEL_LENGTH} characters"
        if not LABEL_PATTERN.match(label):
            return False, f"invalid label '{label}'"

    return True, ""


def is_valid_domain(domain: str) -> bool:
    """
    Check if domain is valid.

    Examples:
        >>> is_valid_domain("example.com")
        True
        >>> is_valid_domain("youtube")
        False
        >>> is_valid_domain("-bad-.com")
        False
    """
    return check_domain(domain)[0]


def check_entry(value: str) -> Tuple[bool, str]:
    """Check a group entry, which is either an IPv4 literal or a domain."""
    if is_valid_ipv4(value):
        return True, ""
    return check_domain(value)


def is_valid_entry(value: str) -> bool:
    """Return True if value may be included in an object-group."""
    return check_entry(value)[0]
