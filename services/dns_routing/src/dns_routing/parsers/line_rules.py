"""Line parsing rules for domain list files.

Each rule is a small pure function. ``parse_line`` runs them in order and
returns the candidate token, or ``None`` for lines carrying no entry.

Supported notations::

    # comment
    example.com
    example.com @cn              -> example.com (attributes dropped)
    full:cdn.example.com         -> cdn.example.com (list prefix stripped)
    domain:example.org @ads      -> example.org
"""

from typing import Callable, Optional, Tuple

from routing_common.constants import DOMAIN_LIST_PREFIXES


def strip_line(line: str) -> str:
    """Trim surrounding whitespace."""
    return line.strip()


def is_ignorable(line: str) -> bool:
    """Empty lines and ``#`` comments carry no entry."""
    return not line or line.startswith("#")


def take_first_field(line: str) -> str:
    """
    Keep only the first whitespace-separated field.

    Examples:
        >>> take_first_field("example.com @cn")
        'example.com'
        >>> take_first_field("example.com")
        'example.com'
    """
    fields = line.split()
    return fields[0] if fields else line


def strip_list_prefix(token: str) -> str:
    """
    Remove a known list prefix such as ``full:`` or ``domain:``.

    Unknown prefixes are left in place, so ``http://x`` stays as it is and
    fails validation later.

    Examples:
        >>> strip_list_prefix("full:cdn.example.com")
        'cdn.example.com'
        >>> strip_list_prefix("geosite:google")
        'geosite:google'
    """
    prefix, sep, rest = token.partition(":")
    if sep and prefix in DOMAIN_LIST_PREFIXES:
        return rest
    return token


# Applied in order after trimming and the ignorable-line check
TOKEN_RULES: Tuple[Callable[[str], str], ...] = (
    take_first_field,
    strip_list_prefix,
)


def parse_line(line: str) -> Optional[str]:
    """
    Extract the candidate token from one raw line.

    Returns:
        The token, or None for blank and comment lines
    """
    line = strip_line(line)
    if is_ignorable(line):
        return None

    token = line
    for rule in TOKEN_RULES:
        token = rule(token)
    return token
