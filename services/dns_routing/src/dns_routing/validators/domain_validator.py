"""Domain line validation for DNS-routing groups."""

from typing import Iterable, List, NamedTuple, Optional, Tuple
import structlog
from routing_schemas import check_entry
from ..cache import ValidationCache
from ..parsers import parse_line

logger = structlog.get_logger()


class ValidationOutcome(NamedTuple):
    """Verdict for one raw line.

    ``token`` is None for blank and comment lines, which are neither
    accepted nor counted as invalid.
    """

    token: Optional[str]
    accepted: bool
    reason: str

    @property
    def ignored(self) -> bool:
        return self.token is None


class DomainValidator:
    """Turns raw list lines into validated domain or IPv4 tokens."""

    def __init__(self, cache: Optional[ValidationCache] = None):
        """
        Initialize domain validator.

        Args:
            cache: Verdict memo shared across sources; a private one is
                created when omitted
        """
        self.cache = cache if cache is not None else ValidationCache()
        self.stats = {
            "total": 0,
            "valid": 0,
            "invalid": 0,
            "ignored": 0,
        }

    def check_token(self, token: str) -> Tuple[bool, str]:
        """Validate a prefix-stripped token, consulting the cache first.

        Empty and dotless tokens are rejected before the cache is read, so
        no cached verdict can admit a bare name.
        """
        if not token or "." not in token:
            return check_entry(token)

        cached = self.cache.get(token)
        if cached is not None:
            return cached

        valid, reason = check_entry(token)
        self.cache.set(token, valid, reason)
        return valid, reason

    def validate(self, line: str) -> ValidationOutcome:
        """
        Validate one raw line.

        Args:
            line: Raw line from a file or URL

        Returns:
            ValidationOutcome(token, accepted, reason)
        """
        token = parse_line(line)
        if token is None:
            return ValidationOutcome(None, False, "ignored")

        valid, reason = self.check_token(token)
        return ValidationOutcome(token, valid, reason)

    def validate_lines(
        self, lines: Iterable[str], source: str = ""
    ) -> Tuple[List[str], int]:
        """
        Validate raw lines, keeping accepted tokens in input order.

        Duplicates are kept; deduplication happens per group.

        Args:
            lines: Raw lines
            source: Source label used in debug logs

        Returns:
            Tuple of (accepted_tokens, skipped_count)
        """
        accepted = []
        skipped = 0

        for line in lines:
            outcome = self.validate(line)
            self.stats["total"] += 1

            if outcome.ignored:
                self.stats["ignored"] += 1
                continue

            if not outcome.accepted:
                skipped += 1
                self.stats["invalid"] += 1
                logger.debug(
                    "Skipped invalid domain",
                    source=source,
                    line=line.strip(),
                    reason=outcome.reason,
                )
                continue

            self.stats["valid"] += 1
            accepted.append(outcome.token)

        return accepted, skipped

    def get_statistics(self) -> dict:
        """
        Get validation statistics.

        Returns:
            Dictionary with validation stats
        """
        return self.stats.copy()

    def reset_statistics(self):
        """Reset validation statistics."""
        self.stats = {
            "total": 0,
            "valid": 0,
            "invalid": 0,
            "ignored": 0,
        }


def validate_lines(
    lines: Iterable[str], cache: Optional[ValidationCache] = None
) -> Tuple[List[str], int]:
    """
    Convenience function to validate raw lines.

    Args:
        lines: Raw lines
        cache: Optional shared verdict cache

    Returns:
        Tuple of (accepted_tokens, skipped_count)
    """
    return DomainValidator(cache=cache).validate_lines(lines)
