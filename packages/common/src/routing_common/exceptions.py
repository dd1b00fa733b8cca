"""Custom exceptions for DNS-routing reconciliation."""

from typing import Optional, Dict, Any, List


class DnsRoutingError(Exception):
    """Base exception for all DNS-routing errors.

    Attributes:
        message: Error message
        context: Additional context about the error
        original_error: Original exception if this wraps another error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        """Initialize exception with context.

        Args:
            message: Error message
            context: Additional context (e.g., group, url)
            original_error: Original exception if wrapping
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        """String representation with context."""
        base = self.message
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({ctx_str})"
        if self.original_error:
            base = f"{base} [caused by: {type(self.original_error).__name__}: {self.original_error}]"
        return base


class ConfigurationError(DnsRoutingError):
    """Raised when a group or the configuration file is structurally invalid.

    Common context fields:
        - config_path: Path to config file
        - group: Offending group name
        - position: Index of the group in the configuration
    """

    pass


class LoadError(DnsRoutingError):
    """Raised when a domain source (file or URL) cannot be read.

    Common context fields:
        - group: Group the source belongs to
        - source: File path or URL
    """

    pass


class FetchError(LoadError):
    """Raised when fetching a domain list from a file or HTTP source fails.

    Common context fields:
        - source_name: Name of the source being fetched
        - url: URL that failed
        - status_code: HTTP status code (if applicable)
    """

    pass


class ValidationError(DnsRoutingError):
    """Raised when an assembled domain list contains an invalid entry.

    Common context fields:
        - domain: The invalid domain
        - group: Group name
    """

    pass


class LimitError(DnsRoutingError):
    """Raised when a group holds more domains than the router accepts.

    Common context fields:
        - group: Group name
        - limit: Router limit
        - count: Number of unique domains
    """

    pass


class StateFetchError(DnsRoutingError):
    """Raised when existing object-groups or routes cannot be read."""

    pass


class VersionGateError(DnsRoutingError):
    """Raised when router firmware does not support DNS-routing.

    Common context fields:
        - version: Current firmware version
        - required: Minimum firmware version
    """

    pass


class RouterAPIError(DnsRoutingError):
    """Raised when a router API request fails at the transport level.

    Common context fields:
        - path: API path
        - status_code: HTTP status code (if applicable)
    """

    pass


class PartialApplicationError(DnsRoutingError):
    """Raised when some commands of a batch were rejected by the router.

    The router has no multi-command transaction, so commands accepted
    before (and after) a failed one stay applied.

    Attributes:
        results: Every per-command result, in submission order
        failed: The subset of results with an error status
    """

    def __init__(self, message: str, results: List[Any], **kwargs):
        super().__init__(message, **kwargs)
        self.results = list(results)
        self.failed = [r for r in self.results if not r.ok]

    def __str__(self) -> str:
        lines = [super().__str__()]
        for result in self.failed:
            lines.append(f"  - {result.command}: {result.message}")
        return "\n".join(lines)


class DomainLoadErrors(DnsRoutingError):
    """Multi-error report for non-fatal per-source and per-group failures.

    Attributes:
        errors: Every collected error, in the order it occurred
    """

    def __init__(self, errors: List[DnsRoutingError], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(
            message or f"{len(self.errors)} error(s) while loading domain groups",
            context={"count": len(self.errors)},
        )

    def __str__(self) -> str:
        lines = [self.message]
        for error in self.errors:
            lines.append(f"  - {error}")
        return "\n".join(lines)
