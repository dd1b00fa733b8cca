"""Configuration constants for DNS-routing reconciliation."""

from typing import Final

# URL Fetcher Defaults
DEFAULT_URL_FETCH_TIMEOUT: Final[int] = 5
DEFAULT_URL_FETCH_RETRIES: Final[int] = 1
DEFAULT_URL_FETCH_BACKOFF: Final[float] = 0.5
DEFAULT_URL_CACHE_TTL: Final[int] = 60  # seconds
URL_CACHE_DIR_NAME: Final[str] = ".keenetic-dns-routing"

# Router API Defaults
DEFAULT_ROUTER_TIMEOUT: Final[int] = 30
DEFAULT_ROUTER_READ_RETRIES: Final[int] = 3
MIN_DNS_ROUTING_VERSION: Final[str] = "5.0.1"
MAX_DOMAINS_PER_GROUP: Final[int] = 300

# Domain Validation
MAX_DOMAIN_LENGTH: Final[int] = 253
MAX_LABEL_LENGTH: Final[int] = 63
DOMAIN_LIST_PREFIXES: Final[frozenset] = frozenset(
    {"full", "regexp", "domain", "keyword", "include"}
)

# Service Defaults
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
CONFIG_PATH_ENV: Final[str] = "DNS_ROUTING_CONFIG"
