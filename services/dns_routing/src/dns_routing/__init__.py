"""DNS-based routing management for Keenetic routers."""

from .service import DnsRoutingService

__version__ = "0.1.0"

__all__ = ["DnsRoutingService", "__version__"]
