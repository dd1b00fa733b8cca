"""Configuration module for router connection and DNS-routing groups."""

from .settings import (
    AppConfig,
    CacheSettings,
    DnsRoutes,
    DnsSettings,
    FetchSettings,
    KeeneticSettings,
    LogSettings,
    expand_group_sources,
    load_config,
    load_domain_lists,
)

__all__ = [
    "AppConfig",
    "CacheSettings",
    "DnsRoutes",
    "DnsSettings",
    "FetchSettings",
    "KeeneticSettings",
    "LogSettings",
    "expand_group_sources",
    "load_config",
    "load_domain_lists",
]
