"""Domain source loaders package."""

from .domain_loader import DomainLoader, SourceResult

__all__ = ["DomainLoader", "SourceResult"]
