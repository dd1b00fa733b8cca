"""Cache services package."""

from .url_cache import URLCache
from .validation_cache import ValidationCache

__all__ = ["URLCache", "ValidationCache"]
