"""Router clients package."""

from .base_client import BaseRouterClient
from .keenetic_client import KeeneticClient
from .mock_router import MockRouter

__all__ = ["BaseRouterClient", "KeeneticClient", "MockRouter"]
