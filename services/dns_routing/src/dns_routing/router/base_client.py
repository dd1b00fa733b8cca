"""Base router client abstract class."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from routing_schemas import CommandResult


class BaseRouterClient(ABC):
    """Abstract access to one router's DNS-routing state and command batch."""

    def __init__(self):
        self._firmware_version = ""

    @property
    def firmware_version(self) -> str:
        """Firmware version cached by authenticate(); empty until then."""
        return self._firmware_version

    @abstractmethod
    async def authenticate(self) -> None:
        """
        Log in and cache the firmware version.

        Raises:
            RouterAPIError: If login fails
        """
        pass

    @abstractmethod
    async def get_existing_groups(self) -> Dict[str, List[str]]:
        """Return FQDN object-groups as name -> domains."""
        pass

    @abstractmethod
    async def get_existing_routes(self) -> Dict[str, str]:
        """Return dns-proxy routes as group name -> interface ID."""
        pass

    @abstractmethod
    async def get_interfaces(self) -> Dict[str, Dict[str, Any]]:
        """Return interfaces keyed by interface ID."""
        pass

    @abstractmethod
    async def execute(self, commands: List[str]) -> List[CommandResult]:
        """
        Submit commands as one batch.

        Returns:
            One result per command, in submission order

        Raises:
            RouterAPIError: If the batch itself could not be submitted
        """
        pass

    async def close(self) -> None:
        """Release connections."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False
