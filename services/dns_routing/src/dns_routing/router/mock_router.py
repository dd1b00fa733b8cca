"""In-memory router that understands the DNS-routing command grammar."""

from typing import Any, Dict, Iterable, List, Optional, Set

from routing_common import RouterAPIError
from routing_schemas import CommandResult
from ..planner import SAVE_CONFIG_CMD
from .base_client import BaseRouterClient


class MockRouter(BaseRouterClient):
    """Router double holding object-groups, routes and interfaces in memory.

    Mirrors the device's behaviour for the commands the planner emits:

    - creating an existing group, or removing an unknown domain, route or
      group, is accepted;
    - including a domain into an unknown group is an error;
    - routing to an unknown interface or group is an error;
    - ``dns-proxy route`` replaces any route the group already has.
    """

    def __init__(
        self,
        version: str = "5.0.1",
        interfaces: Optional[Iterable[str]] = None,
        groups: Optional[Dict[str, List[str]]] = None,
        routes: Optional[Dict[str, str]] = None,
        fail_commands: Optional[Set[str]] = None,
        fail_reads: bool = False,
    ):
        super().__init__()
        self.version = version
        self.interfaces = {
            iface: {"id": iface, "state": "up"}
            for iface in (interfaces if interfaces is not None else ["Wireguard0", "ISP"])
        }
        self.groups: Dict[str, List[str]] = {
            name: list(domains) for name, domains in (groups or {}).items()
        }
        self.routes: Dict[str, str] = dict(routes or {})
        self.fail_commands = set(fail_commands or ())
        self.fail_reads = fail_reads
        self.batches: List[List[str]] = []
        self.reads = 0
        self.saves = 0

    async def authenticate(self) -> None:
        self._firmware_version = self.version

    def _read(self, what: str) -> None:
        self.reads += 1
        if self.fail_reads:
            raise RouterAPIError(f"Failed to read {what}", context={"path": what})

    async def get_existing_groups(self) -> Dict[str, List[str]]:
        self._read("object-group/fqdn")
        return {name: list(domains) for name, domains in self.groups.items()}

    async def get_existing_routes(self) -> Dict[str, str]:
        self._read("dns-proxy/route")
        return dict(self.routes)

    async def get_interfaces(self) -> Dict[str, Dict[str, Any]]:
        self._read("show/interface")
        return {iface: dict(info) for iface, info in self.interfaces.items()}

    async def execute(self, commands: List[str]) -> List[CommandResult]:
        self.batches.append(list(commands))
        return [self.run_command(command) for command in commands]

    def run_command(self, command: str) -> CommandResult:
        """Apply one command to the in-memory state."""
        if command in self.fail_commands:
            return self._error(command, "command rejected")

        if command == SAVE_CONFIG_CMD:
            self.saves += 1
            return self._ok(command, "configuration saved")

        tokens = command.split()
        negated = bool(tokens) and tokens[0] == "no"
        if negated:
            tokens = tokens[1:]

        if tokens[:2] == ["object-group", "fqdn"] and len(tokens) in (3, 5):
            name = tokens[2]
            if len(tokens) == 5 and tokens[3] == "include":
                return self._include(command, name, tokens[4], negated)
            if len(tokens) == 3:
                return self._group(command, name, negated)

        if tokens[:3] == ["dns-proxy", "route", "object-group"] and len(tokens) >= 5:
            return self._route(command, tokens[3], tokens[4], negated)

        return self._error(command, "unknown command")

    def _group(self, command: str, name: str, negated: bool) -> CommandResult:
        if negated:
            self.groups.pop(name, None)
            return self._ok(command, f"object-group '{name}' removed")

        self.groups.setdefault(name, [])
        return self._ok(command, f"object-group '{name}' ready")

    def _include(self, command: str, name: str, domain: str, negated: bool) -> CommandResult:
        if name not in self.groups:
            return self._error(command, f"object-group '{name}' does not exist")

        domains = self.groups[name]
        if negated:
            self.groups[name] = [d for d in domains if d != domain]
            return self._ok(command, f"'{domain}' removed from '{name}'")

        if domain not in domains:
            domains.append(domain)
        return self._ok(command, f"'{domain}' added to '{name}'")

    def _route(self, command: str, name: str, interface_id: str, negated: bool) -> CommandResult:
        if negated:
            if self.routes.get(name) == interface_id:
                del self.routes[name]
            return self._ok(command, f"route for '{name}' removed")

        if interface_id not in self.interfaces:
            return self._error(command, f"interface '{interface_id}' does not exist")
        if name not in self.groups:
            return self._error(command, f"object-group '{name}' does not exist")

        self.routes[name] = interface_id
        return self._ok(command, f"route for '{name}' set to '{interface_id}'")

    @staticmethod
    def _ok(command: str, message: str) -> CommandResult:
        return CommandResult(command=command, status="ok", message=message)

    @staticmethod
    def _error(command: str, message: str) -> CommandResult:
        return CommandResult(command=command, status="error", message=message)
