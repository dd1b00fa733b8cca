"""Keenetic RCI client over HTTP."""

import asyncio
import hashlib
from typing import Any, Dict, List, Optional

import aiohttp
import structlog
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from routing_common import RouterAPIError
from routing_common.constants import DEFAULT_ROUTER_READ_RETRIES, DEFAULT_ROUTER_TIMEOUT
from routing_schemas import CommandResult, DnsProxyRoute, ObjectGroup, ParseRequest
from .base_client import BaseRouterClient

logger = structlog.get_logger()


def _unexpected_shape(path: str, detail: str) -> RouterAPIError:
    return RouterAPIError(
        f"Unexpected response from {path}: {detail}",
        context={"path": path},
    )


def _parse_response_to_result(command: str, item: Any) -> CommandResult:
    """Convert one RCI parse response into a CommandResult."""
    if not isinstance(item, dict):
        return CommandResult(command=command, status="error", message="no response for command")

    statuses = (item.get("parse") or {}).get("status") or []
    errors = [s for s in statuses if s.get("status") == "error"]
    if errors:
        return CommandResult(
            command=command,
            status="error",
            message="; ".join(s.get("message", "") for s in errors),
        )

    return CommandResult(
        command=command,
        status="ok",
        message="; ".join(s["message"] for s in statuses if s.get("message")),
    )


class KeeneticClient(BaseRouterClient):
    """Talks to the router's RCI endpoints with a cookie-authenticated session.

    Reads are retried on transport errors; the command batch is sent once.
    """

    def __init__(
        self,
        url: str,
        login: str,
        password: str,
        timeout: int = DEFAULT_ROUTER_TIMEOUT,
        read_retries: int = DEFAULT_ROUTER_READ_RETRIES,
    ):
        """
        Initialize Keenetic client.

        Args:
            url: Router base URL (IP address or KeenDNS host with scheme)
            login: Admin login
            password: Admin password
            timeout: Per-request timeout in seconds
            read_retries: Attempts for read requests
        """
        super().__init__()
        self.url = url.rstrip("/")
        self.login = login
        self.password = password
        self.timeout = timeout
        self.read_retries = max(1, read_retries)
        self._session: Optional[aiohttp.ClientSession] = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            # Routers are usually reached by IP, which the default jar refuses
            self._session = aiohttp.ClientSession(
                cookie_jar=aiohttp.CookieJar(unsafe=True),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self._session

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()

    def _password_hash(self, realm: str, challenge: str) -> str:
        md5_hex = hashlib.md5(f"{self.login}:{realm}:{self.password}".encode("utf-8")).hexdigest()
        return hashlib.sha256(f"{challenge}{md5_hex}".encode("utf-8")).hexdigest()

    async def authenticate(self) -> None:
        """
        Run the challenge-response login and cache the firmware version.

        Raises:
            RouterAPIError: If the router is unreachable or rejects the credentials
        """
        session = self._get_session()

        try:
            async with session.get(f"{self.url}/auth") as response:
                status = response.status
                realm = response.headers.get("X-NDM-Realm", "")
                challenge = response.headers.get("X-NDM-Challenge", "")

            if status == 401:
                async with session.post(
                    f"{self.url}/auth",
                    json={
                        "login": self.login,
                        "password": self._password_hash(realm, challenge),
                    },
                ) as response:
                    if response.status != 200:
                        raise RouterAPIError(
                            "Authentication failed, check login and password",
                            context={"url": self.url, "status_code": response.status},
                        )
            elif status != 200:
                raise RouterAPIError(
                    "Unexpected authentication response",
                    context={"url": self.url, "status_code": status},
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RouterAPIError(
                "Failed to reach router", context={"url": self.url}, original_error=e
            )

        version = await self._get_json("/rci/show/version")
        self._firmware_version = version.get("title", "") if isinstance(version, dict) else ""

        logger.info(
            "Authenticated to router",
            url=self.url,
            model=version.get("model", "") if isinstance(version, dict) else "",
            version=self._firmware_version,
        )

    async def _get_json(self, path: str) -> Any:
        session = self._get_session()

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.read_retries),
                wait=wait_exponential(multiplier=1, min=1, max=5),
                retry=retry_if_exception_type(
                    (aiohttp.ClientError, asyncio.TimeoutError)
                ),
                reraise=True,
            ):
                with attempt:
                    async with session.get(f"{self.url}{path}") as response:
                        if response.status != 200:
                            raise RouterAPIError(
                                f"Unexpected status code {response.status}",
                                context={"path": path, "status_code": response.status},
                            )
                        return await response.json(content_type=None)

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise RouterAPIError(
                f"Request to {path} failed",
                context={"path": path, "attempts": self.read_retries},
                original_error=e,
            )

    async def get_existing_groups(self) -> Dict[str, List[str]]:
        path = "/rci/object-group/fqdn"
        data = await self._get_json(path)
        if data in (None, {}, []):
            return {}
        if not isinstance(data, dict):
            raise _unexpected_shape(path, "object-group list is not an object")

        groups = []
        for name, group in data.items():
            if group is None:
                group = {}
            if not isinstance(group, dict):
                raise _unexpected_shape(path, f"object-group '{name}' is not an object")

            include = group.get("include") or []
            if not isinstance(include, list):
                raise _unexpected_shape(path, f"object-group '{name}' include is not a list")

            domains = []
            for entry in include:
                if not isinstance(entry, dict) or not isinstance(entry.get("address"), str):
                    raise _unexpected_shape(path, f"object-group '{name}' has a malformed entry")
                domains.append(entry["address"])

            groups.append(ObjectGroup(name=name, domains=domains))

        return {group.name: group.domains for group in groups}

    async def get_existing_routes(self) -> Dict[str, str]:
        path = "/rci/dns-proxy/route"
        data = await self._get_json(path)
        if data in (None, {}, []):
            return {}
        if not isinstance(data, list):
            raise _unexpected_shape(path, "route list is not an array")

        routes = []
        for item in data:
            if not isinstance(item, dict):
                raise _unexpected_shape(path, "route entry is not an object")
            if not item.get("group"):
                continue
            interface = item.get("interface", "")
            if not isinstance(item["group"], str) or not isinstance(interface, str):
                raise _unexpected_shape(path, "route entry has a malformed field")
            routes.append(DnsProxyRoute(group=item["group"], interface=interface))
        return {route.group: route.interface for route in routes}

    async def get_interfaces(self) -> Dict[str, Dict[str, Any]]:
        path = "/rci/show/interface"
        data = await self._get_json(path)
        if data in (None, {}, []):
            return {}
        if not isinstance(data, dict):
            raise _unexpected_shape(path, "interface list is not an object")
        return data

    async def execute(self, commands: List[str]) -> List[CommandResult]:
        if not commands:
            return []

        session = self._get_session()
        payload = [ParseRequest(parse=command).model_dump() for command in commands]

        try:
            async with session.post(f"{self.url}/rci/", json=payload) as response:
                if response.status != 200:
                    raise RouterAPIError(
                        f"Unexpected status code {response.status}",
                        context={"path": "/rci/", "status_code": response.status},
                    )
                body = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise RouterAPIError(
                "Failed to submit command batch",
                context={"path": "/rci/", "commands": len(commands)},
                original_error=e,
            )

        if not isinstance(body, list):
            body = []

        return [
            _parse_response_to_result(command, body[i] if i < len(body) else None)
            for i, command in enumerate(commands)
        ]
