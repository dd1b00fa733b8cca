"""YAML configuration loading."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from routing_common import ConfigurationError, get_env, get_env_int
from routing_common.constants import (
    CONFIG_PATH_ENV,
    DEFAULT_URL_CACHE_TTL,
    DEFAULT_URL_FETCH_RETRIES,
    DEFAULT_URL_FETCH_TIMEOUT,
)
from routing_schemas import DnsRoutingGroup

logger = structlog.get_logger()

LIST_FILE_SUFFIXES = (".yaml", ".yml")


class KeeneticSettings(BaseModel):
    """Router connection parameters."""

    url: str = ""
    login: str = ""
    password: str = ""


class CacheSettings(BaseModel):
    url_ttl: int = Field(DEFAULT_URL_CACHE_TTL, alias="urlTtl", ge=0)

    model_config = ConfigDict(populate_by_name=True)


class FetchSettings(BaseModel):
    timeout: int = Field(DEFAULT_URL_FETCH_TIMEOUT, gt=0)
    retries: int = Field(DEFAULT_URL_FETCH_RETRIES, ge=1)


class LogSettings(BaseModel):
    debug: bool = False


class DnsRoutes(BaseModel):
    groups: List[DnsRoutingGroup] = Field(default_factory=list)


class DnsSettings(BaseModel):
    routes: DnsRoutes = Field(default_factory=DnsRoutes)


class AppConfig(BaseModel):
    """Top-level configuration file."""

    keenetic: KeeneticSettings = Field(default_factory=KeeneticSettings)
    data_dir: Optional[str] = Field(None, alias="dataDir")
    cache: CacheSettings = Field(default_factory=CacheSettings)
    fetch: FetchSettings = Field(default_factory=FetchSettings)
    logs: LogSettings = Field(default_factory=LogSettings)
    dns: DnsSettings = Field(default_factory=DnsSettings)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def groups(self) -> List[DnsRoutingGroup]:
        return self.dns.routes.groups


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _is_list_file(entry: str) -> bool:
    return Path(entry).suffix.lower() in LIST_FILE_SUFFIXES


def _resolve(path: str, base_dir: Path) -> str:
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    return str(candidate)


def load_domain_lists(
    list_path: str, base_dir: Path, cache: Dict[str, Tuple[List[str], List[str]]]
) -> Tuple[List[str], List[str]]:
    """
    Read a list-of-lists YAML file.

    Relative ``domain-file`` entries inside it resolve against the list
    file's own directory. Each file is read once per configuration load.

    Returns:
        Tuple of (domain_files, domain_urls)

    Raises:
        ConfigurationError: If the file is unreadable or malformed
    """
    resolved = _resolve(list_path, base_dir)
    if resolved in cache:
        return cache[resolved]

    try:
        raw = yaml.safe_load(Path(resolved).read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise ConfigurationError(
            "Failed to read domain list file", context={"path": resolved}, original_error=e
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            "Failed to parse domain list file", context={"path": resolved}, original_error=e
        )

    if not isinstance(raw, dict):
        raise ConfigurationError("Domain list file must be a mapping", context={"path": resolved})

    list_dir = Path(resolved).parent
    files = [_resolve(f, list_dir) for f in _as_list(raw.get("domain-file"))]
    urls = _as_list(raw.get("domain-url"))

    cache[resolved] = (files, urls)
    return files, urls


def expand_group_sources(
    group: Dict[str, Any], config_dir: Path, cache: Dict[str, Tuple[List[str], List[str]]]
) -> Dict[str, Any]:
    """
    Expand list-of-list references of one raw group, one level deep.

    A ``.yaml``/``.yml`` entry under ``domain-file`` contributes the
    referenced file's ``domain-file`` list; under ``domain-url`` it
    contributes its ``domain-url`` list. Plain files are resolved against
    the configuration directory; plain URLs are kept as they are.
    """
    files: List[str] = []
    urls: List[str] = []

    for entry in _as_list(group.get("domain-file")):
        if _is_list_file(entry):
            files.extend(load_domain_lists(entry, config_dir, cache)[0])
        else:
            files.append(_resolve(entry, config_dir))

    for entry in _as_list(group.get("domain-url")):
        if _is_list_file(entry):
            urls.extend(load_domain_lists(entry, config_dir, cache)[1])
        else:
            urls.append(entry)

    expanded = dict(group)
    expanded["domain-file"] = files
    expanded["domain-url"] = urls
    return expanded


def _apply_env_overrides(raw: Dict[str, Any]) -> None:
    keenetic = raw.setdefault("keenetic", {}) or {}
    raw["keenetic"] = keenetic

    login = get_env("KEENETIC_LOGIN")
    if login:
        keenetic["login"] = login
    password = get_env("KEENETIC_PASSWORD")
    if password:
        keenetic["password"] = password

    data_dir = get_env("DNS_ROUTING_DATA_DIR")
    if data_dir:
        raw["dataDir"] = data_dir

    cache = raw.get("cache") or {}
    cache["urlTtl"] = get_env_int("URL_CACHE_TTL", cache.get("urlTtl", DEFAULT_URL_CACHE_TTL))
    raw["cache"] = cache

    fetch = raw.get("fetch") or {}
    fetch["timeout"] = get_env_int("HTTP_TIMEOUT", fetch.get("timeout", DEFAULT_URL_FETCH_TIMEOUT))
    fetch["retries"] = get_env_int("HTTP_RETRIES", fetch.get("retries", DEFAULT_URL_FETCH_RETRIES))
    raw["fetch"] = fetch


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the configuration file.

    Args:
        config_path: Path to the YAML file; falls back to the
            DNS_ROUTING_CONFIG environment variable

    Returns:
        Parsed configuration with group sources expanded and resolved

    Raises:
        ConfigurationError: If the path is missing or the file is invalid
    """
    config_path = config_path or get_env(CONFIG_PATH_ENV)
    if not config_path:
        raise ConfigurationError(
            f"Config path is empty. Specify it via --config or {CONFIG_PATH_ENV}"
        )

    config_file = Path(config_path).expanduser()
    logger.debug("Loading configuration", config_path=str(config_file))

    try:
        raw = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise ConfigurationError(
            "Failed to read configuration file",
            context={"config_path": str(config_file)},
            original_error=e,
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            "Failed to parse configuration file",
            context={"config_path": str(config_file)},
            original_error=e,
        )

    if not isinstance(raw, dict):
        raise ConfigurationError(
            "Configuration file must be a mapping", context={"config_path": str(config_file)}
        )

    routes = ((raw.get("dns") or {}).get("routes") or {})
    list_cache: Dict[str, Tuple[List[str], List[str]]] = {}
    config_dir = config_file.resolve().parent
    groups = [
        expand_group_sources(group, config_dir, list_cache)
        for group in routes.get("groups") or []
        if isinstance(group, dict)
    ]
    raw["dns"] = {"routes": {"groups": groups}}

    _apply_env_overrides(raw)

    try:
        config = AppConfig.model_validate(raw)
    except PydanticValidationError as e:
        raise ConfigurationError(
            "Invalid configuration", context={"config_path": str(config_file)}, original_error=e
        )

    logger.debug(
        "Configuration loaded",
        groups=[group.name for group in config.groups],
        data_dir=config.data_dir,
    )
    return config
