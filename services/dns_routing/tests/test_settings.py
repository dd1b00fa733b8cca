"""Tests for configuration loading."""

import textwrap

import pytest
from routing_common import ConfigurationError
from dns_routing.config import load_config


def write(path, text):
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (
        "KEENETIC_LOGIN",
        "KEENETIC_PASSWORD",
        "DNS_ROUTING_DATA_DIR",
        "URL_CACHE_TTL",
        "HTTP_TIMEOUT",
        "HTTP_RETRIES",
        "DNS_ROUTING_CONFIG",
    ):
        monkeypatch.delenv(key, raising=False)


def test_load_config(tmp_path):
    config_file = write(
        tmp_path / "config.yaml",
        """
        keenetic:
          url: http://192.168.1.1
          login: admin
          password: secret
        dataDir: /var/lib/dns-routing
        cache:
          urlTtl: 120
        dns:
          routes:
            groups:
              - name: social
                domain-file: lists/social.txt
                domain-url:
                  - https://example.com/social.txt
                interfaceId: Wireguard0
        """,
    )

    config = load_config(str(config_file))

    assert config.keenetic.url == "http://192.168.1.1"
    assert config.data_dir == "/var/lib/dns-routing"
    assert config.cache.url_ttl == 120
    assert config.fetch.timeout == 5
    assert config.fetch.retries == 1
    assert len(config.groups) == 1

    social = config.groups[0]
    assert social.domain_files == [str(tmp_path / "lists" / "social.txt")]
    assert social.domain_urls == ["https://example.com/social.txt"]
    assert social.interface_id == "Wireguard0"


def test_list_of_lists_expansion(tmp_path):
    lists = tmp_path / "lists"
    lists.mkdir()
    write(
        lists / "bundle.yaml",
        """
        domain-file:
          - social.txt
          - /abs/video.txt
        domain-url:
          - https://example.com/news.txt
        """,
    )
    config_file = write(
        tmp_path / "config.yaml",
        """
        dns:
          routes:
            groups:
              - name: bundle
                domain-file: [lists/bundle.yaml, extra.txt]
                domain-url: [lists/bundle.yaml]
                interfaceId: Wireguard0
        """,
    )

    group = load_config(str(config_file)).groups[0]

    assert group.domain_files == [
        str(lists / "social.txt"),
        "/abs/video.txt",
        str(tmp_path / "extra.txt"),
    ]
    assert group.domain_urls == ["https://example.com/news.txt"]


def test_env_overrides(tmp_path, monkeypatch):
    config_file = write(
        tmp_path / "config.yaml",
        """
        keenetic:
          url: http://192.168.1.1
          login: admin
        """,
    )
    monkeypatch.setenv("KEENETIC_LOGIN", "operator")
    monkeypatch.setenv("KEENETIC_PASSWORD", "from-env")
    monkeypatch.setenv("DNS_ROUTING_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("URL_CACHE_TTL", "300")
    monkeypatch.setenv("HTTP_TIMEOUT", "10")

    config = load_config(str(config_file))

    assert config.keenetic.login == "operator"
    assert config.keenetic.password == "from-env"
    assert config.data_dir == str(tmp_path / "data")
    assert config.cache.url_ttl == 300
    assert config.fetch.timeout == 10
    assert config.groups == []


def test_config_path_from_env(tmp_path, monkeypatch):
    config_file = write(tmp_path / "config.yaml", "keenetic:\n  url: http://10.0.0.1\n")
    monkeypatch.setenv("DNS_ROUTING_CONFIG", str(config_file))

    assert load_config().keenetic.url == "http://10.0.0.1"


def test_missing_config_path():
    with pytest.raises(ConfigurationError) as exc_info:
        load_config()

    assert "Config path is empty" in str(exc_info.value)


def test_unreadable_config(tmp_path):
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(str(tmp_path / "missing.yaml"))

    assert isinstance(exc_info.value.original_error, OSError)


def test_invalid_yaml(tmp_path):
    config_file = write(tmp_path / "config.yaml", "dns: [unclosed\n")

    with pytest.raises(ConfigurationError):
        load_config(str(config_file))


def test_invalid_field_type(tmp_path):
    config_file = write(tmp_path / "config.yaml", "cache:\n  urlTtl: soon\n")

    with pytest.raises(ConfigurationError) as exc_info:
        load_config(str(config_file))

    assert "Invalid configuration" in str(exc_info.value)


def test_missing_list_file(tmp_path):
    config_file = write(
        tmp_path / "config.yaml",
        """
        dns:
          routes:
            groups:
              - name: bundle
                domain-file: [missing.yaml]
                interfaceId: Wireguard0
        """,
    )

    with pytest.raises(ConfigurationError) as exc_info:
        load_config(str(config_file))

    assert "Failed to read domain list file" in str(exc_info.value)
