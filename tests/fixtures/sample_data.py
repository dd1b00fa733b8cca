"""Sample data fixtures for testing."""

import textwrap

import pytest


@pytest.fixture
def sample_social_list():
    """Domain list with comments, attributes, prefixes and invalid lines."""
    return textwrap.dedent(
        """\
        # Social networks
        facebook.com
        instagram.com @cn
        full:www.vk.com

        youtube
        -invalid-domain-.com
        facebook.com
        """
    )


@pytest.fixture
def sample_video_list():
    return "youtube.com\ngooglevideo.com\n8.8.8.8\n"


@pytest.fixture
def sample_valid_domains():
    """List of valid domains for testing."""
    return [
        "example.com",
        "sub.example.com",
        "another-domain.org",
        "пример.рф",
        "xn--e1afmkfd.xn--p1ai",
        "a.b.c.d.example.net",
    ]


@pytest.fixture
def sample_invalid_domains():
    """List of invalid domains for testing."""
    return [
        "localhost",
        "youtube",
        "-invalid.com",
        "invalid-.com",
        "under_score.com",
        "*.wildcard.com",
        "a" * 64 + ".com",
        "",
    ]


@pytest.fixture
def sample_config(tmp_path, sample_social_list):
    """Write a configuration with one file group and one URL group.

    Returns a callable taking the list server base URL and the router URL.
    """
    lists = tmp_path / "lists"
    lists.mkdir()
    (lists / "social.txt").write_text(sample_social_list, encoding="utf-8")

    def _write(list_base_url, router_url="http://192.168.1.1"):
        path = tmp_path / "config.yaml"
        path.write_text(
            textwrap.dedent(
                f"""
                keenetic:
                  url: {router_url}
                  login: admin
                  password: secret
                dataDir: {tmp_path / "data"}
                dns:
                  routes:
                    groups:
                      - name: social
                        domain-file: lists/social.txt
                        interfaceId: Wireguard0
                      - name: video
                        domain-url: {list_base_url}/video.txt
                        interfaceId: ISP
                """
            ),
            encoding="utf-8",
        )
        return str(path)

    return _write
