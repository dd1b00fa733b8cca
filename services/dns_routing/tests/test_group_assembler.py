"""Tests for group assembly and cross-group checks."""

import pytest
from routing_common import LimitError, ValidationError
from dns_routing.assembler import (
    GroupAssembler,
    find_cross_group_duplicates,
    warn_cross_group_duplicates,
)
from dns_routing.loaders import SourceResult


def source(*domains, name="list.txt"):
    """Helper to create a source result for testing."""
    return SourceResult(source=name, kind="file", domains=list(domains))


def test_assemble_sorts_and_deduplicates():
    assembler = GroupAssembler()

    domains = assembler.assemble(
        "social",
        [source("vk.com", "facebook.com"), source("facebook.com", "8.8.8.8", name="b")],
    )

    assert domains == ["8.8.8.8", "facebook.com", "vk.com"]


def test_assemble_empty_group_is_skipped():
    assert GroupAssembler().assemble("social", []) is None
    assert GroupAssembler().assemble("social", [source()]) is None


def test_assemble_at_limit():
    domains = [f"d{i}.example.com" for i in range(300)]

    assert len(GroupAssembler().assemble("big", [source(*domains)])) == 300


def test_assemble_over_limit():
    domains = [f"d{i}.example.com" for i in range(301)]

    with pytest.raises(LimitError) as exc_info:
        GroupAssembler().assemble("big", [source(*domains)])

    assert exc_info.value.context == {"group": "big", "limit": 300, "count": 301}


def test_limit_counts_unique_domains():
    """Duplicates do not count against the limit."""
    domains = [f"d{i}.example.com" for i in range(300)]

    result = GroupAssembler().assemble("big", [source(*domains), source(*domains, name="b")])

    assert len(result) == 300


def test_custom_limit():
    with pytest.raises(LimitError):
        GroupAssembler(max_domains=2).assemble("small", [source("a.com", "b.com", "c.com")])


def test_final_guard_rejects_invalid_entry():
    with pytest.raises(ValidationError) as exc_info:
        GroupAssembler().assemble("social", [source("facebook.com", "youtube")])

    assert exc_info.value.context["group"] == "social"


def test_find_cross_group_duplicates():
    resolved = {
        "social": ["facebook.com", "shared.com"],
        "video": ["youtube.com", "shared.com"],
        "news": ["bbc.com"],
    }

    assert find_cross_group_duplicates(resolved) == {"shared.com": ["social", "video"]}


def test_warn_cross_group_duplicates_never_fails():
    assert warn_cross_group_duplicates({"a": ["x.com"], "b": ["y.com"]}) == {}
    assert warn_cross_group_duplicates({"a": ["x.com"], "b": ["x.com"]}) == {
        "x.com": ["a", "b"]
    }
