"""Tests for domain line validation."""

from unittest.mock import patch

from routing_schemas import check_entry
from dns_routing.cache import ValidationCache
from dns_routing.validators import DomainValidator, validate_lines

SAMPLE_LINES = [
    "# Social networks",
    "",
    "facebook.com",
    "full:www.instagram.com @cn",
    "youtube",
    "8.8.8.8",
    "-bad-.com",
    "facebook.com",
    "пример.рф",
]


def test_validate_keeps_order_and_duplicates():
    """Accepted tokens follow input order; duplicates are kept here."""
    validator = DomainValidator()

    accepted, skipped = validator.validate_lines(SAMPLE_LINES, source="test")

    assert accepted == [
        "facebook.com",
        "www.instagram.com",
        "8.8.8.8",
        "facebook.com",
        "пример.рф",
    ]
    assert skipped == 2


def test_validate_single_line():
    validator = DomainValidator()

    assert validator.validate("# comment").ignored
    outcome = validator.validate("youtube")
    assert outcome.token == "youtube"
    assert not outcome.accepted
    assert outcome.reason == "missing TLD (no dot)"
    assert validator.validate("domain:example.org").accepted


def test_statistics():
    validator = DomainValidator()
    validator.validate_lines(SAMPLE_LINES)

    stats = validator.get_statistics()
    assert stats == {"total": 9, "valid": 5, "invalid": 2, "ignored": 2}

    validator.reset_statistics()
    assert validator.get_statistics()["total"] == 0


def test_cache_is_consulted():
    cache = ValidationCache()
    validator = DomainValidator(cache=cache)

    with patch("dns_routing.validators.domain_validator.check_entry", wraps=check_entry) as spy:
        assert validator.validate("example.com").accepted
        assert validator.validate("domain:example.com").accepted

    assert spy.call_count == 1
    assert cache.get("example.com") == (True, "")


def test_cached_verdict_cannot_admit_bare_name():
    cache = ValidationCache()
    cache.set("youtube", True, "")
    validator = DomainValidator(cache=cache)

    outcome = validator.validate("youtube")

    assert not outcome.accepted
    assert outcome.reason == "missing TLD (no dot)"


def test_cold_and_warm_cache_agree():
    """Warm-cache verdicts equal cold-cache verdicts."""
    cache = ValidationCache()

    cold = DomainValidator(cache=cache).validate_lines(SAMPLE_LINES)
    assert len(cache) > 0
    warm = DomainValidator(cache=cache).validate_lines(SAMPLE_LINES)
    fresh = validate_lines(SAMPLE_LINES)

    assert cold == warm == fresh


def test_validation_cache_ttl():
    now = [100.0]
    cache = ValidationCache(ttl=10, clock=lambda: now[0])
    cache.set("example.com", True)

    assert cache.get("example.com") == (True, "")
    assert "example.com" in cache

    now[0] = 111.0
    assert cache.get("example.com") is None
    assert len(cache) == 0


def test_validation_cache_clear():
    cache = ValidationCache()
    cache.set("a.com", True)
    cache.set("b", False, "missing TLD (no dot)")

    assert cache.get("b") == (False, "missing TLD (no dot)")
    cache.clear()
    assert len(cache) == 0
