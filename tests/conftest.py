"""Pytest configuration and fixtures for integration tests."""

# Import all fixtures to make them available to tests
from fixtures.mock_servers import (
    mock_list_server,
    mock_keenetic_server,
)

from fixtures.sample_data import (
    sample_social_list,
    sample_video_list,
    sample_valid_domains,
    sample_invalid_domains,
    sample_config,
)

__all__ = [
    # Mock server fixtures
    "mock_list_server",
    "mock_keenetic_server",
    # Sample data fixtures
    "sample_social_list",
    "sample_video_list",
    "sample_valid_domains",
    "sample_invalid_domains",
    "sample_config",
]
