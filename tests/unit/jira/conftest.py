"""Test fixtures for Jira unit tests."""

import os
from unittest.mock import MagicMock, patch

import pytest

from testgen_jira.jira import JiraFetcher
from testgen_jira.jira.config import JiraConfig


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing."""
    with patch.dict(
        os.environ,
        {
            "JIRA_URL": "https://test.atlassian.net",
            "JIRA_USERNAME": "test@example.com",
            "JIRA_API_TOKEN": "test_token",
        },
        clear=True,
    ):
        yield


@pytest.fixture
def mock_config():
    """Create a JiraConfig for a Cloud instance."""
    return JiraConfig(
        url="https://test.atlassian.net",
        username="test@example.com",
        api_token="test_token",
    )


@pytest.fixture
def server_config():
    """Create a JiraConfig for a Server/Data Center instance."""
    return JiraConfig(
        url="https://jira.example.com/",
        username="jdoe",
        api_token="secret",
    )


@pytest.fixture
def mock_atlassian_jira():
    """Mock the Atlassian Jira client."""
    return MagicMock()


@pytest.fixture
def jira_fetcher(mock_config, mock_atlassian_jira):
    """Create a JiraFetcher whose transport is a mock."""
    fetcher = JiraFetcher(config=mock_config)
    fetcher.jira = mock_atlassian_jira
    return fetcher


@pytest.fixture
def server_fetcher(server_config, mock_atlassian_jira):
    """Create a Server/Data Center JiraFetcher whose transport is a mock."""
    fetcher = JiraFetcher(config=server_config)
    fetcher.jira = mock_atlassian_jira
    return fetcher
