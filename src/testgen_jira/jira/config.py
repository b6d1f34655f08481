"""Configuration module for Jira API interactions."""

import logging
import os
from dataclasses import dataclass

from ..exceptions import InvalidConfigurationError
from ..utils.logging import log_config_param
from ..utils.urls import is_atlassian_cloud_url, normalize_base_url

logger = logging.getLogger("testgen-jira.jira.config")

DEFAULT_ACCEPTANCE_CRITERIA_FIELD = "customfield_10020"
DEFAULT_TIMEOUT = 75


@dataclass(frozen=True)
class JiraConfig:
    """Jira API configuration.

    One instance describes exactly one (endpoint, identity, secret) triple.
    Both Cloud (email + API token) and Server/Data Center (username +
    password) use HTTP Basic authentication.
    """

    url: str  # Base URL for Jira, without trailing slash
    username: str  # Email (Cloud) or username (Server/DC)
    api_token: str  # API token (Cloud) or password (Server/DC)
    ssl_verify: bool = True  # Whether to verify SSL certificates
    timeout: int = DEFAULT_TIMEOUT  # Transport timeout in seconds
    acceptance_criteria_field: str = DEFAULT_ACCEPTANCE_CRITERIA_FIELD

    def __post_init__(self) -> None:
        object.__setattr__(self, "url", normalize_base_url(self.url or ""))

    @property
    def is_cloud(self) -> bool:
        """Check if this is a cloud instance.

        Returns:
            True if this is a cloud instance (atlassian.net), False otherwise.
            Localhost URLs are always considered non-cloud (Server/Data Center).
        """
        return is_atlassian_cloud_url(self.url)

    @classmethod
    def from_credentials(
        cls,
        base_url: str | None,
        email: str | None,
        token: str | None,
        **kwargs: object,
    ) -> "JiraConfig":
        """Create configuration from the fields of a connect request.

        Args:
            base_url: Jira base URL
            email: Account email or username
            token: API token or password
            **kwargs: Optional overrides for the remaining settings

        Returns:
            JiraConfig for the given credentials

        Raises:
            InvalidConfigurationError: If any of the three fields is empty or
                not a string
        """
        if not base_url or not email or not token:
            raise InvalidConfigurationError(
                "Base URL, email, and token are required"
            )
        if not all(isinstance(value, str) for value in (base_url, email, token)):
            raise InvalidConfigurationError(
                "Base URL, email, and token must be strings"
            )
        overrides = {key: value for key, value in kwargs.items() if value is not None}
        return cls(url=base_url, username=email, api_token=token, **overrides)

    @classmethod
    def from_env(cls) -> "JiraConfig":
        """Create configuration from environment variables.

        Returns:
            JiraConfig with values from environment variables

        Raises:
            InvalidConfigurationError: If required environment variables are
                missing or invalid
        """
        url = os.getenv("JIRA_URL")
        if not url:
            raise InvalidConfigurationError(
                "Missing required JIRA_URL environment variable"
            )

        username = os.getenv("JIRA_USERNAME")
        api_token = os.getenv("JIRA_API_TOKEN")
        if not username or not api_token:
            raise InvalidConfigurationError(
                "Jira authentication requires JIRA_USERNAME and JIRA_API_TOKEN"
            )

        ssl_verify_env = os.getenv("JIRA_SSL_VERIFY", "true").lower()
        ssl_verify = ssl_verify_env not in ("false", "0", "no")

        timeout_env = os.getenv("JIRA_TIMEOUT", str(DEFAULT_TIMEOUT))
        if not timeout_env.isdigit():
            raise InvalidConfigurationError(
                f"JIRA_TIMEOUT must be a whole number of seconds, got {timeout_env!r}"
            )

        acceptance_criteria_field = os.getenv(
            "JIRA_ACCEPTANCE_CRITERIA_FIELD", DEFAULT_ACCEPTANCE_CRITERIA_FIELD
        )

        config = cls(
            url=url,
            username=username,
            api_token=api_token,
            ssl_verify=ssl_verify,
            timeout=int(timeout_env),
            acceptance_criteria_field=acceptance_criteria_field,
        )
        config.log_params(logger)
        return config

    def log_params(self, log: logging.Logger) -> None:
        """Log the configuration with the secret masked."""
        log_config_param(log, "Jira", "URL", self.url)
        log_config_param(log, "Jira", "Username", self.username)
        log_config_param(log, "Jira", "API Token", self.api_token, sensitive=True)
        log_config_param(log, "Jira", "SSL Verify", str(self.ssl_verify))
        log_config_param(
            log, "Jira", "Acceptance Criteria Field", self.acceptance_criteria_field
        )
