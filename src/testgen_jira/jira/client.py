"""Base client module for Jira API interactions."""

import logging

from atlassian import Jira
from requests import Session
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import HTTPError, Timeout

from ..exceptions import (
    AccessDeniedError,
    AuthenticationFailedError,
    EndpointNotFoundError,
    FetchFailedError,
    NetworkUnreachableError,
    TestgenJiraError,
)
from ..utils.auth import basic_auth_header, encode_basic_auth
from ..utils.logging import mask_sensitive
from .config import DEFAULT_ACCEPTANCE_CRITERIA_FIELD, JiraConfig
from .field_mapping import FieldMapping

logger = logging.getLogger("testgen-jira.jira")

CLOUD_API_VERSION = "3"
SERVER_API_VERSION = "2"


class JiraClient:
    """Base client for Jira API interactions.

    A client is bound to the credentials it was constructed with. All
    requests share one ``requests.Session`` carrying the Basic token, and the
    client keeps no per-call state, so one instance can serve concurrent
    callers.
    """

    config: JiraConfig
    field_mapping: FieldMapping

    def __init__(self, config: JiraConfig | None = None) -> None:
        """Initialize the Jira client with configuration options.

        No request is sent to Jira here.

        Args:
            config: Optional configuration object (will use env vars if not provided)

        Raises:
            InvalidConfigurationError: If configuration or field mapping is invalid
        """
        self.config = config or JiraConfig.from_env()
        self.field_mapping = FieldMapping.build(
            acceptance_criteria=self.config.acceptance_criteria_field
        )
        if (
            self.config.is_cloud
            and self.field_mapping.acceptance_criteria
            == DEFAULT_ACCEPTANCE_CRITERIA_FIELD
        ):
            logger.warning(
                f"Reading acceptance criteria from the default field "
                f"{DEFAULT_ACCEPTANCE_CRITERIA_FIELD}, which is usually the "
                "Sprint field on Jira Cloud. Set acceptanceCriteriaField "
                "(JIRA_ACCEPTANCE_CRITERIA_FIELD) or connect with verifyFields."
            )

        auth_token = encode_basic_auth(self.config.username, self.config.api_token)
        session = Session()
        session.headers.update(
            {
                "Authorization": basic_auth_header(auth_token),
                "Accept": "application/json",
            }
        )

        self.jira = Jira(
            url=self.config.url,
            session=session,
            cloud=self.config.is_cloud,
            verify_ssl=self.config.ssl_verify,
            timeout=self.config.timeout,
        )

        logger.debug(
            f"Jira client bound to {self.config.url} as {self.config.username} "
            f"(token {mask_sensitive(auth_token)})"
        )

    @property
    def api_path(self) -> str:
        """Path prefix of the platform REST API for this deployment type."""
        version = CLOUD_API_VERSION if self.config.is_cloud else SERVER_API_VERSION
        return f"rest/api/{version}"

    def _classify_error(
        self,
        error: Exception,
        message: str,
        fallback: type[FetchFailedError] = FetchFailedError,
        **fallback_kwargs: str,
    ) -> TestgenJiraError:
        """
        Map a transport or payload failure onto the error taxonomy.

        Args:
            error: The exception raised while talking to Jira
            message: Prefix for the fallback error's message
            fallback: Error class for failures that are not classified
            **fallback_kwargs: Extra arguments for the fallback class

        Returns:
            The classified error, to be raised by the caller
        """
        if isinstance(error, TestgenJiraError):
            return error

        if isinstance(error, HTTPError) and error.response is not None:
            response = error.response
            logger.error(
                f"Jira API error: HTTP {response.status_code} {response.reason}: "
                f"{str(response.content)[:500]}"
            )
            if response.status_code == 401:
                return AuthenticationFailedError()
            if response.status_code == 403:
                return AccessDeniedError()
            if response.status_code == 404:
                return EndpointNotFoundError()
        elif isinstance(error, RequestsConnectionError | Timeout):
            logger.error(f"No response received from {self.config.url}: {error}")
            return NetworkUnreachableError()

        logger.error(f"{message}: {error}")
        return fallback(f"{message}: {error}", **fallback_kwargs)
