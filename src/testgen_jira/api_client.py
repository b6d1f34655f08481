"""Client for the testgen-jira HTTP facade.

The browser talks to the same endpoints; this client lets scripts and the
test generator do so from Python.
"""

import logging
import os
from typing import Any
from urllib.parse import quote

import requests

logger = logging.getLogger("testgen-jira.api_client")

DEFAULT_API_BASE_URL = "http://localhost:8080/api"
API_BASE_URL_ENV = "TESTGEN_API_BASE_URL"
SESSION_HEADER = "X-Session-Id"


class TestgenApiError(Exception):
    """Raised when the facade answers with a non-success status."""

    __test__ = False

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def get_api_base_url() -> str:
    """Facade base URL from ``TESTGEN_API_BASE_URL``, or the local default."""
    return (os.getenv(API_BASE_URL_ENV) or DEFAULT_API_BASE_URL).rstrip("/")


class TestgenApiClient:
    """Thin wrapper around the ``/api/jira`` endpoints."""

    __test__ = False

    def __init__(
        self,
        base_url: str | None = None,
        session: requests.Session | None = None,
        timeout: float = 30,
    ) -> None:
        self.base_url = (base_url or get_api_base_url()).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.session_id: str | None = None

    def _request(
        self,
        method: str,
        path: str,
        fallback_error: str,
        **kwargs: Any,
    ) -> Any:
        headers = kwargs.pop("headers", {})
        if self.session_id:
            headers[SESSION_HEADER] = self.session_id
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            logger.error(f"{fallback_error}: {e}")
            raise TestgenApiError(f"{fallback_error}: {e}") from e

        if not response.ok:
            try:
                message = response.json().get("error") or fallback_error
            except (ValueError, AttributeError):
                message = fallback_error
            logger.error(f"{method} {path} failed with HTTP {response.status_code}: {message}")
            raise TestgenApiError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{method} {path} returned a non-JSON body: {e}")
            raise TestgenApiError(
                f"{fallback_error}: invalid JSON response",
                status_code=response.status_code,
            ) from e

    def connect_jira(
        self,
        base_url: str,
        email: str,
        token: str,
        acceptance_criteria_field: str | None = None,
        verify_fields: bool = False,
    ) -> dict[str, Any]:
        """Open a Jira connection and remember its session id."""
        payload: dict[str, Any] = {"baseUrl": base_url, "email": email, "token": token}
        if acceptance_criteria_field:
            payload["acceptanceCriteriaField"] = acceptance_criteria_field
        if verify_fields:
            payload["verifyFields"] = True
        result = self._request(
            "POST", "/jira/connect", "Failed to connect to Jira", json=payload
        )
        self.session_id = result.get("sessionId")
        return result

    def disconnect_jira(self) -> None:
        """Close the connection opened by :meth:`connect_jira`."""
        if not self.session_id:
            return
        self._request("DELETE", "/jira/connect", "Failed to disconnect from Jira")
        self.session_id = None

    def get_jira_projects(self) -> list[dict[str, str]]:
        return self._request("GET", "/jira/projects", "Failed to fetch Jira projects")

    def get_jira_sprints(self, project_key: str) -> list[dict[str, str]]:
        return self._request(
            "GET",
            f"/jira/sprints/{quote(project_key, safe='')}",
            "Failed to fetch Jira sprints",
        )

    def get_jira_stories(self, sprint_id: str) -> list[dict[str, str]]:
        return self._request(
            "GET",
            "/jira/stories",
            "Failed to fetch Jira stories",
            params={"sprint": sprint_id},
        )

    def get_jira_story_details(self, issue_id: str) -> dict[str, str]:
        return self._request(
            "GET",
            f"/jira/story/{quote(issue_id, safe='')}",
            "Failed to fetch Jira story details",
        )
