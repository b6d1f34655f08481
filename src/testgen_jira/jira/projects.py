"""Module for Jira project operations."""

import logging

from ..exceptions import FetchFailedError
from ..models.jira import JiraProject
from .client import JiraClient

logger = logging.getLogger("testgen-jira.jira")


class ProjectsMixin(JiraClient):
    """Mixin for Jira project operations."""

    def get_projects(self) -> list[JiraProject]:
        """
        Get all projects visible to the current user.

        Returns:
            Projects in the order Jira returns them

        Raises:
            AuthenticationFailedError: If Jira rejects the credentials (401)
            AccessDeniedError: If the user may not list projects (403)
            EndpointNotFoundError: If the base URL is wrong (404)
            NetworkUnreachableError: If Jira did not answer
            FetchFailedError: On any other failure
        """
        url = f"{self.api_path}/project"
        logger.info(f"Fetching Jira projects from {self.config.url}/{url}")

        try:
            projects = self.jira.get(url)
            if not isinstance(projects, list):
                msg = f"Unexpected return value type from project listing: {type(projects)}"
                logger.error(msg)
                raise TypeError(msg)
        except Exception as e:
            raise self._classify_error(
                e, "Failed to fetch projects from Jira", FetchFailedError
            ) from e

        logger.info(f"Number of projects found: {len(projects)}")
        return [JiraProject.from_api_response(project) for project in projects]
