"""Module for Jira issue operations."""

import logging
from urllib.parse import quote

from ..exceptions import StoryDetailsFetchFailedError
from ..models.jira import JiraStoryDetails
from .client import JiraClient

logger = logging.getLogger("testgen-jira.jira")


class IssuesMixin(JiraClient):
    """Mixin for Jira issue operations."""

    def get_story_details(self, issue_id: str) -> JiraStoryDetails:
        """
        Get the title, description and acceptance criteria of a story.

        Rich text values are reduced to their first text run; a missing
        value becomes an empty string.

        Args:
            issue_id: Issue key (e.g. 'PROJ-123') or numeric id

        Returns:
            The story details

        Raises:
            TrackerRequestError: On 401/403/404 or when Jira is unreachable
            StoryDetailsFetchFailedError: On any other failure, including an
                acceptance criteria field that does not hold text
        """
        url = f"{self.api_path}/issue/{quote(str(issue_id), safe='')}"
        params = {"fields": self.field_mapping.as_request_param()}

        try:
            issue = self.jira.get(url, params=params)
            if not isinstance(issue, dict):
                msg = f"Unexpected return value type from issue {issue_id}: {type(issue)}"
                logger.error(msg)
                raise TypeError(msg)
            return JiraStoryDetails.from_api_response(
                issue, **self.field_mapping.model_kwargs()
            )
        except Exception as e:
            raise self._classify_error(
                e,
                f"Failed to fetch story details for {issue_id} from Jira",
                StoryDetailsFetchFailedError,
            ) from e
