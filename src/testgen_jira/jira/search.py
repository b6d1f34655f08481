"""Module for Jira search operations."""

import logging

from ..exceptions import StoriesFetchFailedError
from ..models.jira import JiraStory
from .client import JiraClient
from .constants import MAX_STORIES, STORY_ISSUE_TYPE, STORY_LIST_FIELDS

logger = logging.getLogger("testgen-jira.jira")


def build_sprint_stories_jql(sprint_id: str) -> str:
    """
    Build the JQL selecting a sprint's stories, newest first.

    Numeric ids are used as is; anything else is quoted so it cannot extend
    the query.
    """
    sprint = str(sprint_id).strip()
    if not sprint.isdigit():
        escaped = sprint.replace("\\", "\\\\").replace('"', '\\"')
        sprint = f'"{escaped}"'
    return f"sprint = {sprint} AND issuetype = {STORY_ISSUE_TYPE} ORDER BY created DESC"


class SearchMixin(JiraClient):
    """Mixin for Jira search operations."""

    def get_stories(self, sprint_id: str) -> list[JiraStory]:
        """
        Get the stories of a sprint, newest first.

        Only the first page of results is read, so at most ``MAX_STORIES``
        stories are returned.

        Args:
            sprint_id: The sprint id

        Returns:
            Stories in the order Jira returns them

        Raises:
            TrackerRequestError: On 401/403/404 or when Jira is unreachable
            StoriesFetchFailedError: On any other failure
        """
        jql = build_sprint_stories_jql(sprint_id)
        # Cloud retired POST /search in favour of /search/jql
        url = (
            f"{self.api_path}/search/jql"
            if self.config.is_cloud
            else f"{self.api_path}/search"
        )
        body = {
            "jql": jql,
            "fields": STORY_LIST_FIELDS,
            "maxResults": MAX_STORIES,
        }
        logger.info(f"Fetching Jira stories with JQL: {jql}")
        logger.debug(f"Search request to {url}: {body}")

        try:
            response = self.jira.post(url, json=body)
            if not isinstance(response, dict):
                msg = f"Unexpected return value type from issue search: {type(response)}"
                logger.error(msg)
                raise TypeError(msg)
        except Exception as e:
            raise self._classify_error(
                e, "Failed to fetch stories from Jira", StoriesFetchFailedError
            ) from e

        issues = response.get("issues") or []
        logger.info(f"Number of issues found: {len(issues)}")
        if len(issues) > MAX_STORIES:
            logger.debug(f"Truncating {len(issues)} issues to {MAX_STORIES}")
        return [JiraStory.from_api_response(issue) for issue in issues[:MAX_STORIES]]
