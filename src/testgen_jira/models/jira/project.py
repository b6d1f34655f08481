"""
Jira project models.
"""

import logging
from typing import Any

from ..base import ApiModel
from ..constants import EMPTY_STRING, JIRA_DEFAULT_ID, UNKNOWN

logger = logging.getLogger(__name__)


class JiraProject(ApiModel):
    """
    Model representing a Jira project.

    Only the identifying fields are kept; ``key`` is the short project code
    used to look up boards and sprints.
    """

    id: str = JIRA_DEFAULT_ID
    key: str = EMPTY_STRING
    name: str = UNKNOWN

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraProject":
        """
        Create a JiraProject from a Jira API response.

        Args:
            data: The project data from the Jira API

        Returns:
            A JiraProject instance
        """
        if not data or not isinstance(data, dict):
            logger.debug("Received empty or non-dictionary project data")
            return cls()

        project_id = data.get("id", JIRA_DEFAULT_ID)
        if project_id is not None:
            project_id = str(project_id)

        return cls(
            id=project_id,
            key=str(data.get("key", EMPTY_STRING)),
            name=str(data.get("name", UNKNOWN)),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for API response."""
        return {
            "id": self.id,
            "key": self.key,
            "name": self.name,
        }
