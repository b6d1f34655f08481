"""
Jira agile models.

Boards and sprints from the agile REST API (``rest/agile/1.0``).
"""

import logging
from typing import Any

from ..base import ApiModel
from ..constants import JIRA_DEFAULT_ID, UNKNOWN

logger = logging.getLogger(__name__)


class JiraBoard(ApiModel):
    """
    Model representing a Jira board.

    Boards are only used to resolve sprints from a project key and are never
    returned to callers.
    """

    id: str = JIRA_DEFAULT_ID
    name: str = UNKNOWN
    type: str = UNKNOWN

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraBoard":
        """
        Create a JiraBoard from a Jira API response.

        Args:
            data: The board data from the Jira API

        Returns:
            A JiraBoard instance
        """
        if not data or not isinstance(data, dict):
            logger.debug("Received empty or non-dictionary board data")
            return cls()

        board_id = data.get("id", JIRA_DEFAULT_ID)
        if board_id is not None:
            board_id = str(board_id)

        return cls(
            id=board_id,
            name=str(data.get("name", UNKNOWN)),
            type=str(data.get("type", UNKNOWN)),
        )


class JiraSprint(ApiModel):
    """
    Model representing a Jira sprint.

    The id is always a string, whatever the tracker sends.
    """

    id: str = JIRA_DEFAULT_ID
    name: str = UNKNOWN
    state: str = UNKNOWN

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraSprint":
        """
        Create a JiraSprint from a Jira API response.

        Args:
            data: The sprint data from the Jira API

        Returns:
            A JiraSprint instance
        """
        if not data or not isinstance(data, dict):
            logger.debug("Received empty or non-dictionary sprint data")
            return cls()

        sprint_id = data.get("id", JIRA_DEFAULT_ID)
        if sprint_id is not None:
            sprint_id = str(sprint_id)

        return cls(
            id=sprint_id,
            name=str(data.get("name", UNKNOWN)),
            # future/active/closed, passed through verbatim
            state=str(data.get("state", UNKNOWN)),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for API response."""
        return {
            "id": self.id,
            "name": self.name,
            "state": self.state,
        }
