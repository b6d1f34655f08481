"""
Jira issue models.

Stories as listed by a sprint search, and the flattened story details used
as input for test generation.
"""

import logging
from typing import Any

from ...utils.adf import first_text_run, is_adf_document
from ..base import ApiModel
from ..constants import EMPTY_STRING

logger = logging.getLogger(__name__)


class JiraStory(ApiModel):
    """
    Model representing a story in a sprint listing.

    ``id`` is the issue key (e.g. ``PROJ-123``), ``title`` its summary.
    """

    id: str = EMPTY_STRING
    title: str = EMPTY_STRING

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraStory":
        """
        Create a JiraStory from an issue of a search response.

        Args:
            data: The issue data from the Jira API

        Returns:
            A JiraStory instance
        """
        if not data or not isinstance(data, dict):
            logger.debug("Received empty or non-dictionary issue data")
            return cls()

        fields = data.get("fields") or {}
        return cls(
            id=str(data.get("key", EMPTY_STRING)),
            title=str(fields.get("summary") or EMPTY_STRING),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for API response."""
        return {"id": self.id, "title": self.title}


class JiraStoryDetails(ApiModel):
    """
    Model representing the details of a single story.

    ``description`` and ``acceptance_criteria`` are plain text; a missing
    value is always an empty string, never ``None``.
    """

    title: str = EMPTY_STRING
    description: str = EMPTY_STRING
    acceptance_criteria: str = EMPTY_STRING

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "JiraStoryDetails":
        """
        Create JiraStoryDetails from an issue response.

        Args:
            data: The issue data from the Jira API
            **kwargs: Field ids to read, ``summary_field``,
                ``description_field`` and ``acceptance_criteria_field``

        Returns:
            A JiraStoryDetails instance

        Raises:
            ValueError: If the acceptance criteria field holds something that
                is neither text nor a rich text document
        """
        if not data or not isinstance(data, dict):
            logger.debug("Received empty or non-dictionary issue data")
            return cls()

        summary_field = kwargs.get("summary_field", "summary")
        description_field = kwargs.get("description_field", "description")
        criteria_field = kwargs.get("acceptance_criteria_field", "customfield_10020")

        fields = data.get("fields") or {}

        criteria = fields.get(criteria_field)
        if criteria is None:
            acceptance_criteria = EMPTY_STRING
        elif isinstance(criteria, str) or is_adf_document(criteria):
            acceptance_criteria = first_text_run(criteria)
        else:
            msg = (
                f"Field {criteria_field} holds a {type(criteria).__name__}, "
                "not text. Configure the acceptance criteria field for this "
                "Jira instance."
            )
            raise ValueError(msg)

        return cls(
            title=str(fields.get(summary_field) or EMPTY_STRING),
            description=first_text_run(fields.get(description_field)),
            acceptance_criteria=acceptance_criteria,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for API response."""
        return {
            "title": self.title,
            "description": self.description,
            "acceptanceCriteria": self.acceptance_criteria,
        }
