"""Jira API module for testgen-jira.

The read operations live in mixins; :class:`JiraFetcher` combines them.
"""

from .client import JiraClient
from .config import JiraConfig
from .field_mapping import FieldMapping
from .fields import FieldsMixin
from .issues import IssuesMixin
from .projects import ProjectsMixin
from .search import SearchMixin
from .sprints import SprintsMixin


class JiraFetcher(
    ProjectsMixin,
    SprintsMixin,
    SearchMixin,
    IssuesMixin,
    FieldsMixin,
):
    """
    The Jira client used by the facade.

    - ProjectsMixin: project listing
    - SprintsMixin: board resolution and sprint listing
    - SearchMixin: stories of a sprint
    - IssuesMixin: story details
    - FieldsMixin: field mapping verification
    """

    @classmethod
    def from_credentials(
        cls,
        base_url: str | None,
        email: str | None,
        token: str | None,
        acceptance_criteria_field: str | None = None,
    ) -> "JiraFetcher":
        """
        Build a fetcher from the fields of a connect request.

        Raises:
            InvalidConfigurationError: If a field is missing or the
                acceptance criteria field id is malformed
        """
        config = JiraConfig.from_credentials(
            base_url,
            email,
            token,
            acceptance_criteria_field=acceptance_criteria_field,
        )
        return cls(config=config)


__all__ = ["JiraFetcher", "JiraConfig", "JiraClient", "FieldMapping"]
