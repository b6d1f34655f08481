"""Field mapping between the story schema and Jira field ids.

Custom field ids differ across Jira instances, so the ids read for a story
are held in an explicit, versioned table instead of being hardcoded at the
call sites.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..exceptions import InvalidConfigurationError
from .config import DEFAULT_ACCEPTANCE_CRITERIA_FIELD

FIELD_MAPPING_VERSION = 1

FIELD_ID_PATTERN = re.compile(r"^[a-z][a-zA-Z0-9_]*$")


class FieldMapping(BaseModel):
    """Jira field ids read when fetching story details."""

    model_config = ConfigDict(frozen=True)

    version: int = FIELD_MAPPING_VERSION
    summary: str = "summary"
    description: str = "description"
    acceptance_criteria: str = DEFAULT_ACCEPTANCE_CRITERIA_FIELD

    @field_validator("summary", "description", "acceptance_criteria")
    @classmethod
    def _check_field_id(cls, value: str) -> str:
        if not FIELD_ID_PATTERN.match(value):
            raise ValueError(f"'{value}' is not a valid Jira field id")
        return value

    @field_validator("version")
    @classmethod
    def _check_version(cls, value: int) -> int:
        if value != FIELD_MAPPING_VERSION:
            raise ValueError(
                f"Unsupported field mapping version {value}, "
                f"expected {FIELD_MAPPING_VERSION}"
            )
        return value

    @classmethod
    def build(cls, **field_ids: Any) -> "FieldMapping":
        """Build a mapping, reporting bad ids as a configuration error.

        Args:
            **field_ids: Overrides for ``summary``, ``description``,
                ``acceptance_criteria`` or ``version``; ``None`` keeps the default

        Returns:
            The validated FieldMapping

        Raises:
            InvalidConfigurationError: If a field id or the version is invalid
        """
        try:
            return cls(**{k: v for k, v in field_ids.items() if v is not None})
        except ValidationError as e:
            errors = "; ".join(err["msg"] for err in e.errors())
            raise InvalidConfigurationError(f"Invalid field mapping: {errors}") from e

    @property
    def field_ids(self) -> list[str]:
        """Field ids in the order they are requested from Jira."""
        return [self.summary, self.description, self.acceptance_criteria]

    def as_request_param(self) -> str:
        """Comma-separated ``fields`` query parameter."""
        return ",".join(self.field_ids)

    def model_kwargs(self) -> dict[str, str]:
        """Keyword arguments for ``JiraStoryDetails.from_api_response``."""
        return {
            "summary_field": self.summary,
            "description_field": self.description,
            "acceptance_criteria_field": self.acceptance_criteria,
        }
