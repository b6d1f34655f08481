"""Module for Jira field operations."""

import logging
from typing import Any

from ..exceptions import FetchFailedError, InvalidConfigurationError
from .client import JiraClient

logger = logging.getLogger("testgen-jira.jira")


class FieldsMixin(JiraClient):
    """Mixin for Jira field operations.

    Field ids, especially custom ones, differ between Jira instances; this
    mixin checks the configured field mapping against the live schema.
    """

    def get_fields(self) -> list[dict[str, Any]]:
        """
        Get all field definitions of the Jira instance.

        Returns:
            List of field definitions

        Raises:
            TrackerRequestError: On 401/403/404 or when Jira is unreachable
            FetchFailedError: On any other failure
        """
        try:
            fields = self.jira.get(f"{self.api_path}/field")
            if not isinstance(fields, list):
                msg = f"Unexpected return value type from field listing: {type(fields)}"
                logger.error(msg)
                raise TypeError(msg)
            return fields
        except Exception as e:
            raise self._classify_error(
                e, "Failed to fetch fields from Jira", FetchFailedError
            ) from e

    def verify_field_mapping(self) -> None:
        """
        Check that every mapped field id exists on this Jira instance.

        Raises:
            InvalidConfigurationError: If a mapped field id is unknown
        """
        known_ids = {
            field.get("id") for field in self.get_fields() if isinstance(field, dict)
        }
        missing = [
            field_id
            for field_id in self.field_mapping.field_ids
            if field_id not in known_ids
        ]
        if missing:
            msg = (
                f"Jira instance {self.config.url} has no field(s) "
                f"{', '.join(missing)}. Check the acceptance criteria field setting."
            )
            logger.error(msg)
            raise InvalidConfigurationError(msg)
        logger.info(f"Field mapping verified against {len(known_ids)} Jira fields")
