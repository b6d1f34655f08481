"""Module for Jira boards operations."""

import logging

from ..exceptions import NoBoardFoundError, SprintsFetchFailedError
from ..models.jira import JiraBoard
from .client import JiraClient

logger = logging.getLogger("testgen-jira.jira")


class BoardsMixin(JiraClient):
    """Mixin for Jira boards operations."""

    def get_project_board(self, project_key: str) -> JiraBoard:
        """
        Resolve the board used for a project's sprints.

        When a project has several boards the first one in Jira's ordering
        is used.

        Args:
            project_key: Project key (e.g. 'PROJ')

        Returns:
            The project's first board

        Raises:
            NoBoardFoundError: If the project has no board
            TrackerRequestError: On 401/403/404 or when Jira is unreachable
            SprintsFetchFailedError: On any other failure, with step "board_lookup"
        """
        try:
            boards = self.jira.get_all_agile_boards(project_key=project_key)
            if not isinstance(boards, dict):
                msg = f"Unexpected return value type from board listing: {type(boards)}"
                logger.error(msg)
                raise TypeError(msg)
        except Exception as e:
            raise self._classify_error(
                e,
                f"Failed to fetch boards for project {project_key} from Jira",
                SprintsFetchFailedError,
                step=SprintsFetchFailedError.BOARD_LOOKUP,
            ) from e

        values = boards.get("values") or []
        if not values:
            logger.warning(f"No boards found for project {project_key}")
            raise NoBoardFoundError(project_key)

        board = JiraBoard.from_api_response(values[0])
        if len(values) > 1:
            logger.debug(
                f"Project {project_key} has {len(values)} boards, using "
                f"board {board.id} ({board.name})"
            )
        return board
