"""Module for Jira sprints operations."""

import logging

from ..exceptions import SprintsFetchFailedError
from ..models.jira import JiraSprint
from .boards import BoardsMixin

logger = logging.getLogger("testgen-jira.jira")


class SprintsMixin(BoardsMixin):
    """Mixin for Jira sprints operations."""

    def get_sprints(self, project_key: str) -> list[JiraSprint]:
        """
        Get the sprints of a project.

        The project's board is resolved first and its sprints fetched
        afterwards; the second request needs the board id, so the two are
        never issued in parallel.

        Args:
            project_key: Project key (e.g. 'PROJ')

        Returns:
            Sprints of the project's first board, ids as strings

        Raises:
            NoBoardFoundError: If the project has no board
            TrackerRequestError: On 401/403/404 or when Jira is unreachable
            SprintsFetchFailedError: On any other failure; ``step`` tells
                whether the board or the sprint lookup failed
        """
        board = self.get_project_board(project_key)

        try:
            sprints = self.jira.get_all_sprints_from_board(board_id=board.id)
            if not isinstance(sprints, dict):
                msg = f"Unexpected return value type from sprint listing: {type(sprints)}"
                logger.error(msg)
                raise TypeError(msg)
        except Exception as e:
            raise self._classify_error(
                e,
                f"Failed to fetch sprints of board {board.id} from Jira",
                SprintsFetchFailedError,
                step=SprintsFetchFailedError.SPRINT_LOOKUP,
            ) from e

        values = sprints.get("values") or []
        logger.info(
            f"Number of sprints found for project {project_key} "
            f"(board {board.id}): {len(values)}"
        )
        return [JiraSprint.from_api_response(sprint) for sprint in values]
