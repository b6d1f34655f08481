"""Error taxonomy for the Jira integration layer.

Every error raised by the client or the facade derives from
:class:`TestgenJiraError`, which carries a short ``kind`` identifier and the
HTTP status the facade answers with.
"""


class TestgenJiraError(Exception):
    """Base class for all classified errors."""

    __test__ = False  # keep pytest from collecting this as a test class

    kind = "error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Body returned to facade callers."""
        return {"error": self.message, "kind": self.kind}


class InvalidConfigurationError(TestgenJiraError):
    """Required connection settings are missing or malformed."""

    kind = "invalid_configuration"
    status_code = 400


class NotConnectedError(TestgenJiraError):
    """An operation was invoked before a connection was established."""

    kind = "not_connected"
    status_code = 400

    def __init__(self, message: str = "Not connected to Jira. Please connect first.") -> None:
        super().__init__(message)


class TrackerRequestError(TestgenJiraError):
    """The tracker answered with a status the user can act on, or not at all."""

    kind = "tracker_request"


class AuthenticationFailedError(TrackerRequestError):
    """Raised when the tracker rejects the credentials (HTTP 401)."""

    kind = "authentication_failed"

    def __init__(
        self,
        message: str = "Authentication failed. Check your Jira email and API token.",
    ) -> None:
        super().__init__(message)


class AccessDeniedError(TrackerRequestError):
    """Raised when the credentials are valid but lack permission (HTTP 403)."""

    kind = "access_denied"

    def __init__(
        self,
        message: str = "Access denied. Your Jira user does not have permission for this resource.",
    ) -> None:
        super().__init__(message)


class EndpointNotFoundError(TrackerRequestError):
    """Raised when the base URL or resource path is wrong (HTTP 404)."""

    kind = "endpoint_not_found"

    def __init__(
        self,
        message: str = "Jira API endpoint not found. Check your Jira base URL.",
    ) -> None:
        super().__init__(message)


class NetworkUnreachableError(TrackerRequestError):
    """Raised when a request never got a response."""

    kind = "network_unreachable"

    def __init__(
        self,
        message: str = "No response from Jira server. Check your network connection and Jira base URL.",
    ) -> None:
        super().__init__(message)


class FetchFailedError(TestgenJiraError):
    """Generic failure of a read operation, carrying the upstream message."""

    kind = "fetch_failed"


class SprintsFetchFailedError(FetchFailedError):
    """Sprint listing failed.

    ``step`` names the half of the two-step lookup that failed:
    ``"board_lookup"`` or ``"sprint_lookup"``.
    """

    kind = "sprints_fetch_failed"

    BOARD_LOOKUP = "board_lookup"
    SPRINT_LOOKUP = "sprint_lookup"

    def __init__(self, message: str, step: str) -> None:
        super().__init__(message)
        self.step = step

    def to_dict(self) -> dict[str, str]:
        body = super().to_dict()
        body["step"] = self.step
        return body


class NoBoardFoundError(SprintsFetchFailedError):
    """The project has no board, which is distinct from having no sprints."""

    kind = "no_board_found"

    def __init__(self, project_key: str) -> None:
        super().__init__(
            f"No boards found for project {project_key}",
            step=SprintsFetchFailedError.BOARD_LOOKUP,
        )
        self.project_key = project_key


class StoriesFetchFailedError(FetchFailedError):
    """Story listing failed."""

    kind = "stories_fetch_failed"


class StoryDetailsFetchFailedError(FetchFailedError):
    """Story detail retrieval failed."""

    kind = "story_details_fetch_failed"
