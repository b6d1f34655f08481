"""Starlette application exposing Jira data to the browser client."""

import logging
import os
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from ..exceptions import InvalidConfigurationError, TestgenJiraError
from ..jira import JiraConfig, JiraFetcher
from .registry import ConnectionRegistry

logger = logging.getLogger("testgen-jira.server")

SESSION_HEADER = "X-Session-Id"


def _error_response(error: TestgenJiraError) -> JSONResponse:
    return JSONResponse(error.to_dict(), status_code=error.status_code)


def _session_id(request: Request) -> str | None:
    return request.headers.get(SESSION_HEADER) or None


async def _call_fetcher(
    request: Request,
    call: Callable[[JiraFetcher], Any],
    failure_message: str,
) -> JSONResponse:
    """Run a fetcher operation for the request's session.

    Classified errors keep their message and status; anything else is
    logged and answered with ``failure_message`` only.
    """
    registry: ConnectionRegistry = request.app.state.registry
    try:
        fetcher = registry.get(_session_id(request))
        result = await run_in_threadpool(call, fetcher)
    except TestgenJiraError as e:
        logger.warning(f"{request.method} {request.url.path} failed: {e.message}")
        return _error_response(e)
    except Exception:
        logger.exception(f"Unexpected error handling {request.method} {request.url.path}")
        return JSONResponse({"error": failure_message}, status_code=500)
    return JSONResponse(result)


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


async def connect(request: Request) -> JSONResponse:
    """Create a Jira connection from ``{baseUrl, email, token}``."""
    try:
        body = await request.json()
    except ValueError:
        # malformed JSON or a body that is not UTF-8
        body = None
    if not isinstance(body, dict):
        return _error_response(
            InvalidConfigurationError("Request body must be a JSON object")
        )

    try:
        fetcher = JiraFetcher.from_credentials(
            body.get("baseUrl"),
            body.get("email"),
            body.get("token"),
            acceptance_criteria_field=body.get("acceptanceCriteriaField") or None,
        )
        if body.get("verifyFields"):
            await run_in_threadpool(fetcher.verify_field_mapping)
    except TestgenJiraError as e:
        logger.warning(f"Jira connect rejected: {e.message}")
        return _error_response(e)
    except Exception:
        logger.exception("Error connecting to Jira")
        return JSONResponse({"error": "Failed to connect to Jira"}, status_code=500)

    registry: ConnectionRegistry = request.app.state.registry
    session_id = registry.connect(fetcher)
    return JSONResponse(
        {
            "success": True,
            "message": "Connected to Jira successfully",
            "sessionId": session_id,
        }
    )


async def disconnect(request: Request) -> JSONResponse:
    """Close the session named by the session header."""
    session_id = _session_id(request)
    if not session_id:
        return _error_response(
            InvalidConfigurationError(f"{SESSION_HEADER} header is required")
        )
    registry: ConnectionRegistry = request.app.state.registry
    try:
        registry.disconnect(session_id)
    except TestgenJiraError as e:
        return _error_response(e)
    return JSONResponse({"success": True})


async def list_projects(request: Request) -> JSONResponse:
    return await _call_fetcher(
        request,
        lambda fetcher: [p.to_simplified_dict() for p in fetcher.get_projects()],
        "Failed to fetch projects from Jira",
    )


async def list_sprints(request: Request) -> JSONResponse:
    project_key = request.path_params["project_key"]
    return await _call_fetcher(
        request,
        lambda fetcher: [
            s.to_simplified_dict() for s in fetcher.get_sprints(project_key)
        ],
        "Failed to fetch sprints from Jira",
    )


async def list_stories(request: Request) -> JSONResponse:
    sprint_id = request.query_params.get("sprint")

    def call(fetcher: JiraFetcher) -> list[dict[str, Any]]:
        if not sprint_id:
            raise InvalidConfigurationError("Sprint ID is required")
        return [story.to_simplified_dict() for story in fetcher.get_stories(sprint_id)]

    return await _call_fetcher(request, call, "Failed to fetch stories from Jira")


async def get_story(request: Request) -> JSONResponse:
    issue_id = request.path_params["issue_id"]
    return await _call_fetcher(
        request,
        lambda fetcher: fetcher.get_story_details(issue_id).to_simplified_dict(),
        "Failed to fetch story details from Jira",
    )


jira_routes = [
    Route("/connect", connect, methods=["POST"]),
    Route("/connect", disconnect, methods=["DELETE"]),
    Route("/projects", list_projects, methods=["GET"]),
    Route("/sprints/{project_key}", list_sprints, methods=["GET"]),
    Route("/stories", list_stories, methods=["GET"]),
    Route("/story/{issue_id}", get_story, methods=["GET"]),
]


def _preload_connection(registry: ConnectionRegistry) -> None:
    """Register a default connection when Jira credentials are in the environment."""
    if not os.getenv("JIRA_URL"):
        logger.info("JIRA_URL not set; waiting for a connect request.")
        return
    try:
        config = JiraConfig.from_env()
        registry.connect(JiraFetcher(config=config))
        logger.info("Default Jira connection loaded from environment.")
    except TestgenJiraError as e:
        logger.error(f"Failed to load Jira configuration: {e.message}")


def create_app(
    registry: ConnectionRegistry | None = None,
    preload_from_env: bool = True,
    cors_origins: list[str] | None = None,
) -> Starlette:
    """
    Build the facade application.

    Args:
        registry: Connection registry to use; a new one when omitted
        preload_from_env: Whether to connect with JIRA_* variables at startup
        cors_origins: Allowed browser origins; ``TESTGEN_CORS_ORIGINS`` or
            ``*`` when omitted

    Returns:
        The Starlette application
    """
    if cors_origins is None:
        cors_origins = [
            origin.strip()
            for origin in os.getenv("TESTGEN_CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        logger.info("testgen-jira server starting...")
        if preload_from_env:
            _preload_connection(app.state.registry)
        yield
        logger.info("testgen-jira server shutting down.")

    app = Starlette(
        routes=[
            Route("/healthz", health_check, methods=["GET"]),
            Mount("/api/jira", routes=jira_routes),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=cors_origins,
                allow_methods=["GET", "POST", "DELETE"],
                allow_headers=["Content-Type", SESSION_HEADER],
            )
        ],
        lifespan=lifespan,
    )
    app.state.registry = registry if registry is not None else ConnectionRegistry()
    return app
