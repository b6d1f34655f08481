"""Tests for the Starlette facade."""

import os
from unittest.mock import MagicMock, patch

import pytest
import requests
from starlette.testclient import TestClient

from testgen_jira.servers import ConnectionRegistry, create_app
from testgen_jira.servers.app import SESSION_HEADER
from tests.fixtures.jira_mocks import (
    MOCK_JIRA_BOARDS,
    MOCK_JIRA_NO_BOARDS,
    MOCK_JIRA_PROJECTS,
    MOCK_JIRA_SPRINTS,
    MOCK_JIRA_STORY_ADF,
    make_http_error,
    make_search_response,
)

CREDENTIALS = {"baseUrl": "https://x.atlassian.net", "email": "a@b.com", "token": "t"}


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def client(registry):
    app = create_app(registry=registry, preload_from_env=False, cors_origins=["*"])
    return TestClient(app)


@pytest.fixture
def mock_jira():
    """Patch the atlassian Jira class used by every new connection."""
    with patch("testgen_jira.jira.client.Jira") as mock_jira_cls:
        yield mock_jira_cls.return_value


@pytest.fixture
def connected(client, mock_jira):
    """Connect with the default credentials and return the session id."""
    response = client.post("/api/jira/connect", json=CREDENTIALS)
    assert response.status_code == 200
    return response.json()["sessionId"]


def test_health_check(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestConnect:
    def test_connect(self, client, registry, mock_jira):
        response = client.post("/api/jira/connect", json=CREDENTIALS)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Connected to Jira successfully"
        assert body["sessionId"]
        fetcher = registry.get(body["sessionId"])
        assert fetcher.config.url == "https://x.atlassian.net"
        assert fetcher.config.username == "a@b.com"

    def test_connect_sends_no_request(self, client, mock_jira):
        client.post("/api/jira/connect", json=CREDENTIALS)

        assert mock_jira.get.call_count == 0
        assert mock_jira.post.call_count == 0

    @pytest.mark.parametrize("missing", ["baseUrl", "email", "token"])
    def test_connect_missing_field(self, client, registry, missing):
        body = {k: v for k, v in CREDENTIALS.items() if k != missing}

        response = client.post("/api/jira/connect", json=body)

        assert response.status_code == 400
        assert response.json() == {
            "error": "Base URL, email, and token are required",
            "kind": "invalid_configuration",
        }
        assert len(registry) == 0

    def test_connect_invalid_json(self, client):
        response = client.post(
            "/api/jira/connect",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["kind"] == "invalid_configuration"

    def test_connect_body_not_utf8(self, client, registry):
        response = client.post(
            "/api/jira/connect",
            content=b'{"baseUrl": "\xff"}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["kind"] == "invalid_configuration"
        assert len(registry) == 0

    def test_connect_non_string_field(self, client, registry):
        response = client.post("/api/jira/connect", json={**CREDENTIALS, "baseUrl": 5})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Base URL, email, and token must be strings",
            "kind": "invalid_configuration",
        }
        assert len(registry) == 0

    def test_connect_invalid_field_id(self, client, mock_jira):
        response = client.post(
            "/api/jira/connect",
            json={**CREDENTIALS, "acceptanceCriteriaField": "not a field"},
        )

        assert response.status_code == 400
        assert "not a valid Jira field id" in response.json()["error"]

    def test_connect_custom_field(self, client, registry, mock_jira):
        response = client.post(
            "/api/jira/connect",
            json={**CREDENTIALS, "acceptanceCriteriaField": "customfield_10100"},
        )

        fetcher = registry.get(response.json()["sessionId"])
        assert fetcher.field_mapping.acceptance_criteria == "customfield_10100"

    def test_connect_verify_fields(self, client, registry, mock_jira):
        mock_jira.get.return_value = [
            {"id": "summary"},
            {"id": "description"},
            {"id": "customfield_10020"},
        ]

        response = client.post(
            "/api/jira/connect", json={**CREDENTIALS, "verifyFields": True}
        )

        assert response.status_code == 200
        mock_jira.get.assert_called_once_with("rest/api/3/field")

    def test_connect_verify_fields_missing(self, client, registry, mock_jira):
        mock_jira.get.return_value = [{"id": "summary"}, {"id": "description"}]

        response = client.post(
            "/api/jira/connect", json={**CREDENTIALS, "verifyFields": True}
        )

        assert response.status_code == 400
        assert "customfield_10020" in response.json()["error"]
        assert len(registry) == 0

    def test_connect_unexpected_error(self, client):
        with patch(
            "testgen_jira.servers.app.JiraFetcher.from_credentials",
            side_effect=RuntimeError("boom"),
        ):
            response = client.post("/api/jira/connect", json=CREDENTIALS)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to connect to Jira"}


class TestDisconnect:
    def test_disconnect(self, client, registry, connected):
        response = client.delete("/api/jira/connect", headers={SESSION_HEADER: connected})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert len(registry) == 0

    def test_disconnect_requires_header(self, client, connected):
        response = client.delete("/api/jira/connect")

        assert response.status_code == 400

    def test_disconnect_unknown_session(self, client):
        response = client.delete("/api/jira/connect", headers={SESSION_HEADER: "nope"})

        assert response.status_code == 400
        assert response.json()["kind"] == "not_connected"


class TestNotConnected:
    @pytest.mark.parametrize(
        "path",
        [
            "/api/jira/projects",
            "/api/jira/sprints/ABC",
            "/api/jira/stories?sprint=7",
            "/api/jira/stories",
            "/api/jira/story/ABC-1",
        ],
    )
    def test_requires_connection(self, client, path):
        response = client.get(path)

        assert response.status_code == 400
        assert response.json() == {
            "error": "Not connected to Jira. Please connect first.",
            "kind": "not_connected",
        }

    def test_unknown_session_header(self, client, connected):
        response = client.get("/api/jira/projects", headers={SESSION_HEADER: "nope"})

        assert response.status_code == 400
        assert "Unknown or expired Jira session" in response.json()["error"]


class TestProjects:
    def test_list_projects(self, client, mock_jira, connected):
        mock_jira.get.return_value = [MOCK_JIRA_PROJECTS[0]]

        response = client.get("/api/jira/projects")

        assert response.status_code == 200
        assert response.json() == [{"id": "10000", "key": "ABC", "name": "Alpha"}]

    def test_list_projects_auth_error(self, client, mock_jira, connected):
        mock_jira.get.side_effect = make_http_error(401)

        response = client.get("/api/jira/projects")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Authentication failed. Check your Jira email and API token.",
            "kind": "authentication_failed",
        }

    def test_unexpected_error_hides_details(self, client, registry):
        fetcher = MagicMock()
        fetcher.get_projects.side_effect = RuntimeError("secret internals")
        registry.connect(fetcher)

        response = client.get("/api/jira/projects")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch projects from Jira"}

    def test_session_header_selects_connection(self, client, registry):
        first, second = MagicMock(), MagicMock()
        first.get_projects.return_value = []
        second.get_projects.return_value = []
        first_id = registry.connect(first)
        registry.connect(second)

        client.get("/api/jira/projects", headers={SESSION_HEADER: first_id})

        first.get_projects.assert_called_once_with()
        second.get_projects.assert_not_called()


class TestSprints:
    def test_list_sprints(self, client, mock_jira, connected):
        mock_jira.get_all_agile_boards.return_value = MOCK_JIRA_BOARDS
        mock_jira.get_all_sprints_from_board.return_value = {
            "values": [MOCK_JIRA_SPRINTS["values"][1]]
        }

        response = client.get("/api/jira/sprints/ABC")

        assert response.status_code == 200
        assert response.json() == [{"id": "7", "name": "Sprint 1", "state": "active"}]
        mock_jira.get_all_agile_boards.assert_called_once_with(project_key="ABC")
        mock_jira.get_all_sprints_from_board.assert_called_once_with(board_id="5")

    def test_list_sprints_no_board(self, client, mock_jira, connected):
        mock_jira.get_all_agile_boards.return_value = MOCK_JIRA_NO_BOARDS

        response = client.get("/api/jira/sprints/ABC")

        assert response.status_code == 500
        assert response.json() == {
            "error": "No boards found for project ABC",
            "kind": "no_board_found",
            "step": "board_lookup",
        }

    def test_list_sprints_failure_step(self, client, mock_jira, connected):
        mock_jira.get_all_agile_boards.return_value = MOCK_JIRA_BOARDS
        mock_jira.get_all_sprints_from_board.side_effect = make_http_error(400)

        response = client.get("/api/jira/sprints/ABC")

        assert response.status_code == 500
        assert response.json()["step"] == "sprint_lookup"


class TestStories:
    def test_list_stories(self, client, mock_jira, connected):
        mock_jira.post.return_value = make_search_response(2)

        response = client.get("/api/jira/stories", params={"sprint": "7"})

        assert response.status_code == 200
        assert response.json() == [
            {"id": "ABC-2", "title": "Story number 2"},
            {"id": "ABC-1", "title": "Story number 1"},
        ]

    def test_list_stories_requires_sprint(self, client, mock_jira, connected):
        response = client.get("/api/jira/stories")

        assert response.status_code == 400
        assert response.json() == {
            "error": "Sprint ID is required",
            "kind": "invalid_configuration",
        }
        mock_jira.post.assert_not_called()

    def test_list_stories_unreachable(self, client, mock_jira, connected):
        mock_jira.post.side_effect = requests.ConnectionError("refused")

        response = client.get("/api/jira/stories", params={"sprint": "7"})

        assert response.status_code == 500
        assert response.json()["kind"] == "network_unreachable"


class TestStoryDetails:
    def test_get_story(self, client, mock_jira, connected):
        mock_jira.get.return_value = MOCK_JIRA_STORY_ADF

        response = client.get("/api/jira/story/ABC-42")

        assert response.status_code == 200
        assert response.json() == {
            "title": "As a shopper I can pay with a saved card",
            "description": "Saved cards are listed at checkout.",
            "acceptanceCriteria": "Given a saved card, when I pay, then the order is placed",
        }

    def test_get_story_not_found(self, client, mock_jira, connected):
        mock_jira.get.side_effect = make_http_error(404)

        response = client.get("/api/jira/story/ABC-404")

        assert response.status_code == 500
        assert response.json()["kind"] == "endpoint_not_found"


class TestLifespan:
    def test_preloads_connection_from_env(self, registry, mock_jira):
        env = {
            "JIRA_URL": "https://x.atlassian.net",
            "JIRA_USERNAME": "a@b.com",
            "JIRA_API_TOKEN": "t",
        }
        with patch.dict(os.environ, env, clear=True):
            with TestClient(create_app(registry=registry)) as client:
                mock_jira.get.return_value = [MOCK_JIRA_PROJECTS[0]]
                response = client.get("/api/jira/projects")

        assert response.status_code == 200
        assert len(registry) == 1

    def test_no_preload_without_env(self, registry):
        with patch.dict(os.environ, {}, clear=True):
            with TestClient(create_app(registry=registry)):
                pass

        assert len(registry) == 0

    def test_invalid_env_does_not_stop_startup(self, registry):
        with patch.dict(os.environ, {"JIRA_URL": "https://x.atlassian.net"}, clear=True):
            with TestClient(create_app(registry=registry)) as client:
                assert client.get("/healthz").status_code == 200

        assert len(registry) == 0


def test_cors_preflight(registry):
    app = create_app(
        registry=registry,
        preload_from_env=False,
        cors_origins=["http://localhost:5173"],
    )
    client = TestClient(app)

    response = client.options(
        "/api/jira/projects",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": SESSION_HEADER,
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
