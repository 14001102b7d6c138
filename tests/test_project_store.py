"""Tests for ProjectStore."""

import asyncio
from unittest.mock import MagicMock

import httpx

from projboard.api import ApiClient, ApiClientError
from projboard.models import Team
from projboard.repositories import ApiRepository
from projboard.services import ProjectStore, StageRegistry

BASE_URL = "https://crm.example.com/api"


def make_store(repository) -> ProjectStore:
    return ProjectStore(repository, StageRegistry(repository))


class TestLoad:
    """Tests for loading the board."""

    def test_load_groups_projects(self, repository, two_stages, make_project):
        repository.get_stages.return_value = two_stages
        repository.get_projects.return_value = {
            "ideation": [make_project("p1")],
            "planning": [make_project("p2", "planning")],
        }
        store = make_store(repository)

        board = asyncio.run(store.load())

        assert board.column("ideation")[0].id == "p1"
        assert board.column("planning")[0].id == "p2"
        assert store.project_count == 2
        assert store.last_error is None

    def test_load_passes_team_filter(self, repository):
        store = make_store(repository)

        asyncio.run(store.load("t1"))

        repository.get_projects.assert_awaited_once_with("t1")
        assert store.team_filter == "t1"

    def test_failure_leaves_empty_valid_board(self, repository, two_stages):
        """Every stage is present, with no projects, after a failed load."""
        repository.get_stages.return_value = two_stages
        repository.get_projects.side_effect = ApiClientError("HTTP 503: unavailable")
        store = make_store(repository)

        board = asyncio.run(store.load())

        assert board.columns == {"ideation": [], "planning": []}
        assert "unavailable" in store.last_error

    def test_reload_keeps_team_filter(self, repository):
        store = make_store(repository)
        asyncio.run(store.load("t1"))

        asyncio.run(store.reload())

        assert repository.get_projects.await_args_list[-1].args == ("t1",)
        assert store.team_filter == "t1"

    def test_subscribers_notified(self, repository):
        store = make_store(repository)
        listener = MagicMock()
        unsubscribe = store.subscribe(listener)

        asyncio.run(store.load())
        unsubscribe()
        asyncio.run(store.load())

        listener.assert_called_once_with(store.board)


class TestTeams:
    def test_archived_teams_hidden(self, repository):
        repository.get_teams.return_value = [
            Team(id="t1", name="Marketing"),
            Team(id="t2", name="Old", is_archived=True),
        ]
        store = make_store(repository)

        teams = asyncio.run(store.load_teams())

        assert [t.id for t in teams] == ["t1"]

    def test_failure_keeps_previous(self, repository):
        repository.get_teams.side_effect = [
            [Team(id="t1", name="Marketing")],
            ApiClientError("down"),
        ]
        store = make_store(repository)

        asyncio.run(store.load_teams())
        teams = asyncio.run(store.load_teams())

        assert [t.id for t in teams] == ["t1"]


class TestLocalMutations:
    """Tests for synchronous board changes."""

    def _loaded(self, repository, two_stages, make_project) -> ProjectStore:
        repository.get_stages.return_value = two_stages
        repository.get_projects.return_value = {
            "ideation": [make_project("p1"), make_project("p2")],
        }
        store = make_store(repository)
        asyncio.run(store.load())
        return store

    def test_move_local(self, repository, two_stages, make_project):
        store = self._loaded(repository, two_stages, make_project)

        moved = store.move_local("p1", "ideation", "planning")

        assert moved.current_stage == "planning"
        assert store.board.project_ids() == ["p2", "p1"]
        assert store.find_project("p1", "planning") is moved

    def test_move_local_wrong_source(self, repository, two_stages, make_project):
        store = self._loaded(repository, two_stages, make_project)
        assert store.move_local("p1", "planning", "ideation") is None

    def test_move_local_unknown_target(self, repository, two_stages, make_project):
        store = self._loaded(repository, two_stages, make_project)
        assert store.move_local("p1", "ideation", "review") is None
        assert store.board.find_stage("p1") == "ideation"

    def test_remove(self, repository, two_stages, make_project):
        store = self._loaded(repository, two_stages, make_project)

        removed = store.remove("p2", "ideation")

        assert removed.id == "p2"
        assert store.board.project_ids() == ["p1"]
        assert store.remove("p2", "ideation") is None

    def test_insert_sets_stage(self, repository, two_stages, make_project):
        store = self._loaded(repository, two_stages, make_project)

        inserted = store.insert(make_project("p3", "ideation"), "planning")

        assert inserted.current_stage == "planning"
        assert store.board.column("planning") == [inserted]

    def test_replace_notifies(self, repository, two_stages, make_project):
        store = self._loaded(repository, two_stages, make_project)
        snapshot = store.board.copy_board()
        store.remove("p1", "ideation")
        listener = MagicMock()
        store.subscribe(listener)

        store.replace(snapshot)

        assert store.board.project_ids() == ["p1", "p2"]
        listener.assert_called_once_with(snapshot)


class TestMalformedResponses:
    """Well-formed JSON with the wrong shape still leaves a valid board."""

    def _store(self, routes) -> ProjectStore:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=routes[request.url.path])

        client = ApiClient(BASE_URL, transport=httpx.MockTransport(handler))
        return make_store(ApiRepository(client))

    def test_array_stage_body_falls_back(self):
        store = self._store({"/api/project-stages": [], "/api/projects": {"projects": []}})

        board = asyncio.run(store.load())

        assert list(board.columns) == [
            "ideation",
            "planning",
            "in_progress",
            "review",
            "complete",
        ]
        assert store.stage_registry.loaded_from_fallback is True

    def test_array_projects_body_leaves_empty_board(self):
        store = self._store(
            {
                "/api/project-stages": {"stages": []},
                "/api/projects": ["oops"],
            }
        )

        board = asyncio.run(store.load())

        assert board.project_count == 0
        assert len(board.columns) == 5
        assert "Unexpected response shape" in store.last_error
