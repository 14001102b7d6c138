"""Tests for the project creation wizard state."""

import asyncio
from datetime import date

import pytest
from pydantic import ValidationError

from projboard.api import ApiClientError
from projboard.models import ProjectDraft, ProjectType
from projboard.services import CreationWorkflow, ProjectStore, StageRegistry, WizardStep


@pytest.fixture
def store(repository, two_stages):
    repository.get_stages.return_value = two_stages
    store = ProjectStore(repository, StageRegistry(repository))
    asyncio.run(store.load())
    return store


@pytest.fixture
def workflow(repository, store):
    return CreationWorkflow(repository, store)


class TestSteps:
    """Tests for step navigation."""

    def test_starts_at_type(self, workflow):
        assert workflow.step == WizardStep.TYPE
        assert workflow.draft == ProjectDraft()

    def test_next_and_previous_clamped(self, workflow):
        assert workflow.previous_step() == WizardStep.TYPE
        workflow.next_step()
        workflow.next_step()
        assert workflow.next_step() == WizardStep.ADVANCED
        assert workflow.previous_step() == WizardStep.DETAILS

    def test_update_validates(self, workflow):
        workflow.update(name="Gala", budget="1500")
        assert workflow.draft.budget == 1500.0

        with pytest.raises(ValidationError):
            workflow.update(target_date="next week")
        assert workflow.draft.target_date is None

    def test_can_submit_needs_details_and_name(self, workflow):
        workflow.update(name="Gala")
        assert not workflow.can_submit
        workflow.next_step()
        assert workflow.can_submit
        workflow.update(name="   ")
        assert not workflow.can_submit


class TestSuggestion:
    """Tests for request_suggestion."""

    def test_invalid_json_advances_with_defaults(self, workflow, repository):
        repository.suggest.return_value = "{ not valid json"

        result = asyncio.run(workflow.request_suggestion("a spring fundraiser"))

        assert result is None
        assert workflow.step == WizardStep.DETAILS
        assert workflow.draft == ProjectDraft()

    def test_service_failure_advances(self, workflow, repository):
        repository.suggest.side_effect = ApiClientError("HTTP 503")
        workflow.update(type="event")

        asyncio.run(workflow.request_suggestion("a spring fundraiser"))

        assert workflow.step == WizardStep.DETAILS
        assert workflow.draft.type == ProjectType.EVENT
        assert workflow.draft.name == ""

    def test_wrong_field_type_advances_with_defaults(self, workflow, repository):
        repository.suggest.return_value = '{"name": "X", "milestones": 5}'

        result = asyncio.run(workflow.request_suggestion("a spring fundraiser"))

        assert result is None
        assert workflow.step == WizardStep.DETAILS
        assert workflow.draft == ProjectDraft()

    def test_free_form_deadline_keeps_rest(self, workflow, repository):
        repository.suggest.return_value = (
            '{"name": "Spring Gala", "deadline": "Q2 2025", "milestones": ["Venue booked"]}'
        )

        asyncio.run(workflow.request_suggestion("a spring fundraiser"))

        assert workflow.draft.name == "Spring Gala"
        assert workflow.draft.milestones == ["Venue booked"]
        assert workflow.draft.target_date is None

    def test_suggestion_applied(self, workflow, repository):
        repository.suggest.return_value = (
            '```json\n{"name": "Spring Gala", "type": "event", '
            '"deadline": "2025-05-01", "tasks": ["Book venue"]}\n```'
        )

        suggestion = asyncio.run(workflow.request_suggestion("a spring fundraiser"))

        assert suggestion.name == "Spring Gala"
        assert workflow.step == WizardStep.DETAILS
        assert workflow.draft.name == "Spring Gala"
        assert workflow.draft.target_date == date(2025, 5, 1)
        assert workflow.suggested_tasks == ["Book venue"]
        prompt = repository.suggest.await_args.args[0]
        assert "a spring fundraiser" in prompt


class TestSubmit:
    """Tests for CreationWorkflow.submit."""

    def test_blank_name_rejected_without_call(self, workflow, repository):
        workflow.next_step()

        assert asyncio.run(workflow.submit()) is None
        assert workflow.error == "Project name is required"
        repository.create_project.assert_not_called()

    def test_step_one_rejected(self, workflow, repository):
        workflow.update(name="Gala")

        assert asyncio.run(workflow.submit()) is None
        repository.create_project.assert_not_called()

    def test_success_inserts_and_resets(self, workflow, repository, store, make_project):
        repository.create_project.return_value = make_project("p9", "ideation", name="Gala")
        workflow.next_step()
        workflow.update(name="Gala")

        project = asyncio.run(workflow.submit())

        assert project.id == "p9"
        repository.create_project.assert_awaited_once()
        assert repository.create_project.await_args.args[1] == "ideation"
        assert [p.id for p in store.board.column("ideation")] == ["p9"]
        assert workflow.step == WizardStep.TYPE
        assert workflow.draft == ProjectDraft()
        assert workflow.error is None

    def test_unknown_returned_stage_goes_to_default(
        self, workflow, repository, store, make_project
    ):
        repository.create_project.return_value = make_project("p9", "backlog")
        workflow.next_step()
        workflow.update(name="Gala")

        asyncio.run(workflow.submit())

        assert store.board.find_stage("p9") == "ideation"

    def test_other_team_not_shown_in_filtered_board(
        self, workflow, repository, store, make_project
    ):
        repository.get_projects.return_value = {"ideation": [make_project("a", team_id="t1")]}
        asyncio.run(store.load("t1"))
        repository.create_project.return_value = make_project("b", team_id="t2")
        workflow.next_step()
        workflow.update(name="B", team_id="t2")

        project = asyncio.run(workflow.submit())

        assert project.id == "b"
        assert store.board.project_ids() == ["a"]
        assert workflow.step == WizardStep.TYPE

    def test_matching_team_shown_in_filtered_board(
        self, workflow, repository, store, make_project
    ):
        asyncio.run(store.load("t1"))
        repository.create_project.return_value = make_project("b", team_ids=["t2", "t1"])
        workflow.next_step()
        workflow.update(name="B")

        asyncio.run(workflow.submit())

        assert store.board.find_stage("b") == "ideation"

    def test_project_already_loaded_not_duplicated(
        self, workflow, repository, store, make_project
    ):
        created = make_project("p9", "planning")

        async def create_during_reload(draft, stage):
            repository.get_projects.return_value = {"planning": [created]}
            await store.reload()
            return created

        repository.create_project.side_effect = create_during_reload
        workflow.next_step()
        workflow.update(name="Gala")

        asyncio.run(workflow.submit())

        assert store.board.project_ids() == ["p9"]

    def test_failure_keeps_draft(self, workflow, repository, store):
        repository.create_project.side_effect = ApiClientError("Project name already exists")
        workflow.next_step()
        workflow.update(name="Gala", description="Annual fundraiser")

        assert asyncio.run(workflow.submit()) is None

        assert workflow.error == "Project name already exists"
        assert workflow.step == WizardStep.DETAILS
        assert workflow.draft.name == "Gala"
        assert workflow.draft.description == "Annual fundraiser"
        assert workflow.submitting is False
        assert store.project_count == 0

    def test_cancel_resets(self, workflow):
        workflow.next_step()
        workflow.update(name="Gala")

        workflow.cancel()

        assert workflow.step == WizardStep.TYPE
        assert workflow.draft.name == ""
