"""Unit tests for the board models."""

from datetime import date

import pytest
from pydantic import ValidationError

from projboard.models import (
    DEFAULT_COLUMNS,
    BoardState,
    Priority,
    Project,
    ProjectDraft,
    ProjectSuggestion,
    ProjectType,
    Stage,
    Team,
    can_delete_stage,
    default_stage,
    default_stages,
    validate_stages,
)


class TestDefaultStages:
    """Tests for the built-in fallback columns."""

    def test_slugs_in_pipeline_order(self):
        stages = default_stages()
        assert [s.slug for s in stages] == [
            "ideation",
            "planning",
            "in_progress",
            "review",
            "complete",
        ]

    def test_first_stage_is_entry_point(self):
        """Exactly the first stage is the default for new projects."""
        stages = default_stages()
        assert stages[0].is_default
        assert [s.slug for s in stages if s.is_default] == ["ideation"]

    def test_complete_stage_flagged(self):
        stages = default_stages()
        assert [s.slug for s in stages if s.is_complete] == ["complete"]

    def test_sort_order_follows_position(self):
        stages = default_stages()
        assert [s.sort_order for s in stages] == list(range(len(DEFAULT_COLUMNS)))

    def test_returns_fresh_list(self):
        """Callers can mutate the list without affecting later calls."""
        stages = default_stages()
        stages.pop()
        assert len(default_stages()) == 5


class TestStageHelpers:
    """Tests for stage list helpers."""

    def test_default_stage_uses_flag(self, two_stages):
        flagged = [s.model_copy(update={"is_default": s.slug == "planning"}) for s in two_stages]
        assert default_stage(flagged).slug == "planning"

    def test_default_stage_falls_back_to_first(self, two_stages):
        unflagged = [s.model_copy(update={"is_default": False}) for s in two_stages]
        assert default_stage(unflagged).slug == "ideation"

    def test_validate_rejects_empty(self):
        with pytest.raises(ValueError, match="At least one stage"):
            validate_stages([])

    def test_validate_rejects_duplicate_slugs(self, two_stages):
        with pytest.raises(ValueError, match="unique"):
            validate_stages(two_stages + [two_stages[0]])

    def test_cannot_delete_last_stage(self, two_stages):
        """Deleting is refused when it would leave no stages."""
        assert can_delete_stage(two_stages, "planning")
        assert not can_delete_stage(two_stages[:1], "ideation")

    def test_cannot_delete_unknown_stage(self, two_stages):
        assert not can_delete_stage(two_stages, "review")

    def test_stage_ignores_unknown_fields(self):
        stage = Stage.model_validate(
            {"id": "1", "name": "Ideation", "slug": "ideation", "organization_id": "org"}
        )
        assert stage.slug == "ideation"

    def test_stage_requires_slug(self):
        with pytest.raises(ValidationError):
            Stage(id="1", name="Ideation", slug="")


class TestProject:
    """Tests for the Project model."""

    def test_timestamp_dates_truncated(self):
        """Full ISO timestamps are accepted for date fields."""
        project = Project(
            id="p1",
            name="Launch",
            current_stage="ideation",
            target_date="2025-06-01T00:00:00Z",
        )
        assert project.target_date == date(2025, 6, 1)

    def test_blank_date_is_none(self):
        project = Project(id="p1", name="Launch", current_stage="ideation", start_date="")
        assert project.start_date is None

    def test_display_name_has_emoji(self, make_project):
        project = make_project("p1", name="Launch", emoji="\U0001f680")
        assert project.display_name == "\U0001f680 Launch"

    def test_display_name_without_emoji(self, make_project):
        project = make_project("p1", name="Launch", emoji="")
        assert project.display_name == "Launch"

    def test_task_progress(self, make_project):
        assert make_project("p1", tasks_total=4, tasks_completed=1).task_progress == 0.25
        assert make_project("p2").task_progress == 0.0

    def test_task_progress_capped(self, make_project):
        assert make_project("p1", tasks_total=2, tasks_completed=5).task_progress == 1.0

    def test_all_team_ids_deduplicated(self, make_project):
        project = make_project("p1", team_id="t1", team_ids=["t2", "t1"])
        assert project.all_team_ids == ["t1", "t2"]

    def test_unknown_priority_rejected(self):
        with pytest.raises(ValidationError):
            Project(id="p1", name="Launch", current_stage="ideation", priority="critical")


class TestProjectDraft:
    """Tests for ProjectDraft payload building."""

    def test_payload_omits_unset_fields(self):
        draft = ProjectDraft(name="  Launch  ")
        payload = draft.to_payload()
        assert payload["name"] == "Launch"
        assert "client_name" not in payload
        assert "tags" not in payload
        assert "budget" not in payload
        assert payload["priority"] == "medium"
        assert payload["type"] == "general"

    def test_payload_serializes_dates(self):
        draft = ProjectDraft(name="Launch", target_date=date(2025, 6, 1))
        assert draft.to_payload()["target_date"] == "2025-06-01"

    def test_payload_keeps_lists(self):
        draft = ProjectDraft(name="Launch", tags=["q3"], milestones=["Kickoff"])
        payload = draft.to_payload()
        assert payload["tags"] == ["q3"]
        assert payload["milestones"] == ["Kickoff"]

    def test_invalid_budget_rejected(self):
        with pytest.raises(ValidationError):
            ProjectDraft(name="Launch", budget="a lot")


class TestProjectSuggestion:
    """Tests for parsing suggestion service output."""

    def test_parse_plain_json(self):
        suggestion = ProjectSuggestion.from_text(
            '{"name": "Spring Gala", "type": "event", "budget": "$12,500"}'
        )
        assert suggestion.name == "Spring Gala"
        assert suggestion.type == "event"
        assert suggestion.budget == 12500.0

    def test_parse_fenced_json(self):
        text = 'Here you go:\n```json\n{"name": "Spring Gala"}\n```\nGood luck!'
        assert ProjectSuggestion.from_text(text).name == "Spring Gala"

    def test_invalid_json_raises_value_error(self):
        with pytest.raises(ValueError):
            ProjectSuggestion.from_text("{ not valid json")

    def test_non_object_raises_value_error(self):
        with pytest.raises(ValueError):
            ProjectSuggestion.from_text('["a", "b"]')

    def test_milestone_objects_flattened(self):
        suggestion = ProjectSuggestion.from_text(
            '{"milestones": [{"name": "Venue booked"}, {"title": "Invites sent"}, "Event day"]}'
        )
        assert suggestion.milestones == ["Venue booked", "Invites sent", "Event day"]

    def test_deadline_timestamp(self):
        suggestion = ProjectSuggestion.from_text('{"deadline": "2025-05-01T12:00:00Z"}')
        assert suggestion.deadline == date(2025, 5, 1)

    @pytest.mark.parametrize("value", ["5", '"abc"', '{"name": "Kickoff"}'])
    def test_non_list_milestones_rejected(self, value):
        with pytest.raises(ValueError):
            ProjectSuggestion.from_text(f'{{"milestones": {value}}}')

    def test_free_form_deadline_dropped(self):
        suggestion = ProjectSuggestion.from_text('{"name": "Gala", "deadline": "Q2 2025"}')
        assert suggestion.deadline is None
        assert suggestion.name == "Gala"

    def test_unparseable_budget_dropped(self):
        assert ProjectSuggestion.from_text('{"budget": "TBD"}').budget is None

    def test_apply_fills_draft(self):
        suggestion = ProjectSuggestion(
            name="Spring Gala",
            type="Event",
            milestones=["Venue booked"],
            deadline=date(2025, 5, 1),
            budget=500.0,
        )
        draft = suggestion.apply_to(ProjectDraft(description="kept"))
        assert draft.name == "Spring Gala"
        assert draft.type == ProjectType.EVENT
        assert draft.milestones == ["Venue booked"]
        assert draft.target_date == date(2025, 5, 1)
        assert draft.budget == 500.0
        assert draft.description == "kept"

    def test_apply_ignores_unknown_type(self):
        draft = ProjectSuggestion(type="wedding").apply_to(ProjectDraft())
        assert draft.type == ProjectType.GENERAL

    def test_is_empty(self):
        assert ProjectSuggestion().is_empty
        assert not ProjectSuggestion(tasks=["Call venue"]).is_empty


class TestBoardState:
    """Tests for BoardState grouping."""

    def test_empty_has_every_stage(self, two_stages):
        board = BoardState.empty(two_stages)
        assert board.columns == {"ideation": [], "planning": []}
        assert board.project_count == 0

    def test_from_grouped_keeps_stage_order(self, two_stages, make_project):
        board = BoardState.from_grouped(
            two_stages,
            {
                "planning": [make_project("p2", "planning")],
                "ideation": [make_project("p1")],
            },
        )
        assert board.stage_slugs == ["ideation", "planning"]
        assert board.project_ids() == ["p1", "p2"]

    def test_unknown_stage_goes_to_default(self, two_stages, make_project):
        board = BoardState.from_grouped(two_stages, {"legacy": [make_project("p1", "legacy")]})
        assert board.find_stage("p1") == "ideation"
        assert board.get_project("p1").current_stage == "ideation"
        assert "legacy" not in board.columns

    def test_archived_projects_dropped(self, two_stages, make_project):
        board = BoardState.from_grouped(
            two_stages, {"ideation": [make_project("p1", is_archived=True)]}
        )
        assert board.project_count == 0

    def test_each_project_in_one_column(self, two_stages, make_project):
        board = BoardState.from_grouped(
            two_stages,
            {
                "ideation": [make_project("p1")],
                "planning": [make_project("p1", "planning")],
            },
        )
        assert board.project_ids() == ["p1"]

    def test_column_unknown_slug_is_empty(self, two_stages):
        assert BoardState.empty(two_stages).column("review") == []

    def test_copy_board_is_independent(self, two_stages, make_project):
        board = BoardState.from_grouped(two_stages, {"ideation": [make_project("p1")]})
        snapshot = board.copy_board()
        board.columns["ideation"].clear()
        assert snapshot.project_ids() == ["p1"]


class TestTeam:
    def test_display_name(self):
        assert Team(id="t1", name="Marketing", emoji="\U0001f4e3").display_name == (
            "\U0001f4e3 Marketing"
        )
        assert Team(id="t2", name="Ops").display_name == "Ops"


def test_priority_values():
    assert [p.value for p in Priority] == ["low", "medium", "high", "urgent"]
