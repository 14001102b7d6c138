"""Project creation wizard modal."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, ContentSwitcher, Input, Label, OptionList, Select, Static
from textual.widgets.option_list import Option

from ...models import Priority, Project, ProjectType, Team
from ...services import CreationWorkflow, WizardStep

STEP_TITLES = {
    WizardStep.TYPE: "Type",
    WizardStep.DETAILS: "Details",
    WizardStep.ADVANCED: "Advanced",
}

# Input id -> draft field, for the free-text inputs of steps 2 and 3
DETAIL_INPUTS = {
    "name": "name",
    "description": "description",
    "target-date": "target_date",
}
ADVANCED_INPUTS = {
    "client-name": "client_name",
    "budget": "budget",
    "location": "location",
    "participants": "expected_participants",
}


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "value"
    return f"Invalid {field.replace('_', ' ')}: {first.get('msg', 'invalid value')}"


class CreateProjectModal(ModalScreen[Project | None]):
    """Three-step wizard: Type, Details, Advanced.

    Dismisses with the created project, or None when cancelled.
    """

    DEFAULT_CSS = """
    CreateProjectModal {
        align: center middle;
    }

    CreateProjectModal > Vertical {
        width: 72;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    CreateProjectModal #wizard-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    CreateProjectModal ContentSwitcher {
        height: auto;
    }

    CreateProjectModal .step {
        height: auto;
    }

    CreateProjectModal OptionList {
        height: auto;
        max-height: 8;
        margin-bottom: 1;
    }

    CreateProjectModal #wizard-error {
        color: $error;
        height: auto;
    }

    CreateProjectModal #wizard-hint {
        color: $text-muted;
        height: auto;
    }

    CreateProjectModal .buttons {
        height: auto;
        align: center middle;
        margin-top: 1;
    }

    CreateProjectModal Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, workflow: CreationWorkflow, teams: list[Team] | None = None) -> None:
        super().__init__()
        self.workflow = workflow
        self._teams = teams or []

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("", id="wizard-title")
            with ContentSwitcher(initial="step-1"):
                with Vertical(id="step-1", classes="step"):
                    yield Label("What kind of project is this?")
                    yield OptionList(
                        *[Option(t.value.title(), id=t.value) for t in ProjectType],
                        id="project-type",
                    )
                    yield Input(
                        placeholder="Describe it to get a suggested setup (optional)",
                        id="brief",
                    )
                    with Horizontal(classes="buttons"):
                        yield Button("Suggest setup", id="suggest", variant="success")
                        yield Button("Next", id="next-1", variant="primary")
                with Vertical(id="step-2", classes="step"):
                    yield Input(placeholder="Project name", id="name")
                    yield Input(placeholder="Description", id="description")
                    yield Select(
                        [(p.value.title(), p.value) for p in Priority],
                        value=Priority.MEDIUM.value,
                        allow_blank=False,
                        id="priority",
                    )
                    yield Select(
                        [(team.display_name, team.id) for team in self._teams],
                        prompt="No team",
                        id="team",
                    )
                    yield Input(placeholder="Target date (YYYY-MM-DD)", id="target-date")
                    with Horizontal(classes="buttons"):
                        yield Button("Back", id="back-2")
                        yield Button("Advanced", id="next-2")
                        yield Button("Create", id="create-2", variant="primary")
                with Vertical(id="step-3", classes="step"):
                    yield Input(placeholder="Client name", id="client-name")
                    yield Input(placeholder="Budget", id="budget")
                    yield Input(placeholder="Location", id="location")
                    yield Input(placeholder="Expected participants", id="participants")
                    yield Input(placeholder="Tags (comma separated)", id="tags")
                    yield Input(placeholder="Milestones (comma separated)", id="milestones")
                    with Horizontal(classes="buttons"):
                        yield Button("Back", id="back-3")
                        yield Button("Create", id="create-3", variant="primary")
            yield Static("", id="wizard-hint")
            yield Static("", id="wizard-error")

    def on_mount(self) -> None:
        self._show_step()

    # Step handling

    def _show_step(self) -> None:
        step = self.workflow.step
        self.query_one(ContentSwitcher).current = f"step-{int(step)}"
        self.query_one("#wizard-title", Label).update(
            f"New project: step {int(step)} of 3 ({STEP_TITLES[step]})"
        )
        self._set_error(self.workflow.error)
        focus_target = {
            WizardStep.TYPE: "#project-type",
            WizardStep.DETAILS: "#name",
            WizardStep.ADVANCED: "#client-name",
        }[step]
        self.query_one(focus_target).focus()

    def _set_error(self, message: str | None) -> None:
        self.query_one("#wizard-error", Static).update(message or "")

    def _set_hint(self, message: str) -> None:
        self.query_one("#wizard-hint", Static).update(message)

    def _collect(self) -> bool:
        """Copy the visible step's inputs into the draft. False on invalid input."""
        fields: dict[str, Any] = {}
        step = self.workflow.step

        if step == WizardStep.TYPE:
            option_list = self.query_one("#project-type", OptionList)
            if option_list.highlighted is not None:
                option = option_list.get_option_at_index(option_list.highlighted)
                fields["type"] = option.id
        elif step == WizardStep.DETAILS:
            for input_id, field in DETAIL_INPUTS.items():
                value = self.query_one(f"#{input_id}", Input).value.strip()
                fields[field] = value or (None if field == "target_date" else "")
            priority = self.query_one("#priority", Select).value
            if isinstance(priority, str):
                fields["priority"] = priority
            team = self.query_one("#team", Select).value
            fields["team_id"] = team if isinstance(team, str) else None
        else:
            for input_id, field in ADVANCED_INPUTS.items():
                value = self.query_one(f"#{input_id}", Input).value.strip()
                fields[field] = value or None
            fields["tags"] = _split_list(self.query_one("#tags", Input).value)
            fields["milestones"] = _split_list(self.query_one("#milestones", Input).value)

        try:
            self.workflow.update(**fields)
        except ValidationError as e:
            self._set_error(_validation_message(e))
            return False
        self._set_error(None)
        return True

    def _populate(self) -> None:
        """Fill the inputs from the draft (after a suggestion was applied)."""
        draft = self.workflow.draft
        self.query_one("#name", Input).value = draft.name
        self.query_one("#description", Input).value = draft.description
        self.query_one("#priority", Select).value = draft.priority.value
        if draft.team_id:
            self.query_one("#team", Select).value = draft.team_id
        if draft.target_date:
            self.query_one("#target-date", Input).value = draft.target_date.isoformat()
        self.query_one("#client-name", Input).value = draft.client_name or ""
        if draft.budget is not None:
            self.query_one("#budget", Input).value = f"{draft.budget:g}"
        self.query_one("#milestones", Input).value = ", ".join(draft.milestones)

    # Buttons

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id == "suggest":
            self._collect()
            brief = self.query_one("#brief", Input).value
            self._set_hint("Asking for suggestions…")
            self.run_worker(self._suggest(brief), exclusive=True)
        elif button_id.startswith("next-"):
            if self._collect():
                self.workflow.next_step()
                self._show_step()
        elif button_id.startswith("back-"):
            self._collect()
            self.workflow.previous_step()
            self._show_step()
        elif button_id.startswith("create-"):
            if self._collect():
                self.run_worker(self._submit(), exclusive=True)

    async def _suggest(self, brief: str) -> None:
        suggestion = await self.workflow.request_suggestion(brief)
        if suggestion is None or suggestion.is_empty:
            self._set_hint("No suggestions available. Fill in the details below.")
        else:
            self._populate()
            tasks = self.workflow.suggested_tasks
            hint = "Suggested setup applied."
            if tasks:
                hint += f" Suggested first tasks: {', '.join(tasks[:3])}"
            self._set_hint(hint)
        self._show_step()

    async def _submit(self) -> None:
        if not self.workflow.can_submit:
            self._set_error("Project name is required")
            return
        project = await self.workflow.submit()
        if project is None:
            # Draft is kept so the user can retry
            self._set_error(self.workflow.error)
            return
        self.dismiss(project)

    def action_cancel(self) -> None:
        self.workflow.cancel()
        self.dismiss(None)
