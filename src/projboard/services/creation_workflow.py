"""Three-step project creation wizard state."""

from __future__ import annotations

import logging
from enum import IntEnum

from ..api import ApiClientError
from ..models import Project, ProjectDraft, ProjectSuggestion, default_stage
from ..repositories import RepositoryProtocol
from .project_store import ProjectStore

logger = logging.getLogger(__name__)

SUGGESTION_PROMPT = (
    "Suggest a setup for a new project described as follows. Reply with a "
    "single JSON object using any of the keys name, description, type, "
    "milestones, tasks, budget, deadline, client_name.\n\n{description}"
)


class WizardStep(IntEnum):
    """Creation steps, in order."""

    TYPE = 1
    DETAILS = 2
    ADVANCED = 3


class CreationWorkflow:
    """
    Collects a ProjectDraft over three linear steps and submits it.

    The draft survives failed submissions; only cancel() or a successful
    submit() clears it.
    """

    def __init__(self, repository: RepositoryProtocol, store: ProjectStore) -> None:
        self.repository = repository
        self.store = store
        self.step = WizardStep.TYPE
        self.draft = ProjectDraft()
        self.suggestion: ProjectSuggestion | None = None
        self.error: str | None = None
        self.submitting = False

    @property
    def can_submit(self) -> bool:
        """Submission needs step 2 or 3 and a non-blank name."""
        return self.step >= WizardStep.DETAILS and bool(self.draft.name.strip())

    @property
    def suggested_tasks(self) -> list[str]:
        return list(self.suggestion.tasks) if self.suggestion else []

    def next_step(self) -> WizardStep:
        if self.step < WizardStep.ADVANCED:
            self.step = WizardStep(self.step + 1)
        return self.step

    def previous_step(self) -> WizardStep:
        if self.step > WizardStep.TYPE:
            self.step = WizardStep(self.step - 1)
        return self.step

    def update(self, **fields) -> ProjectDraft:
        """Set draft fields (validated) and return the new draft."""
        data = self.draft.model_dump()
        data.update(fields)
        self.draft = ProjectDraft.model_validate(data)
        return self.draft

    async def request_suggestion(self, description: str) -> ProjectSuggestion | None:
        """
        Ask the suggestion service to pre-fill the draft, then go to step 2.

        A failed call or an unparseable answer still advances to step 2,
        with the draft left as it was.
        """
        prompt = SUGGESTION_PROMPT.format(description=description.strip())
        try:
            text = await self.repository.suggest(prompt)
        except ApiClientError as e:
            logger.warning("Suggestion request failed: %s", e)
            self.step = WizardStep.DETAILS
            return None

        try:
            suggestion = ProjectSuggestion.from_text(text)
        except ValueError as e:
            logger.info("Ignoring unparseable suggestion: %s", e)
            self.step = WizardStep.DETAILS
            return None

        self.suggestion = suggestion
        self.draft = suggestion.apply_to(self.draft)
        self.step = WizardStep.DETAILS
        logger.debug("Applied suggestion for %r", self.draft.name)
        return suggestion

    async def submit(self) -> Project | None:
        """
        Create the project in the default stage.

        Returns:
            The created project, or None with error set.
        """
        if self.step < WizardStep.DETAILS:
            self.error = "Fill in the project details first"
            return None
        if not self.draft.name.strip():
            self.error = "Project name is required"
            return None

        stage = default_stage(self.store.stages).slug

        self.error = None
        self.submitting = True
        try:
            project = await self.repository.create_project(self.draft, stage)
        except ApiClientError as e:
            logger.error("Project creation failed: %s", e)
            self.error = str(e) or "Failed to create project"
            return None
        finally:
            self.submitting = False

        logger.info("Project created: %s (stage=%s)", project.id, project.current_stage)
        team_filter = self.store.team_filter
        if team_filter and team_filter not in project.all_team_ids:
            logger.debug("Created project %s is outside team %s", project.id, team_filter)
        elif self.store.board.find_stage(project.id) is not None:
            logger.debug("Created project %s already on the board", project.id)
        else:
            target = project.current_stage
            if target not in self.store.board.columns:
                target = stage
            self.store.insert(project, target)
        self.cancel()
        return project

    def cancel(self) -> None:
        """Discard the draft and return to step 1."""
        self.step = WizardStep.TYPE
        self.draft = ProjectDraft()
        self.suggestion = None
        self.error = None

