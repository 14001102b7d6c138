"""Service for loading the pipeline stages."""

from __future__ import annotations

import logging

from ..api import ApiClientError
from ..models import Stage, default_stages
from ..repositories import RepositoryProtocol

logger = logging.getLogger(__name__)


class StageRegistry:
    """Loads the ordered stage list, falling back to the built-in columns.

    load_stages() never raises. Callers that need to tell degraded mode
    apart from a normal load check loaded_from_fallback.
    """

    def __init__(self, repository: RepositoryProtocol) -> None:
        self.repository = repository
        self._stages: list[Stage] = []
        self.loaded_from_fallback = False
        self.fallback_reason: str | None = None

    @property
    def stages(self) -> list[Stage]:
        """Stages from the last load (built-in columns before any load)."""
        return self._stages or default_stages()

    @property
    def slugs(self) -> list[str]:
        return [stage.slug for stage in self.stages]

    async def load_stages(self) -> list[Stage]:
        """Fetch and normalize stages, or return the fallback list."""
        try:
            stages = await self.repository.get_stages()
        except ApiClientError as e:
            return self._use_fallback(f"stage fetch failed: {e}")

        stages = self._normalize(stages)
        if not stages:
            return self._use_fallback("no stages returned")

        self._stages = stages
        self.loaded_from_fallback = False
        self.fallback_reason = None
        logger.info("Loaded %d stages", len(stages))
        return list(stages)

    def get(self, slug: str) -> Stage | None:
        for stage in self.stages:
            if stage.slug == slug:
                return stage
        return None

    def previous_slug(self, slug: str) -> str | None:
        """Get the stage before slug in display order."""
        slugs = self.slugs
        try:
            idx = slugs.index(slug)
        except ValueError:
            return None
        return slugs[idx - 1] if idx > 0 else None

    def next_slug(self, slug: str) -> str | None:
        """Get the stage after slug in display order."""
        slugs = self.slugs
        try:
            idx = slugs.index(slug)
        except ValueError:
            return None
        return slugs[idx + 1] if idx < len(slugs) - 1 else None

    def _use_fallback(self, reason: str) -> list[Stage]:
        logger.warning("Using built-in stages: %s", reason)
        self._stages = default_stages()
        self.loaded_from_fallback = True
        self.fallback_reason = reason
        return list(self._stages)

    @staticmethod
    def _normalize(stages: list[Stage]) -> list[Stage]:
        """Sort by sort_order, drop repeated slugs, ensure one default stage."""
        ordered: list[Stage] = []
        seen: set[str] = set()
        for stage in sorted(stages, key=lambda s: s.sort_order):
            if stage.slug in seen:
                logger.debug("Ignoring duplicate stage slug: %s", stage.slug)
                continue
            seen.add(stage.slug)
            ordered.append(stage)

        defaults = [s for s in ordered if s.is_default]
        if ordered and len(defaults) != 1:
            first_default = defaults[0].slug if defaults else ordered[0].slug
            ordered = [
                s.model_copy(update={"is_default": s.slug == first_default}) for s in ordered
            ]
        return ordered
