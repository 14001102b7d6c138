"""Async REST client for the projects API."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Base exception for API client errors."""

    pass


class ApiAuthError(ApiClientError):
    """Authentication failed."""

    pass


class ApiForbiddenError(ApiClientError):
    """Permission denied."""

    pass


class ApiNotFoundError(ApiClientError):
    """Resource not found."""

    pass


class ApiValidationError(ApiClientError):
    """Request rejected as invalid."""

    pass


class ApiRateLimitError(ApiClientError):
    """Rate limit exceeded."""

    pass


class ApiClient:
    """Async client for the dashboard REST routes.

    Provides a thin wrapper around httpx with:
    - Bearer token authentication
    - Typed errors for auth, permission, not-found, validation and rate limits
    - Request timing in the logs
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the API client.

        Args:
            base_url: API root, e.g. https://app.example.com/api
            token: Optional bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            ApiAuthError: 401
            ApiForbiddenError: 403
            ApiNotFoundError: 404
            ApiValidationError: 400 or 422
            ApiRateLimitError: 429
            ApiClientError: Transport failures, other HTTP errors, invalid JSON
        """
        logger.debug("%s %s: params=%s", method, path, params)

        start_time = time.monotonic()
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s %s failed after %.0fms: %s", method, path, elapsed_ms, e)
            raise ApiClientError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        status = response.status_code

        if status >= 400:
            message = _error_message(response)
            logger.error("%s %s: HTTP %d (%.0fms) %s", method, path, status, elapsed_ms, message)
            if status == 401:
                raise ApiAuthError(
                    "Authentication failed. Check PROJBOARD_API_TOKEN."
                )
            if status == 403:
                raise ApiForbiddenError(message or "Permission denied")
            if status == 404:
                raise ApiNotFoundError(message or "Resource not found")
            if status in (400, 422):
                raise ApiValidationError(message or "Invalid request")
            if status == 429:
                raise ApiRateLimitError("Rate limit exceeded. Try again later.")
            raise ApiClientError(f"HTTP {status}: {message}")

        logger.info("%s %s: %d (%.0fms)", method, path, status, elapsed_ms)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            logger.error("%s %s: Invalid JSON response", method, path)
            raise ApiClientError(f"Invalid JSON response: {e}") from e

    # Stages and teams

    async def get_stages(self) -> list[dict[str, Any]]:
        """Fetch the pipeline stage definitions."""
        data = _expect_object(await self.request("GET", "/project-stages"), "/project-stages")
        return _expect_list(data.get("stages"), "stages")

    async def get_teams(self) -> list[dict[str, Any]]:
        data = _expect_object(await self.request("GET", "/teams"), "/teams")
        return _expect_list(data.get("teams"), "teams")

    # Projects

    async def get_projects(
        self, team_id: str | None = None, group_by_stage: bool = True
    ) -> dict[str, Any]:
        """Fetch active projects, grouped by stage slug by default.

        Returns the raw response: {"grouped": bool, "projects": {...} | [...]}
        """
        params: dict[str, Any] = {}
        if group_by_stage:
            params["group_by_stage"] = "true"
        if team_id:
            params["team_id"] = team_id
        data = await self.request("GET", "/projects", params=params)
        return _expect_object(data, "/projects")

    async def create_project(self, payload: dict[str, Any]) -> dict[str, Any]:
        data = _expect_object(
            await self.request("POST", "/projects", json=payload), "/projects"
        )
        project = data.get("project")
        if not isinstance(project, dict):
            raise ApiClientError("Create response did not include a project")
        return project

    async def update_project_stage(self, project_id: str, stage: str) -> None:
        """Move a project to another stage (PUT /projects/{id}/stage)."""
        await self.request("PUT", f"/projects/{project_id}/stage", json={"stage": stage})

    async def archive_project(self, project_id: str) -> None:
        await self.request("PUT", f"/projects/{project_id}", json={"is_archived": True})

    # Milestones

    async def create_milestone(
        self,
        project_id: str,
        name: str,
        due_date: str | None = None,
        stage: str | None = None,
        is_key_milestone: bool = False,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": name, "is_key_milestone": is_key_milestone}
        if due_date:
            payload["due_date"] = due_date
        if stage:
            payload["stage"] = stage
        path = f"/projects/{project_id}/milestones"
        data = _expect_object(await self.request("POST", path, json=payload), path)
        return data.get("milestone") or {}

    # Suggestions

    async def suggest(self, prompt: str) -> str:
        """Ask the completion service for project setup suggestions.

        Returns the raw completion text; parsing is left to the caller.
        """
        data = await self.request("POST", "/chat", json={"message": prompt})
        if isinstance(data, dict):
            for key in ("response", "content", "message"):
                value = data.get(key)
                if isinstance(value, str):
                    return value
            return ""
        if isinstance(data, str):
            return data
        return ""


def _error_message(response: httpx.Response) -> str:
    """Extract the error text from an error response body."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return response.text


def _expect_object(data: Any, path: str) -> dict[str, Any]:
    """Reject a decoded body that is not a JSON object."""
    if not isinstance(data, dict):
        logger.error("%s: Unexpected response shape (%s)", path, type(data).__name__)
        raise ApiClientError(f"Unexpected response shape from {path}")
    return data


def _expect_list(value: Any, key: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ApiClientError(f"Unexpected response shape: {key!r} is not a list")
    return list(value)
