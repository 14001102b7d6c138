"""REST API client."""

from .client import (
    ApiAuthError,
    ApiClient,
    ApiClientError,
    ApiForbiddenError,
    ApiNotFoundError,
    ApiRateLimitError,
    ApiValidationError,
)

__all__ = [
    "ApiAuthError",
    "ApiClient",
    "ApiClientError",
    "ApiForbiddenError",
    "ApiNotFoundError",
    "ApiRateLimitError",
    "ApiValidationError",
]
