from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dndref.models.fetch import UpstreamAttempt

__all__ = [
    "DndRefError",
    "MissingEndpointError",
    "ProxyClientError",
    "UpstreamUnavailableError",
]


class DndRefError(Exception):
    """Base exception for all dndref errors."""


class MissingEndpointError(DndRefError):
    """Raised when no endpoint name was supplied."""

    def __init__(self, message: str = "Endpoint parameter is required") -> None:
        super().__init__(message)
        self.message = message


class UpstreamUnavailableError(DndRefError):
    """Raised when every upstream failed and mock fallback is disabled."""

    def __init__(self, endpoint: str, attempts: "list[UpstreamAttempt]") -> None:
        super().__init__(f"All {len(attempts)} upstreams failed for endpoint '{endpoint}'")
        self.endpoint = endpoint
        self.attempts = attempts


class ProxyClientError(DndRefError):
    """Raised when the reference proxy answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
