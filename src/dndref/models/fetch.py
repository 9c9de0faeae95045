from typing import Any

from pydantic import BaseModel, Field

__all__ = ["FetchResult", "UpstreamAttempt"]


class UpstreamAttempt(BaseModel):
    """Outcome of a single GET against one upstream."""

    base_url: str
    url: str
    status_code: int | None = None
    error: str | None = None
    ok: bool = False


class FetchResult(BaseModel):
    """
    Final outcome of resolving an endpoint name.

    `source` is the base URL that served the payload, or None when the
    payload came from the mock table.
    """

    endpoint: str
    payload: Any
    source: str | None = None
    mock: bool = False
    attempts: list[UpstreamAttempt] = Field(default_factory=list)
