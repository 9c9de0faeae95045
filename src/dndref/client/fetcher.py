import asyncio
from collections.abc import Sequence
from typing import Any

import httpx
from loguru import logger

from dndref.constants import (
    DEFAULT_ACCEPT,
    DEFAULT_TIMEOUT,
    DEFAULT_UPSTREAMS,
    DEFAULT_USER_AGENT,
    MOCK_MESSAGE,
)
from dndref.exceptions import MissingEndpointError, UpstreamUnavailableError
from dndref.mock_data import mock_payload
from dndref.models.fetch import FetchResult, UpstreamAttempt

__all__ = ["AsyncReferenceFetcher", "ReferenceFetcher", "join_url"]


def join_url(base_url: str, endpoint: str) -> str:
    """Join a base URL and an endpoint name with exactly one slash."""
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"


class _BaseFetcher:
    """Upstream list, headers and outcome bookkeeping shared by both fetchers."""

    def __init__(
        self,
        upstreams: Sequence[str] = DEFAULT_UPSTREAMS,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        if not upstreams:
            raise ValueError("At least one upstream base URL is required.")
        self.upstreams: tuple[str, ...] = tuple(upstreams)
        self.timeout = timeout
        self.headers = {"Accept": DEFAULT_ACCEPT, "User-Agent": user_agent}

    @staticmethod
    def _check_endpoint(endpoint: str | None) -> str:
        if not endpoint:
            raise MissingEndpointError()
        return endpoint

    @staticmethod
    def _record_response(
        endpoint: str, base_url: str, url: str, response: httpx.Response
    ) -> tuple[UpstreamAttempt, Any]:
        logger.debug(f"Response status from {base_url}: {response.status_code}")
        if not response.is_success:
            logger.warning(f"HTTP error from {base_url}: {response.status_code}")
            attempt = UpstreamAttempt(
                base_url=base_url,
                url=url,
                status_code=response.status_code,
                error=f"HTTP {response.status_code}",
            )
            return attempt, None

        # A malformed body raises here and is absorbed by the caller's loop.
        data = response.json()
        logger.info(f"Fetched '{endpoint}' from {base_url}")
        attempt = UpstreamAttempt(
            base_url=base_url, url=url, status_code=response.status_code, ok=True
        )
        return attempt, data

    @staticmethod
    def _record_error(endpoint: str, base_url: str, url: str, exc: Exception) -> UpstreamAttempt:
        message = str(exc) or type(exc).__name__
        logger.warning(f"Error with {base_url} for endpoint '{endpoint}': {message}")
        return UpstreamAttempt(base_url=base_url, url=url, error=message)

    @staticmethod
    def _exhausted(endpoint: str, attempts: list[UpstreamAttempt], fallback: bool) -> FetchResult:
        if not fallback:
            raise UpstreamUnavailableError(endpoint, attempts)
        logger.warning(f"All upstreams failed for '{endpoint}', returning mock data")
        return FetchResult(
            endpoint=endpoint,
            payload=mock_payload(endpoint, MOCK_MESSAGE),
            mock=True,
            attempts=attempts,
        )


class ReferenceFetcher(_BaseFetcher):
    """
    Synchronous resilient fetcher.

    Tries each upstream once, in order, and returns the first JSON payload
    served with a success status. When every upstream fails the tagged mock
    payload is returned instead.
    """

    def __init__(
        self,
        upstreams: Sequence[str] = DEFAULT_UPSTREAMS,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(upstreams, timeout, user_agent)
        self._transport = transport

    def fetch(self, endpoint: str | None, fallback: bool = True) -> FetchResult:
        """
        Resolve an endpoint name against the upstream list.

        Args:
            endpoint: Logical resource name, e.g. "classes" or "spells/fireball".
            fallback: Return mock data on exhaustion instead of raising.

        Returns:
            The winning upstream payload, or the tagged mock payload.

        Raises:
            MissingEndpointError: If the endpoint name is missing or empty.
            UpstreamUnavailableError: If every upstream failed and fallback is off.
        """
        endpoint = self._check_endpoint(endpoint)
        attempts: list[UpstreamAttempt] = []

        with httpx.Client(
            headers=self.headers, timeout=self.timeout, transport=self._transport
        ) as client:
            for base_url in self.upstreams:
                url = join_url(base_url, endpoint)
                logger.info(f"Trying upstream: {url}")
                try:
                    attempt, data = self._record_response(
                        endpoint, base_url, url, client.get(url)
                    )
                except Exception as e:
                    attempts.append(self._record_error(endpoint, base_url, url, e))
                    continue

                attempts.append(attempt)
                if attempt.ok:
                    return FetchResult(
                        endpoint=endpoint, payload=data, source=base_url, attempts=attempts
                    )

        return self._exhausted(endpoint, attempts, fallback)


class AsyncReferenceFetcher(_BaseFetcher):
    """
    Asynchronous resilient fetcher.

    Same contract as `ReferenceFetcher`. Each attempt is also bounded as a
    whole by the timeout, so an upstream that keeps trickling bytes is
    cancelled at the window and the next one is tried.
    """

    def __init__(
        self,
        upstreams: Sequence[str] = DEFAULT_UPSTREAMS,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(upstreams, timeout, user_agent)
        self._transport = transport

    async def fetch(self, endpoint: str | None, fallback: bool = True) -> FetchResult:
        endpoint = self._check_endpoint(endpoint)
        attempts: list[UpstreamAttempt] = []

        async with httpx.AsyncClient(
            headers=self.headers, timeout=self.timeout, transport=self._transport
        ) as client:
            for base_url in self.upstreams:
                url = join_url(base_url, endpoint)
                logger.info(f"Trying upstream: {url}")
                try:
                    response = await asyncio.wait_for(client.get(url), timeout=self.timeout)
                    attempt, data = self._record_response(endpoint, base_url, url, response)
                except asyncio.TimeoutError:
                    attempts.append(
                        self._record_error(
                            endpoint, base_url, url, TimeoutError(f"timed out after {self.timeout}s")
                        )
                    )
                    continue
                except Exception as e:
                    attempts.append(self._record_error(endpoint, base_url, url, e))
                    continue

                attempts.append(attempt)
                if attempt.ok:
                    return FetchResult(
                        endpoint=endpoint, payload=data, source=base_url, attempts=attempts
                    )

        return self._exhausted(endpoint, attempts, fallback)
