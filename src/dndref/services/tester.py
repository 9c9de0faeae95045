from collections.abc import Sequence

import httpx
from loguru import logger
from tenacity import RetryError, Retrying, retry_if_result, stop_after_attempt, wait_fixed

from dndref.client.fetcher import join_url
from dndref.constants import (
    DEFAULT_ACCEPT,
    DEFAULT_CHECK_ATTEMPTS,
    DEFAULT_CHECK_WAIT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from dndref.models.fetch import UpstreamAttempt

__all__ = ["UpstreamTester"]


class UpstreamTester:
    """Service for probing the health of configured upstreams."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        attempts: int = DEFAULT_CHECK_ATTEMPTS,
        wait: float = DEFAULT_CHECK_WAIT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the UpstreamTester.

        Args:
            timeout: Request timeout in seconds.
            attempts: How many times an unhealthy upstream is probed before giving up.
            wait: Seconds to wait between probes of the same upstream.
            user_agent: User-Agent header sent with each probe.
            transport: Optional httpx transport, mainly for tests.
        """
        self.timeout = timeout
        self.attempts = attempts
        self.wait = wait
        self.headers = {"Accept": DEFAULT_ACCEPT, "User-Agent": user_agent}
        self._transport = transport

    def _probe(self, url: str, base_url: str) -> UpstreamAttempt:
        try:
            with httpx.Client(
                headers=self.headers, timeout=self.timeout, transport=self._transport
            ) as client:
                resp = client.get(url)
        except Exception as e:
            logger.debug(f"Health check failed for {url}: {e}")
            return UpstreamAttempt(base_url=base_url, url=url, error=str(e) or type(e).__name__)

        if not resp.is_success:
            logger.debug(f"Health check for {url} returned {resp.status_code}")
            return UpstreamAttempt(
                base_url=base_url,
                url=url,
                status_code=resp.status_code,
                error=f"HTTP {resp.status_code}",
            )
        return UpstreamAttempt(base_url=base_url, url=url, status_code=resp.status_code, ok=True)

    def check_health(self, base_url: str, path: str = "") -> UpstreamAttempt:
        """
        Check whether an upstream answers `GET {base_url}/{path}` with a success status.

        Unhealthy results are retried up to `attempts` times.

        Returns:
            The last probe outcome.
        """
        url = join_url(base_url, path)
        retrying = Retrying(
            stop=stop_after_attempt(self.attempts),
            wait=wait_fixed(self.wait),
            retry=retry_if_result(lambda attempt: not attempt.ok),
        )
        try:
            return retrying(self._probe, url, base_url)
        except RetryError as e:
            return e.last_attempt.result()

    def check_all(self, upstreams: Sequence[str], path: str = "") -> list[UpstreamAttempt]:
        """Probe every upstream in order."""
        return [self.check_health(base_url, path) for base_url in upstreams]
