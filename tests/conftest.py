import sys
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest
from loguru import logger

from dndref.models.config import Config

UPSTREAMS = [
    "https://primary.test/api",
    "https://secondary.test/api",
    "https://tertiary.test",
]

Outcome = int | dict | list | str | Exception


@pytest.fixture(autouse=True)
def _isolate_logging() -> Iterator[None]:
    """Route loguru to the captured stderr of the current test only."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")
    yield
    logger.remove()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("UPSTREAMS", "TIMEOUT", "USER_AGENT", "HOST", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(f"DNDREF_{name}", raising=False)


@pytest.fixture
def upstreams() -> list[str]:
    return list(UPSTREAMS)


@pytest.fixture
def mock_config(upstreams):
    """Fixture that returns a Config pointing at the fake upstreams."""
    return Config(_env_file=None, upstreams=upstreams, timeout=1.0)  # type: ignore[call-arg]


def build_response(outcome: Outcome) -> httpx.Response:
    """Turn a scripted outcome into a fresh response, or raise it."""
    if isinstance(outcome, Exception):
        raise outcome
    if isinstance(outcome, int):
        return httpx.Response(outcome)
    if isinstance(outcome, str):
        return httpx.Response(200, text=outcome)
    return httpx.Response(200, json=outcome)


@pytest.fixture
def scripted_transport() -> Callable[..., tuple[httpx.MockTransport, list[httpx.Request]]]:
    """
    Factory for a MockTransport that answers per upstream host.

    Hosts missing from the script answer 404. Every request is recorded.
    """

    def factory(script: dict[str, Outcome]) -> tuple[httpx.MockTransport, list[httpx.Request]]:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            outcome: Any = script.get(request.url.host, 404)
            return build_response(outcome)

        return httpx.MockTransport(handler), calls

    return factory
