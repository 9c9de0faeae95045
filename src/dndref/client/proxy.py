import asyncio
import types
from collections.abc import Iterable
from typing import Any

import httpx
from loguru import logger

from dndref.constants import DEFAULT_ACCEPT, DEFAULT_TIMEOUT, SAMPLE_ENDPOINTS
from dndref.exceptions import ProxyClientError

__all__ = ["DndProxyClient", "endpoint_from_url"]

PROXY_PATH = "/api/dnd"
_URL_PREFIXES = ("/api/2014/", "/api/")


def endpoint_from_url(url: str) -> str:
    """
    Turn a reference URL such as `/api/2014/spells/aid` into `spells/aid`.

    Removes the first occurrence of `/api/2014/` and then of `/api/` wherever
    it appears in the string, not only at the start.
    """
    for prefix in _URL_PREFIXES:
        url = url.replace(prefix, "", 1)
    return url


class DndProxyClient:
    """
    Async client for a running reference proxy.

    Every call goes through `GET /api/dnd?endpoint=...`, so responses are
    either live upstream data or the proxy's tagged mock payload.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": DEFAULT_ACCEPT},
            timeout=timeout,
            transport=transport,
        )

    async def _get(self, endpoint: str) -> Any:
        response = await self._client.get(PROXY_PATH, params={"endpoint": endpoint})
        if not response.is_success:
            logger.error(f"Error fetching from {endpoint}: HTTP {response.status_code}")
            raise ProxyClientError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
                url=str(response.request.url),
            )
        return response.json()

    async def fetch_list(self, endpoint: str) -> Any:
        """Fetch a listing such as `classes` or `spells`."""
        return await self._get(endpoint)

    async def fetch_item(self, endpoint: str, index: str) -> Any:
        """Fetch one entry of a listing by its index."""
        return await self._get(f"{endpoint}/{index}")

    async def fetch_by_url(self, url: str) -> Any:
        """Fetch a related resource by the `url` field found in reference data."""
        return await self._get(endpoint_from_url(url))

    async def fetch_multiple_by_urls(self, urls: Iterable[str]) -> list[Any]:
        return list(await asyncio.gather(*(self.fetch_by_url(url) for url in urls)))

    async def fetch_multiple_items(self, endpoint: str, indices: Iterable[str]) -> list[Any]:
        return list(
            await asyncio.gather(*(self.fetch_item(endpoint, index) for index in indices))
        )

    async def fetch_sample_data(
        self, endpoints: Iterable[str] = SAMPLE_ENDPOINTS, sample_size: int = 5
    ) -> dict[str, dict[str, Any]]:
        """
        Fetch the first few entries of several listings.

        A listing that cannot be fetched is reported as empty rather than
        failing the whole sample.
        """
        sample: dict[str, dict[str, Any]] = {}
        for endpoint in endpoints:
            try:
                data = await self.fetch_list(endpoint)
            except (ProxyClientError, httpx.HTTPError, ValueError) as e:
                logger.error(f"Failed to fetch {endpoint}: {e}")
                sample[endpoint] = {"count": 0, "results": []}
                continue
            if not isinstance(data, dict):
                data = {}
            sample[endpoint] = {
                "count": data.get("count") or 0,
                "results": list(data.get("results") or [])[:sample_size],
            }
        return sample

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "DndProxyClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: types.TracebackType | None = None,
    ) -> None:
        await self._client.__aexit__(exc_type, exc_value, traceback)
