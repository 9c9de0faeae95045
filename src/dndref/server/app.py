"""HTTP surface of the reference proxy."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from dndref import __version__
from dndref.client.fetcher import AsyncReferenceFetcher
from dndref.exceptions import MissingEndpointError, UpstreamUnavailableError
from dndref.models.config import Config

__all__ = ["create_app", "get_fetcher"]

router = APIRouter(prefix="/api")


def get_fetcher(request: Request) -> AsyncReferenceFetcher:
    return request.app.state.fetcher


Fetcher = Annotated[AsyncReferenceFetcher, Depends(get_fetcher)]


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.get("/dnd")
async def proxy_reference(fetcher: Fetcher, endpoint: str | None = None) -> Any:
    """Resolve `endpoint` against the upstreams, falling back to mock data."""
    try:
        result = await fetcher.fetch(endpoint)
    except MissingEndpointError as e:
        return _error(e.message, 400)
    return result.payload


async def _strict(fetcher: AsyncReferenceFetcher, endpoint: str, thing: str) -> Any:
    try:
        result = await fetcher.fetch(endpoint, fallback=False)
    except UpstreamUnavailableError as e:
        logger.error(f"Failed to fetch from D&D API {endpoint}: {e}")
        return _error(f"Failed to fetch {thing}", 500)
    return result.payload


@router.get("/dnd5e/spells")
async def list_spells(fetcher: Fetcher) -> Any:
    return await _strict(fetcher, "spells", "spells")


@router.get("/dnd5e/spells/{index}")
async def get_spell(fetcher: Fetcher, index: str) -> Any:
    return await _strict(fetcher, f"spells/{index}", "spell")


@router.get("/dnd5e/monsters")
async def list_monsters(fetcher: Fetcher) -> Any:
    return await _strict(fetcher, "monsters", "monsters")


@router.get("/dnd5e/races")
async def list_races(fetcher: Fetcher) -> Any:
    return await _strict(fetcher, "races", "races")


@router.get("/dnd5e/equipment/{index}")
async def get_equipment(fetcher: Fetcher, index: str) -> Any:
    return await _strict(fetcher, f"equipment/{index}", "equipment")


def create_app(
    config: Config | None = None, fetcher: AsyncReferenceFetcher | None = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Settings to build the default fetcher from. Loaded from the
            environment when omitted.
        fetcher: Pre-built fetcher, overriding the one derived from `config`.
    """
    if fetcher is None:
        config = config or Config()  # type: ignore[call-arg]
        fetcher = AsyncReferenceFetcher(
            upstreams=config.upstreams,
            timeout=config.timeout,
            user_agent=config.user_agent,
        )

    app = FastAPI(title="dndref", version=__version__)
    app.state.fetcher = fetcher
    app.include_router(router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
