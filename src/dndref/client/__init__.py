from .fetcher import AsyncReferenceFetcher, ReferenceFetcher
from .proxy import DndProxyClient

__all__ = ["AsyncReferenceFetcher", "DndProxyClient", "ReferenceFetcher"]
