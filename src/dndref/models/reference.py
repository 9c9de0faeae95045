from pydantic import BaseModel, ConfigDict

__all__ = ["ReferenceItem", "ReferenceList"]


class ReferenceItem(BaseModel):
    """A single `{index, name, url}` entry of a reference listing."""

    model_config = ConfigDict(frozen=True)

    index: str
    name: str
    url: str


class ReferenceList(BaseModel):
    """The `{count, results}` listing shape returned by list endpoints."""

    model_config = ConfigDict(frozen=True)

    count: int = 0
    results: tuple[ReferenceItem, ...] = ()
