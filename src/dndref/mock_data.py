"""Canned listings served when no upstream is reachable."""

from types import MappingProxyType
from typing import Any

from dndref.constants import MOCK_MESSAGE
from dndref.models.reference import ReferenceItem, ReferenceList

__all__ = ["MOCK_PAYLOADS", "mock_payload"]


def _items(kind: str, *entries: tuple[str, str]) -> tuple[ReferenceItem, ...]:
    return tuple(
        ReferenceItem(index=index, name=name, url=f"/api/{kind}/{index}") for index, name in entries
    )


MOCK_PAYLOADS: MappingProxyType[str, ReferenceList] = MappingProxyType(
    {
        "classes": ReferenceList(
            count=12,
            results=_items(
                "classes",
                ("barbarian", "Barbarian"),
                ("bard", "Bard"),
                ("cleric", "Cleric"),
                ("druid", "Druid"),
                ("fighter", "Fighter"),
                ("monk", "Monk"),
                ("paladin", "Paladin"),
                ("ranger", "Ranger"),
                ("rogue", "Rogue"),
                ("sorcerer", "Sorcerer"),
                ("warlock", "Warlock"),
                ("wizard", "Wizard"),
            ),
        ),
        "races": ReferenceList(
            count=9,
            results=_items(
                "races",
                ("dragonborn", "Dragonborn"),
                ("dwarf", "Dwarf"),
                ("elf", "Elf"),
                ("gnome", "Gnome"),
                ("half-elf", "Half-Elf"),
                ("half-orc", "Half-Orc"),
                ("halfling", "Halfling"),
                ("human", "Human"),
                ("tiefling", "Tiefling"),
            ),
        ),
        # Only a sample of the listing; count reflects the full SRD.
        "spells": ReferenceList(
            count=319,
            results=_items(
                "spells",
                ("acid-splash", "Acid Splash"),
                ("aid", "Aid"),
                ("alarm", "Alarm"),
                ("alter-self", "Alter Self"),
                ("animal-friendship", "Animal Friendship"),
            ),
        ),
    }
)


def mock_payload(endpoint: str, message: str = MOCK_MESSAGE) -> dict[str, Any]:
    """
    Build the tagged mock body for an endpoint.

    Unknown endpoints get an empty listing. A fresh dict is returned on every
    call so callers may mutate it freely.
    """
    listing = MOCK_PAYLOADS.get(endpoint, ReferenceList())
    body: dict[str, Any] = listing.model_dump(mode="json")
    body["_mock"] = True
    body["_message"] = message
    return body
