"""Fixed defaults for upstream access and the reference endpoint catalogue."""

from typing import Final

__all__ = [
    "DEFAULT_ACCEPT",
    "DEFAULT_CHECK_ATTEMPTS",
    "DEFAULT_CHECK_WAIT",
    "DEFAULT_TIMEOUT",
    "DEFAULT_UPSTREAMS",
    "DEFAULT_USER_AGENT",
    "DND_ENDPOINTS",
    "LOG_LEVELS",
    "MOCK_MESSAGE",
    "SAMPLE_ENDPOINTS",
]

# Tried strictly in this order.
DEFAULT_UPSTREAMS: Final[tuple[str, ...]] = (
    "https://www.dnd5eapi.co/api",
    "https://dnd5eapi.co/api",
    "https://api.open5e.com",
)

DEFAULT_TIMEOUT: Final[float] = 8.0
"""Per-attempt timeout in seconds."""

DEFAULT_USER_AGENT: Final[str] = "Mozilla/5.0 (compatible; D&D-Reference-App/1.0)"
DEFAULT_ACCEPT: Final[str] = "application/json"

MOCK_MESSAGE: Final[str] = "Using mock data - D&D API is currently unavailable"

DND_ENDPOINTS: Final[dict[str, str]] = {
    "ABILITY_SCORES": "ability-scores",
    "ALIGNMENTS": "alignments",
    "BACKGROUNDS": "backgrounds",
    "CLASSES": "classes",
    "CONDITIONS": "conditions",
    "DAMAGE_TYPES": "damage-types",
    "EQUIPMENT_CATEGORIES": "equipment-categories",
    "EQUIPMENT": "equipment",
    "FEATURES": "features",
    "LANGUAGES": "languages",
    "MAGIC_ITEMS": "magic-items",
    "MAGIC_SCHOOLS": "magic-schools",
    "MONSTERS": "monsters",
    "PROFICIENCIES": "proficiencies",
    "RACES": "races",
    "RULE_SECTIONS": "rule-sections",
    "RULES": "rules",
    "SKILLS": "skills",
    "SPELLS": "spells",
    "STARTING_EQUIPMENT": "starting-equipment",
    "SUBCLASSES": "subclasses",
    "TRAITS": "traits",
    "WEAPON_PROPERTIES": "weapon-properties",
}

SAMPLE_ENDPOINTS: Final[tuple[str, ...]] = (
    "classes",
    "races",
    "spells",
    "monsters",
    "equipment",
    "magic-items",
    "weapon-properties",
    "damage-types",
    "conditions",
    "skills",
)

DEFAULT_CHECK_ATTEMPTS: Final[int] = 3
DEFAULT_CHECK_WAIT: Final[float] = 1.0
"""Seconds between health check attempts against the same upstream."""

LOG_LEVELS: Final[tuple[str, ...]] = (
    "TRACE",
    "DEBUG",
    "INFO",
    "SUCCESS",
    "WARNING",
    "ERROR",
    "CRITICAL",
)
