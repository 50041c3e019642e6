"""Sign-up list registry and display constants.

The set of lists is fixed configuration: adding a list means adding an entry
to LIST_DEFINITIONS and restarting the bot.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Optional, Tuple

from core.errors import InvalidListReference


@dataclass(frozen=True)
class ListDefinition:
    id: str
    name: str
    cooldown: timedelta


LIST_DEFINITIONS: Tuple[ListDefinition, ...] = (
    ListDefinition(id="1", name="Crystal of Chaos", cooldown=timedelta(weeks=1)),
    ListDefinition(id="2", name="Abyssal Raid", cooldown=timedelta(days=3)),
    ListDefinition(id="3", name="Guardian Trial", cooldown=timedelta(days=1)),
    ListDefinition(id="4", name="World Boss Carry", cooldown=timedelta(hours=12)),
)


def _build_index(definitions: Tuple[ListDefinition, ...]) -> Tuple[Dict[str, ListDefinition], Dict[str, ListDefinition]]:
    by_id: Dict[str, ListDefinition] = {}
    by_name: Dict[str, ListDefinition] = {}
    for definition in definitions:
        if definition.id in by_id:
            raise ValueError(f"Duplicate list id: {definition.id}")
        if definition.name in by_name:
            raise ValueError(f"Duplicate list name: {definition.name}")
        if definition.cooldown <= timedelta(0):
            raise ValueError(f"Cooldown must be positive for list {definition.name}")
        by_id[definition.id] = definition
        by_name[definition.name] = definition
    return by_id, by_name


LISTS_BY_ID, LISTS_BY_NAME = _build_index(LIST_DEFINITIONS)

# Subcommand that prints the registry; named in "unknown list" rejections
LIST_DISCOVERY_SUBCOMMAND = "lists"


def resolve_list(list_id: str, prefix: str = "!") -> ListDefinition:
    """Look up a list by its short id (case-insensitive, surrounding spaces ignored)."""
    definition = LISTS_BY_ID.get(str(list_id).strip().lower())
    if definition is None:
        raise InvalidListReference(list_id, f"{prefix}list {LIST_DISCOVERY_SUBCOMMAND}")
    return definition


def get_by_name(list_name: str) -> Optional[ListDefinition]:
    return LISTS_BY_NAME.get(list_name)


# Embed colors
COLOR_BOARD = 0x5865F2
COLOR_SUCCESS = 0x2ECC71
COLOR_INFO = 0x3498DB

EMPTY_LIST_TEXT = "*Nobody yet*"
MAX_FIELD_LENGTH = 1024
