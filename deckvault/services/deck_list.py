"""
Plain-text deck lists.

Parses the common "quantity name" deck list format with section headers
and renders decks back to it. Parsing extracts structure only; card names
are not checked against any database.

Example:
    Commander
    1 Atraxa, Praetors' Voice

    Deck
    4x Lightning Bolt
    Sol Ring

    Sideboard
    2 Negate
"""

import re
from dataclasses import dataclass

from deckvault.models.deck import Deck, Zone

# "4 Lightning Bolt" or "4x Lightning Bolt"
# Groups: (quantity, card_name)
QUANTITY_PATTERN = re.compile(r"^(\d+)x?\s+(.+)$", re.IGNORECASE)

SECTION_HEADERS: dict[str, Zone] = {
    "commander": Zone.COMMANDER,
    "deck": Zone.MAIN,
    "main": Zone.MAIN,
    "sideboard": Zone.SIDEBOARD,
    "side": Zone.SIDEBOARD,
}

# Section order and headers used when exporting
EXPORT_SECTIONS: tuple[tuple[Zone, str], ...] = (
    (Zone.COMMANDER, "Commander"),
    (Zone.MAIN, "Deck"),
    (Zone.SIDEBOARD, "Sideboard"),
)


@dataclass(frozen=True, slots=True)
class DeckListLine:
    """One card line of a deck list."""

    quantity: int
    name: str
    zone: Zone


def parse_deck_list(text: str) -> list[DeckListLine]:
    """
    Parse a deck list into card lines.

    Blank lines and lines starting with ``//`` or ``#`` are skipped. A
    section header switches the zone for the lines that follow; lines
    before any header go to the main deck. A line without a leading
    quantity counts as one copy.
    """
    lines: list[DeckListLine] = []
    zone = Zone.MAIN

    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("//") or line.startswith("#"):
            continue

        header = SECTION_HEADERS.get(line.lower())
        if header is not None:
            zone = header
            continue

        match = QUANTITY_PATTERN.match(line)
        if match:
            lines.append(DeckListLine(int(match.group(1)), match.group(2).strip(), zone))
        else:
            lines.append(DeckListLine(1, line, zone))

    return lines


def ensure_commander(lines: list[DeckListLine]) -> list[DeckListLine]:
    """
    Put the first card in the commander zone if no line is already there.

    Lists exported without a Commander header conventionally lead with it.
    """
    if not lines or any(line.zone == Zone.COMMANDER for line in lines):
        return lines
    first = lines[0]
    return [DeckListLine(first.quantity, first.name, Zone.COMMANDER), *lines[1:]]


def format_deck_list(deck: Deck) -> str:
    """Render a deck as text with Commander, Deck and Sideboard sections."""
    blocks: list[str] = []
    for zone, header in EXPORT_SECTIONS:
        entries = deck.zone_cards(zone)
        if entries:
            blocks.append("\n".join([header, *(f"{e.quantity} {e.name}" for e in entries)]))
    return "\n\n".join(blocks)


def export_file_name(deck: Deck) -> str:
    """Safe .txt file name for an exported deck."""
    return re.sub(r"[^a-z0-9]", "_", deck.name, flags=re.IGNORECASE) + ".txt"
