"""
Aggregate statistics over collections and decks.

Pure reductions used by the API and any presentation layer. Prices are
looked up by card ID in a caller-supplied map; a missing or unparseable
price counts as zero and never raises.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from deckvault.models.card import ScryfallCard
from deckvault.models.collection import CollectionEntry
from deckvault.models.deck import Deck, DeckEntry, Zone

# Highest mana-curve bucket; costs at or above it share the bucket ("7+")
MAX_CURVE_BUCKET = 7

_GENERIC_PATTERN = re.compile(r"\d+")
_SYMBOL_PATTERN = re.compile(r"\{[WUBRGCS]\}", re.IGNORECASE)

# Display order of type groups; lands last
TYPE_GROUP_ORDER = (
    "Creature",
    "Planeswalker",
    "Instant",
    "Sorcery",
    "Artifact",
    "Enchantment",
    "Other",
    "Land",
)

PriceMap = Mapping[str, str | float | None]


def mana_value(mana_cost: str | None) -> int:
    """
    Mana value of a mana cost string.

    Generic numerals count at face value and each colored, colorless or snow
    symbol counts one. Hybrid and Phyrexian symbols are not counted.
    """
    if not mana_cost:
        return 0
    generic = sum(int(n) for n in _GENERIC_PATTERN.findall(mana_cost))
    return generic + len(_SYMBOL_PATTERN.findall(mana_cost))


def type_group(type_line: str | None) -> str:
    """Group a type line for display. Land wins over every other type."""
    if not type_line:
        return "Other"
    lowered = type_line.lower()
    if "land" in lowered:
        return "Land"
    for group in ("Creature", "Planeswalker", "Instant", "Sorcery", "Artifact", "Enchantment"):
        if group.lower() in lowered:
            return group
    return "Other"


def parse_price(value: str | float | None) -> float:
    """Price as a float; missing or malformed prices are 0.0."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def price_map(cards: Iterable[ScryfallCard]) -> dict[str, str | None]:
    """Card ID -> USD price string, from resolved card records."""
    return {card.id: card.prices.usd for card in cards}


def entries_value(entries: Iterable[CollectionEntry | DeckEntry], prices: PriceMap) -> float:
    """Sum of price x quantity; unpriced cards contribute nothing."""
    return sum(parse_price(prices.get(entry.scryfall_id)) * entry.quantity for entry in entries)


@dataclass
class CollectionStats:
    """Totals across the whole collection."""

    total_cards: int
    unique_cards: int
    foil_cards: int
    estimated_value: float
    by_color: dict[str, int] = field(default_factory=dict)


@dataclass
class DeckStats:
    """
    Totals for a single deck.

    Attributes:
        zone_counts: Quantity per zone ("main", "sideboard", "commander")
        total_cards: Quantity across all zones
        unique_cards: Number of entries
        mana_curve: Main-zone non-land quantity per mana value bucket 0..7
        color_distribution: Main-zone quantity per color symbol
        type_groups: Main-zone quantity per type group
        estimated_value: Priced value across all zones
        priced_cards: Number of entries that had a price
    """

    zone_counts: dict[str, int]
    total_cards: int
    unique_cards: int
    mana_curve: dict[int, int]
    color_distribution: dict[str, int]
    type_groups: dict[str, int]
    estimated_value: float
    priced_cards: int


def collection_stats(entries: Iterable[CollectionEntry], prices: PriceMap | None = None) -> CollectionStats:
    entries = list(entries)
    prices = prices or {}

    by_color: dict[str, int] = {}
    for entry in entries:
        for color in entry.colors:
            by_color[color] = by_color.get(color, 0) + entry.quantity

    return CollectionStats(
        total_cards=sum(e.quantity for e in entries),
        unique_cards=len(entries),
        foil_cards=sum(e.quantity for e in entries if e.foil),
        estimated_value=round(entries_value(entries, prices), 2),
        by_color=by_color,
    )


def mana_curve(entries: Iterable[DeckEntry]) -> dict[int, int]:
    """Quantity per mana value bucket for main-zone non-land cards."""
    curve = {bucket: 0 for bucket in range(MAX_CURVE_BUCKET + 1)}
    for entry in entries:
        if entry.zone != Zone.MAIN or type_group(entry.type_line) == "Land":
            continue
        bucket = min(mana_value(entry.mana_cost), MAX_CURVE_BUCKET)
        curve[bucket] += entry.quantity
    return curve


def color_distribution(entries: Iterable[DeckEntry]) -> dict[str, int]:
    """Quantity per color symbol across main-zone entries."""
    colors: dict[str, int] = {}
    for entry in entries:
        if entry.zone != Zone.MAIN:
            continue
        for color in entry.colors or ():
            colors[color] = colors.get(color, 0) + entry.quantity
    return colors


def deck_stats(deck: Deck, prices: PriceMap | None = None) -> DeckStats:
    prices = prices or {}

    zone_counts = {zone.value: 0 for zone in Zone}
    for entry in deck.cards:
        zone_counts[entry.zone.value] += entry.quantity

    groups: dict[str, int] = {}
    for entry in deck.zone_cards(Zone.MAIN):
        group = type_group(entry.type_line)
        groups[group] = groups.get(group, 0) + entry.quantity
    ordered_groups = {g: groups[g] for g in TYPE_GROUP_ORDER if g in groups}

    priced = sum(1 for e in deck.cards if parse_price(prices.get(e.scryfall_id)) > 0)

    return DeckStats(
        zone_counts=zone_counts,
        total_cards=sum(zone_counts.values()),
        unique_cards=len(deck.cards),
        mana_curve=mana_curve(deck.cards),
        color_distribution=color_distribution(deck.cards),
        type_groups=ordered_groups,
        estimated_value=round(entries_value(deck.cards, prices), 2),
        priced_cards=priced,
    )
