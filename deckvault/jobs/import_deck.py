"""
Import a deck list file.

Reads a plain-text deck list, resolves each card on Scryfall and saves it
as a new deck in the configured store.

Usage:
    python -m deckvault.jobs.import_deck decklist.txt --name "Atraxa" --format commander
"""

import argparse
import asyncio
import logging
from pathlib import Path

from deckvault.clients.scryfall import ScryfallClient
from deckvault.services.card_resolver import CardResolver
from deckvault.services.deck_import import DeckImportResult, import_deck
from deckvault.store.app_store import AppStore, create_app_store

logger = logging.getLogger(__name__)


async def run_import(
    path: Path,
    name: str,
    format: str,
    store: AppStore | None = None,
    resolver: CardResolver | None = None,
) -> DeckImportResult:
    """
    Import the deck list at ``path`` and wait until it is saved.

    Store and resolver default to the configured store and a fresh
    Scryfall client.
    """
    text = path.read_text(encoding="utf-8")
    store = store or await create_app_store()

    if resolver is not None:
        result = await import_deck(store, resolver, name, format, text)
    else:
        async with ScryfallClient() as scryfall:
            result = await import_deck(store, scryfall, name, format, text)

    await store.flush()

    logger.info(
        "Imported %d of %d lines into %s (%s)",
        len(result.imported),
        result.total_lines,
        result.deck.name,
        result.deck.id,
    )
    for missing in result.errors:
        logger.warning("Not found: %s", missing)
    return result


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import a deck list as a new deck")
    parser.add_argument("file", type=Path, help="Deck list text file")
    parser.add_argument("--name", help="Deck name (defaults to the file name)")
    parser.add_argument("--format", default="commander", help="Deck format label")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = parse_args(argv)
    asyncio.run(run_import(args.file, args.name or args.file.stem, args.format))


if __name__ == "__main__":
    main()
