"""Command-line interface for the MTG Card Collection Tracker."""

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from mtg_collection_tracker import __version__
from mtg_collection_tracker.collection import CardCollection
from mtg_collection_tracker.config import settings
from mtg_collection_tracker.enums import CardField, Color, Condition, Rarity
from mtg_collection_tracker.exceptions import CollectionError
from mtg_collection_tracker.models import (
    FIELD_LABELS,
    MAX_MANA_COST,
    Card,
    CollectionStatistics,
    trading_card,
)

console = Console()

MUTATING_COMMANDS = {"add", "remove", "modify", "toggle-foil", "import"}


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def mana_cost_arg(text: str) -> int:
    """Parse a mana cost in [0, MAX_MANA_COST]."""
    try:
        cost = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid mana cost: {text!r}") from None
    if not 0 <= cost <= MAX_MANA_COST:
        raise argparse.ArgumentTypeError(f"mana cost must be between 0 and {MAX_MANA_COST}")
    return cost


def money_arg(text: str) -> float:
    """Parse a finite, non-negative dollar amount."""
    try:
        value = float(text.lstrip("$"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid value: {text!r}") from None
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"value must be a finite number: {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError("value cannot be negative")
    return value


def csv_path_arg(text: str) -> Path:
    """Append a .csv suffix when the filename has none."""
    if not text.lower().endswith(".csv"):
        text += ".csv"
    return Path(text)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mtg-tracker",
        description="Track a Magic: The Gathering card collection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=None,
        help=f"Collection CSV file (default: {settings.collection_file})",
    )
    parser.add_argument(
        "--collection-name",
        default=None,
        help="Collection display name",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        default=None,
        help="Start with the sample cards when the collection file does not exist",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("list", help="List all cards (compact)")

    show_parser = subparsers.add_parser("show", help="Show one card in detail")
    show_parser.add_argument("index", type=int, help="Card index (0-based)")

    add_parser = subparsers.add_parser("add", help="Add a new card")
    add_parser.add_argument("name", help="Card name")
    add_parser.add_argument(
        "--rarity", default=Rarity.COMMON.value, help=f"One of: {', '.join(Rarity.values())}"
    )
    add_parser.add_argument(
        "--condition",
        default=Condition.NEAR_MINT.value,
        help=f"One of: {', '.join(Condition.values())}",
    )
    add_parser.add_argument("--value", type=money_arg, default=0.0, help="Value in dollars")
    add_parser.add_argument("--edition", default="Unknown", help="Edition/set name")
    add_parser.add_argument(
        "--type", dest="card_type", default="Unknown", help="Card type (e.g., Creature, Instant)"
    )
    add_parser.add_argument(
        "--color", default=Color.COLORLESS.value, help=f"One of: {', '.join(Color.values())}"
    )
    add_parser.add_argument(
        "--mana-cost",
        type=mana_cost_arg,
        default=0,
        help=f"Converted mana cost (0-{MAX_MANA_COST})",
    )
    add_parser.add_argument("--subtype", default="None", help="Subtype (e.g., Human Wizard)")
    add_parser.add_argument("--foil", action="store_true", help="The card is foil")

    remove_parser = subparsers.add_parser("remove", help="Remove a card")
    target = remove_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--index", type=int, help="Card index (0-based)")
    target.add_argument("--name", dest="card_name", help="Card name (first match)")

    modify_parser = subparsers.add_parser("modify", help="Change one field of a card")
    modify_parser.add_argument("index", type=int, help="Card index (0-based)")
    modify_parser.add_argument(
        "field",
        type=CardField.from_string,
        help=f"One of: {', '.join(f.value for f in CardField)}",
    )
    modify_parser.add_argument("value", help="New value")

    toggle_parser = subparsers.add_parser("toggle-foil", help="Toggle a card's foil status")
    toggle_parser.add_argument("index", type=int, help="Card index (0-based)")

    search_parser = subparsers.add_parser("search", help="Search cards by name")
    search_parser.add_argument("term", help="Part of the card name")

    filter_parser = subparsers.add_parser("filter", help="Filter cards by rarity or color")
    filter_parser.add_argument("by", choices=["rarity", "color"], help="Attribute to filter on")
    filter_parser.add_argument("value", help="Rarity or color to match")

    subparsers.add_parser("stats", help="Show collection statistics")

    export_parser = subparsers.add_parser("export", help="Export the collection to a CSV file")
    export_parser.add_argument("path", type=csv_path_arg, help="Destination file")

    import_parser = subparsers.add_parser("import", help="Import cards from a CSV file")
    import_parser.add_argument("path", type=csv_path_arg, help="Source file")

    return parser


def load_collection(path: Path, name: str, seed: bool) -> CardCollection:
    """Load the collection file, or start a new collection if it is missing."""
    if path.exists():
        return CardCollection.from_csv(path, name=name)
    if seed:
        return CardCollection.with_samples(name=name)
    return CardCollection(name=name)


def coerce_field_value(card_field: CardField, text: str):
    """Convert command-line text to the type a field expects."""
    if card_field is CardField.VALUE:
        return money_arg(text)
    if card_field is CardField.MANA_COST:
        return mana_cost_arg(text)
    if card_field is CardField.IS_FOIL:
        return text.strip().lower() in ("y", "yes", "true", "1")
    return text


def card_table(cards: list[tuple[int, Card]], title: str) -> Table:
    """Build the compact card list table."""
    table = Table(title=title)
    table.add_column("Index", justify="right")
    table.add_column("Name")
    table.add_column("Edition")
    table.add_column("Rarity")
    table.add_column("Color")
    table.add_column("Value", justify="right")
    for index, card in cards:
        name = f"{card.name} (FOIL)" if card.is_foil else card.name
        table.add_row(
            str(index), name, card.edition, card.rarity, card.color, f"${card.value:.2f}"
        )
    return table


def card_details(card: Card) -> Table:
    """Build the detailed view of one card."""
    table = Table(title="MTG CARD DETAILS", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for card_field in CardField:
        value = card.get_field(card_field)
        if card_field is CardField.VALUE:
            value = f"${value:.2f}"
        elif card_field is CardField.IS_FOIL:
            value = "Yes" if value else "No"
        table.add_row(FIELD_LABELS[card_field], str(value))
    return table


def statistics_table(stats: CollectionStatistics) -> Table:
    """Build the statistics table."""
    table = Table(title=f"COLLECTION STATISTICS - {stats.collection_name}", show_header=False)
    table.add_column("Statistic", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total Cards", str(stats.total_cards))
    table.add_row("Total Value", f"${stats.total_value:.2f}")
    table.add_row("Average Card Value", f"${stats.average_value:.2f}")
    for rarity, count in stats.rarity_counts.items():
        table.add_row(f"  {rarity}", str(count))
    return table


def _matches(collection: CardCollection, cards: list[Card]) -> list[tuple[int, Card]]:
    positions = {id(card): i for i, card in enumerate(collection)}
    return [(positions[id(card)], card) for card in cards]


def run_command(args: argparse.Namespace, collection: CardCollection) -> int:
    """Execute one subcommand against a loaded collection."""
    if args.command == "list":
        if collection.is_empty():
            console.print("Collection is empty.")
            return 0
        console.print(
            card_table(list(enumerate(collection)), f"CARD LIST - {collection.name}")
        )

    elif args.command == "show":
        console.print(card_details(collection.get(args.index)))

    elif args.command == "add":
        card = trading_card(
            name=args.name,
            rarity=args.rarity,
            condition=args.condition,
            value=args.value,
            edition=args.edition,
            card_type=args.card_type,
            color=args.color,
            mana_cost=args.mana_cost,
            subtype=args.subtype,
            is_foil=args.foil,
        )
        collection.add(card)
        console.print(f"[green]✓[/green] Card '{card.name}' added to collection")

    elif args.command == "remove":
        if args.index is not None:
            removed = collection.remove_at(args.index)
        else:
            removed = collection.remove_by_name(args.card_name)
        console.print(f"[green]✓[/green] Card '{removed.name}' removed from collection")

    elif args.command == "modify":
        value = coerce_field_value(args.field, args.value)
        card = collection.modify(args.index, args.field, value)
        console.print(f"[green]✓[/green] {FIELD_LABELS[args.field]} updated: {card}")

    elif args.command == "toggle-foil":
        state = collection.toggle_foil(args.index)
        console.print(f"Foil status is now: {'FOIL' if state else 'NON-FOIL'}")

    elif args.command == "search":
        results = collection.search_by_name(args.term)
        if not results:
            console.print(f"No cards found matching '{args.term}'")
            return 0
        console.print(
            card_table(
                _matches(collection, results),
                f"Found {len(results)} card(s) matching '{args.term}'",
            )
        )

    elif args.command == "filter":
        if args.by == "rarity":
            results = collection.filter_by_rarity(args.value)
        else:
            results = collection.filter_by_color(args.value)
        label = f"{args.by} '{args.value}'"
        if not results:
            console.print(f"No cards found with {label}")
            return 0
        console.print(
            card_table(_matches(collection, results), f"Found {len(results)} card(s) with {label}")
        )

    elif args.command == "stats":
        stats = collection.statistics()
        if stats.is_empty:
            console.print("No statistics available - collection is empty.")
            return 0
        console.print(statistics_table(stats))

    elif args.command == "export":
        if collection.is_empty():
            console.print("Collection is empty. Nothing to export.")
            return 0
        count = collection.export_csv(args.path)
        console.print(f"[green]✓[/green] Exported {count} cards to {args.path}")

    elif args.command == "import":
        count = collection.import_csv(args.path)
        console.print(f"[green]✓[/green] Successfully imported {count} cards.")

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 1

    path = args.file or settings.collection_file
    name = args.collection_name or settings.collection_name
    seed = settings.seed_samples if args.seed is None else args.seed

    try:
        collection = load_collection(path, name, seed)
        result = run_command(args, collection)
        if args.command in MUTATING_COMMANDS:
            collection.export_csv(path)
    except (CollectionError, argparse.ArgumentTypeError) as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    return result


if __name__ == "__main__":
    sys.exit(main())
