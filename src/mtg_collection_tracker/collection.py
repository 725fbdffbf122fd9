"""
Card Collection Manager

This module contains the CardCollection class, which owns an ordered list of
trading cards and provides CRUD operations, name search, rarity and color
filters, value aggregation, and CSV export/import.
"""

import csv
import logging
from collections import Counter
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Optional, Union

from mtg_collection_tracker import csv_codec
from mtg_collection_tracker.enums import CardField, CardVariant, Rarity
from mtg_collection_tracker.exceptions import (
    BlankFieldError,
    CollectionIOError,
    IndexOutOfRangeError,
    MalformedRowError,
    NotFoundError,
    NullRecordError,
    UnsupportedRecordError,
)
from mtg_collection_tracker.models import Card, CollectionStatistics

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_NAME = "My MTG Collection"

PathLike = Union[str, Path]


class CardCollection:
    """Ordered collection of trading cards.

    Insertion order is the only ordering. Duplicates are allowed. Records are
    handed out by reference; every assignment on a card is validated, so
    changes made through a returned card obey the same rules as ``modify``.
    """

    def __init__(
        self,
        name: str = DEFAULT_COLLECTION_NAME,
        cards: Optional[list[Card]] = None,
    ):
        """
        Initialize a new card collection.

        Args:
            name: Display name of the collection
            cards: Cards to pre-seed the collection with, in order
        """
        self._cards: list[Card] = []
        self._name = DEFAULT_COLLECTION_NAME
        self.name = name
        for card in cards or []:
            self.add(card)

    @classmethod
    def with_samples(cls, name: str = DEFAULT_COLLECTION_NAME) -> "CardCollection":
        """Create a collection pre-seeded with the demonstration cards."""
        from mtg_collection_tracker.samples import sample_cards

        return cls(name=name, cards=sample_cards())

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if value is None or not value.strip():
            raise BlankFieldError("collection_name", "Collection name")
        self._name = value.strip()

    @property
    def cards(self) -> tuple[Card, ...]:
        """Snapshot of the stored cards; the cards themselves are shared."""
        return tuple(self._cards)

    @property
    def size(self) -> int:
        return len(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    # CRUD

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._cards):
            raise IndexOutOfRangeError(index, len(self._cards))

    def add(self, card: Card) -> int:
        """
        Append a card to the end of the collection.

        Args:
            card: The card to add

        Returns:
            int: The collection size after the add

        Raises:
            NullRecordError: If card is None
            UnsupportedRecordError: If card is not a trading-variant Card
        """
        if card is None:
            raise NullRecordError()
        if not isinstance(card, Card) or card.variant is not CardVariant.TRADING:
            raise UnsupportedRecordError(card)

        self._cards.append(card)
        logger.info(f"Card '{card.name}' added to {self.name}")
        return len(self._cards)

    def remove_at(self, index: int) -> Card:
        """
        Remove and return the card at a 0-based index.

        Raises:
            IndexOutOfRangeError: If index is outside [0, size - 1]
        """
        self._check_index(index)
        removed = self._cards.pop(index)
        logger.info(f"Card '{removed.name}' removed from {self.name}")
        return removed

    def remove_by_name(self, name: str) -> Card:
        """
        Remove the first card whose name matches, ignoring case.

        Only one card is removed even if several share the name.

        Raises:
            NotFoundError: If no card has that name
        """
        target = name.lower()
        for i, card in enumerate(self._cards):
            if card.name.lower() == target:
                return self.remove_at(i)

        raise NotFoundError(name)

    def get(self, index: int) -> Card:
        """
        Return the card at a 0-based index.

        Raises:
            IndexOutOfRangeError: If index is outside [0, size - 1]
        """
        self._check_index(index)
        return self._cards[index]

    def modify(self, index: int, card_field: Union[CardField, str], value: Any) -> Card:
        """
        Set one field of the card at index.

        Validation errors from the field propagate unchanged and leave the
        previous value in place.

        Args:
            index: 0-based position of the card
            card_field: Field selector (a CardField, attribute name or CSV header)
            value: New value for the field

        Returns:
            Card: The modified card
        """
        card = self.get(index)
        selected = CardField.from_string(card_field)
        card.set_field(selected, value)
        logger.info(f"Card '{card.name}': {selected.value} updated")
        return card

    def toggle_foil(self, index: int) -> bool:
        """Flip the foil flag of the card at index and return the new state."""
        card = self.get(index)
        state = card.toggle_foil()
        logger.info(f"Card '{card.name}' foil status is now {'FOIL' if state else 'NON-FOIL'}")
        return state

    def clear(self) -> None:
        """Remove all cards from the collection."""
        self._cards.clear()

    # Queries

    def search_by_name(self, term: str) -> list[Card]:
        """Cards whose name contains term, ignoring case, in insertion order."""
        needle = term.lower()
        return [card for card in self._cards if needle in card.name.lower()]

    def filter_by_rarity(self, rarity: str) -> list[Card]:
        """Cards whose rarity equals the given text, ignoring case.

        The value is not checked against the rarity list; an unknown rarity
        simply matches nothing.
        """
        wanted = rarity.lower()
        return [card for card in self._cards if card.rarity.lower() == wanted]

    def filter_by_color(self, color: str) -> list[Card]:
        """Cards whose color equals the given text, ignoring case."""
        wanted = color.lower()
        return [card for card in self._cards if card.color.lower() == wanted]

    def total_value(self) -> float:
        return sum((card.value for card in self._cards), 0.0)

    def statistics(self) -> CollectionStatistics:
        """
        Compute count, total and average value, and per-rarity counts.

        Returns:
            CollectionStatistics: ``average_value`` is None for an empty collection
        """
        total = self.total_value()
        buckets = Counter(card.rarity for card in self._cards)
        return CollectionStatistics(
            collection_name=self.name,
            total_cards=len(self._cards),
            total_value=total,
            average_value=total / len(self._cards) if self._cards else None,
            rarity_counts={rarity.value: buckets.get(rarity.value, 0) for rarity in Rarity},
        )

    # CSV

    def export_csv(self, path: PathLike) -> int:
        """
        Write the collection to a CSV file, replacing its contents.

        Args:
            path: Destination file

        Returns:
            int: Number of cards written

        Raises:
            CollectionIOError: If the file cannot be written
        """
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(csv_codec.HEADER + "\n")
                for card in self._cards:
                    unsafe = csv_codec.unsafe_fields(card)
                    if unsafe:
                        logger.warning(
                            f"Card '{card.name}' has a comma or line break in {', '.join(unsafe)}; "
                            "its row will not import back"
                        )
                    f.write(csv_codec.format_row(card) + "\n")
        except OSError as e:
            logger.error(f"CSV export failed: {e}")
            raise CollectionIOError(path, "writing", str(e)) from e

        logger.info(f"Exported {len(self._cards)} cards to {Path(path).name}")
        return len(self._cards)

    def import_csv(self, path: PathLike) -> int:
        """
        Append the cards of a CSV file to the collection.

        The first line is treated as a header and skipped. Lines without
        exactly ten fields are skipped silently; lines that do not make a
        valid card are skipped with a warning. Import is not transactional:
        if reading fails midway, cards already appended stay.

        Args:
            path: Source file

        Returns:
            int: Number of cards appended

        Raises:
            CollectionIOError: If the file cannot be opened or read
        """
        count = 0
        try:
            with open(path, encoding="utf-8", newline="") as f:
                for line_number, parts in csv_codec.read_rows(f):
                    if parts is None:
                        logger.debug(f"Line {line_number}: wrong field count, skipped")
                        continue
                    try:
                        card = csv_codec.parse_row(parts, line_number)
                    except MalformedRowError as e:
                        logger.warning(f"Error importing card: {e.name} - {e.reason}")
                        continue
                    self.add(card)
                    count += 1
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            logger.error(f"Error reading CSV file: {e}")
            raise CollectionIOError(path, "reading", str(e)) from e

        logger.info(f"Imported {count} cards from {Path(path).name}")
        return count

    @classmethod
    def from_csv(cls, path: PathLike, name: str = DEFAULT_COLLECTION_NAME) -> "CardCollection":
        """Create a collection holding the cards of a CSV file."""
        collection = cls(name=name)
        collection.import_csv(path)
        return collection

    # Container protocol

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __getitem__(self, index: int) -> Card:
        return self.get(index)

    def __bool__(self) -> bool:
        """Return True if collection has any cards."""
        return bool(self._cards)

    def __repr__(self) -> str:
        return f"CardCollection(name={self.name!r}, size={len(self._cards)})"
