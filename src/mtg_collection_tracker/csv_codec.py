"""
CSV Codec

Line format used to persist a collection:

    Name,Rarity,Condition,Value,Edition,CardType,Color,ManaCost,Subtype,Foil

Fields are joined with bare commas, without quoting or escaping. A text
field containing a comma or a newline cannot be represented and shifts the
columns of its row; such rows fail the field count check on import.
"""

import csv
import logging
from collections.abc import Iterator
from typing import Optional, TextIO

from mtg_collection_tracker.enums import CardField
from mtg_collection_tracker.exceptions import CollectionError, MalformedRowError
from mtg_collection_tracker.models import Card, trading_card

logger = logging.getLogger(__name__)

DELIMITER = ","
COLUMNS = [field.header for field in CardField]
HEADER = DELIMITER.join(COLUMNS)
FOIL_YES = "Yes"
FOIL_NO = "No"


def format_row(card: Card) -> str:
    """Render a card as one CSV line (without the line terminator)."""
    return DELIMITER.join(
        [
            card.name,
            card.rarity,
            card.condition,
            f"{card.value:.2f}",
            card.edition,
            card.card_type,
            card.color,
            str(card.mana_cost),
            card.subtype,
            FOIL_YES if card.is_foil else FOIL_NO,
        ]
    )


def unsafe_fields(card: Card) -> list[str]:
    """Return the names of text fields the unescaped format cannot hold."""
    return [
        field.value
        for field in CardField
        if isinstance(card.get_field(field), str)
        and any(ch in card.get_field(field) for ch in (DELIMITER, "\n", "\r"))
    ]


def read_rows(f: TextIO) -> Iterator[tuple[int, Optional[list[str]]]]:
    """Yield (line number, fields) for every line after the header.

    Quote characters are ordinary text. ``fields`` is None when the line
    does not hold exactly one field per column.
    """
    reader = csv.reader(f, delimiter=DELIMITER, quoting=csv.QUOTE_NONE)
    next(reader, None)
    for parts in reader:
        yield reader.line_num, (parts if len(parts) == len(COLUMNS) else None)


def parse_foil(token: str) -> bool:
    """Only a case-insensitive ``Yes`` means foil; anything else does not."""
    return token.strip().lower() == FOIL_YES.lower()


def parse_row(parts: list[str], line_number: int = 0) -> Card:
    """Build a trading card from the ten fields of one line.

    Raises:
        MalformedRowError: If a number does not parse or a field fails validation.
    """
    name = parts[0]
    try:
        value = float(parts[3])
    except ValueError:
        raise MalformedRowError(line_number, name, f"Invalid value: {parts[3]!r}") from None
    try:
        mana_cost = int(parts[7])
    except ValueError:
        raise MalformedRowError(
            line_number, name, f"Invalid mana cost: {parts[7]!r}"
        ) from None

    try:
        return trading_card(
            name=name,
            rarity=parts[1],
            condition=parts[2],
            value=value,
            edition=parts[4],
            card_type=parts[5],
            color=parts[6],
            mana_cost=mana_cost,
            subtype=parts[8],
            is_foil=parse_foil(parts[9]),
        )
    except CollectionError as e:
        raise MalformedRowError(line_number, name, str(e)) from e
