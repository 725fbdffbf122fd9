"""Enumerations for Magic: The Gathering collection records."""

from enum import Enum
from typing import Union

from mtg_collection_tracker.exceptions import InvalidEnumerationError


class _CanonicalEnum(str, Enum):
    """String enumeration matched case-insensitively, stored in canonical casing."""

    def __str__(self) -> str:
        """Return the canonical string of the member."""
        return self.value

    @classmethod
    def field_label(cls) -> str:
        return cls.__name__.lower()

    @classmethod
    def values(cls) -> list[str]:
        """Return the accepted values in display order."""
        return [member.value for member in cls]

    @classmethod
    def from_string(cls, value: Union[str, "_CanonicalEnum", None]):
        """Create a member from a string value, case-insensitive.

        Raises:
            InvalidEnumerationError: If the value matches no member.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value.lower() == normalized:
                    return member

        raise InvalidEnumerationError(cls.field_label(), value, cls.values())


class Rarity(_CanonicalEnum):
    """Card rarities, in increasing order of rarity."""

    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    MYTHIC_RARE = "Mythic Rare"
    SPECIAL = "Special"


class Condition(_CanonicalEnum):
    """Physical card conditions, best first."""

    MINT = "Mint"
    NEAR_MINT = "Near Mint"
    EXCELLENT = "Excellent"
    GOOD = "Good"
    LIGHT_PLAYED = "Light Played"
    PLAYED = "Played"
    POOR = "Poor"
    DAMAGED = "Damaged"


class Color(_CanonicalEnum):
    """Enumeration of Magic colors."""

    WHITE = "White"
    BLUE = "Blue"
    BLACK = "Black"
    RED = "Red"
    GREEN = "Green"
    COLORLESS = "Colorless"
    MULTICOLOR = "Multicolor"


class CardVariant(str, Enum):
    """Selects the validation rule set applied to a card record."""

    GENERIC = "generic"
    TRADING = "trading"


class CardField(str, Enum):
    """Editable card fields, in CSV column order.

    The value is the attribute name on ``Card``; ``header`` is the CSV column.
    """

    NAME = "name"
    RARITY = "rarity"
    CONDITION = "condition"
    VALUE = "value"
    EDITION = "edition"
    CARD_TYPE = "card_type"
    COLOR = "color"
    MANA_COST = "mana_cost"
    SUBTYPE = "subtype"
    IS_FOIL = "is_foil"

    @property
    def header(self) -> str:
        return _HEADERS[self]

    @classmethod
    def from_string(cls, value: Union[str, "CardField"]) -> "CardField":
        """Resolve a field from its attribute name, member name or CSV header."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        for field in cls:
            if normalized in (field.value, field.name.lower(), field.header.lower()):
                return field
        raise ValueError(
            f"Unknown card field: {value!r}. Valid fields are: {[f.value for f in cls]}"
        )


_HEADERS = {
    CardField.NAME: "Name",
    CardField.RARITY: "Rarity",
    CardField.CONDITION: "Condition",
    CardField.VALUE: "Value",
    CardField.EDITION: "Edition",
    CardField.CARD_TYPE: "CardType",
    CardField.COLOR: "Color",
    CardField.MANA_COST: "ManaCost",
    CardField.SUBTYPE: "Subtype",
    CardField.IS_FOIL: "Foil",
}
