"""Data models for a Magic: The Gathering card collection."""

from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from mtg_collection_tracker.enums import CardField, CardVariant, Color, Condition, Rarity
from mtg_collection_tracker.exceptions import (
    BlankFieldError,
    CardValidationError,
    NegativeValueError,
)

# Upper bound applied by input surfaces; the model itself only forbids negatives.
MAX_MANA_COST = 20

FIELD_LABELS = {
    CardField.NAME: "Card name",
    CardField.RARITY: "Rarity",
    CardField.CONDITION: "Condition",
    CardField.VALUE: "Value",
    CardField.EDITION: "Edition",
    CardField.CARD_TYPE: "Card type",
    CardField.COLOR: "Color",
    CardField.MANA_COST: "Mana cost",
    CardField.SUBTYPE: "Card subtype",
    CardField.IS_FOIL: "Foil",
}

# Fields the trading variant narrows to a closed enumeration.
_TRADING_GRADES = {
    CardField.RARITY: Rarity,
    CardField.CONDITION: Condition,
}


def _card_error(error: ValidationError) -> CardValidationError:
    """Return the collection error behind the first failure of a validation."""
    detail = error.errors()[0]
    cause = detail.get("ctx", {}).get("error")
    if isinstance(cause, CardValidationError):
        return cause
    field = str(detail["loc"][0]) if detail["loc"] else "card"
    return CardValidationError(field, f"{FIELD_LABELS.get(field, field)}: {detail['msg']}")


class Card(BaseModel):
    """A single collection record.

    Construction and every later assignment run the field validators, so a
    rejected value never reaches the record. Which rules apply depends on
    the ``variant`` tag: the trading variant (the default) restricts rarity
    and condition to their enumerations, the generic variant only requires
    them to be non-blank. Failures are raised as ``CardValidationError``
    subclasses.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    # Declared first so it is validated before any rule needs it.
    variant: CardVariant = Field(default=CardVariant.TRADING, frozen=True)
    name: str = "Unknown"
    rarity: str = "Common"
    condition: str = "Near Mint"
    value: float = Field(default=0.0, strict=True, allow_inf_nan=False)
    edition: str = "Unknown"
    card_type: str = "Unknown"
    color: str = "Colorless"
    mana_cost: int = Field(default=0, strict=True)
    subtype: str = "None"
    is_foil: bool = False

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise _card_error(e) from e

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "variant":
            raise AttributeError("A card's variant cannot be changed")
        try:
            super().__setattr__(name, value)
        except ValidationError as e:
            raise _card_error(e) from e

    @field_validator("name", "edition", "card_type", "subtype", mode="before")
    @classmethod
    def validate_required_text(cls, v: Any, info: ValidationInfo) -> str:
        """Reject None or whitespace-only text and trim the rest."""
        return _required_text(CardField(info.field_name), v)

    @field_validator("rarity", "condition", mode="before")
    @classmethod
    def validate_grade(cls, v: Any, info: ValidationInfo) -> str:
        """Match rarity and condition against the rules of the card's variant."""
        card_field = CardField(info.field_name)
        variant = info.data.get("variant", CardVariant.TRADING)
        if variant is CardVariant.TRADING:
            return _TRADING_GRADES[card_field].from_string(v).value
        return _required_text(card_field, v)

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, v: Any) -> str:
        return Color.from_string(v).value

    @field_validator("value", "mana_cost")
    @classmethod
    def validate_non_negative(cls, v: Union[int, float], info: ValidationInfo):
        if v < 0:
            card_field = CardField(info.field_name)
            raise NegativeValueError(card_field.value, v, FIELD_LABELS[card_field])
        return v

    def __eq__(self, other: object) -> bool:
        """Cards are the same when name and edition match, ignoring case."""
        if self is other:
            return True
        if not isinstance(other, Card):
            return NotImplemented
        return (
            self.name.lower() == other.name.lower()
            and self.edition.lower() == other.edition.lower()
        )

    def set_field(self, card_field: Union[CardField, str], value: Any) -> None:
        """Set one field by selector, validating before the write."""
        setattr(self, CardField.from_string(card_field).value, value)

    def get_field(self, card_field: Union[CardField, str]) -> Any:
        return getattr(self, CardField.from_string(card_field).value)

    def toggle_foil(self) -> bool:
        self.is_foil = not self.is_foil
        return self.is_foil

    def copy(self) -> "Card":
        """Return an independent card with the same fields."""
        return Card(variant=self.variant, **self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        """Convert the card's fields to a dictionary keyed by attribute name."""
        return self.model_dump(exclude={"variant"})

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], variant: CardVariant = CardVariant.TRADING
    ) -> "Card":
        """Create a card from a dictionary; missing keys take their defaults."""
        known = {f.value: data[f.value] for f in CardField if f.value in data}
        return cls(variant=variant, **known)

    def __str__(self) -> str:
        """Return a one-line description of the card."""
        return (
            f"Name: {self.name} | Rarity: {self.rarity} | Condition: {self.condition} | "
            f"Value: ${self.value:.2f} | Edition: {self.edition} | Type: {self.card_type} | "
            f"Color: {self.color} | Mana: {self.mana_cost} | Subtype: {self.subtype} | "
            f"Foil: {'Yes' if self.is_foil else 'No'}"
        )


def _required_text(card_field: CardField, value: Any) -> str:
    if value is None or not str(value).strip():
        raise BlankFieldError(card_field.value, FIELD_LABELS[card_field])
    return str(value).strip()


def trading_card(**kwargs: Any) -> Card:
    """Create a card of the trading variant."""
    return Card(variant=CardVariant.TRADING, **kwargs)


def generic_card(**kwargs: Any) -> Card:
    """Create a card of the generic variant (free-text rarity and condition)."""
    return Card(variant=CardVariant.GENERIC, **kwargs)


class CollectionStatistics(BaseModel):
    """Aggregate figures for a collection."""

    collection_name: str
    total_cards: int = Field(..., ge=0)
    total_value: float = Field(..., ge=0)
    # None when the collection is empty; the average is never computed then.
    average_value: Optional[float] = None
    rarity_counts: dict[str, int] = Field(
        default_factory=lambda: {rarity.value: 0 for rarity in Rarity}
    )

    @property
    def is_empty(self) -> bool:
        return self.total_cards == 0

    def count_for(self, rarity: Union[Rarity, str]) -> int:
        """Return the bucket count for a rarity, any casing."""
        return self.rarity_counts[Rarity.from_string(rarity).value]

    def to_dict(self) -> dict:
        """Convert the statistics to a dictionary."""
        return self.model_dump()


__all__ = [
    "FIELD_LABELS",
    "MAX_MANA_COST",
    "Card",
    "CollectionStatistics",
    "generic_card",
    "trading_card",
]
