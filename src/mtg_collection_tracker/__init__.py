"""Magic: The Gathering Card Collection Tracker."""

__version__ = "0.1.0"

from mtg_collection_tracker.collection import CardCollection
from mtg_collection_tracker.enums import CardField, CardVariant, Color, Condition, Rarity
from mtg_collection_tracker.models import Card, CollectionStatistics, generic_card, trading_card

__all__ = [
    "Card",
    "CardCollection",
    "CardField",
    "CardVariant",
    "CollectionStatistics",
    "Color",
    "Condition",
    "Rarity",
    "generic_card",
    "trading_card",
]
