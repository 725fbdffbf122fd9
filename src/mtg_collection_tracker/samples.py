"""Demonstration cards used to pre-seed a collection."""

from mtg_collection_tracker.models import Card, trading_card


def sample_cards() -> list[Card]:
    """Return fresh copies of the three demonstration cards.

    "Nicol Bolas, Dragon-God" has a comma in its name, so its row does not
    survive a CSV round trip.
    """
    return [
        trading_card(
            name="Black Lotus",
            rarity="Rare",
            condition="Near Mint",
            value=50000.00,
            edition="Alpha",
            card_type="Artifact",
            color="Colorless",
            mana_cost=0,
            subtype="Artifact",
            is_foil=False,
        ),
        trading_card(
            name="Lightning Bolt",
            rarity="Common",
            condition="Excellent",
            value=5.50,
            edition="Unlimited",
            card_type="Instant",
            color="Red",
            mana_cost=1,
            subtype="Instant",
            is_foil=False,
        ),
        trading_card(
            name="Nicol Bolas, Dragon-God",
            rarity="Mythic Rare",
            condition="Mint",
            value=35.99,
            edition="War of the Spark",
            card_type="Planeswalker",
            color="Multicolor",
            mana_cost=4,
            subtype="Elder Dragon Planeswalker",
            is_foil=True,
        ),
    ]
