"""Pytest configuration and fixtures."""

import pytest
from mtg_collection_tracker.collection import CardCollection
from mtg_collection_tracker.models import Card, trading_card


@pytest.fixture
def bolt() -> Card:
    """Provide the Bolt instant used throughout the examples."""
    return trading_card(
        name="Bolt",
        rarity="Common",
        condition="Excellent",
        value=5.50,
        edition="Unlimited",
        card_type="Instant",
        color="Red",
        mana_cost=1,
        subtype="Instant",
        is_foil=False,
    )


@pytest.fixture
def serra_angel() -> Card:
    """Provide a white creature card."""
    return trading_card(
        name="Serra Angel",
        rarity="Uncommon",
        condition="Near Mint",
        value=2.25,
        edition="Alpha",
        card_type="Creature",
        color="White",
        mana_cost=5,
        subtype="Angel",
        is_foil=True,
    )


@pytest.fixture
def shivan_dragon() -> Card:
    """Provide a red rare creature card."""
    return trading_card(
        name="Shivan Dragon",
        rarity="Rare",
        condition="Good",
        value=120.00,
        edition="Beta",
        card_type="Creature",
        color="Red",
        mana_cost=6,
        subtype="Dragon",
    )


@pytest.fixture
def collection(bolt: Card, serra_angel: Card, shivan_dragon: Card) -> CardCollection:
    """Provide a collection holding three cards."""
    return CardCollection(name="Test Binder", cards=[bolt, serra_angel, shivan_dragon])


@pytest.fixture
def empty_collection() -> CardCollection:
    """Provide an empty collection."""
    return CardCollection()
