"""Shop catalog, purchases, and inventory for TamoStudy.

Catalog
-------
**Food**: restores Tamo hunger when fed:

    Onigiri         100 tokens   +1 hunger
    Chicken Plate   200 tokens   +3 hunger
    Cheesecake      800 tokens   +8 hunger

**Backgrounds** (10): scenery behind the Tamo, 1000 tokens each.

**Borders** (10): frame around the Tamo:

    solid     250    Black, Gold, Red, Mint, Purple, Blue
    gradient  500    Strawberry Lemonade, Sunset, Teal
    rare     1500    Code

The ``default`` background and border are always owned.  At most
``FOOD_CAPACITY`` food items fit in the inventory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from ..database.db import get_session
from ..database.models import InventoryItem, Profile

logger = logging.getLogger(__name__)


FOOD_CAPACITY = 10
MAX_HUNGER = 10
DEFAULT_COSMETIC = "default"


# ── errors ───────────────────────────────────────────────────────────────


class ShopError(Exception):
    """Base class for purchase and inventory failures."""


class UnknownItemError(ShopError):
    pass


class InsufficientTokensError(ShopError):
    def __init__(self, price: int, tokens: int) -> None:
        super().__init__(
            f"Not enough Tamo tokens to complete purchase "
            f"(need {price}, have {tokens})."
        )
        self.price = price
        self.tokens = tokens


class AlreadyOwnedError(ShopError):
    pass


class InventoryFullError(ShopError):
    pass


class NotInInventoryError(ShopError):
    pass


# ── catalog ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ShopItem:
    key: str
    item_type: str     # "food" | "background" | "border"
    name: str
    price: int
    hunger: int = 0    # food only
    tier: str = ""     # border tier, background style


FOODS: list[ShopItem] = [
    ShopItem("onigiri", "food", "Onigiri", 100, hunger=1),
    ShopItem("chicken_plate", "food", "Chicken Plate", 200, hunger=3),
    ShopItem("cheesecake", "food", "Cheesecake", 800, hunger=8),
]

BACKGROUND_PRICE = 1000

BACKGROUNDS: list[ShopItem] = [
    ShopItem(key, "background", name, BACKGROUND_PRICE, tier="scenery")
    for key, name in (
        ("bedroom", "Bedroom"),
        ("sofa", "Sofa"),
        ("sunrise", "Sunrise"),
        ("night_out", "Night Out"),
        ("enigma", "Enigma"),
        ("cozy_night", "Cozy Night"),
        ("study_time", "Study Time"),
        ("pleasant_bridge", "Pleasant Bridge"),
        ("wisteria", "Wisteria"),
        ("moon", "Moon"),
    )
]

BORDER_PRICES: dict[str, int] = {
    "solid": 250,
    "gradient": 500,
    "rare": 1500,
}

BORDERS: list[ShopItem] = [
    ShopItem(key, "border", name, BORDER_PRICES[tier], tier=tier)
    for key, name, tier in (
        ("black", "Black", "solid"),
        ("gold", "Gold", "solid"),
        ("red", "Red", "solid"),
        ("mint", "Mint", "solid"),
        ("purple", "Purple", "solid"),
        ("blue", "Blue", "solid"),
        ("strawberry_lemonade", "Strawberry Lemonade", "gradient"),
        ("sunset", "Sunset", "gradient"),
        ("teal", "Teal", "gradient"),
        ("code", "Code", "rare"),
    )
]

CATALOG: dict[str, ShopItem] = {
    item.key: item for item in (*FOODS, *BACKGROUNDS, *BORDERS)
}


def get_item(key: str) -> ShopItem:
    try:
        return CATALOG[key]
    except KeyError:
        raise UnknownItemError(f"no shop item called {key!r}") from None


@dataclass
class Inventory:
    """Snapshot of what the user owns."""

    foods: dict[str, int]
    backgrounds: list[str]
    borders: list[str]

    @property
    def food_count(self) -> int:
        return sum(self.foods.values())


# ── shop ─────────────────────────────────────────────────────────────────


class Shop:
    """Buys items with tokens and spends them from the inventory."""

    def purchase(self, key: str) -> ShopItem:
        """Buy one *key*.  Raises a :class:`ShopError` subclass on failure."""
        item = get_item(key)

        with get_session() as db:
            profile: Profile = db.query(Profile).first()
            owned = (
                db.query(InventoryItem)
                .filter_by(item_type=item.item_type, item_key=item.key)
                .first()
            )

            if item.item_type == "food":
                count = sum(
                    row.quantity for row in
                    db.query(InventoryItem).filter_by(item_type="food")
                )
                if count >= FOOD_CAPACITY:
                    raise InventoryFullError("Your Food Inventory is full!")
            elif owned is not None:
                raise AlreadyOwnedError(f"{item.name} is already owned.")

            if profile.tokens < item.price:
                raise InsufficientTokensError(item.price, profile.tokens)

            profile.tokens -= item.price
            if owned is None:
                db.add(InventoryItem(
                    item_type=item.item_type,
                    item_key=item.key,
                    quantity=1,
                    acquired_at=datetime.now(),
                ))
            else:
                owned.quantity += 1

            logger.info(
                "Bought %s for %d tokens (%d left)",
                item.name, item.price, profile.tokens,
            )
            return item

    def inventory(self) -> Inventory:
        with get_session() as db:
            rows = db.query(InventoryItem).all()
        foods = {
            r.item_key: r.quantity for r in rows
            if r.item_type == "food" and r.quantity > 0
        }
        backgrounds = [DEFAULT_COSMETIC] + sorted(
            r.item_key for r in rows if r.item_type == "background"
        )
        borders = [DEFAULT_COSMETIC] + sorted(
            r.item_key for r in rows if r.item_type == "border"
        )
        return Inventory(foods=foods, backgrounds=backgrounds, borders=borders)

    # ── using items ─────────────────────────────────────────────────

    def feed(self, food_key: str) -> int:
        """Feed one *food_key* to the Tamo.  Returns the new hunger level."""
        item = get_item(food_key)
        if item.item_type != "food":
            raise UnknownItemError(f"{item.name} is not food")

        with get_session() as db:
            owned = (
                db.query(InventoryItem)
                .filter_by(item_type="food", item_key=food_key)
                .first()
            )
            if owned is None or owned.quantity <= 0:
                raise NotInInventoryError(f"No {item.name} in the inventory.")

            profile: Profile = db.query(Profile).first()
            owned.quantity -= 1
            if owned.quantity == 0:
                db.delete(owned)
            profile.pet_hunger = min(MAX_HUNGER, profile.pet_hunger + item.hunger)
            logger.info(
                "Fed %s to %s (hunger %d)",
                item.name, profile.pet_name, profile.pet_hunger,
            )
            return profile.pet_hunger

    def equip_background(self, key: str) -> None:
        self._equip("background", key)

    def equip_border(self, key: str) -> None:
        self._equip("border", key)

    def _equip(self, item_type: str, key: str) -> None:
        if key != DEFAULT_COSMETIC:
            item = get_item(key)
            if item.item_type != item_type:
                raise UnknownItemError(f"{item.name} is not a {item_type}")

        with get_session() as db:
            if key != DEFAULT_COSMETIC:
                owned = (
                    db.query(InventoryItem)
                    .filter_by(item_type=item_type, item_key=key)
                    .first()
                )
                if owned is None:
                    raise NotInInventoryError(f"{key} is not owned.")

            profile: Profile = db.query(Profile).first()
            if item_type == "background":
                profile.background_key = key
            else:
                profile.border_key = key
