"""Random product data for development databases."""

import random
from datetime import datetime

from src.catalog.core.services.product.history import next_price_entry
from src.catalog.entities.service.product import Product

ADJECTIVES = [
    "Ergonomic",
    "Wireless",
    "Compact",
    "Rugged",
    "Refurbished",
    "Handmade",
    "Portable",
    "Premium",
    "Smart",
    "Vintage",
]
MATERIALS = ["Steel", "Wooden", "Cotton", "Granite", "Plastic", "Bamboo", "Leather"]
NOUNS = [
    "Keyboard",
    "Mouse",
    "Chair",
    "Lamp",
    "Backpack",
    "Headphones",
    "Monitor",
    "Speaker",
    "Notebook",
    "Water Bottle",
]
FEATURES = [
    "built to last for years of daily use",
    "designed for comfort during long sessions",
    "with a minimalist look that fits any desk",
    "shipped with a two year warranty",
    "made from responsibly sourced materials",
    "tested to survive drops and spills",
]


def random_product(actor: str, at: datetime, rng: random.Random) -> Product:
    """One plausible product whose history starts at its generated price."""
    noun = rng.choice(NOUNS)
    name = f"{rng.choice(ADJECTIVES)} {rng.choice(MATERIALS)} {noun}"
    description = f"{noun} {rng.choice(FEATURES)}."
    price = round(rng.uniform(1, 1000), 2)
    return Product(
        name=name,
        description=description,
        price=price,
        price_history=[next_price_entry([], price, actor, at)],
        created_by=actor,
        updated_by=actor,
        created_at=at,
        updated_at=at,
    )


def random_products(
    count: int, actor: str, at: datetime, rng: random.Random | None = None
) -> list[Product]:
    rng = rng or random.Random()
    return [random_product(actor, at, rng) for _ in range(count)]
