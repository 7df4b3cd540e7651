"""Price history rules."""

from collections.abc import Sequence
from datetime import datetime

from src.catalog.entities.service.product import PriceHistoryEntry


def next_price_entry(
    history: Sequence[PriceHistoryEntry],
    new_price: float | None,
    actor: str,
    at: datetime,
) -> PriceHistoryEntry | None:
    """Entry to append after a write, or None if the price did not move.

    An empty history always gets an entry, which is how a product's first
    entry is synthesized from its creation price.
    """
    if new_price is None:
        return None
    if history and history[-1].price == new_price:
        return None
    return PriceHistoryEntry(price=new_price, changed_by=actor, changed_at=at)
