"""Unit tests for the price history append rule."""

from datetime import UTC, datetime

from src.catalog.core.services.product import next_price_entry
from src.catalog.entities.service.product import PriceHistoryEntry

AT = datetime(2024, 5, 1, 9, 30, tzinfo=UTC)


def _entry(price: float) -> PriceHistoryEntry:
    return PriceHistoryEntry(price=price, changed_by="alice_tester", changed_at=AT)


class TestNextPriceEntry:
    """Test when a write produces a new history entry."""

    def test_empty_history_gets_first_entry(self):
        """The first entry is synthesized from the creation price."""
        entry = next_price_entry([], 49.99, "alice_tester", AT)

        assert entry == PriceHistoryEntry(
            price=49.99, changed_by="alice_tester", changed_at=AT
        )

    def test_changed_price_appends(self):
        entry = next_price_entry([_entry(10.0)], 12.5, "bob_tester", AT)

        assert entry is not None
        assert entry.price == 12.5
        assert entry.changed_by == "bob_tester"

    def test_same_price_does_not_append(self):
        assert next_price_entry([_entry(10.0)], 10.0, "bob_tester", AT) is None

    def test_missing_price_does_not_append(self):
        assert next_price_entry([_entry(10.0)], None, "bob_tester", AT) is None

    def test_compares_against_latest_entry_only(self):
        """Returning to an older price is still a change."""
        history = [_entry(10.0), _entry(20.0)]

        entry = next_price_entry(history, 10.0, "bob_tester", AT)

        assert entry is not None
        assert entry.price == 10.0

    def test_history_is_not_mutated(self):
        history = [_entry(10.0)]

        next_price_entry(history, 11.0, "bob_tester", AT)

        assert history == [_entry(10.0)]
